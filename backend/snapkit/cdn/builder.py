"""
CDN URL Builder

Pure functions that turn a source image path into an optimized CDN URL:
- Custom CDN base URL or the SnapKit CDN scoped by organization
- Transformation query parameters: w, h, q, f (in that order)
- Size-based URLs multiplied by the display scale factor
"""

from typing import Optional, Tuple
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field

SNAPKIT_CDN_BASE_URL = "https://cdn.snapkit.studio"

# Characters left unescaped in a URL path (RFC 3986 pchar plus "/")
PATH_SAFE_CHARS = "/!$&'()*+,;=:@"


class CDNConfig(BaseModel):
    """Configuration for CDN URL building"""
    model_config = ConfigDict(frozen=True)

    base_url: str = Field(..., description="CDN base URL")
    organization_name: Optional[str] = Field(None, description="SnapKit organization (optional)")

    @classmethod
    def for_organization(cls, organization_name: str) -> "CDNConfig":
        """SnapKit CDN scoped to an organization."""
        return cls(base_url=SNAPKIT_CDN_BASE_URL, organization_name=organization_name)


class ImageParams(BaseModel):
    """Image transformation parameters"""
    model_config = ConfigDict(frozen=True)

    width: Optional[int] = Field(None, description="Target width in pixels")
    height: Optional[int] = Field(None, description="Target height in pixels")
    quality: Optional[int] = Field(None, description="Quality, normally 1-100")
    format: Optional[str] = Field(None, description="Output format, e.g. webp")

    def query_items(self) -> list[tuple[str, str]]:
        items = []
        if self.width is not None:
            items.append(("w", str(self.width)))
        if self.height is not None:
            items.append(("h", str(self.height)))
        if self.quality is not None:
            items.append(("q", str(self.quality)))
        if self.format is not None:
            items.append(("f", self.format))
        return items


def build_url(
    source_url: str,
    config: CDNConfig,
    params: Optional[ImageParams] = None,
) -> Optional[httpx.URL]:
    """
    Build optimized image URL from source URL

    Args:
        source_url: Original image path
        config: CDN configuration
        params: Transformation parameters

    Returns:
        CDN URL, or None if the base URL is not a valid absolute URL
    """
    try:
        base = httpx.URL(config.base_url)
    except httpx.InvalidURL:
        return None
    if not base.scheme or not base.host:
        return None

    if config.organization_name:
        path = f"/{config.organization_name}/{source_url}"
    else:
        path = f"/{source_url}"

    # "?" and "#" in the source are part of the path, not a query or fragment
    path = quote(path, safe=PATH_SAFE_CHARS)

    query_items = (params or ImageParams()).query_items()
    if query_items:
        return base.copy_with(path=path, params=query_items)
    return base.copy_with(path=path)


def build_sized_url(
    source_url: str,
    config: CDNConfig,
    size: Tuple[float, float],
    scale: float = 1.0,
    quality: int = 80,
) -> Optional[httpx.URL]:
    """
    Build URL for a display size, multiplied by the screen scale (@2x, @3x)

    Args:
        source_url: Original image path
        config: CDN configuration
        size: Desired (width, height) in points
        scale: Display scale factor
        quality: Image quality (1-100)
    """
    factor = int(scale)
    width = int(size[0]) * factor
    height = int(size[1]) * factor

    params = ImageParams(width=width, height=height, quality=quality)
    return build_url(source_url, config, params)
