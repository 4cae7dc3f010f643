"""
CDN Module

URL builder for image CDN transformations.
"""

from .builder import CDNConfig, ImageParams, build_url, build_sized_url, SNAPKIT_CDN_BASE_URL

__all__ = [
    "CDNConfig",
    "ImageParams",
    "build_url",
    "build_sized_url",
    "SNAPKIT_CDN_BASE_URL",
]
