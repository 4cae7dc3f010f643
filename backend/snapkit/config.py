"""
SnapKit Configuration

Plain dataclass settings with environment overrides:
- Memory cache limits (item count, total cost)
- HTTP client behaviour (timeout, redirects, User-Agent)
- Decoded image scale factor
- Optional request de-duplication (single-flight)
"""

import os
from dataclasses import dataclass


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes")


@dataclass
class SnapKitConfig:
    """Configuration for the image cache and loader."""
    # Cache settings
    cache_count_limit: int = 100                          # Max cached images (0 = unlimited)
    cache_total_cost_limit: int = 50 * 1024 * 1024        # Max total cost (0 = unlimited)

    # Download settings
    request_timeout: float = 30.0   # Seconds
    follow_redirects: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    # Decode settings
    image_scale: float = 1.0

    # Join concurrent misses for the same URL onto one fetch
    deduplicate_requests: bool = False

    def __post_init__(self):
        if self.cache_count_limit < 0:
            raise ValueError("cache_count_limit must be >= 0")
        if self.cache_total_cost_limit < 0:
            raise ValueError("cache_total_cost_limit must be >= 0")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be > 0")
        if self.image_scale <= 0:
            raise ValueError("image_scale must be > 0")

    @classmethod
    def from_env(cls) -> "SnapKitConfig":
        """
        Build a config from SNAPKIT_* environment variables.

        Unset variables fall back to the dataclass defaults.
        """
        defaults = cls()
        cost_limit_mb = os.getenv("SNAPKIT_CACHE_COST_LIMIT_MB")
        return cls(
            cache_count_limit=int(os.getenv("SNAPKIT_CACHE_COUNT_LIMIT", str(defaults.cache_count_limit))),
            cache_total_cost_limit=(
                int(cost_limit_mb) * 1024 * 1024
                if cost_limit_mb is not None
                else defaults.cache_total_cost_limit
            ),
            request_timeout=float(os.getenv("SNAPKIT_REQUEST_TIMEOUT", str(defaults.request_timeout))),
            follow_redirects=_env_bool("SNAPKIT_FOLLOW_REDIRECTS", defaults.follow_redirects),
            user_agent=os.getenv("SNAPKIT_USER_AGENT", defaults.user_agent),
            image_scale=float(os.getenv("SNAPKIT_IMAGE_SCALE", str(defaults.image_scale))),
            deduplicate_requests=_env_bool("SNAPKIT_DEDUPLICATE_REQUESTS", defaults.deduplicate_requests),
        )
