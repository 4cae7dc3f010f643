"""
CDN URL builder tests
"""

import pytest
from pydantic import ValidationError

from snapkit.cdn import CDNConfig, ImageParams, SNAPKIT_CDN_BASE_URL, build_sized_url, build_url


@pytest.fixture
def custom_cdn():
    return CDNConfig(base_url="https://cdn.example.com")


# ============================================
# 1. Custom CDN
# ============================================

class TestCustomCDN:
    """Custom base URL"""

    def test_basic_url(self, custom_cdn):
        """Test: path is appended to the base URL"""
        url = build_url("images/photo.jpg", custom_cdn)

        assert str(url) == "https://cdn.example.com/images/photo.jpg"

    @pytest.mark.parametrize("params,expected", [
        (ImageParams(width=800), "w=800"),
        (ImageParams(height=600), "h=600"),
        (ImageParams(quality=80), "q=80"),
        (ImageParams(format="webp"), "f=webp"),
    ])
    def test_single_parameter(self, custom_cdn, params, expected):
        """Test: each parameter maps to its query item"""
        url = build_url("images/photo.jpg", custom_cdn, params)

        assert expected in str(url)

    def test_all_parameters_in_order(self, custom_cdn):
        """Test: query items are emitted as w, h, q, f"""
        params = ImageParams(width=800, height=600, quality=80, format="webp")

        url = build_url("images/photo.jpg", custom_cdn, params)

        assert str(url) == "https://cdn.example.com/images/photo.jpg?w=800&h=600&q=80&f=webp"

    def test_no_parameters_means_no_query(self, custom_cdn):
        """Test: empty params leave the query empty"""
        url = build_url("image.jpg", custom_cdn, ImageParams())

        assert url.query == b""
        assert "?" not in str(url)

    def test_empty_source_url(self, custom_cdn):
        """Test: empty source yields the root path"""
        url = build_url("", custom_cdn)

        assert url is not None
        assert url.path == "/"

    def test_special_characters_are_escaped(self, custom_cdn):
        """Test: spaces in the path are percent-encoded"""
        url = build_url("images/my photo.jpg", custom_cdn)

        assert "my%20photo.jpg" in str(url)

    @pytest.mark.parametrize("source,expected", [
        ("images/photo.jpg?v=2", "https://cdn.example.com/images/photo.jpg%3Fv=2"),
        ("images/photo#1.jpg", "https://cdn.example.com/images/photo%231.jpg"),
    ])
    def test_query_and_fragment_characters_stay_in_path(self, custom_cdn, source, expected):
        """Test: "?" and "#" in the source are escaped, not parsed as query or fragment"""
        url = build_url(source, custom_cdn)

        assert str(url) == expected
        assert url.query == b""

    def test_escaped_path_with_parameters(self, custom_cdn):
        """Test: transformation params follow an escaped path"""
        url = build_url("a.jpg?x=1", custom_cdn, ImageParams(width=100))

        assert str(url) == "https://cdn.example.com/a.jpg%3Fx=1?w=100"

    def test_invalid_base_url(self):
        """Test: a base URL without scheme and host yields None"""
        assert build_url("image.jpg", CDNConfig(base_url="not a url")) is None


# ============================================
# 2. SnapKit CDN
# ============================================

class TestSnapKitCDN:
    """Organization-scoped CDN"""

    def test_basic_url(self):
        """Test: organization name prefixes the path"""
        url = build_url("images/photo.jpg", CDNConfig.for_organization("myorg"))

        assert str(url) == "https://cdn.snapkit.studio/myorg/images/photo.jpg"

    def test_with_parameters(self):
        """Test: parameters combine with the organization path"""
        params = ImageParams(width=800, quality=80)

        url = str(build_url("images/photo.jpg", CDNConfig.for_organization("myorg"), params))

        assert "myorg/images/photo.jpg" in url
        assert "w=800" in url
        assert "q=80" in url


# ============================================
# 3. Size-based URLs
# ============================================

class TestSizedURL:
    """Scale-multiplied dimensions"""

    def test_scale_1x(self, custom_cdn):
        """Test: 1x keeps the point size"""
        url = str(build_sized_url("image.jpg", custom_cdn, size=(100, 100), quality=80))

        assert url.endswith("?w=100&h=100&q=80")

    def test_scale_3x(self, custom_cdn):
        """Test: dimensions are multiplied by the integer scale"""
        url = str(build_sized_url("image.jpg", custom_cdn, size=(200, 150.7), scale=3.0, quality=60))

        assert "w=600" in url
        assert "h=450" in url
        assert "q=60" in url

    def test_default_quality(self, custom_cdn):
        """Test: quality defaults to 80"""
        url = str(build_sized_url("image.jpg", custom_cdn, size=(10, 10)))

        assert "q=80" in url

    def test_zero_size_is_sent(self, custom_cdn):
        """Test: zero dimensions are emitted rather than dropped"""
        url = str(build_sized_url("a.jpg", custom_cdn, size=(0, 0)))

        assert url == "https://cdn.example.com/a.jpg?w=0&h=0&q=80"

    def test_negative_size_is_sent(self, custom_cdn):
        """Test: negative dimensions are passed through as given"""
        url = str(build_sized_url("a.jpg", custom_cdn, size=(-10, 10)))

        assert url == "https://cdn.example.com/a.jpg?w=-10&h=10&q=80"

    def test_quality_zero_is_sent(self, custom_cdn):
        """Test: quality outside 1-100 is not rejected"""
        url = str(build_sized_url("a.jpg", custom_cdn, size=(10, 10), quality=0))

        assert url.endswith("?w=10&h=10&q=0")


# ============================================
# 4. Models
# ============================================

class TestModels:
    """Config and params models"""

    def test_custom_config(self):
        """Test: custom base URL has no organization"""
        config = CDNConfig(base_url="https://custom.cdn.com")

        assert config.base_url == "https://custom.cdn.com"
        assert config.organization_name is None

    def test_snapkit_config(self):
        """Test: organization config uses the SnapKit CDN"""
        config = CDNConfig.for_organization("testorg")

        assert config.base_url == SNAPKIT_CDN_BASE_URL == "https://cdn.snapkit.studio"
        assert config.organization_name == "testorg"

    def test_params_default(self):
        """Test: all params default to None"""
        params = ImageParams()

        assert (params.width, params.height, params.quality, params.format) == (None, None, None, None)

    def test_params_partial(self):
        """Test: unset params stay None"""
        params = ImageParams(width=800, quality=80)

        assert params.width == 800
        assert params.height is None
        assert params.quality == 80
        assert params.format is None

    @pytest.mark.parametrize("quality", [0, 101, -5])
    def test_quality_is_not_range_checked(self, quality):
        """Test: any integer quality is kept as given"""
        assert ImageParams(quality=quality).query_items() == [("q", str(quality))]

    def test_non_integer_width_rejected(self):
        """Test: width must be an integer"""
        with pytest.raises(ValidationError):
            ImageParams(width="wide")
