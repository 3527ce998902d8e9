import pytest

from sitemapscout.errors import InvalidUrlError
from sitemapscout.utils.urls import (
	is_valid_url,
	looks_like_sitemap_url,
	normalize_url,
	origin_of,
	resolve_location,
	same_origin,
)


def test_normalize_adds_scheme_and_keeps_root_slash():
	assert normalize_url("Example.COM") == "https://example.com/"
	assert normalize_url("  example.com/  ") == "https://example.com/"


def test_normalize_strips_single_trailing_slash():
	assert normalize_url("http://example.com/blog/") == "http://example.com/blog"
	assert normalize_url("https://example.com/a//") == "https://example.com/a/"


@pytest.mark.parametrize("raw", ["", "   ", None, "exa mple.com", "https://", "http://host:notaport/"])
def test_normalize_rejects_malformed(raw):
	with pytest.raises(InvalidUrlError):
		normalize_url(raw)


def test_origin_drops_default_port():
	assert origin_of("https://Example.com:443/x?y=1") == "https://example.com"
	assert origin_of("http://example.com:8080/x") == "http://example.com:8080"


def test_same_origin():
	assert same_origin("https://example.com/a", "https://example.com/b")
	assert not same_origin("https://example.com/a", "http://example.com/a")
	assert not same_origin("https://example.com/a", "https://other-domain.com/a")


def test_resolve_location():
	assert resolve_location("/page", "https://example.com/") == "https://example.com/page"
	assert resolve_location(" https://example.com/x ", "https://example.com") == "https://example.com/x"
	assert resolve_location("page.html", "https://example.com") is None
	assert resolve_location("javascript:void(0)", "https://example.com") is None


def test_is_valid_url():
	assert is_valid_url("https://example.com/sitemap.xml")
	assert not is_valid_url("ftp://example.com/file")
	assert not is_valid_url("https://bad host/")


def test_looks_like_sitemap_url():
	assert looks_like_sitemap_url("https://example.com/feed.xml")
	assert looks_like_sitemap_url("example.com/sitemap")
	assert not looks_like_sitemap_url("example.com")
