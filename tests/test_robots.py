from sitemapscout.core.robots import fetch_robots_sitemaps, parse_robots_sitemaps
from sitemapscout.errors import FetchFailedError


def test_parse_sitemap_lines_case_insensitive_and_relative():
	text = "\n".join(
		[
			"User-agent: *",
			"Disallow: /private",
			"Sitemap: https://example.com/main.xml",
			"sitemap: /news.xml",
			"SITEMAP:https://example.com/main.xml",
		]
	)
	assert parse_robots_sitemaps(text, "https://example.com") == [
		"https://example.com/main.xml",
		"https://example.com/news.xml",
	]


def test_malformed_declarations_are_skipped():
	text = "Sitemap: not-a-url\nSitemap:\nSitemap: https://example.com/ok.xml"
	assert parse_robots_sitemaps(text, "https://example.com") == ["https://example.com/ok.xml"]


def test_fetch_robots(make_fetcher):
	f = make_fetcher({"https://example.com/robots.txt": (200, "text/plain", "Sitemap: /s.xml")})
	robots_url, sitemaps = fetch_robots_sitemaps(f, "https://example.com/")
	assert robots_url == "https://example.com/robots.txt"
	assert sitemaps == ["https://example.com/s.xml"]


def test_missing_or_unreachable_robots_yields_nothing(make_fetcher):
	assert fetch_robots_sitemaps(make_fetcher({}), "https://example.com")[1] == []
	f = make_fetcher({"https://example.com/robots.txt": FetchFailedError("https://example.com/robots.txt", "request timeout")})
	assert fetch_robots_sitemaps(f, "https://example.com")[1] == []
