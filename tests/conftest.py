import threading
from types import SimpleNamespace

import pytest

from sitemapscout.core.session import FetchResponse


class FakeFetcher:
	"""Serves canned responses by URL; anything unknown is a 404.

	A mapping value may be an exception instance, which is raised instead.
	"""

	def __init__(self, pages):
		self.pages = pages
		self.calls = []
		self._lock = threading.Lock()

	def fetch(self, url, timeout):
		with self._lock:
			self.calls.append(url)
		page = self.pages.get(url)
		if isinstance(page, Exception):
			raise page
		if page is None:
			return FetchResponse(url=url, status_code=404, content_type="text/html", content=b"not found")
		status, ctype, body = page
		if isinstance(body, str):
			body = body.encode("utf-8")
		return FetchResponse(url=url, status_code=status, content_type=ctype, content=body)


def urlset(*urls):
	entries = "".join(f"<url><loc>{u}</loc></url>" for u in urls)
	return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</urlset>'


def sitemap_index(*urls):
	entries = "".join(f"<sitemap><loc>{u}</loc></sitemap>" for u in urls)
	return f'<?xml version="1.0" encoding="UTF-8"?><sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</sitemapindex>'


def xml(body):
	return (200, "application/xml", body)


@pytest.fixture
def make_fetcher():
	return FakeFetcher


@pytest.fixture
def docs():
	"""Builders for sitemap documents: docs.urlset, docs.index, docs.xml."""
	return SimpleNamespace(urlset=urlset, index=sitemap_index, xml=xml)
