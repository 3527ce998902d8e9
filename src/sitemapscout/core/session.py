# SitemapScout — HTTP fetch capability (direct, proxy, fallback)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import gzip
import logging
import re
from dataclasses import dataclass
from typing import Optional
from xml.sax.saxutils import escape

import requests

from ..config import Settings
from ..errors import FetchFailedError
from ..utils.net import build_session


logger = logging.getLogger(__name__)

_CHARSET_RE = re.compile(r"charset=([\w.:-]+)", re.I)
_MARKDOWN_URL_RE = re.compile(r"https?://[^\s)\]>\"']+")

# statuses that mean "the site refused us", worth retrying through the proxy
BLOCKED_STATUSES = frozenset({401, 403, 429, 503})


@dataclass
class FetchResponse:
	url: str
	status_code: int
	content_type: str = ""
	content: bytes = b""

	@property
	def ok(self) -> bool:
		return 200 <= self.status_code < 300

	@property
	def is_xml(self) -> bool:
		return "xml" in self.content_type.lower() or self.url.lower().endswith(".xml")

	@property
	def text(self) -> str:
		body = self.content
		if body[:2] == b"\x1f\x8b":
			try:
				body = gzip.decompress(body)
			except OSError:
				logger.warning("Could not decompress gzip body from %s", self.url)
		m = _CHARSET_RE.search(self.content_type)
		encoding = m.group(1) if m else "utf-8"
		try:
			return body.decode(encoding, errors="replace")
		except LookupError:
			return body.decode("utf-8", errors="replace")


class DirectFetcher:
	"""Plain GET through a shared requests Session."""

	def __init__(self, session: requests.Session) -> None:
		self.session = session

	def fetch(self, url: str, timeout: float) -> FetchResponse:
		try:
			r = self.session.get(url, timeout=timeout, allow_redirects=True)
		except requests.Timeout as e:
			raise FetchFailedError(url, "request timeout") from e
		except requests.RequestException as e:
			raise FetchFailedError(url, str(e)) from e
		return FetchResponse(
			url=url,
			status_code=r.status_code,
			content_type=r.headers.get("Content-Type", ""),
			content=r.content,
		)


class ProxyFetcher:
	"""Fetch through a content-fetching proxy (Firecrawl scrape API).

	The proxy renders the page; raw HTML is used when it still carries sitemap
	markup, otherwise URLs found in the markdown rendering are wrapped into a
	synthetic urlset.
	"""

	def __init__(self, session: requests.Session, api_key: str, endpoint: str, timeout: float = 30.0) -> None:
		self.session = session
		self.api_key = api_key
		self.endpoint = endpoint
		self.timeout = timeout

	def fetch(self, url: str, timeout: float) -> FetchResponse:
		payload = {
			"url": url,
			"formats": ["rawHtml", "markdown"],
			"onlyMainContent": False,
			"waitFor": 3000,
			"includeTags": ["sitemap", "url", "loc"],
		}
		try:
			r = self.session.post(
				self.endpoint,
				json=payload,
				headers={"Authorization": f"Bearer {self.api_key}", "Accept": "application/json"},
				timeout=max(timeout, self.timeout),
			)
		except requests.RequestException as e:
			raise FetchFailedError(url, f"proxy request failed: {e}") from e
		if r.status_code >= 400:
			raise FetchFailedError(url, f"proxy error: {r.status_code} {r.text[:200]}")
		try:
			data = (r.json() or {}).get("data") or {}
		except ValueError as e:
			raise FetchFailedError(url, "proxy returned non-JSON body") from e

		status = int((data.get("metadata") or {}).get("statusCode") or 200)
		content = data.get("rawHtml") or ""
		if "<sitemap" not in content and "<url" not in content:
			urls = _MARKDOWN_URL_RE.findall(data.get("markdown") or "")
			if urls:
				logger.info("Proxy markdown for %s yielded %d URLs", url, len(urls))
				content = _as_urlset(urls)
		if not content:
			raise FetchFailedError(url, "no content returned from proxy")
		return FetchResponse(url=url, status_code=status, content_type="application/xml", content=content.encode("utf-8"))


class FallbackFetcher:
	"""Try the primary fetcher; use the fallback when the primary fails or is blocked."""

	def __init__(self, primary, fallback) -> None:
		self.primary = primary
		self.fallback = fallback

	def fetch(self, url: str, timeout: float) -> FetchResponse:
		try:
			resp = self.primary.fetch(url, timeout)
		except FetchFailedError as e:
			logger.info("Direct fetch failed for %s (%s), trying proxy", url, e.reason)
			return self.fallback.fetch(url, timeout)
		if resp.status_code in BLOCKED_STATUSES:
			logger.info("Direct fetch blocked for %s (HTTP %d), trying proxy", url, resp.status_code)
			return self.fallback.fetch(url, timeout)
		return resp


def _as_urlset(urls) -> str:
	entries = "\n".join(f"  <url><loc>{escape(u)}</loc></url>" for u in urls)
	return (
		'<?xml version="1.0" encoding="UTF-8"?>\n'
		'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
		f"{entries}\n"
		"</urlset>"
	)


def make_session(user_agent: str, retries: int, backoff: float, pool_size: int = 10) -> requests.Session:
	return build_session(user_agent=user_agent, retries=retries, backoff=backoff, pool_size=pool_size)


def build_fetcher(cfg: Settings, session: Optional[requests.Session] = None):
	"""Fetcher for the configured strategy."""
	session = session or make_session(cfg.user_agent, cfg.retries, cfg.backoff, pool_size=max(10, cfg.concurrency * 2))
	direct = DirectFetcher(session)
	if cfg.fetch_strategy == "proxy_fallback":
		if not cfg.proxy_api_key:
			logger.warning("fetch_strategy=proxy_fallback but no proxy_api_key set; fetching directly")
			return direct
		proxy = ProxyFetcher(session, cfg.proxy_api_key, cfg.proxy_endpoint, cfg.proxy_timeout)
		return FallbackFetcher(direct, proxy)
	return direct
