# SitemapScout — Discovery pipeline (normalize, locate, aggregate)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
from typing import Iterable, List, Optional

from .aggregator import SitemapAggregator
from .locator import LocatedSitemap, SitemapLocator
from .session import build_fetcher
from ..config import Settings
from ..errors import InvalidUrlError, MalformedSitemapError, SitemapNotFoundError
from ..models import DiscoveryResult
from ..utils.urls import looks_like_sitemap_url, normalize_url, origin_of, same_origin


logger = logging.getLogger(__name__)


def finalize_links(links: Iterable[str], origin: str) -> List[str]:
	"""Deduplicate, keep same-origin URLs only, sort."""
	return sorted({u for u in links if same_origin(u, origin)})


def _unique(items: Iterable[str]) -> List[str]:
	seen = set()
	out = []
	for item in items:
		if item not in seen:
			seen.add(item)
			out.append(item)
	return out


class SitemapDiscovery:
	"""One configurable pipeline behind both endpoints.

	Each call builds its own locator, so nothing is shared between requests
	except the fetcher (and its connection pool).
	"""

	def __init__(self, cfg: Optional[Settings] = None, fetcher=None) -> None:
		self.cfg = cfg or Settings()
		self.fetcher = fetcher or build_fetcher(self.cfg)

	def _locator(self) -> SitemapLocator:
		return SitemapLocator(
			self.fetcher,
			candidate_paths=self.cfg.candidate_paths,
			probe_timeout=self.cfg.probe_timeout,
			robots_timeout=self.cfg.robots_timeout,
		)

	def _aggregate(self, located: LocatedSitemap, locator: SitemapLocator, origin: str) -> DiscoveryResult:
		aggregator = SitemapAggregator(locator, max_depth=self.cfg.max_depth, concurrency=self.cfg.concurrency)
		try:
			agg = aggregator.collect(located.url, origin, response=located.response)
		except MalformedSitemapError as e:
			logger.error("Failed to parse sitemap %s: %s", located.url, e)
			e.discovered_urls = list(locator.discovered)
			raise
		links = finalize_links(agg.links, origin)
		dropped = len(set(agg.links)) - len(links)
		if dropped:
			logger.info("Dropped %d cross-origin links from %s", dropped, located.url)
		return DiscoveryResult(
			success=True,
			sitemapUrl=located.url,
			links=links,
			totalLinks=len(links),
			discoveredUrls=list(locator.discovered),
			fetchedSitemaps=_unique(agg.fetched),
		)

	def discover(self, domain: str) -> DiscoveryResult:
		"""Find and crawl the sitemap of a domain.

		Raises InvalidUrlError, SitemapNotFoundError or MalformedSitemapError.
		"""
		origin = origin_of(normalize_url(domain))
		logger.info("Discovering sitemap for domain: %s", origin)
		locator = self._locator()
		located = locator.locate(origin)
		result = self._aggregate(located, locator, origin)
		logger.info(
			"Discovery for %s: %d links from %d sitemaps (%d candidates probed)",
			origin,
			result.totalLinks,
			len(result.fetchedSitemaps),
			len(result.discoveredUrls),
		)
		return result

	def scan(self, sitemap_url: str) -> DiscoveryResult:
		"""Crawl a sitemap given directly, or discover one when given a bare domain."""
		text = (sitemap_url or "").strip()
		if not text:
			raise InvalidUrlError("Sitemap URL is required")
		if not looks_like_sitemap_url(text):
			logger.info("Auto-detecting sitemap for domain: %s", text)
			return self.discover(text)

		text = normalize_url(text)
		origin = origin_of(text)
		locator = self._locator()
		locator.discovered.append(text)
		response = locator.probe(text)
		if response is None:
			raise SitemapNotFoundError(
				"Unable to reach the sitemap URL. Please check if the URL is correct and accessible.",
				discovered_urls=locator.discovered,
			)
		located = LocatedSitemap(url=text, response=response, source="direct")
		return self._aggregate(located, locator, origin)
