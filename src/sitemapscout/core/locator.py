# SitemapScout — Sitemap locator (common paths, then robots.txt)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .robots import fetch_robots_sitemaps
from .session import FetchResponse
from ..config import DEFAULT_CANDIDATE_PATHS
from ..errors import FetchFailedError, SitemapNotFoundError
from ..utils.urls import origin_of


logger = logging.getLogger(__name__)


@dataclass
class LocatedSitemap:
	url: str
	response: FetchResponse
	source: str  # "common", "robots" or "direct"


class SitemapLocator:
	"""Find the first reachable XML sitemap for an origin.

	Candidate paths are probed strictly in order and the first hit wins;
	robots.txt is consulted only when none of them exists. Every URL probed is
	recorded in `discovered`.
	"""

	def __init__(
		self,
		fetcher,
		candidate_paths: Sequence[str] = DEFAULT_CANDIDATE_PATHS,
		probe_timeout: float = 8.0,
		robots_timeout: float = 5.0,
	) -> None:
		self.fetcher = fetcher
		self.candidate_paths = list(candidate_paths)
		self.probe_timeout = probe_timeout
		self.robots_timeout = robots_timeout
		self.discovered: List[str] = []

	def probe(self, url: str) -> Optional[FetchResponse]:
		"""Response for url if it exists (2xx) and is XML-typed, else None."""
		try:
			r = self.fetcher.fetch(url, self.probe_timeout)
		except FetchFailedError as e:
			logger.info("Failed to check sitemap at %s: %s", url, e.reason)
			return None
		if r.ok and r.is_xml:
			return r
		logger.debug("No sitemap at %s (HTTP %d, %s)", url, r.status_code, r.content_type or "no content type")
		return None

	def _try(self, url: str, source: str) -> Optional[LocatedSitemap]:
		self.discovered.append(url)
		r = self.probe(url)
		if r is None:
			return None
		logger.info("Found sitemap at %s (%s)", url, source)
		return LocatedSitemap(url=url, response=r, source=source)

	def locate(self, origin: str) -> LocatedSitemap:
		base = origin_of(origin)
		logger.info("Checking common sitemap paths for %s", base)
		for path in self.candidate_paths:
			found = self._try(base + "/" + path.lstrip("/"), "common")
			if found:
				return found

		logger.info("Checking robots.txt for sitemap references on %s", base)
		_, declared = fetch_robots_sitemaps(self.fetcher, base, self.robots_timeout)
		for url in declared:
			found = self._try(url, "robots")
			if found:
				return found

		raise SitemapNotFoundError(discovered_urls=self.discovered)
