# SitemapScout — Recursive sitemap aggregation (depth-bounded, batched)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, NamedTuple, Optional

from .locator import SitemapLocator
from .session import FetchResponse
from .sitemap import parse_sitemap
from ..errors import SitemapError


logger = logging.getLogger(__name__)


class SitemapTarget(NamedTuple):
	url: str
	depth: int


class AggregateResult:
	def __init__(self, links: Optional[List[str]] = None, fetched: Optional[List[str]] = None) -> None:
		self.links: List[str] = links or []
		self.fetched: List[str] = fetched or []

	def merge(self, other: "AggregateResult") -> None:
		self.links.extend(other.links)
		self.fetched.extend(other.fetched)


class SitemapAggregator:
	"""Walk a sitemap index tree and merge every leaf URL.

	Children of an index are fetched `concurrency` at a time; a batch must
	finish before the next one starts. One gate per walk also caps fetches in
	flight across every level of the tree at `concurrency`. Recursion stops at
	`max_depth`, which also bounds cyclic indexes.
	"""

	def __init__(self, locator: SitemapLocator, max_depth: int = 3, concurrency: int = 5) -> None:
		self.locator = locator
		self.max_depth = max_depth
		self.concurrency = max(1, int(concurrency))

	def collect(
		self,
		url: str,
		origin: str,
		current_depth: int = 0,
		response: Optional[FetchResponse] = None,
	) -> AggregateResult:
		"""Links and fetched sitemap URLs under url.

		A pre-fetched response (from the locator) saves fetching the root twice.
		Parse errors propagate; callers decide whether they are fatal.
		"""
		gate = threading.BoundedSemaphore(self.concurrency)
		return self._walk(SitemapTarget(url, current_depth), origin, gate, response)

	def _walk(
		self,
		target: SitemapTarget,
		origin: str,
		gate: threading.BoundedSemaphore,
		response: Optional[FetchResponse] = None,
	) -> AggregateResult:
		url, current_depth = target
		res = AggregateResult()
		if current_depth >= self.max_depth:
			logger.info("Max depth (%d) reached for %s", self.max_depth, url)
			return res

		logger.info("Fetching sitemap (depth %d): %s", current_depth, url)
		if response is None:
			# held for the fetch only; children acquire it again below
			with gate:
				response = self.locator.probe(url)
			if response is None:
				logger.info("Sitemap not found or failed to fetch: %s", url)
				return res

		res.fetched.append(url)
		parsed = parse_sitemap(response.text, origin)
		res.links.extend(parsed.leaf_links)
		logger.info("Found %d direct links in %s", len(parsed.leaf_links), url)

		if parsed.is_index:
			children = parsed.child_sitemaps
			logger.info("Found %d sub-sitemaps in %s, fetching recursively", len(children), url)
			for i in range(0, len(children), self.concurrency):
				batch = [SitemapTarget(c, current_depth + 1) for c in children[i : i + self.concurrency]]
				with ThreadPoolExecutor(max_workers=len(batch)) as pool:
					results = pool.map(lambda t: self._collect_child(t, origin, gate), batch)
					for child_res in results:
						res.merge(child_res)
		return res

	def _collect_child(self, target: SitemapTarget, origin: str, gate: threading.BoundedSemaphore) -> AggregateResult:
		try:
			return self._walk(target, origin, gate)
		except SitemapError as e:
			logger.warning("Error fetching sub-sitemap %s: %s", target.url, e)
		except Exception:
			logger.exception("Unexpected error fetching sub-sitemap %s", target.url)
		return AggregateResult()
