# SitemapScout — Sitemap declarations from robots.txt
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import re
from typing import List, Tuple

from ..errors import FetchFailedError
from ..utils.urls import origin_of, resolve_location


logger = logging.getLogger(__name__)

_SITEMAP_LINE_RE = re.compile(r"Sitemap:\s*(.+)", re.I)


def parse_robots_sitemaps(text: str, origin: str) -> List[str]:
	"""Every `Sitemap:` target in robots.txt, resolved against origin, first occurrence wins."""
	sitemaps: List[str] = []
	for line in text.splitlines():
		m = _SITEMAP_LINE_RE.search(line)
		if not m:
			continue
		target = m.group(1).strip()
		if not target:
			continue
		url = resolve_location(target, origin)
		if url is None:
			logger.warning("Invalid sitemap URL in robots.txt: %s", target)
			continue
		if url not in sitemaps:
			sitemaps.append(url)
	return sitemaps


def fetch_robots_sitemaps(fetcher, origin: str, timeout: float = 5.0) -> Tuple[str, List[str]]:
	"""Fetch robots.txt once and return (robots_url, sitemaps).

	An unreachable or non-2xx robots.txt yields no sitemaps.
	"""
	robots_url = f"{origin_of(origin)}/robots.txt"
	try:
		r = fetcher.fetch(robots_url, timeout)
	except FetchFailedError as e:
		logger.info("Failed to fetch robots.txt at %s: %s", robots_url, e.reason)
		return robots_url, []
	if not r.ok:
		logger.info("robots.txt at %s returned HTTP %d", robots_url, r.status_code)
		return robots_url, []
	return robots_url, parse_robots_sitemaps(r.text, origin)
