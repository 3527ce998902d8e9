# SitemapScout — Networking utilities (requests session with retries)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


XML_ACCEPT = "application/xml, text/xml, */*"


def build_session(user_agent: str, retries: int = 1, backoff: float = 0.5, pool_size: int = 10) -> requests.Session:
	"""Build a requests Session for sitemap fetching with urllib3 Retry.

	Only GET/HEAD are retried, and only on connect failures or throttling and
	gateway statuses; 404s on candidate paths come back immediately. Read
	timeouts are never retried and Retry-After is ignored, so a fetch stays
	bounded by its own timeout.
	"""
	s = requests.Session()
	s.headers.update(
		{
			"User-Agent": user_agent,
			"Accept": XML_ACCEPT,
		}
	)
	retry = Retry(
		total=retries,
		read=False,
		backoff_factor=backoff,
		status_forcelist=(429, 500, 502, 503, 504),
		allowed_methods=frozenset({"GET", "HEAD"}),
		respect_retry_after_header=False,
		raise_on_status=False,
	)
	adapter = HTTPAdapter(max_retries=retry, pool_connections=pool_size, pool_maxsize=pool_size)
	s.mount("http://", adapter)
	s.mount("https://", adapter)
	return s
