# SitemapScout — URL utilities: normalization, origins and validation
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from urllib.parse import urlsplit, urlunsplit, urljoin
from typing import Optional
import re

from ..errors import InvalidUrlError


_SCHEME_RE = re.compile(r"^https?://", re.I)
# letters (incl. IDN), digits, dots, hyphens, underscores; or a bracketed IPv6 literal
_HOST_RE = re.compile(r"^(?:[\w.-]+|\[[0-9a-f:.]+\])$", re.I | re.UNICODE)
DEFAULT_PORTS = {"http": 80, "https": 443}


def _host_ok(netloc: str) -> bool:
	if not netloc or any(c.isspace() for c in netloc):
		return False
	hostport = netloc.rsplit("@", 1)[-1]
	if hostport.startswith("["):
		host = hostport[: hostport.find("]") + 1]
	else:
		host = hostport.split(":", 1)[0]
	return bool(host) and bool(_HOST_RE.match(host)) and not host.startswith(".")


def is_valid_url(url: str) -> bool:
	"""True for absolute http(s) URLs with a well-formed host and port."""
	try:
		p = urlsplit(url)
		if p.scheme.lower() not in DEFAULT_PORTS or not _host_ok(p.netloc):
			return False
		p.port  # raises ValueError on a bad port
		return p.hostname is not None
	except ValueError:
		return False


def normalize_url(raw: str) -> str:
	"""Canonicalize a user-supplied domain or URL.

	Adds https:// when no http(s) scheme is present, lowercases scheme and host
	and strips one trailing slash from non-root paths. Raises InvalidUrlError.
	"""
	url = (raw or "").strip()
	if not url:
		raise InvalidUrlError("Domain parameter is required")
	if not _SCHEME_RE.match(url):
		url = f"https://{url}"
	if not is_valid_url(url):
		raise InvalidUrlError(f"Invalid URL format: {raw}")
	p = urlsplit(url)
	path = p.path or "/"
	if path != "/" and path.endswith("/"):
		path = path[:-1]
	return urlunsplit((p.scheme.lower(), p.netloc.lower(), path, p.query, p.fragment))


def origin_of(url: str) -> str:
	"""scheme://host[:port] with the scheme's default port dropped."""
	p = urlsplit(url)
	scheme = p.scheme.lower()
	host = (p.hostname or "").lower()
	if ":" in host:
		host = f"[{host}]"
	port = p.port
	if port is None or port == DEFAULT_PORTS.get(scheme):
		return f"{scheme}://{host}"
	return f"{scheme}://{host}:{port}"


def same_origin(url_a: str, url_b: str) -> bool:
	try:
		return origin_of(url_a) == origin_of(url_b)
	except ValueError:
		return False


def resolve_location(loc: str, origin: str) -> Optional[str]:
	"""Resolve a sitemap <loc> or robots.txt target; None when it is not a usable URL."""
	loc = loc.strip()
	if loc.startswith("/"):
		loc = urljoin(origin_of(origin) + "/", loc)
	return loc if is_valid_url(loc) else None


def looks_like_sitemap_url(text: str) -> bool:
	"""Input the scanner should fetch directly instead of running discovery."""
	t = text.strip().lower()
	return t.endswith(".xml") or "sitemap" in t


__all__ = [
	"normalize_url",
	"origin_of",
	"same_origin",
	"is_valid_url",
	"resolve_location",
	"looks_like_sitemap_url",
]
