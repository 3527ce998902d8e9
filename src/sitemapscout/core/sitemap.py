# SitemapScout — Sitemap document classification and parsing
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

"""Tolerant sitemap parsing.

Extraction is regex based rather than a strict XML parse so that feeds with
missing closing tags, HTML wrapping or loose <loc> tags still yield URLs.
"""

import enum
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from xml.sax.saxutils import unescape

from ..errors import AccessRestrictedError, MalformedSitemapError
from ..utils.urls import resolve_location


logger = logging.getLogger(__name__)

_FLAGS = re.I | re.S

_HTML_RE = re.compile(r"<html[\s>]|<!doctype[\s>]", re.I)
_EMBEDDED_RE = re.compile(r"<sitemapindex[^>]*>.*?</sitemapindex\s*>|<urlset[^>]*>.*?</urlset\s*>", _FLAGS)
_MARKUP_RE = re.compile(r"<(?:urlset|sitemapindex|sitemap|url|loc)[\s>/]", re.I)
_INDEX_RE = re.compile(r"<sitemapindex[\s>]|<sitemap[\s>]", re.I)
_SITEMAP_BLOCK_RE = re.compile(r"<sitemap(?:\s[^>]*)?>(.*?)</sitemap\s*>", _FLAGS)
_URL_BLOCK_RE = re.compile(r"<url(?:\s[^>]*)?>(.*?)</url\s*>", _FLAGS)
_LOC_RE = re.compile(r"<loc(?:\s[^>]*)?>(.*?)</loc\s*>", _FLAGS)
_CDATA_RE = re.compile(r"^<!\[CDATA\[(.*)\]\]>$", re.S)

_RESTRICTION_MARKERS = (
	"access denied",
	"forbidden",
	"captcha",
	"cf-chl",
	"just a moment",
	"attention required",
	"are you a robot",
	"request blocked",
)


class DocumentKind(enum.Enum):
	CLEAN_XML = "clean_xml"
	HTML_WRAPPED = "html_wrapped"
	UNRECOGNIZED = "unrecognized"


@dataclass
class ParsedSitemap:
	leaf_links: List[str] = field(default_factory=list)
	child_sitemaps: List[str] = field(default_factory=list)
	kind: DocumentKind = DocumentKind.CLEAN_XML

	@property
	def is_index(self) -> bool:
		return bool(self.child_sitemaps)


def classify_document(text: str) -> Tuple[DocumentKind, str]:
	"""Decide once how to read a fetched document.

	Returns the kind and the body to parse: the text itself for clean XML, the
	embedded <urlset>/<sitemapindex> fragment for HTML-wrapped documents.
	"""
	if _HTML_RE.search(text):
		m = _EMBEDDED_RE.search(text)
		if m:
			return DocumentKind.HTML_WRAPPED, m.group(0)
		return DocumentKind.UNRECOGNIZED, text
	if not _MARKUP_RE.search(text):
		return DocumentKind.UNRECOGNIZED, text
	return DocumentKind.CLEAN_XML, text


def looks_restricted(text: str) -> bool:
	"""Heuristic for access-denial or bot-challenge pages served with 200 OK."""
	head = text[:5000].lower()
	return any(marker in head for marker in _RESTRICTION_MARKERS)


def _clean_loc(raw: str) -> str:
	value = raw.strip()
	m = _CDATA_RE.match(value)
	if m:
		value = m.group(1).strip()
	return unescape(value, {"&quot;": '"', "&apos;": "'"}).strip()


def _collect_locs(fragments, origin: str, what: str) -> List[str]:
	out: List[str] = []
	for raw in fragments:
		loc = _clean_loc(raw)
		if not loc:
			continue
		url = resolve_location(loc, origin)
		if url is None:
			logger.warning("Invalid %s URL dropped: %s", what, loc)
			continue
		out.append(url)
	return out


def _first_loc(block: str) -> Optional[str]:
	m = _LOC_RE.search(block)
	return m.group(1) if m else None


def parse_sitemap(text: str, origin: str) -> ParsedSitemap:
	"""Parse a sitemap index or urlset.

	Index documents fill child_sitemaps, urlsets fill leaf_links. A urlset with
	no <url> blocks falls back to every bare <loc> in the document. Raises
	MalformedSitemapError (AccessRestrictedError for denial pages) when the
	document holds no sitemap at all.
	"""
	kind, body = classify_document(text)
	if kind is DocumentKind.UNRECOGNIZED:
		if looks_restricted(text):
			raise AccessRestrictedError()
		if _HTML_RE.search(text):
			raise MalformedSitemapError("No valid sitemap XML found in HTML content")
		raise MalformedSitemapError()

	result = ParsedSitemap(kind=kind)
	if _INDEX_RE.search(body):
		locs = [loc for loc in map(_first_loc, _SITEMAP_BLOCK_RE.findall(body)) if loc is not None]
		result.child_sitemaps = _collect_locs(locs, origin, "sitemap")
		logger.debug("Sitemap index with %d child sitemaps", len(result.child_sitemaps))
		return result

	blocks = _URL_BLOCK_RE.findall(body)
	if blocks:
		locs = [loc for loc in map(_first_loc, blocks) if loc is not None]
		result.leaf_links = _collect_locs(locs, origin, "page")
	if not result.leaf_links:
		result.leaf_links = _collect_locs(_LOC_RE.findall(body), origin, "page")
	logger.debug("Urlset with %d links", len(result.leaf_links))
	return result
