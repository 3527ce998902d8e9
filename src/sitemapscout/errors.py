# SitemapScout — Error taxonomy for discovery requests
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from typing import Iterable, List, Optional


class SitemapError(Exception):
	"""Base error. Carries the HTTP status and message shown to callers."""

	status_code = 500
	default_message = "Failed to process sitemap"

	def __init__(self, message: Optional[str] = None, discovered_urls: Optional[Iterable[str]] = None) -> None:
		self.user_message = message or self.default_message
		self.discovered_urls: List[str] = list(discovered_urls or [])
		super().__init__(self.user_message)


class InvalidUrlError(SitemapError):
	status_code = 400
	default_message = "Invalid URL format"


class SitemapNotFoundError(SitemapError):
	status_code = 404
	default_message = "No sitemap found. Checked common paths and robots.txt."


class MalformedSitemapError(SitemapError):
	status_code = 400
	default_message = "The sitemap format is not supported. Please ensure the URL points to a valid XML sitemap."


class AccessRestrictedError(MalformedSitemapError):
	"""An error or challenge page served in place of the sitemap."""

	status_code = 403
	default_message = "Unable to access sitemap due to website restrictions."


class FetchFailedError(SitemapError):
	status_code = 502
	default_message = "Unable to reach the sitemap URL. Please check if the URL is correct and accessible."

	def __init__(self, url: str, reason: str = "") -> None:
		self.url = url
		self.reason = reason
		super().__init__()

	def __str__(self) -> str:
		return f"{self.url}: {self.reason}" if self.reason else self.url
