# SitemapScout — Request and result models
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from typing import List, Optional

from pydantic import BaseModel, Field

from .errors import SitemapError


class DomainRequest(BaseModel):
	domain: str = Field(min_length=1)


class ScanRequest(BaseModel):
	sitemapUrl: str = Field(min_length=1)


class DiscoveryResult(BaseModel):
	success: bool
	sitemapUrl: Optional[str] = None
	links: List[str] = Field(default_factory=list)
	totalLinks: int = 0
	discoveredUrls: List[str] = Field(default_factory=list)
	fetchedSitemaps: List[str] = Field(default_factory=list)
	error: Optional[str] = None

	@classmethod
	def failure(cls, error: SitemapError) -> "DiscoveryResult":
		return cls(success=False, error=error.user_message, discoveredUrls=list(error.discovered_urls))
