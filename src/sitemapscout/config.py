# SitemapScout — Configuration via Pydantic BaseSettings
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


DEFAULT_CANDIDATE_PATHS = [
	"/sitemap.xml",
	"/sitemap_index.xml",
	"/sitemaps.xml",
	"/sitemap-index.xml",
	"/sitemap/sitemap.xml",
	"/sitemaps/sitemap.xml",
	"/wp-sitemap.xml",
	"/wp-sitemap-index.xml",
	"/sitemap_news.xml",
	"/sitemap_products.xml",
	"/sitemap_categories.xml",
	"/sitemap_articles.xml",
	"/sitemap1.xml",
]


class Settings(BaseSettings):
	"""Application settings with sane defaults.

	Environment variables are prefixed with SITEMAPSCOUT_. CLI flags can override.
	List values (candidate_paths) are read from the environment as JSON.
	"""

	model_config = SettingsConfigDict(env_prefix="SITEMAPSCOUT_", env_file=".env", extra="ignore")

	user_agent: str = Field(default="Mozilla/5.0 (compatible; SitemapScout/0.1; +https://example.com/bot)")
	candidate_paths: List[str] = Field(default_factory=lambda: list(DEFAULT_CANDIDATE_PATHS))
	probe_timeout: float = Field(default=8.0, gt=0)
	robots_timeout: float = Field(default=5.0, gt=0)
	max_depth: int = Field(default=3, ge=1)
	concurrency: int = Field(default=5, ge=1)
	retries: int = Field(default=1, ge=0)
	backoff: float = Field(default=0.5)
	fetch_strategy: Literal["direct", "proxy_fallback"] = Field(default="direct")
	proxy_api_key: Optional[str] = Field(default=None)
	proxy_endpoint: str = Field(default="https://api.firecrawl.dev/v1/scrape")
	proxy_timeout: float = Field(default=30.0, gt=0)
	data_dir: str = Field(default="data")
	log_level: str = Field(default="INFO")
	host: str = Field(default="0.0.0.0")
	port: int = Field(default=8080)


settings = Settings()
