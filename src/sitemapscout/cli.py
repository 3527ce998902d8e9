# SitemapScout — CLI (Typer)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import enum

import typer
from typing import List, Optional
from rich import print

from .config import Settings
from .core.discovery import SitemapDiscovery
from .errors import SitemapError
from .logging_config import configure_logging
from .models import DiscoveryResult
from .storage.writers import ResultWriter

app = typer.Typer(add_completion=False, no_args_is_help=True)


class FetchStrategy(str, enum.Enum):
	direct = "direct"
	proxy_fallback = "proxy_fallback"


def _settings(
	max_depth: Optional[int] = None,
	concurrency: Optional[int] = None,
	strategy: Optional[FetchStrategy] = None,
	user_agent: Optional[str] = None,
	log_level: Optional[str] = None,
) -> Settings:
	overrides = {
		"max_depth": max_depth,
		"concurrency": concurrency,
		"fetch_strategy": strategy.value if strategy else None,
		"user_agent": user_agent,
		"log_level": log_level,
	}
	cfg = Settings(**{k: v for k, v in overrides.items() if v is not None})
	configure_logging(level=cfg.log_level)
	return cfg


def _report(target: str, result: DiscoveryResult, writer: Optional[ResultWriter], show_links: bool) -> None:
	if result.success:
		print(f"[green]Sitemap:[/green] {result.sitemapUrl}")
	else:
		print(f"[red]Failed:[/red] {result.error}")
	print({
		"links": result.totalLinks,
		"sitemaps_fetched": len(result.fetchedSitemaps),
		"candidates_probed": len(result.discoveredUrls),
	})
	if show_links:
		for link in result.links:
			print(link)
	if writer:
		path = writer.write(target, result)
		if path:
			print(f"[bold]Links written:[/bold] {path}")


def _run_all(targets: List[str], action, cfg: Settings, export: bool, show_links: bool) -> int:
	writer = ResultWriter(cfg.data_dir) if export else None
	failures = 0
	for t in targets:
		print(f"[bold]Scanning:[/bold] {t}")
		try:
			result = action(t)
		except SitemapError as e:
			result = DiscoveryResult.failure(e)
		if not result.success:
			failures += 1
		_report(t, result, writer, show_links)
	return failures


@app.command()
def discover(
	domain: List[str] = typer.Argument(..., help="Domain(s) or site URL(s) to discover sitemaps for"),
	max_depth: Optional[int] = typer.Option(None, min=1, help="Maximum sitemap index depth (overrides env)"),
	concurrency: Optional[int] = typer.Option(None, min=1, help="Child sitemaps fetched per batch"),
	strategy: Optional[FetchStrategy] = typer.Option(None, help="Fetch strategy"),
	export: bool = typer.Option(False, help="Append results under data_dir"),
	show_links: bool = typer.Option(False, help="Print every discovered link"),
	user_agent: Optional[str] = typer.Option(None, help="Override User-Agent"),
	log_level: Optional[str] = typer.Option(None, help="Log level"),
):
	"""Locate each domain's sitemap and list the pages it declares."""
	cfg = _settings(max_depth, concurrency, strategy, user_agent, log_level)
	pipeline = SitemapDiscovery(cfg)
	failures = _run_all(domain, pipeline.discover, cfg, export, show_links)
	raise typer.Exit(code=1 if failures else 0)


@app.command()
def scan(
	sitemap_url: List[str] = typer.Argument(..., help="Sitemap URL(s), or bare domains to auto-detect"),
	max_depth: Optional[int] = typer.Option(None, min=1, help="Maximum sitemap index depth (overrides env)"),
	concurrency: Optional[int] = typer.Option(None, min=1, help="Child sitemaps fetched per batch"),
	strategy: Optional[FetchStrategy] = typer.Option(None, help="Fetch strategy"),
	export: bool = typer.Option(False, help="Append results under data_dir"),
	show_links: bool = typer.Option(False, help="Print every discovered link"),
	user_agent: Optional[str] = typer.Option(None, help="Override User-Agent"),
	log_level: Optional[str] = typer.Option(None, help="Log level"),
):
	"""Crawl the given sitemap(s) directly."""
	cfg = _settings(max_depth, concurrency, strategy, user_agent, log_level)
	pipeline = SitemapDiscovery(cfg)
	failures = _run_all(sitemap_url, pipeline.scan, cfg, export, show_links)
	raise typer.Exit(code=1 if failures else 0)


@app.command()
def serve(
	host: Optional[str] = typer.Option(None, help="Bind address"),
	port: Optional[int] = typer.Option(None, help="Bind port"),
	log_level: Optional[str] = typer.Option(None, help="Log level"),
):
	"""Run the HTTP service."""
	import uvicorn
	from .api import create_app

	cfg = _settings(log_level=log_level)
	uvicorn.run(create_app(cfg), host=host or cfg.host, port=port or cfg.port, log_config=None)


@app.command("print-config")
def print_config():
	"""Print effective configuration from environment."""
	cfg = Settings()
	print(cfg.model_dump(exclude={"proxy_api_key"}))


def main():
	app()


if __name__ == "__main__":
	main()
