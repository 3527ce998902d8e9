# SitemapScout — HTTP service (FastAPI)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .config import Settings, settings
from .core.discovery import SitemapDiscovery
from .errors import SitemapError
from .models import DiscoveryResult, DomainRequest, ScanRequest


logger = logging.getLogger(__name__)

CORS_HEADERS = {
	"Access-Control-Allow-Origin": "*",
	"Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

REQUIRED_FIELD_MESSAGES = {
	"/domain-sitemap-discovery": "Domain parameter is required",
	"/sitemap-scanner": "Sitemap URL is required",
}


class CORSHeadersMiddleware(BaseHTTPMiddleware):
	"""Answer every preflight with a bare 200 and stamp CORS headers on every response."""

	async def dispatch(self, request: Request, call_next):
		if request.method == "OPTIONS":
			response = PlainTextResponse("ok")
		else:
			response = await call_next(request)
		response.headers.update(CORS_HEADERS)
		return response


def _payload(result: DiscoveryResult) -> dict:
	return result.model_dump(exclude_none=True)


def _run(action: Callable[[], DiscoveryResult]) -> JSONResponse:
	try:
		result = action()
	except SitemapError as e:
		logger.info("Request failed (%d): %s", e.status_code, e.user_message)
		return JSONResponse(status_code=e.status_code, content=_payload(DiscoveryResult.failure(e)))
	except Exception:
		logger.exception("Unhandled error while processing sitemap request")
		return JSONResponse(
			status_code=500,
			content=_payload(DiscoveryResult(success=False, error="Internal server error")),
		)
	return JSONResponse(status_code=200, content=_payload(result))


def create_app(cfg: Optional[Settings] = None, discovery: Optional[SitemapDiscovery] = None) -> FastAPI:
	cfg = cfg or settings
	app = FastAPI(
		title="SitemapScout API",
		description="Discover and crawl XML sitemaps for a domain.",
		version="0.1.0",
	)
	app.state.discovery = discovery or SitemapDiscovery(cfg)
	app.add_middleware(CORSHeadersMiddleware)

	@app.exception_handler(RequestValidationError)
	async def validation_error(request: Request, exc: RequestValidationError):
		message = REQUIRED_FIELD_MESSAGES.get(request.url.path, "Invalid request body")
		logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
		return JSONResponse(status_code=400, content=_payload(DiscoveryResult(success=False, error=message)))

	@app.get("/health")
	def health():
		return {"status": "ok"}

	@app.post("/domain-sitemap-discovery")
	def domain_sitemap_discovery(body: DomainRequest, request: Request):
		"""Find the sitemap of a domain and list every page it declares."""
		logger.info("Starting sitemap discovery for domain: %s", body.domain)
		return _run(lambda: request.app.state.discovery.discover(body.domain))

	@app.post("/sitemap-scanner")
	def sitemap_scanner(body: ScanRequest, request: Request):
		"""Scan a sitemap URL, or a bare domain whose sitemap is discovered first."""
		logger.info("Starting sitemap scan for: %s", body.sitemapUrl)
		return _run(lambda: request.app.state.discovery.scan(body.sitemapUrl))

	return app


app = create_app()
