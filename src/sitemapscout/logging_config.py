# SitemapScout — Logging configuration (rotating file + stdout)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import logging.handlers
import os
from typing import List, Optional

LOG_FORMAT = "%(asctime)s\t%(levelname)s\t%(name)s\t%(message)s"
LOG_FILE = "sitemapscout.log"

# third-party loggers that report every retry or access line
QUIET_LOGGERS = ("urllib3", "uvicorn.access")


def _handlers(log_dir: Optional[str]) -> List[logging.Handler]:
	handlers: List[logging.Handler] = [logging.StreamHandler()]
	if log_dir:
		os.makedirs(log_dir, exist_ok=True)
		handlers.append(
			logging.handlers.RotatingFileHandler(
				os.path.join(log_dir, LOG_FILE), maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
			)
		)
	return handlers


def configure_logging(level: str = "INFO", log_dir: Optional[str] = "logs") -> None:
	"""Route every SitemapScout logger to stdout and, when log_dir is set, a rotating file.

	Records are one tab-separated line each. Calling again replaces the
	handlers installed before, so the CLI and the server can both call it.
	"""
	root = logging.getLogger()
	root.setLevel(getattr(logging, level.upper(), logging.INFO))
	for h in list(root.handlers):
		root.removeHandler(h)

	formatter = logging.Formatter(LOG_FORMAT)
	for h in _handlers(log_dir):
		h.setFormatter(formatter)
		root.addHandler(h)

	for name in QUIET_LOGGERS:
		logging.getLogger(name).setLevel(logging.ERROR)
