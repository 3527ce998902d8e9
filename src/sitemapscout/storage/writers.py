# SitemapScout — Result writers (JSONL log, per-host link lists)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import os
import re
from datetime import datetime, timezone
from urllib.parse import urlsplit

from ..models import DiscoveryResult
from ..utils.io import append_jsonl, ensure_dirs, write_lines


_UNSAFE_RE = re.compile(r"[^A-Za-z0-9._-]+")


class ResultWriter:
	"""Persist discovery results in a consistent structure under data_dir."""

	def __init__(self, data_dir: str = "data") -> None:
		self.data_dir = data_dir
		self.results_path = os.path.join(self.data_dir, "jsonl", "discoveries.jsonl")
		self.links_dir = os.path.join(self.data_dir, "links")
		ensure_dirs(os.path.dirname(self.results_path), self.links_dir)

	def links_path(self, target: str) -> str:
		host = urlsplit(target).netloc or target
		return os.path.join(self.links_dir, f"{_UNSAFE_RE.sub('_', host)}.txt")

	def write(self, target: str, result: DiscoveryResult) -> str:
		"""Append result to the JSONL log; on success also write its links. Returns the links path or ""."""
		record = {"target": target, "at": datetime.now(timezone.utc).isoformat()}
		record.update(result.model_dump(exclude_none=True))
		append_jsonl(self.results_path, record)
		if not result.success:
			return ""
		path = self.links_path(result.sitemapUrl or target)
		write_lines(path, result.links)
		return path
