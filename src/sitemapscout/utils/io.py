# SitemapScout — IO helpers (directories, JSONL and line files)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import json
import os
import threading
from typing import Any, Iterable


_dir_lock = threading.Lock()
_write_lock = threading.Lock()


def ensure_dirs(*paths: str) -> None:
	with _dir_lock:
		for p in paths:
			os.makedirs(p, exist_ok=True)


def append_jsonl(path: str, obj: Any) -> None:
	with _write_lock:
		with open(path, "a", encoding="utf-8") as f:
			f.write(json.dumps(obj, ensure_ascii=False) + "\n")


def write_lines(path: str, lines: Iterable[str]) -> None:
	"""Replace path with one item per line; readers never see a partial file."""
	tmp = f"{path}.tmp"
	with _write_lock:
		with open(tmp, "w", encoding="utf-8") as f:
			for line in lines:
				f.write(line + "\n")
		os.replace(tmp, path)
