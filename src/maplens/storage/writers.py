# MapLens — Sitemap entry sinks (memory, JSONL)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import os
import threading
from typing import List

from ..core.models import SitemapEntry
from ..utils.io import ensure_dirs, append_jsonl


class MemorySink:
	"""Collect emitted entries in a list."""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self.entries: List[SitemapEntry] = []

	def accept(self, entry: SitemapEntry) -> None:
		with self._lock:
			self.entries.append(entry)

	def urls(self) -> List[str]:
		with self._lock:
			return [e.reference for e in self.entries]

	def __len__(self) -> int:
		with self._lock:
			return len(self.entries)


class JsonlEntrySink:
	"""Append each entry as one JSON line under data_dir/jsonl."""

	def __init__(self, data_dir: str = "data", filename: str = "sitemap_urls.jsonl") -> None:
		self.data_dir = data_dir
		self.path = os.path.join(self.data_dir, "jsonl", filename)
		ensure_dirs(os.path.dirname(self.path))
		self._lock = threading.Lock()
		self.count = 0

	def accept(self, entry: SitemapEntry) -> None:
		append_jsonl(self.path, entry.to_dict())
		with self._lock:
			self.count += 1
