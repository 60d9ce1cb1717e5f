# MapLens — Resolved URL root stores (in-memory and JSON file)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import json
import logging
import os
import threading
from datetime import datetime, timezone
from typing import Dict, List, Set

from ..utils.io import ensure_dirs


logger = logging.getLogger(__name__)


class MemoryRootStore:
	"""Resolved roots kept for the lifetime of the process."""

	def __init__(self) -> None:
		self._lock = threading.Lock()
		self._roots: Set[str] = set()

	def is_resolved(self, root: str) -> bool:
		with self._lock:
			return root in self._roots

	def mark_resolved(self, root: str) -> None:
		with self._lock:
			self._roots.add(root)

	def close(self) -> None:
		pass


class JsonRootStore:
	"""Thread-safe record of resolved roots persisted to a JSON file.

	A root resolved in a previous run stays resolved; delete the file to
	resolve everything again.
	"""

	def __init__(self, filename: str = "resolved_roots.json") -> None:
		self.filename = filename
		self._lock = threading.Lock()
		self._closed = False
		self.roots: Dict[str, str] = self._load_roots()

	def _load_roots(self) -> Dict[str, str]:
		if not os.path.exists(self.filename):
			return {}
		try:
			with open(self.filename, "r", encoding="utf-8") as f:
				data = json.load(f)
		except (OSError, ValueError) as e:
			logger.warning("Ignoring unreadable root store %s: %s", self.filename, e)
			return {}
		if not isinstance(data, dict):
			logger.warning("Ignoring root store %s: expected a JSON object", self.filename)
			return {}
		return {str(k): str(v) for k, v in data.items()}

	def _save_roots(self) -> None:
		ensure_dirs(os.path.dirname(self.filename))
		with open(self.filename, "w", encoding="utf-8") as f:
			json.dump(self.roots, f, indent=2, ensure_ascii=False)

	def is_resolved(self, root: str) -> bool:
		with self._lock:
			return root in self.roots

	def mark_resolved(self, root: str) -> None:
		with self._lock:
			if self._closed:
				logger.warning("Root store closed; not recording %s", root)
				return
			self.roots[root] = datetime.now(timezone.utc).isoformat()
			self._save_roots()

	def resolved_roots(self) -> List[str]:
		with self._lock:
			return sorted(self.roots)

	def close(self) -> None:
		with self._lock:
			self._closed = True
