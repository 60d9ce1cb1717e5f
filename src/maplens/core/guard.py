# MapLens — Per-root resolution guard shared by crawl workers
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import threading
from typing import Set


logger = logging.getLogger(__name__)


class ResolutionGuard:
	"""Lets at most one thread resolve the sitemaps of a given URL root.

	Roots being resolved are tracked in memory; resolved roots are recorded in
	*store* (``is_resolved``/``mark_resolved``/``close``), which may outlive
	the process. Share one instance between all workers.
	"""

	def __init__(self, store) -> None:
		self.store = store
		self._lock = threading.Lock()
		self._active: Set[str] = set()
		self._stop = threading.Event()
		self._closed = False

	def try_enter(self, root: str) -> bool:
		with self._lock:
			if self._stop.is_set():
				return False
			if root in self._active or self.store.is_resolved(root):
				logger.debug("Sitemap locations were already processed or are being processed for URL root: %s", root)
				return False
			self._active.add(root)
			return True

	def finish(self, root: str) -> None:
		with self._lock:
			try:
				self.store.mark_resolved(root)
			finally:
				self._active.discard(root)

	def release(self, root: str) -> None:
		with self._lock:
			self._active.discard(root)

	def is_active(self, root: str) -> bool:
		with self._lock:
			return root in self._active

	def is_stopped(self) -> bool:
		return self._stop.is_set()

	def shutdown(self) -> None:
		self._stop.set()
		with self._lock:
			if self._closed:
				return
			self._closed = True
		self.store.close()
