# MapLens — Sitemap resolver (once per URL root, recursive, scoped)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
from typing import Callable, Iterable, List, Optional, Set

from .errors import MalformedSitemapError, StagingError
from .guard import ResolutionGuard
from .locations import DEFAULT_SITEMAP_PATHS, collect_locations
from .parser import SitemapParser
from .staging import StageStatus, resolve_temp_dir, stage_location


logger = logging.getLogger(__name__)


class SitemapResolver:
	"""Resolve the sitemaps of URL roots as defined by sitemaps.org.

	Sitemaps are resolved at most once per URL root (scheme, host and port),
	even when several crawl threads ask for the same root concurrently: share
	one resolver, or one ResolutionGuard, between them.

	A sitemap only applies to URLs under its own directory unless *lenient* is
	set. Besides the locations passed to resolve(), each of *sitemap_paths* is
	tried relative to the root, except for start-URL sitemaps, which are the
	only ones considered for their root. Every sitemap is saved to a file in
	*temp_dir* (system temp dir when None) before being parsed.
	"""

	def __init__(
		self,
		fetcher,
		guard: ResolutionGuard,
		sitemap_paths: Optional[Iterable[str]] = DEFAULT_SITEMAP_PATHS,
		lenient: bool = False,
		temp_dir: Optional[str] = None,
		stop_flag: Optional[Callable[[], bool]] = None,
	) -> None:
		self.fetcher = fetcher
		self.guard = guard
		self.sitemap_paths = tuple(sitemap_paths or ())
		self.lenient = lenient
		self.temp_dir = temp_dir
		self.stop_flag = stop_flag
		resolve_temp_dir(temp_dir)

	def is_stopped(self) -> bool:
		return self.guard.is_stopped() or bool(self.stop_flag and self.stop_flag())

	def resolve(self, root: str, locations: Optional[Iterable[str]], sink, start_urls: bool = False) -> None:
		"""Resolve sitemaps for *root*, handing each in-scope entry to *sink*.

		Returns immediately when the root is resolved or being resolved by
		another thread. Never raises; failures are logged.
		"""
		if not self.guard.try_enter(root):
			return
		completed = False
		try:
			candidates = collect_locations(locations, root, self.sitemap_paths, start_urls)
			logger.debug("Sitemap locations for %s: %s", root, sorted(candidates))
			visited: Set[str] = set()
			for location in sorted(candidates):
				if self.is_stopped():
					break
				self._resolve_location(location, sink, visited)
			completed = not self.is_stopped()
		except Exception:
			logger.exception("Sitemap resolution failed for URL root: %s", root)
		finally:
			self._leave(root, completed)

	def _leave(self, root: str, completed: bool) -> None:
		try:
			if completed:
				self.guard.finish(root)
			else:
				self.guard.release(root)
		except Exception:
			logger.exception("Could not record sitemap resolution of URL root: %s", root)

	def _resolve_location(self, location: str, sink, visited: Set[str]) -> None:
		"""Resolve *location* and every sitemap it references, depth-first.

		Child locations found by the parser are pushed on a work-list and
		resolved once the parent document is done, so arbitrarily deep index
		chains never grow the call stack. *visited* is shared with the caller.
		"""
		pending: List[str] = [location]
		while pending:
			current = pending.pop()
			if current in visited:
				continue
			if self.is_stopped():
				logger.debug("Skipping resolution of sitemap location (stop requested): %s", current)
				return
			visited.add(current)
			children: List[str] = []
			self._resolve_one(current, sink, children.append)
			pending.extend(reversed(children))

	def _resolve_one(self, location: str, sink, add_child: Callable[[str], None]) -> None:
		try:
			with stage_location(self.fetcher, location, self.temp_dir) as staged:
				if staged.status is StageStatus.ABSENT:
					logger.debug("Sitemap not found: %s", location)
					return
				if staged.status is StageStatus.FAILED:
					logger.error("Could not obtain sitemap: %s (%s)", location, staged.reason)
					return
				logger.info("Resolving sitemap: %s", location)
				parser = SitemapParser(
					location,
					sink,
					resolve_child=add_child,
					lenient=self.lenient,
					should_stop=self.is_stopped,
				)
				count = parser.parse(staged.path)
				logger.info("Resolved: %s (%d URLs%s)", location, count, ", stopped" if parser.stopped else "")
		except MalformedSitemapError as e:
			logger.error(
				"Cannot parse sitemap: %s -- Likely an invalid sitemap XML format causing a parsing error (actual error: %s).",
				location,
				e.message,
			)
		except StagingError as e:
			logger.error("Cannot stage sitemap: %s (%s)", location, e.message)
		except Exception as e:
			logger.error("Cannot resolve sitemap: %s (%s)", location, e, exc_info=True)

	def stop(self) -> None:
		self.guard.shutdown()

	def _config(self):
		return (self.sitemap_paths, self.lenient, self.temp_dir)

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, SitemapResolver):
			return NotImplemented
		return self._config() == other._config()

	def __hash__(self) -> int:
		return hash(self._config())

	def __repr__(self) -> str:
		return (
			f"SitemapResolver(sitemap_paths={list(self.sitemap_paths)!r}, "
			f"lenient={self.lenient!r}, temp_dir={self.temp_dir!r})"
		)
