# MapLens — Streaming sitemap parser (urlset and sitemapindex)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import enum
import logging
import xml.etree.ElementTree as ET
from typing import Callable, Optional

from dateutil.parser import isoparse

from .errors import MalformedSitemapError
from .models import SitemapEntry
from .scope import in_scope


logger = logging.getLogger(__name__)


class Field(enum.Enum):
	NONE = ""
	LOC = "loc"
	LASTMOD = "lastmod"
	CHANGEFREQ = "changefreq"
	PRIORITY = "priority"


LEAF_FIELDS = {f.value: f for f in Field if f is not Field.NONE}


def local_name(tag) -> str:
	if not isinstance(tag, str):
		return ""
	return tag.rsplit("}", 1)[-1].lower()


class SitemapParser:
	"""Forward-only parser for one staged sitemap file.

	Entries of a <urlset> are checked against the sitemap's scope and handed
	to ``sink.accept``. Locations inside <sitemap> elements are passed to
	``resolve_child`` in document order as soon as they are read. Processed
	elements are dropped from the tree; memory does not grow with the number
	of entries.
	"""

	def __init__(
		self,
		location: str,
		sink,
		resolve_child: Callable[[str], None],
		lenient: bool = False,
		should_stop: Optional[Callable[[], bool]] = None,
	) -> None:
		self.location = location
		self.sink = sink
		self.resolve_child = resolve_child
		self.lenient = lenient
		self.should_stop = should_stop
		self.emitted = 0
		self.stopped = False
		self._field = Field.NONE
		self._in_index = False
		self._depth = 0
		self._container_depth = -1
		self._entry: Optional[SitemapEntry] = None

	def parse(self, path: str) -> int:
		"""Parse the file at *path*; return the number of entries emitted.

		Raises MalformedSitemapError on invalid XML. Entries emitted before the
		error stay emitted.
		"""
		root = None
		with open(path, "rb") as f:
			try:
				for event, elem in ET.iterparse(f, events=("start", "end")):
					if self.should_stop and self.should_stop():
						logger.debug("Sitemap not entirely parsed due to stop request: %s", self.location)
						self.stopped = True
						break
					tag = local_name(elem.tag)
					if event == "start":
						if root is None:
							root = elem
						self._start(tag)
					else:
						self._end(tag, elem)
						if tag in ("url", "sitemap") and root is not None:
							root.clear()
			except ET.ParseError as e:
				raise MalformedSitemapError(self.location, str(e)) from e
		return self.emitted

	def _start(self, tag: str) -> None:
		self._depth += 1
		if tag == "sitemap":
			self._in_index = True
			self._container_depth = self._depth
		elif tag == "url":
			self._entry = SitemapEntry(sitemap=self.location)
			self._container_depth = self._depth
		# only direct children count; skips extensions such as <image:loc>
		elif tag in LEAF_FIELDS and self._depth == self._container_depth + 1:
			self._field = LEAF_FIELDS[tag]

	def _end(self, tag: str, elem) -> None:
		if tag == "sitemap":
			self._in_index = False
		elif tag == "url":
			self._close_entry()
		elif tag in LEAF_FIELDS and self._field is LEAF_FIELDS[tag]:
			self._text((elem.text or "").strip())
		self._depth -= 1

	def _text(self, value: str) -> None:
		field, self._field = self._field, Field.NONE
		if self._in_index and field is Field.LOC:
			if value:
				self.resolve_child(value)
			return
		entry = self._entry
		if entry is None:
			return
		if field is Field.LOC:
			entry.reference = value
		elif field is Field.LASTMOD:
			try:
				entry.last_modified = isoparse(value)
			except (ValueError, OverflowError):
				logger.info("Invalid sitemap date: %s", value)
		elif field is Field.CHANGEFREQ:
			entry.change_frequency = value
		elif field is Field.PRIORITY:
			try:
				entry.priority = float(value)
			except ValueError:
				logger.info("Invalid sitemap priority: %s", value)

	def _close_entry(self) -> None:
		entry, self._entry = self._entry, None
		if entry is None or not entry.reference:
			return
		if in_scope(entry.reference, self.location, self.lenient):
			self.sink.accept(entry)
			self.emitted += 1
