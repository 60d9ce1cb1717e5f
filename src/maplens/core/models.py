# MapLens — Sitemap entry model
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from datetime import datetime
from typing import Any, Dict, Optional


class SitemapEntry:
	"""One <url> of a sitemap, filled in field by field while parsing."""

	def __init__(
		self,
		reference: str = "",
		last_modified: Optional[datetime] = None,
		change_frequency: Optional[str] = None,
		priority: Optional[float] = None,
		sitemap: str = "",
	) -> None:
		self.reference = reference
		self.last_modified = last_modified
		self.change_frequency = change_frequency
		self.priority = priority
		self.sitemap = sitemap

	def to_dict(self) -> Dict[str, Any]:
		return {
			"url": self.reference,
			"lastmod": self.last_modified.isoformat() if self.last_modified else None,
			"changefreq": self.change_frequency,
			"priority": self.priority,
			"sitemap": self.sitemap,
		}

	def __repr__(self) -> str:
		return (
			f"SitemapEntry(reference={self.reference!r}, last_modified={self.last_modified!r}, "
			f"change_frequency={self.change_frequency!r}, priority={self.priority!r})"
		)
