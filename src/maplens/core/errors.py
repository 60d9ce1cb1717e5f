# MapLens — Sitemap resolution errors
# Author: Sachin Chhetri
# Year: 2025
# License: MIT


class SitemapError(Exception):
	"""Base class for errors raised while resolving a sitemap location."""

	def __init__(self, location: str, message: str) -> None:
		super().__init__(f"{location}: {message}")
		self.location = location
		self.message = message


class StagingError(SitemapError):
	"""The sitemap could not be written to a temporary file."""


class MalformedSitemapError(SitemapError):
	"""The sitemap XML could not be parsed past some point."""
