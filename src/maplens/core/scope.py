# MapLens — Sitemap scope rule (directory subtree)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging

from ..utils.urls import location_directory


logger = logging.getLogger(__name__)


def in_scope(reference: str, location: str, lenient: bool = False) -> bool:
	"""Whether a sitemap at *location* may declare *reference*.

	A sitemap only has authority over URLs under its own directory. Lenient
	mode accepts any non-empty reference.
	"""
	if not reference:
		return False
	if lenient:
		return True
	directory = location_directory(location)
	if reference.startswith(directory):
		return True
	logger.debug("Sitemap URL out of scope for location directory. URL: %s  Location directory: %s", reference, directory)
	return False
