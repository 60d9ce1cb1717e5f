# MapLens — Candidate sitemap locations for a URL root
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
from typing import Iterable, Optional, Set


logger = logging.getLogger(__name__)

DEFAULT_SITEMAP_PATHS = ("/sitemap.xml", "/sitemap_index.xml")


def collect_locations(
	locations: Optional[Iterable[str]],
	root: str,
	sitemap_paths: Optional[Iterable[str]] = DEFAULT_SITEMAP_PATHS,
	start_urls: bool = False,
) -> Set[str]:
	"""Build the set of sitemap locations to try for *root*.

	Start-URL sitemaps are the only ones used for their root. Otherwise the
	supplied locations (e.g. from robots.txt) are combined with each configured
	path appended to the root.
	"""
	unique: Set[str] = {loc.strip() for loc in (locations or []) if loc and loc.strip()}
	if start_urls:
		return unique

	paths = [p.strip() for p in (sitemap_paths or []) if p and p.strip()]
	if not paths:
		logger.debug("No sitemap paths specified for %s", root)
		return unique

	base = root.rstrip("/")
	for path in paths:
		if not path.startswith("/"):
			path = "/" + path
		unique.add(base + path)
	return unique
