# MapLens — Sitemap locations declared in robots.txt
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
from typing import List
from urllib.parse import urljoin

import requests


logger = logging.getLogger(__name__)


def sitemaps_from_robots(session, root: str, timeout: float = 10.0) -> List[str]:
	"""Fetch robots.txt of *root* and return its Sitemap: locations.

	Relative locations are made absolute against the root. Network errors and
	missing robots.txt yield an empty list.
	"""
	robots_url = urljoin(root.rstrip("/") + "/", "robots.txt")
	try:
		r = session.get(robots_url, timeout=timeout)
		r.raise_for_status()
	except requests.RequestException as e:
		logger.debug("No robots.txt for %s: %s", root, e)
		return []
	sitemaps: List[str] = []
	for line in r.text.splitlines():
		line = line.strip()
		if line.lower().startswith("sitemap:"):
			sm = line.split(":", 1)[1].strip()
			if not sm:
				continue
			sm = urljoin(robots_url, sm)
			if sm not in sitemaps:
				sitemaps.append(sm)
	logger.debug("Sitemaps in %s: %s", robots_url, sitemaps)
	return sitemaps
