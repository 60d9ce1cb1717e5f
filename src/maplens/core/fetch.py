# MapLens — Sitemap fetching over HTTP
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
from typing import BinaryIO, Callable, Optional
from urllib.parse import urlparse

import requests

from .session import HostPacer, make_session


logger = logging.getLogger(__name__)


class FetchResponse:
	"""Status, declared content type and body stream of one fetched location.

	The stream is only valid until close() is called.
	"""

	def __init__(
		self,
		status_code: int,
		content_type: str,
		stream: BinaryIO,
		closer: Optional[Callable[[], None]] = None,
	) -> None:
		self.status_code = status_code
		self.content_type = content_type or ""
		self.stream = stream
		self._closer = closer

	def close(self) -> None:
		closer, self._closer = self._closer, None
		if closer is not None:
			closer()


class RequestsFetcher:
	"""Fetch sitemap locations with a retrying requests Session.

	Bodies are streamed rather than loaded in memory; transfer encodings
	(Content-Encoding) are decoded, declared gzip content types are not.
	"""

	def __init__(
		self,
		user_agent: str,
		timeout: float = 15.0,
		min_delay: float = 0.0,
		retries: int = 3,
		backoff: float = 0.5,
		session: Optional[requests.Session] = None,
	) -> None:
		self.session = session or make_session(user_agent=user_agent, retries=retries, backoff=backoff)
		self.timeout = timeout
		self.min_delay = max(0.0, float(min_delay))
		self.pacer = HostPacer()

	def pace(self, url: str) -> None:
		self.pacer.wait(urlparse(url).netloc, self.min_delay)

	def fetch(self, location: str) -> FetchResponse:
		self.pace(location)
		r = self.session.get(location, timeout=self.timeout, stream=True)
		r.raw.decode_content = True
		logger.debug("Fetched %s: %s (%s)", location, r.status_code, r.headers.get("Content-Type", ""))
		return FetchResponse(r.status_code, r.headers.get("Content-Type", ""), r.raw, closer=r.close)
