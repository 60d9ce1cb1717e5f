import io
import threading

import pytest

from maplens.core.fetch import FetchResponse
from maplens.core.guard import ResolutionGuard
from maplens.core.resolver import SitemapResolver
from maplens.storage.roots import MemoryRootStore


def urlset(*entries):
	body = "".join(entries)
	return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{body}</urlset>'


def url(loc, **fields):
	extra = "".join(f"<{k}>{v}</{k}>" for k, v in fields.items())
	return f"<url><loc>{loc}</loc>{extra}</url>"


def sitemapindex(*locations):
	body = "".join(f"<sitemap><loc>{loc}</loc></sitemap>" for loc in locations)
	return f'<?xml version="1.0" encoding="UTF-8"?><sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{body}</sitemapindex>'


class MockFetcher:
	"""Serve canned responses: location -> body, (status, content_type, body) or an exception."""

	def __init__(self, mapping):
		self.mapping = mapping
		self.calls = []
		self.closed = 0
		self._lock = threading.Lock()

	def fetch(self, location):
		with self._lock:
			self.calls.append(location)
		value = self.mapping.get(location, (404, "text/html", b""))
		if isinstance(value, Exception):
			raise value
		if isinstance(value, (str, bytes)):
			value = (200, "text/xml", value)
		status, ctype, body = value
		if isinstance(body, str):
			body = body.encode("utf-8")
		return FetchResponse(status, ctype, io.BytesIO(body), closer=self._close)

	def _close(self):
		with self._lock:
			self.closed += 1


class ListSink:
	def __init__(self):
		self.entries = []

	def accept(self, entry):
		self.entries.append(entry)

	def urls(self):
		return [e.reference for e in self.entries]


@pytest.fixture
def sink():
	return ListSink()


@pytest.fixture
def make_resolver(tmp_path):
	def factory(mapping, **kwargs):
		fetcher = MockFetcher(mapping)
		kwargs.setdefault("temp_dir", str(tmp_path / "staging"))
		kwargs.setdefault("sitemap_paths", ())
		guard = kwargs.pop("guard", None) or ResolutionGuard(MemoryRootStore())
		return SitemapResolver(fetcher, guard, **kwargs), fetcher

	return factory
