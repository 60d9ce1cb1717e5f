import gzip
import io

from requests.adapters import HTTPAdapter
from urllib3.response import HTTPResponse

from conftest import urlset, url
from maplens.core.fetch import RequestsFetcher
from maplens.core.staging import StageStatus, stage_location
from maplens.utils.net import build_session


XML = urlset(url("https://x.com/a"), url("https://x.com/b")).encode("utf-8")


class StubAdapter(HTTPAdapter):
	"""Serves canned (status, headers, body) per URL without touching the network."""

	def __init__(self, routes):
		super().__init__()
		self.routes = routes
		self.sent = []
		self.raws = []

	def send(self, request, **kwargs):
		self.sent.append((request, kwargs))
		status, headers, body = self.routes.get(request.url, (404, {}, b""))
		raw = HTTPResponse(
			body=io.BytesIO(body),
			headers=headers,
			status=status,
			preload_content=False,
			decode_content=False,
			request_method=request.method,
		)
		self.raws.append(raw)
		return self.build_response(request, raw)


def make_fetcher(routes):
	session = build_session("MapLens-test/1.0", retries=0)
	adapter = StubAdapter(routes)
	session.mount("https://", adapter)
	return RequestsFetcher("MapLens-test/1.0", timeout=7.0, session=session), adapter


def staged_bytes(fetcher, location, temp_dir):
	with stage_location(fetcher, location, temp_dir) as staged:
		assert staged.status is StageStatus.STAGED
		with open(staged.path, "rb") as f:
			return f.read()


def test_content_encoding_and_gzip_content_type_stage_the_same_xml(tmp_path):
	fetcher, adapter = make_fetcher(
		{
			"https://x.com/encoded.xml": (
				200,
				{"Content-Type": "text/xml", "Content-Encoding": "gzip"},
				gzip.compress(XML),
			),
			"https://x.com/sitemap.xml.gz": (200, {"Content-Type": "application/gzip"}, gzip.compress(XML)),
		}
	)
	encoded = staged_bytes(fetcher, "https://x.com/encoded.xml", str(tmp_path))
	packed = staged_bytes(fetcher, "https://x.com/sitemap.xml.gz", str(tmp_path))
	assert encoded == XML
	assert packed == XML
	assert all(raw.closed for raw in adapter.raws)


def test_requests_are_streamed_with_timeout_and_user_agent(tmp_path):
	fetcher, adapter = make_fetcher({"https://x.com/sitemap.xml": (200, {"Content-Type": "application/xml"}, XML)})
	assert staged_bytes(fetcher, "https://x.com/sitemap.xml", str(tmp_path)) == XML
	request, kwargs = adapter.sent[0]
	assert kwargs["stream"] is True
	assert kwargs["timeout"] == 7.0
	assert request.headers["User-Agent"] == "MapLens-test/1.0"
	assert "application/xml" in request.headers["Accept"]


def test_not_found_stages_as_absent(tmp_path):
	fetcher, adapter = make_fetcher({})
	with stage_location(fetcher, "https://x.com/missing.xml", str(tmp_path)) as staged:
		assert staged.status is StageStatus.ABSENT
	assert adapter.raws[0].closed


def test_server_error_stages_as_failed(tmp_path):
	fetcher, _ = make_fetcher({"https://x.com/sitemap.xml": (503, {}, b"busy")})
	with stage_location(fetcher, "https://x.com/sitemap.xml", str(tmp_path)) as staged:
		assert staged.status is StageStatus.FAILED
		assert "503" in staged.reason


def test_session_retries_transient_statuses():
	session = build_session("MapLens-test/1.0", retries=3, backoff=0.5)
	retry = session.get_adapter("https://x.com").max_retries
	assert retry.total == 3
	assert 503 in retry.status_forcelist
	assert 404 not in retry.status_forcelist
	assert "GET" in retry.allowed_methods
