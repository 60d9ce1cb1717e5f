# MapLens — Sitemap staging: fetch, gunzip, save to a temp file
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import enum
import gzip
import logging
import os
import shutil
import tempfile
from typing import BinaryIO, Optional

from .errors import StagingError
from ..utils.io import ensure_dirs


logger = logging.getLogger(__name__)

GZIP_CONTENT_TYPES = {
	"application/gzip",
	"application/x-gzip",
	"application/gzip-compressed",
}

COPY_CHUNK_SIZE = 64 * 1024


class StageStatus(enum.Enum):
	STAGED = "staged"
	ABSENT = "absent"
	FAILED = "failed"


class StagedSitemap:
	"""Outcome of staging one location; removes its temp file on exit."""

	def __init__(self, location: str, status: StageStatus, path: Optional[str] = None, reason: str = "") -> None:
		self.location = location
		self.status = status
		self.path = path
		self.reason = reason

	def discard(self) -> None:
		path, self.path = self.path, None
		if path and os.path.exists(path):
			try:
				os.remove(path)
			except OSError as e:
				logger.error("Could not delete sitemap file for %s: %s", self.location, e)

	def __enter__(self) -> "StagedSitemap":
		return self

	def __exit__(self, exc_type, exc, tb) -> None:
		self.discard()


def is_gzip(content_type: str) -> bool:
	media_type = (content_type or "").split(";", 1)[0].strip().lower()
	return media_type in GZIP_CONTENT_TYPES


def resolve_temp_dir(temp_dir: Optional[str]) -> str:
	"""Return a usable staging directory, creating it when missing."""
	path = temp_dir or tempfile.gettempdir()
	try:
		ensure_dirs(path)
	except OSError as e:
		raise StagingError(path, f"cannot create temp directory ({e})") from e
	return path


def _copy_to_temp_file(location: str, stream: BinaryIO, temp_dir: str) -> str:
	try:
		fd, path = tempfile.mkstemp(prefix="sitemap-", suffix=".xml", dir=temp_dir)
	except OSError as e:
		raise StagingError(location, f"cannot create temp file in {temp_dir} ({e})") from e
	logger.debug("Temporarily saving sitemap at: %s", path)
	try:
		with os.fdopen(fd, "wb") as f:
			shutil.copyfileobj(stream, f, COPY_CHUNK_SIZE)
	except BaseException:
		os.remove(path)
		raise
	return path


def stage_location(fetcher, location: str, temp_dir: Optional[str] = None) -> StagedSitemap:
	"""Fetch *location* and save its (decompressed) body to a temp file.

	The whole body is saved before parsing starts so slow XML processing never
	holds the connection open. 404 yields ABSENT; any other non-200 status or a
	transport error yields FAILED. Raises StagingError when no temp file can be
	created.
	"""
	directory = resolve_temp_dir(temp_dir)
	try:
		response = fetcher.fetch(location)
	except Exception as e:
		return StagedSitemap(location, StageStatus.FAILED, reason=str(e) or type(e).__name__)

	try:
		status = response.status_code
		if status == 404:
			return StagedSitemap(location, StageStatus.ABSENT, reason="not found")
		if status != 200:
			return StagedSitemap(location, StageStatus.FAILED, reason=f"expected status code 200, but got {status}")
		stream = response.stream
		if is_gzip(response.content_type):
			stream = gzip.GzipFile(fileobj=stream, mode="rb")
		try:
			path = _copy_to_temp_file(location, stream, directory)
		except StagingError:
			raise
		except Exception as e:
			return StagedSitemap(location, StageStatus.FAILED, reason=f"cannot read sitemap body ({e})")
		return StagedSitemap(location, StageStatus.STAGED, path=path)
	finally:
		response.close()
