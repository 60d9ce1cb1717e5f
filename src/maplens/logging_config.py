# MapLens — Logging configuration (rotating file + stderr)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import logging.handlers
import os
from typing import Optional


LOG_FORMAT = "%(asctime)s\t%(levelname)s\t%(threadName)s\t%(name)s\t%(message)s"


def configure_logging(level: str = "INFO", log_dir: Optional[str] = "logs") -> None:
	"""Configure the root logger with stderr output and, when *log_dir* is set,
	a rotating maplens.log file.

	Lines are single-line and tab-separated; the thread name tells crawl
	workers apart. urllib3 retry chatter is kept at WARNING.
	"""
	root = logging.getLogger()
	root.setLevel(getattr(logging, level.upper(), logging.INFO))

	for h in list(root.handlers):
		root.removeHandler(h)

	formatter = logging.Formatter(LOG_FORMAT)
	stream = logging.StreamHandler()
	stream.setFormatter(formatter)
	root.addHandler(stream)

	if log_dir:
		os.makedirs(log_dir, exist_ok=True)
		file_handler = logging.handlers.RotatingFileHandler(
			os.path.join(log_dir, "maplens.log"), maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
		)
		file_handler.setFormatter(formatter)
		root.addHandler(file_handler)

	logging.getLogger("urllib3").setLevel(logging.WARNING)
