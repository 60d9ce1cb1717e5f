# MapLens — URL utilities: roots and sitemap directories
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from urllib.parse import urlsplit, urljoin


DEFAULT_PORTS = {"http": 80, "https": 443}


def url_root(url: str) -> str:
	"""Return the URL root (scheme://host[:port]) of *url*.

	Scheme and host are lower-cased and default ports dropped, so the result
	can key per-site state. Falls back to the stripped input when it has no host.
	"""
	try:
		p = urlsplit(url.strip())
		scheme = (p.scheme or "https").lower()
		host = (p.hostname or "").lower()
		if not host:
			return url.strip()
		port = p.port
		if port and DEFAULT_PORTS.get(scheme) != port:
			return f"{scheme}://{host}:{port}"
		return f"{scheme}://{host}"
	except ValueError:
		return url.strip()


def location_directory(location: str) -> str:
	"""Directory portion of a sitemap location, up to and including the last '/'.

	Query and fragment are ignored; a location without a path maps to the root '/'.
	"""
	p = urlsplit(location)
	# query and fragment are left out on purpose: "?s=a/b" is not a directory
	path = p.path or "/"
	path = path[: path.rfind("/") + 1]
	return f"{p.scheme}://{p.netloc}{path}"


__all__ = [
	"url_root",
	"location_directory",
	"urljoin",
]
