# MapLens — CLI (Typer)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import threading
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional

import typer
from rich import print
from rich.table import Table

from .config import Settings
from .core.fetch import RequestsFetcher
from .core.guard import ResolutionGuard
from .core.resolver import SitemapResolver
from .core.robots import sitemaps_from_robots
from .logging_config import configure_logging
from .storage.roots import JsonRootStore, MemoryRootStore
from .storage.writers import JsonlEntrySink
from .utils.urls import url_root

app = typer.Typer(add_completion=False, no_args_is_help=True)
logger = logging.getLogger(__name__)


class CountingSink:
	"""Forward entries to another sink, counting them per URL root."""

	def __init__(self, target) -> None:
		self.target = target
		self._lock = threading.Lock()
		self.counts: Dict[str, int] = {}

	def add(self, root: str, entry) -> None:
		self.target.accept(entry)
		with self._lock:
			self.counts[root] = self.counts.get(root, 0) + 1

	def for_root(self, root: str) -> "RootSink":
		return RootSink(self, root)


class RootSink:
	def __init__(self, counter: CountingSink, root: str) -> None:
		self.counter = counter
		self.root = root

	def accept(self, entry) -> None:
		self.counter.add(self.root, entry)


def group_by_root(seeds: List[str], sitemaps: List[str], start_urls: bool) -> "OrderedDict[str, List[str]]":
	"""Map each URL root to its explicit sitemap locations.

	In start-URL mode the seeds are sitemap locations themselves; otherwise
	seeds name the sites and --sitemap locations attach to their own root.
	"""
	groups: "OrderedDict[str, List[str]]" = OrderedDict()
	if start_urls:
		for s in seeds:
			groups.setdefault(url_root(s), []).append(s.strip())
		return groups
	for s in seeds:
		groups.setdefault(url_root(s), [])
	for sm in sitemaps:
		root = url_root(sm)
		if root in groups:
			groups[root].append(sm.strip())
		else:
			logger.warning("Ignoring sitemap %s: no seed for URL root %s", sm, root)
	return groups


def robots_locations(fetcher, root: str, timeout: float) -> List[str]:
	"""Sitemaps listed in robots.txt of *root*, paced like every other fetch to that host."""
	fetcher.pace(root)
	return sitemaps_from_robots(fetcher.session, root, timeout=timeout)


@app.command()
def resolve(
	seed: List[str] = typer.Argument(..., help="Site URL(s), or sitemap URL(s) with --start-urls"),
	sitemap: Optional[List[str]] = typer.Option(None, "--sitemap", help="Extra sitemap location(s) to try"),
	start_urls: bool = typer.Option(False, "--start-urls", help="Seeds are sitemaps; skip robots.txt and default sitemap paths"),
	lenient: Optional[bool] = typer.Option(None, "--lenient/--strict", help="Accept URLs outside a sitemap's directory"),
	use_robots: Optional[bool] = typer.Option(None, "--robots/--no-robots", help="Add sitemaps listed in robots.txt"),
	workers: Optional[int] = typer.Option(None, help="Concurrent resolver threads"),
	output: Optional[str] = typer.Option(None, help="Data output directory"),
	temp_dir: Optional[str] = typer.Option(None, help="Directory for staged sitemap files"),
	store: Optional[str] = typer.Option(None, help="Resolved-roots JSON file ('' for in-memory)"),
	user_agent: Optional[str] = typer.Option(None, help="Override User-Agent"),
	log_level: Optional[str] = typer.Option(None, help="Log level"),
):
	"""Resolve sitemaps of the seed sites and write their URLs as JSONL under the data dir."""
	cfg = Settings()
	configure_logging(level=log_level or cfg.log_level)
	store_path = cfg.store_path if store is None else store
	fetcher = RequestsFetcher(
		user_agent=user_agent or cfg.user_agent,
		timeout=cfg.timeout,
		min_delay=cfg.min_delay,
		retries=cfg.retries,
		backoff=cfg.backoff,
	)
	guard = ResolutionGuard(JsonRootStore(store_path) if store_path else MemoryRootStore())
	resolver = SitemapResolver(
		fetcher,
		guard,
		sitemap_paths=cfg.sitemap_paths,
		lenient=lenient if lenient is not None else cfg.lenient,
		temp_dir=temp_dir or cfg.temp_dir,
	)
	robots = (use_robots if use_robots is not None else cfg.use_robots) and not start_urls
	sink = CountingSink(JsonlEntrySink(data_dir=output or cfg.data_dir))
	groups = group_by_root(seed, sitemap or [], start_urls)

	def work(root: str, locations: List[str]) -> None:
		if robots:
			locations = locations + robots_locations(fetcher, root, cfg.timeout)
		resolver.resolve(root, locations, sink.for_root(root), start_urls=start_urls)

	pool = ThreadPoolExecutor(max_workers=workers or cfg.workers, thread_name_prefix="resolver")
	try:
		for future in [pool.submit(work, root, locs) for root, locs in groups.items()]:
			future.result()
	except KeyboardInterrupt:
		print("[yellow]Stopping...[/yellow]")
		resolver.stop()
		raise typer.Exit(code=130)
	finally:
		pool.shutdown(wait=True, cancel_futures=True)
		resolver.stop()

	table = Table(title="Sitemap URLs")
	table.add_column("URL root")
	table.add_column("URLs", justify="right")
	for root in groups:
		table.add_row(root, str(sink.counts.get(root, 0)))
	print(table)
	print(f"[bold]Output:[/bold] {sink.target.path}")


@app.command("print-config")
def print_config():
	"""Print effective configuration from environment."""
	cfg = Settings()
	print(cfg.model_dump())


def main():
	app()


if __name__ == "__main__":
	main()
