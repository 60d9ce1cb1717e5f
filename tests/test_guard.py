import threading

import pytest

from maplens.core.guard import ResolutionGuard
from maplens.storage.roots import MemoryRootStore


class RecordingStore(MemoryRootStore):
	def __init__(self):
		super().__init__()
		self.closed = 0

	def close(self):
		self.closed += 1


def test_enter_finish_lifecycle():
	store = RecordingStore()
	guard = ResolutionGuard(store)
	assert guard.try_enter("https://x.com")
	assert guard.is_active("https://x.com")
	assert not guard.try_enter("https://x.com")
	guard.finish("https://x.com")
	assert not guard.is_active("https://x.com")
	assert store.is_resolved("https://x.com")
	assert not guard.try_enter("https://x.com")


def test_release_allows_retry():
	guard = ResolutionGuard(MemoryRootStore())
	assert guard.try_enter("https://x.com")
	guard.release("https://x.com")
	assert guard.try_enter("https://x.com")


def test_resolved_in_store_from_previous_run():
	store = MemoryRootStore()
	store.mark_resolved("https://x.com")
	assert not ResolutionGuard(store).try_enter("https://x.com")


def test_only_one_thread_enters():
	guard = ResolutionGuard(MemoryRootStore())
	barrier = threading.Barrier(16)
	results = []
	lock = threading.Lock()

	def worker():
		barrier.wait()
		ok = guard.try_enter("https://x.com")
		with lock:
			results.append(ok)

	threads = [threading.Thread(target=worker) for _ in range(16)]
	for t in threads:
		t.start()
	for t in threads:
		t.join()
	assert results.count(True) == 1


def test_shutdown_is_idempotent_and_blocks_entry():
	store = RecordingStore()
	guard = ResolutionGuard(store)
	guard.shutdown()
	guard.shutdown()
	assert store.closed == 1
	assert guard.is_stopped()
	assert not guard.try_enter("https://y.com")


class FailingStore(MemoryRootStore):
	def mark_resolved(self, root):
		raise OSError("disk full")


def test_finish_clears_active_even_when_store_fails():
	guard = ResolutionGuard(FailingStore())
	assert guard.try_enter("https://x.com")
	with pytest.raises(OSError):
		guard.finish("https://x.com")
	assert not guard.is_active("https://x.com")
