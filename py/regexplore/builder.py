from __future__ import annotations

import logging
import queue
import threading
import time
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, Iterable, Sequence

from .catalogue import Catalogue, RegisterDescriptor
from .enums import FailureKind
from .errors import NoTargetsError
from .reader import ReadOutcome, RegisterReader

__all__ = [ 'ReadPool', 'ResultSetBuilder', 'build_result_set', 'no_targets_result_set', ]

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


class ReadPool:
    """A fixed number of daemon threads running register reads.

    A read stuck in the kernel keeps its worker busy but never blocks
    interpreter exit, and the number of threads never grows past
    `max_workers` however many reads hang.
    """

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS, name: str = 'regread') -> None:
        if max_workers <= 0:
            raise ValueError('max_workers must be greater than 0')

        self.max_workers = max_workers
        self.name = name
        self._queue: queue.SimpleQueue = queue.SimpleQueue()
        self._threads: list[threading.Thread] = []
        self._lock = threading.Lock()
        self._shutdown = False

    @property
    def threads(self) -> list[threading.Thread]:
        return list(self._threads)

    def submit(self, fn: Callable, *args) -> Future:
        with self._lock:
            if self._shutdown:
                raise RuntimeError('cannot submit to a pool that has been shut down')
            self._start_threads()

        fut: Future = Future()
        self._queue.put((fut, fn, args))
        return fut

    def shutdown(self) -> None:
        """Stop idle workers. Workers stuck in a read exit once it returns."""
        with self._lock:
            if self._shutdown:
                return
            self._shutdown = True
            for _ in self._threads:
                self._queue.put(None)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()

    def _start_threads(self) -> None:
        while len(self._threads) < self.max_workers:
            t = threading.Thread(target=self._work, name=f'{self.name}-{len(self._threads)}', daemon=True)
            t.start()
            self._threads.append(t)

    def _work(self) -> None:
        while True:
            item = self._queue.get()
            if item is None:
                return

            fut, fn, args = item
            if not fut.set_running_or_notify_cancel():
                continue

            try:
                fut.set_result(fn(*args))
            except Exception as e:
                fut.set_exception(e)


def no_targets_result_set(catalogue: Iterable[RegisterDescriptor], cause: str) -> list[ReadOutcome]:
    return [ReadOutcome.failed(d, FailureKind.NoTargetsAvailable, cause) for d in catalogue]


def build_result_set(catalogue: Sequence[RegisterDescriptor] | Catalogue,
                     targets: Iterable[int],
                     reader: RegisterReader,
                     max_workers: int = DEFAULT_MAX_WORKERS,
                     timeout: float | None = None,
                     pool: ReadPool | None = None) -> list[ReadOutcome]:
    """Read every descriptor of `catalogue` on `targets`.

    One task per descriptor runs on `pool`, or on a temporary pool of at most
    `max_workers` threads. The returned list has one outcome per descriptor in
    catalogue order, whatever order the reads complete in. A failed, crashed
    or timed out read only affects its own outcome.
    """
    descriptors = list(catalogue)
    cpus = frozenset(targets)

    if not descriptors:
        return []

    deadline = time.monotonic() + timeout if timeout is not None else None
    outcomes: list[ReadOutcome] = []

    own_pool = pool is None
    if own_pool:
        pool = ReadPool(max(1, min(max_workers, len(descriptors))))

    try:
        futures: list[Future] = [pool.submit(reader.read, d, cpus) for d in descriptors]

        for desc, fut in zip(descriptors, futures):
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            try:
                outcome = fut.result(timeout=remaining)
            except FutureTimeoutError:
                logger.warning('read of %s (0x%x) timed out', desc.name, desc.address)
                fut.cancel()
                outcome = ReadOutcome.failed(desc, FailureKind.TargetUnavailable, 'read timed out')
            except Exception as e:
                logger.exception('read of %s (0x%x) crashed', desc.name, desc.address)
                outcome = ReadOutcome.failed(desc, FailureKind.UnsupportedRegister, str(e) or type(e).__name__)
            outcomes.append(outcome)
    finally:
        if own_pool:
            pool.shutdown()

    nfailed = sum(1 for o in outcomes if not o.ok)
    logger.debug('read %d registers on %d CPUs, %d failed', len(outcomes), len(cpus), nfailed)

    return outcomes


class ResultSetBuilder:
    """Catalogue, reader and CPU enumeration bundled into one refreshable source."""

    def __init__(self,
                 catalogue: Catalogue,
                 reader: RegisterReader,
                 enumerate_targets: Callable[[], Iterable[int]],
                 max_workers: int = DEFAULT_MAX_WORKERS,
                 timeout: float | None = None) -> None:
        self.catalogue = catalogue
        self.reader = reader
        self.enumerate_targets = enumerate_targets
        self.max_workers = max_workers
        self.timeout = timeout
        self.pool = ReadPool(max_workers)
        self.last_targets: frozenset[int] = frozenset()
        self.last_error: str | None = None

    def build(self, targets: Iterable[int]) -> list[ReadOutcome]:
        return build_result_set(self.catalogue, targets, self.reader,
                                max_workers=self.max_workers, timeout=self.timeout, pool=self.pool)

    def refresh(self) -> list[ReadOutcome]:
        """Enumerate CPUs once and read the whole catalogue on them."""
        try:
            targets = frozenset(self.enumerate_targets())
            if not targets:
                raise NoTargetsError('No CPUs found')
        except NoTargetsError as e:
            logger.error('no targets available: %s', e)
            self.last_targets = frozenset()
            self.last_error = str(e)
            return no_targets_result_set(self.catalogue, str(e))

        self.last_targets = targets
        self.last_error = None
        return self.build(targets)

    def close(self) -> None:
        self.pool.shutdown()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
