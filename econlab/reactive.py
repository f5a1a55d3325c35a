"""Memoised derivation nodes over an InputState.

A node wraps an expensive pure function of some parameters. Its result is
computed at most once per set of dependency writes and shared by every
consumer that calls ``get()`` in between.
"""

import logging
import threading

logger = logging.getLogger(__name__)


class _Failure:
    """Cached exception outcome of a computation"""

    __slots__ = ("error",)

    def __init__(self, error):
        self.error = error


class MemoizedNode:
    """Cache a pure function of the parameters it depends on.

    ``func`` receives an immutable snapshot (mapping) of the declared
    dependencies. The cache is keyed on a generation counter that is bumped
    whenever one of those dependencies is written through the InputState;
    reads never invalidate.

    If ``func`` raises, the exception is cached for the same generation and
    re-raised by every ``get()`` until a dependency changes.

    The check-compute-store path runs under a lock, so concurrent readers
    wait for one computation and then all see the same result object.
    """

    def __init__(self, state, func, depends_on=None, name=None):
        self._state = state
        self._func = func
        self.depends_on = tuple(depends_on) if depends_on is not None else state.names
        for dependency in self.depends_on:
            state.field(dependency)
        self.name = name or getattr(func, "__name__", "node")

        self._lock = threading.RLock()
        self._generation = 0
        self._cached_generation = None
        self._outcome = None
        self.compute_count = 0

        state.subscribe(self._on_change)

    def _on_change(self, name):
        if name in self.depends_on:
            with self._lock:
                self._generation += 1
            logger.debug("%s invalidated by write to %s", self.name, name)

    @property
    def is_stale(self):
        with self._lock:
            return self._cached_generation != self._generation

    def invalidate(self):
        """Force the next get() to recompute"""
        with self._lock:
            self._generation += 1

    def get(self):
        with self._lock:
            if self._cached_generation != self._generation:
                generation = self._generation
                params = self._state.snapshot(self.depends_on)
                self.compute_count += 1
                logger.debug("Computing %s (#%d)", self.name, self.compute_count)
                try:
                    self._outcome = self._func(params)
                except Exception as e:
                    logger.debug("%s raised %s", self.name, type(e).__name__)
                    self._outcome = _Failure(e)
                # a write racing the snapshot bumps the generation after we release the lock
                self._cached_generation = generation
            outcome = self._outcome

        if isinstance(outcome, _Failure):
            raise outcome.error
        return outcome

    def close(self):
        """Detach from the InputState"""
        self._state.unsubscribe(self._on_change)

    def __repr__(self):
        state = "stale" if self.is_stale else "fresh"
        return f"MemoizedNode({self.name!r}, depends_on={self.depends_on}, {state})"
