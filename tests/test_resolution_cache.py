"""Tests for the single-assignment resolution cache."""

import threading

import pytest

from addref.cancellation import CancellationToken
from addref.errors import FixCancelled
from addref.fixes import ResolutionCache


class TestResolutionCache:
    def test_computes_once(self):
        cache = ResolutionCache()
        calls = []

        def compute(cancellation):
            calls.append(1)
            return "/refs/a.dll"

        assert cache.get_or_compute(compute) == "/refs/a.dll"
        assert cache.get_or_compute(compute) == "/refs/a.dll"
        assert len(calls) == 1
        assert cache.is_set

    def test_none_is_a_stored_value(self):
        cache = ResolutionCache()
        calls = []

        def compute(cancellation):
            calls.append(1)
            return None

        assert cache.get_or_compute(compute) is None
        assert cache.get_or_compute(compute) is None
        assert len(calls) == 1
        assert cache.is_set

    def test_peek_does_not_compute(self):
        cache = ResolutionCache()
        assert cache.peek() is None
        assert not cache.is_set

    def test_concurrent_callers_share_one_computation(self):
        cache = ResolutionCache()
        release = threading.Event()
        calls = []
        results = []
        barrier = threading.Barrier(8)

        def compute(cancellation):
            calls.append(1)
            release.wait(5)
            return "value"

        def worker():
            barrier.wait()
            results.append(cache.get_or_compute(compute))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        release.set()
        for t in threads:
            t.join(5)

        assert len(calls) == 1
        assert results == ["value"] * 8

    def test_error_leaves_cache_unset(self):
        cache = ResolutionCache()

        def failing(cancellation):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            cache.get_or_compute(failing)
        assert not cache.is_set
        assert cache.get_or_compute(lambda c: "retry") == "retry"

    def test_cancelled_before_compute(self):
        cache = ResolutionCache()
        token = CancellationToken()
        token.cancel()
        calls = []

        with pytest.raises(FixCancelled):
            cache.get_or_compute(lambda c: calls.append(1), token)
        assert calls == []
        assert not cache.is_set

    def test_waiting_caller_can_cancel(self):
        cache = ResolutionCache()
        started = threading.Event()
        release = threading.Event()

        def slow(cancellation):
            started.set()
            release.wait(5)
            return "value"

        owner = threading.Thread(target=cache.get_or_compute, args=(slow,))
        owner.start()
        assert started.wait(5)

        token = CancellationToken()
        token.cancel()
        with pytest.raises(FixCancelled):
            cache.get_or_compute(slow, token)

        release.set()
        owner.join(5)
        assert cache.peek() == "value"
