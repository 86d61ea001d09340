import threading

import pytest

from lazybundle.cache import LazyValue


class Counter:
    def __init__(self, result=42):
        self.calls = 0
        self.result = result

    def __call__(self):
        self.calls += 1
        return self.result


def test_should_compute_once_and_memoise():
    counter = Counter()
    value = LazyValue(counter, label="answer")

    assert value.is_computed is False
    assert value.get() == 42
    assert value.get() == 42
    assert counter.calls == 1
    assert value.is_computed is True


def test_should_return_identical_instance_for_reference_results():
    payload = {"a": 1}
    value = LazyValue(lambda: dict(payload))

    assert value.get() is value.get()


def test_should_memoise_none_results():
    counter = Counter(result=None)
    value = LazyValue(counter)

    assert value.get() is None
    assert value.get() is None
    assert counter.calls == 1


def test_should_recompute_after_invalidate():
    counter = Counter()
    value = LazyValue(counter)
    value.get()

    value.invalidate()
    assert value.is_computed is False

    counter.result = 7
    assert value.get() == 7
    assert counter.calls == 2


def test_should_not_cache_failures():
    attempts = []

    def flaky():
        attempts.append(1)
        if len(attempts) == 1:
            raise RuntimeError("first attempt fails")
        return "ok"

    value = LazyValue(flaky)
    with pytest.raises(RuntimeError):
        value.get()
    assert value.is_computed is False
    assert value.get() == "ok"
    assert len(attempts) == 2


def test_concurrent_readers_should_share_a_single_computation():
    release = threading.Event()
    counter = Counter()

    def slow():
        release.wait(timeout=5)
        return counter()

    value = LazyValue(slow)
    results = []
    threads = [threading.Thread(target=lambda: results.append(value.get())) for _ in range(8)]
    for thread in threads:
        thread.start()
    release.set()
    for thread in threads:
        thread.join(timeout=5)

    assert results == [42] * 8
    assert counter.calls == 1


def test_invalidate_during_computation_should_discard_the_stale_result():
    started = threading.Event()
    release = threading.Event()
    results = []
    counter = Counter()

    def slow():
        counter()
        if counter.calls == 1:
            started.set()
            release.wait(timeout=5)
        return counter.calls

    value = LazyValue(slow)
    worker = threading.Thread(target=lambda: results.append(value.get()))
    worker.start()
    assert started.wait(timeout=5)

    value.invalidate()
    release.set()
    worker.join(timeout=5)

    assert results == [1]
    assert value.is_computed is False
    assert value.get() == 2


def test_repr_reports_label_and_state():
    value = LazyValue(lambda: 1, label="port")
    assert repr(value) == "LazyValue('port', pending)"
    value.get()
    assert repr(value) == "LazyValue('port', computed)"
