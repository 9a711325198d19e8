"""
Tests for the Cache module, including concurrent access.
"""

from concurrent.futures import ThreadPoolExecutor

from noisegraph.modules import Cache, Constant


def test_same_point_evaluates_source_once(counter):
    cache = Cache(source0=counter)
    assert cache.get_value(1.0, 2.0, 3.0) == 1.5
    assert cache.get_value(1.0, 2.0, 3.0) == 1.5
    assert counter.calls == 1


def test_different_points_reevaluate(counter):
    cache = Cache(source0=counter)
    cache.get_value(1.0, 2.0, 3.0)
    cache.get_value(1.0, 2.0, 3.5)
    cache.get_value(1.0, 2.0, 3.0)
    assert counter.calls == 3


def test_rebinding_source_resets(counter):
    cache = Cache(source0=Constant(value=9.0))
    assert cache.get_value(0.0, 0.0, 0.0) == 9.0
    cache.source0 = counter
    assert cache.get_value(0.0, 0.0, 0.0) == 1.5
    assert counter.calls == 1


def test_reset(counter):
    cache = Cache(source0=counter)
    cache.get_value(0.0, 0.0, 0.0)
    cache.reset()
    cache.get_value(0.0, 0.0, 0.0)
    assert counter.calls == 2


def test_concurrent_callers_get_their_own_values(x_echo):
    """Each thread must only ever see the value computed for its own point."""
    cache = Cache(source0=x_echo)

    def hammer(worker):
        mismatches = 0
        for i in range(2000):
            x = float(worker * 10000 + (i % 3))
            if cache.get_value(x, 0.0, 0.0) != x:
                mismatches += 1
        return mismatches

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(hammer, range(8)))

    assert sum(results) == 0
