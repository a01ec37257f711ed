import pytest

from propshrink import (
    Config, Falsified, Just, TestRunner, booleans, integers,
)


def big_or_small(b):
    return Just('big') if b else Just('small')


def draw_where(strategy, runner, condition):
    while True:
        case = strategy.new_value(runner)
        if condition(case.current()):
            return case


def test_flat_map_converges_on_minimal_pair():
    # Pick a, then b within 5 of a, failing when a > 10000 and b > a. Every
    # failure must shrink to (10001, 10002).
    pairs = integers(0, 65535).flat_map(
        lambda a: integers(a - 5, a + 4).map(lambda b: (a, b)))

    def test(ab):
        a, b = ab
        return a <= 10000 or b <= a

    failures = 0
    for seed in range(200):
        runner = TestRunner(seed=seed)
        case = pairs.new_value(runner)
        try:
            runner.run_one(case, test)
        except Falsified as e:
            failures += 1
            assert e.value == (10001, 10002)
    assert failures > 40


def test_simplify_switches_meta_value_and_redraws():
    runner = TestRunner(Config(cases=3), seed=0)
    case = draw_where(
        booleans().flat_map(big_or_small), runner, lambda v: v == 'big')
    assert case.simplify()
    assert case.current() == 'small'
    assert case.final_complication is not None
    assert case.regen_remaining == 3


def test_complicate_regenerates_then_unwinds():
    runner = TestRunner(Config(cases=3), seed=0)
    case = draw_where(
        booleans().flat_map(big_or_small), runner, lambda v: v == 'big')
    assert case.simplify()

    for _ in range(3):
        assert case.complicate()
        assert case.current() == 'small'
    # Regenerations used up, so the meta value goes back to True.
    assert case.complicate()
    assert case.current() == 'big'
    for _ in range(3):
        assert case.complicate()
        assert case.current() == 'big'
    # Finally the inner tree from before the switch is restored.
    assert case.complicate()
    assert case.current() == 'big'
    assert case.final_complication is None
    assert not case.complicate()
    assert runner.flat_map_regens == 6


def test_regeneration_is_bounded_by_run_budget():
    runner = TestRunner(Config(cases=100, max_flat_map_regens=2), seed=0)
    case = draw_where(
        booleans().flat_map(big_or_small), runner, lambda v: v == 'big')
    assert case.simplify()
    assert case.complicate()
    assert case.complicate()
    assert case.current() == 'small'
    assert runner.flat_map_regens == 2
    assert case.complicate()
    assert case.current() == 'big'
    assert runner.flat_map_regens == 2


def test_simplify_without_switch_cancels_regeneration():
    runner = TestRunner(seed=0)
    strategy = booleans().flat_map(lambda b: integers(0, 1000))
    case = draw_where(strategy, runner, lambda v: v > 10)
    assert case.simplify()
    assert case.regen_remaining == 0
    assert case.final_complication is None


def test_nested_flat_maps_respect_regeneration_limit():
    deep = integers(0, 65535)
    for _ in range(5):
        deep = deep.flat_map(lambda _: integers(0, 65535))

    # The first few calls fail, enough to shrink into new inner strategies,
    # and every later one passes. Regeneration then searches fruitlessly for
    # another failure until the run-wide budget stops it. A test failing only
    # on its first call would finish shrinking without ever regenerating.
    calls = []

    def fail_early(value):
        calls.append(value)
        return len(calls) > 40

    runner = TestRunner(Config(max_flat_map_regens=1000), seed=0)
    case = deep.new_value(runner)
    with pytest.raises(Falsified) as e:
        runner.run_one(case, fail_early)
    assert e.value.value in calls[:40]
    assert runner.flat_map_regens == 1000
    assert len(calls) > 1000


def test_ind_flat_map_only_shrinks_inner_value():
    runner = TestRunner(seed=0)
    strategy = integers(50, 100).ind_flat_map(
        lambda n: integers(n, n + 10))
    for _ in range(20):
        case = strategy.new_value(runner)
        start = case.current()
        while case.simplify():
            pass
        # The lower bound was fixed by the meta value and never moves.
        assert case.current() <= start
        assert case.current() >= 50


def test_ind_flat_map2_produces_pairs_shrinking_independently():
    runner = TestRunner(seed=0)
    strategy = integers(1, 100).ind_flat_map2(
        lambda n: integers(n, 2 * n))
    for _ in range(20):
        case = strategy.new_value(runner)
        n, m = case.current()
        assert n <= m <= 2 * n
        while case.simplify():
            pass
        assert case.current() == (1, n)
