from hypothesis import given, strategies as st
import pytest

from propshrink import (
    Config, Falsified, ShrinkProtocolViolation, Strategy, TestRunner,
    TooManyRejects, ValueTree, integers,
)


MULTIPLES_OF_THREE = integers(0, 255).filter('%3', lambda v: v % 3 == 0)


def test_filtered_values_stay_acceptable_while_simplifying():
    for seed in range(256):
        case = MULTIPLES_OF_THREE.new_value(TestRunner(seed=seed))
        assert case.current() % 3 == 0
        while case.simplify():
            assert case.current() % 3 == 0
        assert case.current() % 3 == 0


@given(st.integers(0, 2 ** 64 - 1), st.lists(st.booleans(), max_size=200))
def test_filtered_values_stay_acceptable_under_any_moves(seed, moves):
    case = MULTIPLES_OF_THREE.new_value(TestRunner(seed=seed))
    for simplify in moves:
        if simplify:
            case.simplify()
        else:
            case.complicate()
        assert case.current() % 3 == 0


def test_filter_exhausts_local_rejects():
    runner = TestRunner(Config(max_local_rejects=10), seed=0)
    never = integers(0, 10).filter('never', lambda v: False)
    with pytest.raises(TooManyRejects) as e:
        never.new_value(runner)
    assert 'never' in str(e.value)
    assert runner.local_rejects == 10


class Drop(ValueTree):
    """A tree that simplifies once and can never go back."""

    def __init__(self):
        self.value = 2

    def current(self):
        return self.value

    def simplify(self):
        if self.value == 2:
            self.value = 1
            return True
        return False

    def complicate(self):
        return False


class Drops(Strategy):

    def new_value(self, runner):
        return Drop()


def test_unrepairable_filter_is_a_protocol_violation():
    case = Drops().filter('even', lambda v: v % 2 == 0).new_value(
        TestRunner(seed=0))
    assert case.current() == 2
    with pytest.raises(ShrinkProtocolViolation):
        case.simplify()


def test_protocol_violation_escapes_the_runner():
    runner = TestRunner(seed=0)
    with pytest.raises(ShrinkProtocolViolation):
        runner.run(
            Drops().filter('even', lambda v: v % 2 == 0), lambda v: False)


def test_filtered_counterexample_satisfies_filter():
    runner = TestRunner(seed=1)
    with pytest.raises(Falsified) as e:
        runner.run(
            integers(0, 1000).filter('%3', lambda v: v % 3 == 0),
            lambda v: v < 300)
    assert e.value.value % 3 == 0
    assert e.value.value >= 300
