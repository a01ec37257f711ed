from hypothesis import given, strategies as st
import pytest

from propshrink import (
    Just, TestRunner, binary, booleans, characters, code_points, integers,
    lists, tuples,
)
from propshrink.primitives import BinarySearch


seeds = st.integers(0, 2 ** 64 - 1)


@given(seeds, st.integers(-1000, 1000), st.integers(0, 1000))
def test_integers_stay_in_range_and_shrink_to_target(seed, lo, width):
    hi = lo + width
    case = integers(lo, hi).new_value(TestRunner(seed=seed))
    assert lo <= case.current() <= hi
    steps = 0
    while case.simplify():
        steps += 1
        assert lo <= case.current() <= hi
    if lo <= 0 <= hi:
        assert case.current() == 0
    elif lo > 0:
        assert case.current() == lo
    else:
        assert case.current() == hi
    # Plain bisection: never more steps than bits in the distance.
    assert steps <= width.bit_length() + abs(lo).bit_length() + 1


@given(st.integers(-10 ** 6, 10 ** 6), st.integers(-10 ** 6, 10 ** 6))
def test_complicate_lands_between_before_and_after(target, start):
    tree = BinarySearch(target, start)
    before = abs(tree.current() - target)
    if tree.simplify():
        after = abs(tree.current() - target)
        assert after < before
        if tree.complicate():
            between = abs(tree.current() - target)
            assert after < between <= before


def test_complicate_without_simplify_changes_nothing():
    tree = BinarySearch(0, 100)
    assert not tree.complicate()
    assert tree.current() == 100
    assert tree.simplify()
    assert tree.current() == 50


def test_invalid_integer_range():
    with pytest.raises(ValueError):
        integers(1, 0)


def test_booleans_shrink_to_false_and_back():
    runner = TestRunner(seed=0)
    case = booleans().new_value(runner)
    while not case.current():
        case = booleans().new_value(runner)
    assert case.simplify()
    assert case.current() is False
    assert not case.simplify()
    assert case.complicate()
    assert case.current() is True
    assert not case.complicate()


@given(seeds)
def test_lists_respect_size_bounds(seed):
    case = lists(integers(0, 10), min_size=2, max_size=5).new_value(
        TestRunner(seed=seed))
    assert 2 <= len(case.current()) <= 5
    while case.simplify():
        assert 2 <= len(case.current()) <= 5
    assert case.current() == [0, 0]


def test_list_shrinks_by_deleting_first():
    runner = TestRunner(seed=0)
    case = lists(integers(1, 9), min_size=1, max_size=8).new_value(runner)
    while len(case.current()) < 2:
        case = lists(integers(1, 9), min_size=1, max_size=8).new_value(runner)
    original = case.current()
    assert case.simplify()
    assert case.current() == original[1:]
    assert case.complicate()
    assert case.current() == original


def test_invalid_list_sizes():
    with pytest.raises(ValueError):
        lists(Just(1), min_size=3, max_size=2)
    with pytest.raises(ValueError):
        lists(Just(1), min_size=-1, max_size=2)


@given(seeds)
def test_tuples_shrink_elementwise(seed):
    case = tuples(integers(0, 100), booleans(), Just('x')).new_value(
        TestRunner(seed=seed))
    while case.simplify():
        pass
    assert case.current() == (0, False, 'x')


def test_tuple_complicate_only_undoes_last_element():
    strategy = tuples(integers(0, 100), integers(0, 100))
    runner = TestRunner(seed=0)
    case = strategy.new_value(runner)
    while case.current()[0] == 0:
        case = strategy.new_value(runner)
    a, b = case.current()
    assert case.simplify()
    assert case.current() == (a // 2, b)
    assert case.complicate()
    assert case.current()[1] == b
    assert a // 2 < case.current()[0] <= a


@given(seeds)
def test_binary(seed):
    case = binary(min_size=1, max_size=4).new_value(TestRunner(seed=seed))
    assert isinstance(case.current(), bytes)
    assert 1 <= len(case.current()) <= 4
    while case.simplify():
        pass
    assert case.current() == b'\x00'


@given(seeds)
def test_characters_come_from_ranges(seed):
    ranges = [(ord('a'), ord('f')), (ord('0'), ord('3'))]
    case = characters(ranges).new_value(TestRunner(seed=seed))
    assert case.current() in 'abcdef0123'
    while case.simplify():
        assert case.current() in 'abcdef0123'
    assert case.current() == 'a'


def test_single_code_point_is_constant():
    case = code_points([(65, 65)]).new_value(TestRunner(seed=0))
    assert case.current() == 65
    assert not case.simplify()


def test_code_points_need_ranges():
    with pytest.raises(ValueError):
        code_points([])
    with pytest.raises(ValueError):
        code_points([(5, 1), (1, 2)])


def test_no_shrink_never_moves():
    case = integers(0, 100).no_shrink().new_value(TestRunner(seed=0))
    value = case.current()
    assert not case.simplify()
    assert not case.complicate()
    assert case.current() == value
