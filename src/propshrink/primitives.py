from propshrink.strategy import Just, Strategy, ValueTree
from propshrink.union import Union


DEFAULT_MAX_SIZE = 32


class BinarySearch(ValueTree):
    """Binary search for the simplest value between target and some start.

    Values are tracked as a distance from target in the direction of the
    start value, so the same search works for either side of target.
    """

    def __init__(self, target, start):
        self.target = target
        self.sign = -1 if start < target else 1
        self.lo = 0
        self.curr = abs(start - target)
        self.hi = self.curr

    def current(self):
        return self.target + self.sign * self.curr

    def __reposition(self):
        mid = self.lo + (self.hi - self.lo) // 2
        if mid == self.curr:
            return False
        self.curr = mid
        return True

    def simplify(self):
        if self.hi <= self.lo:
            return False
        self.hi = self.curr
        return self.__reposition()

    def complicate(self):
        if self.hi <= self.lo or self.curr >= self.hi:
            return False
        self.lo = self.curr + 1
        return self.__reposition()


class Integers(Strategy):
    """Integers between min_value and max_value inclusive.

    Shrinks towards zero if it is in range, else towards whichever bound is
    closer to it.
    """

    def __init__(self, min_value, max_value):
        if min_value > max_value:
            raise ValueError('Invalid range [%d, %d]' % (min_value, max_value))
        self.min_value = min_value
        self.max_value = max_value
        if min_value > 0:
            self.target = min_value
        elif max_value < 0:
            self.target = max_value
        else:
            self.target = 0

    def new_value(self, runner):
        start = runner.random.randint(self.min_value, self.max_value)
        return BinarySearch(self.target, start)

    def __repr__(self):
        return 'integers(%d, %d)' % (self.min_value, self.max_value)


def integers(min_value, max_value):
    return Integers(min_value, max_value)


class BoolValueTree(ValueTree):

    def __init__(self, value):
        self.value = value
        self.shrunk = False

    def current(self):
        return self.value

    def simplify(self):
        if self.value:
            self.value = False
            self.shrunk = True
            return True
        return False

    def complicate(self):
        if self.shrunk:
            self.value = True
            self.shrunk = False
            return True
        return False


class Booleans(Strategy):

    def new_value(self, runner):
        return BoolValueTree(runner.random.random() < 0.5)

    def __repr__(self):
        return 'booleans()'


def booleans():
    return Booleans()


class TupleValueTree(ValueTree):
    """Shrinks each element in turn, left to right."""

    def __init__(self, elements):
        self.elements = list(elements)
        self.shrinker = 0
        self.prev_shrinker = None

    def current(self):
        return tuple(e.current() for e in self.elements)

    def simplify(self):
        while self.shrinker < len(self.elements):
            if self.elements[self.shrinker].simplify():
                self.prev_shrinker = self.shrinker
                return True
            self.shrinker += 1
        self.prev_shrinker = None
        return False

    def complicate(self):
        if self.prev_shrinker is None:
            return False
        if self.elements[self.prev_shrinker].complicate():
            return True
        self.prev_shrinker = None
        return False


class Tuples(Strategy):

    def __init__(self, strategies):
        self.strategies = tuple(strategies)

    def new_value(self, runner):
        return TupleValueTree(s.new_value(runner) for s in self.strategies)

    def __repr__(self):
        return 'tuples(%s)' % (', '.join(map(repr, self.strategies)),)


def tuples(*strategies):
    return Tuples(strategies)


DELETE = 'delete'
SHRINK = 'shrink'


class ListValueTree(ValueTree):
    """Shrinks first by deleting elements, then by shrinking those left."""

    def __init__(self, elements, min_size):
        self.elements = elements
        self.included = [True] * len(elements)
        self.min_size = min_size
        self.shrink = (DELETE, 0)
        self.prev_shrink = None

    def current(self):
        return [
            e.current() for e, i in zip(self.elements, self.included) if i]

    def simplify(self):
        while True:
            kind, ix = self.shrink
            if kind == DELETE:
                if (
                    ix >= len(self.elements) or
                    sum(self.included) <= self.min_size
                ):
                    self.shrink = (SHRINK, 0)
                    continue
                self.included[ix] = False
                self.prev_shrink = self.shrink
                self.shrink = (DELETE, ix + 1)
                return True
            if ix >= len(self.elements):
                self.prev_shrink = None
                return False
            if self.included[ix] and self.elements[ix].simplify():
                self.prev_shrink = self.shrink
                return True
            self.shrink = (SHRINK, ix + 1)

    def complicate(self):
        if self.prev_shrink is None:
            return False
        kind, ix = self.prev_shrink
        if kind == DELETE:
            self.included[ix] = True
            self.prev_shrink = None
            return True
        if self.elements[ix].complicate():
            return True
        self.prev_shrink = None
        return False


class Lists(Strategy):

    def __init__(self, elements, min_size, max_size):
        if min_size < 0 or max_size < min_size:
            raise ValueError('Invalid size range [%d, %d]' % (
                min_size, max_size))
        self.elements = elements
        self.min_size = min_size
        self.max_size = max_size

    def new_value(self, runner):
        size = runner.random.randint(self.min_size, self.max_size)
        return ListValueTree(
            [self.elements.new_value(runner) for _ in range(size)],
            self.min_size)

    def __repr__(self):
        return 'lists(%r, min_size=%d, max_size=%d)' % (
            self.elements, self.min_size, self.max_size)


def lists(elements, min_size=0, max_size=DEFAULT_MAX_SIZE):
    return Lists(elements, min_size, max_size)


def byte_values():
    return integers(0, 255)


def binary(min_size=0, max_size=DEFAULT_MAX_SIZE):
    return lists(byte_values(), min_size, max_size).map(bytes)


def code_points(ranges):
    """Integers from one of ranges, a sequence of inclusive (start, end)
    pairs.

    Each range is equally likely to be picked. Shrinks towards the start of
    the first range.
    """
    ranges = [(start, end) for start, end in ranges]
    if not ranges:
        raise ValueError('Cannot draw from an empty set of ranges')
    if len(ranges) == 1 and ranges[0][0] == ranges[0][1]:
        return Just(ranges[0][0])
    return Union([(1, _offsets(start, end)) for start, end in ranges])


def _offsets(start, end):
    # Shrink towards the start of the range rather than towards zero, which
    # may not be in a sensible place at all.
    if start > end:
        raise ValueError('Invalid range [%d, %d]' % (start, end))
    return integers(0, end - start).map(lambda i: start + i)


def characters(ranges):
    return code_points(ranges).map(chr)
