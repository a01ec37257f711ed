from propshrink.errors import TooManyRejects
from propshrink.strategy import Strategy, ValueTree


WEIGHT_SCALE = 2 ** 32 - 1


def float_to_weight(probability):
    """Convert a probability into a pair of integer weights (p, 1 - p).

    Neither weight is ever zero, so neither side becomes unreachable.
    """
    if not (0.0 < probability < 1.0):
        raise ValueError('Invalid probability: %r' % (probability,))
    positive = max(1, int(probability * WEIGHT_SCALE))
    negative = max(1, WEIGHT_SCALE - positive)
    return positive, negative


def union(*strategies):
    """Pick uniformly between strategies, shrinking towards the first."""
    return Union([(1, s) for s in strategies])


def weighted_union(options):
    return Union(options)


class Union(Strategy):
    """Chooses one of several strategies with probability proportional to its
    weight.

    The first option is the preferred one: a value from any other option
    shrinks by switching to a freshly drawn value from the first.
    """

    def __init__(self, options):
        options = tuple((w, s) for w, s in options)
        if not options:
            raise ValueError('Cannot take the union of no strategies')
        for weight, _ in options:
            if weight < 0:
                raise ValueError('Negative weight %r in union' % (weight,))
        self.total_weight = sum(w for w, _ in options)
        if self.total_weight <= 0:
            raise ValueError('Union has no option with a positive weight')
        self.options = options

    def or_(self, other):
        return Union(self.options + ((1, other),))

    def pick(self, random):
        n = random.randrange(self.total_weight)
        for i, (weight, _) in enumerate(self.options):
            if n < weight:
                return i
            n -= weight
        assert False, 'Unreachable: weights sum to %d' % (self.total_weight,)

    def new_value(self, runner):
        branch = self.pick(runner.random)
        current = self.options[branch][1].new_value(runner)
        if branch == 0 or self.options[0][0] == 0:
            return UnionValueTree(self, branch, current)
        return UnionValueTree(
            self, branch, current, runner=runner.partial_clone())

    def __repr__(self):
        return 'Union(%r)' % (list(self.options),)


class UnionValueTree(ValueTree):

    def __init__(self, union, branch, current, runner=None):
        self.union = union
        self.branch = branch
        self.current_tree = current
        # Only set when there is still a switch to the first option to try.
        self.__runner = runner
        self.__final_complication = None

    def current(self):
        return self.current_tree.current()

    def simplify(self):
        self.__final_complication = None
        if self.__runner is not None:
            runner = self.__runner
            self.__runner = None
            try:
                preferred = self.union.options[0][1].new_value(runner)
            except TooManyRejects:
                runner.debug(
                    'Could not draw from the preferred branch of %r' % (
                        self.union,))
            else:
                self.__final_complication = (self.branch, self.current_tree)
                self.branch = 0
                self.current_tree = preferred
                return True
        return self.current_tree.simplify()

    def complicate(self):
        if self.__final_complication is not None:
            self.branch, self.current_tree = self.__final_complication
            self.__final_complication = None
            return True
        return self.current_tree.complicate()
