"""The two halves of the generation engine.

A Strategy is an immutable description of some space of values. Asking it
for a new value gives back a ValueTree, which is a mutable object holding one
concrete value together with enough state to walk it towards simpler values
(simplify) and back again (complicate).

Strategies never consume randomness or hold mutable state except when
new_value is called, so a single strategy may be shared freely, including
between runners in different threads.
"""


class ValueTree(object):

    def current(self):
        """Return the value this tree currently represents.

        Repeated calls without an intervening simplify or complicate return
        the same value.
        """
        raise NotImplementedError()

    def simplify(self):
        """Try to move to a simpler value.

        Returns False if no simpler value is reachable from here.
        """
        raise NotImplementedError()

    def complicate(self):
        """Partially undo the most recent successful simplify.

        Returns False if there is nothing left to undo.
        """
        raise NotImplementedError()

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.current())


class Strategy(object):

    def new_value(self, runner):
        """Draw a fresh ValueTree using runner's randomness and budgets.

        May raise TooManyRejects if the runner's reject budget runs out.
        """
        raise NotImplementedError()

    def map(self, fun):
        return Map(self, fun)

    def filter(self, whence, fun):
        """Only produce values for which fun returns a true value.

        whence is a description of the filter that is reported when too many
        values get rejected.
        """
        from propshrink.filter import Filter
        return Filter(self, whence, fun)

    def flatten(self):
        from propshrink.flatten import Flatten
        return Flatten(self)

    def flat_map(self, fun):
        """Use each value of this strategy to pick a strategy to draw from.

        Both the value from this strategy and the value drawn from the
        strategy fun returns for it are shrunk.
        """
        return self.map(fun).flatten()

    def ind_flat_map(self, fun):
        """Like flat_map, but the value from this strategy is never shrunk."""
        from propshrink.flatten import IndFlatten
        return IndFlatten(self.map(fun))

    def ind_flat_map2(self, fun):
        """Like ind_flat_map, but produces (value, inner_value) pairs.

        Both halves shrink, but independently of each other.
        """
        from propshrink.flatten import IndFlattenMap
        return IndFlattenMap(self, fun)

    def no_shrink(self):
        return NoShrink(self)

    def __or__(self, other):
        if not isinstance(other, Strategy):
            raise ValueError('Cannot | a Strategy with %r' % (other,))
        from propshrink.union import Union
        return Union([(1, self), (1, other)])


class Just(Strategy):
    """A strategy which always produces the same value."""

    def __init__(self, value):
        self.value = value

    def new_value(self, runner):
        return JustValueTree(self.value)

    def __repr__(self):
        return 'Just(%r)' % (self.value,)


class JustValueTree(ValueTree):

    def __init__(self, value):
        self.__value = value

    def current(self):
        return self.__value

    def simplify(self):
        return False

    def complicate(self):
        return False


class Map(Strategy):

    def __init__(self, source, fun):
        self.source = source
        self.fun = fun

    def new_value(self, runner):
        return MapValueTree(self.source.new_value(runner), self.fun)

    def __repr__(self):
        return 'Map(%r, %s)' % (
            self.source, getattr(self.fun, '__name__', '<function>'))


class MapValueTree(ValueTree):

    def __init__(self, source, fun):
        self.source = source
        self.fun = fun

    def current(self):
        # Rebuilt on every read, so callers are free to mutate what they get.
        return self.fun(self.source.current())

    def simplify(self):
        return self.source.simplify()

    def complicate(self):
        return self.source.complicate()


class NoShrink(Strategy):

    def __init__(self, source):
        self.source = source

    def new_value(self, runner):
        return NoShrinkValueTree(self.source.new_value(runner))


class NoShrinkValueTree(ValueTree):

    def __init__(self, source):
        self.source = source

    def current(self):
        return self.source.current()

    def simplify(self):
        return False

    def complicate(self):
        return False
