"""Strategies for values that are either a success or a failure.

There are two nearly identical families here, differing only in which way
they shrink. maybe_ok treats Ok as the special case and shrinks towards Err;
maybe_err treats Err as the special case and shrinks towards Ok. If the code
under test bails out immediately on an error then maybe_ok is usually the
better fit, as shrinking pushes it down the simpler path. Code with a
complicated recovery path is usually better tested with maybe_err.
"""

from propshrink.union import Union, float_to_weight


class Outcome(object):
    __slots__ = ('value',)

    def __init__(self, value):
        self.value = value

    def is_ok(self):
        return isinstance(self, Ok)

    def is_err(self):
        return isinstance(self, Err)

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    def __ne__(self, other):
        return not (self == other)

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __repr__(self):
        return '%s(%r)' % (type(self).__name__, self.value)


class Ok(Outcome):
    __slots__ = ()


class Err(Outcome):
    __slots__ = ()


def maybe_ok(ok, err):
    """Ok values from ok and Err values from err, with equal probability.

    Shrinks to Err.
    """
    return maybe_ok_weighted(0.5, ok, err)


def maybe_ok_weighted(probability_of_ok, ok, err):
    ok_weight, err_weight = float_to_weight(probability_of_ok)
    return Union([
        (err_weight, err.map(Err)),
        (ok_weight, ok.map(Ok)),
    ])


def maybe_err(ok, err):
    """Ok values from ok and Err values from err, with equal probability.

    Shrinks to Ok.
    """
    return maybe_err_weighted(0.5, ok, err)


def maybe_err_weighted(probability_of_err, ok, err):
    err_weight, ok_weight = float_to_weight(probability_of_err)
    return Union([
        (ok_weight, ok.map(Ok)),
        (err_weight, err.map(Err)),
    ])
