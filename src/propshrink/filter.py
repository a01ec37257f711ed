from propshrink.errors import ShrinkProtocolViolation
from propshrink.strategy import Strategy, ValueTree


class Filter(Strategy):
    """Rejection sampling on top of another strategy.

    Every value a FilterValueTree ever exposes satisfies fun, including all
    the values passed through while shrinking.
    """

    def __init__(self, source, whence, fun):
        self.source = source
        self.whence = whence
        self.fun = fun

    def new_value(self, runner):
        while True:
            value = self.source.new_value(runner)
            if self.fun(value.current()):
                return FilterValueTree(value, self.whence, self.fun)
            runner.reject_local(self.whence)

    def __repr__(self):
        return 'Filter(%r, %r)' % (self.source, self.whence)


class FilterValueTree(ValueTree):

    def __init__(self, source, whence, fun):
        self.source = source
        self.whence = whence
        self.fun = fun

    def current(self):
        return self.source.current()

    def simplify(self):
        if self.source.simplify():
            self.__ensure_acceptable()
            return True
        return False

    def complicate(self):
        if self.source.complicate():
            self.__ensure_acceptable()
            return True
        return False

    def __ensure_acceptable(self):
        # Only ever complicate here: simplifying further could walk off
        # into a region with no acceptable values at all.
        while not self.fun(self.source.current()):
            if not self.source.complicate():
                raise ShrinkProtocolViolation(
                    'Unable to complicate %r back into a value accepted by '
                    'filter %r' % (self.source, self.whence))
