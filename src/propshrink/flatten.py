from propshrink.errors import TooManyRejects
from propshrink.primitives import TupleValueTree
from propshrink.strategy import Strategy, ValueTree


class Flatten(Strategy):
    """Takes a strategy whose values are strategies, and draws from those.

    The value chosen from the outer ("meta") strategy and the value drawn
    from the strategy it describes are both shrunk.
    """

    def __init__(self, source):
        self.source = source

    def new_value(self, runner):
        meta = self.source.new_value(runner)
        return FlattenValueTree(runner, meta)

    def __repr__(self):
        return 'Flatten(%r)' % (self.source,)


class FlattenValueTree(ValueTree):
    """Shrinks the inner value in place, then the meta value.

    Simplifying the meta value picks a different inner strategy, which throws
    away the specific failing inner value. complicate() then starts by
    blindly redrawing from the new inner strategy, up to config.cases times
    (and never beyond the run's max_flat_map_regens in total), in the hope of
    finding another failing value there. This departs from the simplify /
    complicate-as-binary-search picture, but only in the one place it has to.
    """

    def __init__(self, runner, meta):
        self.meta = meta
        self.current_tree = meta.current().new_value(runner)
        # What to go back to once every other way of complicating has been
        # exhausted: the inner tree from before the last meta simplify.
        self.final_complication = None
        self.runner = runner.partial_clone()
        self.regen_remaining = 0

    def current(self):
        return self.current_tree.current()

    def __redraw(self):
        try:
            return self.meta.current().new_value(self.runner)
        except TooManyRejects as e:
            self.runner.debug('Unable to redraw inner value: %s' % (e,))
            return None

    def simplify(self):
        self.regen_remaining = 0

        if self.current_tree.simplify():
            return True
        if not self.meta.simplify():
            return False
        tree = self.__redraw()
        if tree is None:
            return False
        self.final_complication = self.current_tree
        self.current_tree = tree
        self.regen_remaining = self.runner.config.cases
        return True

    def complicate(self):
        if self.regen_remaining > 0:
            if self.runner.flat_map_regen():
                self.regen_remaining -= 1
                tree = self.__redraw()
                if tree is not None:
                    self.current_tree = tree
                    return True
            else:
                self.regen_remaining = 0

        if self.current_tree.complicate():
            return True
        if self.meta.complicate():
            tree = self.__redraw()
            if tree is not None:
                self.current_tree = tree
                self.regen_remaining = self.runner.config.cases
                return True
        if self.final_complication is not None:
            self.current_tree = self.final_complication
            self.final_complication = None
            return True
        return False

    def __repr__(self):
        return 'FlattenValueTree(meta=%r, current=%r, regen_remaining=%d)' % (
            self.meta, self.current_tree, self.regen_remaining)


class IndFlatten(Strategy):
    """Like Flatten, but the meta value is fixed once drawn.

    The resulting value tree is just the inner strategy's tree.
    """

    def __init__(self, source):
        self.source = source

    def new_value(self, runner):
        meta = self.source.new_value(runner)
        return meta.current().new_value(runner)


class IndFlattenMap(Strategy):
    """Produces (value, inner_value) pairs, where inner_value is drawn from
    fun(value).

    The two halves shrink independently: shrinking value does not cause a
    new inner_value to be drawn.
    """

    def __init__(self, source, fun):
        self.source = source
        self.fun = fun

    def new_value(self, runner):
        left = self.source.new_value(runner)
        right = self.fun(left.current()).new_value(runner)
        return TupleValueTree((left, right))
