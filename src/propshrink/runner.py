from collections import namedtuple
from enum import IntEnum
from random import Random, SystemRandom
import os

from propshrink.errors import Fail, Falsified, Reject, TooManyRejects


class Volume(IntEnum):
    quiet = 0
    normal = 1
    debug = 2


Config = namedtuple('Config', [
    'cases', 'max_local_rejects', 'max_global_rejects',
    'max_flat_map_regens', 'max_shrink_iters',
])
Config.__new__.__defaults__ = (256, 65536, 1024, 1000000, None)
Config.__doc__ = """Budgets that bound the work a TestRunner will do.

* cases: number of passing cases required for a run to pass.
* max_local_rejects: rejections allowed while building a single case
  (e.g. by filters) before giving up on the run.
* max_global_rejects: cases the test itself may reject over the whole run.
* max_flat_map_regens: regenerations flat_map trees may spend, across the
  whole run, looking for new failing values after a shrink changed which
  strategy they draw from.
* max_shrink_iters: test invocations allowed while shrinking. None means no
  limit.
"""


ENVIRON_PREFIX = 'PROPSHRINK_'


def config_from_environ(environ=None, base=None):
    """Return base (or the default Config) with any PROPSHRINK_* overrides
    from environ applied."""
    if environ is None:
        environ = os.environ
    config = base or Config()
    overrides = {}
    for field in Config._fields:
        name = ENVIRON_PREFIX + field.upper()
        if name not in environ:
            continue
        try:
            overrides[field] = int(environ[name])
        except ValueError:
            raise ValueError(
                'Expected an integer for %s but got %r' % (
                    name, environ[name]))
    return config._replace(**overrides)


class _Counter(object):
    """A count shared between a runner and all of its partial clones."""

    def __init__(self):
        self.value = 0


class TestRunner(object):
    """Owns the randomness and the budgets for a single run.

    A runner is threaded through every call to Strategy.new_value, so two
    runs never share any mutable state unless they share a runner.
    """

    __test__ = False

    def __init__(
        self, config=None, *, seed=None, volume=Volume.quiet, printer=None
    ):
        self.config = config or Config()
        if seed is None:
            seed = SystemRandom().getrandbits(64)
        self.seed = seed
        self.random = Random(seed)
        self.successes = 0
        self.local_rejects = 0
        self.global_rejects = 0
        self.__flat_map_regens = _Counter()
        self.__volume = volume
        self.__printer = printer or (lambda s: None)

    def output(self, text):
        if self.__volume >= Volume.normal:
            self.__printer(text)

    def debug(self, text):
        if self.__volume >= Volume.debug:
            self.__printer(text)

    @property
    def flat_map_regens(self):
        return self.__flat_map_regens.value

    def partial_clone(self):
        """Return a runner suitable for generating values later on.

        The clone gets its own random stream, seeded from this one so that
        replaying a seed replays the clone too, and its own reject counts.
        The flat_map regeneration count is shared, making that budget global
        to the run.
        """
        clone = TestRunner(
            self.config, seed=self.random.getrandbits(64),
            volume=self.__volume, printer=self.__printer,
        )
        clone.__flat_map_regens = self.__flat_map_regens
        return clone

    def reject_local(self, whence):
        if self.local_rejects >= self.config.max_local_rejects:
            raise TooManyRejects(
                'Too many local rejects (last: %s)' % (whence,))
        self.local_rejects += 1

    def reject_global(self, whence):
        if self.global_rejects >= self.config.max_global_rejects:
            raise TooManyRejects(
                'Too many global rejects (last: %s)' % (whence,))
        self.global_rejects += 1

    def flat_map_regen(self):
        """Claim one regeneration from the run-wide budget.

        Returns False, without counting anything, once it is used up.
        """
        if self.__flat_map_regens.value >= self.config.max_flat_map_regens:
            return False
        self.__flat_map_regens.value += 1
        return True

    def run(self, strategy, test):
        """Run test against values from strategy until config.cases pass.

        Raises Falsified with a shrunk counterexample if the test fails, and
        TooManyRejects if the reject budgets run out first. The case and
        reject counts start afresh on every call.
        """
        self.successes = 0
        self.global_rejects = 0
        while self.successes < self.config.cases:
            self.local_rejects = 0
            case = strategy.new_value(self)
            if self.run_one(case, test):
                self.successes += 1
        self.debug('Passed %d cases' % (self.successes,))

    def run_one(self, case, test):
        """Run a single case, shrinking it if it fails.

        Returns True if the case passed and False if the test rejected it.
        """
        # The test may mutate what it is given, so every report reads a
        # fresh value from the tree.
        try:
            check(test, case.current())
            return True
        except Reject as e:
            self.debug('Rejected %r: %s' % (case.current(), e.reason))
            self.reject_global(e.reason)
            return False
        except Fail as e:
            reason = e.reason

        value = case.current()
        self.output('Found failing input %r: %s' % (value, reason))
        reason, value = self.shrink(case, test, reason, value)
        self.output('Falsifying example: %r (seed %r)' % (value, self.seed))
        raise Falsified(reason, value, self.seed)

    def shrink(self, case, test, reason, value):
        """Search for a locally minimal failing value reachable from case.

        Alternates simplify after a failure with complicate after a pass until
        the tree can simplify no further, returning the last failing
        (reason, value) seen.
        """
        iterations = 0
        limit = self.config.max_shrink_iters
        if not case.simplify():
            return reason, value
        while limit is None or iterations < limit:
            iterations += 1
            try:
                check(test, case.current())
                passed = True
            except Reject:
                passed = True
            except Fail as e:
                passed = False
                reason, value = e.reason, case.current()
                self.debug('Shrink %d: still fails with %r' % (
                    iterations, value))

            if passed:
                if not case.complicate():
                    break
            elif not case.simplify():
                break
        else:
            self.debug('Stopped shrinking after %d iterations' % (limit,))
        return reason, value


def check(test, value):
    """Call test on value, turning any failure it signals into Fail."""
    try:
        result = test(value)
    except (Fail, Reject):
        raise
    except Exception as e:
        raise Fail('%s: %s' % (type(e).__name__, e))
    if result is False:
        raise Fail('returned False')
