class TestCaseError(Exception):
    """Raised from inside a test to say something about a single case."""

    __test__ = False

    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason


class Fail(TestCaseError):
    """The case falsified the property. Drives shrinking."""


class Reject(TestCaseError):
    """The case is not a valid input and should be discarded."""


def reject(reason='rejected'):
    raise Reject(reason)


def assume(condition, reason='assumption failed'):
    if not condition:
        raise Reject(reason)
    return True


class TestError(Exception):
    """Base class for the ways in which a whole run can end badly."""

    __test__ = False


class Falsified(TestError):

    def __init__(self, reason, value, seed):
        super().__init__(
            'Test failed: %s; minimal failing input: %r (seed %r)' % (
                reason, value, seed))
        self.reason = reason
        self.value = value
        self.seed = seed


class Aborted(TestError):

    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason


class TooManyRejects(Aborted):
    pass


class ShrinkProtocolViolation(Exception):
    """A value tree broke a promise its strategy made about its values.

    This is a bug in how strategies were put together rather than anything
    about the data, so the runner never catches it.
    """
