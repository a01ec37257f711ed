from propshrink.errors import (
    Aborted, Fail, Falsified, Reject, ShrinkProtocolViolation, TestCaseError,
    TestError, TooManyRejects, assume, reject,
)
from propshrink.filter import Filter
from propshrink.flatten import Flatten, IndFlatten, IndFlattenMap
from propshrink.primitives import (
    binary, booleans, byte_values, characters, code_points, integers, lists,
    tuples,
)
from propshrink.result import (
    Err, Ok, maybe_err, maybe_err_weighted, maybe_ok, maybe_ok_weighted,
)
from propshrink.runner import Config, TestRunner, Volume, config_from_environ
from propshrink.strategy import Just, Strategy, ValueTree
from propshrink.strings import (
    RegexError, RegexSyntaxError, UnsupportedRegex, bytes_regex, string_regex,
)
from propshrink.union import Union, float_to_weight, union, weighted_union

__all__ = [
    'Aborted', 'Config', 'Err', 'Fail', 'Falsified', 'Filter', 'Flatten',
    'IndFlatten', 'IndFlattenMap', 'Just', 'Ok', 'RegexError',
    'RegexSyntaxError', 'Reject', 'ShrinkProtocolViolation', 'Strategy',
    'TestCaseError', 'TestError', 'TestRunner', 'TooManyRejects', 'Union',
    'UnsupportedRegex', 'ValueTree', 'Volume', 'assume', 'binary',
    'booleans', 'byte_values', 'bytes_regex', 'characters', 'code_points',
    'config_from_environ', 'float_to_weight', 'integers', 'lists',
    'maybe_err', 'maybe_err_weighted', 'maybe_ok', 'maybe_ok_weighted',
    'reject', 'string_regex', 'tuples', 'union', 'weighted_union',
]
