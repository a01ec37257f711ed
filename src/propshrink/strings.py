"""Strategies for strings and byte strings matching a regular expression.

Every value generated is a full match for the pattern. Anchors, word
boundaries, backreferences and lookarounds can't be expressed as a
strategy of this sort and are rejected with UnsupportedRegex.
"""

from functools import lru_cache
import re

try:
    from re import _constants as sre, _parser as sre_parse
except ImportError:  # Python < 3.11
    import sre_constants as sre
    import sre_parse

from propshrink.primitives import code_points, lists, tuples
from propshrink.strategy import Just
from propshrink.union import union


class RegexError(ValueError):
    pass


class RegexSyntaxError(RegexError):
    pass


class UnsupportedRegex(RegexError):
    pass


# Cap on repetitions for * and +, which would otherwise be unbounded.
UNBOUNDED_REPEAT = 32

TEXT_UNIVERSE = ((0, 0xD7FF), (0xE000, 0x10FFFF))
BYTES_UNIVERSE = ((0, 255),)

# Categories as they match in bytes and ASCII patterns.
CATEGORIES = {
    sre.CATEGORY_DIGIT: ((48, 57),),
    sre.CATEGORY_SPACE: ((9, 13), (32, 32)),
    sre.CATEGORY_WORD: ((48, 57), (65, 90), (95, 95), (97, 122)),
}

# Categories as they match in unicode patterns. These are the tests the re
# module itself applies.
UNICODE_CATEGORIES = {
    sre.CATEGORY_DIGIT: str.isdecimal,
    sre.CATEGORY_SPACE: str.isspace,
    sre.CATEGORY_WORD: lambda c: c.isalnum() or c == '_',
}

NEGATED_CATEGORIES = {
    sre.CATEGORY_NOT_DIGIT: sre.CATEGORY_DIGIT,
    sre.CATEGORY_NOT_SPACE: sre.CATEGORY_SPACE,
    sre.CATEGORY_NOT_WORD: sre.CATEGORY_WORD,
}

REPEATS = tuple(
    getattr(sre, name) for name in (
        'MAX_REPEAT', 'MIN_REPEAT', 'POSSESSIVE_REPEAT')
    if hasattr(sre, name)
)

ATOMIC_GROUP = getattr(sre, 'ATOMIC_GROUP', None)


def string_regex(pattern):
    """Return a strategy for strings which fully match pattern."""
    if not isinstance(pattern, str):
        raise TypeError('Expected a str pattern but got %r' % (pattern,))
    return RegexCompiler(text=True).compile(pattern)


def bytes_regex(pattern):
    """Return a strategy for byte strings which fully match pattern.

    A str pattern is encoded as UTF-8 first.
    """
    if isinstance(pattern, str):
        pattern = pattern.encode('utf-8')
    return RegexCompiler(text=False).compile(pattern)


@lru_cache(maxsize=None)
def unicode_category(category):
    """Return the code points in category for a unicode pattern as sorted,
    disjoint ranges."""
    test = UNICODE_CATEGORIES[category]
    ranges = []
    for lo, hi in TEXT_UNIVERSE:
        for c in range(lo, hi + 1):
            if not test(chr(c)):
                continue
            if ranges and ranges[-1][1] == c - 1:
                ranges[-1] = (ranges[-1][0], c)
            else:
                ranges.append((c, c))
    return tuple(ranges)


def merge_ranges(ranges):
    result = []
    for start, end in sorted(ranges):
        if result and start <= result[-1][1] + 1:
            if end > result[-1][1]:
                result[-1] = (result[-1][0], end)
        else:
            result.append((start, end))
    return result


def complement_ranges(ranges, universe):
    ranges = merge_ranges(ranges)
    result = []
    for lo, hi in universe:
        cursor = lo
        for start, end in ranges:
            if end < cursor or start > hi:
                continue
            if start > cursor:
                result.append((cursor, start - 1))
            cursor = end + 1
            if cursor > hi:
                break
        if cursor <= hi:
            result.append((cursor, hi))
    return result


class RegexCompiler(object):

    def __init__(self, text):
        self.text = text
        if text:
            self.empty = ''
            self.universe = TEXT_UNIVERSE
        else:
            self.empty = b''
            self.universe = BYTES_UNIVERSE

    def fragment(self, code_point):
        if self.text:
            return chr(code_point)
        return bytes([code_point])

    def join(self, parts):
        return self.empty.join(parts)

    def is_unicode(self, flags):
        return self.text and not flags & sre.SRE_FLAG_ASCII

    def compile(self, pattern):
        try:
            parsed = sre_parse.parse(pattern)
        except re.error as e:
            raise RegexSyntaxError('Invalid regex %r: %s' % (pattern, e))
        return self.sequence(parsed, parsed.state.flags)

    def sequence(self, items, flags):
        parts = []
        run = []
        for op, av in items:
            if op == sre.LITERAL and not flags & sre.SRE_FLAG_IGNORECASE:
                run.append(self.fragment(av))
                continue
            if run:
                parts.append(Just(self.join(run)))
                run = []
            parts.append(self.node(op, av, flags))
        if run:
            parts.append(Just(self.join(run)))
        if not parts:
            return Just(self.empty)
        if len(parts) == 1:
            return parts[0]
        return tuples(*parts).map(self.join)

    def node(self, op, av, flags):
        if op == sre.LITERAL:
            return self.literal(av, flags)
        if op == sre.NOT_LITERAL:
            return self.char_class(
                [(sre.NEGATE, None), (sre.LITERAL, av)], flags)
        if op == sre.ANY:
            if flags & sre.SRE_FLAG_DOTALL:
                ranges = self.universe
            else:
                ranges = complement_ranges([(10, 10)], self.universe)
            return code_points(ranges).map(self.fragment)
        if op == sre.IN:
            return self.char_class(av, flags)
        if op == sre.SUBPATTERN:
            _, add_flags, del_flags, p = av
            return self.sequence(p, (flags | add_flags) & ~del_flags)
        if op == ATOMIC_GROUP:
            return self.sequence(av, flags)
        if op == sre.BRANCH:
            return union(*[self.sequence(b, flags) for b in av[1]])
        if op in REPEATS:
            min_repeat, max_repeat, p = av
            if max_repeat == sre.MAXREPEAT:
                if min_repeat <= 1:
                    max_repeat = UNBOUNDED_REPEAT
                else:
                    max_repeat = 2 * min_repeat - 1
            return lists(
                self.sequence(p, flags), min_repeat, max_repeat
            ).map(self.join)
        if op == sre.AT:
            if 'BOUNDARY' in _name(av):
                raise UnsupportedRegex(
                    'Word boundary tests are not supported for generation')
            raise UnsupportedRegex(
                'Line and text anchors are not supported for generation')
        raise UnsupportedRegex(
            '%s is not supported for generation' % (_name(op).lower(),))

    def literal(self, code_point, flags):
        fragment = self.fragment(code_point)
        if flags & sre.SRE_FLAG_IGNORECASE:
            swapped = fragment.swapcase()
            if (
                swapped != fragment and len(swapped) == 1 and
                swapped.lower() == fragment.lower()
            ):
                return union(Just(fragment), Just(swapped))
        return Just(fragment)

    def category(self, category, flags):
        if self.is_unicode(flags):
            lookup = unicode_category
        else:
            lookup = CATEGORIES.__getitem__
        if category in CATEGORIES:
            return list(lookup(category))
        if category in NEGATED_CATEGORIES:
            return complement_ranges(
                lookup(NEGATED_CATEGORIES[category]), self.universe)
        raise UnsupportedRegex('Unsupported category %s' % (category,))

    def char_class(self, items, flags):
        negate = False
        ranges = []
        for op, av in items:
            if op == sre.NEGATE:
                negate = True
            elif op == sre.LITERAL:
                ranges.append((av, av))
            elif op == sre.RANGE:
                ranges.append(tuple(av))
            elif op == sre.CATEGORY:
                ranges.extend(self.category(av, flags))
            else:
                raise UnsupportedRegex(
                    '%s is not supported in a character class' % (
                        _name(op).lower(),))
        if negate:
            if flags & sre.SRE_FLAG_IGNORECASE:
                raise UnsupportedRegex(
                    'Negated classes are not supported with IGNORECASE')
            ranges = complement_ranges(ranges, self.universe)
        ranges = merge_ranges(ranges)
        if not ranges:
            raise UnsupportedRegex('Character class can never match')
        return code_points(ranges).map(self.fragment)


def _name(constant):
    return getattr(constant, 'name', str(constant))
