"""
pennant.tokenizer
~~~~~~~~~~~~~~~~~

Adapter between raw argument tokens and the option model.

The actual splitting of tokens into option occurrences is delegated to the
standard library's GNU-style getopt (getopt.gnu_getopt): '-n value', '-nvalue',
'--name value', '--name=value', bundled short flags, unique long-prefix
abbreviations, '--' as terminator, and free operands interleaved with options.

What this module adds on top
- Shape: the primitive per-option form the adapter understands.
- tokenize(): run getopt for a sequence of shapes and collect a Matches.
- Matches: presence / first value / all values by long name, plus free operands.
- Every getopt failure, and a non-repeatable option given twice, is raised as
  ArgumentSyntaxError scoped "parse".

Requiredness is carried by Shape for completeness but is not enforced here; the
resolution engine decides what a missing value means.

Environment
- getopt.gnu_getopt honours POSIXLY_CORRECT: when that variable is set, option
  processing stops at the first free operand, so ["input.txt", "-f"] leaves -f
  as an operand instead of matching it.
"""
import getopt
import os
from collections import defaultdict
from types import MappingProxyType
from typing import NamedTuple

from .faults import SCOPE_PARSE, ArgumentSyntaxError


class Shape(NamedTuple):
    short: str
    long: str
    takes_value: bool
    multi: bool
    required: bool


class Matches:
    """
    Occurrences of registered options found in one token sequence.

    Values are kept in occurrence order. Lookups are by long name; unknown
    names simply read as absent.
    """

    def __init__(self, occurrences, free):
        self._occurrences = MappingProxyType({name: tuple(values) for name, values in occurrences.items()})
        self._free = tuple(free)

    @property
    def free(self):
        """
        Tokens that are not options nor option values, in order.
        """
        return self._free

    def present(self, long, /):
        return long in self._occurrences

    def count(self, long, /):
        return len(self._occurrences.get(long, ()))

    def value(self, long, /):
        """
        First value given for the option, or None.
        """
        values = self._occurrences.get(long, ())
        return values[0] if values else None

    def values(self, long, /):
        """
        Every value given for the option, in occurrence order.
        """
        return list(self._occurrences.get(long, ()))

    def __repr__(self):
        return "Matches(%s, free=%r)" % (dict(self._occurrences), list(self._free))


def _signature(shapes):
    """
    Build getopt's short-option string, long-option list and a reverse lookup
    from the spelled option ('-o' / '--option') to the shape.

    A short letter claimed by several shapes belongs to the first one.
    """
    shortopts = []
    longopts = []
    lookup = {}
    for shape in shapes:
        if shape.short and "-" + shape.short not in lookup:
            shortopts.append(shape.short + (":" if shape.takes_value else ""))
            lookup["-" + shape.short] = shape
        longopts.append(shape.long + ("=" if shape.takes_value else ""))
        lookup["--" + shape.long] = shape
    return "".join(shortopts), longopts, lookup


def tokenize(raw_args, shapes, /):
    """
    Match raw tokens against option shapes.

    parameters
    - raw_args: iterable of str, bytes or os.PathLike tokens, without the program
      name; bytes and paths are decoded with os.fsdecode.
    - shapes: iterable of Shape, in registration order.

    returns
    - Matches

    raises
    - ArgumentSyntaxError: unknown option, missing value, value given to a flag,
      ambiguous long prefix, or a non-repeatable option given more than once.
    """
    shapes = tuple(shapes)
    shortopts, longopts, lookup = _signature(shapes)
    tokens = [os.fsdecode(token) for token in raw_args]

    try:
        pairs, free = getopt.gnu_getopt(tokens, shortopts, longopts)
    except getopt.GetoptError as error:
        raise ArgumentSyntaxError(
            error.msg,
            scope=SCOPE_PARSE,
            option=error.opt,
            tokens=tuple(tokens),
        ) from None

    occurrences = defaultdict(list)
    for spelled, value in pairs:
        shape = lookup[spelled]
        if occurrences[shape.long] and not shape.multi:
            raise ArgumentSyntaxError(
                "option '%s' given more than once" % shape.long,
                scope=SCOPE_PARSE,
                option=shape.long,
                tokens=tuple(tokens),
            )
        occurrences[shape.long].append(value)

    return Matches(occurrences, free)


__all__ = (
    "Shape",
    "Matches",
    "tokenize",
)
