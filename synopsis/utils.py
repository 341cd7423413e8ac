"""
Synopsis utilities (sentinels and small helpers)

Scope
- Building blocks shared by the schema compiler, the input lexer and the binder.

Overview
- UnsetType / Unset
  • Singleton sentinel for "parameter not provided" in the public API (for example,
    evaluate() reading sys.argv when no argument vector is given).
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- NoValueType / NoValue
  • Singleton sentinel bound to a value-bearing flag that was given without its
    optional value (schema "[-f[=val]]", input "-f").
  • Truthy: the flag *was* given. Distinct from None (flag absent) and from ""
    (flag given with an empty value), and never equal to any string.

- ordinal(number)
  • Human-friendly ordinal used by fault hints ("first", "second", "11th", ...).

- printable(text)
  • Escapes control characters so quoted excerpts keep messages single-line.

Quick examples
    >>> NoValue is NoValueType()
    True
    >>> bool(NoValue), NoValue == "(no value)"
    (True, False)
    >>> ordinal(3), ordinal(12), ordinal(22)
    ('third', '12th', '22nd')
"""
import functools
from typing import final

from rich.text import Text


@final
class UnsetType:
    """
    Internal sentinel type representing a parameter that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


@final
class NoValueType:
    """
    Sentinel type for "the flag was given, its optional value was not".

    Binding rules that produce it
    - schema declares an optional value: "-f[=val]" or "[-f[=val]]"
    - the argument vector carries the flag without '=': "-f"

    Characteristics
    - Truthy: `if value:` reads as "the flag is set".
    - Identity is the only equality: NoValue != "" and NoValue != "(no value)".
    - Singleton per process; copy, deepcopy and pickle preserve identity.
    - Non-subclassable.
    """

    __slots__ = ()

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return True

    def __repr__(self):
        return "(no value)"

    def __rich__(self):
        return Text.assemble(("(", "yellow"), ("no value", "cyan"), (")", "yellow"))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return type(self), ()

    def __init_subclass__(cls, **options):
        raise TypeError("type 'NoValueType' is not an acceptable base type")


def printable(text, /):
    """
    Return `text` with control characters (newlines, tabs, ...) written as their
    backslash escapes, so excerpts quoted in fault messages stay on one line.
    """
    return "".join(char if char.isprintable() else repr(char)[1:-1] for char in text)


@functools.cache  # Memoize to avoid recomputing common ordinals in hints
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    if not isinstance(number, int) or isinstance(number, bool):
        raise TypeError("ordinal() argument must be an integer")
    if number < 1:
        raise ValueError("ordinal() argument must be a positive integer")

    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


Unset = UnsetType()
"""
Singleton for "not provided". Use as a default when None is meaningful.
"""

NoValue = NoValueType()
"""
Singleton bound to a flag given without its optional value.
"""


__all__ = (
    # Functions
    "ordinal",
    "printable",

    # Types
    "UnsetType",
    "NoValueType",

    # Constants
    "Unset",
    "NoValue",
)
