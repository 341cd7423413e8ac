"""
Synopsis faults (schema and input errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure the core can
  report. Codes are grouped by domain to keep logs/searches predictable.
- SynopsisException: base type that carries message + options and knows how to
  render itself (rich) in a friendly, actionable way.
- SchemaException family: the schema string itself is malformed. Always a
  programmer mistake, never a user condition.
- InputException family: the argument vector does not fit a well-formed schema.
  Expected, recoverable and user-facing.
- getdoc(): long-form help for a code, when the host application ships some.

Messages
- str(fault) is the single-line message, parameterized with the minimal context
  (expected/received token kind, offending excerpt, flag name).
- options carry the structured context (title, code, hint, input, excerpt, ...)
  used by renderers and by callers that want more than the text.

Integration
- The compiler and the matcher raise these; evaluate() turns them into Result data.
- Hosts may customise rendering from __main__ via __prog__, __styles__, __codes__
  and __docs__.
"""
import os.path
import sys
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, UnsetType


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - schema (2110x)
      • SCHEMA_LEXING, SCHEMA_PARSING, SCHEMA_ORDER, DUPLICATED_ALIAS
    - input shape (1111x)
      • AMBIGUOUS_ARGUMENT, MISSING_VALUE, UNEXPECTED_INPUT
    - flags (1112x)
      • UNKNOWN_FLAG, DUPLICATED_FLAG, UNEXPECTED_VALUE, MISSING_FLAG
    - positionals (1113x)
      • NOT_ENOUGH_POSITIONALS, TOO_MANY_POSITIONALS

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- schema errors (21xxx) ---
    SCHEMA_LEXING          = 21101
    SCHEMA_PARSING         = 21102
    SCHEMA_ORDER           = 21103
    DUPLICATED_ALIAS       = 21104

    # --- input shape errors (11xxx) ---
    AMBIGUOUS_ARGUMENT     = 11111
    MISSING_VALUE          = 11112
    UNEXPECTED_INPUT       = 11113

    # --- flag errors (11xxx) ---
    UNKNOWN_FLAG           = 11121
    DUPLICATED_FLAG        = 11122
    UNEXPECTED_VALUE       = 11123
    MISSING_FLAG           = 11124

    # --- positional errors (11xxx) ---
    NOT_ENOUGH_POSITIONALS = 11131
    TOO_MANY_POSITIONALS   = 11132

    def normalize(self):
        """
        the label shown for this code: `__main__.__codes__[self]` when the host
        defines it, the decimal value otherwise.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


# rendering roles → rich styles; __main__.__styles__ overrides per role
_PALETTE = MappingProxyType({
    "program": "bold white",
    "code": "bold cyan",
    "title": "bold magenta",
    "message": "default",
    "arrow": "green dim",
    "hint": "italic green",
    "docs": "dim",
})


class SynopsisException(Exception):
    """
    base of every fault raised by the core.

    the message is positional-only; everything else is an option and ends up in
    the read-only `options` mapping (title, code, hint, and any context).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        palette = _PALETTE | getattr(main, "__styles__", {})

        def paint(fragment, role):
            if not fragment:
                return Text("")
            return Text(str(fragment), palette.get(role, "") if colorful else "")

        program = getattr(main, "__prog__", os.path.basename(sys.argv[0]) or "synopsis")

        header = Text.assemble(
            "[ ",
            paint(program, "program"),
            " — ",
            paint(self.code.normalize(), "code"),
            " | ",
            paint(self.title.title(), "title"),
            " ]"
        )
        lines = [paint(str(self), "message")]
        if (hint := self.options.get("hint")) is not None:
            lines.append(Text.assemble(paint(" → ", "arrow"), paint(hint, "hint")))
        if (docs := self.options.get("docs")) is not None:
            lines.append(paint(docs, "docs"))

        if self.options.get("fancy", False):
            return Panel(Group(*lines), title=header, title_align="left")

        return Group(header, *lines)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})

    @property
    def code(self):
        return self.options["code"]

    @property
    def title(self):
        return self.options.get("title", "")


class SchemaException(SynopsisException): ...
class SchemaLexingError(SchemaException): ...
class SchemaParsingError(SchemaException): ...
class SchemaOrderError(SchemaException): ...
class DuplicatedAliasError(SchemaException): ...


class InputException(SynopsisException): ...
class AmbiguousArgumentError(InputException): ...
class MissingValueError(InputException): ...
class UnexpectedInputError(InputException): ...
class UnknownFlagError(InputException): ...
class DuplicatedFlagError(InputException): ...
class UnexpectedValueError(InputException): ...
class MissingFlagError(InputException): ...
class NotEnoughPositionalsError(InputException): ...
class TooManyPositionalsError(InputException): ...


def getdoc(code, /):
    """
    `__main__.__docs__[code]`, or None when the host documents nothing for it.

    raisers attach the result as the `docs` option; __rich__ prints it last.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "SynopsisException",
    "SchemaException",
    "SchemaLexingError",
    "SchemaParsingError",
    "SchemaOrderError",
    "DuplicatedAliasError",
    "InputException",
    "AmbiguousArgumentError",
    "MissingValueError",
    "UnexpectedInputError",
    "UnknownFlagError",
    "DuplicatedFlagError",
    "UnexpectedValueError",
    "MissingFlagError",
    "NotEnoughPositionalsError",
    "TooManyPositionalsError",
    "getdoc",
)
