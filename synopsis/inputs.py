"""
Synopsis input reader: argument vector → ParsedInput.

Lexing (one element at a time, no state carried between elements)
- "-f", "--flag"        → FLAG
- "-f=v", "--flag="     → FLAG EQL [VAL]   (VAL only when something follows '=')
- "-f.x", "--flag!"     → AmbiguousArgumentError (a flag followed by garbage)
- "=v", "="             → EQL [VAL]        (lets "-f" "=v" arrive as two elements)
- "--"                  → EOI, every later element is ignored
- anything else         → VAL
An EOI is appended when the stream does not already end with one.

Structuring
- FLAG opens an occurrence; FLAG EQL VAL assigns VAL to it, FLAG EQL without a
  VAL is a MissingValueError.
- A VAL not consumed by an assignment is a positional value.
- Anything else (a stray EQL) is an UnexpectedInputError.

Indexing
- Tokens remember the 1-based position of their element so hints can say where
  things went wrong ("at second position"). Messages keep the stable wording.
"""
from enum import IntEnum
from typing import NamedTuple

from .faults import *
from .schema import Token, scan_flag
from .utils import ordinal, printable


class InputKind(IntEnum):
    FLAG = 0
    EQL = 1
    VAL = 2
    EOI = 3


class Occurrence(NamedTuple):
    """one observed use of a flag, before it is resolved to a group."""
    flag: str
    value: str | None
    index: int


class ParsedInput(NamedTuple):
    occurrences: tuple[Occurrence, ...]
    positionals: tuple[str, ...]


def _assignment(tokens, element, start, index):
    # element[start] is '='
    tokens.append(Token(InputKind.EQL, element, start, start + 1, index))
    if start + 1 < len(element):
        tokens.append(Token(InputKind.VAL, element, start + 1, len(element), index))


def tokenize(argv, /):
    """
    lex an argument vector (program name excluded) into input tokens.

    the vector is only read; tokens keep (element, start, stop) spans into it.
    """
    tokens = []
    for index, element in enumerate(argv, 1):
        if not isinstance(element, str):
            raise TypeError("tokenize() argument must be an iterable of strings")

        if (stop := scan_flag(element)) is not None:
            tokens.append(Token(InputKind.FLAG, element, 0, stop, index))
            if stop == len(element):
                continue
            if element[stop] == "=":
                _assignment(tokens, element, stop, index)
                continue
            raise AmbiguousArgumentError(
                'Ambiguous argument "%s"' % printable(element),
                title="ambiguous argument",
                code=FaultCode.AMBIGUOUS_ARGUMENT,
                hint="write the value after '=' (for example: %s=<value>), "
                     "or pass it after '--' if it is not a flag" % element[:stop],
                input=element,
                index=index,
                docs=getdoc(FaultCode.AMBIGUOUS_ARGUMENT),
            )

        if element.startswith("="):
            _assignment(tokens, element, 0, index)
            continue

        if element == "--":
            tokens.append(Token(InputKind.EOI, element, 0, 2, index))
            break

        tokens.append(Token(InputKind.VAL, element, 0, len(element), index))

    if not tokens or tokens[-1].kind is not InputKind.EOI:
        tokens.append(Token(InputKind.EOI, "", 0, 0, tokens[-1].element + 1 if tokens else 1))

    return tuple(tokens)


def structure(tokens, /):
    """
    group EOI-terminated input tokens into flag occurrences and positional values.
    """
    occurrences = []
    positionals = []

    cursor = 0
    while (token := tokens[cursor]).kind is not InputKind.EOI:
        if token.kind is InputKind.VAL:
            positionals.append(token.text)
            cursor += 1
            continue

        if token.kind is not InputKind.FLAG:
            raise UnexpectedInputError(
                'Unexpected input "%s"' % printable(token.rest),
                title="unexpected input",
                code=FaultCode.UNEXPECTED_INPUT,
                hint="an '=value' at %s position has no flag before it" % ordinal(token.element),
                input=token.rest,
                index=token.element,
                docs=getdoc(FaultCode.UNEXPECTED_INPUT),
            )

        cursor += 1
        value = None
        if tokens[cursor].kind is InputKind.EQL:
            cursor += 1
            if tokens[cursor].kind is not InputKind.VAL:
                raise MissingValueError(
                    'A value expected "%s"' % printable(token.rest),
                    title="missing value",
                    code=FaultCode.MISSING_VALUE,
                    hint="add a value after '=' (for example: %s=<value>)" % token.text,
                    input=token.text,
                    index=token.element,
                    docs=getdoc(FaultCode.MISSING_VALUE),
                )
            value = tokens[cursor].text
            cursor += 1

        occurrences.append(Occurrence(token.text, value, token.element))

    return ParsedInput(tuple(occurrences), tuple(positionals))


def parse(argv, /):
    """tokenize() then structure()."""
    return structure(tokenize(argv))


__all__ = (
    "InputKind",
    "Occurrence",
    "ParsedInput",
    "tokenize",
    "structure",
    "parse",
)
