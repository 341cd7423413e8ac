r"""
Synopsis schema compiler: schema string → CompiledSchema.

Schema language
- A schema is a whitespace separated list of declarations, optionally closed by a
  variadic tail marker:

    synopsis := decl* '...'? EOI
    decl     := arg | '[' arg ']'
    arg      := NAME | FLAG ('|' FLAG)* (assign '...'? | '[' assign ']')?
    assign   := '=' NAME

- Tokens
  • NAME: letters, digits, '_' and '-'; starts with a letter, never ends with '-'.
  • FLAG: one or more '-' followed by a NAME (e.g. -f, --flag, ---flaaag).
  • DOTS: exactly three dots.
  • '[', ']', '|', '=' and the implicit end of input (EOI).

- Meaning
  • NAME declares a positional argument; brackets make it optional.
  • FLAG(s) declare one floating group; every FLAG in the pipe list is an alias.
  • "=val" makes the group value-bearing, "=val..." makes it repeating and
    "[=val]" makes its value optional. These three modes exclude each other.
  • A trailing "..." collects every positional beyond the declared ones.

Examples
    -f|--flag=val [--flag2] [-f3[=val]] [-D=val...] fname lname [mname] ...

Parsing
- Recursive descent over an explicit cursor (an index into the schema string).
  Every rule returns (result, cursor) when it matches and None when it declines;
  nothing is recorded until a rule has matched, so declining needs no cleanup.
- The only mandatory expectation is the end of input after the declarations. A
  declined alternative is control flow, never an error.
- Lexing is lazy: tokens are produced at the cursor on demand, so a lexing error
  is reported at the first place the parser actually looks at.

Validation after parsing
- Optional positionals must be chained on the right side ("a [b]" is fine, "[a] b" is not).
- strict=True additionally rejects any flag spelling declared more than once.

Public API
- compile(text, *, strict=False) -> CompiledSchema
- scan(text) -> tuple[Token, ...]
- Token, TokenKind, PositionalSpec, FloatingGroup, Element, ElementKind, CompiledSchema
"""
import re
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import NamedTuple

from .faults import *
from .logger import logger
from .utils import printable

_WHITESPACE = re.compile(r"[ \t\r\n]*")
_NAME = re.compile(r"[A-Za-z][A-Za-z0-9_-]*")
_FLAG = re.compile(r"-+[A-Za-z][A-Za-z0-9_-]*")
_DOTS = re.compile(r"\.+")


class TokenKind(IntEnum):
    """
    schema token kinds. the names appear verbatim in parsing error messages.
    """
    EOI = 0
    LBRAK = 1
    RBRAK = 2
    PIPE = 3
    EQL = 4
    NAME = 5
    FLAG = 6
    DOTS = 7


_PUNCTUATION = MappingProxyType({
    "[": TokenKind.LBRAK,
    "]": TokenKind.RBRAK,
    "|": TokenKind.PIPE,
    "=": TokenKind.EQL,
})


class Token(NamedTuple):
    """
    a lexeme as a span of its source string (schema text or argument element).

    the span is kept as (start, stop) indices; `text` and `rest` slice lazily.
    `element` is the 1-based argument position for input tokens (0 for schema).
    """
    kind: Enum
    source: str
    start: int
    stop: int
    element: int = 0

    @property
    def text(self):
        return self.source[self.start:self.stop]

    @property
    def rest(self):
        """the source from this token to its end (used as error excerpt)."""
        return self.source[self.start:]


def _name(pattern, source, position):
    # greedy run; a run ending with '-' is rejected, not shortened
    match = pattern.match(source, position)
    if match is None or match.group().endswith("-"):
        return None
    return match.end()


def scan_name(source, position=0, /):
    """return the end index of a NAME starting at position, or None."""
    return _name(_NAME, source, position)


def scan_flag(source, position=0, /):
    """return the end index of a FLAG starting at position, or None."""
    return _name(_FLAG, source, position)


def scan_dots(source, position=0, /):
    """return the end index of an ellipsis starting at position, or None."""
    match = _DOTS.match(source, position)
    if match is None or len(match.group()) != 3:
        return None
    return match.end()


def lex(source, position, /):
    """
    produce the schema token found at `position` (leading whitespace skipped).

    raises SchemaLexingError when nothing matches; the excerpt starts at the
    offending character.
    """
    position = _WHITESPACE.match(source, position).end()

    if position == len(source):
        return Token(TokenKind.EOI, source, position, position)

    if (kind := _PUNCTUATION.get(source[position])) is not None:
        return Token(kind, source, position, position + 1)

    for kind, scanner in (
            (TokenKind.NAME, scan_name),
            (TokenKind.FLAG, scan_flag),
            (TokenKind.DOTS, scan_dots),
    ):
        if (stop := scanner(source, position)) is not None:
            return Token(kind, source, position, stop)

    excerpt = source[position:]
    raise SchemaLexingError(
        'Schema lexing error, starting from "%s"' % printable(excerpt),
        title="schema lexing error",
        code=FaultCode.SCHEMA_LEXING,
        hint="names start with a letter, flags with '-', and the tail marker is exactly '...'",
        excerpt=excerpt,
        index=position,
        docs=getdoc(FaultCode.SCHEMA_LEXING),
    )


def scan(text, /):
    """
    tokenize a whole schema string (EOI included), mostly useful for diagnostics.
    """
    if not isinstance(text, str):
        raise TypeError("scan() argument must be a string")
    tokens = [token := lex(text, 0)]
    while token.kind is not TokenKind.EOI:
        tokens.append(token := lex(text, token.stop))
    return tuple(tokens)


class PositionalSpec(NamedTuple):
    name: str
    optional: bool
    slot: int | None = None


class FloatingGroup(NamedTuple):
    """
    one logical flag and its aliases.

    invariant: takes_value=False implies value_optional=False and repeating=False.
    """
    aliases: tuple[str, ...]
    takes_value: bool
    value_optional: bool
    repeating: bool
    optional: bool
    metavar: str | None = None
    slot: int | None = None

    @property
    def name(self):
        """the first declared alias, used to name the group in messages."""
        return self.aliases[0]


class ElementKind(Enum):
    POSITIONAL = "positional"
    GROUP = "group"


class Element(NamedTuple):
    kind: ElementKind
    index: int


class CompiledSchema(NamedTuple):
    """
    read-only result of compile().

    fields
    - text: the schema string it was compiled from.
    - positionals: positional specs in declaration order.
    - groups: floating groups in declaration order.
    - sequence: every declaration, tagged, in schema-source order (slot order).
    - variadic: whether a trailing '...' enables the variadic tail.
    - aliases: flag spelling → group index (the first declaring group wins).
    """
    text: str
    positionals: tuple[PositionalSpec, ...]
    groups: tuple[FloatingGroup, ...]
    sequence: tuple[Element, ...]
    variadic: bool
    aliases: MappingProxyType

    @property
    def arity(self):
        """number of output slots: one per declaration, plus one for the tail."""
        return len(self.sequence) + self.variadic

    @property
    def variadic_slot(self):
        return len(self.sequence) if self.variadic else None

    @property
    def mandatory(self):
        """number of non-optional positionals."""
        return sum(not positional.optional for positional in self.positionals)

    def lookup(self, flag, /):
        """return the group a flag spelling resolves to, or None."""
        try:
            return self.groups[self.aliases[flag]]
        except KeyError:
            return None

    def slots(self):
        """a fresh list of Slot handles, exactly `arity` long."""
        from .evaluation import Slot
        return [Slot() for _ in range(self.arity)]


class _Parser:
    """
    backtracking recursive descent over an explicit cursor.

    rules return (result, cursor) on success and None when they decline.
    """

    def __init__(self, source):
        self.source = source

    def _accept(self, kind, position):
        token = lex(self.source, position)
        return token if token.kind is kind else None

    def _expect(self, kind, position):
        token = lex(self.source, position)
        if token.kind is kind:
            return token
        excerpt = self.source[position:]
        raise SchemaParsingError(
            'Schema parsing error. Expected %s but received %s, starting from "%s"' % (
                kind.name, token.kind.name, printable(excerpt)
            ),
            title="schema parsing error",
            code=FaultCode.SCHEMA_PARSING,
            hint="check brackets and the placement of '...' (it may only close the schema)",
            expected=kind,
            received=token.kind,
            excerpt=excerpt,
            index=position,
            docs=getdoc(FaultCode.SCHEMA_PARSING),
        )

    def _assign(self, position):
        if (equals := self._accept(TokenKind.EQL, position)) is None:
            return None
        if (name := self._accept(TokenKind.NAME, equals.stop)) is None:
            return None
        return name.text, name.stop

    def _argument(self, position, optional):
        if (token := self._accept(TokenKind.NAME, position)) is not None:
            return PositionalSpec(token.text, optional), token.stop

        if (token := self._accept(TokenKind.FLAG, position)) is None:
            return None

        aliases = [token.text]
        cursor = token.stop
        while (pipe := self._accept(TokenKind.PIPE, cursor)) is not None:
            if (token := self._accept(TokenKind.FLAG, pipe.stop)) is None:
                break  # a dangling pipe is left for the caller; read aliases are kept
            aliases.append(token.text)
            cursor = token.stop
        aliases = tuple(aliases)

        if (assigned := self._assign(cursor)) is not None:
            metavar, cursor = assigned
            if (dots := self._accept(TokenKind.DOTS, cursor)) is not None:
                return FloatingGroup(aliases, True, False, True, optional, metavar), dots.stop
            return FloatingGroup(aliases, True, False, False, optional, metavar), cursor

        if (
                (bracket := self._accept(TokenKind.LBRAK, cursor)) is not None and
                (assigned := self._assign(bracket.stop)) is not None and
                (closing := self._accept(TokenKind.RBRAK, assigned[1])) is not None
        ):
            return FloatingGroup(aliases, True, True, False, optional, assigned[0]), closing.stop

        return FloatingGroup(aliases, False, False, False, optional), cursor

    def _declaration(self, position):
        if (found := self._argument(position, False)) is not None:
            return found

        if (bracket := self._accept(TokenKind.LBRAK, position)) is None:
            return None
        if (found := self._argument(bracket.stop, True)) is None:
            return None
        declaration, cursor = found
        if (closing := self._accept(TokenKind.RBRAK, cursor)) is None:
            return None
        return declaration, closing.stop

    def synopsis(self):
        declarations = []
        cursor = 0
        while (found := self._declaration(cursor)) is not None:
            declaration, cursor = found
            declarations.append(declaration)

        variadic = False
        if (dots := self._accept(TokenKind.DOTS, cursor)) is not None:
            variadic, cursor = True, dots.stop

        self._expect(TokenKind.EOI, cursor)
        return declarations, variadic


def _check_order(positionals):
    # "a [b]" is fine, "[a] b" is not
    for previous, current in zip(positionals, positionals[1:]):
        if previous.optional and not current.optional:
            raise SchemaOrderError(
                "All optional non-flag arguments must be chained on the schema's right side",
                title="optional positional before a mandatory one",
                code=FaultCode.SCHEMA_ORDER,
                hint="move %r after every mandatory positional (or make %r optional too)" % (
                    previous.name, current.name
                ),
                input=current.name,
                docs=getdoc(FaultCode.SCHEMA_ORDER),
            )


def compile(text, /, *, strict=False):
    """
    compile a schema string into a CompiledSchema.

    parameters
    - text: str
      the schema (see the module docstring for the language).
    - strict: bool (keyword-only)
      reject flag spellings declared more than once. when False (default) the
      first declaring group wins at lookup time.

    raises
    - SchemaLexingError / SchemaParsingError: malformed schema text.
    - SchemaOrderError: an optional positional precedes a mandatory one.
    - DuplicatedAliasError: strict mode only.
    """
    if not isinstance(text, str):
        raise TypeError("compile() argument must be a string")

    declarations, variadic = _Parser(text).synopsis()

    positionals = []
    groups = []
    sequence = []
    aliases = {}
    for slot, declaration in enumerate(declarations):
        if isinstance(declaration, PositionalSpec):
            sequence.append(Element(ElementKind.POSITIONAL, len(positionals)))
            positionals.append(declaration._replace(slot=slot))
            continue

        sequence.append(Element(ElementKind.GROUP, index := len(groups)))
        groups.append(declaration._replace(slot=slot))
        for alias in declaration.aliases:
            if strict and (alias in aliases or declaration.aliases.count(alias) > 1):
                raise DuplicatedAliasError(
                    'Flag "%s" is declared more than once' % alias,
                    title="duplicated flag declaration",
                    code=FaultCode.DUPLICATED_ALIAS,
                    hint="give every flag spelling to a single group",
                    input=alias,
                    docs=getdoc(FaultCode.DUPLICATED_ALIAS),
                )
            aliases.setdefault(alias, index)

    _check_order(positionals)

    schema = CompiledSchema(
        text,
        tuple(positionals),
        tuple(groups),
        tuple(sequence),
        variadic,
        MappingProxyType(aliases),
    )
    logger.debug(
        "[synopsis] compiled %r: %d positional(s), %d group(s), variadic=%s",
        text, len(schema.positionals), len(schema.groups), schema.variadic,
    )
    return schema


__all__ = (
    "TokenKind",
    "Token",
    "PositionalSpec",
    "FloatingGroup",
    "ElementKind",
    "Element",
    "CompiledSchema",
    "scan",
    "compile",
)
