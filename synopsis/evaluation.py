"""
Synopsis entry point: evaluate an argument vector against a schema string.

    from synopsis import evaluate, Slot, NoValue

    flag, verbose, level, defines, name, files = (Slot() for _ in range(6))
    result = evaluate(
        ["-f=x", "-D=a", "-D=b", "bob", "a.txt", "b.txt"],
        "-f|--flag=val [-v] [-l[=val]] [-D=val...] name ...",
        [flag, verbose, level, defines, name, files],
    )
    if not result:
        print(result.message)
    # flag.value == "x", verbose.value is False, level.value is None,
    # defines.value == ["a", "b"], name.value == "bob", files.value == ["a.txt", "b.txt"]

Outcome
- evaluate() never raises for a malformed schema, a mismatching input or memory
  exhaustion; those come back as Result data with a Status:
  • SUCCESS: every slot written; result.values holds the same values.
  • SCHEMA_ERROR: the schema string is malformed (a programmer mistake).
  • INPUT_ERROR: the argument vector does not fit (a user mistake).
  • RESOURCE_ERROR: memory ran out; there is no message.
- Caller mistakes (wrong argument types, a slot count that differs from the
  schema's arity) raise TypeError.

Slots
- One per declaration in schema order, plus one for the variadic tail.
- A slot is None (discard) or any callable receiving the value; Slot is the
  stock handle storing it in `.value`. CompiledSchema.slots() builds the list.
- Slots are written only on success.
"""
import shlex
import sys
from collections.abc import Iterable
from enum import IntEnum
from typing import NamedTuple

from .binding import bind, match
from .faults import *
from .inputs import parse
from .logger import logger
from .schema import compile
from .utils import Unset


class Status(IntEnum):
    SUCCESS = 0
    RESOURCE_ERROR = 1
    SCHEMA_ERROR = 2
    INPUT_ERROR = 3


class Result(NamedTuple):
    """
    outcome of evaluate(); truthy only on success.
    """
    status: Status
    message: str | None = None
    values: tuple | None = None
    fault: SynopsisException | None = None

    def __bool__(self):
        return self.status is Status.SUCCESS


class Slot:
    """
    output handle: calling it stores the bound value in `value` (Unset until then).
    """
    __slots__ = ("value",)

    def __init__(self):
        self.value = Unset

    def __call__(self, value, /):
        self.value = value

    def __repr__(self):
        return "Slot(%r)" % (self.value,)


def _vector(argv):
    if argv is Unset:
        return tuple(sys.argv[1:])  # Default: current process arguments
    if isinstance(argv, str):
        return tuple(shlex.split(argv))  # Shell-style splitting for a single string
    # Copy, so the caller's object is never touched again
    return tuple(argv)


def evaluate(argv, text, slots=Unset, /, *, strict=False):
    """
    compile `text`, read `argv` against it and write the bound values to `slots`.

    parameters
    - argv:
      • Unset: read sys.argv[1:].
      • str: shell-like string; split with shlex.split.
      • Iterable[str]: the arguments, program name excluded. Never mutated.
    - text: str
      the schema string (see synopsis.schema).
    - slots: Unset | Iterable[Callable | None]
      output handles; when Unset, values are only returned in the Result.
    - strict: bool (keyword-only)
      reject schemas declaring a flag spelling twice.

    returns
    - Result(status, message, values, fault)
    """
    if argv is not Unset and not isinstance(argv, str | Iterable):
        raise TypeError("evaluate() first argument must be a string or an iterable of strings")
    if not isinstance(text, str):
        raise TypeError("evaluate() second argument must be a string")
    if slots is not Unset:
        slots = list(slots)
        if any(slot is not None and not callable(slot) for slot in slots):
            raise TypeError("evaluate() slots must be callables or None")

    try:
        schema = compile(text, strict=strict)
    except SchemaException as fault:
        logger.debug("[synopsis] schema error: %s", fault)
        return Result(Status.SCHEMA_ERROR, str(fault), fault=fault)
    except MemoryError:
        return Result(Status.RESOURCE_ERROR)

    if slots is not Unset and len(slots) != schema.arity:
        raise TypeError("evaluate() schema %r takes %d slots but %d were given" % (text, schema.arity, len(slots)))

    try:
        parsed = parse(_vector(argv))
        logger.debug(
            "[synopsis] parsed %d flag occurrence(s), %d positional(s)",
            len(parsed.occurrences), len(parsed.positionals),
        )
        match(schema, parsed)
        values = bind(schema, parsed)
    except InputException as fault:
        logger.debug("[synopsis] input error: %s", fault)
        return Result(Status.INPUT_ERROR, str(fault), fault=fault)
    except MemoryError:
        return Result(Status.RESOURCE_ERROR)

    if slots is not Unset:
        for slot, value in zip(slots, values):
            if slot is not None:
                slot(value)

    logger.debug("[synopsis] bound %d value(s)", len(values))
    return Result(Status.SUCCESS, values=values)


__all__ = (
    "Status",
    "Result",
    "Slot",
    "evaluate",
)
