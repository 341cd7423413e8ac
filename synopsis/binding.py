"""
Synopsis matcher and binder: CompiledSchema + ParsedInput → values.

match(schema, parsed)
- resolves every flag occurrence to its group by exact spelling (no prefixes),
- checks the flag-shape × occurrence table:

    group shape            no value given         value given
    ---------------------  ---------------------  ----------------------
    boolean                ok                     UnexpectedValueError
    value required         MissingValueError      ok
    value optional         ok (bound NoValue)     ok
    repeating              MissingValueError      ok (accumulates)

  and rejects a second occurrence of a non-repeating group,
- then reports the first mandatory group never seen, and positional counts
  (not enough, or too many when no variadic tail is declared).

bind(schema, parsed)
- only meaningful after match() succeeded; returns one value per declaration in
  declaration order, followed by the variadic tail when the schema enables it:

    boolean group          True / False
    valued group           the value, NoValue (given without value), None (absent)
    repeating group        list of values in occurrence order ([] when absent)
    positional             the value, or None for an optional one not given
    variadic tail          list of the remaining positionals ([] when none)
"""
import difflib

from .faults import *
from .utils import NoValue, ordinal


def match(schema, parsed, /):
    """
    validate parsed input against a compiled schema; raise on the first mismatch.
    """
    used = [False] * len(schema.groups)

    for occurrence in parsed.occurrences:
        flag = occurrence.flag
        try:
            index = schema.aliases[flag]
        except KeyError:
            suggestions = difflib.get_close_matches(flag, schema.aliases.keys(), 5)
            try:
                hint = "did you mean %r?" % suggestions[0]
            except IndexError:
                hint = "remove it or pass it after '--' if it is a value"
            raise UnknownFlagError(
                'Ambiguous argument "%s" provided' % flag,
                title="unknown flag",
                code=FaultCode.UNKNOWN_FLAG,
                hint=hint,
                input=flag,
                index=occurrence.index,
                suggestions=suggestions,
                docs=getdoc(FaultCode.UNKNOWN_FLAG),
            ) from None

        group = schema.groups[index]

        if used[index] and not group.repeating:
            raise DuplicatedFlagError(
                "Same arguments provided multiple times: %s" % flag,
                title="duplicated flag",
                code=FaultCode.DUPLICATED_FLAG,
                hint="keep a single %s; it can be given only once" % " / ".join(group.aliases),
                input=flag,
                index=occurrence.index,
                docs=getdoc(FaultCode.DUPLICATED_FLAG),
            )

        if group.takes_value:
            if occurrence.value is None and not group.value_optional:
                raise MissingValueError(
                    '"%s" argument requires a value' % flag,
                    title="missing value",
                    code=FaultCode.MISSING_VALUE,
                    hint="use the inline form at %s position: %s=<%s>" % (
                        ordinal(occurrence.index), flag, group.metavar
                    ),
                    input=flag,
                    index=occurrence.index,
                    docs=getdoc(FaultCode.MISSING_VALUE),
                )
        elif occurrence.value is not None:
            raise UnexpectedValueError(
                '"%s" argument does not require a value' % flag,
                title="flag cannot take a value",
                code=FaultCode.UNEXPECTED_VALUE,
                hint="remove everything from '=' (for example: %s)" % flag,
                input=flag,
                index=occurrence.index,
                docs=getdoc(FaultCode.UNEXPECTED_VALUE),
            )

        used[index] = True

    for group, seen in zip(schema.groups, used):
        if not seen and not group.optional:
            raise MissingFlagError(
                '"%s" argument %srequired but not provided' % (
                    group.name, "(or alias) " if len(group.aliases) > 1 else ""
                ),
                title="missing flag",
                code=FaultCode.MISSING_FLAG,
                hint="add %s" % " or ".join(group.aliases),
                input=group.name,
                docs=getdoc(FaultCode.MISSING_FLAG),
            )

    provided = len(parsed.positionals)

    if provided < schema.mandatory:
        raise NotEnoughPositionalsError(
            "Not enough positional arguments provided",
            title="missing positionals",
            code=FaultCode.NOT_ENOUGH_POSITIONALS,
            hint="expected at least %d, got %d (%s)" % (
                schema.mandatory, provided,
                " ".join(positional.name for positional in schema.positionals if not positional.optional)
            ),
            docs=getdoc(FaultCode.NOT_ENOUGH_POSITIONALS),
        )

    if not schema.variadic and provided > len(schema.positionals):
        raise TooManyPositionalsError(
            "Too many positional arguments provided",
            title="unexpected positionals",
            code=FaultCode.TOO_MANY_POSITIONALS,
            hint="expected at most %d, got %d; remove the extra values" % (len(schema.positionals), provided),
            leftover=list(parsed.positionals[len(schema.positionals):]),
            docs=getdoc(FaultCode.TOO_MANY_POSITIONALS),
        )


def bind(schema, parsed, /):
    """
    produce the bound values (see the module docstring) for validated input.
    """
    collected = [[] for _ in schema.groups]
    for occurrence in parsed.occurrences:
        collected[schema.aliases[occurrence.flag]].append(occurrence.value)

    values = [None] * len(schema.sequence)

    for group, occurrences in zip(schema.groups, collected):
        if group.repeating:
            value = occurrences
        elif not group.takes_value:
            value = bool(occurrences)
        elif not occurrences:
            value = None
        elif occurrences[0] is None:
            value = NoValue
        else:
            value = occurrences[0]
        values[group.slot] = value

    for index, positional in enumerate(schema.positionals):
        if index < len(parsed.positionals):
            values[positional.slot] = parsed.positionals[index]

    if schema.variadic:
        values.append(list(parsed.positionals[len(schema.positionals):]))

    return tuple(values)


__all__ = (
    "match",
    "bind",
)
