"""
gvasm per-command schemas and validators.

Every command is described by one Schema (what the flag parser recognizes) and
one validator (what the parsed values must satisfy). A validator receives the
RawArgs and the unknown-flag diagnostics of a single parse and answers with a
Help, Failure or Value result (see gvasm.descriptors).

Order of checks (identical for all commands)
1. unknown flags: the parse failed, all of them are reported together and
   nothing is validated (not even help).
2. help: when requested anywhere, no field is inspected.
3. operands: exactly one for init/make/run/dis, any number for itest.
4. fields, in declaration order; the first violation wins.

Defaults
- init: title "Game", initials = (title + "AA")[:2], maker "77", version 0,
  region "E", code "C".
- make: output = input with ".gba" extension; no defines; no watch; no execute.
- run: no defines; no watch.
- dis: format "gba"; output = input with ".gvasm" extension.
- itest: no filters (run everything).
"""
import copy
import re

from . import helps
from .defines import parse_defines
from .descriptors import *
from .faults import *
from .flags import Option, Flag, Schema, parse
from .utils import *

SCHEMAS = {
    "init": Schema(
        Option("title", "t"),
        Option("initials", "i"),
        Option("maker", "m"),
        Option("version", "v"),
        Option("region", "r"),
        Option("code", "c"),
        Flag("overwrite"),
    ),
    "make": Schema(
        Option("output", "o"),
        Option("define", "d", collect=True),
        Option("execute", "x"),
        Flag("watch", "w"),
    ),
    "run": Schema(
        Option("define", "d", collect=True),
        Flag("watch", "w"),
    ),
    "dis": Schema(
        Option("output", "o"),
        Option("format", "f"),
    ),
    "itest": Schema(stop_early=True),
}

HELPS = {
    "init": helps.INIT,
    "make": helps.MAKE,
    "run": helps.RUN,
    "dis": helps.DIS,
    "itest": helps.ITEST,
}

FORMATS = ("gba", "bin")


def _hint(command):
    return "run 'gvasm %s --help' to see the expected usage" % command


def _invalid(command, message, input):
    return Failure((InvalidValueError(
        message,
        title="invalid value",
        code=FaultCode.INVALID_VALUE,
        input=input,
        hint=_hint(command),
    ),))


def _prologue(command, raw, unknowns):
    """
    Shared first two steps: unknown flags abort the parse, then help short-circuits.
    """
    if unknowns:
        return Failure(tuple(
            UnknownSwitchError(
                "unknown option or flag %r at %s position" % (unknown.name, ordinal(unknown.index)),
                title="unknown option or flag",
                code=FaultCode.UNKNOWN_SWITCH,
                input=unknown.name,
                token=unknown.token,
                index=unknown.index,
                hint="try 'gvasm %s --help' to see all available options" % command,
            )
            for unknown in unknowns
        ))
    if raw.get("help"):
        return Help(HELPS[command])
    return None


def _operand(command, raw, what):
    """
    Return the single operand, or a Failure when there are none or several.
    """
    match raw.operands:
        case ():
            return Failure((MissingOperandError(
                "missing %s file" % what,
                title="missing %s" % what,
                code=FaultCode.MISSING_OPERAND,
                hint=_hint(command),
            ),))
        case (operand,):
            return operand
        case operands:
            return Failure((ExtraOperandError(
                "can only have one %s file, but got %d: %s" % (
                    what, len(operands), ", ".join(map(repr, operands))
                ),
                title="extra %s" % what,
                code=FaultCode.EXTRA_OPERAND,
                input=operands[1],
                hint="remove the extra values or " + _hint(command),
            ),))


def validate_init(raw, unknowns=(), /):
    if result := _prologue("init", raw, unknowns):
        return result
    if isinstance(output := _operand("init", raw, "output"), Failure):
        return output

    title = coalesce(raw.get("title"), "Game")
    if len(title) > 12:
        return _invalid("init", "invalid title, must be at most 12 characters, but got: %r" % title, title)

    initials = coalesce(raw.get("initials"), (title + "AA")[:2])
    if len(initials) != 2:
        return _invalid("init", "invalid initials, must be 2 characters, but got: %r" % initials, initials)

    maker = coalesce(raw.get("maker"), "77")
    if len(maker) != 2:
        return _invalid("init", "invalid maker, must be 2 characters, but got: %r" % maker, maker)

    version = coalesce(raw.get("version"), "0")
    # leading zeros are dropped so at most three digits ever reach int()
    if not (digits := re.fullmatch(r"(-?)0*([0-9]{1,3})", version)) or not 0 <= int("".join(digits.groups())) <= 255:
        return _invalid("init", "invalid version, must be 0..255, but got: %r" % version, version)

    region = coalesce(raw.get("region"), "E")
    if len(region) != 1:
        return _invalid("init", "invalid region, must be 1 character, but got: %r" % region, region)

    code = coalesce(raw.get("code"), "C")
    if len(code) != 1:
        return _invalid("init", "invalid code, must be 1 character, but got: %r" % code, code)

    return Value(Init(
        output=output,
        title=title,
        initials=initials,
        maker=maker,
        version=int("".join(digits.groups())),
        region=region,
        code=code,
        overwrite=raw.get("overwrite"),
    ))


def _defines(command, raw):
    try:
        return parse_defines(coalesce(raw.get("define"), ()))
    except DefineParseError as fault:
        # keep the grammar hint, point at the command help as well
        return Failure((copy.replace(fault, hint="%s, or %s" % (fault.options["hint"], _hint(command))),))


def validate_make(raw, unknowns=(), /):
    if result := _prologue("make", raw, unknowns):
        return result
    if isinstance(input := _operand("make", raw, "input"), Failure):
        return input
    if isinstance(defines := _defines("make", raw), Failure):
        return defines

    return Value(Make(
        input=input,
        output=coalesce(raw.get("output"), replace_ext(input, ".gba")),
        defines=defines,
        watch=raw.get("watch"),
        execute=coalesce(raw.get("execute")),
    ))


def validate_run(raw, unknowns=(), /):
    if result := _prologue("run", raw, unknowns):
        return result
    if isinstance(input := _operand("run", raw, "input"), Failure):
        return input
    if isinstance(defines := _defines("run", raw), Failure):
        return defines

    return Value(Run(
        input=input,
        defines=defines,
        watch=raw.get("watch"),
    ))


def validate_dis(raw, unknowns=(), /):
    if result := _prologue("dis", raw, unknowns):
        return result
    if isinstance(input := _operand("dis", raw, "input"), Failure):
        return input

    format = coalesce(raw.get("format"), "gba")
    if format not in FORMATS:
        return _invalid("dis", "invalid format, must be 'gba' or 'bin', but got: %r" % format, format)

    return Value(Dis(
        input=input,
        format=format,
        output=coalesce(raw.get("output"), replace_ext(input, ".gvasm")),
    ))


def validate_itest(raw, unknowns=(), /):
    if result := _prologue("itest", raw, unknowns):
        return result
    return Value(Itest(filters=raw.operands))


VALIDATORS = {
    "init": validate_init,
    "make": validate_make,
    "run": validate_run,
    "dis": validate_dis,
    "itest": validate_itest,
}


def check(command, tokens, /, *, index=2):
    """
    Parse and validate the tokens of one command.

    Parameters
    - command: one of COMMANDS.
    - tokens: the arguments following the command name.
    - index: 1-based position of the first token in the full argument vector
      (2 when the command name itself is the first).

    Returns
    - Help | Failure | Value
    """
    try:
        schema, validator = SCHEMAS[command], VALIDATORS[command]
    except KeyError:
        raise ValueError(f"check() unknown command {command!r}") from None
    return validator(*parse(tokens, schema, index=index))


__all__ = (
    "SCHEMAS",
    "HELPS",
    "FORMATS",
    "VALIDATORS",
    "validate_init",
    "validate_make",
    "validate_run",
    "validate_dis",
    "validate_itest",
    "check",
)
