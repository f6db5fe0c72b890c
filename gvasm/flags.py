r"""
gvasm flag schemas and the generic flag parser.

Overview
- Declarations
  • Option: named, string-valued flag with zero or more aliases (e.g., output/-o).
    With collect=True every occurrence is appended instead of overwriting.
  • Flag: named, presence-only boolean switch (e.g., watch/-w).
  • Schema: the declarative table of one command's switches. It always knows
    help/-h, and may stop flag recognition after the first operand (stop_early).

- Parsing
  • parse(tokens, schema) is pure: it returns the raw values and operands of one
    command (RawArgs) together with one UnknownFlag diagnostic per unrecognized
    flag token. Nothing is printed and nothing is raised for user input.

Token grammar
- "--name value", "--name=value"      long form; any declared key works after "--"
- "-n value", "-n=value", "-nvalue"   short form for single-letter keys
- "-abc"                              cluster: booleans a and b, then c
- "--"                                every later token is an operand
- "-"                                 an operand (conventional stdin/stdout marker)
- anything else                       an operand, in encounter order

Value rules
- Flag: presence sets True; "--flag=false" sets False (any other inline value is
  True); a bare "true"/"false" right after a boolean is consumed as its value.
- Option: takes the inline value or the next token; when the next token is
  missing or shaped like a flag the value is the empty string.
- Non-collect options keep the last occurrence; collect options keep them all,
  in encounter order.

Quick example:
    >>> schema = Schema(Option("output", "o"), Option("define", "d", collect=True), Flag("watch", "w"))
    >>> raw, unknowns = parse(["a.gvasm", "-d", "A=1", "-wd", "B=2"], schema)
    >>> raw.operands, raw.get("define"), raw.get("watch")
    (('a.gvasm',), ('A=1', 'B=2'), True)

Public API
- Classes: Option, Flag, Schema, RawArgs, UnknownFlag
- Functions: parse
"""
import functools
import operator
import re
from collections import deque
from types import MappingProxyType
from typing import NamedTuple

from .utils import *


class SwitchType(type):
    """
    Metaclass that turns switch specs into introspectable, read-only descriptors.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens) for
      consistent messages.
    - Expose every name listed in __introspectable__ as a read-only property via mirror().
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_names(cls, name, aliases, /):
    r"""
    Internal: validate the canonical name and aliases of a switch.

    Rules
    - name: required, a lowercase-friendly word such as "output" or "no-color";
      must match r"[^\W\d_](-?[^\W_]+)*" (no leading dashes, no underscores).
    - aliases: zero or more names following the same rule; single letters are the
      short forms usable as "-x" and inside clusters.
    - duplicates (between name and aliases) are rejected.

    Returns
    - tuple[str, tuple[str, ...]]: the stripped name and aliases.
    """
    names = []
    for object in (name, *aliases):
        if not isinstance(object, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (object := object.strip()):
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        elif not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", object):
            raise ValueError(f"{cls.__typename__} names must be valid option names without dashes")
        elif object in names:
            raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
        names.append(object)
    return names[0], tuple(names[1:])


class Option(metaclass=SwitchType):
    """
    Named, string-valued switch.

    Parameters
    - name: canonical key under which the value is stored in RawArgs.
    - aliases: alternative keys, typically one short letter ("o" for "output").
    - collect: when True, each occurrence is appended to a tuple (e.g., repeated
      "-d NAME=value") instead of the last one winning.
    """

    __introspectable__ = (
        "name",
        "aliases",
        "collect",
    )

    def __init__(self, name, /, *aliases, collect=False):
        self._name, self._aliases = _sanitize_names(type(self), name, aliases)
        self._collect = bool(collect)

    @property
    def keys(self):
        return (self._name, *self._aliases)


class Flag(metaclass=SwitchType):
    """
    Named, presence-only boolean switch. Defaults to False in every RawArgs.
    """

    __introspectable__ = (
        "name",
        "aliases",
    )

    def __init__(self, name, /, *aliases):
        self._name, self._aliases = _sanitize_names(type(self), name, aliases)

    @property
    def keys(self):
        return (self._name, *self._aliases)


class Schema(metaclass=SwitchType):
    """
    Declarative flag table of one command.

    Behavior
    - Every key (canonical name or alias) must be unique across the schema.
    - A help/-h flag is added unless the schema declares a "help" switch itself.
    - stop_early: once the first operand is seen, every later token is an operand.
      Used by commands whose operands may look like flags (test filters).
    """

    __introspectable__ = (
        "switches",
        "stop_early",
    )

    def __init__(self, *switches, stop_early=False):
        table = {}
        for switch in switches:
            if not isinstance(switch, Option | Flag):
                raise TypeError(f"{type(self).__typename__} switches must be options or flags")
            for key in switch.keys:
                if table.setdefault(key, switch) is not switch:
                    raise ValueError(f"{type(self).__typename__} key {key!r} is already in use")
        if "help" not in table:
            help = Flag("help", "h")
            for key in help.keys:
                if table.setdefault(key, help) is not help:
                    raise ValueError(f"{type(self).__typename__} key {key!r} is already in use")
        self._table = table
        self._switches = tuple(dict.fromkeys(table.values()))
        self._stop_early = bool(stop_early)

    def lookup(self, key, /):
        """
        Return the switch registered under 'key' (name or alias), or None.
        """
        return self._table.get(key)


class RawArgs(NamedTuple):
    """
    Raw, unvalidated result of parsing one command's tokens.

    - values: read-only mapping from canonical name to bool (flags), str
      (options) or tuple[str, ...] (collect options). Options never given are
      absent; flags are always present.
    - operands: positional tokens, in encounter order.
    """
    values: MappingProxyType
    operands: tuple

    def get(self, name, default=Unset, /):
        return self.values.get(name, default)


class UnknownFlag(NamedTuple):
    """
    Diagnostic for a flag token that no switch of the schema recognizes.

    - token: the raw token as written ("-wz", "--bogus=1").
    - name: the offending flag as the user would spell it ("-z", "--bogus").
    - index: 1-based position of the token in the full argument vector.
    """
    token: str
    name: str
    index: int


def _flaglike(token):
    return len(token) > 1 and token.startswith("-")


def parse(tokens, schema, /, *, index=1):
    """
    Parse argv-like tokens against a schema.

    Parameters
    - tokens: Iterable[str], the arguments of one command (command name excluded).
    - schema: Schema describing the recognized switches.
    - index: 1-based position of the first token in the full argument vector,
      used only to locate diagnostics.

    Returns
    - tuple[RawArgs, tuple[UnknownFlag, ...]]

    Notes
    - Unknown flags are dropped: they never become operands and never consume
      the following token.
    """
    if not isinstance(schema, Schema):
        raise TypeError("parse() second argument must be a schema")

    values = {switch.name: False for switch in schema.switches if isinstance(switch, Flag)}
    operands = []
    unknowns = []
    tokens = deque(tokens)
    position = index - 1

    def take():
        nonlocal position
        position += 1
        return tokens.popleft()

    def assign(switch, value):
        if isinstance(switch, Option) and switch.collect:
            values[switch.name] = values.get(switch.name, ()) + (value,)
        else:
            values[switch.name] = value

    def inline(switch, value):
        # "--watch=false" is the only way to spell an explicit False inline
        assign(switch, value != "false" if isinstance(switch, Flag) else value)

    def spaced(switch):
        if isinstance(switch, Flag):
            if tokens and tokens[0] in ("true", "false"):
                assign(switch, take() == "true")
            else:
                assign(switch, True)
        elif tokens and not _flaglike(tokens[0]):
            assign(switch, take())
        else:
            assign(switch, "")

    while tokens:
        token = take()

        if token == "--":
            operands.extend(tokens)
            break

        if token.startswith("--"):
            key, equals, value = token[2:].partition("=")
            if (switch := schema.lookup(key)) is None:
                unknowns.append(UnknownFlag(token, "--" + key, position))
            elif equals:
                inline(switch, value)
            else:
                spaced(switch)
            continue

        if _flaglike(token):
            letters = token[1:]
            for offset, letter in enumerate(letters):
                rest = letters[offset + 1:]
                switch = schema.lookup(letter)
                if switch is None:
                    unknowns.append(UnknownFlag(token, "-" + letter, position))
                    if rest.startswith("="):
                        break
                    continue
                if rest.startswith("="):
                    inline(switch, rest[1:])
                    break
                if rest and isinstance(switch, Option):
                    # "-oout.gba": the rest of the cluster is the value
                    assign(switch, rest)
                    break
                if rest:
                    assign(switch, True)
                    continue
                spaced(switch)
            continue

        operands.append(token)
        if schema.stop_early:
            operands.extend(tokens)
            break

    return RawArgs(MappingProxyType(values), tuple(operands)), tuple(unknowns)


__all__ = (
    # Classes (switch declarations)
    "Option",
    "Flag",
    "Schema",

    # Parse results
    "RawArgs",
    "UnknownFlag",

    # Functions
    "parse",
)

del SwitchType
