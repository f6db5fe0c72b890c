"""
gvasm faults: every way an invocation can be refused, and how it is shown.

Scope
- FaultCode: stable numbers identifying each kind of fault, grouped by the
  stage that detects it (routing, switches, operands, values, wiring).
- CommandException: a fault carries a one-sentence message and read-only
  options (title, code, hint, input, index, plus runtime options such as
  shell/fancy/colorful) and renders itself as a rich renderable.
- UsageError and its subclasses: problems found while turning argv into a
  command descriptor. DefineParseError is the one raised by the define grammar.
- CommandExit: the faults of one pass reported together (several unknown flags).
- trigger(): merge runtime options into a fault and surface it.
- getdoc(): optional per-code documentation provided by the host.

Rendering
    [ gvasm — 11112 | Unknown Option Or Flag ]
    unknown option or flag '-z' at third position
     → try 'gvasm make --help' to see all available options

- Messages are lowercase and name the position first where there is one.
- fancy wraps the fault in a panel; colorful applies the palette, which the
  host may override through __styles__ in __main__.
- __prog__ and __codes__ in __main__ relabel the program and the codes.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True, highlight=False)

_PALETTE = {
    "program": "bold #E6E6F0",
    "code": "bold #00E5FF",
    "title": "bold #FF4DA6",
    "message": "#C8C8D0",
    "arrow": "dim #9CE19C",
    "hint": "italic #9CE19C",
    "doc": "dim #C8C8D0",
}


class FaultCode(IntEnum):
    """
    Stable fault numbers.

    - 1110x routing: UNKNOWN_COMMAND
    - 1111x switches: UNKNOWN_SWITCH
    - 1112x operands: EXTRA_OPERAND, MISSING_OPERAND
    - 1113x values: INVALID_VALUE, INVALID_DEFINE
    - 1114x wiring: MISSING_COLLABORATOR
    """
    UNKNOWN_COMMAND             = 11101

    UNKNOWN_SWITCH              = 11112

    EXTRA_OPERAND               = 11121
    MISSING_OPERAND             = 11125

    INVALID_VALUE               = 11131
    INVALID_DEFINE              = 11132

    MISSING_COLLABORATOR        = 11141

    def normalize(self):
        """
        Label shown for this code: the host's __codes__ entry, else the number.
        """
        return str(_host("__codes__", {}).get(self, self.value))


def _host(name, default):
    return getattr(__import__("__main__"), name, default)


def _program(options):
    return _host("__prog__", options.get("prog", "gvasm"))


def _painter(options):
    """
    Return a function turning a fragment into Text, styled only when colorful.
    """
    palette = defaultdict(str, _PALETTE | _host("__styles__", {}))
    colorful = options.get("colorful", False)

    def paint(fragment, role):
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), palette[role] if colorful else "")

    return paint


class _Surfaced:
    # shared by single faults and fault groups: raise, or print on stderr

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self, soft_wrap=not self.options.get("fancy", False))


class CommandException(_Surfaced, Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        paint = _painter(self.options)
        code = self.options["code"]

        header = Text.assemble(
            "[ ", paint(_program(self.options), "program"),
            " — ", paint(code.normalize(), "code"),
            " | ", paint(self.options["title"].title(), "title"), " ]",
        )
        body = [paint(coalesce(self.message, ""), "message")]
        if hint := self.options.get("hint"):
            body.append(Text.assemble(paint(" → ", "arrow"), paint(hint, "hint")))
        if doc := getdoc(code):
            body.append(paint(doc, "doc"))

        if not self.options.get("fancy", False):
            return Group(header, *body)
        width = None
        if "ratio" in self.options:
            width = int((console.width - 4) * self.options["ratio"])
        return Panel(Group(*body), title=header, title_align="left", width=width)

    def __replace__(self, *positional, **overrides):
        assert not positional, "only keyword overrides are accepted"
        return type(self)(self.message, **self.options | overrides)


class UsageError(CommandException): ...
class UnknownSwitchError(UsageError): ...
class MissingOperandError(UsageError): ...
class ExtraOperandError(UsageError): ...
class InvalidValueError(UsageError): ...
class DefineParseError(UsageError): ...
class UnknownCommandError(CommandException): ...
class MissingCollaboratorError(CommandException): ...


class CommandExit(_Surfaced, ExceptionGroup[CommandException]):
    """
    Several faults of the same invocation, rendered under one "Bad Exit" header.
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad exit", tuple(exceptions))

    def __init__(self, exceptions, **options):
        super().__init__("bad exit", tuple(exceptions))
        self.options = MappingProxyType(options)

    def __rich__(self):
        paint = _painter(self.options)
        fancy = self.options.get("fancy", False)

        header = Text.assemble(
            "[ ", paint(_program(self.options), "program"),
            " — ", paint(self.message.title(), "title"), " ]",
        )
        # inner faults inherit the group's look; panels shrink to fit inside
        body = [
            copy.replace(fault, ratio=2/3, colorful=self.options.get("colorful", False), fancy=fancy)
            for fault in self.exceptions
        ]
        if fancy:
            return Panel(Group(*body), title=header, title_align="left")
        return Group(header, *body)

    def __replace__(self, *positional, **overrides):
        assert not positional, "only keyword overrides are accepted"
        return type(self)(self.exceptions, **self.options | overrides)


def trigger(fault, /, **options):
    """
    Surface 'fault' with the runtime options merged in.

    Options
    - shell: print on stderr instead of raising.
    - fancy, colorful, prog: rendering options.

    Raises
    - TypeError: when 'fault' cannot be replaced and triggered.
    - the fault itself, when shell is false.
    """
    if not callable(getattr(fault, "__trigger__", None)) or not callable(getattr(fault, "__replace__", None)):
        raise TypeError("trigger() argument must be a fault")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    Return the host's documentation string for 'code', or None.

    The host may define a __docs__ mapping in __main__ from FaultCode members to
    short documentation strings; faults render it below their hint.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return _host("__docs__", {}).get(code)


__all__ = (
    "CommandException",
    "UsageError",
    "UnknownSwitchError",
    "MissingOperandError",
    "ExtraOperandError",
    "InvalidValueError",
    "DefineParseError",
    "UnknownCommandError",
    "MissingCollaboratorError",
    "CommandExit",
    "FaultCode",
    "trigger",
    "getdoc",
)
