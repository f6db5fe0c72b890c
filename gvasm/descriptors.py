"""
gvasm command descriptors and validation results.

Descriptors
- Init, Make, Run, Dis, Itest form a closed union: exactly one of them is
  produced per invocation and handed to the collaborator bound to its
  __command__ name. They are immutable and fully defaulted.

Results
- Every validator answers with one of:
  • Help(text): help was requested; print it and exit 0.
  • Failure(faults): one or more usage faults; report them and exit 1.
  • Value(descriptor): a validated descriptor ready for its collaborator.
"""
from typing import NamedTuple

from .defines import Define


class Init(NamedTuple):
    output: str
    title: str
    initials: str
    maker: str
    version: int
    region: str
    code: str
    overwrite: bool

    __command__ = "init"


class Make(NamedTuple):
    input: str
    output: str
    defines: tuple[Define, ...] = ()
    watch: bool = False
    # shell command run after each successful build, '{}' is the output path
    execute: str | None = None

    __command__ = "make"


class Run(NamedTuple):
    input: str
    defines: tuple[Define, ...] = ()
    watch: bool = False

    __command__ = "run"


class Dis(NamedTuple):
    input: str
    format: str
    output: str

    __command__ = "dis"


class Itest(NamedTuple):
    filters: tuple[str, ...] = ()

    __command__ = "itest"


type Descriptor = Init | Make | Run | Dis | Itest

DESCRIPTORS = (Init, Make, Run, Dis, Itest)
COMMANDS = tuple(descriptor.__command__ for descriptor in DESCRIPTORS)


class Help(NamedTuple):
    text: str


class Failure(NamedTuple):
    faults: tuple


class Value(NamedTuple):
    descriptor: Descriptor


__all__ = (
    # Descriptors
    "Init",
    "Make",
    "Run",
    "Dis",
    "Itest",
    "Descriptor",
    "DESCRIPTORS",
    "COMMANDS",

    # Results
    "Help",
    "Failure",
    "Value",
)
