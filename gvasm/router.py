"""
gvasm router: route argv to a command, validate it, call its collaborator.

What this module provides
- collaborator(name): decorator binding the callable that performs the real work
  of one command (scaffold, assemble, run, disassemble, internal tests).
- include(pattern): import every module matched by a module glob so that their
  @collaborator registrations run (plugin-like layouts).
- dispatch(args): the flat router; returns the process exit code.
- main(args): console entry point, discovers collaborators then dispatches.

Routing (first token only)
- none, "-h", "--help"  → version banner, blank line, command summary; 0
- "-v", "--version"     → version banner; 0
- a command name        → check() its tokens; Help → 0, Failure → 1,
                          Value → whatever its collaborator returns
- anything else         → "Unknown command: <token>" fault; 1

Collaborator contract
- callable(descriptor) -> int | None | Awaitable[int | None]
- None means success (0); awaitables are driven to completion with asyncio.run,
  so watch loops and post-build commands finish before the exit code is known.
- Codes are passed through untouched; this layer gives them no meaning.
"""
import asyncio
import difflib
import importlib
import inspect
import sys

from . import helps
from .descriptors import *
from .faults import *
from .utils import *
from .validators import check

_collaborators = {}


def collaborator(name, /):
    """
    Decorator binding a collaborator to the command called 'name'.

    Usage
        @collaborator("make")
        async def make(args):
            ...
            return 0

    Rules
    - name must be one of the five command names (ValueError otherwise).
    - a command can be bound only once per process (TypeError otherwise).
    """
    if name not in COMMANDS:
        raise ValueError(f"collaborator() unknown command {name!r}")

    @rename("collaborator")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@collaborator() must be applied to a callable")
        if _collaborators.setdefault(name, callback) is not callback:
            raise TypeError(f"@collaborator() command {name!r} is already bound")
        return callback

    return wrapper


def include(source, /):
    """
    Import every module matched by the module glob 'source'.

    Importing is all that is needed: modules register themselves through
    @collaborator at import time. Patterns whose concrete prefix cannot be
    imported match nothing.

    Raises
    - TypeError: when source is not a string or a matched module fails to import.
    """
    if not isinstance(source, str):
        raise TypeError("include() argument must be a string")

    for module in mglob(source):
        try:
            importlib.import_module(module)
        except ImportError:
            raise TypeError(f"unable to import module {module!r}")


async def _wait(awaitable):
    return await awaitable


def _execute(callback, descriptor):
    code = callback(descriptor)
    if inspect.isawaitable(code):
        code = asyncio.run(_wait(code))
    return 0 if code is None else code


def dispatch(args, /, *, collaborators=Unset, shell=True, fancy=False, colorful=False):
    """
    Route one argument vector and return the exit code.

    Parameters
    - args: Sequence[str], the process arguments without the program name.
    - collaborators: Mapping[str, Callable] overriding the registry (tests,
      embedders); Unset uses the @collaborator registry.
    - shell: when True faults are rendered on stderr and 1 is returned; when
      False they are raised (CommandExit groups several).
    - fancy, colorful: rendering options forwarded to the faults.

    Returns
    - int: 0 for help/version, 1 for usage errors, or the collaborator's code.
    """
    collaborators = coalesce(collaborators, _collaborators)
    options = {"shell": shell, "fancy": fancy, "colorful": colorful}
    args = list(args)

    if not args or args[0] in ("-h", "--help"):
        helps.show(helps.BANNER, helps.SUMMARY)
        return 0
    if args[0] in ("-v", "--version"):
        helps.show(helps.BANNER)
        return 0

    if (command := args[0]) not in COMMANDS:
        suggestions = difflib.get_close_matches(command, COMMANDS, 5)
        try:
            hint = "did you mean %r? you can also run 'gvasm --help' to see available commands" % suggestions[0]
        except IndexError:
            hint = "run 'gvasm --help' to see available commands"
        trigger(UnknownCommandError(
            "Unknown command: %s" % command,
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            input=command,
            index=1,
            suggestions=suggestions,
            hint=hint,
        ), **options)
        return 1

    match check(command, args[1:], index=2):
        case Help(text):
            helps.show(text)
            return 0
        case Failure((fault,)):
            trigger(fault, **options)
            return 1
        case Failure(faults):
            trigger(CommandExit(faults), **options)
            return 1
        case Value(descriptor):
            try:
                callback = collaborators[command]
            except KeyError:
                trigger(MissingCollaboratorError(
                    "no collaborator is bound to command %r" % command,
                    title="missing collaborator",
                    code=FaultCode.MISSING_COLLABORATOR,
                    input=command,
                    hint="install a package providing gvasm.collaborators.%s" % command,
                ), **options)
                return 1
            return _execute(callback, descriptor)


def main(args=Unset, /):
    """
    Console entry point.

    Collaborators are discovered from the module glob in __main__.__collaborators__
    when the host defines one, otherwise from "gvasm.collaborators.*".
    """
    include(getattr(__import__("__main__"), "__collaborators__", "gvasm.collaborators.*"))
    return dispatch(coalesce(args, sys.argv[1:]))


__all__ = (
    "collaborator",
    "include",
    "dispatch",
    "main",
)
