"""
gvasm utilities shared by the flag parser, the validators and the router.

Overview
- Unset / UnsetType
  • Sentinel for "no value given", so that None, 0 and "" stay ordinary values.

- coalesce(value, default=None)
  • Unset becomes the default; every other value, falsey or not, is kept.

- rename(name) / rename(callable, name)
  • Give generated functions a readable __name__/__qualname__.

- mirror(name)
  • Read-only property over a private "_name" attribute; containers are handed out as copies.

- ordinal(number)
  • "first", "second", ..., "11th", "21st": positions in diagnostics.

- replace_ext(path, ext)
  • Swap the extension of the last path component, or append one.

- mglob(pattern)
  • Expand a dotted module pattern ("gvasm.collaborators.*") into module names.

Quick examples
    >>> coalesce(Unset, "Game")
    'Game'
    >>> replace_ext("src/game.gvasm", ".gba")
    'src/game.gba'
    >>> ordinal(2)
    'second'
"""
import fnmatch
import functools
import importlib
import itertools
import os.path
import pkgutil
from collections.abc import Mapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel.

    - There is exactly one instance; calling the type returns it again.
    - It is falsey and prints as "Unset".
    - It combines with types in PEP 604 unions (isinstance(x, str | Unset)).
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented


def coalesce(object, default=None, /):
    """
    Return 'default' when 'object' is Unset, otherwise 'object' itself.

    An explicit empty value survives: `-t ""` keeps an empty title instead of
    falling back to "Game".
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    rename(callable, name) sets __name__ and __qualname__ and returns the callable.
    rename(name) returns a decorator doing the same.
    """
    if len(parameters) == 1:
        name, = parameters
        if not isinstance(name, str):
            raise TypeError("rename() name must be a string")
        return functools.partial(_rename, name=name)
    if len(parameters) == 2:
        callable, name = parameters
        return _rename(callable, name=name)
    raise TypeError(f"rename() takes 1 or 2 arguments ({len(parameters)} given)")


def _rename(callable, *, name):
    if not isinstance(name, str):
        raise TypeError("rename() name must be a string")
    try:
        callable.__name__ = callable.__qualname__ = name
    except (AttributeError, TypeError):
        raise TypeError(f"rename() cannot rename {callable!r}") from None
    return callable


def _snapshot(object):
    # containers are copied all the way down: tuples, dicts and frozensets
    match object:
        case str():
            return object
        case Mapping():
            return {key: _snapshot(value) for key, value in object.items()}
        case Sequence():
            return tuple(_snapshot(item) for item in object)
        case Set():
            return frozenset(_snapshot(item) for item in object)
        case _:
            return object


def mirror(name, /):
    """
    Build a read-only property returning a snapshot of "self._<name>".
    """
    if not isinstance(name, str):
        raise TypeError("mirror() name must be a string")
    return property(rename(lambda self: _snapshot(getattr(self, "_" + name)), name))


_ORDINALS = (
    "first", "second", "third", "fourth", "fifth",
    "sixth", "seventh", "eighth", "ninth", "tenth",
)


@functools.cache
def ordinal(number, /):
    """
    Ordinal label of a 1-based position: words up to ten, then "11th", "21st"...
    """
    if 1 <= number <= len(_ORDINALS):
        return _ORDINALS[number - 1]
    if number % 100 in (11, 12, 13):
        return f"{number}th"
    return f"{number}{ {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th") }"


def replace_ext(path, ext, /):
    """
    Replace the extension of the last path component of 'path' with 'ext'.

    - "a.gvasm"    -> "a" + ext
    - "dir.v2/rom" -> "dir.v2/rom" + ext  (dots in directories do not count)
    - ".hidden"    -> ".hidden" + ext     (a leading dot is not an extension)
    """
    if not isinstance(path, str) or not isinstance(ext, str):
        raise TypeError("replace_ext() arguments must be strings")
    return os.path.splitext(path)[0] + ext


def _matches(segments, parts):
    if not segments:
        return not parts
    head, *tail = segments
    if head == "**":
        return any(_matches(tail, parts[skip:]) for skip in range(len(parts) + 1))
    return bool(parts) and fnmatch.fnmatchcase(parts[0], head) and _matches(tail, parts[1:])


def mglob(source, /):
    """
    Expand a dotted module pattern into the sorted names of matching modules.

    Pattern
    - segments are separated by '.'; each one is matched with fnmatch rules
      ('*', '?', '[seq]', '[!seq]') against one module name segment.
    - '**' as a whole segment matches any number of segments, including none.
    - the leading segments up to the first wildcard must be plain identifiers:
      that package is imported and walked.

    Behavior
    - a pattern without wildcards is returned as-is, in a list.
    - a prefix package that cannot be imported matches nothing, since
      collaborator packages are optional.

    Examples
    - "gvasm.collaborators.*"  -> direct children of gvasm.collaborators
    - "tools.**.gvasm"         -> every "gvasm" module below tools
    """
    if not isinstance(source, str):
        raise TypeError("mglob() argument must be a string")
    if not (source := source.strip()):
        raise ValueError("mglob() argument must be a non-empty string")

    segments = source.split(".")
    prefix = list(itertools.takewhile(str.isidentifier, segments))
    if len(prefix) == len(segments):
        return [source]
    if not prefix:
        raise ValueError("mglob() pattern must start with a package name")

    try:
        package = importlib.import_module(prefix := ".".join(prefix))
    except ImportError:
        return []

    names = [prefix]
    if hasattr(package, "__path__"):
        names.extend(module.name for module in pkgutil.walk_packages(package.__path__, prefix + "."))
    return sorted(name for name in names if _matches(segments, name.split(".")))


Unset = UnsetType()


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "ordinal",
    "replace_ext",
    "mglob",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
