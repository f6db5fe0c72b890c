"""
gvasm command-line defines ("-d NAME=value").

A define injects a global constant into the assembled source; on the command
line it is written as NAME=VALUE:

    -d FOO=1 -d BAR=bar

is equivalent to the script block

    .script
      export FOO = 1
      export BAR = "bar"
    .end

Grammar
- The token is split at the first '='. NAME is everything before it and must not
  be empty; VALUE is everything after it and may be empty (or contain more '=').
- VALUE is an int when it is a base-10 integer literal with an optional leading
  '-' (no spaces, no '+', ASCII digits only); otherwise it is kept verbatim.
  Literals of any length are converted, including those longer than the
  interpreter limit for int(str).
- Order is preserved and duplicates are kept: which occurrence wins is decided
  by whoever consumes the defines.
"""
import re
from typing import NamedTuple

from .faults import DefineParseError, FaultCode

_CHUNK = 500


class Define(NamedTuple):
    name: str
    value: str | int


def parse_define(token, /):
    """
    Parse a single NAME=VALUE token into a Define.

    Raises
    - TypeError: when token is not a string.
    - DefineParseError: when the token has no '=' or the NAME is empty. The
      fault's 'input' option carries the offending token verbatim.
    """
    if not isinstance(token, str):
        raise TypeError("parse_define() argument must be a string")

    name, equals, value = token.partition("=")
    if not equals or not name:
        raise DefineParseError(
            "invalid define %r, expected NAME=value" % token,
            title="invalid define",
            code=FaultCode.INVALID_DEFINE,
            input=token,
            hint="write defines as NAME=value (for example: -d FOO=1 -d BAR=bar)",
        )

    if match := re.fullmatch(r"(-?)([0-9]+)", value):
        return Define(name, _integer(*match.groups()))
    return Define(name, value)


def _integer(sign, digits):
    # int(str) refuses more than sys.get_int_max_str_digits() digits, so long
    # literals are folded in chunks that stay below the limit
    number = 0
    for start in range(0, len(digits), _CHUNK):
        chunk = digits[start:start + _CHUNK]
        number = number * 10 ** len(chunk) + int(chunk)
    return -number if sign else number


def parse_defines(tokens, /):
    """
    Parse every token in order; the first malformed one aborts with its fault.

    Returns
    - tuple[Define, ...]
    """
    return tuple(map(parse_define, tokens))


__all__ = (
    "Define",
    "parse_define",
    "parse_defines",
)
