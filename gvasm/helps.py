"""
gvasm help texts, version banner and the stdout console they are printed on.

The texts are fixed: they describe the command surface exactly as the
validators implement it, including defaults and accepted values. They are
printed as rich Text (never as markup) so brackets in usage lines survive.
"""
from rich.console import Console
from rich.text import Text

# Encoded as major * 1_000_000 + minor * 1_000 + patch
VERSION = 2003003

console = Console(highlight=False)


def version_string(version=VERSION, /):
    """
    Decode the numeric version into "major.minor.patch".
    """
    major = version // 1000000 % 1000
    minor = version // 1000 % 1000
    patch = version % 1000
    return f"{major}.{minor}.{patch}"


BANNER = f"""\
gvasm - Assembler and disassembler for Game Boy Advance homebrew
by Sean Connelly (@velipso), https://sean.fun
Project Home: https://github.com/velipso/gvasm
SPDX-License-Identifier: 0BSD
Version: {version_string()}"""

SUMMARY = """\
gvasm <command> [<args...>]

Command Summary:
  init      Create a skeleton project
  make      Compile a project into a .gba file
  run       Run a .gvasm file in debug mode
  dis       Disassemble a .gba file into a source
  itest     Run internal tests to verify correct behavior

For more help, try:
  gvasm <command> --help"""

INIT = """\
gvasm init <output> [-t <title>] [-i <initials>] [-m <maker>] [-v <version>]
                    [-r <region>] [-c <code>] [--overwrite]

<output>       The output .gvasm file
-t <title>     Game title (max of 12 characters, default "Game")
-i <initials>  Game initials (must be 2 characters, defaults to title)
-m <maker>     Game maker (must be 2 characters, default "77")
-v <version>   Game version (must be number from 0..255, default 0)
-r <region>    Game region (must be 1 character, default "E"):
                 D  German       E  English       F  French
                 I  Italian      J  Japanese      P  European
                 S  Spanish
-c <code>      Game code (must be 1 character, default "C"):
                 A  Normal game (titles released pre-2003)
                 B  Normal game (titles released 2003+)
                 C  Normal game (newer titles)
                 F  Famicom/Classic NES
                 K  Yoshi and Koro Koro Puzzle (acceleration sensor)
                 P  e-Reader (dot-code scanner)
                 R  Warioware Twisted (rumble and z-axis gyro sensor)
                 U  Baktai 1 and 2 (real-time clock and solar sensor)
                 V  Drill Dozer (rumble)
--overwrite    Overwrite the output file if it exists"""

_DEFINES = """\
-d NAME=value  Define the global NAME, set to value (string or integer), ex:
               -d FOO=1 -d BAR=bar      is equivalent to:
               .script
                 export FOO = 1
                 export BAR = "bar"
               .end"""

MAKE = f"""\
gvasm make <input> [-o <output>] [-d NAME=value] [-w] [-x cmd]

<input>        The input .gvasm file
-o <output>    The output file (default: input with .gba extension)
{_DEFINES}
-w             Watch for file changes, and recompile incrementally
-x cmd         Run 'cmd' after the output file is written, ex:
               -x 'open -F -g {{}}'
               The '{{}}' is replaced with the output filename"""

RUN = f"""\
gvasm run <input> [-d NAME=value] [-w]

<input>        The input .gvasm file
{_DEFINES}
-w             Watch for file changes, and rerun automatically"""

DIS = """\
gvasm dis <input> [-o <output>] [-f <format>]

<input>      The input .gba or .bin file
-o <output>  The output file (default: input with .gvasm extension)
-f <format>  The input format (default: gba)
               gba  Input is a .gba file
               bin  Input is a .bin file (typically for BIOS)"""

ITEST = """\
gvasm itest [<filters...>]

<filters>  Only run internal tests that include any filter"""


def show(*texts):
    """
    Print each text verbatim on stdout, separated by a blank line.
    """
    for index, text in enumerate(texts):
        if index:
            console.print()
        console.print(Text(text), soft_wrap=True)


__all__ = (
    "VERSION",
    "BANNER",
    "SUMMARY",
    "INIT",
    "MAKE",
    "RUN",
    "DIS",
    "ITEST",
    "version_string",
    "show",
)
