"""
cliargs faults (errors and warnings) and rendering.

Contents
- FaultCode: stable numeric code per fault, 101xx for definitions, 111xx for
  usage and 121xx for warnings.
- DefinitionException: schema faults raised while building the registry
  (programmer errors, fixed in the option definitions).
- UsageException: faults raised while parsing a command line (user errors,
  fixed on the command line).
- CommandLineWarning: non-fatal notices surfaced during parsing.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): per-code documentation supplied by the host application.

Messages
- lowercase, one sentence, position-first for usage faults ("unknown option
  '--x' at second position"), followed by a single hint.

Integration
- Library code raises faults with their code/title/hint already attached.
- The facade catches usage faults and re-surfaces them via trigger(fault, **ctx):
  in non-shell mode they are raised again, in shell mode they are rendered via
  rich on stderr and the process exits.
"""
import copy
import inspect
import os
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    numeric codes attached to every fault through options["code"].

    ranges
    - definitions (101xx)
      • NAME_MISSING, INVALID_TYPE, INVALID_ALIAS, DUPLICATE_NAME,
        DUPLICATE_ALIAS, INVALID_GROUP, INVALID_NAME
    - usage (111xx)
      • UNKNOWN_OPTION
    - warnings (121xx)
      • DISCARDED_VALUE
    """
    # --- definition errors (10xxx) ---
    NAME_MISSING                = 10101
    INVALID_TYPE                = 10102
    INVALID_ALIAS               = 10103
    DUPLICATE_NAME              = 10104
    DUPLICATE_ALIAS             = 10105
    INVALID_GROUP               = 10106
    INVALID_NAME                = 10107

    # --- usage errors (11xxx) ---
    UNKNOWN_OPTION              = 11112

    # --- warnings (12xxx) ---
    DISCARDED_VALUE             = 12121

    def normalize(self):
        """
        code as shown in fault headers: the label from __main__.__codes__
        when the host defines one for it, the number otherwise.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _progname(options):
    main = __import__("__main__")
    try:
        return getattr(main, "__prog__")
    except AttributeError:
        return options.get("prog") or os.path.basename(sys.argv[0]) or "cli"


def _render(fault, palette, heading):
    """
    shared rich layout for exceptions and warnings: header, message, hint.
    """
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))
    colorful = fault.options.get("colorful", True)
    fancy = fault.options.get("fancy", False)

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    code = fault.options.get("code")
    header = Text.assemble(
        "[ ",
        text(_progname(fault.options), styler("prog-name")),
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "-", styler("code")),
        " | ",
        text(fault.options.get("title", type(fault).__name__).title(), styler(heading)),
        " ]"
    )
    message = text(fault.message, styler(heading.replace("title", "message")))

    body = [message]
    if hint := fault.options.get("hint"):
        body.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
    if docs := fault.options.get("docs"):
        body.append(text(docs, styler("docs")))

    if fancy:
        return Panel(Group(*body), title=header, title_align="left")
    return Group(header, *body)


class CommandLineException(Exception):
    """
    base type of every cliargs error.

    carries a lowercased one-sentence message and a read-only mapping of
    options (code, title, hint, docs and any context such as name, alias,
    token, position or suggestions). the message is also the str() form.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "#737373",
        }, "error-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DefinitionException(CommandLineException): ...
class NameMissingError(DefinitionException): ...
class InvalidTypeError(DefinitionException): ...
class InvalidAliasError(DefinitionException): ...
class DuplicateNameError(DefinitionException): ...
class DuplicateAliasError(DefinitionException): ...
class InvalidGroupError(DefinitionException): ...
class InvalidNameError(DefinitionException): ...

class UsageException(CommandLineException): ...
class UnknownOptionError(UsageException): ...


class CommandLineWarning(Warning):
    """
    base type of every cliargs warning (same payload as CommandLineException).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
            "docs": "#737373",
        }, "warning-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DiscardedValueWarning(CommandLineWarning): ...


def trigger(fault, /, **options):
    """
    copy `fault` with `options` merged in (copy.replace) and fire it.

    CommandLineArgs passes its shell, fancy and colorful flags here. Outside
    shell mode errors are raised and warnings go to warnings.warn; in shell
    mode both are printed on the stderr console and errors exit with status 1.

    Raises
    - TypeError when `fault` lacks __trigger__ or __replace__.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    documentation line for `code` from __main__.__docs__, or None.

    faults store it under options["docs"]; the renderer prints it last.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "CommandLineException",
    "DefinitionException",
    "NameMissingError",
    "InvalidTypeError",
    "InvalidAliasError",
    "DuplicateNameError",
    "DuplicateAliasError",
    "InvalidGroupError",
    "InvalidNameError",
    "UsageException",
    "UnknownOptionError",
    "CommandLineWarning",
    "DiscardedValueWarning",
    "trigger",
    "getdoc",
)
