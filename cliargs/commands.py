"""
cliargs command layer: the CommandLineArgs facade.

What this module provides
- CommandLineArgs: holds a validated Definitions registry and runs the parse
  pipeline for each call:
    raw tokens → Argv (expand equals, expand getopt, validate)
               → parseargv (flat output)
               → groupoutput (grouped result when any definition has a group)
- commandlineargs(definitions, **options): factory returning a CommandLineArgs.

Runtime options
- shell: render faults with rich on stderr (and exit with status 1 on errors)
  instead of raising/warning. Meant for scripts facing end users.
- fancy: render faults inside rich panels.
- colorful: style rendered faults.

Quick start
    from cliargs import commandlineargs

    cli = commandlineargs([
        {"name": "verbose", "alias": "v", "type": bool},
        {"name": "src", "type": str, "multiple": True, "default_option": True},
        {"name": "timeout", "alias": "t", "type": int},
    ])

    options = cli.parse("-vt 1000 one.py two.py")
    # {"verbose": True, "timeout": 1000, "src": ["one.py", "two.py"]}

Each parse call builds its own Argv and output; the registry is never mutated,
so one instance can serve concurrent calls.
"""
import shlex
import sys

from .argv import Argv
from .definitions import Definitions
from .faults import *
from .grouping import groupoutput
from .parsing import parseargv
from .usage import render
from .utils import *


class CommandLineArgs:
    """
    Parse command lines against a fixed set of option definitions.

    The constructor raises a DefinitionException subclass on an invalid schema
    (NameMissingError, InvalidTypeError, InvalidAliasError, DuplicateNameError,
    DuplicateAliasError, InvalidGroupError, InvalidNameError).
    """

    def __init__(self, definitions=(), /, *, shell=False, fancy=False, colorful=True):
        if isinstance(definitions, Definitions):
            self._definitions = definitions
        else:
            self._definitions = Definitions(definitions)
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

    @property
    def definitions(self):
        return self._definitions

    @property
    def shell(self):
        return self._shell

    @property
    def fancy(self):
        return self._fancy

    @property
    def colorful(self):
        return self._colorful

    def __repr__(self):
        return "CommandLineArgs(%r, shell=%r, fancy=%r, colorful=%r)" % (
            list(self._definitions), self._shell, self._fancy, self._colorful
        )

    def __rich_repr__(self):
        yield list(self._definitions)
        yield "shell", self._shell, False
        yield "fancy", self._fancy, False
        yield "colorful", self._colorful, True

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this instance's runtime options merged in.
        """
        trigger(fault, **options | {"shell": self._shell, "fancy": self._fancy, "colorful": self._colorful})

    def parse(self, tokens=Unset, /):
        """
        Parse a command line and return the output (or the grouped output).

        Parameters
        - tokens:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, used as-is.

        Raises
        - UnknownOptionError when an option token matches no definition
          (rendered and exits instead in shell mode).
        - TypeError when tokens is not a string or an iterable of strings.
        """
        if tokens is Unset:
            tokens = sys.argv[1:]
        elif isinstance(tokens, str):
            tokens = shlex.split(tokens)

        argv = Argv(tokens)
        try:
            argv.expandequals().expandgetopt().validate(self._definitions)
        except UsageException as fault:
            self.trigger(fault)

        output = parseargv(self._definitions, argv, trigger=self.trigger)
        return groupoutput(self._definitions, output)

    def getusage(self, options=None, /, **overrides):
        """
        Render the usage guide for these definitions (see cliargs.usage.render).
        """
        return render(self._definitions, options, **overrides)


def commandlineargs(definitions=(), /, **options):
    """
    Create a CommandLineArgs for `definitions`.

    Parameters
    - definitions: Iterable of OptionDefinition or mappings, or a Definitions.
    - **options: runtime options forwarded to CommandLineArgs (shell, fancy, colorful).
    """
    return CommandLineArgs(definitions, **options)


__all__ = (
    "CommandLineArgs",
    "commandlineargs",
)
