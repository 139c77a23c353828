r"""
cliargs argv normalization: token syntax, expansion and validation.

Token syntax
- long option:     --name            r"--(?P<name>\S+)"         ("--" alone is a value)
- short option:    -a                r"-(?P<name>[^\d-])"       (not a digit, not "-")
- combined flags:  -abc              r"-(?P<names>[^\d-]{2,})"  (getopt notation)
- equals notation: --name=value      split on the first "="
- anything else is a value: "-", "-1", "-5.2", "-a1", "hello", "".

Normalization (see Argv)
- expandequals():  "--name=value" → "--name", "value"
- expandgetopt():  "-abc"         → "-a", "-b", "-c"
- validate():      every option token must resolve through the registry,
                   otherwise UnknownOptionError (raised before any output exists).

Every Token remembers the 1-based position and the spelling of the raw token
it was expanded from, so messages can point at what the user actually typed.
"""
import difflib
import re
from collections.abc import Iterable
from typing import NamedTuple

from .faults import *
from .utils import *

LONG = re.compile(r"--(?P<name>\S+)")
SHORT = re.compile(r"-(?P<name>[^\d-])")
COMBINED = re.compile(r"-(?P<names>[^\d-]{2,})")
EQUALS = re.compile(r"(?P<option>--[^\s=]+)=(?P<value>.*)", re.DOTALL)


def isoption(text, /):
    """
    True when a raw string uses long or short option syntax.
    """
    return bool(LONG.fullmatch(text) or SHORT.fullmatch(text))


class Token(NamedTuple):
    """
    One normalized command-line argument.
    """
    text: str
    position: int
    source: str

    @property
    def isoption(self):
        return isoption(self.text)


class Argv:
    """
    Normalized, position-aware view of a raw token sequence.

    Instances are built per parse call and never shared.
    """

    def __init__(self, tokens=(), /):
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("Argv() argument must be an iterable of strings")
        self._tokens = []
        for position, text in enumerate(tokens, 1):
            if not isinstance(text, str):
                raise TypeError("Argv() argument must be an iterable of strings")
            self._tokens.append(Token(text, position, text))

    def __iter__(self):
        return iter(self._tokens)

    def __len__(self):
        return len(self._tokens)

    def __getitem__(self, index):
        return self._tokens[index]

    def __repr__(self):
        return "Argv(%r)" % [token.text for token in self._tokens]

    def __rich_repr__(self):
        yield [token.text for token in self._tokens]

    @property
    def texts(self):
        return tuple(token.text for token in self._tokens)

    def expandequals(self):
        """
        Split "--name=value" into "--name" and "value" (value may be empty).
        """
        expanded = []
        for token in self._tokens:
            if match := EQUALS.fullmatch(token.text):
                expanded.append(token._replace(text=match["option"]))
                expanded.append(token._replace(text=match["value"]))
            else:
                expanded.append(token)
        self._tokens = expanded
        return self

    def expandgetopt(self):
        """
        Split getopt bundles "-abc" into "-a", "-b", "-c".

        Only the last flag of a bundle can be followed by a value token, so it
        alone may take the next argument ("-hdc 3" gives 3 to "c").
        """
        expanded = []
        for token in self._tokens:
            if match := COMBINED.fullmatch(token.text):
                expanded.extend(token._replace(text="-" + name) for name in match["names"])
            else:
                expanded.append(token)
        self._tokens = expanded
        return self

    def validate(self, definitions, /):
        """
        Ensure every option token names a definition, by "--name" or "-alias".

        Raises
        - UnknownOptionError for the first unresolvable option token.
        """
        for token in self._tokens:
            if not token.isoption or definitions.get(token.text) is not None:
                continue

            candidates = []
            for definition in definitions:
                candidates.append("--" + definition.name)
                if definition.alias is not None:
                    candidates.append("-" + definition.alias)
            suggestions = difflib.get_close_matches(token.text, candidates, 5)

            if token.source != token.text:
                message = "unknown option %r (from %r) at %s position" % (token.text, token.source, ordinal(token.position))
            else:
                message = "unknown option %r at %s position" % (token.text, ordinal(token.position))
            try:
                hint = "did you mean %r? check the option definitions for valid names and aliases" % suggestions[0]
            except IndexError:
                hint = "check the option definitions for valid names and aliases"

            raise UnknownOptionError(
                message,
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                token=token.text,
                source=token.source,
                position=token.position,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.UNKNOWN_OPTION),
            )
        return self


__all__ = (
    "Token",
    "Argv",
    "isoption",
)
