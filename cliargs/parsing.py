"""
cliargs parsing loop: assign normalized tokens to definitions.

State machine
- state: the active definition (None at start).
- option token → resolve; seed the output the first time the name is seen
  (definition.getinitialvalue()); a boolean option is set to True and leaves
  nothing active, any other option becomes active and waits for a value.
- value token → bound to the active definition, or to the default option when
  nothing is active; with neither, the value is discarded (DiscardedValueWarning).
  The value goes through the definition's type (when declared) and is written
  to the output. Single-valued definitions are released after one value,
  multiple-valued ones stay active until the next option token.

Placeholders
- Output keeps a side set of names whose value is only a default (or the
  initial empty list of a multiple-valued option). The first real value drops
  the placeholder, so explicit values never append onto a default list.
"""
from .faults import *
from .utils import *


class Output(dict):
    """
    Flat option-name → value mapping under construction.

    A plain dict with a side table of placeholder names; export() returns the
    finished mapping without it.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.placeholders = set()

    def seed(self, definition, value, /, *, placeholder=False):
        """
        Store a value that is not user input (default or initial value).
        """
        self[definition.name] = value
        if placeholder:
            self.placeholders.add(definition.name)
        else:
            self.placeholders.discard(definition.name)

    def write(self, definition, value, /):
        """
        Store a user-supplied value following the accumulation rule.
        """
        name = definition.name
        if name in self.placeholders:
            self.placeholders.discard(name)
            self[name] = [value] if definition.multiple else value
        elif definition.multiple and isinstance(self.get(name), list):
            self[name].append(value)
        elif definition.multiple:
            self[name] = [value]
        else:
            self[name] = value

    def export(self):
        return dict(self)

    def __repr__(self):
        return "Output(%s)" % super().__repr__()


def _activate(output, definition):
    if definition.name not in output:
        output.seed(definition, definition.getinitialvalue(), placeholder=definition.multiple)


def parseargv(definitions, argv, /, *, trigger=trigger):
    """
    Walk an already normalized and validated argv and build the flat output.

    Parameters
    - definitions: Definitions registry (lookups, default option, defaults).
    - argv: iterable of Token (see cliargs.argv.Argv).
    - trigger: callable used to surface non-fatal faults (warnings).

    Returns
    - dict mapping option names to values (lists for multiple-valued options).

    Notes
    - coercion errors raised by a definition's type propagate unchanged.
    """
    output = definitions.createoutput()
    active = None

    for token in argv:
        if token.isoption:
            definition = definitions.get(token.text)
            _activate(output, definition)
            if definition.isboolean():
                output.write(definition, True)
                active = None
            else:
                active = definition
            continue

        if active is None:
            if (active := definitions.getdefault()) is None:
                trigger(DiscardedValueWarning(
                    "value %r at %s position is not claimed by any option" % (token.text, ordinal(token.position)),
                    title="discarded value",
                    code=FaultCode.DISCARDED_VALUE,
                    token=token.text,
                    position=token.position,
                    hint="pass it after an option that takes a value, or declare a default option",
                    docs=getdoc(FaultCode.DISCARDED_VALUE),
                ))
                continue
            _activate(output, active)

        output.write(active, active.type(token.text) if active.type is not None else token.text)

        if not active.multiple:
            active = None

    return output.export()


__all__ = (
    "Output",
    "parseargv",
)
