r"""
cliargs option definitions and the definition registry.

Overview
- OptionDefinition: one declared option (name, coercion type, alias, arity and
  grouping metadata) plus an opaque bag of extra metadata reserved for usage
  renderers (description, type_label, ...). The parser never looks at it.
- Definitions: the ordered, immutable registry built once per CommandLineArgs.
  It validates the whole schema up front and answers lookups while parsing.

Metadata (sanitized on construction)
- name: required, non-blank string (NameMissingError otherwise) without
  whitespace or "=" (InvalidNameError otherwise).
- type: None or a callable converter (InvalidTypeError otherwise). `bool` marks
  a presence-only flag.
- alias: None or a single character that is neither a digit nor "-"
  (InvalidAliasError otherwise).
- multiple / default_option: coerced to bool.
- default_value: any value, Unset when not declared (None is a valid default).
- group: None, a string or an iterable of strings; normalized to a tuple of
  unique, non-blank names; "_all" and "_none" are reserved (InvalidGroupError otherwise).
- extra keywords: kept in metadata, except near-misses of a field name
  ("defaultOption", "Default_Value") which raise TypeError.

Registry invariants
- names are unique (DuplicateNameError), aliases are unique (DuplicateAliasError).
- several default_option definitions are tolerated; the first one wins.

Quick example:
    >>> definitions = Definitions([
    ...     {"name": "verbose", "alias": "v", "type": bool},
    ...     {"name": "files", "type": str, "multiple": True, "default_option": True},
    ... ])
    >>> definitions.get("-v").name
    'verbose'
    >>> definitions.getdefault().name
    'files'
"""
import copy
import functools
import operator
from collections.abc import Iterable, Mapping, Sequence

from .argv import LONG, SHORT
from .faults import *
from .grouping import ALL, NONE
from .parsing import Output
from .utils import *


class DefinitionType(type):
    """
    Metaclass giving definition classes stable introspection.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_<name>" backing field (see mirror()).
    - Provide compact __repr__/__rich_repr__ implementations for diagnostics.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__name__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers, skipping unset fields.
            """
            for name in type(self).__introspectable__:
                object = getattr(self, name)
                if object is Unset or (name == "metadata" and not object):
                    continue
                yield name, object
        self.__rich_repr__ = __rich_repr__

        return self


_FIELDS = {
    field.replace("_", ""): field
    for field in ("name", "type", "alias", "multiple", "default_option", "default_value", "group")
}


def _sanitize_name(metadata, /):
    """
    Internal: a definition must carry a non-blank string name that a
    "--name" token can spell (no whitespace, no "=").
    """
    name = metadata["name"]
    if name is Unset or name is None or (isinstance(name, str) and not name.strip()):
        raise NameMissingError(
            "option definition is missing its name",
            title="name missing",
            code=FaultCode.NAME_MISSING,
            hint="give every option definition a 'name' (for example: name='verbose')",
            docs=getdoc(FaultCode.NAME_MISSING),
        )
    if not isinstance(name, str):
        raise TypeError("option definition 'name' must be a string")
    if any(character.isspace() or character == "=" for character in name):
        raise InvalidNameError(
            "option name %r contains whitespace or '='" % name,
            title="invalid name",
            code=FaultCode.INVALID_NAME,
            name=name,
            hint="use a name without spaces or '=' so '--name' can reach it (for example: name='dry-run')",
            docs=getdoc(FaultCode.INVALID_NAME),
        )


def _sanitize_type(metadata, /):
    """
    Internal: 'type' is opaque, only callability is enforced.
    """
    if (type := metadata["type"]) is not None and not callable(type):
        raise InvalidTypeError(
            "option %r has a type that is not callable: %r" % (metadata["name"], type),
            title="invalid type",
            code=FaultCode.INVALID_TYPE,
            name=metadata["name"],
            hint="use a callable that converts a string (for example: type=int), or omit 'type'",
            docs=getdoc(FaultCode.INVALID_TYPE),
        )


def _sanitize_alias(metadata, /):
    """
    Internal: an alias is exactly one character, neither a digit nor a hyphen.
    """
    if (alias := metadata["alias"]) is None:
        return
    if not isinstance(alias, str) or len(alias) != 1 or alias.isdigit() or alias == "-":
        raise InvalidAliasError(
            "option %r has an invalid alias %r" % (metadata["name"], alias),
            title="invalid alias",
            code=FaultCode.INVALID_ALIAS,
            name=metadata["name"],
            alias=alias,
            hint="an alias must be a single character that is not a digit or '-' (for example: alias='v')",
            docs=getdoc(FaultCode.INVALID_ALIAS),
        )


def _sanitize_group(metadata, /):
    """
    Internal: normalize 'group' into a tuple of unique, non-blank names (or None).
    """
    if metadata["group"] is None:
        return
    if not isinstance(metadata["group"], str | Iterable):
        groups = (metadata["group"],)
    else:
        groups = arrayify(metadata["group"])

    sanitized = []
    for group in groups:
        if not isinstance(group, str) or not group.strip() or group in (ALL, NONE):
            raise InvalidGroupError(
                "option %r has an invalid group %r" % (metadata["name"], group),
                title="invalid group",
                code=FaultCode.INVALID_GROUP,
                name=metadata["name"],
                group=group,
                hint="use a non-empty group name other than %r and %r, or a list of them (for example: group=['standard', 'main'])" % (ALL, NONE),
                docs=getdoc(FaultCode.INVALID_GROUP),
            )
        if group not in sanitized:
            sanitized.append(group)
    metadata["group"] = tuple(sanitized) or None


def _sanitize_metadata(metadata, /):
    """
    Internal: extra keywords must not be misspelled fields ("defaultOption").
    """
    for key in metadata:
        if field := _FIELDS.get(key.replace("_", "").replace("-", "").lower()):
            raise TypeError("option definition got %r; did you mean %r?" % (key, field))


class OptionDefinition[_T](metaclass=DefinitionType):
    """
    Describes one command-line option.

    The only required field is `name`; with nothing else declared an option
    yields True when present alone and the raw string when followed by a value:

    | Command line                | parse() output                       |
    |-----------------------------|--------------------------------------|
    | --file                      | {"file": True}                       |
    | --file lib.py --verbose     | {"file": "lib.py", "verbose": True}  |
    | --depth 2                   | {"depth": "2"}                       |

    With `type=int`, `--depth` alone yields None and `--depth 2` yields 2.

    Every extra keyword is kept verbatim in `metadata` for usage renderers.
    """

    __introspectable__ = (
        "name",
        "type",
        "alias",
        "multiple",
        "default_option",
        "default_value",
        "group",
        "metadata",
    )

    def __new__(
            cls,
            name=Unset,
            type=None,
            alias=None,
            multiple=False,
            default_option=False,
            default_value=Unset,
            group=None,
            **metadata
    ):
        definition = {
            "name": name,
            "type": type,
            "alias": alias,
            "multiple": bool(multiple),
            "default_option": bool(default_option),
            "default_value": default_value,
            "group": group,
        }
        _sanitize_name(definition)
        _sanitize_type(definition)
        _sanitize_alias(definition)
        _sanitize_group(definition)
        _sanitize_metadata(metadata)

        self = super().__new__(cls)
        for name, object in definition.items():
            setattr(self, "_" + name, object)
        self._metadata = dict(metadata)
        return self

    @classmethod
    def fromdescriptor(cls, descriptor, /):
        """
        Build a definition from a mapping descriptor ({"name": ..., "type": ...}).
        """
        if isinstance(descriptor, cls):
            return descriptor
        if not isinstance(descriptor, Mapping):
            raise TypeError("option definition must be a mapping or an OptionDefinition")
        return cls(**descriptor)

    def isboolean(self):
        return self._type is bool

    def getinitialvalue(self):
        """
        Value seeded into the output the first time the option is seen.
        """
        if self._multiple:
            return []
        if self.isboolean() or self._type is None:
            return True
        return None

    def __eq__(self, other):
        if not isinstance(other, OptionDefinition):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in type(self).__introspectable__)

    def __hash__(self):
        return hash((type(self), self._name))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self


class Definitions(Sequence):
    """
    Ordered, validated and immutable registry of OptionDefinition.

    Construction fails on the first schema fault (see module docs); no partial
    registry is ever produced.
    """

    def __init__(self, definitions=(), /):
        if isinstance(definitions, str | Mapping) or not isinstance(definitions, Iterable):
            raise TypeError("Definitions() argument must be an iterable of option definitions")

        definitions = tuple(map(OptionDefinition.fromdescriptor, definitions))

        names = {}
        aliases = {}
        for definition in definitions:
            if definition.name in names:
                raise DuplicateNameError(
                    "option name %r is defined more than once" % definition.name,
                    title="duplicate name",
                    code=FaultCode.DUPLICATE_NAME,
                    name=definition.name,
                    hint="rename or remove one of the %r definitions" % definition.name,
                    docs=getdoc(FaultCode.DUPLICATE_NAME),
                )
            names[definition.name] = definition

            if definition.alias is None:
                continue
            if definition.alias in aliases:
                raise DuplicateAliasError(
                    "alias %r is used by both %r and %r" % (
                        definition.alias, aliases[definition.alias].name, definition.name
                    ),
                    title="duplicate alias",
                    code=FaultCode.DUPLICATE_ALIAS,
                    name=definition.name,
                    alias=definition.alias,
                    hint="give %r a different alias or none at all" % definition.name,
                    docs=getdoc(FaultCode.DUPLICATE_ALIAS),
                )
            aliases[definition.alias] = definition

        self._definitions = definitions
        self._names = names
        self._aliases = aliases
        self._default = next((definition for definition in definitions if definition.default_option), None)

    def __getitem__(self, index):
        return self._definitions[index]

    def __len__(self):
        return len(self._definitions)

    def __contains__(self, object):
        if isinstance(object, str):
            return object in self._names
        return object in self._definitions

    def __repr__(self):
        return "Definitions(%r)" % (list(self._definitions),)

    def __rich_repr__(self):
        yield from self._definitions

    def get(self, token, /):
        """
        Resolve an option token ("--name" or "-a") to its definition, or None.
        """
        token = getattr(token, "text", token)
        if not isinstance(token, str):
            raise TypeError("get() argument must be a string or a token")
        if match := SHORT.fullmatch(token):
            return self._aliases.get(match["name"])
        if match := LONG.fullmatch(token):
            return self._names.get(match["name"])
        return None

    def getdefault(self):
        """
        The first definition flagged default_option, or None.
        """
        return self._default

    def createoutput(self):
        """
        Fresh Output seeded with every declared default value.

        Container defaults are copied so results never alias the registry, and
        defaults of multiple-valued options are tagged as placeholders.
        """
        output = Output()
        for definition in self._definitions:
            if definition.default_value is Unset:
                continue
            output.seed(
                definition,
                copy.copy(definition._default_value),
                placeholder=definition.multiple,
            )
        return output

    def isgrouped(self):
        return any(definition.group for definition in self._definitions)

    def wheregrouped(self):
        return tuple(definition for definition in self._definitions if definition.group)

    def wherenotgrouped(self):
        return tuple(definition for definition in self._definitions if not definition.group)


__all__ = (
    "OptionDefinition",
    "Definitions",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del DefinitionType
