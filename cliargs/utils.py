"""
cliargs utilities

Small helpers shared by the registry, the argv normalizer and the parser.

- UnsetType / Unset
  • "not declared" marker for definition fields where None is a real value
    (an option may declare default_value=None).
- rename(callable, name) / @rename("name")
  • give generated callables readable __name__/__qualname__ in tracebacks.
- mirror("attr")
  • read-only property over a private "_attr" field, frozen for containers.
- arrayify(value)
  • "one or many" input (None, a scalar, a string or an iterable) as a tuple.
- ordinal(number)
  • position words for fault messages ("first", "twenty-second", "101st").

    >>> arrayify("standard")
    ('standard',)
    >>> ordinal(3)
    'third'
"""
import builtins
import functools
from collections.abc import Iterable, Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker.

    One instance per process; falsy, printed as "Unset", kept by copy and
    pickle, and closed to subclassing.
    """

    def __or__(self, other, /):
        """
        Allow `str | Unset` in isinstance checks.
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def rename(*parameters):
    """
    Set __name__/__qualname__ on a callable, or return a decorator doing so.

    Forms
    - rename(callable, name) -> callable (renamed in place)
    - rename(name) -> decorator

    Raises
    - TypeError on a non-callable target, a non-string name, a callable whose
      names cannot be updated (built-ins), or a wrong number of arguments.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    """
    Shallow read-only view of a container (tuple, MappingProxyType, frozenset).
    """
    if isinstance(object, Sequence) and not isinstance(object, (str, bytes, bytearray)):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(object)
    if isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Read-only property returning a frozen view of self._<name>.

    Given self._group = ["a", "b"] and group = mirror("group"),
    instance.group -> ("a", "b").
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


def arrayify(object, /):
    """
    Normalize a "one or many" value into a tuple.

    - None / Unset         -> ()
    - str                  -> (str,)
    - non-string iterables -> tuple(iterable)
    - anything else        -> (object,)
    """
    if object is None or object is Unset:
        return ()
    if isinstance(object, str):
        return (object,)
    if isinstance(object, Iterable):
        return tuple(object)
    return (object,)


@functools.cache
def ordinal(number, /):
    """
    English ordinal for a 1-based position.

    Words are used up to ninety-ninth ("first", "twenty-second"); larger values
    use the numeric form with a suffix ("101st", "112th").
    """
    if not isinstance(number, int) or number < 1:
        raise ValueError("ordinal() argument must be a positive integer")

    ones = (
        "", "first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth",
        "tenth", "eleventh", "twelfth", "thirteenth", "fourteenth", "fifteenth", "sixteenth",
        "seventeenth", "eighteenth", "nineteenth",
    )
    tens = ("", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety")
    tenths = ("", "", "twentieth", "thirtieth", "fortieth", "fiftieth", "sixtieth", "seventieth", "eightieth", "ninetieth")

    if number < 20:
        return ones[number]
    if number < 100:
        ten, one = divmod(number, 10)
        return tenths[ten] if not one else "%s-%s" % (tens[ten], ones[one])

    # 111th, 112th, 113th
    if 10 < number % 100 < 20:
        return "%dth" % number
    return "%d%s" % (number, {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th"))


__all__ = (
    # Functions
    "rename",
    "mirror",
    "arrayify",
    "ordinal",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
