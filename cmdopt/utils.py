"""
cmdopt helpers shared by the tree, parser, renderer and faults layers.

- Unset: "argument not given" marker, distinct from None (None may be a real value).
- coalesce(value, default): materialize Unset, keep every other value untouched.
- rename(...): give generated callables readable names in tracebacks and reprs.
- view(name): read-only property exposing "_name" as an immutable snapshot.
- ordinal(n): "first", "second", ..., "11th", "22nd" for position-first messages.
"""
import builtins
import functools
from collections.abc import Mapping, Sequence, Set
from types import MappingProxyType
from typing import final

_WORDS = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")


@final
class UnsetType:
    """
    Type of the Unset marker; one instance per process, falsy, not subclassable.

    Supports `str | UnsetType` in isinstance() checks and annotations.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
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


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Return default when object is Unset, object otherwise (None, 0 and "" included).
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    rename(callable, name) sets __name__ and __qualname__ and returns the callable;
    rename(name) returns a decorator doing the same.
    """
    if len(parameters) == 1:
        name, = parameters
        if not isinstance(name, str):
            raise TypeError("@rename() argument must be a string")

        def decorator(callable):
            return rename(callable, name)

        return decorator

    if len(parameters) != 2:
        raise TypeError("rename() takes 1 or 2 arguments but %d were given" % len(parameters))

    callable, name = parameters
    if not builtins.callable(callable):
        raise TypeError("rename() first argument must be callable")
    if not isinstance(name, str):
        raise TypeError("rename() second argument must be a string")
    try:
        callable.__name__ = callable.__qualname__ = name
    except (AttributeError, TypeError):
        raise TypeError("rename() cannot update the name of %r" % callable) from None
    return callable


def view(name, /):
    """
    Build a read-only property over the private field "_{name}".

    Lists come back as tuples, dicts as mapping proxies and sets as frozensets,
    so callers never get a handle on internal state.
    """
    if not isinstance(name, str):
        raise TypeError("view() argument must be a string")
    field = "_" + name

    def getter(self):
        match getattr(self, field):
            case str() as value:
                return value
            case Sequence() as value:
                return tuple(value)
            case Mapping() as value:
                return MappingProxyType(value)
            case Set() as value:
                return frozenset(value)
            case value:
                return value

    return property(rename(getter, name))


@functools.lru_cache(maxsize=None, typed=True)
def ordinal(number, /):
    """
    Ordinal label of a 1-based position: words up to ten, then "11th", "21st", ...
    """
    if isinstance(number, bool) or not isinstance(number, int):
        raise TypeError("ordinal() argument must be an integer")
    if number < 1:
        raise ValueError("ordinal() argument must be a positive integer")
    if number <= len(_WORDS):
        return _WORDS[number - 1]
    if number % 100 in (11, 12, 13):
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return "%d%s" % (number, suffix)


__all__ = (
    "coalesce",
    "rename",
    "view",
    "ordinal",
    "UnsetType",
    "Unset",
)
