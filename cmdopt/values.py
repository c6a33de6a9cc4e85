r"""
cmdopt value types and coercion.

Overview
- Value types (a closed family, one class per variant)
  • String: identity.
  • Int(lower, upper): integer with optional inclusive bounds.
  • Double: floating point number.
  • Bool: exact lowercase "true" / "false".
  • Date(format): datetime parsed with a strftime-style format.
  • Array(inner): comma-separated list of any non-array, non-toggle type.
  • Toggle: presence-only boolean for tagged options (never coerces a token).
  • Custom(transform): caller-supplied str -> value function.

- coerce(raw, type): pure conversion of one raw token; raises a value fault
  without parameter/path context (the parser attaches that context).

Fault mapping
- InvalidValueTypeError: the token cannot be read as the declared primitive
  at all ("abc" for Int, "yes" for Bool, a Custom transform returning None or
  raising TypeError).
- InvalidValueError: the token has the right shape but fails a semantic check
  (Int bounds, Date format, a Custom transform raising ValueError).

Produced values
- str | int | float | bool | datetime | list[...] | object (Custom). The set
  mirrors the value types one to one, so callers can `match` on results.

Quick example:
    >>> Int(1, 100).coerce("42")
    42
    >>> Array(Int(1, 100)).coerce("10,20,30")
    [10, 20, 30]
"""
import builtins
import functools
import operator
import re
from datetime import datetime

from .faults import InvalidValueError, InvalidValueTypeError, ParseError
from .utils import *


class ValueKind(type):
    """
    Metaclass giving every value type a stable typename, read-only fields and
    a compact representation.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens).
    - names listed in __introspectable__ are exposed as read-only properties over
      the private "_{name}" backing fields, and drive __repr__/__rich_repr__,
      equality and hashing.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: view(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class ValueType(metaclass=ValueKind):
    """
    Base of every value type.

    Subclasses implement coerce() and describe(); pytype names the Python type
    the coerced values belong to (bindings are checked against it).
    """
    pytype = object

    def coerce(self, raw, /):
        raise NotImplementedError

    def describe(self):
        return "a value"

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in type(self).__introspectable__)

    def __hash__(self):
        return hash((type(self), *(getattr(self, name) for name in type(self).__introspectable__)))


class String(ValueType):
    pytype = str

    def coerce(self, raw, /):
        if not isinstance(raw, str):
            raise TypeError("coerce() argument must be a string")
        return raw

    def describe(self):
        return "a string"


class Int(ValueType):
    """
    Integer with optional inclusive bounds, e.g. Int(1, 100) accepts 1..100.

    Only plain ASCII decimal integers with an optional sign are accepted;
    whitespace and digit separators are rejected as a wrong type.
    """
    __introspectable__ = ("lower", "upper")
    pytype = int

    def __init__(self, lower=Unset, upper=Unset, /):
        for bound in (lower, upper):
            if isinstance(bound, bool) or not isinstance(bound, int | UnsetType):
                raise TypeError(f"{type(self).__typename__} bounds must be integers")
        if lower is not Unset and upper is not Unset and lower > upper:
            raise ValueError(f"{type(self).__typename__} lower bound cannot be greater than the upper bound")
        self._lower = coalesce(lower)
        self._upper = coalesce(upper)

    def coerce(self, raw, /):
        if not isinstance(raw, str):
            raise TypeError("coerce() argument must be a string")
        if not re.fullmatch(r"[+-]?\d+", raw, re.ASCII):
            raise InvalidValueTypeError(raw=raw)
        try:
            value = int(raw)
        except ValueError:
            # past the interpreter's digit limit
            raise InvalidValueError(raw=raw) from None
        if self.lower is not None and value < self.lower:
            raise InvalidValueError(raw=raw)
        if self.upper is not None and value > self.upper:
            raise InvalidValueError(raw=raw)
        return value

    def describe(self):
        match self.lower, self.upper:
            case None, None:
                return "an integer"
            case lower, None:
                return f"an integer not lower than {lower}"
            case None, upper:
                return f"an integer not greater than {upper}"
            case lower, upper:
                return f"an integer between {lower} and {upper}"


class Double(ValueType):
    pytype = float

    def coerce(self, raw, /):
        if not isinstance(raw, str):
            raise TypeError("coerce() argument must be a string")
        # float() tolerates both; a command line token should not
        if raw != raw.strip() or "_" in raw:
            raise InvalidValueTypeError(raw=raw)
        try:
            return float(raw)
        except ValueError:
            raise InvalidValueTypeError(raw=raw) from None

    def describe(self):
        return "a number"


class Bool(ValueType):
    pytype = bool

    def coerce(self, raw, /):
        match raw:
            case "true":
                return True
            case "false":
                return False
            case str():
                raise InvalidValueTypeError(raw=raw)
            case _:
                raise TypeError("coerce() argument must be a string")

    def describe(self):
        return "'true' or 'false'"


class Date(ValueType):
    """
    Date/time parsed with datetime.strptime; the format uses strftime directives.
    """
    __introspectable__ = ("format",)
    pytype = datetime

    def __init__(self, format="%Y-%m-%d", /):
        if not isinstance(format, str):
            raise TypeError(f"{type(self).__typename__} 'format' must be a string")
        elif not format.strip():
            raise ValueError(f"{type(self).__typename__} 'format' cannot be empty")
        self._format = format

    def coerce(self, raw, /):
        if not isinstance(raw, str):
            raise TypeError("coerce() argument must be a string")
        try:
            return datetime.strptime(raw, self.format)
        except ValueError:
            raise InvalidValueError(raw=raw) from None

    def describe(self):
        return f"a date formatted as {self.format!r}"


class Toggle(ValueType):
    """
    Presence-only boolean, valid on tagged options only.

    "-name" records True and "-noname" records False; no token is consumed.
    """
    pytype = bool

    def coerce(self, raw, /):
        raise TypeError("toggle values are given by presence, they are never coerced from a token")

    def describe(self):
        return "a toggle"


class Array(ValueType):
    """
    Comma-separated list; every piece is coerced with the inner type.

    Empty pieces are kept ("1,,2" has three pieces), so they reach the inner type.
    """
    __introspectable__ = ("inner",)
    pytype = list

    def __init__(self, inner, /):
        if isinstance(inner, builtins.type) and issubclass(inner, ValueType):
            inner = inner()
        if not isinstance(inner, ValueType):
            raise TypeError(f"{type(self).__typename__} 'inner' must be a value type")
        if isinstance(inner, Array):
            raise TypeError(f"{type(self).__typename__} cannot contain another {type(self).__typename__}")
        if isinstance(inner, Toggle):
            raise TypeError(f"{type(self).__typename__} cannot contain a {Toggle.__typename__}")
        self._inner = inner

    def coerce(self, raw, /):
        if not isinstance(raw, str):
            raise TypeError("coerce() argument must be a string")
        values = []
        for piece in raw.split(","):
            try:
                values.append(self.inner.coerce(piece))
            except ParseError as fault:
                raise fault.__replace__(raw=raw, element=piece) from None
        return values

    def describe(self):
        return f"a comma-separated list where each item is {self.inner.describe()}"


class Custom(ValueType):
    """
    Caller-supplied transform.

    Contract of the transform
    - return the converted value;
    - return None or raise TypeError when the token is not of the expected kind;
    - raise ValueError when the token is of the right kind but not acceptable.
    """
    __introspectable__ = ("transform", "pytype", "descr")

    def __init__(self, transform, /, pytype=object, descr=Unset):
        if not callable(transform):
            raise TypeError(f"{type(self).__typename__} 'transform' must be callable")
        if not isinstance(pytype, builtins.type):
            raise TypeError(f"{type(self).__typename__} 'pytype' must be a type")
        if not isinstance(descr, str | UnsetType):
            raise TypeError(f"{type(self).__typename__} 'descr' must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError(f"{type(self).__typename__} 'descr' cannot be empty")
        self._transform = transform
        self._pytype = pytype
        self._descr = coalesce(descr)

    def coerce(self, raw, /):
        if not isinstance(raw, str):
            raise TypeError("coerce() argument must be a string")
        try:
            value = self.transform(raw)
        except ValueError:
            raise InvalidValueError(raw=raw) from None
        except TypeError:
            raise InvalidValueTypeError(raw=raw) from None
        if value is None:
            raise InvalidValueTypeError(raw=raw)
        return value

    def describe(self):
        if self.descr is not None:
            return self.descr
        return "a value accepted by %s" % getattr(self.transform, "__name__", "the converter")


def coerce(raw, type, /):
    """
    Convert one raw token with the given value type.

    Raises
    - TypeError: when type is not a value type, or is a Toggle.
    - InvalidValueTypeError / InvalidValueError: see the module fault mapping.
    """
    if not isinstance(type, ValueType):
        raise TypeError("coerce() second argument must be a value type")
    return type.coerce(raw)


__all__ = (
    "ValueType",
    "String",
    "Int",
    "Double",
    "Bool",
    "Date",
    "Toggle",
    "Array",
    "Custom",
    "coerce",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ValueKind
