"""
cmdopt faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing parse
  fault. Codes are grouped by domain to keep copy consistent and make
  logs/searches predictable.
- ParseError: base type that carries a message plus context (offending token,
  value, parameter and command path) and knows how to render itself in a
  friendly, lowercased and actionable way.
- trigger(): central entry point to surface a fault (raise, or render + exit).

UX goals
- Position-first messages: when the offending token is known, the message
  includes its ordinal position (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- parse() raises exactly one ParseError; it never renders or exits.
- Hosts call trigger(fault, shell=True) (or use invoke()) to print the fault
  followed by the usage of the command path where it happened, then exit(1).
"""
import difflib
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .render import display
from .utils import *

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • MISSING_SUBCOMMAND
    - options (1111x)
      • UNKNOWN_OPTION, AMBIGUOUS_OPTION, MISSING_VALUE
    - values (1112x)
      • INVALID_VALUE, INVALID_VALUE_TYPE
    - configuration surfacing at parse time (1310x)
      • INVALID_PARAMETER_TYPE

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- routing errors (11xxx) ---
    MISSING_SUBCOMMAND          = 11103

    # --- option errors (11xxx) ---
    UNKNOWN_OPTION              = 11112
    AMBIGUOUS_OPTION            = 11113
    MISSING_VALUE               = 11117

    # --- value errors (11xxx) ---
    INVALID_VALUE               = 11124
    INVALID_VALUE_TYPE          = 11126

    # --- configuration errors (13xxx) ---
    INVALID_PARAMETER_TYPE      = 13101

    def normalize(self):
        """
        label shown in the fault header; a __codes__ mapping in __main__
        may relabel any code, the number is used otherwise.
        """
        labels = getattr(__import__("__main__"), "__codes__", {})
        return str(labels.get(self, self.value))


def _where(index):
    return "" if index is None else " at %s position" % ordinal(index)


def _subject(parameter):
    # options read as "-name", positionals as "<name>"
    if parameter is None:
        return "value"
    if parameter.tagged:
        return "option '-%s'" % parameter.token
    return "parameter <%s>" % parameter.token


def _value(fault):
    # array faults also name the failing item
    element = fault.options.get("element")
    if element is None or element == fault.raw:
        return repr(fault.raw)
    return "%r in %r" % (element, fault.raw)


def _route(path):
    return " ".join(node.token for node in path)


class ParseError(Exception):
    """
    base type for every fault raised by parse().

    context
    - every name in __fields__ is exposed as a read-only attribute, read from
      the options mapping (missing names fall back to __defaults__).
    - rendering options (shell, colorful, fancy, ratio) live in the same
      mapping; __replace__ merges more of either kind into a copy.
    """
    __fields__ = ("path", "index")
    __defaults__ = MappingProxyType({
        "path": (),
        "index": None,
        "token": None,
        "raw": None,
        "parameter": None,
        "candidates": (),
        "suggestions": (),
    })

    code = None
    title = "parse error"

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        for name in cls.__fields__:
            if name not in cls.__dict__:
                setattr(cls, name, property(rename(
                    lambda self, name=name: self.options.get(name, ParseError.__defaults__[name]),
                    name
                )))

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        if "path" in options:
            options["path"] = tuple(options["path"])
        self._message = message
        self.options = MappingProxyType(options)
        super().__init__(message)

    @property
    def path(self):
        return self.options.get("path", ())

    @property
    def index(self):
        return self.options.get("index")

    @property
    def message(self):
        return coalesce(self._message, self.describe())

    @property
    def hint(self):
        return self.options.get("hint", self.advise())

    def describe(self):
        return self.title

    def advise(self):
        return "check the usage below"

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

        palette = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def part(fragment, role):
            # plain text when colors are off
            return str(fragment or ""), palette[role] if colorful else ""

        code = self.code.normalize() if self.code is not None else ""
        prog = getattr(main, "__prog__", self.path[0].token if self.path else "cmdopt")

        header = Text.assemble(
            "[ ", part(prog, "prog-name"), " — ", part(code, "code"), " | ", part(self.title.title(), "error-title"), " ]"
        )
        body = Text.assemble(part(self.message, "error-message"))
        hint = Text.assemble(part(" → ", "hint-arrow"), part(self.hint, "hint"))

        if not self.options.get("fancy", False):
            return Group(header, body, hint)
        width = None
        if "ratio" in self.options:
            width = int((console.width - 4) * self.options["ratio"])
        return Panel(Group(body, hint), title=header, title_align="left", width=width)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.path:
            console.print()
            display(
                self.path,
                colorful=self.options.get("colorful", False),
                fancy=self.options.get("fancy", False),
                console=console,
            )
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self._message, **{**self.options, **overrides})


class UnknownOptionError(ParseError):
    __fields__ = ("token", "path", "index")
    code = FaultCode.UNKNOWN_OPTION
    title = "unknown option"

    @property
    def suggestions(self):
        # close spellings among the options of the command the token was tried against
        if "suggestions" in self.options:
            return tuple(self.options["suggestions"])
        if not self.path or self.token is None:
            return ()
        choices = ["-" + option.token for option in self.path[-1].options]
        return tuple(difflib.get_close_matches(self.token, choices, 5))

    def describe(self):
        return "unknown option %r%s" % (self.token, _where(self.index))

    def advise(self):
        try:
            return "did you mean %r? the usage below lists every option of '%s'" % (
                self.suggestions[0], _route(self.path)
            )
        except IndexError:
            return "check the options of '%s' in the usage below" % _route(self.path)


class AmbiguousOptionError(ParseError):
    __fields__ = ("token", "candidates", "path", "index")
    code = FaultCode.AMBIGUOUS_OPTION
    title = "ambiguous option"

    def describe(self):
        return "ambiguous option %r%s matches %s" % (
            self.token, _where(self.index), ", ".join(map(repr, self.candidates))
        )

    def advise(self):
        if not self.candidates:
            return "type more characters so that only one option matches"
        return "type more characters so that only one option matches (for example: -%s)" % self.candidates[0]


class MissingValueError(ParseError):
    __fields__ = ("parameter", "path", "index")
    code = FaultCode.MISSING_VALUE
    title = "missing value"

    def describe(self):
        return "missing value for %s%s" % (_subject(self.parameter), _where(self.index))

    def advise(self):
        if self.parameter is not None and self.parameter.tagged:
            return "add a value after the option (for example: -%s <value> or -%s=<value>)" % (
                self.parameter.token, self.parameter.token
            )
        return "add the missing parameters in the order shown by the usage below"


class InvalidValueError(ParseError):
    __fields__ = ("parameter", "raw", "path", "index")
    code = FaultCode.INVALID_VALUE
    title = "invalid value"

    def describe(self):
        return "invalid value %s for %s%s" % (_value(self), _subject(self.parameter), _where(self.index))

    def advise(self):
        if self.parameter is None:
            return "check the accepted values in the usage below"
        return "expected %s" % self.parameter.type.describe()


class InvalidValueTypeError(ParseError):
    __fields__ = ("parameter", "raw", "path", "index")
    code = FaultCode.INVALID_VALUE_TYPE
    title = "invalid value type"

    def describe(self):
        if self.parameter is None:
            return "value %s has the wrong type%s" % (_value(self), _where(self.index))
        return "value %s for %s%s is not %s" % (
            _value(self), _subject(self.parameter), _where(self.index), self.parameter.type.describe()
        )

    def advise(self):
        if self.parameter is None:
            return "check the accepted values in the usage below"
        return "pass %s instead" % self.parameter.type.describe()


class MissingSubcommandError(ParseError):
    """
    raised when a command requiring a subcommand got none; token is the
    argument found in its place, if any.
    """
    __fields__ = ("token", "path", "index")
    code = FaultCode.MISSING_SUBCOMMAND
    title = "missing subcommand"

    @property
    def suggestions(self):
        if "suggestions" in self.options:
            return tuple(self.options["suggestions"])
        if not self.path or self.token is None:
            return ()
        return tuple(difflib.get_close_matches(self.token, [command.token for command in self.path[-1].commands], 5))

    def describe(self):
        if not self.path:
            return "missing subcommand"
        if self.token is not None:
            return "missing subcommand for '%s', %r%s is not one of them" % (
                _route(self.path), self.token, _where(self.index)
            )
        return "missing subcommand for '%s'" % _route(self.path)

    def advise(self):
        if self.suggestions:
            return "did you mean %r?" % self.suggestions[0]
        if not self.path or not self.path[-1].commands:
            return "choose a subcommand from the usage below"
        return "choose one of: %s" % ", ".join(command.token for command in self.path[-1].commands)


class InvalidParameterTypeError(ParseError):
    __fields__ = ("parameter", "path")
    code = FaultCode.INVALID_PARAMETER_TYPE
    title = "invalid parameter type"

    def describe(self):
        return "toggle type is not allowed on %s" % _subject(self.parameter)

    def advise(self):
        return "declare toggles with option() instead of parameter() or optional()"


def trigger(fault, /, **options):
    """
    surface a fault: options (shell, colorful, fancy, ratio, hint, ...) are merged
    in with __replace__, then __trigger__ raises it or, in shell mode, prints it
    with the usage of its command path and exits with status 1.
    """
    for method in ("__replace__", "__trigger__"):
        if not callable(getattr(fault, method, None)):
            raise TypeError("trigger() argument must define %s()" % method)
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "ParseError",
    "UnknownOptionError",
    "AmbiguousOptionError",
    "MissingValueError",
    "InvalidValueError",
    "InvalidValueTypeError",
    "MissingSubcommandError",
    "InvalidParameterTypeError",
    "trigger",
)
