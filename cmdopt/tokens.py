"""
cmdopt tokenizer: normalizes a raw argument vector before matching.

Rules
- The vector is split at the first literal "--"; everything after it is kept
  verbatim as the remainder (a trailing "--" gives an empty remainder).
- Before the split, a leading "--" is reduced to "-" ("--verbose" -> "-verbose").
- A dash token holding "=" anywhere but in last position is split at the first
  "=" into the option token and its value ("-out=a=b" -> "-out", "a=b").
- Order is preserved, and every working token remembers the 1-based position
  of the argument it came from, so faults can say "at third position".
"""
from collections import namedtuple

from .utils import *


class Token(str):
    """
    A working token: a plain string that also knows where it came from.

    Tokens compare, hash and print exactly like the string they hold.
    """
    index = view("index")

    def __new__(cls, value, index=None, /):
        self = super().__new__(cls, value)
        self._index = index
        return self

    def __getnewargs__(self):
        return str(self), self._index


Tokens = namedtuple("Tokens", ("working", "remainder"))


def tokenize(arguments, /):
    """
    Normalize an argument vector into Tokens(working, remainder).

    Both members are tuples; working holds Token instances, remainder holds
    plain strings. Tokenizing an already normalized vector changes nothing.
    """
    if isinstance(arguments, str):
        raise TypeError("tokenize() argument must be an iterable of strings, not a string")
    arguments = list(arguments)
    if not all(isinstance(argument, str) for argument in arguments):
        raise TypeError("tokenize() argument must be an iterable of strings")

    try:
        split = arguments.index("--")
    except ValueError:
        split = len(arguments)

    working = []
    for index, argument in enumerate(arguments[:split], 1):
        if argument.startswith("--"):
            argument = argument[1:]
        if argument.startswith("-") and "=" in argument[:-1]:
            option, value = argument.split("=", 1)
            working += Token(option, index), Token(value, index)
        else:
            working.append(Token(argument, index))

    return Tokens(tuple(working), tuple(str(argument) for argument in arguments[split + 1:]))


__all__ = (
    "Token",
    "Tokens",
    "tokenize",
)
