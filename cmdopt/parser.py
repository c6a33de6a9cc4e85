r"""
cmdopt parser: matches a tokenized argument vector against a command tree.

Algorithm (per node, starting at the root)
- Phase 1, while tokens remain:
  • an option-like token ("-" followed by at least one non-dash character) is
    resolved against the node's options, by precedence:
      1. exact token,
      2. unique prefix (several prefixes -> AmbiguousOptionError),
      3. negated toggle: "no" + token, exactly or by unique prefix.
    A toggle records True (False when negated) and consumes nothing else; any
    other option consumes the next token as its value, whatever it looks like.
  • any other token is compared with the node's sub-commands (exact equality
    only); a match descends into the sub-command, which owns the rest of the
    stream. No match ends phase 1 and leaves the token in place.
- Phase 2, on the node where descent stopped:
  • a Toggle typed positional parameter raises InvalidParameterTypeError;
  • FIXED then OPTIONAL parameters consume one token each in declaration
    order; options met in front of, between or after them are still resolved;
  • running out of tokens stops OPTIONAL parameters and fails FIXED ones.
- Termination: a node with sub-commands and the required flag set fails with
  MissingSubcommandError when no sub-command was given.

Everything left (unmatched working tokens, then the tokens after "--") is the
remainder. Parsing never mutates the tree and never calls bindings:
ParseResult.apply() does, in the order values were matched.
"""
import shlex
import sys
from collections import deque

from .faults import *
from .nodes import Command, ParameterKind
from .tokens import tokenize
from .utils import *
from .values import Array, Toggle


def _optionlike(token):
    return token.startswith("-") and bool(token.lstrip("-"))


class ParseResult:
    """
    Outcome of a successful parse.

    Fields (read-only views)
    - path: matched commands, root first; command is the last one.
    - parameters: positional values, flat, in match order.
    - options: option token -> value (last wins; arrays accumulate).
    - remainder: unconsumed working tokens followed by the tokens after "--".
    - assignments: (parameter, value) pairs in match order, as fed to bindings.
    """
    path = view("path")
    parameters = view("parameters")
    options = view("options")
    remainder = view("remainder")
    assignments = view("assignments")

    def __init__(self, path, parameters, options, remainder, assignments, /):
        self._path = tuple(path)
        self._parameters = tuple(parameters)
        self._options = dict(options)
        self._remainder = tuple(remainder)
        self._assignments = tuple(assignments)

    @property
    def command(self):
        return self._path[-1]

    def apply(self):
        """
        Run the bindings of every matched parameter and option, in match order.

        Returns self so that parse(...).apply() reads naturally.
        """
        for parameter, value in self._assignments:
            if parameter.binding is not None:
                parameter.binding(value)
        return self

    def get(self, token, default=None, /):
        try:
            return self[token]
        except KeyError:
            return default

    def __getitem__(self, token):
        # options first, then positional parameters of the matched path
        if token in self._options:
            return self._options[token]
        for parameter, value in self._assignments:
            if parameter.positional and parameter.token == token:
                return value
        raise KeyError(token)

    def __contains__(self, token):
        try:
            self[token]
        except KeyError:
            return False
        return True

    def __rich_repr__(self):
        yield "path", tuple(node.token for node in self._path)
        yield "parameters", self._parameters
        yield "options", self._options
        yield "remainder", self._remainder

    def __repr__(self):
        return f"parse-result({', '.join('%s=%r' % pair for pair in self.__rich_repr__())})"


class _Matcher:
    """
    Mutable matching state for one parse() call.
    """

    def __init__(self, tree, tokens, /):
        self.tokens = deque(tokens)
        self.path = [tree]
        self.parameters = []
        self.options = {}
        self.assignments = []
        self.cursor = 0

    def take(self):
        token = self.tokens.popleft()
        self.cursor = token.index
        return token

    def coerce(self, parameter, raw):
        try:
            return parameter.type.coerce(str(raw))
        except ParseError as fault:
            raise fault.__replace__(parameter=parameter, path=self.path, index=raw.index) from None

    def resolve(self, node, token):
        """
        Find the option a token designates; return (option, state) where state
        is False for a negated toggle spelling and True otherwise.
        """
        text = token.lstrip("-")
        context = {"token": str(token), "path": self.path, "index": token.index}

        for option in node.options:
            if option.token == text:
                return option, True

        matches = [option for option in node.options if option.token.startswith(text)]
        if len(matches) > 1:
            raise AmbiguousOptionError(candidates=tuple(option.token for option in matches), **context)
        if matches:
            return matches[0], True

        toggles = [option for option in node.options if isinstance(option.type, Toggle)]
        for option in toggles:
            if "no" + option.token == text:
                return option, False
        matches = [option for option in toggles if ("no" + option.token).startswith(text)]
        if len(matches) > 1:
            raise AmbiguousOptionError(candidates=tuple("no" + option.token for option in matches), **context)
        if matches:
            return matches[0], False

        raise UnknownOptionError(**context)

    def option(self, node):
        token = self.take()
        option, state = self.resolve(node, token)

        if isinstance(option.type, Toggle):
            value = state
        elif not self.tokens:
            raise MissingValueError(parameter=option, path=self.path, index=token.index + 1)
        elif isinstance(option.type, Array):
            value = self.options.get(option.token, []) + self.coerce(option, self.take())
        else:
            value = self.coerce(option, self.take())

        self.options[option.token] = value
        self.assignments.append((option, list(value) if isinstance(value, list) else value))

    def skip(self, node):
        # resolve the options standing in front of the next positional token
        while self.tokens and _optionlike(self.tokens[0]):
            self.option(node)

    def descend(self, node):
        while self.tokens:
            if _optionlike(self.tokens[0]):
                self.option(node)
                continue
            for command in node.commands:
                if command.token == self.tokens[0]:
                    self.take()
                    self.path.append(command)
                    return True
            break
        return False

    def consume(self, node):
        for parameter in node.parameters:
            if isinstance(parameter.type, Toggle):
                raise InvalidParameterTypeError(parameter=parameter, path=self.path)

        for parameter in node.parameters:
            self.skip(node)
            if not self.tokens:
                if parameter.kind is ParameterKind.OPTIONAL:
                    break
                raise MissingValueError(parameter=parameter, path=self.path, index=self.cursor + 1)
            value = self.coerce(parameter, self.take())
            self.parameters.append(value)
            self.assignments.append((parameter, value))

        if node.parameters:
            self.skip(node)

    def run(self):
        while self.descend(self.path[-1]):
            pass
        node = self.path[-1]
        self.consume(node)
        if node.commands and node.required:
            if self.tokens:
                raise MissingSubcommandError(token=str(self.tokens[0]), path=self.path, index=self.tokens[0].index)
            raise MissingSubcommandError(path=self.path)


def parse(arguments, tree, /):
    """
    Parse an argument vector (without the program name) against a command tree.

    Returns a ParseResult; raises exactly one ParseError subclass otherwise.
    Raises TypeError when tree is not a command or arguments are not strings.
    """
    if not isinstance(tree, Command):
        raise TypeError("parse() second argument must be a command tree")
    working, remainder = tokenize(arguments)

    matcher = _Matcher(tree, working)
    matcher.run()

    return ParseResult(
        matcher.path,
        matcher.parameters,
        matcher.options,
        (*map(str, matcher.tokens), *remainder),
        matcher.assignments,
    )


def invoke(tree, prompt=Unset, /, *, shell=True, colorful=True, fancy=False):
    """
    Parse, apply bindings and return the result; surface faults with trigger().

    Prompt
    - Unset: read sys.argv[1:].
    - str: split with shlex.split, as a shell would.
    - iterable of strings: used as is.

    In shell mode a fault is printed to stderr with the usage of the command
    where it happened and the process exits with status 1; otherwise it is raised.
    """
    if prompt is Unset:
        prompt = sys.argv[1:]
    elif isinstance(prompt, str):
        prompt = shlex.split(prompt)

    try:
        return parse(prompt, tree).apply()
    except ParseError as fault:
        trigger(fault, shell=shell, colorful=colorful, fancy=fancy)


__all__ = (
    "ParseResult",
    "parse",
    "invoke",
)
