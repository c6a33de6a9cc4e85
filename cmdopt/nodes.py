r"""
cmdopt command tree: nodes and the fluent builder.

Overview
- Node variants
  • Root: the top of the tree (usually named after the program).
  • Command: a sub-command; owns ordered children (sub-commands or parameters).
  • Parameter: a FIXED or OPTIONAL positional parameter, or a TAGGED option.

- Builder (on Root and Command, each call appends a child and returns the parent)
  • command(token, descr, configure): sub-command; configure(child) declares its children.
  • parameter(token, type, descr): fixed positional parameter.
  • optional(token, type, descr): optional positional parameter.
  • option(token, type, descr): tagged option ("-token value" or "-token" for toggles).

Tree rules (checked when a child is attached)
- Strict tree: a node has at most one parent; a Root is never a child.
- A command declares positional parameters OR sub-commands, never both.
- A FIXED parameter cannot follow an OPTIONAL one.
- Tokens are unique per category (options, sub-commands, positionals).
- Option and sub-command tokens cannot start with '-' nor contain '=' or spaces.

Bindings
- bind= on parameter()/optional()/option() takes either a callable setter(value)
  or the name of an attribute of the owning command's target object.
- Attribute bindings are checked against the target's class annotations when
  the node is attached; a missing target, missing attribute or incompatible
  annotation raises TypeError right away.
- Bindings are never invoked while parsing; ParseResult.apply() runs them.

Quick example:
    >>> root = Root("nova", "perform operations on a horizon node")
    >>> root.option("config", String(), "configuration file")
    >>> root.command("whitelist", "manage the whitelist", lambda whitelist: (
    ...     whitelist.command("add", "add a key", lambda add: add.parameter("public key"))
    ... ))
"""
import builtins
import os.path
import re
import sys
import types
import typing
from enum import Enum

from .utils import *
from .values import ValueType, String


class ParameterKind(Enum):
    FIXED = "fixed"
    OPTIONAL = "optional"
    TAGGED = "tagged"


_TOKEN = re.compile(r"[^\s=-][^\s=]*")


def _sanitize_token(cls, token, /, *, strict):
    if not isinstance(token, str):
        raise TypeError(f"{cls.__typename__} token must be a string")
    elif not (token := token.strip()):
        raise ValueError(f"{cls.__typename__} token cannot be empty")
    elif strict and not _TOKEN.fullmatch(token):
        raise ValueError(f"{cls.__typename__} token {token!r} cannot start with '-' nor contain '=' or spaces")
    return token


def _sanitize_descr(cls, descr, /):
    if not isinstance(descr, str | UnsetType):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    return coalesce(descr)


def _compatible(annotation, pytype):
    """
    Tell whether values of pytype may be stored under the given annotation.

    Unions are satisfied by any member; parametrized generics are checked on
    their origin (list[int] -> list); annotations that are not plain classes
    (TypeVar, Literal, ...) are accepted.
    """
    if annotation is typing.Any or pytype is object:
        return True
    origin = typing.get_origin(annotation)
    if origin in (typing.Union, types.UnionType):
        return any(_compatible(argument, pytype) for argument in typing.get_args(annotation))
    if origin is not None:
        annotation = origin
    if not isinstance(annotation, builtins.type):
        return True
    # numeric tower: an int is acceptable where a float is expected
    if annotation is float and pytype is int:
        return True
    return issubclass(pytype, annotation)


def _setter(command, parameter, name, /):
    target = command.target
    if target is None:
        raise TypeError(
            f"{type(parameter).__typename__} {parameter.token!r} binds {name!r} "
            f"but command {command.token!r} has no target"
        )
    try:
        hints = typing.get_type_hints(type(target))
    except (NameError, TypeError):
        hints = {}
    if name in hints:
        if not _compatible(hints[name], parameter.type.pytype):
            raise TypeError(
                f"{type(parameter).__typename__} {parameter.token!r} produces {parameter.type.pytype.__name__!r} "
                f"values but {type(target).__name__}.{name} is annotated as {hints[name]!r}"
            )
    elif not hasattr(target, name):
        raise TypeError(f"{type(target).__name__!r} object has no attribute {name!r} to bind")

    @rename("set_" + name)
    def setter(value):
        setattr(target, name, value)

    return setter


class Node:
    """
    Common part of every tree node: a token, a description and a parent link.
    """
    __typename__ = "node"

    token = view("token")
    descr = view("descr")
    parent = view("parent")

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        cls.__typename__ = re.sub(r"(?<!^)(?=[A-Z])", r"-", cls.__name__).lower()

    def __init__(self, token, descr=Unset, /, *, strict=True):
        self._token = _sanitize_token(type(self), token, strict=strict)
        self._descr = _sanitize_descr(type(self), descr)
        self._parent = None

    @property
    def root(self):
        """
        Return the topmost node of the hierarchy this node belongs to.
        """
        child, parent = self, self.parent
        while parent is not None:
            child, parent = parent, parent.parent
        return child

    @property
    def path(self):
        """
        Return the ancestry from the root to this node as a tuple (root first).
        """
        path = [node := self]
        while node.parent is not None:
            path.append(node := node.parent)
        return tuple(reversed(path))

    def __rich_repr__(self):
        yield "token", self.token
        yield "descr", self.descr

    def __repr__(self):
        return f"{type(self).__typename__}({', '.join('%s=%r' % pair for pair in self.__rich_repr__())})"


class Parameter(Node):
    """
    Positional parameter (FIXED / OPTIONAL) or tagged option (TAGGED).

    The binding, when present, is a setter callable resolved once the parameter
    is attached to a command (see the module docstring).
    """
    __match_args__ = ("token", "kind", "type")

    kind = view("kind")
    type = view("type")
    binding = view("binding")

    def __init__(self, token, kind, type=Unset, descr=Unset, /, *, bind=Unset):
        super().__init__(token, descr, strict=kind is ParameterKind.TAGGED)
        if not isinstance(kind, ParameterKind):
            raise TypeError(f"{builtins.type(self).__typename__} 'kind' must be a parameter kind")
        type = coalesce(type, String())
        if isinstance(type, builtins.type) and issubclass(type, ValueType):
            type = type()
        if not isinstance(type, ValueType):
            raise TypeError(f"{builtins.type(self).__typename__} 'type' must be a value type")
        if not (bind is Unset or callable(bind) or isinstance(bind, str)):
            raise TypeError(f"{builtins.type(self).__typename__} 'bind' must be a callable or an attribute name")
        if isinstance(bind, str) and not bind.isidentifier():
            raise ValueError(f"{builtins.type(self).__typename__} 'bind' must be a valid attribute name")
        self._kind = kind
        self._type = type
        self._bind = bind
        self._binding = bind if callable(bind) else None

    @property
    def tagged(self):
        return self.kind is ParameterKind.TAGGED

    @property
    def positional(self):
        return self.kind is not ParameterKind.TAGGED

    def _attach(self, command, /):
        if isinstance(self._bind, str):
            self._binding = _setter(command, self, self._bind)
        self._parent = command

    def __rich_repr__(self):
        yield from super().__rich_repr__()
        yield "kind", self.kind
        yield "type", self.type


class Command(Node):
    """
    Parent node: owns an ordered list of sub-commands or parameters.

    Fields
    - overview: long description shown on top of the usage text (optional).
    - required: when sub-commands are declared, whether one must be given.
    - target: object that attribute bindings of the children write into;
      sub-commands without their own target use their parent's.
    """
    __match_args__ = ("token",)

    overview = view("overview")
    required = view("required")
    children = view("children")

    def __init__(self, token, descr=Unset, /, *, overview=Unset, required=True, target=Unset):
        super().__init__(token, descr, strict=not isinstance(self, Root))
        self._overview = _sanitize_descr(type(self), overview)
        self._required = bool(required)
        self._target = target
        self._children = []

    @property
    def target(self):
        if self._target is not Unset:
            return self._target
        return self.parent.target if self.parent is not None else None

    @property
    def options(self):
        return tuple(child for child in self._children if isinstance(child, Parameter) and child.tagged)

    @property
    def commands(self):
        return tuple(child for child in self._children if isinstance(child, Command))

    @property
    def parameters(self):
        return tuple(child for child in self._children if isinstance(child, Parameter) and child.positional)

    def add(self, child, /):
        """
        Attach an already built node as the last child and return self.

        Raises
        - TypeError: not a node, a Root, or positional parameters mixed with sub-commands.
        - ValueError: node already attached, duplicated token, or FIXED after OPTIONAL.
        """
        if not isinstance(child, Node):
            raise TypeError("add() argument must be a node")
        if isinstance(child, Root):
            raise TypeError(f"{Root.__typename__} cannot be attached to another command")
        if child.parent is not None:
            raise ValueError(f"{type(child).__typename__} {child.token!r} already belongs to {child.parent.token!r}")

        match child:
            case Command():
                if self.parameters:
                    raise TypeError(f"command {self.token!r} declares positional parameters, it cannot have sub-commands")
                siblings = self.commands
            case Parameter(kind=ParameterKind.TAGGED):
                siblings = self.options
            case Parameter(kind=kind):
                if self.commands:
                    raise TypeError(f"command {self.token!r} declares sub-commands, it cannot have positional parameters")
                if kind is ParameterKind.FIXED and any(
                        parameter.kind is ParameterKind.OPTIONAL for parameter in self.parameters
                ):
                    raise ValueError(f"fixed parameter {child.token!r} cannot follow an optional parameter")
                siblings = self.parameters
            case _:
                raise TypeError("add() argument must be a command or a parameter")

        if any(sibling.token == child.token for sibling in siblings):
            raise ValueError(f"{type(child).__typename__} token {child.token!r} is already in use in {self.token!r}")

        if isinstance(child, Parameter):
            child._attach(self)
        else:
            child._parent = self
        self._children.append(child)
        return self

    def command(self, token, descr=Unset, configure=Unset, /, *, overview=Unset, required=True, target=Unset):
        """
        Append a sub-command and return self.

        configure, when given, is called with the new sub-command (already
        attached) so its own children can be declared inline.
        """
        if configure is not Unset and not callable(configure):
            raise TypeError("command() 'configure' must be callable")
        self.add(child := Command(token, descr, overview=overview, required=required, target=target))
        if configure is not Unset:
            configure(child)
        return self

    def parameter(self, token, type=Unset, descr=Unset, /, *, bind=Unset):
        """Append a fixed positional parameter and return self."""
        return self.add(Parameter(token, ParameterKind.FIXED, type, descr, bind=bind))

    def optional(self, token, type=Unset, descr=Unset, /, *, bind=Unset):
        """Append an optional positional parameter and return self."""
        return self.add(Parameter(token, ParameterKind.OPTIONAL, type, descr, bind=bind))

    def option(self, token, type=Unset, descr=Unset, /, *, bind=Unset):
        """Append a tagged option and return self."""
        return self.add(Parameter(token, ParameterKind.TAGGED, type, descr, bind=bind))

    def __rich_repr__(self):
        yield from super().__rich_repr__()
        yield "required", self.required
        yield "children", self.children


class Root(Command):
    """
    Top of a command tree. The token defaults to the program name.
    """

    def __init__(self, token=Unset, descr=Unset, /, *, overview=Unset, required=True, target=Unset):
        if token is Unset:
            token = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "cmdopt"
        super().__init__(token, descr, overview=overview, required=required, target=target)


__all__ = (
    "ParameterKind",
    "Node",
    "Parameter",
    "Command",
    "Root",
)
