"""
cmdopt usage renderer.

usage(path) returns deterministic plain text for the last command of a path:

    OVERVIEW: <overview>

    USAGE: <path tokens> [options] <command>|[command] <fixed> [optional]

    OPTIONS:
      -<token> : <descr>

    SUBCOMMANDS:
      <token> : <descr>

display(path) prints the same sections through rich, styled with a palette
that the host may override with a __styles__ mapping in __main__.

Both accept a sequence of command nodes (root first) or a single command
node, in which case the node's own path is used.
"""
from collections import defaultdict

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .utils import *


def _normalize(path):
    if hasattr(path, "children") and hasattr(path, "path"):
        path = path.path
    path = tuple(path)
    if not path:
        raise ValueError("usage path cannot be empty")
    return path


def _sections(path):
    # (name, body): overview -> str, usage -> ((word, role), ...), others -> ((label, descr), ...)
    leaf = path[-1]
    if leaf.overview is not None:
        yield "overview", leaf.overview

    words = [(node.token, "route") for node in path]
    if leaf.options:
        words.append(("[options]", "placeholder"))
    if leaf.commands:
        words.append(("<command>" if leaf.required else "[command]", "placeholder"))
    for parameter in leaf.parameters:
        form = "<%s>" if parameter.kind.name == "FIXED" else "[%s]"
        words.append((form % parameter.token, "placeholder"))
    yield "usage", tuple(words)

    if leaf.options:
        yield "options", tuple(("-" + option.token, option.descr) for option in leaf.options)
    if leaf.commands:
        yield "subcommands", tuple((command.token, command.descr) for command in leaf.commands)


def _entries(entries):
    width = max(len(label) for label, _ in entries)
    for label, descr in entries:
        yield label, descr, label.ljust(width)


def usage(path, /):
    """
    Render the usage text of the last command in path as a plain string.
    """
    blocks = []
    for name, body in _sections(_normalize(path)):
        match name:
            case "overview":
                blocks.append(f"OVERVIEW: {body}")
            case "usage":
                blocks.append(f"USAGE: {' '.join(word for word, _ in body)}")
            case _:
                blocks.append("\n".join([f"{name.upper()}:", *(
                    f"  {padded} : {descr}" if descr else f"  {label}"
                    for label, descr, padded in _entries(body)
                )]))
    return "\n\n".join(blocks)


def display(path, /, *, colorful=True, fancy=False, console=Unset):
    """
    Print the usage of the last command in path with rich.

    Options
    - colorful: apply the palette (plain text otherwise).
    - fancy: wrap the sections in a Panel titled with the command route.
    - console: rich Console to print to (a stdout console by default).
    """
    path = _normalize(path)
    console = coalesce(console, Console())

    styles = defaultdict(str, {
        "heading": "bold #FF4DA6",  # pinky section names
        "route": "bold #E6E6F0",  # near-white command route
        "placeholder": "#00E5FF",  # neon cyan placeholders
        "option": "bold #9CE19C",  # gentle green options
        "command": "bold #00E5FF",  # neon cyan sub-commands
        "descr": "#C8C8D0",  # soft light gray descriptions
        "overview": "italic #C8C8D0",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    blocks = []
    for name, body in _sections(path):
        heading = Text(name.upper() + ":", styler("heading"))
        match name:
            case "overview":
                blocks.append(Text.assemble(heading, " ", (body, styler("overview"))))
            case "usage":
                words = []
                for word, role in body:
                    words += " ", (word, styler(role))
                blocks.append(Text.assemble(heading, *words))
            case _:
                role = "option" if name == "options" else "command"
                lines = [heading]
                for label, descr, padded in _entries(body):
                    if descr:
                        lines.append(Text.assemble("  ", (padded, styler(role)), " : ", (descr, styler("descr"))))
                    else:
                        lines.append(Text.assemble("  ", (label, styler(role))))
                blocks.append(Text("\n").join(lines))

    renderable = Text("\n\n").join(blocks)
    if fancy:
        renderable = Panel(renderable, title=" ".join(node.token for node in path), title_align="left")
    console.print(renderable)


__all__ = (
    "usage",
    "display",
)
