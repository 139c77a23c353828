"""
cliargs usage guide renderer.

A formatter that only reads the definition list: names, aliases, types and the
free-form metadata carried by each definition ("description", "type_label").
The parser never calls into this module; CommandLineArgs.getusage() forwards
its definitions here.

Recognized options
- title: str                  heading line
- description: str            paragraph under the title
- synopsis: Iterable[str]     usage lines (rendered under "usage:")
- groups: Mapping[str, str]   group name → section heading, in display order;
                              "_none" selects definitions without a group.
                              When absent, every option goes in one "options" section.
- hide: Iterable[str]         option names left out of the guide
- footer: str                 closing paragraph
- width: int                  wrap width (default 80)
- colorful: bool              keep ANSI styles in the returned string (default False)

Palette keys
- title-section, description-section, usage-label, synopsis, group-label,
  alias-name, option-name, metavar, argument-description, footer-section.
Define a mapping named __styles__ in __main__ to override any palette entry.
"""
from collections import defaultdict
from collections.abc import Mapping

from rich.console import Console, Group
from rich.text import Text

from .grouping import NONE
from .utils import *

OPTIONS = frozenset({
    "title",
    "description",
    "synopsis",
    "groups",
    "hide",
    "footer",
    "width",
    "colorful",
})


def _label(definition):
    """
    Type label shown after the option names ("int", "str[]"), or None.
    """
    if (label := definition.metadata.get("type_label")) is None:
        if definition.type is None or definition.isboolean():
            return None
        label = getattr(definition.type, "__name__", type(definition.type).__name__)
    return str(label) + "[]" * definition.multiple


def render(definitions, options=None, /, **overrides):
    """
    Render a usage guide for `definitions` and return it as a string.

    Raises
    - TypeError on unknown option keys or badly typed values.
    """
    if options is not None and not isinstance(options, Mapping):
        raise TypeError("render() options must be a mapping")
    options = dict(options or {}) | overrides
    if unknown := options.keys() - OPTIONS:
        raise TypeError("render() got unknown options: %s" % ", ".join(sorted(map(repr, unknown))))

    width = options.get("width", 80)
    if not isinstance(width, int) or width < 20:
        raise TypeError("render() 'width' must be an integer of at least 20")
    colorful = bool(options.get("colorful", False))

    groups = options.get("groups")
    if groups is not None and not isinstance(groups, Mapping):
        raise TypeError("render() 'groups' must be a mapping of group names to headings")
    hide = frozenset(arrayify(options.get("hide")))

    styles = defaultdict(str, {
        "title-section": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "description-section": "italic #A3A3A3",  # Neutral gray
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "synopsis": "bold #36C5F0",  # SKY-BLUE → softer than cyan
        "group-label": "bold #FFFFFF",  # Pure white headers
        "alias-name": "bold #22C55E",  # GREEN for aliases
        "option-name": "bold #00E6FF",  # CYAN for long names
        "metavar": "bold #FFD600",  # AMBER for type labels
        "argument-description": "#9CA3AF",  # Muted gray
        "footer-section": "#737373",  # Dim footer gray
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if isinstance(fragment, Text):
            return fragment.copy()
        return Text(str(fragment), styler(style))

    console = Console(
        width=width,
        color_system="truecolor" if colorful else None,
        force_terminal=colorful,
        highlight=False,
        emoji=False,
    )

    renders = []

    if title := options.get("title"):
        renders.append(text(title, "title-section").append("\n"))

    if description := options.get("description"):
        renders.append(text(description, "description-section").append("\n"))

    if synopsis := arrayify(options.get("synopsis")):
        usage = Text()
        usage.append(text("usage", "usage-label")).append(":")
        for line in synopsis:
            usage.append("\n").append("  ").append(text(line, "synopsis"))
        renders.append(usage.append("\n"))

    visible = [definition for definition in definitions if definition.name not in hide]
    if groups is None:
        sections = {"options": visible} if visible else {}
    else:
        sections = {}
        for group, heading in groups.items():
            if group == NONE:
                members = [definition for definition in visible if not definition.group]
            else:
                members = [definition for definition in visible if group in (definition.group or ())]
            if members:
                sections[heading or group] = members

    padding = 2   # Leading spaces before the names column
    indent = 24   # Column for description wrap/hanging indent

    for heading, members in sections.items():
        section = Text()
        section.append(text(heading, "group-label")).append(":")

        for definition in members:
            names = Text(" " * padding)
            if definition.alias is not None:
                names.append(text("-" + definition.alias, "alias-name")).append(", ")
            else:
                names.append("    ")
            names.append(text("--" + definition.name, "option-name"))
            if label := _label(definition):
                names.append(" ").append(text(label, "metavar"))

            section.append("\n").append(names)

            if descr := definition.metadata.get("description"):
                if len(names) >= indent:
                    section.append("\n").append(" " * indent)
                else:
                    section.append(" " * (indent - len(names)))
                wrapped = text(descr, "argument-description").wrap(console, width - indent)
                try:
                    section.append(wrapped.pop(0))
                except IndexError:
                    pass
                for line in wrapped:
                    section.append("\n").append(" " * indent).append(line)

        renders.append(section.append("\n"))

    if footer := options.get("footer"):
        renders.append(text(footer, "footer-section").append("\n"))

    if not renders:
        return ""

    renders[-1].rstrip()

    with console.capture() as capture:
        console.print(Group(*renders))
    return capture.get()


__all__ = (
    "render",
)
