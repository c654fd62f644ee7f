# src/kubediff/cli/formatter.py
from typing import Any, Iterable, List, Optional

from rich.console import Console
from rich.text import Text

from kubediff.core.models import MISSING, ChangeType, DiffEvent
from kubediff.core.serializer import ValueSerializer

INDENT = "  "
TAINT_MARKER = "! "
TAINT_STYLE = "bright_red"

_STYLES = {
    ChangeType.ADDED: "bright_green",
    ChangeType.STRUCTURAL_ADDED: "bright_green",
    ChangeType.OBJECT_ADDED: "bright_green",
    ChangeType.REMOVED: "bright_red",
    ChangeType.STRUCTURAL_REMOVED: "bright_red",
    ChangeType.OBJECT_REMOVED: "bright_red",
    ChangeType.MODIFIED: "bright_yellow",
    ChangeType.NESTED: "bright_yellow",
    ChangeType.ITEM_MODIFIED: "bright_yellow",
    ChangeType.SECTION: "bright_yellow",
}


def style_for(change: ChangeType) -> str:
    """Rich style for a semantic tag; context lines are unstyled."""
    return _STYLES.get(change, "")


class KubeDiffFormatter:
    """
    KubeDiffFormatter: the visual side of the report.
    Turns the engine's event stream into indented, colour-coded lines.
    """

    def __init__(self, console: Optional[Console] = None, serializer: Optional[ValueSerializer] = None):
        self.console = console or Console(highlight=False)
        self.serializer = serializer or ValueSerializer()

    def render(self, events: Iterable[DiffEvent]) -> int:
        """Prints every event as it arrives. Returns the number of events rendered."""
        count = 0
        for event in events:
            for line in self.lines_for(event):
                self.console.print(line, soft_wrap=True)
            count += 1
        return count

    def lines_for(self, event: DiffEvent) -> List[Text]:
        change = event.change
        style = style_for(change)
        pad = INDENT * event.depth
        fmt = self.serializer.format_value

        if change is ChangeType.OBJECT_REMOVED:
            return [Text(f"- {event.label} {event.key} (removed)", style=style)]
        if change is ChangeType.OBJECT_ADDED:
            return [Text(f"+ {event.label} {event.key} (added)", style=style)]
        if change is ChangeType.UNCHANGED:
            return self._unchanged_lines(pad, event.key, event.old)
        if event.is_header:
            return self._header_lines(event, pad, style)

        if change is ChangeType.ADDED:
            return [Text(pad + "+ " + self._keyed(event.key, fmt(event.new)), style=style)]
        if change is ChangeType.REMOVED:
            return [Text(pad + "- " + self._keyed(event.key, fmt(event.old)), style=style)]
        if change is ChangeType.MODIFIED:
            return [
                Text(pad + "~~ " + self._keyed(event.key, fmt(event.old)), style=style),
                Text(pad + "~> " + self._keyed(event.key, fmt(event.new)), style=style),
            ]

        if change in (ChangeType.STRUCTURAL_ADDED, ChangeType.STRUCTURAL_REMOVED):
            added = change is ChangeType.STRUCTURAL_ADDED
            value = event.new if added else event.old
            line = Text(pad)
            line.append("+ " if added else "- ", style=style)
            if event.tainted:
                line.append(TAINT_MARKER, style=TAINT_STYLE)
            line.append(f"{event.label} '{event.key}': {fmt(value)}", style=style)
            return [line]

        return [Text(f"{pad}{event.key}")]

    def _header_lines(self, event: DiffEvent, pad: str, style: str) -> List[Text]:
        """Lines that open a block of nested changes."""
        if event.change is ChangeType.OBJECT_HEADER:
            return [Text(""), Text("---")]
        if event.change is ChangeType.SECTION:
            return [Text(f"{pad}{event.key}:", style=style)]
        if event.change is ChangeType.ITEM_MODIFIED:
            return [Text(f"{pad}~ {event.label} '{event.key}':", style=style)]
        label = f"[{event.key}]:" if isinstance(event.key, int) else f"~ {event.key}:"
        return [Text(pad + label, style=style)]

    def _keyed(self, key: Any, text: str) -> str:
        return text if key is None else f"{key}: {text}"

    def _unchanged_lines(self, pad: str, key: Any, value: Any) -> List[Text]:
        """Context: scalars inline, non-empty structures as an indented YAML block."""
        if value is MISSING:
            return []
        if isinstance(value, (dict, list)) and value:
            lines = [Text(f"{pad}{key}:")]
            lines.extend(Text(pad + INDENT + row) for row in self.serializer.dump_lines(value))
            return lines
        return [Text(f"{pad}{key}: {self.serializer.format_value(value)}")]
