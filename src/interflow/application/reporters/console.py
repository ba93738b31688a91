"""Console reporter: SequenceDiagram → rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from interflow.domain.fragments import Alt, Arrow, ArrowColor

if TYPE_CHECKING:
    from interflow.domain.diagram import SequenceDiagram
    from interflow.domain.fragments import AltSection, Fragment

_COLOR_STYLES = {
    ArrowColor.COMMAND: "dodger_blue1",
    ArrowColor.EVENT: "green4",
}


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    All fields have defaults (convenience).
    Immutable (frozen dataclass).

    Attributes:
        show_participants: Show participants line under the header.
        show_colors: Style arrows by message kind.
        width: Console width in characters.
    """

    show_participants: bool = True
    show_colors: bool = True
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width < 20:
            raise ValueError(f"width must be >= 20, got {self.width}")


class ConsoleReporter:
    """Console reporter: outputs the fragment tree as rich text.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, diagram: SequenceDiagram) -> str:
        """Format diagram as rich formatted string.

        Args:
            diagram: Diagram to format.

        Returns:
            Formatted string with header and fragment tree.
        """
        output = StringIO()
        console = Console(
            file=output,
            force_terminal=self._config.show_colors,
            no_color=not self._config.show_colors,
            width=self._config.width,
        )

        self._render_header(console, diagram)

        tree = Tree(f"[bold]{escape(diagram.message)}[/bold]")
        self._add_fragments(tree, diagram.fragments)
        console.print(tree)

        if diagram.is_empty:
            console.print("[yellow]No handlers found[/yellow]")

        console.print()
        return output.getvalue()

    def _render_header(self, console: Console, diagram: SequenceDiagram) -> None:
        console.print()
        console.rule("[bold]INTERACTIONS[/bold]")
        console.print()

        if self._config.show_participants:
            participants = ", ".join(diagram.participants) or "-"
            console.print(f"[bold]Participants:[/bold] {escape(participants)}")
            console.print()

    def _add_fragments(self, tree: Tree, fragments: tuple[Fragment, ...]) -> None:
        for fragment in fragments:
            match fragment:
                case Arrow():
                    tree.add(self._arrow_label(fragment))
                case Alt(sections=sections):
                    for section in sections:
                        branch = tree.add(_section_label(section))
                        self._add_fragments(branch, section.fragments)

    def _arrow_label(self, arrow: Arrow) -> str:
        text = escape(f"{arrow.source} -> {arrow.target}: {arrow.label}")
        if not self._config.show_colors:
            return text
        style = _COLOR_STYLES[arrow.color]
        return f"[{style}]{text}[/{style}]"


def _section_label(section: AltSection) -> str:
    keyword = section.group_type.value if section.group_type is not None else "else"
    return f"[bold]{keyword}[/bold] {escape(section.label)}"
