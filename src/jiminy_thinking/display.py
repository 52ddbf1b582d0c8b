# display.py
# All terminal output for the Jiminy step ledger.
#
# This module owns presentation entirely. The ledger and validator never
# format strings. The dispatcher calls named functions here after a step
# is accepted. Everything goes to stderr: stdout carries the MCP transport.
#
# Colour language:
#   yellow       — revisions
#   magenta      — branches
#   phase/tag    — per-category style from the CategorySet
#   red          — fatal startup / transport errors

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from jiminy_thinking.categories import CategorySet
from jiminy_thinking.models import Step

console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _label(tag: str, color: str) -> Text:
    t = Text()
    t.append(f" {tag} ", style=f"bold white on {color}")
    return t


def _position(step: Step) -> str:
    return f"{step.index}/{step.estimated_total}"


def step_header(step: Step, categories: CategorySet) -> Text:
    """Revision beats branch beats plain category label."""
    header = Text()
    if step.is_revision:
        header.append("🔄 Revision", style="bold yellow")
        header.append(f" {_position(step)} (revising step {step.revises_index})")
    elif step.branch_from_index is not None:
        header.append("🌿 Branch", style="bold magenta")
        header.append(
            f" {_position(step)} (from step {step.branch_from_index}, ID: {step.branch_id})"
        )
    else:
        header.append(categories.label(step.category), style=categories.style(step.category))
        header.append(f" {_position(step)}")
    return header


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def step_panel(step: Step, categories: CategorySet) -> Panel:
    # Caller text is never parsed as markup.
    parts: list[tuple[str, str]] = []
    if step.followup_hint:
        parts.append((f"Next: {step.followup_hint}", "dim"))
    if step.needs_more:
        if parts:
            parts.append((" ", ""))
        parts.append(("(needs more steps)", "dim yellow"))
    subtitle = Text.assemble(*parts) if parts else None

    border = "white"
    if step.is_revision:
        border = "yellow"
    elif step.branch_from_index is not None:
        border = "magenta"

    return Panel(
        Text(step.text),
        title=step_header(step, categories),
        title_align="left",
        subtitle=subtitle,
        border_style=border,
        padding=(0, 1),
    )


def render_step(step: Step, categories: CategorySet) -> None:
    console.print(step_panel(step, categories))


# ---------------------------------------------------------------------------
# Server lifecycle
# ---------------------------------------------------------------------------


def server_running(tool_name: str, categories: CategorySet) -> None:
    console.print(
        _label("JIMINY", "cyan"),
        f"[cyan] Sequential thinking server running on stdio[/cyan]"
        f" [dim](tool: {tool_name}, categories: {categories.mode.value})[/dim]",
    )


def fatal(exc: BaseException) -> None:
    console.print()
    console.print(
        Panel(
            f"[bold white]Fatal error running server:[/bold white] {escape(str(exc))}",
            title=_label("HALT", "red"),
            border_style="red",
            padding=(0, 2),
        )
    )
