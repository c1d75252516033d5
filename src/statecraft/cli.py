# src/statecraft/cli.py
"""
Statecraft Command Line Interface (CLI).

Drives the state machines and the undo history from the terminal using
`typer` and `rich`. Every run is scripted by its arguments, so the same command
always produces the same transitions.

Commands
--------
- **order**: walk an order through its lifecycle with fixed collaborator answers.
- **automaton**: run words through the {a, b, c} recognizer.
- **edit**: apply a script of editor operations with undo/redo.

Usage
-----
    $ statecraft order --steps 4 --return-order
    $ statecraft order --unpaid --steps 2 --cancel --json
    $ statecraft automaton abc aabc cab
    $ statecraft edit insert:Hello "insert: World" undo redo
"""

from __future__ import annotations

import traceback
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from statecraft.automaton.recognizer import Automaton
from statecraft.core.machine.context import TransitionRecord, TransitionResult
from statecraft.core.snapshot.caretaker import UndoHistory
from statecraft.core.snapshot.store import SnapshotStore
from statecraft.editor.text_editor import EditorState, TextEditor
from statecraft.orders.collaborators import StaticInventory, StaticPaymentGateway, StaticShipping
from statecraft.orders.order import Order

# Env vars (LOG_LEVEL, SNAPSHOT_MAX_DEPTH, ...) may live in a local .env file
load_dotenv()

app = typer.Typer(
    help="Statecraft: undo/redo snapshots and audited state machines.",
    rich_markup_mode="markdown",
)
console = Console()


# --------------------------------------------------------------------------- #
# Helpers: Rendering
# --------------------------------------------------------------------------- #


def _render_history(records: tuple[TransitionRecord, ...], title: str) -> None:
    """Render transition records as a table (shared by `order` and `automaton`)."""
    table = Table(title=title, show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("from", style="cyan")
    table.add_column("to", style="green")
    table.add_column("timestamp", style="dim")
    for i, rec in enumerate(records, start=1):
        table.add_row(str(i), rec.from_state, rec.to_state, rec.timestamp)
    console.print(table)


def _render_events(events: list[tuple[str, TransitionResult]]) -> None:
    table = Table(title="Events")
    table.add_column("event")
    table.add_column("accepted")
    table.add_column("from", style="cyan")
    table.add_column("to", style="green")
    table.add_column("reason", style="dim")
    for name, result in events:
        mark = "[green]yes[/green]" if result.accepted else "[red]no[/red]"
        table.add_row(name, mark, result.from_state, result.to_state or "-", result.reason or "")
    console.print(table)


# --------------------------------------------------------------------------- #
# Helpers: Editor scripts
# --------------------------------------------------------------------------- #

_MUTATING_OPS = frozenset({"insert", "paste", "delete"})


def _apply_op(op: str, editor: TextEditor, history: UndoHistory[EditorState]) -> str:
    """
    Apply one scripted operation and return a short outcome label.

    Grammar: ``insert:TEXT``, ``select:START:END``, ``copy``, ``paste``,
    ``delete``, ``undo``, ``redo``. Edits take a checkpoint first.
    """
    name, _, arg = op.partition(":")
    if name in _MUTATING_OPS:
        history.checkpoint(note=op)
    if name == "insert":
        editor.insert(arg)
    elif name == "select":
        start, _, end = arg.partition(":")
        try:
            editor.select(int(start), int(end))
        except ValueError as e:
            raise typer.BadParameter(f"{op!r}: {e}") from e
    elif name == "copy":
        editor.copy()
    elif name == "paste":
        editor.paste()
    elif name == "delete":
        editor.delete()
    elif name == "undo":
        return "ok" if history.undo() else "nothing to undo"
    elif name == "redo":
        return "ok" if history.redo() else "nothing to redo"
    else:
        raise typer.BadParameter(f"unknown operation {op!r}")
    return "ok"


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def order(
    order_id: Annotated[str, typer.Option("--id", help="Order identifier.")] = "ORD-001",
    items: Annotated[
        list[str] | None,
        typer.Option("--item", "-i", help="Order item (repeatable)."),
    ] = None,
    available: Annotated[
        bool, typer.Option("--available/--unavailable", help="Inventory answer.")
    ] = True,
    paid: Annotated[bool, typer.Option("--paid/--unpaid", help="Payment answer.")] = True,
    prepared: Annotated[
        bool, typer.Option("--prepared/--unprepared", help="Shipping preparation answer.")
    ] = True,
    delivered: Annotated[
        bool, typer.Option("--delivered/--in-transit", help="Delivery answer.")
    ] = True,
    steps: Annotated[
        int, typer.Option("--steps", "-n", min=0, help="Number of process() calls.")
    ] = 4,
    cancel: Annotated[
        bool, typer.Option("--cancel", help="Call cancel() after processing.")
    ] = False,
    return_order: Annotated[
        bool, typer.Option("--return-order", help="Call return_() after processing.")
    ] = False,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the final order info as JSON.")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show full error tracebacks.")
    ] = False,
) -> None:
    """
    Walk an order through its lifecycle (Created → ... → Delivered/Returned/Cancelled).

    Collaborators answer with the fixed values given by the switches, so the
    run is fully deterministic.
    """
    payment = StaticPaymentGateway(paid=paid)
    try:
        the_order = Order(
            order_id,
            items or ["laptop", "mouse", "keyboard"],
            inventory=StaticInventory(available=available),
            payment=payment,
            shipping=StaticShipping(prepared=prepared, delivered=delivered),
        )
        events: list[tuple[str, TransitionResult]] = []
        for _ in range(steps):
            events.append(("process", the_order.process()))
        if cancel:
            events.append(("cancel", the_order.cancel()))
        if return_order:
            events.append(("return", the_order.return_()))
    except Exception as e:
        console.print(f"\n[bold red]❌ Order Error:[/bold red] {e}")
        if verbose:
            traceback.print_exc()
        raise typer.Exit(code=1) from e

    info = the_order.info()
    if as_json:
        console.print_json(info.model_dump_json(by_alias=True))
        return

    console.print(
        Panel.fit(
            f"[bold cyan]Order {info.id}[/bold cyan]\n"
            f"State: [green]{info.state}[/green] ({info.description})\n"
            f"Payment: {info.payment_status} | Shipping: {info.shipping_status} "
            f"| Delivery: {info.delivery_status}\n"
            f"Refund calls: {len(payment.refunds)}",
            border_style="cyan",
        )
    )
    _render_events(events)
    _render_history(the_order.history(), title="Transition history")


@app.command()  # type: ignore[misc]
def automaton(
    words: Annotated[list[str], typer.Argument(help="Words over the alphabet {a, b, c}.")],
    show_history: Annotated[
        bool, typer.Option("--history", "-H", help="Print each run's transitions.")
    ] = False,
) -> None:
    """Run each word through the recognizer and report accept/reject."""
    machine = Automaton()
    table = Table(title="Recognizer")
    table.add_column("word")
    table.add_column("result")
    table.add_column("last state", style="cyan")
    table.add_column("transitions", justify="right")

    for word in words:
        accepted = machine.process_input(word)
        verdict = "[green]ACCEPTED[/green]" if accepted else "[red]REJECTED[/red]"
        table.add_row(word, verdict, machine.current_state, str(len(machine.history())))
        if show_history:
            _render_history(machine.history(), title=f"Run: {word!r}")

    console.print(table)


@app.command()  # type: ignore[misc]
def edit(
    ops: Annotated[
        list[str],
        typer.Argument(
            help="Operations: insert:TEXT, select:S:E, copy, paste, delete, undo, redo."
        ),
    ],
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", min=1, help="Undo stack capacity (default: settings)."),
    ] = None,
) -> None:
    """Apply a script of editor operations with automatic undo checkpoints."""
    editor = TextEditor()
    store: SnapshotStore[EditorState] = (
        SnapshotStore(editor, max_depth=max_depth) if max_depth else SnapshotStore(editor)
    )
    history = UndoHistory(editor, store)

    table = Table(title="Edit script")
    table.add_column("#", justify="right", style="dim")
    table.add_column("op")
    table.add_column("outcome")
    table.add_column("text", style="green")
    table.add_column("undo", justify="right")
    table.add_column("redo", justify="right")

    try:
        for i, op in enumerate(ops, start=1):
            outcome = _apply_op(op, editor, history)
            stats = history.stats()
            table.add_row(
                str(i), op, outcome, repr(editor.text), str(stats.undo_depth), str(stats.redo_depth)
            )
    except typer.BadParameter as e:
        console.print(table)
        console.print(f"\n[bold red]❌ Edit Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    console.print(table)
    body = editor.text or "[dim](empty)[/dim]"
    console.print(Panel(body, title="Final text", border_style="green"))


if __name__ == "__main__":
    app()
