"""Rich-based scenario console rendering."""

from __future__ import annotations

from io import StringIO
from typing import Literal

from rich.console import Console
from rich.tree import Tree

from ..models import Scenario

Verbosity = Literal["minimal", "standard", "full"]
_MAX_VALUE_LEN = 200


def render_scenario(scenario: Scenario, *, verbosity: Verbosity = "standard") -> str:
    context = scenario.context
    icon = "✗" if scenario.exception is not None else "✓"
    tree = Tree(
        f"Vertex {context.vertex_id} @ step {context.step_number} "
        f"[{scenario.computation_type.short_name}] {icon}"
    )
    before = _format(context.vertex_value_before)
    tree.add(f"value: {before} -> {_format(context.vertex_value_after)}")

    if verbosity != "minimal":
        neighbors = tree.add(f"neighbors ({len(context.neighbors)})")
        for neighbor in context.neighbors:
            edge = "" if neighbor.edge_value is None else f" (edge {_format(neighbor.edge_value)})"
            neighbors.add(f"{neighbor.neighbor_id}{edge}")
        inbound = tree.add(f"inbound messages ({len(context.inbound_messages)})")
        for message in context.inbound_messages:
            inbound.add(_format(message))
        outbound = tree.add(f"outbound messages ({len(context.outbound_messages)})")
        for out in context.outbound_messages:
            outbound.add(f"→ {out.destination_id}: {_format(out.message)}")

    if scenario.exception is not None:
        exc = scenario.exception
        err_pre = f"{exc.exception_type}: " if exc.exception_type else ""
        branch = tree.add(f"error: {err_pre}{exc.message}")
        if verbosity == "full" and exc.stack_trace:
            branch.add(f"traceback: {exc.stack_trace}")

    if verbosity == "full":
        types = tree.add("types")
        types.add(f"vertex id: {scenario.vertex_id_type}")
        types.add(f"vertex value: {scenario.vertex_value_type}")
        types.add(f"edge value: {scenario.edge_value_type}")
        types.add(f"inbound message: {scenario.inbound_message_type}")
        types.add(f"outbound message: {scenario.outbound_message_type}")

    console = Console(record=True, width=120, markup=False, file=StringIO())
    console.print(tree)
    return console.export_text()


def _format(value: object) -> str:
    """Format a value for display, truncating large values."""
    s = "(none)" if value is None else str(value)
    if len(s) <= _MAX_VALUE_LEN:
        return s
    return s[:_MAX_VALUE_LEN] + "... [truncated]"
