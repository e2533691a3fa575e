"""
Graphviz DOT diagram generator for journeys.

Converts a Project into Graphviz DOT format for visualization.

Supports multiple modes:
    - SIMPLE: Basic page flow (no condition labels)
    - DETAILED: Condition labels, page types and field names
    - MANAGEMENT: Pages clustered by page type

Default next-page edges are solid; condition edges are dashed.
"""

import json
import re
from enum import Enum
from typing import Any, Dict, List

from govproto.expressions import get_operator, is_logic
from govproto.page_types import PageType
from govproto.pages import Page, page_type_label
from govproto.project import Project


class DotMode(Enum):
    """Visualization modes for DOT output."""
    SIMPLE = "simple"          # Just page flow
    DETAILED = "detailed"      # Include conditions, types, fields
    MANAGEMENT = "management"  # Clustered by page type


_FILL_COLORS = {
    PageType.START: "lightgreen",
    PageType.CHECK_ANSWERS: "lightyellow",
    PageType.CONFIRMATION: "palegreen",
}

_INFIX = {"==", "!=", ">", ">=", "<", "<=", "in", "+", "-", "*", "/", "%"}

_PLAIN_ID = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _escape_dot_string(s: str) -> str:
    """Escape special characters for DOT labels."""
    if not s:
        return '""'
    s = s.replace('\\', '\\\\')
    s = s.replace('"', '\\"')
    s = s.replace('\n', '\\n')
    return f'"{s}"'


def _escape_dot_id(identifier: str) -> str:
    """Escape/quote an identifier for DOT."""
    if _PLAIN_ID.match(identifier):
        return identifier
    return _escape_dot_string(identifier)


def _expr_to_dot_label(expr: Any) -> str:
    """Convert a JSONLogic expression to a readable label."""
    if isinstance(expr, list):
        return "[" + ", ".join(_expr_to_dot_label(e) for e in expr) + "]"
    if not is_logic(expr):
        return json.dumps(expr)

    op = get_operator(expr)
    args = expr[op]
    if not isinstance(args, list):
        args = [args]

    if op == "var":
        return str(args[0]) if args else "data"
    if op in ("and", "or"):
        return "(" + f" {op.upper()} ".join(_expr_to_dot_label(a) for a in args) + ")"
    if op == "!":
        return f"NOT {_expr_to_dot_label(args[0])}" if args else "NOT ?"
    if op in _INFIX and len(args) == 2:
        return f"({_expr_to_dot_label(args[0])} {op} {_expr_to_dot_label(args[1])})"
    if op == "missing":
        return "missing(" + ", ".join(str(a) for a in args) + ")"
    return f"{op}(" + ", ".join(_expr_to_dot_label(a) for a in args) + ")"


def _node_label(page: Page, mode: DotMode) -> str:
    label = page.title
    if mode == DotMode.DETAILED:
        info = [f"[{page.type.value}] {page.path}"]
        if page.fields:
            info.append("Fields: " + ", ".join(page.field_names()))
        label = label + "\n" + "\n".join(info)
    return label


def generate_dot(project: Project, mode: DotMode = DotMode.SIMPLE) -> str:
    """
    Generate Graphviz DOT format for a project's journey.

    Args:
        project: Project to visualize
        mode: Visualization mode (SIMPLE, DETAILED, MANAGEMENT)

    Returns:
        String containing DOT graph definition
    """
    lines = []

    # Header
    lines.append("digraph journey {")
    lines.append("  rankdir=LR;")
    lines.append("  node [shape=box, style=filled, fillcolor=lightblue];")

    if mode == DotMode.MANAGEMENT:
        lines.append("  edge [style=solid];")

    # =========================================================================
    # NODES
    # =========================================================================

    page_ids = {p.id for p in project.pages}

    for page in project.pages:
        attrs = [f"label={_escape_dot_string(_node_label(page, mode))}"]
        if page.type in _FILL_COLORS:
            attrs.append(f"fillcolor={_FILL_COLORS[page.type]}")
        if page.type == PageType.START:
            attrs.append("shape=ellipse")
        lines.append(f"  {_escape_dot_id(page.id)} [{', '.join(attrs)}];")

    # =========================================================================
    # EDGES
    # =========================================================================

    for page in project.pages:
        from_id = _escape_dot_id(page.id)

        for condition in page.conditions or []:
            if condition.to_page_id not in page_ids:
                continue
            edge_attrs = ["style=dashed"]
            if mode == DotMode.DETAILED:
                label = condition.description or _expr_to_dot_label(condition.expression)
                # Shorten for readability
                if len(label) > 40:
                    label = label[:37] + "..."
                edge_attrs.append(f"label={_escape_dot_string(label)}")
            lines.append(f"  {from_id} -> {_escape_dot_id(condition.to_page_id)} [{', '.join(edge_attrs)}];")

        if page.next_page_id and page.next_page_id in page_ids:
            lines.append(f"  {from_id} -> {_escape_dot_id(page.next_page_id)};")

    # =========================================================================
    # PAGE TYPE CLUSTERS (MANAGEMENT MODE)
    # =========================================================================

    if mode == DotMode.MANAGEMENT:
        pages_by_type: Dict[PageType, List[str]] = {}
        for page in project.pages:
            pages_by_type.setdefault(page.type, []).append(page.id)

        for page_type, ids in pages_by_type.items():
            lines.append(f'  subgraph "cluster_{page_type.value}" {{')
            lines.append(f'    label={_escape_dot_string(page_type_label(page_type) + " pages")};')
            lines.append('    style=filled;')
            lines.append('    color=lightgrey;')
            for page_id in ids:
                lines.append(f"    {_escape_dot_id(page_id)};")
            lines.append("  }")

    # Footer
    lines.append("}")

    return "\n".join(lines)


def save_dot_file(project: Project, filename: str, mode: DotMode = DotMode.SIMPLE) -> None:
    """
    Generate DOT and save to file.

    Args:
        project: Project to visualize
        filename: Output file path (.dot extension recommended)
        mode: Visualization mode
    """
    dot = generate_dot(project, mode=mode)
    with open(filename, 'w') as f:
        f.write(dot)


__all__ = ["DotMode", "generate_dot", "save_dot_file"]
