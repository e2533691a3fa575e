"""
Journey Analyzer: early diagnostics and inventory of a project's journey.

This module provides lightweight analysis of Project objects:
    - Page, field and condition inventory
    - Graph reachability, exits and cycles
    - Condition complexity metrics
    - Answers referenced by conditions but collected by no field
    - Warning flags for page type conventions the validators do not enforce

IMPORTANT: This is read-only. It does NOT modify the project and never
fails on a broken journey; problems become warnings in the report.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from govproto.expressions import expression_metrics
from govproto.fields import is_option_field
from govproto.navigation import reachable_page_ids
from govproto.page_types import DEFAULT_REGISTRY, PageType, PageTypeRegistry
from govproto.pages import page_type_label
from govproto.project import Project


def _find_cycles_dfs(graph: Dict[str, List[str]], start: str, visited: Set[str],
                     rec_stack: Set[str], path: List[str]) -> Optional[List[str]]:
    """DFS to find a cycle starting from a node, using an explicit stack."""
    visited.add(start)
    rec_stack.add(start)
    path.append(start)
    stack = [iter(graph.get(start, []))]

    while stack:
        neighbor = next(stack[-1], None)
        if neighbor is None:
            stack.pop()
            rec_stack.remove(path.pop())
        elif neighbor not in visited:
            visited.add(neighbor)
            rec_stack.add(neighbor)
            path.append(neighbor)
            stack.append(iter(graph.get(neighbor, [])))
        elif neighbor in rec_stack:
            cycle_start_idx = path.index(neighbor)
            return path[cycle_start_idx:] + [neighbor]

    return None


@dataclass
class JourneyReport:
    """Analysis report for a project's journey. Page lists hold page ids."""

    project_name: str
    total_pages: int = 0
    total_fields: int = 0
    total_conditions: int = 0
    pages_by_type: Dict[str, int] = field(default_factory=dict)

    # Answers
    variable_usage: Dict[str, int] = field(default_factory=dict)
    uncollected_variables: Set[str] = field(default_factory=set)
    unused_choice_fields: Set[str] = field(default_factory=set)

    # Graph properties
    start_pages: List[str] = field(default_factory=list)
    exit_points: List[str] = field(default_factory=list)
    unreachable_pages: Set[str] = field(default_factory=set)
    unknown_references: List[Tuple[str, str]] = field(default_factory=list)
    has_cycles: bool = False
    cycle_example: Optional[List[str]] = None

    # Condition complexity
    max_condition_depth: int = 0
    avg_condition_depth: float = 0.0
    total_condition_nodes: int = 0
    max_conditions_per_page: int = 0

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_project(project: Project, registry: PageTypeRegistry = DEFAULT_REGISTRY) -> JourneyReport:
    """
    Perform a read-only analysis of a project's journey.

    Checks for:
    - Answers referenced by conditions and fields collecting them
    - Graph structure (start page, exits, reachability, cycles, dangling references)
    - Condition complexity
    - Page type conventions (next page expected, conditional routing supported,
      journeys ending on a confirmation page)

    Returns a JourneyReport with metrics and warnings.
    """
    report = JourneyReport(project_name=project.name)
    page_by_id = {p.id: p for p in project.pages}

    report.total_pages = len(project.pages)
    report.total_fields = sum(len(p.fields or []) for p in project.pages)
    report.total_conditions = sum(len(p.conditions or []) for p in project.pages)
    pages_by_type: Dict[str, int] = defaultdict(int)
    for page in project.pages:
        pages_by_type[page.type.value] += 1
    report.pages_by_type = dict(pages_by_type)

    # =========================================================================
    # 1. ANSWER ANALYSIS
    # =========================================================================

    collected: Set[str] = {f.name for p in project.pages for f in p.fields or []}
    usage: Dict[str, int] = defaultdict(int)
    depths: List[int] = []

    for page in project.pages:
        for condition in page.conditions or []:
            metrics = expression_metrics(condition.expression)
            depths.append(metrics.depth)
            report.total_condition_nodes += metrics.node_count
            for name in metrics.variable_references:
                usage[name] += 1

    report.variable_usage = dict(usage)
    # "a.b" reads the answer "a"
    referenced_roots = {name.split(".")[0] for name in usage}
    report.uncollected_variables = {name for name in usage if name.split(".")[0] not in collected}
    report.unused_choice_fields = {
        f.name
        for p in project.pages
        for f in p.fields or []
        if is_option_field(f.type) and f.name not in referenced_roots
    }

    # =========================================================================
    # 2. CONDITION COMPLEXITY
    # =========================================================================

    if depths:
        report.max_condition_depth = max(depths)
        report.avg_condition_depth = sum(depths) / len(depths)
    report.max_conditions_per_page = max((len(p.conditions or []) for p in project.pages), default=0)

    # =========================================================================
    # 3. GRAPH STRUCTURE ANALYSIS
    # =========================================================================

    outgoing: Dict[str, List[str]] = {}
    for page in project.pages:
        outgoing[page.id] = page.outgoing_page_ids()
        for target in outgoing[page.id]:
            if target not in page_by_id:
                report.unknown_references.append((page.id, target))

    report.start_pages = [p.id for p in project.pages if p.type == PageType.START]
    report.exit_points = [p.id for p in project.pages if p.is_terminal]

    if report.start_pages:
        reachable = reachable_page_ids(project)
        report.unreachable_pages = {p.id for p in project.pages if p.id not in reachable}

    visited: Set[str] = set()
    for page_id in outgoing:
        if page_id not in visited:
            cycle = _find_cycles_dfs(outgoing, page_id, visited, set(), [])
            if cycle:
                report.has_cycles = True
                report.cycle_example = cycle
                break

    # =========================================================================
    # 4. WARNING FLAGS
    # =========================================================================

    def key_of(page_id: str) -> str:
        page = page_by_id.get(page_id)
        return page.key if page is not None else page_id

    if not report.start_pages:
        report.add_warning("No start page: the journey has no entry point")
    elif len(report.start_pages) > 1:
        report.add_warning(
            f"Multiple start pages: {', '.join(key_of(i) for i in report.start_pages)}"
        )

    for page in project.pages:
        config = registry[page.type]
        label = page_type_label(page.type)
        if config.constraints.requires_next_page and not page.next_page_id:
            report.add_warning(f"{label} page '{page.key}' has no next page")
        if page.conditions and not config.supports_conditions:
            report.add_warning(f"{label} page '{page.key}' has conditions but does not support conditional routing")

    for page_id in report.exit_points:
        page = page_by_id[page_id]
        if page.type != PageType.CONFIRMATION:
            report.add_warning(f"Journey ends on a {page.type.value} page: {page.key}")

    if report.unreachable_pages:
        keys = sorted(key_of(i) for i in report.unreachable_pages)
        report.add_warning(f"Unreachable pages: {', '.join(keys)}")

    if report.unknown_references:
        refs = ", ".join(f"{key_of(src)} -> {dst}" for src, dst in report.unknown_references)
        report.add_warning(f"References to unknown pages: {refs}")

    if report.has_cycles:
        report.add_warning(f"Cycle detected: {' -> '.join(key_of(i) for i in report.cycle_example)}")

    if report.uncollected_variables:
        report.add_warning(
            f"Conditions read answers no field collects: {', '.join(sorted(report.uncollected_variables))}"
        )

    if report.max_condition_depth > 5:
        report.add_warning(f"High condition complexity: max depth {report.max_condition_depth}")

    return report
