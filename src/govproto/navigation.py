"""
Navigation Engine

Treats a project as a state machine over page ids:

    initial state:  the page of type "start"
    transitions:    each page's conditions (guarded, tried in order, first
                    match wins), then its next_page_id (unguarded fallback)
    terminal:       pages with no next_page_id and no conditions

Lookups return None for "not found"; nothing here raises for a missing
page or a broken reference. Condition evaluation failures count as "no
match" (see govproto.conditions.evaluate_condition).

Answer data may be a plain mapping of field name to answer or a DataModel.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, List, Mapping, Optional, Set, Union

from govproto.conditions import evaluate_condition
from govproto.page_types import PageType
from govproto.pages import Page
from govproto.project import DataModel, Project

Answers = Union[Mapping[str, Any], DataModel, None]


def _answers(data: Answers) -> Mapping[str, Any]:
    if isinstance(data, DataModel):
        return data.answers
    return data or {}


def find_page_by_id(project: Project, page_id: Optional[str]) -> Optional[Page]:
    for page in project.pages:
        if page.id == page_id:
            return page
    return None


def find_page_by_key(project: Project, key: str) -> Optional[Page]:
    for page in project.pages:
        if page.key == key:
            return page
    return None


def find_page_by_path(project: Project, path: str) -> Optional[Page]:
    for page in project.pages:
        if page.path == path:
            return page
    return None


def find_start_page(project: Project) -> Optional[Page]:
    """The first page of type start, if any."""
    for page in project.pages:
        if page.type == PageType.START:
            return page
    return None


def get_next_page(project: Project, current_page: Page, data: Answers = None) -> Optional[Page]:
    """
    Decide where the user goes after current_page.

    Conditions are evaluated in list order and the first that holds
    decides, even if its target does not exist (the result is then None).
    With no matching condition the next_page_id is followed.
    """
    answers = _answers(data)
    for condition in current_page.conditions or []:
        if evaluate_condition(condition.expression, answers):
            return find_page_by_id(project, condition.to_page_id)

    if current_page.next_page_id:
        return find_page_by_id(project, current_page.next_page_id)
    return None


def get_referencing_pages(project: Project, target_page_id: str) -> List[Page]:
    """Pages whose next_page_id or any condition points at target_page_id."""
    return [page for page in project.pages if page.references(target_page_id)]


def is_page_reachable(project: Project, target_page_id: str) -> bool:
    """
    True if target_page_id can be reached from the start page by
    following next_page_id and condition edges, ignoring their guards.

    False if the project has no start page.
    """
    start_page = find_start_page(project)
    if start_page is None:
        return False

    visited: Set[str] = set()
    queue: Deque[str] = deque([start_page.id])

    while queue:
        page_id = queue.popleft()
        if page_id == target_page_id:
            return True
        if page_id in visited:
            continue
        visited.add(page_id)

        page = find_page_by_id(project, page_id)
        if page is None:
            continue
        for next_id in page.outgoing_page_ids():
            if next_id not in visited:
                queue.append(next_id)

    return False


def reachable_page_ids(project: Project) -> Set[str]:
    """Ids of every existing page reachable from the start page."""
    start_page = find_start_page(project)
    if start_page is None:
        return set()

    reachable: Set[str] = set()
    queue: Deque[str] = deque([start_page.id])
    while queue:
        page_id = queue.popleft()
        if page_id in reachable:
            continue
        page = find_page_by_id(project, page_id)
        if page is None:
            continue
        reachable.add(page_id)
        queue.extend(page.outgoing_page_ids())
    return reachable


def terminal_pages(project: Project) -> List[Page]:
    """Pages with no outgoing edge, in project order."""
    return [page for page in project.pages if page.is_terminal]


def walk_journey(project: Project, data: Answers = None, max_steps: Optional[int] = None) -> List[Page]:
    """
    Follow the journey from the start page for one set of answers.

    Stops at a page with no next page, before revisiting a page, or after
    max_steps pages (default: the number of pages in the project).
    Returns the pages visited in order; empty without a start page.
    """
    limit = len(project.pages) if max_steps is None else max_steps
    page = find_start_page(project)
    path: List[Page] = []
    seen: Set[str] = set()

    while page is not None and page.id not in seen and len(path) < limit:
        path.append(page)
        seen.add(page.id)
        page = get_next_page(project, page, data)

    return path
