"""
Content tab selector for a subject's detail view.

The selector keeps exactly one tab active and resets to the first tab whenever
the viewed subject changes identity.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union


class ProjectTab(str, Enum):
    """Tabs of the project detail view, in display order."""

    overview = "Overview"
    features = "Features"
    impact = "Impact"


FIRST_TAB = list(ProjectTab)[0]


@dataclass(frozen=True)
class TabSelection:
    active_tab: ProjectTab = FIRST_TAB
    subject_id: Optional[str] = None


@dataclass(frozen=True)
class TabSelected:
    tab: ProjectTab


@dataclass(frozen=True)
class SubjectChanged:
    subject_id: Optional[str]


TabEvent = Union[TabSelected, SubjectChanged]


def reduce_tabs(state: TabSelection, event: TabEvent) -> TabSelection:
    """Apply one tab event and return the resulting selection."""
    match event:
        case TabSelected(tab=tab):
            if tab == state.active_tab:
                return state
            return replace(state, active_tab=ProjectTab(tab))
        case SubjectChanged(subject_id=subject_id):
            if subject_id == state.subject_id:
                return state
            return TabSelection(active_tab=FIRST_TAB, subject_id=subject_id)
        case _:
            return state


class TabSelector:
    """Stateful owner of a TabSelection with change observers."""

    def __init__(self, subject_id: Optional[str] = None) -> None:
        self._state = TabSelection(subject_id=subject_id)
        self._observers: List[Callable[[TabSelection], None]] = []

    @property
    def active_tab(self) -> ProjectTab:
        return self._state.active_tab

    @property
    def subject_id(self) -> Optional[str]:
        return self._state.subject_id

    def subscribe(self, observer: Callable[[TabSelection], None]) -> None:
        self._observers.append(observer)

    def _dispatch(self, event: TabEvent) -> None:
        new_state = reduce_tabs(self._state, event)
        if new_state != self._state:
            self._state = new_state
            for observer in list(self._observers):
                observer(new_state)

    def select_tab(self, name: Union[str, ProjectTab]) -> None:
        """Make name the active tab. name must be one of ProjectTab's values."""
        self._dispatch(TabSelected(ProjectTab(name)))

    def on_subject_change(self, subject_id: Optional[str]) -> None:
        self._dispatch(SubjectChanged(subject_id))


@dataclass(frozen=True)
class TabContent:
    """What a tab shows: an optional paragraph followed by an optional list."""

    text: Optional[str] = None
    items: Tuple[Any, ...] = ()
    items_heading: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.text and not self.items


def _as_items(value: Any) -> Tuple[Any, ...]:
    return tuple(value) if isinstance(value, list) else ()


def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def tab_content(project: Mapping[str, Any], tab: Union[str, ProjectTab]) -> TabContent:
    """
    Derive the content shown under a tab for a project record.

    Overview shows content.overview (or the description) as text. Its
    "Project Details" list is content.overview when that is a list, otherwise
    the features list. Features only shows a list. Impact shows
    content.impact as text or list.
    """
    content = project.get("content") or {}
    tab = ProjectTab(tab)
    overview = _first_present(content.get("overview"), project.get("description"))
    features = _first_present(content.get("features"), project.get("features"))

    if tab == ProjectTab.overview:
        details = _as_items(overview) or _as_items(features)
        return TabContent(
            text=overview if isinstance(overview, str) else None,
            items=details,
            items_heading="Project Details" if details else None,
        )
    if tab == ProjectTab.features:
        return TabContent(items=_as_items(features))

    impact = content.get("impact")
    return TabContent(
        text=impact if isinstance(impact, str) else None,
        items=_as_items(impact),
    )
