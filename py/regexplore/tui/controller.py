"""Navigable list state machine for regexplore.

Every transition is a pure function from the current ListState and one input
event to the next ListState. The presentation layer owns nothing but the
current state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import NamedTuple, Sequence

from .types import ListItem

__all__ = [
    'ConfirmSelection',
    'CursorDown',
    'CursorUp',
    'Event',
    'ListState',
    'Quit',
    'Refresh',
    'SetFilter',
    'ToggleSelection',
    'Transition',
    'dispatch',
    'parse_event',
]


@dataclass(frozen=True)
class ListState:
    """Cursor, selection and filter over one result set.

    `view` holds the indices into `all_items` that pass the filter. `cursor`
    indexes `view` and is -1 only when the view is empty. `selected` holds
    indices into `all_items`, so it survives filter changes.
    """

    all_items: tuple[ListItem, ...] = ()
    view: tuple[int, ...] = ()
    cursor: int = -1
    selected: frozenset[int] = frozenset()
    filter_text: str | None = None

    @classmethod
    def initial(cls, items: Sequence[ListItem]) -> ListState:
        items = tuple(items)
        return cls(all_items=items, view=tuple(range(len(items))), cursor=0 if items else -1)

    @property
    def items(self) -> tuple[ListItem, ...]:
        return tuple(self.all_items[i] for i in self.view)

    @property
    def empty(self) -> bool:
        return not self.view

    @property
    def current_index(self) -> int | None:
        """Index into all_items of the item under the cursor."""
        if self.cursor < 0:
            return None
        return self.view[self.cursor]

    @property
    def current_item(self) -> ListItem | None:
        idx = self.current_index
        return None if idx is None else self.all_items[idx]

    def is_selected(self, view_pos: int) -> bool:
        return self.view[view_pos] in self.selected


# Events


@dataclass(frozen=True)
class CursorUp:
    pass


@dataclass(frozen=True)
class CursorDown:
    pass


@dataclass(frozen=True)
class ToggleSelection:
    pass


@dataclass(frozen=True)
class SetFilter:
    text: str | None


@dataclass(frozen=True)
class Refresh:
    items: tuple[ListItem, ...]


@dataclass(frozen=True)
class ConfirmSelection:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Event = CursorUp | CursorDown | ToggleSelection | SetFilter | Refresh | ConfirmSelection | Quit


class Transition(NamedTuple):
    state: ListState
    done: bool = False
    result: tuple[int, ...] | None = None


def _filter_view(items: tuple[ListItem, ...], text: str | None) -> tuple[int, ...]:
    if not text:
        return tuple(range(len(items)))
    needle = text.lower()
    return tuple(i for i, item in enumerate(items) if needle in item.filter_value)


def move_cursor_up(state: ListState) -> ListState:
    if state.cursor <= 0:
        return state
    return replace(state, cursor=state.cursor - 1)


def move_cursor_down(state: ListState) -> ListState:
    if state.empty or state.cursor >= len(state.view) - 1:
        return state
    return replace(state, cursor=state.cursor + 1)


def toggle_selection(state: ListState) -> ListState:
    idx = state.current_index
    if idx is None:
        return state
    return replace(state, selected=state.selected ^ {idx})


def set_filter(state: ListState, text: str | None) -> ListState:
    text = text or None
    view = _filter_view(state.all_items, text)
    if not view:
        cursor = -1
    elif 0 <= state.cursor < len(view):
        cursor = state.cursor
    else:
        cursor = 0
    return replace(state, view=view, cursor=cursor, filter_text=text)


def refresh(state: ListState, items: Sequence[ListItem]) -> ListState:
    items = tuple(items)
    view = _filter_view(items, state.filter_text)
    if not view:
        cursor = -1
    else:
        cursor = min(max(state.cursor, 0), len(view) - 1)
    selected = frozenset(i for i in state.selected if i < len(items))
    return replace(state, all_items=items, view=view, cursor=cursor, selected=selected)


def dispatch(state: ListState, event: Event) -> Transition:
    if isinstance(event, CursorUp):
        return Transition(move_cursor_up(state))
    elif isinstance(event, CursorDown):
        return Transition(move_cursor_down(state))
    elif isinstance(event, ToggleSelection):
        return Transition(toggle_selection(state))
    elif isinstance(event, SetFilter):
        return Transition(set_filter(state, event.text))
    elif isinstance(event, Refresh):
        return Transition(refresh(state, event.items))
    elif isinstance(event, ConfirmSelection):
        return Transition(state, done=True, result=tuple(sorted(state.selected)))
    elif isinstance(event, Quit):
        return Transition(state, done=True)

    raise TypeError(f'Unknown list event {event!r}')


_SIMPLE_EVENTS = {
    'up': CursorUp,
    'down': CursorDown,
    'toggle': ToggleSelection,
    'confirm': ConfirmSelection,
    'quit': Quit,
}


def parse_event(text: str) -> Event:
    """Parse the presentation layer's event names: up, down, toggle,
    filter:<text>, confirm, quit."""
    if text.startswith('filter:'):
        return SetFilter(text[len('filter:'):])
    try:
        return _SIMPLE_EVENTS[text]()
    except KeyError:
        raise ValueError(f'Unknown list event {text!r}') from None
