from __future__ import annotations

import unittest

import pytest

from regexplore.tui.controller import (
    ConfirmSelection,
    CursorDown,
    CursorUp,
    ListState,
    Quit,
    Refresh,
    SetFilter,
    ToggleSelection,
    dispatch,
    parse_event,
)
from regexplore.tui.types import ListItem


def _items(*names: str) -> tuple[ListItem, ...]:
    return tuple(
        ListItem(title=f'{i:016x}', subtitle=f'{0x100 + i:8x} [{name}]') for i, name in enumerate(names)
    )


def _run(state: ListState, *events) -> ListState:
    for event in events:
        state = dispatch(state, event).state
    return state


class CursorTests(unittest.TestCase):
    def test_initial_state(self):
        state = ListState.initial(_items('A', 'B'))
        self.assertEqual(state.cursor, 0)
        self.assertEqual(state.selected, frozenset())
        self.assertIsNone(state.filter_text)
        self.assertEqual(len(state.items), 2)

    def test_initial_empty(self):
        state = ListState.initial([])
        self.assertEqual(state.cursor, -1)
        self.assertTrue(state.empty)
        self.assertIsNone(state.current_item)

    def test_down_clamps_at_end(self):
        items = _items('A', 'B', 'C', 'D')
        state = ListState.initial(items)
        state = _run(state, *[CursorDown()] * len(items))
        self.assertEqual(state.cursor, len(items) - 1)

        again = dispatch(state, CursorDown()).state
        self.assertEqual(again, state)

    def test_up_is_noop_at_start(self):
        state = ListState.initial(_items('A', 'B'))
        self.assertEqual(dispatch(state, CursorUp()).state, state)

    def test_up_down(self):
        state = _run(ListState.initial(_items('A', 'B', 'C')), CursorDown(), CursorDown(), CursorUp())
        self.assertEqual(state.cursor, 1)
        self.assertEqual(state.current_item.subtitle, '     101 [B]')

    def test_moves_on_empty_list(self):
        state = _run(ListState.initial([]), CursorDown(), CursorUp())
        self.assertEqual(state.cursor, -1)


class SelectionTests(unittest.TestCase):
    def test_toggle_twice_is_identity(self):
        state = _run(ListState.initial(_items('A', 'B', 'C')), CursorDown())
        once = dispatch(state, ToggleSelection()).state
        self.assertEqual(once.selected, {1})
        twice = dispatch(once, ToggleSelection()).state
        self.assertEqual(twice.selected, state.selected)

    def test_toggle_on_empty_is_noop(self):
        state = ListState.initial([])
        self.assertEqual(dispatch(state, ToggleSelection()).state, state)

    def test_toggle_uses_original_index_under_filter(self):
        state = _run(ListState.initial(_items('EFER', 'STAR', 'LSTAR')), SetFilter('lstar'))
        self.assertEqual(len(state.items), 1)
        state = dispatch(state, ToggleSelection()).state
        self.assertEqual(state.selected, {2})

        state = dispatch(state, SetFilter('')).state
        self.assertTrue(state.is_selected(2))
        self.assertFalse(state.is_selected(0))


class FilterTests(unittest.TestCase):
    def test_filter_round_trip_restores_items(self):
        items = _items('EFER', 'STAR', 'LSTAR', 'CSTAR')
        state = ListState.initial(items)
        state = _run(state, SetFilter(''), SetFilter('star'), SetFilter(''))
        self.assertEqual(state.items, items)
        self.assertIsNone(state.filter_text)

    def test_filter_is_case_insensitive_substring(self):
        state = dispatch(ListState.initial(_items('EFER', 'STAR', 'LSTAR')), SetFilter('Star')).state
        self.assertEqual([i.subtitle for i in state.items], ['     101 [STAR]', '     102 [LSTAR]'])

    def test_filter_matches_title(self):
        state = dispatch(ListState.initial(_items('A', 'B')), SetFilter('0000000000000001')).state
        self.assertEqual(state.view, (1,))

    def test_cursor_kept_when_in_range(self):
        state = _run(ListState.initial(_items('STAR', 'LSTAR', 'CSTAR', 'EFER')), CursorDown())
        state = dispatch(state, SetFilter('star')).state
        self.assertEqual(state.cursor, 1)

    def test_cursor_reset_when_out_of_range(self):
        state = _run(ListState.initial(_items('EFER', 'STAR', 'LSTAR')), CursorDown(), CursorDown())
        state = dispatch(state, SetFilter('efer')).state
        self.assertEqual(state.cursor, 0)
        self.assertEqual(state.current_index, 0)

    def test_no_match(self):
        state = dispatch(ListState.initial(_items('EFER')), SetFilter('nothing')).state
        self.assertTrue(state.empty)
        self.assertEqual(state.cursor, -1)
        state = dispatch(state, SetFilter(None)).state
        self.assertEqual(state.cursor, 0)

    def test_selection_survives_filter(self):
        state = _run(ListState.initial(_items('EFER', 'STAR')), ToggleSelection(), SetFilter('star'))
        self.assertEqual(state.selected, {0})


class RefreshTests(unittest.TestCase):
    def test_refresh_shrinks(self):
        state = ListState(
            all_items=_items('A', 'B', 'C'), view=(0, 1, 2), cursor=1, selected=frozenset({0})
        )
        state = dispatch(state, Refresh(_items('A', 'B'))).state
        self.assertEqual(state.cursor, 1)
        self.assertEqual(state.selected, {0})

    def test_refresh_drops_invalid_selection_and_clamps(self):
        state = ListState(
            all_items=_items('A', 'B', 'C'), view=(0, 1, 2), cursor=2, selected=frozenset({0, 2})
        )
        state = dispatch(state, Refresh(_items('A', 'B'))).state
        self.assertEqual(state.cursor, 1)
        self.assertEqual(state.selected, {0})

    def test_refresh_from_empty(self):
        state = dispatch(ListState.initial([]), Refresh(_items('A'))).state
        self.assertEqual(state.cursor, 0)

    def test_refresh_reapplies_filter(self):
        state = dispatch(ListState.initial(_items('EFER', 'STAR')), SetFilter('star')).state
        state = dispatch(state, Refresh(_items('EFER', 'STAR', 'LSTAR'))).state
        self.assertEqual(state.view, (1, 2))
        self.assertEqual(state.filter_text, 'star')


class TerminalTests(unittest.TestCase):
    def test_confirm_returns_selection(self):
        state = _run(ListState.initial(_items('A', 'B', 'C')), CursorDown(), CursorDown(),
                     ToggleSelection(), CursorUp(), CursorUp(), ToggleSelection())
        t = dispatch(state, ConfirmSelection())
        self.assertTrue(t.done)
        self.assertEqual(t.result, (0, 2))

    def test_quit(self):
        t = dispatch(ListState.initial(_items('A')), Quit())
        self.assertTrue(t.done)
        self.assertIsNone(t.result)

    def test_unknown_event(self):
        with self.assertRaises(TypeError):
            dispatch(ListState.initial([]), object())


@pytest.mark.parametrize('text, expected', [
    ('up', CursorUp()),
    ('down', CursorDown()),
    ('toggle', ToggleSelection()),
    ('confirm', ConfirmSelection()),
    ('quit', Quit()),
    ('filter:efer', SetFilter('efer')),
    ('filter:', SetFilter('')),
])
def test_parse_event(text, expected):
    assert parse_event(text) == expected


def test_parse_event_unknown():
    with pytest.raises(ValueError):
        parse_event('sideways')


if __name__ == '__main__':
    unittest.main()
