"""regexplore: Interactive hardware register explorer."""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.timer import Timer
from textual.widgets import Footer, Header, Input
from textual.worker import Worker, WorkerState

from regexplore.builder import ResultSetBuilder
from regexplore.reader import ReadOutcome

from .controller import Event, Refresh, SetFilter, dispatch, parse_event
from .detail import DetailPanel
from .reglist import RegisterList
from .state import AppState
from .types import ValueFormat

logger = logging.getLogger(__name__)

TITLES = {
    'msr': 'MSR explorer',
    'csr': 'CSR explorer',
}


class RegExploreApp(App[list[ReadOutcome] | None]):
    """Browse a register catalogue read live on every CPU."""

    CSS = """
    #main-container {
        height: 1fr;
    }
    #reg-list {
        width: 1fr;
        min-width: 40;
        border-right: solid $accent;
        padding: 0 1;
    }
    #detail-panel {
        width: 1fr;
    }
    #reg-detail {
        padding: 1;
    }
    #bit-diagram {
        padding: 1;
    }
    #filter {
        dock: bottom;
    }
    """

    BINDINGS = [
        Binding('up,k', 'event("up")', 'Up', show=False),
        Binding('down,j', 'event("down")', 'Down', show=False),
        Binding('space', 'event("toggle")', 'Select', show=True),
        Binding('enter', 'event("confirm")', 'Confirm', show=True),
        Binding('slash', 'filter', 'Filter', show=True),
        Binding('escape', 'clear_filter', 'Clear filter', show=False),
        Binding('r', 'refresh', 'Refresh', show=True),
        Binding('f', 'format', 'Format', show=True),
        Binding('p', 'poll', 'Poll', show=True),
        Binding('q', 'event("quit")', 'Quit', show=True),
        Binding('ctrl+c', 'event("quit")', 'Quit', show=False),
    ]

    TITLE = 'regexplore'

    def __init__(
        self,
        builder: ResultSetBuilder,
        mode: str,
        target_str: str = '',
        poll_interval: float | None = None,
        start_polling: bool = False,
    ) -> None:
        super().__init__()
        self.builder = builder

        self.state = AppState(mode, width_bits=builder.reader.target.width_bits)
        self.state.target_str = target_str
        if poll_interval is not None:
            self.state.poll_interval = poll_interval
        self.state.polling = start_polling

        self.title = TITLES.get(mode, self.TITLE)

        self._read_worker: Worker | None = None
        self._poll_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id='main-container'):
            yield RegisterList()
            yield DetailPanel(id='detail-panel')
        yield Input(placeholder='filter registers', id='filter')
        yield Footer()

    def on_mount(self) -> None:
        self._update_subtitle()
        reglist = self.query_one(RegisterList)
        reglist.focus()
        reglist.show(self.state.list_state)
        self._start_read(show_loading=True)
        self._ensure_poll_timer()

    def _update_subtitle(self) -> None:
        parts = [self.state.target_str or self.state.mode]
        targets = self.builder.last_targets
        if targets:
            parts.append(f'{len(targets)} CPUs')
        parts.append(f'format: {self.state.value_format.value}')
        if self.state.polling:
            parts.append(f'polling {self.state.poll_interval}s')
        self.sub_title = '  |  '.join(parts)

    def _refresh_view(self) -> None:
        self.query_one(RegisterList).show(self.state.list_state)

        panel = self.query_one(DetailPanel)
        outcome = self.state.current_outcome()
        if outcome is None:
            panel.clear_display()
        else:
            panel.set_outcome(outcome, self.state.value_format, self.state.width_bits)

    def _dispatch(self, event: Event) -> None:
        transition = dispatch(self.state.list_state, event)
        self.state.list_state = transition.state

        if transition.done:
            self._stop_poll_timer()
            if transition.result is None:
                self.exit(None)
            else:
                self.exit(self.state.selected_outcomes(transition.result))
            return

        self._refresh_view()

    # --- Reading ---

    def _start_read(self, show_loading: bool = False) -> None:
        if self._read_worker is not None and self._read_worker.is_running:
            return

        if show_loading:
            self.query_one(RegisterList).loading = True

        self._read_worker = self.run_worker(
            self.builder.refresh,
            name='read',
            group='read',
            thread=True,
            exit_on_error=False,
        )

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if event.worker.group != 'read':
            return

        if event.state == WorkerState.SUCCESS:
            self._apply_outcomes(event.worker.result)
        elif event.state == WorkerState.ERROR:
            self.query_one(RegisterList).loading = False
            logger.error('register read failed: %s', event.worker.error)
            self.notify(f'Read failed: {event.worker.error}', severity='error')

    def _apply_outcomes(self, outcomes: list[ReadOutcome]) -> None:
        self.state.outcomes = outcomes
        self.state.read_count += 1
        self.query_one(RegisterList).loading = False

        self._dispatch(Refresh(tuple(self.state.make_items())))
        self._update_subtitle()

        if self.builder.last_error:
            self.notify(f'No targets available: {self.builder.last_error}', severity='error')

    # --- Actions ---

    def action_event(self, name: str) -> None:
        self._dispatch(parse_event(name))

    def action_filter(self) -> None:
        self.query_one('#filter', Input).focus()

    def action_clear_filter(self) -> None:
        self.query_one('#filter', Input).value = ''
        self._dispatch(SetFilter(None))
        self.query_one(RegisterList).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == 'filter':
            self._dispatch(SetFilter(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == 'filter':
            self.query_one(RegisterList).focus()

    def action_refresh(self) -> None:
        self._start_read(show_loading=True)

    def action_format(self) -> None:
        if self.state.value_format == ValueFormat.HEX:
            self.state.value_format = ValueFormat.DEC
        elif self.state.value_format == ValueFormat.DEC:
            self.state.value_format = ValueFormat.BIN
        else:
            self.state.value_format = ValueFormat.HEX
        self.notify(f'Format: {self.state.value_format.value}')
        self._dispatch(Refresh(tuple(self.state.make_items())))
        self._update_subtitle()

    def action_poll(self) -> None:
        if self.state.poll_interval <= 0:
            self.notify('Polling disabled (interval is 0)', severity='warning')
            return

        self.state.polling = not self.state.polling
        if self.state.polling:
            self.notify(f'Polling every {self.state.poll_interval}s')
        else:
            self.notify('Stopped polling')
        self._ensure_poll_timer()
        self._update_subtitle()

    # --- Polling ---

    def _ensure_poll_timer(self) -> None:
        """Start the poll timer if needed, or stop it if polling is off."""
        if self.state.polling and self.state.poll_interval > 0:
            if self._poll_timer is None:
                self._poll_timer = self.set_interval(self.state.poll_interval, self._start_read)
        else:
            self._stop_poll_timer()

    def _stop_poll_timer(self) -> None:
        if self._poll_timer is not None:
            self._poll_timer.stop()
            self._poll_timer = None
