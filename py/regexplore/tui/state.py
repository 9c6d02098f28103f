"""Runtime state classes for regexplore."""

from __future__ import annotations

from regexplore.reader import ReadOutcome

from .controller import ListState
from .types import ListItem, ValueFormat, make_list_items

# Default poll intervals per mode (seconds). 0 means disabled.
DEFAULT_POLL_INTERVALS = {
    'msr': 1.0,
    'csr': 0.5,
}

# Default bound on one read cycle (seconds)
DEFAULT_TIMEOUTS = {
    'msr': 2.0,
    'csr': 2.0,
}


class AppState:
    """Application-level state."""

    def __init__(self, mode: str, width_bits: int = 64) -> None:
        self.mode = mode
        self.target_str: str = ''
        self.width_bits = width_bits
        self.outcomes: list[ReadOutcome] = []
        self.list_state: ListState = ListState.initial([])
        self.value_format: ValueFormat = ValueFormat.HEX
        self.poll_interval: float = DEFAULT_POLL_INTERVALS.get(mode, 1.0)
        self.polling: bool = False
        self.read_count: int = 0

    def make_items(self) -> list[ListItem]:
        return make_list_items(self.outcomes, self.value_format, self.width_bits)

    def current_outcome(self) -> ReadOutcome | None:
        idx = self.list_state.current_index
        if idx is None or idx >= len(self.outcomes):
            return None
        return self.outcomes[idx]

    def selected_outcomes(self, indices: tuple[int, ...]) -> list[ReadOutcome]:
        return [self.outcomes[i] for i in indices if i < len(self.outcomes)]
