"""Right-pane detail/display widgets for regexplore."""

from __future__ import annotations

from rich.markup import escape
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Static

from regexplore.reader import ReadOutcome

from .types import ValueFormat, format_value


class BitDiagram(Static):
    """Renders a bit diagram for a register value."""

    def __init__(self, **kwargs) -> None:
        super().__init__('', **kwargs)

    def set_value(self, value: int | None, width_bits: int, label: str = '') -> None:
        if value is None:
            self.update('')
            return

        # Values wider than the nominal width are shown in full
        total_bits = max(width_bits, value.bit_length())
        total_bits = (total_bits + 15) // 16 * 16

        lines = []
        if label:
            lines.append(f'[dim]{escape(label)}[/dim]')

        # Render 16 bits per row, MSB first
        bits_per_row = 16
        for row_start_bit in range(total_bits - 1, -1, -bits_per_row):
            row_end_bit = max(row_start_bit - bits_per_row + 1, 0)

            hdr = ''
            for bit in range(row_start_bit, row_end_bit - 1, -1):
                hdr += f'{bit:>4}'
            lines.append(f'[dim]{hdr}[/dim]')

            vals = ''
            for bit in range(row_start_bit, row_end_bit - 1, -1):
                bv = (value >> bit) & 1
                if bv:
                    vals += f'[bold cyan]{bv:>4}[/bold cyan]'
                else:
                    vals += f'[dim]{bv:>4}[/dim]'
            lines.append(vals)
            lines.append('')

        self.update('\n'.join(lines))


class RegisterDetail(Static):
    """Descriptor metadata plus per-CPU values or the read failure."""

    def __init__(self) -> None:
        super().__init__('', id='reg-detail')
        self.content_markup = ''

    @property
    def plain_text(self) -> str:
        return Text.from_markup(self.content_markup).plain

    def clear_outcome(self) -> None:
        self._show_markup('')

    def _show_markup(self, markup: str) -> None:
        self.content_markup = markup
        self.update(markup)

    def set_outcome(self, outcome: ReadOutcome, fmt: ValueFormat, width_bits: int) -> None:
        d = outcome.descriptor
        lines: list[str] = []

        lines.append(f'[bold]{escape(d.name)}[/bold] @ 0x{d.address:X}')
        lines.append(f'  Access: {d.access.value}')
        if d.description:
            lines.append(f'  [dim]{escape(d.description)}[/dim]')
        lines.append('')

        if outcome.failure is not None:
            lines.append(f'[red]Read error ({outcome.failure.kind.value}): {escape(outcome.failure.cause)}[/red]')
        else:
            assert outcome.values is not None
            lines.append('[bold]Values[/bold]')
            cpu_w = max([len('CPU'), *(len(str(cpu)) for cpu in outcome.values)])
            lines.append(f'  [dim]{"CPU":>{cpu_w}}  Value[/dim]')
            for cpu, value in outcome.values.items():
                lines.append(f'  {cpu:>{cpu_w}}  {format_value(value, fmt, width_bits)}')

        self._show_markup('\n'.join(lines))


class DetailPanel(VerticalScroll):
    """Right pane: details of the register under the cursor."""

    def compose(self) -> ComposeResult:
        yield RegisterDetail()
        yield BitDiagram(id='bit-diagram')

    def set_outcome(self, outcome: ReadOutcome, fmt: ValueFormat, width_bits: int) -> None:
        self.query_one(RegisterDetail).set_outcome(outcome, fmt, width_bits)

        diagram = self.query_one(BitDiagram)
        if outcome.values:
            uniform = outcome.uniform_value()
            if uniform is not None:
                diagram.set_value(uniform, width_bits, 'all CPUs')
            else:
                cpu, value = next(iter(outcome.values.items()))
                diagram.set_value(value, width_bits, f'cpu {cpu} (CPUs differ)')
        else:
            diagram.set_value(None, width_bits)

    def clear_display(self) -> None:
        self.query_one(RegisterDetail).clear_outcome()
        self.query_one(BitDiagram).set_value(None, 0)
