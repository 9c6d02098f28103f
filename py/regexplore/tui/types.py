"""Leaf-level data types and formatting helpers for regexplore."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from regexplore.reader import ReadOutcome


class ValueFormat(enum.Enum):
    HEX = 'hex'
    DEC = 'dec'
    BIN = 'bin'


def format_value(value: int, fmt: ValueFormat, width_bits: int) -> str:
    if fmt == ValueFormat.HEX:
        nchars = (width_bits + 3) // 4
        return f'0x{value:0{nchars}X}'
    elif fmt == ValueFormat.DEC:
        return str(value)
    elif fmt == ValueFormat.BIN:
        return f'0b{value:0{width_bits}b}'
    return hex(value)


def format_title_value(value: int, fmt: ValueFormat, width_bits: int) -> str:
    """List title rendering of a value. Zero padded, never truncated."""
    if fmt == ValueFormat.HEX:
        nchars = (width_bits + 3) // 4
        return f'{value:0{nchars}x} {value:0{width_bits}b}'
    elif fmt == ValueFormat.DEC:
        return str(value)
    return f'{value:0{width_bits}b}'


@dataclass(frozen=True)
class ListItem:
    title: str
    subtitle: str
    error: bool = False

    @property
    def filter_value(self) -> str:
        return f'{self.title}\n{self.subtitle}'.lower()


def make_subtitle(outcome: ReadOutcome) -> str:
    d = outcome.descriptor
    return f'{d.address:8x} [{d.name}]'


def make_title(outcome: ReadOutcome, fmt: ValueFormat, width_bits: int) -> str:
    if outcome.failure is not None:
        return f'--{outcome.failure}--'

    assert outcome.values is not None

    uniform = outcome.uniform_value()
    if uniform is not None:
        return format_title_value(uniform, fmt, width_bits)

    if fmt == ValueFormat.HEX:
        nchars = (width_bits + 3) // 4
        return ' '.join(f'cpu{cpu}={v:0{nchars}x}' for cpu, v in outcome.values.items())
    return ' '.join(f'cpu{cpu}={format_value(v, fmt, width_bits)}' for cpu, v in outcome.values.items())


def make_list_item(outcome: ReadOutcome, fmt: ValueFormat = ValueFormat.HEX, width_bits: int = 64) -> ListItem:
    return ListItem(
        title=make_title(outcome, fmt, width_bits),
        subtitle=make_subtitle(outcome),
        error=not outcome.ok,
    )


def make_list_items(outcomes: list[ReadOutcome], fmt: ValueFormat, width_bits: int) -> list[ListItem]:
    return [make_list_item(o, fmt, width_bits) for o in outcomes]
