"""Built-in RISC-V control and status register catalogue (user level)."""

from __future__ import annotations

from .catalogue import Catalogue, RegisterDescriptor
from .enums import AccessClass

__all__ = [ 'USER_CSRS', ]

URW = AccessClass.URW
URO = AccessClass.URO


def _hpmcounters() -> tuple[list[RegisterDescriptor], list[RegisterDescriptor]]:
    low = [
        RegisterDescriptor(0xC00 + n, f'hpmcounter{n}', URO, 'Performance-monitoring counter')
        for n in range(3, 32)
    ]
    high = [
        RegisterDescriptor(0xC80 + n, f'hpmcounter{n}h', URO, f'Upper 32 bits of hpmcounter{n}, RV32I only')
        for n in range(3, 32)
    ]
    return low, high


_HPM_LOW, _HPM_HIGH = _hpmcounters()

USER_CSRS = Catalogue([
    # User trap setup
    RegisterDescriptor(0x000, 'ustatus', URW, 'User status register'),
    RegisterDescriptor(0x004, 'uie', URW, 'User interrupt-enable register'),
    RegisterDescriptor(0x005, 'utvec', URW, 'User trap handler base address'),
    # User trap handling
    RegisterDescriptor(0x040, 'uscratch', URW, 'Scratch register for user trap handlers'),
    RegisterDescriptor(0x041, 'uepc', URW, 'User exception program counter'),
    RegisterDescriptor(0x042, 'ucause', URW, 'User trap cause'),
    RegisterDescriptor(0x043, 'ubadaddr', URW, 'User bad address'),
    RegisterDescriptor(0x044, 'uip', URW, 'User interrupt pending'),
    # User floating point
    RegisterDescriptor(0x001, 'fflags', URW, 'Floating-Point Accrued Exceptions'),
    RegisterDescriptor(0x002, 'frm', URW, 'Floating-Point Dynamic Rounding Mode'),
    RegisterDescriptor(0x003, 'fcsr', URW, 'Floating-Point Control and Status Register (frm + fflags)'),
    # User counters/timers
    RegisterDescriptor(0xC00, 'cycle', URO, 'Cycle counter for RDCYCLE instruction'),
    RegisterDescriptor(0xC01, 'time', URO, 'Timer for RDTIME instruction'),
    RegisterDescriptor(0xC02, 'instret', URO, 'Instructions-retired counter for RDINSTRET instruction'),
    *_HPM_LOW,
    RegisterDescriptor(0xC80, 'cycleh', URO, 'Upper 32 bits of cycle, RV32I only'),
    RegisterDescriptor(0xC81, 'timeh', URO, 'Upper 32 bits of time, RV32I only'),
    RegisterDescriptor(0xC82, 'instreth', URO, 'Upper 32 bits of instret, RV32I only'),
    *_HPM_HIGH,
], name='csr')
