from __future__ import annotations

import sys
from abc import ABC, abstractmethod

__all__ = [
    'RegisterTarget',
]


class RegisterTarget(ABC):
    """Per-CPU register read primitive.

    read() returns the raw unsigned value of register `addr` on CPU `cpu`, or
    raises a RegisterReadError subclass describing why it could not.
    """

    data_size: int = 8

    @abstractmethod
    def read(self, addr: int, cpu: int) -> int: ...

    def close(self):
        pass

    @property
    def width_bits(self) -> int:
        return self.data_size * 8

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_tb):
        self.close()

    def _byteorder(self) -> str:
        return sys.byteorder
