from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from .catalogue import RegisterDescriptor
from .enums import FailureKind
from .errors import RegisterReadError
from .target import RegisterTarget

__all__ = [ 'ReadFailure', 'ReadOutcome', 'RegisterReader', ]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadFailure:
    kind: FailureKind
    cause: str

    def __str__(self) -> str:
        return f'{self.kind.value}: {self.cause}' if self.cause else self.kind.value


@dataclass(frozen=True)
class ReadOutcome:
    """Result of reading one descriptor on the current set of CPUs.

    Exactly one of `values` and `failure` is set. `values` maps CPU id to the
    raw register value and iterates in ascending CPU id.
    """

    descriptor: RegisterDescriptor
    values: Mapping[int, int] | None = None
    failure: ReadFailure | None = None

    def __post_init__(self) -> None:
        if (self.values is None) == (self.failure is None):
            raise ValueError(f"Outcome for '{self.descriptor.name}' must have either values or a failure")
        if self.values is not None and not self.values:
            raise ValueError(f"Outcome for '{self.descriptor.name}' has no CPU values")

        if self.values is not None:
            ordered = {cpu: self.values[cpu] for cpu in sorted(self.values)}
            object.__setattr__(self, 'values', MappingProxyType(ordered))

    @classmethod
    def failed(cls, descriptor: RegisterDescriptor, kind: FailureKind, cause: str = '') -> ReadOutcome:
        return cls(descriptor, failure=ReadFailure(kind, cause))

    @property
    def ok(self) -> bool:
        return self.failure is None

    def uniform_value(self) -> int | None:
        """The value if every CPU reported the same one, else None."""
        if not self.values:
            return None
        vals = set(self.values.values())
        return vals.pop() if len(vals) == 1 else None


@dataclass
class RegisterReader:
    target: RegisterTarget

    def read(self, descriptor: RegisterDescriptor, targets: Iterable[int]) -> ReadOutcome:
        """Read `descriptor` on every CPU in `targets`.

        A register is readable or not as a unit: the first failing CPU turns
        the whole outcome into a failure and no values are reported.
        """
        cpus = sorted(targets)
        if not cpus:
            return ReadOutcome.failed(descriptor, FailureKind.NoTargetsAvailable, 'no CPUs to read')

        values: dict[int, int] = {}
        for cpu in cpus:
            try:
                values[cpu] = self.target.read(descriptor.address, cpu)
            except RegisterReadError as e:
                logger.debug('%s (0x%x) on cpu %d: %s', descriptor.name, descriptor.address, cpu, e)
                return ReadOutcome.failed(descriptor, e.kind, str(e))

        return ReadOutcome(descriptor, values=values)
