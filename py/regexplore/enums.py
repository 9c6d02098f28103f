from __future__ import annotations

from enum import Enum

__all__ = [ 'AccessClass', 'FailureKind', ]


class AccessClass(Enum):
    RO = 'RO'
    RW = 'RW'
    URO = 'URO'
    URW = 'URW'
    SRO = 'SRO'
    SRW = 'SRW'
    HRO = 'HRO'
    HRW = 'HRW'
    MRO = 'MRO'
    MRW = 'MRW'

    @property
    def writable(self) -> bool:
        return self.value.endswith('RW')

    @property
    def privilege(self) -> str | None:
        """Privilege scope letter (U, S, H, M), or None for unscoped classes."""
        if len(self.value) == 3:
            return self.value[0]
        return None


class FailureKind(Enum):
    UnsupportedRegister = 'unsupported-register'
    PermissionDenied = 'permission-denied'
    TargetUnavailable = 'target-unavailable'
    NoTargetsAvailable = 'no-targets-available'
