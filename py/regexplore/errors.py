from __future__ import annotations

from .enums import FailureKind

__all__ = [
    'NoTargetsError',
    'RegisterPermissionError',
    'RegisterReadError',
    'TargetUnavailableError',
    'UnsupportedRegisterError',
]


class RegisterReadError(Exception):
    """A single register read failed on a single CPU."""

    kind = FailureKind.UnsupportedRegister

    def __init__(self, message: str, addr: int | None = None, cpu: int | None = None) -> None:
        super().__init__(message)
        self.addr = addr
        self.cpu = cpu


class UnsupportedRegisterError(RegisterReadError):
    kind = FailureKind.UnsupportedRegister


class RegisterPermissionError(RegisterReadError):
    kind = FailureKind.PermissionDenied


class TargetUnavailableError(RegisterReadError):
    kind = FailureKind.TargetUnavailable


class NoTargetsError(Exception):
    """No CPUs could be enumerated."""

    kind = FailureKind.NoTargetsAvailable
