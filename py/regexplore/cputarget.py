from __future__ import annotations

import errno
import logging
import os
import threading
import weakref

from .errors import (
    RegisterPermissionError,
    RegisterReadError,
    TargetUnavailableError,
    UnsupportedRegisterError,
)
from .target import RegisterTarget

__all__ = [ 'DevFileTarget', 'MSR_DEVICE', 'CSR_DEVICE', ]

logger = logging.getLogger(__name__)

MSR_DEVICE = '/dev/cpu/{cpu}/msr'
CSR_DEVICE = '/dev/cpu/{cpu}/csr'

_PERMISSION_ERRNOS = (errno.EACCES, errno.EPERM)
_UNAVAILABLE_ERRNOS = (errno.ENOENT, errno.ENXIO, errno.ENODEV)


def _oserror_to_read_error(err: OSError, addr: int, cpu: int) -> RegisterReadError:
    if err.errno in _PERMISSION_ERRNOS:
        cls = RegisterPermissionError
    elif err.errno in _UNAVAILABLE_ERRNOS:
        cls = TargetUnavailableError
    else:
        # The msr driver returns EIO for addresses the CPU does not implement
        cls = UnsupportedRegisterError
    return cls(err.strerror or str(err), addr=addr, cpu=cpu)


class DevFileTarget(RegisterTarget):
    """Reads registers through a per-CPU character device.

    The register number is used as the file offset, which is how the Linux
    msr driver (and compatible per-hart CSR drivers) expose registers.
    """

    def __init__(self, path_template: str = MSR_DEVICE, data_size: int = 8) -> None:
        if data_size <= 0:
            raise ValueError(f'Data size must be positive, got {data_size}')
        if '{cpu}' not in path_template:
            raise ValueError(f'Device path template must contain {{cpu}}, got {path_template!r}')

        self.path_template = path_template
        self.data_size = data_size

        self._fds: dict[int, int] = {}
        self._lock = threading.Lock()

        weakref.finalize(self, DevFileTarget.cleanup, self._fds)

    @staticmethod
    def cleanup(fds: dict[int, int]):
        for fd in fds.values():
            os.close(fd)
        fds.clear()

    def close(self):
        with self._lock:
            DevFileTarget.cleanup(self._fds)

    def path_for(self, cpu: int) -> str:
        return self.path_template.format(cpu=cpu)

    def _fd_for(self, cpu: int) -> int:
        with self._lock:
            fd = self._fds.get(cpu)
            if fd is None:
                path = self.path_for(cpu)
                logger.debug('opening %s', path)
                fd = os.open(path, os.O_RDONLY)
                self._fds[cpu] = fd
            return fd

    def read(self, addr: int, cpu: int) -> int:
        if addr < 0:
            raise UnsupportedRegisterError(f'Negative register address {addr}', addr=addr, cpu=cpu)

        try:
            fd = self._fd_for(cpu)
            data = os.pread(fd, self.data_size, addr)
        except OSError as e:
            raise _oserror_to_read_error(e, addr, cpu) from e

        if len(data) != self.data_size:
            raise UnsupportedRegisterError(
                f'Short read: {len(data)} of {self.data_size} bytes', addr=addr, cpu=cpu)

        return int.from_bytes(data, self._byteorder(), signed=False)
