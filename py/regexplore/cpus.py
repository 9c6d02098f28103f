"""Enumeration of the processing units present on this machine."""

from __future__ import annotations

import logging
import os

from .errors import NoTargetsError

__all__ = [ 'enumerate_cpus', 'parse_cpu_list', ]

logger = logging.getLogger(__name__)

SYSFS_ONLINE = '/sys/devices/system/cpu/online'
DEV_CPU = '/dev/cpu'


def parse_cpu_list(text: str) -> frozenset[int]:
    """Parse a kernel CPU list such as '0-3,8,10-11'."""
    cpus: set[int] = set()
    for part in text.strip().split(','):
        part = part.strip()
        if not part:
            continue
        if '-' in part:
            lo_str, hi_str = part.split('-', 1)
            lo = int(lo_str, 10)
            hi = int(hi_str, 10)
            if lo < 0 or hi < lo:
                raise ValueError(f'Invalid CPU range {part!r}')
            cpus.update(range(lo, hi + 1))
        else:
            cpu = int(part, 10)
            if cpu < 0:
                raise ValueError(f'Invalid CPU number {part!r}')
            cpus.add(cpu)
    return frozenset(cpus)


def _list_dev_cpu(dev_dir: str) -> frozenset[int]:
    return frozenset(int(name) for name in os.listdir(dev_dir) if name.isdigit())


def enumerate_cpus(sysfs_path: str = SYSFS_ONLINE, dev_dir: str = DEV_CPU) -> frozenset[int]:
    """Return the set of CPU ids present, or raise NoTargetsError."""
    cpus: frozenset[int] = frozenset()

    try:
        with open(sysfs_path) as f:
            cpus = parse_cpu_list(f.read())
    except (OSError, ValueError) as e:
        logger.debug('cannot parse %s: %s, falling back to %s', sysfs_path, e, dev_dir)
        try:
            cpus = _list_dev_cpu(dev_dir)
        except OSError as e2:
            raise NoTargetsError(f'Cannot enumerate CPUs: {e2}') from e2

    if not cpus:
        raise NoTargetsError('No CPUs found')

    logger.debug('found %d CPUs', len(cpus))
    return cpus
