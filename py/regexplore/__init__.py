"""Interactive explorer for per-CPU model-specific and control/status registers."""

from .builder import ReadPool, ResultSetBuilder, build_result_set
from .catalogue import Catalogue, RegisterDescriptor, merge
from .cpus import enumerate_cpus, parse_cpu_list
from .cputarget import DevFileTarget
from .enums import AccessClass, FailureKind
from .errors import (
    NoTargetsError,
    RegisterPermissionError,
    RegisterReadError,
    TargetUnavailableError,
    UnsupportedRegisterError,
)
from .reader import ReadFailure, ReadOutcome, RegisterReader
from .target import RegisterTarget

__all__ = [
    'AccessClass',
    'Catalogue',
    'DevFileTarget',
    'FailureKind',
    'NoTargetsError',
    'ReadFailure',
    'ReadPool',
    'ReadOutcome',
    'RegisterDescriptor',
    'RegisterPermissionError',
    'RegisterReadError',
    'RegisterReader',
    'RegisterTarget',
    'ResultSetBuilder',
    'TargetUnavailableError',
    'UnsupportedRegisterError',
    'build_result_set',
    'enumerate_cpus',
    'merge',
    'parse_cpu_list',
]
