"""Command-line interface for regexplore."""

from __future__ import annotations

import argparse
import logging
import sys

from regexplore.builder import DEFAULT_MAX_WORKERS, ResultSetBuilder
from regexplore.catalogue import Catalogue, merge
from regexplore.cpus import enumerate_cpus, parse_cpu_list
from regexplore.cputarget import CSR_DEVICE, MSR_DEVICE, DevFileTarget
from regexplore.csrs import USER_CSRS
from regexplore.msrs import BASE_MSRS, LOCK_INTEL
from regexplore.reader import ReadOutcome, RegisterReader

from .state import DEFAULT_TIMEOUTS
from .types import make_list_item


def _cpu_list(text: str) -> frozenset[int]:
    try:
        cpus = parse_cpu_list(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f'invalid CPU list {text!r}: {e}') from e
    if not cpus:
        raise argparse.ArgumentTypeError(f'empty CPU list {text!r}')
    return cpus


def _non_negative_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f'invalid number {text!r}') from e
    if value < 0:
        raise argparse.ArgumentTypeError(f'must be >= 0, got {text!r}')
    return value


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='regexplore',
        description='Interactive explorer for per-CPU MSRs and per-hart CSRs',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    parser.add_argument(
        '-c', '--cpus', metavar='LIST', type=_cpu_list,
        help='CPUs to read, e.g. 0-3,8 (default: all online CPUs)',
    )
    parser.add_argument(
        '-t', '--timeout', metavar='SECONDS', type=_non_negative_float,
        help='Bound on one read cycle; reads not done in time are reported as target-unavailable',
    )
    parser.add_argument(
        '-j', '--workers', metavar='N', type=int, default=DEFAULT_MAX_WORKERS,
        help=f'Concurrent register reads (default: {DEFAULT_MAX_WORKERS})',
    )
    parser.add_argument(
        '-i', '--interval', metavar='SECONDS', type=_non_negative_float,
        help='Poll interval (0 disables polling)',
    )
    parser.add_argument('--poll', action='store_true', help='Start polling immediately')

    subparsers = parser.add_subparsers(dest='mode', required=True)

    msr_parser = subparsers.add_parser('msr', help='x86 model-specific registers')
    msr_parser.add_argument(
        '--no-locked', action='store_true', help='Do not append the Intel lock-bit MSRs'
    )
    msr_parser.add_argument(
        '--device', default=MSR_DEVICE, help=f'Per-CPU device template (default: {MSR_DEVICE})'
    )

    csr_parser = subparsers.add_parser('csr', help='RISC-V control and status registers')
    csr_parser.add_argument(
        '--device', default=CSR_DEVICE, help=f'Per-hart device template (default: {CSR_DEVICE})'
    )

    args = parser.parse_args(argv)
    if args.workers <= 0:
        parser.error(f'argument -j/--workers: must be positive, got {args.workers}')
    return args


def select_catalogue(args: argparse.Namespace) -> Catalogue:
    if args.mode == 'msr':
        if args.no_locked:
            return BASE_MSRS
        return merge(BASE_MSRS, LOCK_INTEL)
    elif args.mode == 'csr':
        return USER_CSRS
    raise ValueError(f'unknown mode {args.mode!r}')


def make_builder(args: argparse.Namespace) -> ResultSetBuilder:
    target = DevFileTarget(args.device, data_size=8)

    if args.cpus:
        cpus = args.cpus
        enumerate_targets = lambda: cpus  # noqa: E731
    else:
        enumerate_targets = enumerate_cpus

    timeout = args.timeout if args.timeout is not None else DEFAULT_TIMEOUTS.get(args.mode)
    if timeout == 0:
        timeout = None

    return ResultSetBuilder(
        select_catalogue(args),
        RegisterReader(target),
        enumerate_targets,
        max_workers=args.workers,
        timeout=timeout,
    )


def setup_logging(verbose: bool) -> None:
    # The TUI owns the terminal; log records go to the textual console
    from textual.logging import TextualHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        handlers=[TextualHandler()],
        format='%(name)s: %(message)s',
    )


def format_selection(outcomes: list[ReadOutcome], width_bits: int) -> list[str]:
    lines = []
    for outcome in outcomes:
        d = outcome.descriptor
        item = make_list_item(outcome, width_bits=width_bits)
        lines.append(f'0x{d.address:08x} {d.name} {item.title}')
    return lines


def main(argv: list[str] | None = None):
    args = parse_args(argv)
    setup_logging(args.verbose)

    from .app import RegExploreApp

    try:
        builder = make_builder(args)
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    target = builder.reader.target
    with target, builder:
        app = RegExploreApp(
            builder,
            mode=args.mode,
            target_str=f'{args.mode}:{args.device}',
            poll_interval=args.interval,
            start_polling=args.poll,
        )
        result = app.run()

    if result:
        for line in format_selection(result, target.width_bits):
            print(line)
