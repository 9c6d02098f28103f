from __future__ import annotations

import unittest

from fakes import FakeTarget

from regexplore.catalogue import RegisterDescriptor
from regexplore.enums import FailureKind
from regexplore.errors import RegisterPermissionError, TargetUnavailableError, UnsupportedRegisterError
from regexplore.reader import ReadFailure, ReadOutcome, RegisterReader

EFER = RegisterDescriptor(0xC0000080, 'EFER')
CYCLE = RegisterDescriptor(0xC00, 'cycle')


class ReadOutcomeTests(unittest.TestCase):
    def test_values_xor_failure(self):
        with self.assertRaises(ValueError):
            ReadOutcome(EFER)
        with self.assertRaises(ValueError):
            ReadOutcome(EFER, values={0: 1}, failure=ReadFailure(FailureKind.UnsupportedRegister, ''))

    def test_empty_values_rejected(self):
        with self.assertRaises(ValueError):
            ReadOutcome(EFER, values={})

    def test_values_are_ordered_and_read_only(self):
        outcome = ReadOutcome(EFER, values={3: 30, 0: 0, 1: 10})
        self.assertEqual(list(outcome.values), [0, 1, 3])
        with self.assertRaises(TypeError):
            outcome.values[0] = 5

    def test_uniform_value(self):
        self.assertEqual(ReadOutcome(EFER, values={0: 7, 1: 7}).uniform_value(), 7)
        self.assertEqual(ReadOutcome(EFER, values={0: 0, 1: 0}).uniform_value(), 0)
        self.assertIsNone(ReadOutcome(EFER, values={0: 7, 1: 8}).uniform_value())

    def test_failure_str(self):
        failure = ReadFailure(FailureKind.PermissionDenied, 'Operation not permitted')
        self.assertEqual(str(failure), 'permission-denied: Operation not permitted')
        self.assertEqual(str(ReadFailure(FailureKind.TargetUnavailable, '')), 'target-unavailable')


class RegisterReaderTests(unittest.TestCase):
    def test_reads_every_target_in_order(self):
        target = FakeTarget(values={0xC0000080: 0x1501})
        outcome = RegisterReader(target).read(EFER, {3, 1, 2, 0})

        self.assertTrue(outcome.ok)
        self.assertEqual(dict(outcome.values), {0: 0x1501, 1: 0x1501, 2: 0x1501, 3: 0x1501})
        self.assertEqual(target.calls, [(0xC0000080, cpu) for cpu in (0, 1, 2, 3)])

    def test_any_failure_fails_the_unit(self):
        target = FakeTarget(
            values={0xC00: 42},
            errors={(0xC00, 1): UnsupportedRegisterError('Input/output error')},
        )
        outcome = RegisterReader(target).read(CYCLE, {0, 1, 2})

        self.assertFalse(outcome.ok)
        self.assertIsNone(outcome.values)
        self.assertEqual(outcome.failure.kind, FailureKind.UnsupportedRegister)
        self.assertEqual(outcome.failure.cause, 'Input/output error')
        # Reading stops at the first failing CPU
        self.assertEqual(target.calls, [(0xC00, 0), (0xC00, 1)])

    def test_first_error_wins(self):
        target = FakeTarget(errors={
            (0xC00, 0): RegisterPermissionError('denied'),
            (0xC00, 1): TargetUnavailableError('gone'),
        })
        outcome = RegisterReader(target).read(CYCLE, {1, 0})
        self.assertEqual(outcome.failure.kind, FailureKind.PermissionDenied)

    def test_no_targets(self):
        outcome = RegisterReader(FakeTarget()).read(EFER, set())
        self.assertEqual(outcome.failure.kind, FailureKind.NoTargetsAvailable)

    def test_wide_values_untouched(self):
        wide = (1 << 100) | 5
        outcome = RegisterReader(FakeTarget(values={0xC00: wide})).read(CYCLE, {0})
        self.assertEqual(outcome.values[0], wide)


if __name__ == '__main__':
    unittest.main()
