"""
Tests for the robocopy invocation contract.
"""

import subprocess
import unittest
from unittest import mock

from mirrorlib import mirror
from mirrorlib.errors import MirrorInvocationError
from mirrorlib.mirror import (
    MirrorOptions,
    MirrorStatus,
    build_mirror_command,
    classify_exit_code,
    run_mirror,
)


class TestBuildMirrorCommand(unittest.TestCase):

    def test_default_arguments(self):
        cmd = build_mirror_command("C:/src", "D:/dst", "C:/logs/mirror_log.txt")
        self.assertEqual(cmd, [
            'robocopy', 'C:/src', 'D:/dst',
            '/E', '/COPY:DAT', '/DCOPY:T',
            '/R:5', '/W:5', '/IPG:0',
            '/XO', '/NDL', '/TEE',
            '/LOG+:C:/logs/mirror_log.txt',
        ])

    def test_options_are_applied(self):
        options = MirrorOptions(command='C:/tools/robocopy.exe', retries=2, retry_wait=30, inter_packet_gap=75)
        cmd = build_mirror_command("a", "b", "log.txt", options)
        self.assertEqual(cmd[0], 'C:/tools/robocopy.exe')
        self.assertIn('/R:2', cmd)
        self.assertIn('/W:30', cmd)
        self.assertIn('/IPG:75', cmd)


class TestClassifyExitCode(unittest.TestCase):

    def test_default_threshold(self):
        self.assertEqual(classify_exit_code(0), MirrorStatus.SUCCESS)
        self.assertEqual(classify_exit_code(1), MirrorStatus.SUCCESS)
        self.assertEqual(classify_exit_code(2), MirrorStatus.SUCCESS_WITH_WARNINGS)
        self.assertEqual(classify_exit_code(3), MirrorStatus.SUCCESS_WITH_WARNINGS)
        self.assertEqual(classify_exit_code(4), MirrorStatus.FAILURE)
        self.assertEqual(classify_exit_code(8), MirrorStatus.FAILURE)
        self.assertEqual(classify_exit_code(16), MirrorStatus.FAILURE)

    def test_negative_code_is_failure(self):
        self.assertEqual(classify_exit_code(-1), MirrorStatus.FAILURE)

    def test_custom_threshold(self):
        self.assertEqual(classify_exit_code(7, success_threshold=7), MirrorStatus.SUCCESS_WITH_WARNINGS)
        self.assertEqual(classify_exit_code(2, success_threshold=1), MirrorStatus.FAILURE)


class TestRunMirror(unittest.TestCase):

    def test_dry_run_does_not_spawn(self):
        with mock.patch.object(mirror.subprocess, 'run') as run:
            result = run_mirror("src", "dst", "log.txt", dry_run=True)

        run.assert_not_called()
        self.assertEqual(result.status, MirrorStatus.SUCCESS)
        self.assertEqual(result.command[0], 'robocopy')

    def test_exit_code_is_classified(self):
        completed = subprocess.CompletedProcess(args=[], returncode=1)
        with mock.patch.object(mirror.subprocess, 'run', return_value=completed) as run:
            result = run_mirror("src", "dst", "log.txt")

        self.assertEqual(result.exit_code, 1)
        self.assertEqual(result.status, MirrorStatus.SUCCESS)
        self.assertTrue(result.is_successful)
        self.assertEqual(run.call_args.args[0], build_mirror_command("src", "dst", "log.txt"))

    def test_failure_exit_code(self):
        completed = subprocess.CompletedProcess(args=[], returncode=8)
        with mock.patch.object(mirror.subprocess, 'run', return_value=completed):
            result = run_mirror("src", "dst", "log.txt")

        self.assertEqual(result.status, MirrorStatus.FAILURE)
        self.assertFalse(result.is_successful)

    def test_missing_executable(self):
        with mock.patch.object(mirror.subprocess, 'run', side_effect=FileNotFoundError("robocopy")):
            with self.assertRaises(MirrorInvocationError) as ctx:
                run_mirror("src", "dst", "log.txt")

        self.assertEqual(ctx.exception.command, 'robocopy')


if __name__ == '__main__':
    unittest.main()
