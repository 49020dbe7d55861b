"""
Tests for the mirrorcheck command line: argument parsing, exit codes and
the RUN / MIRROR / VERIFY / CONFIG operations.
"""

import os
import io
import json
import logging
import subprocess
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from mirrorcheck import utils
from mirrorcheck.cli import create_parser
from mirrorcheck.config import CONFIG_ENV_VAR
from mirrorcheck.mirrorcheck import main
from mirrorlib import mirror


def _write_file(path: Path, data: bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


class CliTestCase(unittest.TestCase):
    """Temporary trees, an isolated config file, and a restored root logger."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        base = Path(self.temp_dir.name)
        self.source = base / "source"
        self.dest = base / "dest"
        self.logs = base / "logs"
        self.source.mkdir()
        self.dest.mkdir()

        env = mock.patch.dict(os.environ, {CONFIG_ENV_VAR: str(base / "config.json")})
        env.start()
        self.addCleanup(env.stop)

        root_logger = logging.getLogger()
        saved_handlers, saved_level = root_logger.handlers[:], root_logger.level
        package_levels = {name: logging.getLogger(name).level for name in ('mirrorcheck', 'mirrorlib', 'treekit')}

        def restore_logging():
            for handler in root_logger.handlers:
                if handler not in saved_handlers:
                    handler.close()
            root_logger.handlers[:] = saved_handlers
            root_logger.setLevel(saved_level)
            for name, level in package_levels.items():
                logging.getLogger(name).setLevel(level)
            utils.enable_color()

        self.addCleanup(restore_logging)

    def locations(self):
        return ['--src', str(self.source), '--dst', str(self.dest), '--log-dir', str(self.logs)]

    def run_main(self, *argv):
        with redirect_stdout(io.StringIO()) as out:
            code = main(['--quiet', '--no-color'] + list(argv))
        return code, out.getvalue()


class TestParser(unittest.TestCase):

    def test_verify_arguments(self):
        args = create_parser().parse_args([
            'VERIFY', '--src', 's', '--dst', 'd', '--log-dir', 'l',
            '--hash', 'sha512', '--max-log-size', '1000', '--parallel', '--workers', '4'
        ])
        self.assertEqual(args.operation, 'VERIFY')
        self.assertEqual(args.hash, 'SHA512')
        self.assertEqual(args.max_log_size, 1000)
        self.assertTrue(args.parallel)
        self.assertEqual(args.workers, 4)

    def test_unset_options_are_none(self):
        args = create_parser().parse_args(['RUN', '--src', 's', '--dst', 'd', '--log-dir', 'l'])
        self.assertIsNone(args.hash)
        self.assertIsNone(args.parallel)
        self.assertIsNone(args.retries)
        self.assertFalse(args.skip_mirror)

    def test_locations_are_required(self):
        with redirect_stdout(io.StringIO()), mock.patch('sys.stderr', io.StringIO()):
            with self.assertRaises(SystemExit):
                create_parser().parse_args(['VERIFY', '--src', 's'])

    def test_mirror_arguments(self):
        args = create_parser().parse_args([
            'MIRROR', '--src', 's', '--dst', 'd', '--log-dir', 'l',
            '--retries', '2', '--retry-wait', '10', '--ipg', '50', '--robocopy', 'rc.exe', '--dry-run'
        ])
        options = utils.get_mirror_options(args, mock.Mock(get=lambda key: None))
        self.assertEqual(options.command, 'rc.exe')
        self.assertEqual(options.retries, 2)
        self.assertEqual(options.retry_wait, 10)
        self.assertEqual(options.inter_packet_gap, 50)
        self.assertTrue(args.dry_run)


class TestVerifyCommand(CliTestCase):

    def test_success_exit_code(self):
        _write_file(self.source / "a.txt", b"A")
        _write_file(self.dest / "a.txt", b"A")

        code, _ = self.run_main('VERIFY', *self.locations())

        self.assertEqual(code, utils.EXIT_SUCCESS)
        self.assertTrue((self.logs / "hash_verification_log.txt").exists())
        self.assertEqual((self.logs / "hash_checkpoint.txt").read_text(encoding='utf-8'), "a.txt\n")

    def test_failure_exit_code(self):
        _write_file(self.source / "a.txt", b"A")

        code, _ = self.run_main('VERIFY', *self.locations())

        self.assertEqual(code, utils.EXIT_VERIFY_FAILED)

    def test_source_missing_exit_code(self):
        code, _ = self.run_main('VERIFY', '--src', str(self.source / "nope"),
                                '--dst', str(self.dest), '--log-dir', str(self.logs))

        self.assertEqual(code, utils.EXIT_SOURCE_MISSING)
        self.assertFalse(self.logs.exists())

    def test_custom_checkpoint_and_report(self):
        _write_file(self.source / "a.txt", b"A")
        _write_file(self.dest / "a.txt", b"A")
        checkpoint = Path(self.temp_dir.name) / "elsewhere" / "done.txt"
        report = Path(self.temp_dir.name) / "report.json"

        code, _ = self.run_main('VERIFY', *self.locations(),
                                '--checkpoint', str(checkpoint), '--report', str(report))

        self.assertEqual(code, utils.EXIT_SUCCESS)
        self.assertEqual(checkpoint.read_text(encoding='utf-8'), "a.txt\n")
        data = json.loads(report.read_text(encoding='utf-8'))
        self.assertTrue(data['successful'])
        self.assertEqual(data['summary']['verified'], 1)

    def test_diagnostic_log_file(self):
        _write_file(self.source / "a.txt", b"A")
        diagnostic_log = Path(self.temp_dir.name) / "diag" / "run.log"

        code, _ = self.run_main('--log', str(diagnostic_log), 'VERIFY', *self.locations())
        for handler in logging.getLogger().handlers:
            handler.flush()

        self.assertEqual(code, utils.EXIT_VERIFY_FAILED)
        content = diagnostic_log.read_text(encoding='utf-8')
        self.assertIn("WARNING - Missing in destination: a.txt", content)

    def test_configured_log_size_is_used(self):
        self.run_main('CONFIG', 'SET', 'verify.max_log_size', '10')
        _write_file(self.source / "a.txt", b"A")
        _write_file(self.dest / "a.txt", b"A")

        self.run_main('VERIFY', *self.locations())

        self.assertTrue((self.logs / "hash_verification_log-1.txt").exists())


class TestRunCommand(CliTestCase):

    def patch_robocopy(self, returncode):
        completed = subprocess.CompletedProcess(args=[], returncode=returncode)
        found = mock.patch('mirrorcheck.handlers.mirror.find_command', return_value='robocopy')
        run = mock.patch.object(mirror.subprocess, 'run', return_value=completed)
        found.start()
        self.addCleanup(found.stop)
        started = run.start()
        self.addCleanup(run.stop)
        return started

    def test_mirror_then_verify(self):
        _write_file(self.source / "a.txt", b"A")
        _write_file(self.dest / "a.txt", b"A")
        run = self.patch_robocopy(1)

        code, _ = self.run_main('RUN', *self.locations())

        self.assertEqual(code, utils.EXIT_SUCCESS)
        cmd = run.call_args.args[0]
        self.assertEqual(cmd[1:3], [str(self.source), str(self.dest)])
        self.assertIn(f"/LOG+:{self.logs / 'mirror_log.txt'}", cmd)

    def test_mirror_failure_still_verifies(self):
        _write_file(self.source / "a.txt", b"A")
        _write_file(self.dest / "a.txt", b"A")
        self.patch_robocopy(8)

        code, _ = self.run_main('RUN', *self.locations())

        self.assertEqual(code, utils.EXIT_MIRROR_FAILED)
        self.assertIn("Verified: a.txt", (self.logs / "hash_verification_log.txt").read_text(encoding='utf-8'))

    def test_both_phases_fail(self):
        _write_file(self.source / "a.txt", b"A")
        self.patch_robocopy(16)

        code, _ = self.run_main('RUN', *self.locations())

        self.assertEqual(code, utils.EXIT_BOTH_FAILED)

    def test_verification_failure_only(self):
        _write_file(self.source / "a.txt", b"A")
        self.patch_robocopy(0)

        code, _ = self.run_main('RUN', *self.locations())

        self.assertEqual(code, utils.EXIT_VERIFY_FAILED)

    def test_skip_mirror(self):
        _write_file(self.source / "a.txt", b"A")
        _write_file(self.dest / "a.txt", b"A")
        run = self.patch_robocopy(0)

        code, _ = self.run_main('RUN', *self.locations(), '--skip-mirror')

        self.assertEqual(code, utils.EXIT_SUCCESS)
        run.assert_not_called()

    def test_missing_copy_tool(self):
        _write_file(self.source / "a.txt", b"A")
        _write_file(self.dest / "a.txt", b"A")

        with mock.patch('mirrorcheck.handlers.mirror.find_command', return_value=None):
            code, _ = self.run_main('RUN', *self.locations())

        self.assertEqual(code, utils.EXIT_MIRROR_FAILED)


class TestMirrorCommand(CliTestCase):

    def test_dry_run(self):
        with mock.patch.object(mirror.subprocess, 'run') as run:
            code, _ = self.run_main('MIRROR', *self.locations(), '--dry-run')

        self.assertEqual(code, utils.EXIT_SUCCESS)
        run.assert_not_called()
        self.assertTrue(self.logs.is_dir())

    def test_source_missing(self):
        code, _ = self.run_main('MIRROR', '--src', str(self.source / "nope"),
                                '--dst', str(self.dest), '--log-dir', str(self.logs))
        self.assertEqual(code, utils.EXIT_SOURCE_MISSING)


class TestConfigCommand(CliTestCase):

    def test_set_and_view(self):
        code, out = self.run_main('CONFIG', 'SET', 'mirror.retries', '2')
        self.assertEqual(code, 0)
        self.assertIn("mirror.retries = 2", out)

        code, out = self.run_main('CONFIG', 'VIEW', '--section', 'mirror')
        self.assertEqual(code, 0)
        self.assertIn("retries: 2", out)

    def test_set_rejects_bad_key(self):
        code, _ = self.run_main('CONFIG', 'SET', 'retries', '2')
        self.assertEqual(code, 1)

    def test_reset(self):
        self.run_main('CONFIG', 'SET', 'mirror.retries', '2')
        code, _ = self.run_main('CONFIG', 'RESET', '--section', 'mirror')
        self.assertEqual(code, 0)

        code, out = self.run_main('CONFIG', 'VIEW', '--section', 'mirror')
        self.assertIn("retries: 5", out)

    def test_view_unknown_section(self):
        code, _ = self.run_main('CONFIG', 'VIEW', '--section', 'nope')
        self.assertEqual(code, 1)


if __name__ == '__main__':
    unittest.main()
