# Externals_test.py
import io, os, stat, tempfile, unittest

from external_runner import SpawnError, find_executable, list_executables, run_external
from shell_context import MissingSearchPathError, SearchPathError, ShellContext


def make_file(directory, name, body="#!/bin/sh\necho hello\n", mode=0o755):
    path = os.path.join(directory, name)
    with open(path, "w") as f:
        f.write(body)
    os.chmod(path, mode)
    return path


class ExternalsTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.bin1 = os.path.join(self.tmp.name, "bin1")
        self.bin2 = os.path.join(self.tmp.name, "bin2")
        os.mkdir(self.bin1)
        os.mkdir(self.bin2)
        self.err = io.StringIO()
        self.ctx = self.context(self.bin1, self.bin2)

    def context(self, *dirs):
        env = {"PATH": os.pathsep.join(dirs)}
        return ShellContext(cwd=self.tmp.name, env=env,
                            stdout=io.StringIO(), stderr=self.err)


class TestFindExecutable(ExternalsTestCase):
    def test_finds_owner_executable(self):
        path = make_file(self.bin2, "tool")
        self.assertEqual(find_executable("tool", self.ctx), path)

    def test_first_directory_wins(self):
        first = make_file(self.bin1, "tool")
        make_file(self.bin2, "tool")
        self.assertEqual(find_executable("tool", self.ctx), first)

    def test_skips_file_without_owner_exec_bit(self):
        make_file(self.bin1, "tool", mode=0o644)
        second = make_file(self.bin2, "tool")
        self.assertEqual(find_executable("tool", self.ctx), second)

    def test_group_exec_bit_is_not_enough(self):
        make_file(self.bin1, "tool", mode=0o654)
        self.assertIsNone(find_executable("tool", self.ctx))

    def test_skips_directories(self):
        os.mkdir(os.path.join(self.bin1, "tool"))
        self.assertIsNone(find_executable("tool", self.ctx))

    def test_name_must_match_exactly(self):
        make_file(self.bin1, "toolbox")
        self.assertIsNone(find_executable("tool", self.ctx))

    def test_missing_directory_is_skipped(self):
        ctx = self.context(os.path.join(self.tmp.name, "nope"), self.bin2)
        path = make_file(self.bin2, "tool")
        self.assertEqual(find_executable("tool", ctx), path)

    def test_empty_path_entry_is_skipped(self):
        make_file(self.tmp.name, "tool")
        ctx = self.context("", self.bin1)
        self.assertIsNone(find_executable("tool", ctx))

    def test_unset_path(self):
        ctx = ShellContext(cwd=self.tmp.name, env={}, stdout=io.StringIO(), stderr=self.err)
        with self.assertRaises(MissingSearchPathError):
            find_executable("tool", ctx)

    def test_path_entry_that_is_a_file_is_an_error(self):
        not_a_dir = make_file(self.tmp.name, "plain", mode=0o644)
        ctx = self.context(not_a_dir)
        with self.assertRaises(SearchPathError) as cm:
            find_executable("tool", ctx)
        self.assertIn("failed to read directory", str(cm.exception))

    def test_path_is_read_fresh(self):
        self.assertIsNone(find_executable("tool", self.ctx))
        path = make_file(self.bin1, "tool")
        self.assertEqual(find_executable("tool", self.ctx), path)
        os.remove(path)
        self.assertIsNone(find_executable("tool", self.ctx))

    def test_list_executables(self):
        make_file(self.bin1, "a")
        make_file(self.bin2, "b")
        make_file(self.bin2, "c", mode=0o644)
        self.assertEqual(list_executables(self.ctx), {"a", "b"})


class TestRunExternal(ExternalsTestCase):
    def test_captures_stdout(self):
        exe = make_file(self.bin1, "hello")
        code, out, err = run_external(["hello"], exe, self.ctx)
        self.assertEqual(code, 0)
        self.assertEqual(out, "hello\n")
        self.assertEqual(err, "")

    def test_argv_quoting(self):
        exe = make_file(self.bin1, "args", '#!/bin/sh\nfor a in "$@"; do echo "[$a]"; done\n')
        code, out, _ = run_external(["args", "a b", "c"], exe, self.ctx)
        self.assertEqual(code, 0)
        self.assertEqual(out, "[a b]\n[c]\n")

    def test_runs_in_context_cwd(self):
        exe = make_file(self.bin1, "where", "#!/bin/sh\npwd\n")
        _, out, _ = run_external(["where"], exe, self.ctx)
        self.assertEqual(os.path.realpath(out.strip()), os.path.realpath(self.tmp.name))

    def test_output_without_trailing_newline(self):
        exe = make_file(self.bin1, "nonl", "#!/bin/sh\nprintf abc\n")
        _, out, _ = run_external(["nonl"], exe, self.ctx)
        self.assertEqual(out, "abc")

    def test_stderr_and_exit_code(self):
        exe = make_file(self.bin1, "fail", "#!/bin/sh\necho oops >&2\nexit 3\n")
        code, out, err = run_external(["fail"], exe, self.ctx)
        self.assertEqual(code, 3)
        self.assertEqual(out, "")
        self.assertEqual(err, "oops\n")

    def test_spawn_failure(self):
        exe = make_file(self.bin1, "garbage", "\x00\x01 not a program\n")
        with self.assertRaises(SpawnError) as cm:
            run_external(["garbage"], exe, self.ctx)
        self.assertTrue(cm.exception.strerror.startswith("garbage: "))


if __name__ == "__main__":
    unittest.main(verbosity=2)
