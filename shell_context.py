#!/usr/bin/env python3
# shell_context.py - ambient state (cwd, env, streams) owned by the dispatcher

import errno
import os
import stat
import sys


class ShellExit(Exception):
    """Raised by the exit builtin (or a fatal lookup error) to end the shell."""

    def __init__(self, code=0):
        super().__init__(code)
        self.code = code


class SearchPathError(OSError):
    pass


class MissingSearchPathError(SearchPathError):
    pass


class ShellContext:
    """Working directory, environment and output streams for one shell.

    Builtins and the PATH lookup read everything from here instead of the
    process, so a test can run `cd`/`pwd`/lookups against a private directory
    and environment. `from_process()` binds a context to the live process.
    """

    def __init__(self, cwd=None, env=None, stdout=None, stderr=None):
        self.cwd = os.path.abspath(cwd) if cwd else os.getcwd()
        self.env = env if env is not None else os.environ
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr

    @classmethod
    def from_process(cls):
        # os.environ itself, so later changes to the environment are observed
        return cls(cwd=os.getcwd(), env=os.environ)

    # -----------------------
    # Output
    # -----------------------
    def write(self, text):
        self.stdout.write(text)
        self.stdout.flush()

    def print(self, msg=""):
        self.write(f"{msg}\n")

    def write_err(self, text):
        self.stderr.write(text)
        self.stderr.flush()

    def error(self, msg):
        self.stderr.write(f"{msg}\n")
        self.stderr.flush()

    # -----------------------
    # Environment
    # -----------------------
    def search_path(self):
        """Directories of PATH in order, read fresh on every call."""
        path = self.env.get("PATH")
        if path is None:
            raise MissingSearchPathError("'PATH' env is not set")
        return path.split(os.pathsep)

    def home(self):
        return self.env.get("HOME")

    def chdir(self, path):
        """Make `path` the working directory, raising OSError like os.chdir."""
        st = os.stat(path)  # FileNotFoundError propagates
        if not stat.S_ISDIR(st.st_mode):
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)
        if not os.access(path, os.X_OK):
            raise PermissionError(errno.EACCES, os.strerror(errno.EACCES), path)
        self.cwd = os.path.normpath(path)
