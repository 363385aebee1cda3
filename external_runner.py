# external_runner.py
from __future__ import annotations
import os, stat, subprocess
from typing import Tuple, Optional

from shell_context import SearchPathError


class SpawnError(OSError):
    """The program was found but could not be started."""


def is_owner_executable(mode: int) -> bool:
    return bool(mode & stat.S_IXUSR)

def find_executable(name: str, ctx) -> Optional[str]:
    """Return the path of the first owner-executable file called `name`
    in the context's PATH, or None.

    Directories that do not exist are skipped; any other read error raises
    SearchPathError. An unset PATH raises MissingSearchPathError. Relative
    entries are taken relative to the context working directory."""
    for d in ctx.search_path():
        if not d:
            continue
        try:
            entries = list(os.scandir(os.path.join(ctx.cwd, d)))
        except FileNotFoundError:
            continue
        except OSError as e:
            raise SearchPathError(f"failed to read directory: {e}") from e

        for entry in entries:
            if entry.name != name:
                continue
            try:
                if entry.is_dir():
                    continue
                mode = entry.stat().st_mode
            except OSError as e:
                ctx.error(f"Failed to get file info: {e}")
                continue
            if is_owner_executable(mode):
                return os.path.join(d, name)
    return None

def run_external(argv: list[str], exe: str, ctx) -> Tuple[int, str, str]:
    """Run `exe` with argv[0] as its name, in the context's cwd and env.
    Blocks until it exits. Returns (exit_code, stdout_text, stderr_text);
    raises SpawnError if the process could not be started."""
    try:
        cp = subprocess.run(argv, executable=exe, cwd=ctx.cwd, env=ctx.env,
                            capture_output=True, text=True, errors="replace")
    except OSError as e:
        raise SpawnError(e.errno, f"{argv[0]}: {e.strerror or e}") from e
    return cp.returncode, cp.stdout, cp.stderr

def list_executables(ctx) -> set[str]:
    """Names of every owner-executable file on PATH (for completion).
    Unreadable directories are skipped."""
    names = set()
    for d in ctx.search_path():
        if not d:
            continue
        try:
            entries = list(os.scandir(os.path.join(ctx.cwd, d)))
        except OSError:
            continue
        for entry in entries:
            try:
                if not entry.is_dir() and is_owner_executable(entry.stat().st_mode):
                    names.add(entry.name)
            except OSError:
                continue
    return names
