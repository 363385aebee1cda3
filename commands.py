#!/usr/bin/env python3
# commands.py - builtins for minish

import enum
import os
import re

from external_runner import find_executable
from shell_context import MissingSearchPathError, SearchPathError, ShellExit

_EXIT_CODE = re.compile(r"[+-]?[0-9]+")
_EXIT_MIN, _EXIT_MAX = -2**63, 2**63 - 1


class CommandKind(enum.Enum):
    EXIT = "exit"
    ECHO = "echo"
    TYPE = "type"
    PWD = "pwd"
    CD = "cd"
    EXTERNAL = "external"


def classify(name):
    """Map the first token of a line to its CommandKind (exact match only)."""
    if name in BUILTINS:
        return CommandKind(name)
    return CommandKind.EXTERNAL


# -----------------------
# Builtin commands
# Each function takes the argument tuple and the ShellContext
# -----------------------
def exit_shell(args, ctx):
    if not args:
        raise ShellExit(0)
    if not _EXIT_CODE.fullmatch(args[0]):
        ctx.error(f"Error reading exit code: parsing {args[0]!r}: invalid syntax")
        raise ShellExit(1)
    code = int(args[0])
    if _EXIT_MIN <= code <= _EXIT_MAX:
        raise ShellExit(code)
    ctx.error(f"Error reading exit code: parsing {args[0]!r}: value out of range")
    raise ShellExit(1)

def echo(args, ctx):
    ctx.print(" ".join(args))

def type_command(args, ctx):
    for name in args:
        if name in BUILTINS:
            ctx.print(f"{name} is a shell builtin")
            continue
        try:
            path = find_executable(name, ctx)
        except MissingSearchPathError as e:
            ctx.error(str(e))
            raise ShellExit(1)
        except SearchPathError as e:
            ctx.error(str(e))
            continue
        if path is None:
            ctx.error(f"{name}: not found")
        else:
            ctx.print(f"{name} is {path}")

def print_working_directory(args, ctx):
    ctx.print(ctx.cwd)

def change_directory(args, ctx):
    arg = args[0] if args else "~"
    if arg == "~":
        path = ctx.home()
        if path is None:
            ctx.error("cd: HOME not set")
            return
    else:
        path = arg
    try:
        ctx.chdir(os.path.normpath(os.path.join(ctx.cwd, path)))
    except FileNotFoundError:
        ctx.error(f"cd: {arg}: No such file or directory")
    except OSError as e:
        ctx.error(f"cd: {e}")


BUILTINS = {
    "exit": exit_shell,
    "echo": echo,
    "type": type_command,
    "pwd": print_working_directory,
    "cd": change_directory,
}
