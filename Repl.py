#!/usr/bin/env python3
# Repl.py - read a line, tokenize it, dispatch to a builtin or a program on PATH
import glob
import os
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion

import argparser
import commands
from commands import CommandKind
from external_runner import SpawnError, find_executable, list_executables, run_external
from shell_context import MissingSearchPathError, SearchPathError, ShellContext, ShellExit
from tokenizer import parse_command


class ShellCompleter(Completer):
    def __init__(self, ctx: ShellContext):
        self.ctx = ctx

    def get_completions(self, document, complete_event):
        # The word the user is currently typing
        word_before_cursor = document.get_word_before_cursor(WORD=True)
        word_len = len(word_before_cursor)

        # 1. First word: builtins and programs on PATH
        if document.text_before_cursor.lstrip() == word_before_cursor:
            names = set(commands.BUILTINS)
            try:
                names |= list_executables(self.ctx)
            except MissingSearchPathError:
                pass
            for name in sorted(names):
                if name.startswith(word_before_cursor):
                    yield Completion(name, -word_len)
            return

        # 2. Later words: file paths relative to the shell's directory
        pattern = glob.escape(word_before_cursor) + "*"
        for path in sorted(glob.glob(pattern, root_dir=self.ctx.cwd)):
            display = path
            if os.path.isdir(os.path.join(self.ctx.cwd, path)):
                display += os.sep
            yield Completion(display, -word_len)


# -----------------------
# Dispatch
# -----------------------
def run_program(command, ctx: ShellContext):
    name = command.executable
    try:
        exe = find_executable(name, ctx)
    except MissingSearchPathError as e:
        ctx.error(str(e))
        raise ShellExit(1)
    except SearchPathError as e:
        ctx.error(str(e))
        exe = None

    if exe is None:
        ctx.print(f"{name}: command not found")
        return

    try:
        code, out, err = run_external([name, *command.arguments],
                                      os.path.join(ctx.cwd, exe), ctx)
    except SpawnError as e:
        ctx.error(e.strerror)
        return

    ctx.write(out)
    if err:
        ctx.write_err(err)
    if code < 0:
        ctx.error(f"{name}: terminated by signal {-code}")
    elif code != 0:
        ctx.error(f"{name}: exit status {code}")

def run_single_command(command, ctx: ShellContext):
    """Run one parsed Command. Raises ShellExit when the shell must stop."""
    kind = commands.classify(command.executable)
    if kind is CommandKind.EXTERNAL:
        run_program(command, ctx)
    else:
        commands.BUILTINS[kind.value](command.arguments, ctx)

def process_line(line: str, ctx: ShellContext):
    command = parse_command(line)
    if command is None:
        return
    try:
        run_single_command(command, ctx)
    except ShellExit:
        raise
    except Exception as e:
        ctx.error(f"Runtime error: {e}")


# -----------------------
# Input
# -----------------------
def strip_newline(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line

def read_line(session, prompt_text, ctx: ShellContext) -> str:
    """Next input line without its newline. Raises EOFError at end of input."""
    if session is not None:
        return session.prompt(prompt_text)
    ctx.write(prompt_text)
    line = sys.stdin.readline()
    if not line:
        raise EOFError
    return strip_newline(line)

def run_interactive(ctx: ShellContext, prompt_text=argparser.DEFAULT_PROMPT, complete=True) -> int:
    session = None
    if sys.stdin.isatty():
        session = PromptSession(completer=ShellCompleter(ctx) if complete else None)

    while True:
        try:
            line = read_line(session, prompt_text, ctx)
        except KeyboardInterrupt:
            ctx.print()
            continue
        except EOFError:
            ctx.error("Error reading input: EOF")
            return 1
        process_line(line, ctx)

# -----------------------
# Script mode runner
# -----------------------
def run_script(path: str, ctx: ShellContext) -> int:
    if not os.path.exists(path):
        ctx.error(f"Script not found: {path}")
        return 1
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = strip_newline(line)
                if not line.strip() or line.lstrip().startswith("#"):
                    continue
                process_line(line, ctx)
    except (OSError, UnicodeDecodeError) as e:
        ctx.error(f"Script error: {e}")
        return 1
    return 0

# -----------------------
# Main
# -----------------------
def main(argv=None) -> int:
    args = argparser.build_parser().parse_args(argv)
    ctx = ShellContext.from_process()
    try:
        if args.command is not None:
            process_line(args.command, ctx)
            return 0
        if args.script:
            return run_script(args.script, ctx)
        return run_interactive(ctx, args.prompt, args.complete)
    except ShellExit as e:
        return e.code

if __name__ == "__main__":
    sys.exit(main())
