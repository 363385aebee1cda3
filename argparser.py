# argparser.py
import argparse

DEFAULT_PROMPT = "$ "

def build_parser():
    parser = argparse.ArgumentParser(
        prog="minish",
        description="Minimal interactive shell: builtins exit, echo, type, pwd, cd "
                    "and programs found on PATH.")

    parser.add_argument("script", nargs="?", default=None,
                        help="Run the lines of this file instead of prompting")
    parser.add_argument("-c", dest="command", metavar="COMMAND", default=None,
                        help="Run a single command line and exit")
    parser.add_argument("--prompt", default=DEFAULT_PROMPT,
                        help="Prompt string (default: %(default)r)")
    parser.add_argument("--no-complete", dest="complete", action="store_false",
                        help="Disable tab completion at the interactive prompt")

    return parser
