#!/usr/bin/env python3
"""
dec3run — dec3vm program runner

Usage:
    python dec3run.py [image.txt] [--start N] [--max-steps N]
                      [--trace] [--dump] [--disasm] [--verbose]

With no image path the runner prompts for one on stdin.

After the run it prints every register and the number of instructions
executed. A fault (PC or address out of range) is reported on stderr
but is not an error exit: the final state is still printed.

Examples:
    python dec3run.py programs/square.txt
    python dec3run.py loop.txt --max-steps 10000 --trace
    python dec3run.py square.txt --disasm
"""

import argparse
import logging
import sys
import os

# Allow running from project root or as module
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dec3vm import __version__
from dec3vm.cpu.decoder import disassemble_range
from dec3vm.cpu.word import InvalidEncoding
from dec3vm.emu import Machine, StopReason
from dec3vm.loader import LoadError, ImageTooLarge, load_file

PROMPT = "Please enter file path relative to current directory: "


def prompt_for_path() -> str:
    """Ask for an image path on stdin (first whitespace-separated token)."""
    print(PROMPT, end='', flush=True)
    line = sys.stdin.readline()
    parts = line.split()
    return parts[0] if parts else ''


def report(result, out=None):
    """Print the final register values and instruction count."""
    out = out or sys.stdout
    for i, value in enumerate(result.registers):
        print(f"Register {i}: {value}", file=out)
    print(f"Number of instructions executed: {result.instruction_count}", file=out)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="dec3run",
        description="Run a three-digit decimal register machine image",
    )
    parser.add_argument("input", nargs="?",
                        help="Image file of whitespace-separated words "
                             "(prompted for if omitted)")
    parser.add_argument("--start", type=int, default=0,
                        help="Starting address (default: 0)")
    parser.add_argument("--max-steps", type=int, default=None,
                        help="Stop after N instructions (default: no limit)")
    parser.add_argument("--trace", action="store_true",
                        help="Print an instruction trace after the run")
    parser.add_argument("--dump", action="store_true",
                        help="Print a memory dump after the run")
    parser.add_argument("--disasm", action="store_true",
                        help="Print a listing of the image and exit")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log machine activity to stderr")
    parser.add_argument("--version", action="version",
                        version=f"dec3run {__version__}")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    path = args.input or prompt_for_path()
    if not path:
        print("Error: no image file given", file=sys.stderr)
        return 1

    try:
        image = load_file(path)
        machine = Machine()
        machine.load(image)
    except (LoadError, InvalidEncoding, ImageTooLarge) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.disasm:
        print(disassemble_range(machine.mem, 0, max(len(image), 1)))
        return 0

    machine.enable_trace(args.trace)

    try:
        result = machine.run(args.start, max_steps=args.max_steps)
    except Exception as e:
        print(f"Internal error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 2

    if result.reason is StopReason.PC_FAULT:
        print("pc out of bounds.", file=sys.stderr)
    elif result.reason is StopReason.ADDRESS_FAULT:
        print(f"address out of range: {result.fault}", file=sys.stderr)
    elif result.reason is StopReason.STEP_LIMIT:
        print(f"step limit reached ({args.max_steps})", file=sys.stderr)

    if args.trace:
        print(machine.get_trace())
    report(result)
    if args.dump:
        print(machine.mem.dump())

    return 0


if __name__ == "__main__":
    sys.exit(main())
