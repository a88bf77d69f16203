#!/usr/bin/env python3
"""
streambf command line.

    streambf hello.bf                 # program from a file, input from stdin
    streambf < prog_and_input.txt     # program and input share stdin
    streambf prog.bf --input "abc" --stats

Settings come from BF_* environment variables (a .env file is loaded
first) and are overridden by the flags below.
"""

import argparse
import sys

from dotenv import load_dotenv

from .config import CELL_WIDTHS, EOF_POLICIES, TAPE_KINDS, VMConfig
from .debugger import StepDebugger
from .errors import BrainfuckError
from .runner import run_stream
from .streams import BufferInput, StreamInput, StreamOutput


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="streambf", description="Streaming Brainfuck virtual machine")
    ap.add_argument("program", nargs="?", help="program file (default: stream the program from stdin)")
    ap.add_argument("--input", dest="input_data", default=None,
                    help="input text for ',' instead of reading stdin")
    ap.add_argument("--tape", choices=TAPE_KINDS, default=None, help="tape model")
    ap.add_argument("--tape-size", type=int, default=None, help="cells on a dense tape")
    ap.add_argument("--circular", action="store_true", default=None,
                    help="wrap the pointer around a dense tape")
    ap.add_argument("--cell-bits", type=int, choices=CELL_WIDTHS, default=None, help="cell width")
    ap.add_argument("--eof", choices=EOF_POLICIES, default=None, help="what ',' does at end of input")
    ap.add_argument("--step-limit", type=int, default=None, help="abort after this many operations")
    ap.add_argument("--trace", action="store_true", help="print machine state after every step to stderr")
    ap.add_argument("--stats", action="store_true", help="print run statistics to stderr")
    return ap


def main(argv=None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        config = VMConfig.from_env().with_overrides(
            tape=args.tape,
            tape_size=args.tape_size,
            circular=args.circular,
            cell_bits=args.cell_bits,
            eof=args.eof,
            step_limit=args.step_limit,
        )
    except BrainfuckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    stdin = sys.stdin
    if args.program:
        try:
            with open(args.program, 'r') as f:
                source = BufferInput(f.read())
        except OSError as e:
            print(f"Error: cannot read {args.program}: {e}", file=sys.stderr)
            return 1
        data = BufferInput(args.input_data) if args.input_data is not None else StreamInput(stdin)
    else:
        source = StreamInput(stdin)
        data = BufferInput(args.input_data) if args.input_data is not None else None

    trace = None
    if args.trace:
        tracer = StepDebugger(config=config, file=sys.stderr)
        trace = tracer.on_step

    try:
        engine = run_stream(source, output=StreamOutput(sys.stdout), input=data,
                            config=config, trace=trace)
    except BrainfuckError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    if args.stats:
        print(f"\nsteps={engine.step_count} instructions={len(engine.log)} "
              f"reads={engine.input_reads} writes={engine.output_writes} "
              f"pointer={engine.pointer} open_loops={engine.loop_depth}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
