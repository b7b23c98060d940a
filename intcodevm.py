#!/usr/bin/env python3
"""
intcodevm — Intcode VM command line

Usage:
    python intcodevm.py <program.txt> [--input N ...] [--trace] [--verbose]
    python intcodevm.py <program.txt> --amplifiers 4,3,2,1,0 [--feedback] [--search]
    python intcodevm.py <program.txt> --paint [--start-white]
    python intcodevm.py <program.txt> --arcade [--free-play]

Examples:
    python intcodevm.py day09.txt --input 1           # run, print each output
    python intcodevm.py day07.txt --amplifiers 0,1,2,3,4 --search
    python intcodevm.py day07.txt --amplifiers 5,6,7,8,9 --feedback --search
    python intcodevm.py day11.txt --paint --start-white
    python intcodevm.py day13.txt --arcade --free-play -v --log-file logs/
"""

import argparse
import logging
import sys

from intcode_vm import (
    __version__, IntcodeMachine, IntcodeError, Status, load_program,
)
from intcode_vm.hosts import (
    ArcadeCabinet, PaintingRobot,
    max_thruster_signal, run_amplifier_chain, run_feedback_loop,
)
from intcode_vm.hosts.robot import WHITE, BLACK
from intcode_vm.log_setup import setup_logging

log = logging.getLogger("intcode_vm.cli")


def parse_phase_list(value: str) -> list:
    """Parse '4,3,2,1,0' into [4, 3, 2, 1, 0]."""
    try:
        return [int(tok) for tok in value.split(",") if tok.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid phase list: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intcodevm",
        description="Run Intcode programs and the hosts that drive them",
    )
    parser.add_argument("program", help="Program file (comma-separated integers)")
    parser.add_argument("--input", "-i", type=int, action="append", default=[],
                        metavar="N", help="Queue an input value (repeatable)")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--amplifiers", type=parse_phase_list, metavar="PHASES",
                      help="Run an amplifier chain with these phases")
    mode.add_argument("--paint", action="store_true",
                      help="Run the hull-painting robot")
    mode.add_argument("--arcade", action="store_true",
                      help="Run the arcade cabinet")

    parser.add_argument("--feedback", action="store_true",
                        help="Wire the amplifiers into a feedback loop")
    parser.add_argument("--search", action="store_true",
                        help="Try every permutation of the phases")
    parser.add_argument("--signal", type=int, default=0,
                        help="Initial amplifier signal (default: 0)")
    parser.add_argument("--start-white", action="store_true",
                        help="Robot starts on a white panel")
    parser.add_argument("--free-play", action="store_true",
                        help="Insert quarters before playing the arcade")

    parser.add_argument("--trace", action="store_true",
                        help="Log every executed instruction (DEBUG)")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase console verbosity (-v, -vv)")
    parser.add_argument("--log-file", default=None,
                        help="Write a full DEBUG log to this file or directory")
    parser.add_argument("--version", action="version",
                        version=f"intcodevm {__version__}")
    return parser


def _console_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def run_plain(program, args) -> int:
    vm = IntcodeMachine(program, args.input, trace=args.trace)
    while True:
        status = vm.run()
        if status is Status.HALTED:
            break
        if status is Status.WAITING_FOR_INPUT:
            log.error("Program waiting for input at %d with no input left", vm.regs.PC)
            print("Error: program is waiting for input but none is left "
                  "(use --input)", file=sys.stderr)
            return 1
        print(vm.pop_output())
    log.info("Halted after %d instructions", vm.regs.cycles)
    return 0


def run_amplifiers(program, args) -> int:
    if args.search:
        signal, phases = max_thruster_signal(
            program, args.amplifiers, feedback=args.feedback, signal=args.signal)
        print(f"Max signal: {signal}")
        print(f"Phases:     {','.join(str(p) for p in phases)}")
    else:
        runner = run_feedback_loop if args.feedback else run_amplifier_chain
        print(runner(program, args.amplifiers, args.signal))
    return 0


def run_robot(program, args) -> int:
    robot = PaintingRobot(program, WHITE if args.start_white else BLACK)
    robot.run()
    print(f"Panels painted: {robot.painted_count}")
    print(robot.render())
    return 0


def run_arcade(program, args) -> int:
    cabinet = ArcadeCabinet(program, free_play=args.free_play)
    cabinet.run()
    print(cabinet.render())
    print(f"Blocks: {cabinet.block_count}")
    print(f"Score:  {cabinet.score}")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    level = _console_level(args.verbose)
    if args.trace:
        level = logging.DEBUG
    setup_logging(console_level=level, log_file=args.log_file)

    try:
        program = load_program(args.program)
    except FileNotFoundError:
        log.error("File not found: %s", args.program)
        print(f"Error: File not found: {args.program}", file=sys.stderr)
        return 1
    except OSError as e:
        log.error("Error reading %s: %s", args.program, e)
        print(f"Error reading {args.program}: {e}", file=sys.stderr)
        return 1
    except IntcodeError as e:
        log.error("Cannot load %s: %s", args.program, e)
        print(f"Error: {args.program}: {e}", file=sys.stderr)
        return 1

    try:
        if args.amplifiers is not None:
            return run_amplifiers(program, args)
        if args.paint:
            return run_robot(program, args)
        if args.arcade:
            return run_arcade(program, args)
        return run_plain(program, args)
    except IntcodeError as e:
        log.error("Run aborted: %s: %s", type(e).__name__, e, exc_info=True)
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
