"""
Intcode VM
==========
A small stored-program integer computer with a suspend/resume
execution model, plus the hosts that drive it.

Layout:
    cpu/regs.py       PC, relative base, instruction counter
    cpu/decoder.py    opcode table, addressing modes, decode_instruction()
    mem/memory.py     auto-growing zero-filled tape, watchpoints, snapshots
    machine.py        IntcodeMachine: run() until HALTED / WAITING_FOR_INPUT
                      / PRODUCED_OUTPUT
    loader.py         comma-separated program text → list of ints
    hosts/            amplifier chains, feedback loop, painting robot, arcade
"""

__version__ = "0.2.0"

from .errors import (
    IntcodeError, ProgramParseError, IllegalWriteMode, AddressError,
    NoOutputPending, InputExhausted,
)
from .cpu.decoder import IllegalOpcode, IllegalAddressingMode
from .machine import IntcodeMachine, Status
from .loader import parse_program, load_program


def run_program(program, inputs=()) -> list:
    """Run a program to completion on the given inputs.

    Returns every output value, oldest first.
    """
    return IntcodeMachine(program, inputs).run_until_halt()
