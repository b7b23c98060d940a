"""
Intcode VM — Main Machine Class

This is the top-level class that integrates:
  - Registers (cpu/regs.py)
  - Memory tape (mem/memory.py)
  - Instruction decoder (cpu/decoder.py)
  - Input queue / output list

Execution model:
  1. Decode the instruction word at PC (opcode + per-parameter modes)
  2. Resolve operands: read parameters → values, write parameter → address
  3. Advance PC past the instruction
  4. Execute the handler (jumps may overwrite PC)
  5. Count the instruction

run() repeats that until one of three events, then returns it:
  - WAITING_FOR_INPUT:  IN with an empty input queue. PC is left on the
                        IN instruction so the next run() retries it.
  - PRODUCED_OUTPUT:    OUT executed. PC is already past it.
  - HALTED:             HALT executed. Any later run()/step() is a no-op
                        that returns HALTED again.

The machine never blocks and never spawns threads. The host decides
when to push input, when to pull output and when to call run() again.
"""

import logging
from collections import deque
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from .cpu.regs import Registers
from .cpu.decoder import (
    decode_instruction, disassemble, IMMEDIATE, RELATIVE,
)
from .errors import AddressError, IllegalWriteMode, InputExhausted, NoOutputPending
from .mem.memory import Memory

log = logging.getLogger(__name__)


class Status(Enum):
    HALTED = 'HALTED'
    WAITING_FOR_INPUT = 'WAITING_FOR_INPUT'
    PRODUCED_OUTPUT = 'PRODUCED_OUTPUT'


class IntcodeMachine:
    """Intcode virtual machine.

    Usage:
        vm = IntcodeMachine([3, 0, 4, 0, 99])
        vm.push_input(42)
        while vm.run() is not Status.HALTED:
            print(vm.pop_output())   # 42
    """

    def __init__(self, program: Sequence[int], inputs: Iterable[int] = (),
                 trace: bool = False):
        self._program = tuple(program)

        self.regs = Registers()
        self.mem = Memory(self._program)

        self.inputs = deque(inputs)
        self.outputs: List[int] = []
        self.halted = False

        # Trace output
        self._trace = trace
        self.trace_output: List[str] = []

        # Instruction dispatch table (built in _build_dispatch)
        self._dispatch = self._build_dispatch()

    def __repr__(self) -> str:
        state = 'halted' if self.halted else 'ready'
        return (f"<IntcodeMachine {state} {self.regs.display()} "
                f"mem={len(self.mem)} in={len(self.inputs)} out={len(self.outputs)}>")

    def reset(self):
        """Reload the original program and clear registers and queues."""
        self.regs.reset()
        self.mem.load_program(self._program)
        self.inputs.clear()
        self.outputs.clear()
        self.halted = False
        self.trace_output.clear()

    # ══════════════════════════════════════════════
    # Host I/O
    # ══════════════════════════════════════════════

    def push_input(self, value: int):
        """Append a value to the back of the input queue."""
        self.inputs.append(value)

    def push_inputs(self, values: Iterable[int]):
        """Append several values to the input queue, in order."""
        self.inputs.extend(values)

    @property
    def has_output(self) -> bool:
        return bool(self.outputs)

    def pop_output(self) -> int:
        """Remove and return the most recently produced output value.

        Only valid after run() returned PRODUCED_OUTPUT (or while
        has_output is true); otherwise NoOutputPending is raised.
        """
        if not self.outputs:
            raise NoOutputPending("pop_output() called with no output pending")
        return self.outputs.pop()

    def drain_output(self) -> List[int]:
        """Remove and return all pending outputs, oldest first."""
        values = self.outputs
        self.outputs = []
        return values

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> Optional[Status]:
        """Execute one instruction. Returns a Status on an event, else None."""
        if self.halted:
            return Status.HALTED

        pc = self.regs.PC
        opcode, _, modes, write_param, next_pc = decode_instruction(self.mem, pc)
        operands = self._decode_operands(pc, modes, write_param)

        if self._trace:
            line = f"{pc:6d}: {disassemble(self.mem, pc):28s} {self.regs.display()}"

        self.regs.PC = next_pc
        status = self._dispatch[opcode](operands)

        if status is Status.WAITING_FOR_INPUT:
            # Resume point: retry the same IN next time
            self.regs.PC = pc
            log.debug("Waiting for input at %d", pc)
            return status

        if self._trace:
            self.trace_output.append(line)
            log.debug(line)

        self.regs.cycles += 1
        return status

    def run(self) -> Status:
        """Run until the machine halts, needs input, or produces output."""
        while True:
            status = self.step()
            if status is not None:
                return status

    def run_until_halt(self) -> List[int]:
        """Run to completion and return every output, oldest first.

        Raises InputExhausted if the program asks for more input than
        was queued.
        """
        while True:
            status = self.run()
            if status is Status.HALTED:
                return self.drain_output()
            if status is Status.WAITING_FOR_INPUT:
                raise InputExhausted(
                    f"Program waiting for input at {self.regs.PC} "
                    f"after {self.regs.cycles} instructions")

    # ══════════════════════════════════════════════
    # Operand decoding
    # ══════════════════════════════════════════════

    def _decode_operands(self, pc: int, modes: tuple, write_param) -> list:
        """Resolve each parameter of the instruction at pc.

        Read parameters resolve to their value, the write parameter
        resolves to its target address:
          POSITION:  value = mem[op]          addr = op
          IMMEDIATE: value = op               (illegal as write target)
          RELATIVE:  value = mem[RB + op]     addr = RB + op
        """
        operands = []
        for index, mode in enumerate(modes):
            raw = self.mem.read(pc + 1 + index)
            if index == write_param:
                if mode == IMMEDIATE:
                    raise IllegalWriteMode(
                        f"Immediate-mode write target in word "
                        f"{self.mem.read(pc)} at {pc}")
                operands.append(self._address(mode, raw))
            elif mode == IMMEDIATE:
                operands.append(raw)
            else:
                operands.append(self.mem.read(self._address(mode, raw)))
        return operands

    def _address(self, mode: int, raw: int) -> int:
        if mode == RELATIVE:
            addr = self.regs.RB + raw
        else:
            addr = raw
        if addr < 0:
            raise AddressError(
                f"Negative address {addr} (operand {raw}, RB {self.regs.RB}) "
                f"at PC {self.regs.PC}")
        return addr

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    #
    # Handler signature: handler(operands) -> Optional[Status]
    # PC already points past the instruction when a handler runs.

    def _build_dispatch(self) -> dict:
        """Build opcode → handler dispatch table."""
        return {
            1:  self._op_add,
            2:  self._op_mul,
            3:  self._op_in,
            4:  self._op_out,
            5:  self._op_jnz,
            6:  self._op_jz,
            7:  self._op_lt,
            8:  self._op_eq,
            9:  self._op_arb,
            99: self._op_halt,
        }

    def _op_add(self, operands):
        a, b, dst = operands
        self.mem.write(dst, a + b)

    def _op_mul(self, operands):
        a, b, dst = operands
        self.mem.write(dst, a * b)

    def _op_in(self, operands):
        if not self.inputs:
            return Status.WAITING_FOR_INPUT
        self.mem.write(operands[0], self.inputs.popleft())

    def _op_out(self, operands):
        self.outputs.append(operands[0])
        return Status.PRODUCED_OUTPUT

    def _jump(self, target: int):
        if target < 0:
            raise AddressError(f"Jump to negative address {target}")
        self.regs.PC = target

    def _op_jnz(self, operands):
        value, target = operands
        if value != 0:
            self._jump(target)

    def _op_jz(self, operands):
        value, target = operands
        if value == 0:
            self._jump(target)

    def _op_lt(self, operands):
        a, b, dst = operands
        self.mem.write(dst, 1 if a < b else 0)

    def _op_eq(self, operands):
        a, b, dst = operands
        self.mem.write(dst, 1 if a == b else 0)

    def _op_arb(self, operands):
        self.regs.RB += operands[0]

    def _op_halt(self, operands):
        self.halted = True
        log.debug("Halted after %d instructions", self.regs.cycles + 1)
        return Status.HALTED
