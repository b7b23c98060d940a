"""
Intcode VM — Decoder and Memory Tests
"""

import pytest

from intcode_vm import AddressError, IllegalAddressingMode, IllegalOpcode
from intcode_vm.cpu.decoder import (
    OPCODES, MNEMONICS, POSITION, IMMEDIATE, RELATIVE,
    decode_instruction, disassemble, split_word,
)
from intcode_vm.cpu.regs import Registers
from intcode_vm.mem.memory import Memory


class TestDecoder:

    def test_split_word(self):
        assert split_word(1002) == (2, (POSITION, IMMEDIATE, POSITION))
        assert split_word(21101) == (1, (IMMEDIATE, IMMEDIATE, RELATIVE))
        assert split_word(99) == (99, (0, 0, 0))
        assert split_word(3) == (3, (0, 0, 0))

    def test_decode_trims_modes_to_arity(self):
        mem = Memory([104, 7, 99])
        opcode, mnem, modes, write_param, next_pc = decode_instruction(mem, 0)
        assert (opcode, mnem, modes, write_param, next_pc) == \
            (4, 'OUT', (IMMEDIATE,), None, 2)

    def test_decode_write_param(self):
        mem = Memory([21107, 1, 2, 3])
        _, mnem, modes, write_param, next_pc = decode_instruction(mem, 0)
        assert mnem == 'LT'
        assert modes == (IMMEDIATE, IMMEDIATE, RELATIVE)
        assert write_param == 2
        assert next_pc == 4

    def test_halt_has_no_params(self):
        _, mnem, modes, _, next_pc = decode_instruction(Memory([99]), 0)
        assert mnem == 'HALT'
        assert modes == ()
        assert next_pc == 1

    def test_unknown_opcode(self):
        with pytest.raises(IllegalOpcode):
            decode_instruction(Memory([10]), 0)

    def test_bad_mode_ignored_past_arity(self):
        """A junk digit above the last parameter is not a mode."""
        _, mnem, modes, _, _ = decode_instruction(Memory([3099, 0]), 0)
        assert mnem == 'HALT'

    def test_bad_mode_within_arity(self):
        with pytest.raises(IllegalAddressingMode):
            decode_instruction(Memory([504, 0]), 0)

    def test_disassemble(self):
        assert disassemble(Memory([1002, 4, 3, 4, 33]), 0) == "MUL  [4] #3 [4]"
        assert disassemble(Memory([204, -1]), 0) == "OUT  [RB-1]"
        assert disassemble(Memory([99]), 0) == "HALT"

    def test_tables_agree(self):
        assert len(OPCODES) == 10
        for op, (mnem, count, write_param) in OPCODES.items():
            assert MNEMONICS[mnem] == op
            assert write_param is None or write_param < count


class TestMemory:

    def test_copy_of_program(self):
        program = [1, 2, 3]
        mem = Memory(program)
        mem.write(0, 9)
        assert program == [1, 2, 3]

    def test_read_grows_with_zeros(self):
        mem = Memory([1, 2])
        assert mem.read(5) == 0
        assert len(mem) == 6
        assert mem.to_list() == [1, 2, 0, 0, 0, 0]

    def test_write_grows(self):
        mem = Memory()
        mem[3] = 42
        assert mem.to_list() == [0, 0, 0, 42]

    def test_never_shrinks(self):
        mem = Memory([0] * 10)
        mem.read(2)
        mem.write(1, 5)
        assert len(mem) == 10

    def test_negative_address(self):
        mem = Memory([1, 2])
        with pytest.raises(AddressError):
            mem.read(-1)
        with pytest.raises(AddressError):
            mem.write(-3, 0)
        assert len(mem) == 2

    def test_snapshot_diff(self):
        mem = Memory([1, 2, 3])
        before = mem.snapshot()
        mem.write(1, 20)
        mem.write(4, 5)
        diff = Memory.diff_snapshots(before, mem.snapshot())
        assert diff == {1: (2, 20), 4: (0, 5)}

    def test_remove_watchpoint(self):
        mem = Memory([0])
        hits = []
        cb = lambda addr, old, new: hits.append(new)
        mem.add_watchpoint(0, cb)
        mem.write(0, 1)
        mem.remove_watchpoint(0, cb)
        mem.write(0, 2)
        assert hits == [1]

    def test_index_must_be_int(self):
        mem = Memory([1, 2, 3])
        with pytest.raises(TypeError, match="ints"):
            mem[1:3]
        with pytest.raises(TypeError):
            mem["0"] = 5
        assert mem[2] == 3

    def test_dump(self):
        mem = Memory(list(range(10)))
        lines = mem.dump(width=4).splitlines()
        assert len(lines) == 3
        assert lines[0].startswith('000000')
        assert lines[2].split() == ['000008', '8', '9']


class TestRegisters:

    def test_reset(self):
        regs = Registers()
        regs.PC, regs.RB, regs.cycles = 10, -4, 7
        regs.reset()
        assert (regs.PC, regs.RB, regs.cycles) == (0, 0, 0)

    def test_display(self):
        regs = Registers()
        regs.RB = 12
        assert 'RB=12' in regs.display()
