"""
Intcode VM — Instruction Decoder / Opcode Table

This module maps opcode numbers to (mnemonic, parameter_count, write_param).

Instruction word layout (decimal digits, right to left):

      A B C D E
      | | | +-+--  opcode (two least significant digits)
      | | +------  mode of parameter 1
      | +--------  mode of parameter 2
      +----------  mode of parameter 3

  1002 → opcode 02 (MUL), modes (0, 1, 0)
  Missing high digits are mode 0.

Addressing modes:
  POSITION   0  operand is an address
  IMMEDIATE  1  operand is the value (never a write target)
  RELATIVE   2  operand is an offset from the relative base
"""

from ..errors import IntcodeError

# ──────────────────────────────────────────────
# Addressing mode constants
# ──────────────────────────────────────────────

POSITION  = 0
IMMEDIATE = 1
RELATIVE  = 2

MODE_NAMES = {
    POSITION:  'POS',
    IMMEDIATE: 'IMM',
    RELATIVE:  'REL',
}

# Largest parameter count of any instruction — how many mode digits to read
MAX_PARAMS = 3


# ──────────────────────────────────────────────
# Opcode table
# ──────────────────────────────────────────────
# Format: opcode -> (mnemonic, parameter_count, write_param)
#
# write_param is the 0-based index of the parameter that is written
# through (write addressing), or None if the instruction only reads.

OPCODES = {
    1:  ('ADD',  3, 2),    # dst = a + b
    2:  ('MUL',  3, 2),    # dst = a * b
    3:  ('IN',   1, 0),    # dst = next input
    4:  ('OUT',  1, None), # emit a
    5:  ('JNZ',  2, None), # if a != 0: PC = target
    6:  ('JZ',   2, None), # if a == 0: PC = target
    7:  ('LT',   3, 2),    # dst = a < b
    8:  ('EQ',   3, 2),    # dst = a == b
    9:  ('ARB',  1, None), # RB += a
    99: ('HALT', 0, None),
}

# Reverse lookup: mnemonic -> opcode
MNEMONICS = {mnem: op for op, (mnem, _, _) in OPCODES.items()}


class IllegalOpcode(IntcodeError):
    """Raised when an undefined opcode is encountered."""
    pass


class IllegalAddressingMode(IntcodeError):
    """Raised when a mode digit is not 0, 1 or 2."""
    pass


def split_word(word: int):
    """Split an instruction word into (opcode, (mode1, mode2, mode3))."""
    opcode = word % 100
    digits = word // 100
    modes = []
    for _ in range(MAX_PARAMS):
        modes.append(digits % 10)
        digits //= 10
    return opcode, tuple(modes)


def decode_instruction(memory, pc: int):
    """Fetch and decode the instruction at the given PC.

    Returns: (opcode, mnemonic, modes, write_param, next_pc)

    `modes` has exactly parameter_count entries. `next_pc` is the
    address just past the last operand, i.e. where execution continues
    unless the instruction jumps.
    """
    word = memory.read(pc)
    if word < 0:
        raise IllegalOpcode(f"Negative instruction word {word} at {pc}")

    opcode, modes = split_word(word)
    if opcode not in OPCODES:
        raise IllegalOpcode(f"Unknown opcode {opcode} (word {word}) at {pc}")

    mnem, count, write_param = OPCODES[opcode]
    modes = modes[:count]
    for index, mode in enumerate(modes):
        if mode not in MODE_NAMES:
            raise IllegalAddressingMode(
                f"Unknown mode {mode} for parameter {index + 1} "
                f"of {mnem} (word {word}) at {pc}")

    return opcode, mnem, modes, write_param, pc + 1 + count


def disassemble(memory, pc: int) -> str:
    """Render the instruction at PC as text, e.g. 'MUL  [16] #10 [16]'."""
    _, mnem, modes, _, _ = decode_instruction(memory, pc)
    parts = []
    for index, mode in enumerate(modes):
        operand = memory.read(pc + 1 + index)
        if mode == IMMEDIATE:
            parts.append(f"#{operand}")
        elif mode == RELATIVE:
            parts.append(f"[RB{operand:+d}]")
        else:
            parts.append(f"[{operand}]")
    return f"{mnem:<4s} {' '.join(parts)}".rstrip()
