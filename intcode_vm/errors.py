"""
Intcode VM — Error Taxonomy

Every fatal condition the VM or the loader can raise derives from
IntcodeError, so a host can catch the whole family in one place.

  ProgramParseError      non-integer token in program text (load time)
  IllegalOpcode          unknown opcode           (cpu/decoder.py)
  IllegalAddressingMode  mode digit not 0/1/2     (cpu/decoder.py)
  IllegalWriteMode       write through immediate mode
  AddressError           negative computed memory address
  NoOutputPending        pop_output() with nothing produced
  InputExhausted         run_until_halt() blocked on an empty input queue

None of these are retried inside the VM. A partially-applied instruction
leaves memory inconsistent, so the run is over once one is raised.
"""


class IntcodeError(Exception):
    """Base class for all Intcode VM errors."""
    pass


class ProgramParseError(IntcodeError, ValueError):
    """Raised when program text contains a token that is not an integer."""

    def __init__(self, token: str, index: int):
        self.token = token
        self.index = index
        super().__init__(f"invalid integer {token!r} at position {index}")


class IllegalWriteMode(IntcodeError):
    """Raised when an instruction writes through an immediate-mode parameter."""
    pass


class AddressError(IntcodeError, IndexError):
    """Raised when a computed memory address is negative."""
    pass


class NoOutputPending(IntcodeError, IndexError):
    """Raised by pop_output() when the machine has produced nothing."""
    pass


class InputExhausted(IntcodeError):
    """Raised when a run-to-completion helper blocks on input."""
    pass
