"""
Amplifier hosts — several independent machines wired output → input.

Serial chain:
    signal ─► [A] ─► [B] ─► [C] ─► [D] ─► [E] ─► result
    Each amplifier is a fresh machine fed (phase, signal) and stops
    after its first output.

Feedback loop:
    signal ─► [A] ─► [B] ─► [C] ─► [D] ─► [E] ─┐
               ▲                               │
               └───────────────────────────────┘
    Each machine is seeded with its phase once, then the ring is driven
    round-robin. The machines keep their memory, PC and relative base
    across run() calls. The first machine to halt stops the loop and
    the last value produced is the result.
"""

import logging
from itertools import cycle, permutations
from typing import Iterable, Sequence, Tuple

from ..errors import InputExhausted, IntcodeError
from ..machine import IntcodeMachine, Status

log = logging.getLogger(__name__)

SERIAL_PHASES = (0, 1, 2, 3, 4)
FEEDBACK_PHASES = (5, 6, 7, 8, 9)


def _require_phases(phases) -> tuple:
    phases = tuple(phases)
    if not phases:
        raise ValueError("No phases given")
    return phases


def run_amplifier_chain(program: Sequence[int], phases: Iterable[int],
                        signal: int = 0) -> int:
    """Pass signal through one fresh amplifier per phase, in order."""
    phases = _require_phases(phases)
    for phase in phases:
        amp = IntcodeMachine(program, (phase, signal))
        status = amp.run()
        if status is Status.HALTED:
            raise IntcodeError(
                f"Amplifier with phase {phase} halted before producing a signal")
        if status is Status.WAITING_FOR_INPUT:
            raise InputExhausted(
                f"Amplifier with phase {phase} needs more than phase and signal")
        signal = amp.pop_output()
    return signal


def run_feedback_loop(program: Sequence[int], phases: Sequence[int],
                      signal: int = 0) -> int:
    """Drive a ring of amplifiers until one of them halts."""
    phases = _require_phases(phases)
    amps = [IntcodeMachine(program, (phase,)) for phase in phases]

    for index in cycle(range(len(amps))):
        amp = amps[index]
        amp.push_input(signal)
        status = amp.run()
        if status is Status.HALTED:
            break
        if status is Status.WAITING_FOR_INPUT:
            raise InputExhausted(
                f"Amplifier {index} (phase {phases[index]}) needs more than "
                f"one input per round")
        signal = amp.pop_output()

    log.debug("Feedback loop %s → %d", tuple(phases), signal)
    return signal


def max_thruster_signal(program: Sequence[int], phases: Sequence[int] = None,
                        feedback: bool = False,
                        signal: int = 0) -> Tuple[int, Tuple[int, ...]]:
    """Try every ordering of phases, return (best_signal, best_phases)."""
    if phases is None:
        phases = FEEDBACK_PHASES if feedback else SERIAL_PHASES
    phases = _require_phases(phases)
    runner = run_feedback_loop if feedback else run_amplifier_chain

    best = None
    for order in permutations(phases):
        result = runner(program, order, signal)
        if best is None or result > best[0]:
            best = (result, order)

    log.info("Best %s signal %d with phases %s",
             'feedback' if feedback else 'serial', best[0], best[1])
    return best
