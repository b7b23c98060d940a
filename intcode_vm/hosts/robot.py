"""
Hull-painting robot — a reactive host around one machine.

Protocol:
  - machine asks for input  → host supplies the colour of the panel
                              under the robot (0 black, 1 white)
  - machine outputs a pair  → (colour to paint, turn)
                              turn 0 = left 90°, 1 = right 90°
                              then the robot moves forward one panel

The robot starts at (0, 0) facing up. y grows upward.
"""

import logging
from typing import Dict, Sequence, Tuple

from ..machine import IntcodeMachine, Status

log = logging.getLogger(__name__)

BLACK = 0
WHITE = 1

TURN_LEFT = 0
TURN_RIGHT = 1

# Facing directions in clockwise order: up, right, down, left
DIRECTIONS = ((0, 1), (1, 0), (0, -1), (-1, 0))

Point = Tuple[int, int]


class PaintingRobot:
    """Robot that paints hull panels as instructed by an Intcode brain."""

    def __init__(self, program: Sequence[int], start_color: int = BLACK):
        self.vm = IntcodeMachine(program)
        self.position: Point = (0, 0)
        self.facing = 0  # index into DIRECTIONS
        self.panels: Dict[Point, int] = {}
        if start_color != BLACK:
            self.panels[self.position] = start_color

    def color_at(self, point: Point) -> int:
        return self.panels.get(point, BLACK)

    @property
    def painted_count(self) -> int:
        """Number of panels painted at least once."""
        return len(self.panels)

    @property
    def white_panels(self) -> set:
        return {p for p, c in self.panels.items() if c == WHITE}

    def run(self) -> int:
        """Drive the machine until it halts. Returns painted_count."""
        pending = []
        while True:
            status = self.vm.run()
            if status is Status.HALTED:
                break
            if status is Status.WAITING_FOR_INPUT:
                self.vm.push_input(self.color_at(self.position))
                continue

            pending.append(self.vm.pop_output())
            if len(pending) == 2:
                self._apply(*pending)
                pending.clear()

        log.info("Robot halted: %d panels painted, %d white",
                 self.painted_count, len(self.white_panels))
        return self.painted_count

    def _apply(self, color: int, turn: int):
        self.panels[self.position] = color
        if turn == TURN_LEFT:
            self.facing = (self.facing - 1) % 4
        elif turn == TURN_RIGHT:
            self.facing = (self.facing + 1) % 4
        else:
            raise ValueError(f"Unknown turn instruction {turn}")
        dx, dy = DIRECTIONS[self.facing]
        x, y = self.position
        self.position = (x + dx, y + dy)

    def render(self, white: str = '#', black: str = '.') -> str:
        """Draw the painted area, top row first."""
        if not self.panels:
            return ''
        xs = [x for x, _ in self.panels]
        ys = [y for _, y in self.panels]
        rows = []
        for y in range(max(ys), min(ys) - 1, -1):
            rows.append(''.join(
                white if self.color_at((x, y)) == WHITE else black
                for x in range(min(xs), max(xs) + 1)
            ))
        return '\n'.join(rows)
