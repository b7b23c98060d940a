"""
Arcade cabinet — a reactive host that plays a breakout game.

The machine draws with output triples (x, y, tile_id):

    tile 0  empty       tile 3  paddle
    tile 1  wall        tile 4  ball
    tile 2  block

The special triple (-1, 0, n) sets the score display to n.

Whenever the machine asks for input the cabinet moves the joystick
toward the ball: -1 left, 0 neutral, 1 right.

Writing 2 to address 0 before the first run() puts the game into
free-play mode (insert_quarters()).
"""

import logging
from typing import Dict, Sequence, Tuple

from ..machine import IntcodeMachine, Status

log = logging.getLogger(__name__)

EMPTY = 0
WALL = 1
BLOCK = 2
PADDLE = 3
BALL = 4

TILE_CHARS = {
    EMPTY:  ' ',
    WALL:   '█',
    BLOCK:  '░',
    PADDLE: '=',
    BALL:   '●',
}

SCORE_POSITION = (-1, 0)
FREE_PLAY_ADDR = 0
FREE_PLAY_VALUE = 2


class ArcadeCabinet:
    """Screen, score and joystick around one Intcode machine."""

    def __init__(self, program: Sequence[int], free_play: bool = False):
        self.vm = IntcodeMachine(program)
        self.screen: Dict[Tuple[int, int], int] = {}
        self.score = 0
        self.ball_x = 0
        self.paddle_x = 0
        self.joystick_moves = 0
        if free_play:
            self.insert_quarters()

    def insert_quarters(self):
        self.vm.mem.write(FREE_PLAY_ADDR, FREE_PLAY_VALUE)

    @property
    def block_count(self) -> int:
        return sum(1 for tile in self.screen.values() if tile == BLOCK)

    def joystick(self) -> int:
        """Move toward the ball."""
        if self.ball_x < self.paddle_x:
            return -1
        if self.ball_x > self.paddle_x:
            return 1
        return 0

    def run(self) -> int:
        """Play until the machine halts. Returns the final score."""
        pending = []
        while True:
            status = self.vm.run()
            if status is Status.HALTED:
                break
            if status is Status.WAITING_FOR_INPUT:
                self.vm.push_input(self.joystick())
                self.joystick_moves += 1
                continue

            pending.append(self.vm.pop_output())
            if len(pending) == 3:
                self._draw(*pending)
                pending.clear()

        log.info("Game over: score %d, %d blocks left, %d joystick moves",
                 self.score, self.block_count, self.joystick_moves)
        return self.score

    def _draw(self, x: int, y: int, value: int):
        if (x, y) == SCORE_POSITION:
            self.score = value
            return
        if value not in TILE_CHARS:
            raise ValueError(f"Unknown tile id {value} at ({x}, {y})")
        self.screen[(x, y)] = value
        if value == BALL:
            self.ball_x = x
        elif value == PADDLE:
            self.paddle_x = x

    def render(self) -> str:
        """Draw the score line and the screen, top row first."""
        lines = [f"SCORE: {self.score}"]
        if self.screen:
            xs = [x for x, _ in self.screen]
            ys = [y for _, y in self.screen]
            for y in range(min(ys), max(ys) + 1):
                lines.append(''.join(
                    TILE_CHARS[self.screen.get((x, y), EMPTY)]
                    for x in range(min(xs), max(xs) + 1)
                ))
        return '\n'.join(lines)
