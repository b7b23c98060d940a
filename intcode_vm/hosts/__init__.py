"""
Hosts that drive one or more IntcodeMachine instances.

    amplifiers.py   serial chain, feedback loop, phase permutation search
    robot.py        hull-painting robot (reactive loop, output pairs)
    arcade.py       arcade cabinet (reactive loop, output triples)
"""

from .amplifiers import run_amplifier_chain, run_feedback_loop, max_thruster_signal
from .robot import PaintingRobot
from .arcade import ArcadeCabinet
