"""
Intcode VM — Program Loader

Program text is a comma-separated list of signed integers:

    1,9,10,3,
    2,3,11,0,99,30,40,50

Whitespace (newlines included) around a token is ignored and one
trailing comma is tolerated. Anything else that is not an integer,
including an empty token between two commas, is a ProgramParseError
that names the token and its position.
"""

import logging
import re
from pathlib import Path
from typing import List, Union

from .errors import ProgramParseError

log = logging.getLogger(__name__)

_INT_RE = re.compile(r'[+-]?\d+')


def parse_program(text: str) -> List[int]:
    """Parse Intcode program text into a list of ints."""
    tokens = [tok.strip() for tok in text.split(',')]
    if len(tokens) > 1 and tokens[-1] == '':
        tokens.pop()  # trailing comma

    program = []
    for index, tok in enumerate(tokens):
        if not _INT_RE.fullmatch(tok):
            raise ProgramParseError(tok, index)
        program.append(int(tok))
    return program


def load_program(path: Union[str, Path]) -> List[int]:
    """Read and parse an Intcode program file."""
    path = Path(path)
    program = parse_program(path.read_text(encoding='utf-8'))
    log.info("Loaded %d words from %s", len(program), path)
    return program
