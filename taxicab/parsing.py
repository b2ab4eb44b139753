import re
from typing import IO, Iterable, List, NamedTuple

from .compass import Turn

SEPARATOR = ","
INSTRUCTION_PATTERN = re.compile(rf"\s*([{Turn.L.value}{Turn.R.value}])(\d*)\s*")
# a separator followed by the turn character of the next instruction
INSTRUCTION_BOUNDARY = re.compile(rf"{SEPARATOR}\s*(?=[{Turn.L.value}{Turn.R.value}])")


class ParseError(ValueError):
    def __init__(self, token: str, reason: str = "malformed instruction"):
        # args must be enough to rebuild the error when unpickled from a worker process
        super().__init__(token, reason)
        self.token = token
        self.reason = reason

    def __str__(self):
        return f"{self.reason}: {self.token!r}"


class Instruction(NamedTuple):
    turn: Turn
    distance: int = 0

    def __str__(self):
        return f"{self.turn.value}{self.distance}"


def parse_instruction(token: str) -> Instruction:
    match = INSTRUCTION_PATTERN.fullmatch(token)
    if match is None:
        raise ParseError(token)
    turn, distance = match.groups()
    # a bare turn with no distance is a pure rotation
    return Instruction(Turn(turn), int(distance) if distance else 0)


def parse_instructions(text: str) -> List[Instruction]:
    if not text.strip():
        return []
    return list(map(parse_instruction, text.split(SEPARATOR)))


def read_instructions(input_: IO[str]) -> List[Instruction]:
    return parse_instructions(input_.read())


def format_instructions(instructions: Iterable[Instruction]) -> str:
    return f"{SEPARATOR} ".join(map(str, instructions))
