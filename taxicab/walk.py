"""Follow the instructions one at a time from the origin, facing North, and report the
Manhattan distance of the final position."""
from functools import reduce
from itertools import accumulate
from typing import IO, Iterable, Iterator

from .compass import IDENTITY, WalkState
from .parsing import Instruction, parse_instructions, read_instructions
from .util import print_, set_verbose


def move(state: WalkState, instruction: Instruction) -> WalkState:
    orientation, position = state
    heading = orientation.turn(instruction.turn)
    return WalkState(heading, position + heading.unit_vector().scale(instruction.distance))


def instruction_state(instruction: Instruction) -> WalkState:
    return move(IDENTITY, instruction)


def walk(instructions: Iterable[Instruction]) -> WalkState:
    return reduce(move, instructions, IDENTITY)


def poses(instructions: Iterable[Instruction]) -> Iterator[WalkState]:
    """The initial pose followed by the pose after each instruction"""
    return accumulate(instructions, move, initial=IDENTITY)


def walk_text(text: str) -> WalkState:
    return walk(parse_instructions(text))


def run(input_: IO[str], verbose: bool = False) -> int:
    set_verbose(verbose)
    instructions = read_instructions(input_)
    print_(len(instructions), "instructions")
    final = walk(instructions)
    print_("Final state:", final)
    return final.manhattan()


test_inputs = [
    ("R2, L3", 5),
    ("R2, R2, R2", 2),
    ("R5, L5, R5, R3", 12),
    ("", 0),
]


def test():
    import io

    for input_, expected in test_inputs:
        actual = run(io.StringIO(input_), verbose=True)
        assert actual == expected, (input_, expected, actual)

    assert walk([]) == IDENTITY
    actual_state = walk_text("R2, L3")
    expected_state = WalkState(IDENTITY.orientation, (2, 3))
    assert actual_state == expected_state, (expected_state, actual_state)
