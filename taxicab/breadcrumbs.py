"""Find the first grid cell the path visits twice by walking it one unit step at a time and
dropping a breadcrumb in every cell. O(total distance walked) in time and memory."""
from functools import partial
from itertools import islice
from operator import add
from typing import IO, Iterable, Iterator, Optional

from .compass import IDENTITY, Intersection, Vector2
from .parsing import Instruction, parse_instructions, read_instructions
from .util import first_repeat, iterate, print_, set_verbose


def step_cells(position: Vector2, step: Vector2, distance: int) -> Iterator[Vector2]:
    return islice(iterate(partial(add, step), position), 1, distance + 1)


def path_cells(instructions: Iterable[Instruction]) -> Iterator[Vector2]:
    """The origin, followed by every cell stepped on in order"""
    orientation, position = IDENTITY
    yield position
    for turn, distance in instructions:
        orientation = orientation.turn(turn)
        for position in step_cells(position, orientation.unit_vector(), distance):
            yield position


def first_revisit(instructions: Iterable[Instruction]) -> Intersection:
    cell, found = first_repeat(path_cells(instructions))
    return Intersection(cell if cell is not None else IDENTITY.position, found)


def run(input_: IO[str], verbose: bool = False) -> Optional[int]:
    set_verbose(verbose)
    result = first_revisit(read_instructions(input_))
    if result.found:
        print_("First revisited cell:", result.position)
    else:
        print_("No cell visited twice; final position:", result.position)
    return result.distance()


test_inputs = [
    ("R8, R4, R4, R8", 4),
    ("R2, L3", None),
    ("R1, R1, R1, R1", 0),
    ("R2, R0, R2", 1),
    ("", None),
]


def test():
    import io

    for input_, expected in test_inputs:
        actual = run(io.StringIO(input_), verbose=True)
        assert actual == expected, (input_, expected, actual)

    cells = list(path_cells(parse_instructions("R2, L1")))
    expected_cells = [(0, 0), (1, 0), (2, 0), (2, 1)]
    assert cells == expected_cells, (expected_cells, cells)
    assert first_revisit([]) == Intersection(IDENTITY.position, False)
    assert list(step_cells(Vector2(0, 0), Vector2(1, 0), 0)) == []
