"""Headings, grid vectors, and the walk state algebra.

A `WalkState` is the net effect of a contiguous run of instructions, as seen by an agent
starting at the origin facing North. States compose with `combine`, which is associative,
so a long instruction stream can be cut anywhere between instructions, the pieces walked
independently, and the results combined in order to get the state of the whole walk.
"""
from enum import Enum, IntEnum
from functools import reduce
from typing import Iterable, NamedTuple, Optional


class Turn(str, Enum):
    L = "L"
    R = "R"


class Direction(IntEnum):
    # counter-clockwise quarter turns from North, i.e. the cyclic group Z/4
    N = 0
    W = 1
    S = 2
    E = 3

    def turn_left(self) -> "Direction":
        return Direction((self + 1) % 4)

    def turn_right(self) -> "Direction":
        return Direction((self - 1) % 4)

    def turn(self, turn: Turn) -> "Direction":
        return self.turn_left() if turn == Turn.L else self.turn_right()

    def compose(self, other: "Direction") -> "Direction":
        return Direction((self + other) % 4)

    def unit_vector(self) -> "Vector2":
        return rotate(NORTH_VECTOR, self)


North, West, South, East = Direction.N, Direction.W, Direction.S, Direction.E


class Vector2(NamedTuple):
    x: int
    y: int

    def __add__(self, other) -> "Vector2":  # type: ignore[override]
        x, y = other
        return Vector2(self.x + x, self.y + y)

    def __sub__(self, other) -> "Vector2":
        x, y = other
        return Vector2(self.x - x, self.y - y)

    def scale(self, n: int) -> "Vector2":
        return Vector2(self.x * n, self.y * n)

    def manhattan(self) -> int:
        return abs(self.x) + abs(self.y)


ORIGIN = Vector2(0, 0)
NORTH_VECTOR = Vector2(0, 1)


def rotate(vector: Vector2, heading: Direction) -> Vector2:
    """Rotate a displacement expressed relative to North into the frame of `heading`"""
    x, y = vector
    quarter_turns = int(heading) % 4
    if quarter_turns == 0:
        return Vector2(x, y)
    elif quarter_turns == 1:
        return Vector2(-y, x)
    elif quarter_turns == 2:
        return Vector2(-x, -y)
    else:
        return Vector2(y, -x)


class WalkState(NamedTuple):
    orientation: Direction
    position: Vector2

    def manhattan(self) -> int:
        return self.position.manhattan()


IDENTITY = WalkState(North, ORIGIN)


def combine(a: WalkState, b: WalkState) -> WalkState:
    """The state reached by walking `a` and then `b`.

    `b` was computed starting from (North, origin); to continue from the pose `a` its
    displacement is first rotated into the frame of `a`'s heading, then translated by `a`'s
    position, and the headings compose:

        orientation = a.orientation + b.orientation
        position = a.position + rotate(b.position, a.orientation)

    Rotation is a group action of Direction on Vector2, which makes `combine` associative with
    `IDENTITY` as its identity. It is not commutative.
    """
    return WalkState(
        a.orientation.compose(b.orientation),
        a.position + rotate(b.position, a.orientation),
    )


def combine_all(states: Iterable[WalkState]) -> WalkState:
    return reduce(combine, states, IDENTITY)


class Intersection(NamedTuple):
    """The first revisited point of a path if `found`, otherwise the final position"""

    position: Vector2
    found: bool

    def distance(self) -> Optional[int]:
        return self.position.manhattan() if self.found else None
