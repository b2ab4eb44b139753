"""Find the first point the path crosses itself by treating it as a sequence of straight
axis-aligned segments, one per instruction, and intersecting each new segment with the
earlier segments of the opposite axis. Since every turn is 90 degrees, only perpendicular
segments can cross at a single point. Collinear overlaps (e.g. doubling back along the same
line after a zero-distance turn) are not detected; the breadcrumb method does find those.

The cost depends on the number of instructions rather than the distances walked.
"""
from functools import partial
from typing import IO, Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple

from .compass import ORIGIN, Intersection, Vector2
from .parsing import Instruction, parse_instructions, read_instructions
from .util import print_, set_verbose, window
from .walk import poses


class Segment(NamedTuple):
    start: Vector2
    end: Vector2

    @property
    def is_point(self) -> bool:
        return self.start == self.end

    @property
    def is_vertical(self) -> bool:
        return self.start.x == self.end.x and self.start.y != self.end.y

    @property
    def is_horizontal(self) -> bool:
        return self.start.y == self.end.y and self.start.x != self.end.x

    @property
    def x_range(self) -> Tuple[int, int]:
        return min(self.start.x, self.end.x), max(self.start.x, self.end.x)

    @property
    def y_range(self) -> Tuple[int, int]:
        return min(self.start.y, self.end.y), max(self.start.y, self.end.y)


def validate_segment(segment: Segment) -> Segment:
    if not (segment.is_point or segment.is_vertical or segment.is_horizontal):
        raise ValueError(f"Invalid segment: {segment.start} -> {segment.end}")
    return segment


def path_segments(instructions: Iterable[Instruction]) -> Iterator[Segment]:
    positions = (pose.position for pose in poses(instructions))
    segments = (validate_segment(Segment(start, end)) for start, end in window(2, positions))
    # pure turns don't move anywhere
    return (s for s in segments if not s.is_point)


def crossing(a: Segment, b: Segment) -> Optional[Vector2]:
    if a.is_vertical and b.is_horizontal:
        vertical, horizontal = a, b
    elif a.is_horizontal and b.is_vertical:
        vertical, horizontal = b, a
    else:
        return None

    x, y = vertical.start.x, horizontal.start.y
    y_min, y_max = vertical.y_range
    x_min, x_max = horizontal.x_range
    if y_min <= y <= y_max and x_min <= x <= x_max:
        return Vector2(x, y)
    return None


def nearest_crossing(segment: Segment, history: Iterable[Segment]) -> Optional[Vector2]:
    """The crossing of `segment` with any of `history` nearest to its start, excluding the
    start itself, which it always shares with its predecessor"""
    points = map(partial(crossing, segment), history)
    crossings = (p for p in points if p is not None and p != segment.start)
    return min(crossings, key=lambda p: (p - segment.start).manhattan(), default=None)


def first_crossing(instructions: Iterable[Instruction]) -> Intersection:
    # earlier segments, keyed by whether they're vertical
    history: Dict[bool, List[Segment]] = {True: [], False: []}
    position = ORIGIN
    for segment in path_segments(instructions):
        point = nearest_crossing(segment, history[not segment.is_vertical])
        if point is not None:
            return Intersection(point, True)
        history[segment.is_vertical].append(segment)
        position = segment.end

    return Intersection(position, False)


def run(input_: IO[str], verbose: bool = False) -> Optional[int]:
    set_verbose(verbose)
    instructions = read_instructions(input_)
    print_(sum(1 for _ in path_segments(instructions)), "segments")
    result = first_crossing(instructions)
    if result.found:
        print_("First crossing:", result.position)
    else:
        print_("Path never crosses itself; final position:", result.position)
    return result.distance()


test_inputs = [
    ("R8, R4, R4, R8", 4),
    ("R2, L3", None),
    ("R1, R1, R1, R1", 0),
    # doubling back along a line is a collinear overlap, which isn't a crossing
    ("R2, R0, R2", None),
    ("", None),
]


def test():
    import io

    for input_, expected in test_inputs:
        actual = run(io.StringIO(input_), verbose=True)
        assert actual == expected, (input_, expected, actual)

    segments = list(path_segments(parse_instructions("R8, R4, R0, R4")))
    expected_segments = [((0, 0), (8, 0)), ((8, 0), (8, -4)), ((8, -4), (8, 0))]
    assert segments == expected_segments, (expected_segments, segments)

    vertical = Segment(Vector2(4, -4), Vector2(4, 4))
    horizontal = Segment(Vector2(0, 0), Vector2(8, 0))
    assert crossing(vertical, horizontal) == crossing(horizontal, vertical) == (4, 0)
    assert crossing(horizontal, Segment(Vector2(9, 1), Vector2(9, -1))) is None
    assert crossing(horizontal, Segment(Vector2(2, 0), Vector2(6, 0))) is None
