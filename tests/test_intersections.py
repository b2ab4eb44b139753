import io
import random
from itertools import combinations
from typing import List

import pytest

from taxicab import breadcrumbs, segments
from taxicab.breadcrumbs import first_revisit, path_cells
from taxicab.compass import ORIGIN, Intersection, Vector2
from taxicab.parsing import ParseError, parse_instructions
from taxicab.segments import Segment, crossing, first_crossing, path_segments
from taxicab.walk import walk_text

DETECTORS = [first_revisit, first_crossing]


def random_instructions(seed: int, n: int, max_distance: int = 1000) -> str:
    rng = random.Random(seed)
    return ", ".join(f"{rng.choice('LR')}{rng.randint(1, max_distance)}" for _ in range(n))


def has_collinear_overlap(segments_: List[Segment]) -> bool:
    for a, b in combinations(segments_, 2):
        if a.is_horizontal and b.is_horizontal and a.start.y == b.start.y:
            (lo1, hi1), (lo2, hi2) = a.x_range, b.x_range
        elif a.is_vertical and b.is_vertical and a.start.x == b.start.x:
            (lo1, hi1), (lo2, hi2) = a.y_range, b.y_range
        else:
            continue
        if lo1 <= hi2 and lo2 <= hi1:
            return True
    return False


@pytest.mark.parametrize("detect", DETECTORS)
@pytest.mark.parametrize(
    "text, expected",
    [
        ("R8, R4, R4, R8", Intersection(Vector2(4, 0), True)),
        ("R1, R1, R1, R1", Intersection(ORIGIN, True)),
        ("L2, L2, L2, L5", Intersection(Vector2(0, 0), True)),
        ("R2, L3", Intersection(Vector2(2, 3), False)),
        ("", Intersection(ORIGIN, False)),
        ("R, L, R", Intersection(ORIGIN, False)),
    ],
)
def test_detectors(detect, text: str, expected: Intersection):
    actual = detect(parse_instructions(text))
    assert expected == actual, (expected, actual)


@pytest.mark.parametrize("detect", DETECTORS)
def test_not_found_reports_final_position(detect):
    text = "R5, L5, R5, R3"
    result = detect(parse_instructions(text))
    assert not result.found
    assert result.position == walk_text(text).position
    assert result.distance() is None


def test_example_distance():
    text = "R8, R4, R4, R8"
    assert breadcrumbs.run(io.StringIO(text)) == 4
    assert segments.run(io.StringIO(text)) == 4


def test_segment_detector_takes_nearest_crossing():
    # the last leg crosses the third leg at (5, 3) before it crosses the first leg at (5, 0)
    text = "R10, L3, L8, R3, R3, R8"
    instructions = parse_instructions(text)
    assert first_crossing(instructions) == Intersection(Vector2(5, 3), True)
    assert first_crossing(instructions) == first_revisit(instructions)


def test_touching_counts_as_revisit():
    # the last leg ends exactly on the first leg
    text = "R4, L2, L2, L2"
    for detect in DETECTORS:
        assert detect(parse_instructions(text)) == Intersection(Vector2(2, 0), True)


@pytest.mark.parametrize(
    "text, breadcrumb_hit",
    [
        # doubling back along the same row after a zero-distance turn
        ("R2, R0, R2", Vector2(1, 0)),
        # running back through the origin along the first leg
        ("R2, L1, L3, L1, L2", ORIGIN),
    ],
)
def test_collinear_overlap_divergence(text: str, breadcrumb_hit: Vector2):
    instructions = parse_instructions(text)
    assert first_revisit(instructions) == Intersection(breadcrumb_hit, True)
    result = first_crossing(instructions)
    assert result != Intersection(breadcrumb_hit, True)


@pytest.mark.parametrize("seed", range(50))
def test_detectors_agree(seed: int):
    instructions = parse_instructions(random_instructions(seed, 30))
    if has_collinear_overlap(list(path_segments(instructions))):
        pytest.skip("collinear overlaps are only detected by breadcrumbs")
    expected = first_revisit(instructions)
    actual = first_crossing(instructions)
    assert expected == actual, (expected, actual)


def test_path_cells_are_unit_steps():
    cells = list(path_cells(parse_instructions(random_instructions(7, 20, 10))))
    assert cells[0] == ORIGIN
    assert all((b - a).manhattan() == 1 for a, b in zip(cells, cells[1:]))


def test_path_segments_skip_pure_turns():
    assert list(path_segments(parse_instructions("R, L0, R3"))) == [
        Segment(Vector2(0, 0), Vector2(3, 0))
    ]


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (((0, 0), (8, 0)), ((4, -4), (4, 4)), (4, 0)),
        (((4, -4), (4, 4)), ((8, 0), (0, 0)), (4, 0)),
        (((0, 0), (8, 0)), ((8, 0), (8, -4)), (8, 0)),
        (((0, 0), (8, 0)), ((9, 1), (9, -1)), None),
        (((0, 0), (8, 0)), ((4, 1), (4, 5)), None),
        (((0, 0), (8, 0)), ((2, 0), (6, 0)), None),
        (((0, 0), (0, 8)), ((0, 2), (0, 6)), None),
    ],
)
def test_crossing(a, b, expected):
    seg_a = Segment(Vector2(*a[0]), Vector2(*a[1]))
    seg_b = Segment(Vector2(*b[0]), Vector2(*b[1]))
    assert crossing(seg_a, seg_b) == expected


@pytest.mark.parametrize("detect", DETECTORS)
def test_parse_errors_propagate(detect):
    with pytest.raises(ParseError):
        detect(parse_instructions("R8, R4, R4, Z8"))


def test_run_without_crossing():
    assert breadcrumbs.run(io.StringIO("R2, L3")) is None
    assert segments.run(io.StringIO("R2, L3")) is None


@pytest.mark.parametrize("module", [breadcrumbs, segments])
def test_module_self_test(module):
    module.test()
