"""Walk the instructions in parallel: the raw text is bisected recursively at instruction
boundaries into a fixed number of chunks, each chunk is walked independently from
(North, origin) on a worker pool, and the chunk states are combined in their original order.
The result is identical to the sequential walk because `combine` is associative; the order
of the reduction is fixed because it is not commutative.

Parameters:
  n_chunks: number of leaf chunks the text is split into (any positive number)
  max_workers: worker pool size; the executor's default when omitted
  processes: use a process pool instead of a thread pool
"""
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from typing import IO, List, Optional, Sequence, Tuple

from .compass import IDENTITY, WalkState, combine
from .parsing import INSTRUCTION_BOUNDARY, SEPARATOR
from .util import print_, set_verbose, tree_reduce
from .walk import walk_text

N_CHUNKS = 32


# Splitting


def bisect_instructions(text: str) -> Tuple[str, str]:
    """Cut `text` at the first instruction boundary whose turn character is at or after the
    midpoint. The separator is dropped and the right half begins with the turn character.
    Returns `(text, "")` when there is no such boundary"""
    mid = len(text) // 2
    start = max(text.rfind(SEPARATOR, 0, mid), 0)
    boundaries = (b for b in INSTRUCTION_BOUNDARY.finditer(text, start) if b.end() >= mid)
    boundary = next(boundaries, None)
    if boundary is None:
        return text, ""
    left, right = text[: boundary.start()], text[boundary.end() :]
    if not left.strip():
        # a dangling separator; leave it in place so parsing rejects it as the sequential
        # walk would
        return text, ""
    return left, right


def split_chunks(text: str, n_chunks: int = N_CHUNKS) -> List[str]:
    if n_chunks < 1:
        raise ValueError(f"n_chunks must be positive; got {n_chunks}")
    elif n_chunks == 1:
        return [text]
    else:
        n_left = n_chunks // 2
        left, right = bisect_instructions(text)
        return split_chunks(left, n_left) + split_chunks(right, n_chunks - n_left)


# Walking


def make_executor(max_workers: Optional[int] = None, processes: bool = False) -> Executor:
    executor_cls = ProcessPoolExecutor if processes else ThreadPoolExecutor
    return executor_cls(max_workers=max_workers)


def walk_chunks(
    chunks: Sequence[str], max_workers: Optional[int] = None, processes: bool = False
) -> List[WalkState]:
    with make_executor(max_workers, processes) as executor:
        # results come back in submission order; the first ParseError is re-raised here
        return list(executor.map(walk_text, chunks))


def walk_parallel(
    text: str,
    n_chunks: int = N_CHUNKS,
    max_workers: Optional[int] = None,
    processes: bool = False,
) -> WalkState:
    chunks = split_chunks(text, n_chunks)
    print_(len(chunks), "chunks of sizes", [len(c) for c in chunks])
    states = walk_chunks(chunks, max_workers, processes)
    return tree_reduce(combine, states, IDENTITY)


def run(
    input_: IO[str],
    n_chunks: int = N_CHUNKS,
    max_workers: Optional[int] = None,
    processes: bool = False,
    verbose: bool = False,
) -> int:
    set_verbose(verbose)
    final = walk_parallel(input_.read(), n_chunks, max_workers, processes)
    print_("Final state:", final)
    return final.manhattan()


test_input = "R5, L5, R5, R3, L2, R10, R0, L7, R1, L1, R4"


def test():
    import io

    from .parsing import parse_instructions
    from .walk import test_inputs

    for input_, expected in test_inputs:
        for n in (1, 2, 3, 32):
            actual = run(io.StringIO(input_), n_chunks=n)
            assert actual == expected, (input_, n, expected, actual)

    chunks = split_chunks(test_input, 4)
    assert len(chunks) == 4, chunks
    instructions = [i for chunk in chunks for i in parse_instructions(chunk)]
    assert instructions == parse_instructions(test_input), chunks

    expected_state = walk_text(test_input)
    for n in range(1, 20):
        actual_state = walk_parallel(test_input, n, max_workers=4)
        assert actual_state == expected_state, (n, expected_state, actual_state)
