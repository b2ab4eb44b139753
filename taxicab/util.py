import sys
from collections import deque
from itertools import islice
from typing import (
    Callable,
    Deque,
    Hashable,
    Iterable,
    Iterator,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

VERBOSE = False

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


# Functional


def tree_reduce(f: Callable[[T, T], T], items: Sequence[T], initial: T) -> T:
    """Reduce `items` pairwise as a balanced tree, preserving left-to-right order.
    Equivalent to `functools.reduce(f, items, initial)` whenever `f` is associative
    with `initial` as its identity"""
    if not items:
        return initial
    elif len(items) == 1:
        return f(initial, items[0])
    else:
        mid = len(items) // 2
        return f(tree_reduce(f, items[:mid], initial), tree_reduce(f, items[mid:], initial))


# Iterators


def iterate(f: Callable[[T], T], initial: T) -> Iterator[T]:
    value = initial
    while True:
        yield value
        value = f(value)


def window(size: int, it: Iterable[T]) -> Iterator[Deque[T]]:
    it = iter(it)
    win = deque(islice(it, size))
    if len(win) == size:
        yield win
        for i in it:
            win.popleft()
            win.append(i)
            yield win


def first_repeat(it: Iterable[K]) -> Tuple[Optional[K], bool]:
    """Return the first value seen twice and True, or the final value and False if all values
    are distinct"""
    seen = set()
    value = None
    for value in it:
        if value in seen:
            return value, True
        seen.add(value)
    return value, False


# I/O


def set_verbose(value: bool):
    global VERBOSE
    VERBOSE = value


def print_(*args, **kwargs):
    if VERBOSE:
        print(*args, **kwargs, file=sys.stderr)
