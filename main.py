#! /usr/bin/env python
import json
import sys
from importlib import import_module
from inspect import signature
from pathlib import Path
from time import perf_counter_ns
from typing import IO, Optional, Protocol, TypeVar, Union

from bourbaki.application.cli import CommandLineInterface, cli_spec  # type: ignore
from bourbaki.application.typed_io.cli_parse import cli_parser  # type: ignore

from taxicab.breadcrumbs import first_revisit
from taxicab.parallel import N_CHUNKS, walk_parallel
from taxicab.parsing import ParseError, parse_instructions
from taxicab.segments import first_crossing
from taxicab.walk import walk

INPUT_DIR = Path("inputs/")
INPUT_FILE = "instructions.txt"
SOLVERS = ("walk", "parallel", "breadcrumbs", "segments")

Solution = TypeVar("Solution", covariant=True)
Param = Union[int, float, bool, str]


class Problem(Protocol[Solution]):
    def run(self, input_: IO[str], **args: Param) -> Solution:
        ...

    def test(self):
        ...


@cli_parser.register(Param, as_const=True, derive_nargs=True)
def parse_param(s: str):
    return json.loads(s)


def print_solution(solution):
    print(solution)


def import_solver(solver: str) -> Problem:
    assert solver in SOLVERS, f"solver must be one of {', '.join(SOLVERS)}"
    return import_module(f"taxicab.{solver}")


def get_input(path: Optional[Path] = None) -> IO[str]:
    if path is not None:
        return open(path)
    return open(INPUT_DIR / INPUT_FILE) if sys.stdin.isatty() else sys.stdin


def fail(error: Exception):
    print(f"Error: {error}", file=sys.stderr)
    sys.exit(1)


cli = CommandLineInterface(
    prog="main",
    require_options=False,
    require_subcommand=True,
    implicit_flags=True,
    use_verbose_flag=True,
)


@cli.definition
class Taxicab:
    """Walk a grid by turn-and-move instructions: find where the walk ends and where the path
    first crosses itself"""

    @cli_spec.output_handler(print_solution)
    def run(self, solver: str, path: Optional[Path] = None, **args: Param):
        """Run one of the solvers. The default input is inputs/instructions.txt, but input will
        be read from stdin if input is piped there.

        :param solver: which solver to run; one of walk, parallel, breadcrumbs, segments
        :param path: path to a file of comma-separated instructions
        :param args: keyword arguments to pass to the solver in case it is parameterized.
          Run the `info` command for the solver in question to see its parameters.
        """
        problem = import_solver(solver)
        with get_input(path) as input_:
            print(f"Running {solver} solver...", file=sys.stderr)
            tic = perf_counter_ns()
            try:
                solution = problem.run(input_, **args)
            except ParseError as e:
                fail(e)
            toc = perf_counter_ns()
        print(f"Ran in {(toc - tic) / 1000000} ms", file=sys.stderr)
        return solution

    def report(self, path: Optional[Path] = None, n_chunks: int = N_CHUNKS):
        """Print the final position and the first self-intersection of the walk, computed by
        every method, along with their distances from the origin

        :param path: path to a file of comma-separated instructions
        :param n_chunks: number of chunks for the parallel walk
        """
        with get_input(path) as input_:
            text = input_.read()
        try:
            instructions = parse_instructions(text)
            final = walk(instructions)
            final_parallel = walk_parallel(text, n_chunks)
        except ParseError as e:
            fail(e)

        print(f"Final position: {tuple(final.position)}, facing {final.orientation.name}")
        print(f"Distance: {final.manhattan()}")
        if final_parallel != final:
            print(f"Parallel walk disagrees: {final_parallel}", file=sys.stderr)

        for name, detect in [("breadcrumbs", first_revisit), ("segments", first_crossing)]:
            result = detect(instructions)
            if result.found:
                print(
                    f"First revisit ({name}): {tuple(result.position)}, "
                    f"distance {result.distance()}"
                )
            else:
                print(f"First revisit ({name}): none")

    def test(self, solver: str):
        """Run the worked examples for one of the solvers

        :param solver: which solver to test; one of walk, parallel, breadcrumbs, segments
        """
        problem = import_solver(solver)
        problem.test()
        print(f"Tests pass for {solver}!")

    def info(self, solver: str):
        """Print the doc string for one of the solvers, providing some details about methodology

        :param solver: which solver to describe; one of walk, parallel, breadcrumbs, segments
        """
        problem = import_solver(solver)
        print(f"{solver} solver info:")
        if problem.__doc__:
            print(problem.__doc__, end="\n\n")
        print("Signature:")
        print(signature(problem.run))

    def input(self):
        """Print the default input text to stdout"""
        with open(INPUT_DIR / INPUT_FILE, "r") as f:
            for line in f:
                print(line, file=sys.stdout, end="")


if __name__ == "__main__":
    cli.run()
