"""Arithmetic Example - Recursive Grammars With Sub-Parsers.

Demonstrates how a complete grammar is built from small procedures:

1. Operator precedence through mutually recursive sub-parsers
2. Left-associative loops driven by optional()
3. Inspecting the error tree of a failed parse
4. Diagnostic output formats (Rust-style, simple, JSON)
5. Nesting limits with ParseEngine(max_depth=...)

Python 3.13+.
"""

from __future__ import annotations

import re

from yieldparse import (
    DepthLimitExceededError,
    Failure,
    ParseEngine,
    has_prefix,
    must_end,
    optional,
    parse,
)
from yieldparse.diagnostics import DiagnosticFormatter, OutputFormat

WS = re.compile(r"^[ \t]*")
NUMBER = re.compile(r"^\d+(?:\.\d+)?")


def number():
    yield WS
    record = yield NUMBER
    return float(record.text)


def parenthesized():
    yield WS
    yield "("
    value = yield expression
    yield WS
    yield ")"
    return value


def factor():
    yield WS
    negative = yield has_prefix("-")
    value = yield [number, parenthesized]
    return -value if negative else value


def term():
    value = yield factor
    while True:
        yield WS
        operator = yield optional("*", "/")
        if operator is None:
            return value
        rhs = yield factor
        value = value * rhs if operator == "*" else value / rhs


def expression():
    value = yield term
    while True:
        yield WS
        operator = yield optional("+", "-")
        if operator is None:
            return value
        rhs = yield term
        value = value + rhs if operator == "+" else value - rhs


def calculation():
    value = yield expression
    yield WS
    yield must_end
    return value


def example_1_evaluate() -> None:
    """Evaluate expressions with precedence and parentheses."""
    print("=" * 60)
    print("Example 1: Evaluate")
    print("=" * 60)

    for source in ("1 + 2 * 3", "(1 + 2) * 3", "-(4 - 6) / 4"):
        print(f"{source:>15} = {parse(source, calculation).result}")


def example_2_error_tree() -> None:
    """Walk the nested errors of a failed parse."""
    print("\n" + "=" * 60)
    print("Example 2: Error Tree")
    print("=" * 60)

    result = parse("2 * (3 + )", calculation)
    assert isinstance(result, Failure)

    for depth, error in result.failed_on.walk():
        position = error.cursor.pos if error.cursor is not None else 0
        print(f"{'  ' * depth}#{error.iteration_count} at {position}: {error.yielded!r}")

    deepest = result.failed_on.deepest()
    print(f"\nFurthest failure: {deepest.yielded!r} at offset {deepest.cursor.pos}")


def example_3_formats() -> None:
    """Render the same failure in every output format."""
    print("\n" + "=" * 60)
    print("Example 3: Diagnostic Formats")
    print("=" * 60)

    result = parse("1 +\n2 *", calculation)
    assert isinstance(result, Failure)

    for output_format in OutputFormat:
        print(f"\n--- {output_format} ---")
        print(DiagnosticFormatter(output_format=output_format).format_failure(result))


def example_4_depth_limit() -> None:
    """Reject input nested deeper than the engine allows."""
    print("\n" + "=" * 60)
    print("Example 4: Depth Limit")
    print("=" * 60)

    engine = ParseEngine(max_depth=40)
    print(engine.parse("(" * 5 + "1" + ")" * 5, calculation).result)

    try:
        engine.parse("(" * 50 + "1" + ")" * 50, calculation)
    except DepthLimitExceededError as error:
        print(f"Rejected: {error.diagnostic}")


def main() -> None:
    """Run all arithmetic examples."""
    example_1_evaluate()
    example_2_error_tree()
    example_3_formats()
    example_4_depth_limit()


if __name__ == "__main__":
    main()
