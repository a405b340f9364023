"""Quickstart example for yieldparse.

This example demonstrates writing parsers as generators: yield what you
expect next, receive what matched, return the parsed value.

Note: Examples print results directly. In production, check
``result.success`` and report ``result.format()`` on failure.
"""

import re

from yieldparse import has_prefix, must_end, optional, parse

# Example 1: Literal sequence
print("=" * 50)
print("Example 1: Literal Sequence")
print("=" * 50)


def greeting():
    yield "hello"
    yield " world"
    yield must_end


result = parse("hello world", greeting)
print(result.success, repr(result.remaining))
# Output: True ''

# Example 2: Patterns and return values
print("\n" + "=" * 50)
print("Example 2: Patterns and Return Values")
print("=" * 50)


def assignment():
    name = yield re.compile(r"^[a-z]+")
    yield re.compile(r"^\s*=\s*")
    number = yield re.compile(r"^\d+")
    return name.text, int(number.text)


result = parse("answer = 42", assignment)
print(result.result)
# Output: ('answer', 42)

# Example 3: Alternatives and optional parts
print("\n" + "=" * 50)
print("Example 3: Alternatives and Optional Parts")
print("=" * 50)


def signed_number():
    negative = yield has_prefix("-")
    digits = yield re.compile(r"^\d+")
    unit = yield optional("px", "em", "%")
    value = -int(digits.text) if negative else int(digits.text)
    return value, unit


print(parse("-12px", signed_number).result)
# Output: (-12, 'px')
print(parse("7", signed_number).result)
# Output: (7, None)

# Example 4: Failure reporting
print("\n" + "=" * 50)
print("Example 4: Failure Reporting")
print("=" * 50)

result = parse("answer: 42", assignment)
print(result.success, result.failed_on.iteration_count, repr(result.remaining))
# Output: False 1 ': 42'
print(result.format())
# Output:
# error[EXPECTED_ITEM]: Expected /^\s*=\s*/, found ': 42'
#   --> line 1, column 7
#
#    1 | answer: 42
#      |       ^
