"""Assertion predicates for deterministic criteria.

Each assertion checks (already transformed) content and returns an
AssertionResult with a pass flag, a score in [0, 1] and reasoning.
Assertions are frozen dataclasses; the lowercase factory functions are
the public way to build them.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class AssertionResult:
    """Outcome of a single assertion."""

    passed: bool
    score: float
    reasoning: str


Assertion = Callable[[str], AssertionResult]


def _quoted(values: tuple[str, ...] | list[str]) -> str:
    return ", ".join(f'"{v}"' for v in values)


@dataclass(frozen=True)
class Contains:
    substring: str

    def __call__(self, content: str) -> AssertionResult:
        passed = self.substring in content
        reasoning = (
            f'Content contains "{self.substring}"'
            if passed
            else f'Content does not contain "{self.substring}"'
        )
        return AssertionResult(passed, 1.0 if passed else 0.0, reasoning)


@dataclass(frozen=True)
class ContainsAll:
    """All substrings must appear; the score is the fraction found."""

    substrings: tuple[str, ...]

    def __call__(self, content: str) -> AssertionResult:
        total = len(self.substrings)
        missing = [s for s in self.substrings if s not in content]
        found = total - len(missing)
        score = 1.0 if total == 0 else found / total
        if not missing:
            return AssertionResult(
                True, score, f"Content contains all {total} required substrings"
            )
        return AssertionResult(
            False,
            score,
            f"Content is missing {len(missing)}/{total} substrings: {_quoted(missing)}",
        )


@dataclass(frozen=True)
class ContainsAny:
    substrings: tuple[str, ...]

    def __call__(self, content: str) -> AssertionResult:
        found = [s for s in self.substrings if s in content]
        if found:
            return AssertionResult(True, 1.0, f"Content contains {_quoted(found)}")
        return AssertionResult(
            False, 0.0, f"Content does not contain any of: {_quoted(self.substrings)}"
        )


@dataclass(frozen=True)
class MatchesRegex:
    pattern: str
    flags: int = 0

    def __call__(self, content: str) -> AssertionResult:
        passed = re.search(self.pattern, content, self.flags) is not None
        reasoning = (
            f"Content matches pattern /{self.pattern}/"
            if passed
            else f"Content does not match pattern /{self.pattern}/"
        )
        return AssertionResult(passed, 1.0 if passed else 0.0, reasoning)


def _balanced_span(content: str, start: int) -> str | None:
    """Return the bracket-balanced span starting at ``start``, string-aware."""
    open_char = content[start]
    close_char = "}" if open_char == "{" else "]"
    depth = 0
    in_string = False
    escape = False
    for i in range(start, len(content)):
        ch = content[i]
        if escape:
            escape = False
            continue
        if ch == "\\" and in_string:
            escape = True
            continue
        if ch == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if ch == open_char:
            depth += 1
        elif ch == close_char:
            depth -= 1
        if depth == 0:
            return content[start : i + 1]
    return None


@dataclass(frozen=True)
class ContainsJson:
    """Content holds at least one valid JSON object or array."""

    def __call__(self, content: str) -> AssertionResult:
        for match in re.finditer(r"[{\[]", content):
            candidate = _balanced_span(content, match.start())
            if candidate is None:
                continue
            try:
                json.loads(candidate)
            except json.JSONDecodeError:
                continue
            return AssertionResult(True, 1.0, "Content contains valid JSON")
        return AssertionResult(False, 0.0, "No valid JSON found in content")


@dataclass(frozen=True)
class LengthBetween:
    """Length within [min, max]; graduated score outside the bounds."""

    min: int
    max: int

    def __call__(self, content: str) -> AssertionResult:
        length = len(content)
        if self.min <= length <= self.max:
            return AssertionResult(
                True, 1.0, f"Length {length} is within [{self.min}, {self.max}]"
            )
        if length < self.min:
            return AssertionResult(
                False,
                max(0.0, length / self.min),
                f"Length {length} is below minimum {self.min}",
            )
        return AssertionResult(
            False,
            max(0.0, 1 - (length - self.max) / self.max),
            f"Length {length} exceeds maximum {self.max}",
        )


@dataclass(frozen=True)
class StartsWith:
    prefix: str

    def __call__(self, content: str) -> AssertionResult:
        passed = content.startswith(self.prefix)
        reasoning = (
            f'Content starts with "{self.prefix}"'
            if passed
            else f'Content does not start with "{self.prefix}"'
        )
        return AssertionResult(passed, 1.0 if passed else 0.0, reasoning)


@dataclass(frozen=True)
class EndsWith:
    suffix: str

    def __call__(self, content: str) -> AssertionResult:
        passed = content.endswith(self.suffix)
        reasoning = (
            f'Content ends with "{self.suffix}"'
            if passed
            else f'Content does not end with "{self.suffix}"'
        )
        return AssertionResult(passed, 1.0 if passed else 0.0, reasoning)


def contains(substring: str) -> Assertion:
    return Contains(substring)


def contains_all(substrings: list[str]) -> Assertion:
    return ContainsAll(tuple(substrings))


def contains_any(substrings: list[str]) -> Assertion:
    return ContainsAny(tuple(substrings))


def matches_regex(pattern: str, flags: int = 0) -> Assertion:
    return MatchesRegex(pattern, flags)


def contains_json() -> Assertion:
    return ContainsJson()


def length_between(min_length: int, max_length: int) -> Assertion:
    return LengthBetween(min_length, max_length)


def starts_with(prefix: str) -> Assertion:
    return StartsWith(prefix)


def ends_with(suffix: str) -> Assertion:
    return EndsWith(suffix)
