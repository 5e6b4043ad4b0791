"""Content transforms applied before assertions.

Each transform is a small frozen dataclass that maps text to text, so a
pipeline can be inspected, compared and serialized like any other value.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

Transform = Callable[[str], str]

_FENCED_BLOCK_RE = re.compile(r"^`{3,}.*?^`{3,}", re.MULTILINE | re.DOTALL)


@dataclass(frozen=True)
class Trim:
    """Strip leading and trailing whitespace."""

    def __call__(self, content: str) -> str:
        return content.strip()


@dataclass(frozen=True)
class Lowercase:
    def __call__(self, content: str) -> str:
        return content.lower()


@dataclass(frozen=True)
class StripCodeBlocks:
    """Remove fenced code blocks (``` ... ```)."""

    def __call__(self, content: str) -> str:
        return _FENCED_BLOCK_RE.sub("", content)


@dataclass(frozen=True)
class ExtractBetween:
    """Keep only the text between two markers.

    Returns the content unchanged if either marker is missing.
    """

    start: str
    end: str

    def __call__(self, content: str) -> str:
        start_idx = content.find(self.start)
        if start_idx == -1:
            return content
        after_start = start_idx + len(self.start)
        end_idx = content.find(self.end, after_start)
        if end_idx == -1:
            return content
        return content[after_start:end_idx]


@dataclass(frozen=True)
class Pipe:
    """Compose transforms left to right."""

    steps: tuple[Transform, ...]

    def __call__(self, content: str) -> str:
        for step in self.steps:
            content = step(content)
        return content


def trim() -> Transform:
    return Trim()


def lowercase() -> Transform:
    return Lowercase()


def strip_code_blocks() -> Transform:
    return StripCodeBlocks()


def extract_between(start: str, end: str) -> Transform:
    return ExtractBetween(start, end)


def pipe(*transforms: Transform) -> Transform:
    return Pipe(tuple(transforms))
