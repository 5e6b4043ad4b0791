"""Markdown structure helpers used by the built-in criteria."""

from __future__ import annotations

import re

_FENCE_RE = re.compile(r"^`{3,}", re.MULTILINE)
_FENCED_BLOCK_RE = re.compile(r"^`{3,}.*?^`{3,}", re.MULTILINE | re.DOTALL)
_INLINE_CODE_RE = re.compile(r"`[^`]+`")
_HEADING_RE = re.compile(r"^#{1,6}\s+\S", re.MULTILINE)
_RULE_RE = re.compile(r"^(-{3,}|\*{3,}|_{3,})$", re.MULTILINE)


def _strip_code(content: str) -> str:
    """Drop fenced blocks, then inline code, so markers inside code are ignored."""
    return _INLINE_CODE_RE.sub("", _FENCED_BLOCK_RE.sub("", content))


def has_unclosed_code_blocks(content: str) -> bool:
    return len(_FENCE_RE.findall(content)) % 2 != 0


def has_unclosed_bold(content: str) -> bool:
    return _strip_code(content).count("**") % 2 != 0


def has_unclosed_italic(content: str) -> bool:
    """Odd number of single ``*`` markers once bold markers are removed."""
    without_bold = _strip_code(content).replace("**", "")
    return without_bold.count("*") % 2 != 0


def count_headings(content: str) -> int:
    return len(_HEADING_RE.findall(content))


def has_headings(content: str) -> bool:
    return _HEADING_RE.search(content) is not None


def has_sections(content: str) -> bool:
    """Two or more headings, or headings plus horizontal rules, make sections."""
    heading_count = count_headings(content)
    if heading_count >= 2:
        return True
    return heading_count + len(_RULE_RE.findall(content)) >= 2


def has_code_block(content: str) -> bool:
    return _FENCE_RE.search(content) is not None and not has_unclosed_code_blocks(content)
