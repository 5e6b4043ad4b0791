"""Exception hierarchy for sensei-eval."""

from __future__ import annotations


class SenseiEvalError(Exception):
    """Base class for all sensei-eval errors."""


class JudgeRequiredError(SenseiEvalError):
    """An LLM-judged criterion applies but no judge was configured."""

    def __init__(self, criterion: str) -> None:
        self.criterion = criterion
        super().__init__(
            f"LLM judge required for criterion '{criterion}' but none provided"
        )


class JudgeResponseError(SenseiEvalError):
    """The judge replied with a payload that could not be parsed."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        self.raw_text = raw_text
        super().__init__(message)


class ConfigError(SenseiEvalError):
    """The evaluation config file is missing, malformed, or invalid."""


class BaselineVersionError(SenseiEvalError):
    """A baseline file was written with an unsupported format version."""
