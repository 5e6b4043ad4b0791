"""Evaluation config model for sensei-eval.

Captures sensei-eval.yaml fields: the prompts to evaluate, which
criteria to run, and the judge settings used in full mode.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from sensei_eval.errors import ConfigError
from sensei_eval.models.input import EvalInput, LengthLimits

DEFAULT_CONFIG_FILE = "sensei-eval.yaml"


class JudgeConfig(BaseModel):
    """Configuration for the LLM judge used in full evaluations."""

    model_config = {"extra": "forbid"}

    adapter: str = "anthropic"
    model: str = "claude-sonnet-4-20250514"
    max_tokens: int = Field(default=750, ge=1)
    retries: int = Field(default=3, ge=0)
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    initial_delay: float = Field(default=1.0, ge=0.0)
    # Extra provider keyword arguments, passed to the SDK call unchanged.
    extras: dict[str, Any] = Field(default_factory=dict)


class PromptEntry(BaseModel):
    """One named piece of content listed in the config file.

    Exactly one of ``content`` or ``file`` must be given. ``file`` is
    resolved relative to the config file and read at load time.
    """

    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1)
    content_type: str = Field(min_length=1)
    content: str | None = None
    file: str | None = None
    topic: str | None = None
    difficulty: str | None = None
    previous_content: list[str] = Field(default_factory=list)
    length_limits: LengthLimits | None = None
    max_review_chars: int | None = Field(default=None, gt=0)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_source(self) -> PromptEntry:
        if (self.content is None) == (self.file is None):
            raise ValueError("exactly one of 'content' or 'file' is required")
        if self.content is not None and not self.content:
            raise ValueError("'content' must not be empty")
        return self

    def to_input(self) -> EvalInput:
        """Build the EvalInput for this prompt. Content must be resolved."""
        if self.content is None:
            raise ConfigError(f"Prompt '{self.name}' has no resolved content")
        return EvalInput(
            content=self.content,
            content_type=self.content_type,
            topic=self.topic,
            difficulty=self.difficulty,
            previous_content=self.previous_content,
            length_limits=self.length_limits,
            max_review_chars=self.max_review_chars,
            metadata=self.metadata,
        )


class EvalConfig(BaseModel):
    """Top-level config loaded from sensei-eval.yaml."""

    model_config = {"extra": "forbid"}

    prompts: list[PromptEntry]
    criteria: list[str] | None = None
    criteria_module: str | None = None
    judge: JudgeConfig = Field(default_factory=JudgeConfig)
    concurrency: int = Field(default=5, ge=1)

    @model_validator(mode="after")
    def _check_unique_names(self) -> EvalConfig:
        seen: set[str] = set()
        for prompt in self.prompts:
            if prompt.name in seen:
                raise ValueError(f"Duplicate prompt name '{prompt.name}'")
            seen.add(prompt.name)
        return self


def _format_validation_error(exc: ValidationError) -> str:
    lines = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "<root>"
        lines.append(f"  {loc}: {err['msg']}")
    return "\n".join(lines)


def load_config(config_path: Path) -> EvalConfig:
    """Load and validate an EvalConfig, reading any prompt files it lists.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Validated EvalConfig whose prompts all carry inline content.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, fails
            validation, or references a prompt file that cannot be read.
    """
    import yaml

    config_path = config_path.resolve()
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"Config {config_path} must be a mapping with a 'prompts' list")

    try:
        config = EvalConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(
            f"Invalid config {config_path}:\n{_format_validation_error(exc)}"
        ) from exc

    base_dir = config_path.parent
    resolved: list[PromptEntry] = []
    for prompt in config.prompts:
        if prompt.file is not None:
            prompt_path = base_dir / prompt.file
            try:
                text = prompt_path.read_text(encoding="utf-8")
            except OSError as exc:
                raise ConfigError(
                    f"Cannot read file for prompt '{prompt.name}': {prompt_path}"
                ) from exc
            if not text:
                raise ConfigError(f"Prompt file for '{prompt.name}' is empty: {prompt_path}")
            prompt = prompt.model_copy(update={"content": text})
        resolved.append(prompt)

    return config.model_copy(update={"prompts": resolved})
