"""Plumbing shared by the eval, baseline and compare commands.

Resolves the criterion catalog and judge from the config, runs every
prompt through the runner with bounded concurrency, and wires up
logging for the CLI.
"""

from __future__ import annotations

import asyncio
import importlib
import logging
import os
from collections.abc import Sequence
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from sensei_eval.adapters.registry import API_KEY_ENV_VARS, get_adapter
from sensei_eval.criteria import default_criteria, get_criterion
from sensei_eval.errors import ConfigError, SenseiEvalError
from sensei_eval.evaluation.criterion import Criterion
from sensei_eval.evaluation.runner import EvalRunner
from sensei_eval.judge.client import LLMJudge
from sensei_eval.models.config import EvalConfig, PromptEntry, load_config
from sensei_eval.models.result import EvalResult

# Progress and errors go to stderr; results go to stdout.
console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through a RichHandler on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_custom_criteria(dotted_path: str) -> list[Criterion]:
    """Import a list of Criterion objects from ``package.module.attribute``."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigError(
            f"criteria_module must be a dotted path like 'my.module.criteria', got '{dotted_path}'"
        )

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise ConfigError(f"Cannot import criteria module '{module_path}': {exc}") from exc

    try:
        custom = getattr(module, attr)
    except AttributeError:
        raise ConfigError(f"Module '{module_path}' has no attribute '{attr}'") from None

    if not isinstance(custom, (list, tuple)) or not all(
        isinstance(c, Criterion) for c in custom
    ):
        raise ConfigError(f"'{dotted_path}' must be a list of Criterion objects")
    return list(custom)


def build_criteria(config: EvalConfig) -> list[Criterion]:
    """Assemble the criterion catalog described by the config.

    Raises:
        ConfigError: On unknown built-in names, a bad criteria module,
            or duplicate criterion names.
    """
    if config.criteria is None:
        criteria = default_criteria()
    else:
        try:
            criteria = [get_criterion(name) for name in config.criteria]
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    if config.criteria_module:
        criteria.extend(_load_custom_criteria(config.criteria_module))

    seen: set[str] = set()
    for criterion in criteria:
        if criterion.name in seen:
            raise ConfigError(f"Duplicate criterion name '{criterion.name}'")
        seen.add(criterion.name)
    return criteria


def resolve_api_key(adapter: str, api_key: str | None) -> str | None:
    """Return the explicit key, else the adapter's environment variable."""
    if api_key:
        return api_key
    env_var = API_KEY_ENV_VARS.get(adapter)
    if env_var is None:
        return None
    return os.environ.get(env_var) or None


def create_runner(
    config: EvalConfig,
    *,
    quick: bool,
    model: str | None = None,
    api_key: str | None = None,
) -> EvalRunner:
    """Build an EvalRunner for the config.

    Quick mode never constructs a judge. Full mode needs an API key for
    builtin adapters, from ``api_key`` or the provider's env var.

    Raises:
        ConfigError: If the judge cannot be constructed.
    """
    criteria = build_criteria(config)
    if quick:
        return EvalRunner(criteria)

    judge_config = config.judge
    key = resolve_api_key(judge_config.adapter, api_key)
    env_var = API_KEY_ENV_VARS.get(judge_config.adapter)
    if key is None and env_var is not None:
        raise ConfigError(
            f"No API key for the '{judge_config.adapter}' judge. "
            f"Set {env_var}, pass --api-key, or use --quick for deterministic checks only."
        )

    try:
        adapter = get_adapter(judge_config.adapter, api_key=key)
    except (ImportError, ValueError, TypeError) as exc:
        raise ConfigError(f"Adapter error: {exc}") from exc

    judge = LLMJudge(
        adapter,
        model=model or judge_config.model,
        max_tokens=judge_config.max_tokens,
        retries=judge_config.retries,
        initial_delay=judge_config.initial_delay,
        temperature=judge_config.temperature,
        extras=judge_config.extras,
    )
    return EvalRunner(criteria, judge=judge)


async def evaluate_prompts(
    runner: EvalRunner,
    prompts: Sequence[PromptEntry],
    *,
    quick: bool,
    concurrency: int = 5,
    progress: Console | None = None,
) -> dict[str, EvalResult]:
    """Evaluate every prompt, at most ``concurrency`` at a time.

    Results are keyed by prompt name in config order. Any failure cancels
    the prompts still in flight and aborts the whole batch.
    """
    semaphore = asyncio.Semaphore(concurrency)
    total = len(prompts)
    done = 0

    async def _one(prompt: PromptEntry) -> EvalResult:
        nonlocal done
        async with semaphore:
            eval_input = prompt.to_input()
            if quick:
                result = await runner.quick_check(eval_input)
            else:
                result = await runner.evaluate(eval_input)
        done += 1
        if progress is not None:
            status = "[green]PASS[/green]" if result.passed else "[red]FAIL[/red]"
            progress.print(
                f"[dim][{done}/{total}][/dim] {status} {escape(prompt.name)} "
                f"({result.overall_score * 100:.1f}%)",
                highlight=False,
            )
        return result

    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(_one(p)) for p in prompts]
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from None
    return {p.name: t.result() for p, t in zip(prompts, tasks)}


def run_evaluation(
    config_path: Path,
    *,
    quick: bool,
    model: str | None,
    api_key: str | None,
) -> tuple[EvalConfig, dict[str, EvalResult]]:
    """Load the config and evaluate all of its prompts.

    Known errors are printed to stderr and turned into exit code 1.
    """
    try:
        config = load_config(config_path)
        runner = create_runner(config, quick=quick, model=model, api_key=api_key)
        mode = "quick" if quick else "full"
        console.print(
            f"[bold]Evaluating {len(config.prompts)} prompt(s)[/bold] [dim]({mode} mode)[/dim]"
        )
        results = asyncio.run(
            evaluate_prompts(
                runner,
                config.prompts,
                quick=quick,
                concurrency=config.concurrency,
                progress=console,
            )
        )
    except SenseiEvalError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(code=1)
    return config, results
