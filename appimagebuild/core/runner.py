from __future__ import annotations

import logging
import time

from .config import BuildConfig
from .errors import BuildError, CommandFailed
from .model import Step, StepOutcome
from .summary import BuildSummary, StepSummary, write_summary
from ..utils.log_format import StepLogRecord, format_standard_log
from ..utils.paths import buildlog_dir
from ..utils.subproc import RunResult


logger = logging.getLogger(__name__)


def _write_log(step: Step, result: RunResult, duration_s: float, status: str) -> None:
    step.log_file.parent.mkdir(parents=True, exist_ok=True)

    record = StepLogRecord(
        step_number=step.number,
        step_name=step.name,
        command=result.command_str,
        duration_s=duration_s,
        exit_code=result.exit_code,
        stdout=result.stdout,
        stderr=result.stderr,
        status=status,
    )
    step.log_file.write_text(format_standard_log(record), encoding="utf-8")


def _result_from_error(step: Step, exc: BuildError) -> RunResult:
    if isinstance(exc, CommandFailed):
        stderr = exc.stderr.rstrip()
        stderr = f"{stderr}\n{exc.message}\n" if stderr else f"{exc.message}\n"
        return RunResult(command_str=exc.command, stdout=exc.stdout, stderr=stderr, exit_code=exc.exit_code)
    return RunResult(command_str=step.name.lower(), stdout="", stderr=f"{exc.message}\n", exit_code=exc.exit_code)


def run_step(step: Step, cfg: BuildConfig, *, verbose: bool) -> StepOutcome:
    start = time.time()

    message = ""
    try:
        result = step.runner(cfg)
    except BuildError as exc:
        logger.debug("Step %s raised %s", step.name, type(exc).__name__)
        result = _result_from_error(step, exc)
        message = exc.message
        if result.exit_code == 0:
            result = RunResult(result.command_str, result.stdout, result.stderr, 1)
    duration = time.time() - start

    status = "success" if result.exit_code == 0 else "failure"
    _write_log(step, result, duration, status)

    label = "OK" if status == "success" else "FAIL"
    print(f"[{step.number}] {step.name}: {label} ({duration:.1f}s)")

    if verbose or result.exit_code != 0:
        if result.stdout.strip():
            print(result.stdout.rstrip())
        if result.stderr.strip():
            print(result.stderr.rstrip())

    return StepOutcome(
        status=status,
        exit_code=result.exit_code,
        duration_s=duration,
        message=message,
    )


def _health_score(summaries: list[StepSummary]) -> int:
    considered = [s for s in summaries if s.status != "skipped"]
    if not considered:
        return 100
    successes = sum(1 for s in considered if s.status == "success")
    return int(round(100 * successes / len(considered)))


def _print_health(score: int) -> None:
    bar_width = 20
    filled = max(0, min(bar_width, int(round(score / 100 * bar_width))))
    bar = "[" + ("#" * filled) + ("-" * (bar_width - filled)) + "]"
    print(f"Build health: {score}/100 {bar}")


def _finish(cfg: BuildConfig, summaries: list[StepSummary], started: float, *, passed: bool) -> None:
    score = _health_score(summaries)
    write_summary(
        buildlog_dir(cfg.root),
        BuildSummary(
            passed=passed,
            health_score=score,
            total_duration_s=time.time() - started,
            steps=summaries,
        ),
    )
    _print_health(score)


def run(steps: list[Step], cfg: BuildConfig, *, verbose: bool, continue_on_error: bool) -> int:
    print(f"{cfg.app_name} AppImage build (logs: {buildlog_dir(cfg.root)})")

    started = time.time()
    summaries: list[StepSummary] = []
    first_failure = 0

    for step in steps:
        outcome = run_step(step, cfg, verbose=verbose)

        summaries.append(
            StepSummary(
                number=step.number,
                name=step.name,
                status=outcome.status,
                exit_code=outcome.exit_code,
                duration_s=outcome.duration_s,
            )
        )

        if outcome.status != "failure":
            continue

        if not first_failure:
            first_failure = outcome.exit_code

        if step.fatal or not continue_on_error:
            print(f"Stopped on failure in step {step.number}: {step.name}")
            _finish(cfg, summaries, started, passed=False)
            return outcome.exit_code

    passed = all(s.status != "failure" for s in summaries)
    _finish(cfg, summaries, started, passed=passed)

    return first_failure
