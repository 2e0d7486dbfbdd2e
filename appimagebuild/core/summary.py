from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path


@dataclass(frozen=True)
class StepSummary:
    number: int
    name: str
    status: str  # success|failure|skipped
    exit_code: int
    duration_s: float


@dataclass(frozen=True)
class BuildSummary:
    passed: bool
    health_score: int  # 0-100
    total_duration_s: float
    steps: list[StepSummary]


def _status_marker(status: str) -> str:
    return {"success": "ok", "failure": "FAIL", "skipped": "skip"}.get(status, status)


def write_summary(buildlog_dir: Path, summary: BuildSummary) -> None:
    buildlog_dir.mkdir(parents=True, exist_ok=True)

    json_path = buildlog_dir / "build-summary.json"
    md_path = buildlog_dir / "build-summary.md"

    json_path.write_text(json.dumps(asdict(summary), indent=2) + "\n", encoding="utf-8")

    failed = [s for s in summary.steps if s.status == "failure"]

    lines: list[str] = [
        "# AppImage build summary",
        "",
        f"- Passed: {'yes' if summary.passed else 'no'}",
        f"- Health: {summary.health_score}/100",
        f"- Duration: {summary.total_duration_s:.1f}s",
    ]
    if failed:
        lines.append(f"- First failure: step {failed[0].number} ({failed[0].name}), exit {failed[0].exit_code}")

    lines.append("")
    lines.append("| Step | Name | Status | Duration | Exit |")
    lines.append("|---:|---|---|---:|---:|")

    for s in summary.steps:
        lines.append(
            f"| {s.number} | {s.name} | {_status_marker(s.status)} | {s.duration_s:.1f}s | {s.exit_code} |"
        )

    md_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
