from __future__ import annotations

import argparse
import dataclasses
from typing import Iterable

from .bootstrap import configure_logging
from .config import BuildConfig
from .model import Step
from .profiles import DEFAULT_PROFILE, PROFILES
from .runner import run
from ..steps.step_defs import steps as all_steps


def _parse_csv(raw: str | None) -> list[str] | None:
    if raw is None:
        return None
    raw = raw.strip()
    if not raw:
        return []
    return [p.strip() for p in raw.replace(" ", ",").split(",") if p.strip()]


def _list_profiles() -> None:
    print("Available profiles:")
    for name, profile in sorted(PROFILES.items()):
        marker = " (default)" if name == DEFAULT_PROFILE else ""
        print(f"  {name:<8} - {profile.description}{marker}")


def _list_steps(cfg: BuildConfig) -> None:
    for s in all_steps(cfg):
        print(f"  {s.number:>2}  {s.name:<10} - {s.description}")


def _select_steps(
    steps: list[Step],
    run_steps: list[str] | None,
    skip_steps: list[str] | None,
    profile: str | None,
) -> list[Step]:
    by_number = {str(s.number): s for s in steps}
    by_name = {s.name.lower(): s for s in steps}

    selected: list[Step] = []

    if run_steps is not None:
        for token in run_steps:
            if token in by_number:
                selected.append(by_number[token])
                continue
            s = by_name.get(token.lower())
            if s is not None:
                selected.append(s)
                continue
            raise SystemExit(f"Unknown step selector: {token!r}")
    else:
        prof = PROFILES[profile or DEFAULT_PROFILE]
        include = {n.lower() for n in prof.include_steps}
        selected = [s for s in steps if s.name.lower() in include]

    if skip_steps:
        skip = {t.lower() for t in skip_steps}
        selected = [s for s in selected if str(s.number) not in skip and s.name.lower() not in skip]

    # Deduplicate
    seen: set[int] = set()
    uniq: list[Step] = []
    for s in selected:
        if s.number in seen:
            continue
        seen.add(s.number)
        uniq.append(s)

    return uniq


def _apply_overrides(cfg: BuildConfig, args: argparse.Namespace) -> BuildConfig:
    changes: dict[str, str] = {}
    if args.python_version:
        changes["python_version"] = args.python_version
    if args.name:
        changes["app_name"] = args.name
    if args.version:
        changes["app_version"] = args.version
    return dataclasses.replace(cfg, **changes) if changes else cfg


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oscr-build", description="Build the OSCR AppImage")
    parser.add_argument("--profile", choices=sorted(PROFILES.keys()), help="Run a predefined profile")
    parser.add_argument("--list-profiles", action="store_true", help="List profiles and exit")
    parser.add_argument("--list-steps", action="store_true", help="List steps and exit")
    parser.add_argument("--run-steps", help="Comma/space-separated list of step numbers or names")
    parser.add_argument("--skip-steps", help="Comma/space-separated list of step numbers or names")
    parser.add_argument("--python-version", help="Python version of the bundled runtime (e.g. 3.13)")
    parser.add_argument("--name", help="Application name used for the image and metadata")
    parser.add_argument("--version", help="Application version embedded in the image file name")
    parser.add_argument("--verbose", action="store_true", help="Print stdout/stderr for steps")
    parser.add_argument("--continue-on-error", action="store_true", help="Keep going after non-fatal failures")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    configure_logging(verbose=args.verbose)
    cfg = _apply_overrides(BuildConfig.from_env(), args)

    if args.list_profiles:
        _list_profiles()
        return 0

    if args.list_steps:
        _list_steps(cfg)
        return 0

    selected = _select_steps(
        all_steps(cfg),
        run_steps=_parse_csv(args.run_steps),
        skip_steps=_parse_csv(args.skip_steps),
        profile=args.profile,
    )

    if not selected:
        print("No steps selected.")
        return 2

    return run(selected, cfg, verbose=args.verbose, continue_on_error=args.continue_on_error)
