from __future__ import annotations

"""Environment doctor for Primrose.

This script performs a few fast checks before wiring the client into a server:
- Validate that an API key is configured.
- Check that the control plane answers with that key.
- Optionally describe one or more indexes and probe their data-plane hosts.

Usage (with uv):
    uv run python script/doctor.py --index my-index
"""

import argparse
import asyncio
import json
import sys
from typing import Sequence

from loguru import logger
from rich.console import Console
from rich.table import Table
from rich.text import Text

from primrose.client import create_client
from primrose.config import Settings, get_settings
from primrose.credentials import Credentials
from primrose.preflight import CheckResult, Status, check_api_key, check_control_plane, check_index

console = Console()
log = logger.bind(module="script.doctor")


def _status_text(status: Status) -> Text:
    styles = {"ok": "bold green", "warn": "bold yellow", "fail": "bold red"}
    return Text(status.upper(), style=styles.get(status, "bold"))


def _render_table(results: Sequence[CheckResult]) -> None:
    table = Table(title="Primrose doctor", show_lines=False)
    table.add_column("Check", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Details")
    for item in results:
        table.add_row(item.name, _status_text(item.status), item.details)
    console.print(table)


def _summarize(results: Sequence[CheckResult]) -> tuple[int, int, int]:
    ok = sum(1 for r in results if r.status == "ok")
    warn = sum(1 for r in results if r.status == "warn")
    fail = sum(1 for r in results if r.status == "fail")
    return ok, warn, fail


def _configure_logging(settings: Settings) -> None:
    level = (settings.log_level or "INFO").upper()
    logger.remove()
    logger.add(sys.stderr, level=level, backtrace=False, diagnose=False)


async def _run_checks(settings: Settings, index_names: Sequence[str]) -> list[CheckResult]:
    results = [check_api_key(settings)]
    if results[0].status == "fail":
        return results

    async with create_client(Credentials.from_settings(settings), settings=settings) as client:
        control = await check_control_plane(client)
        results.append(control)
        if control.status == "fail":
            return results
        for name in index_names:
            results.append(await check_index(client, name))
    return results


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run connectivity checks against the Pinecone API.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--index",
        dest="indexes",
        action="append",
        default=[],
        help="Index to describe and probe through its data-plane host (repeatable).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as failures (non-zero exit code).",
    )
    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print results as JSON (useful for CI).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(list(argv) if argv is not None else None)

    try:
        settings = get_settings()
    except Exception as exc:  # pragma: no cover
        console.print(
            "[bold red]Failed to load settings[/] "
            f"reason={exc}. Ensure your environment variables are valid.",
        )
        log.exception("Settings load failed")
        return 1

    _configure_logging(settings)
    results = asyncio.run(_run_checks(settings, [name for name in args.indexes if name.strip()]))

    if args.json_output:
        payload = [{"name": r.name, "status": r.status, "details": r.details} for r in results]
        console.print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _render_table(results)

    ok, warn, fail = _summarize(results)
    summary = f"ok={ok} warn={warn} fail={fail}"
    if fail:
        console.print(f"[bold red]Doctor failed[/] {summary}")
        return 1
    if warn and args.strict:
        console.print(f"[bold yellow]Doctor warnings (strict)[/] {summary}")
        return 2
    console.print(f"[bold green]Doctor passed[/] {summary}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
