"""
CLI (Command Line Interface).

Quick terminal commands on top of ExamService, e.g.:

    proftafla departments
    proftafla tests <slug>
    proftafla stats
    proftafla clear-cache

Results are printed as JSON. By default the cache is the Redis server from
REDIS_URL; `--memory` uses a throwaway in-process cache instead.

Exit codes: 0 ok, 1 not found / not cleared, 2 upstream or cache failure.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from proftafla.config import Settings, load_settings
from proftafla.errors import ProftaflaError
from proftafla.scrape import make_fetcher
from proftafla.service import ExamService
from proftafla.storage import CacheStore, MemoryStore, RedisStore


def _print_json(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2, allow_nan=False))


def _build_store(settings: Settings, memory: bool) -> CacheStore:
    """
    Create the cache handle. The caller is responsible for closing it.
    """
    if memory:
        return MemoryStore()
    return RedisStore.from_url(settings.redis_url)


def _cmd_departments(args: argparse.Namespace, service: ExamService) -> int:
    """
    List all departments with their slugs.
    """
    for department in service.list_departments():
        print(f"{department.slug} | {department.name}")
    return 0


def _cmd_tests(args: argparse.Namespace, service: ExamService) -> int:
    """
    Print all exams of one department.
    """
    slug = (args.slug or "").strip()
    if not slug:
        print("Please provide a department slug.")
        return 1

    groups = service.get_tests(slug)
    if groups is None:
        print(f"Unknown department: {slug!r} (see `proftafla departments`)")
        return 1

    _print_json([g.to_dict() for g in groups])
    return 0


def _cmd_stats(args: argparse.Namespace, service: ExamService) -> int:
    """
    Print exam statistics over all departments.
    """
    _print_json(service.get_stats().to_dict())
    return 0


def _cmd_clear_cache(args: argparse.Namespace, service: ExamService) -> int:
    """
    Flush the cache.
    """
    cleared = service.clear_cache()
    print("Cache cleared." if cleared else "Cache was not fully cleared.")
    return 0 if cleared else 1


COMMANDS = {
    "departments": _cmd_departments,
    "tests": _cmd_tests,
    "stats": _cmd_stats,
    "clear-cache": _cmd_clear_cache,
}


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="proftafla", description="University of Iceland exam timetable")
    parser.add_argument("--memory", action="store_true", help="Use an in-process cache instead of Redis")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("departments", help="List departments")

    p_tests = sub.add_parser("tests", help="Show exams of one department")
    p_tests.add_argument("slug", type=str, help="Department slug (e.g. hugvisindasvid)")

    sub.add_parser("stats", help="Show exam statistics for all departments")
    sub.add_parser("clear-cache", help="Delete all cached results")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()
    store = _build_store(settings, args.memory)
    service = ExamService(store, settings.ttl_seconds, fetch=make_fetcher(settings.timeout))

    try:
        code = COMMANDS[args.command](args, service)
    except ProftaflaError as e:
        print(f"Error: {e}", file=sys.stderr)
        code = 2
    finally:
        store.close()

    raise SystemExit(code)
