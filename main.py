"""CLI entrypoint for multi-platform search and AI fallback calls."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from aggregator import DEFAULT_AD_PLATFORMS, DEFAULT_CONTENT_PLATFORMS, AdOrchestrator, SearchOrchestrator
from ai import AIFallbackClient
from config import get_settings
from utils.exceptions import PulseSearchError
from utils.logger import configure_logging


def _platforms(text: str):
    return [item.strip() for item in str(text or "").split(",") if item.strip()]


async def _run(args: argparse.Namespace) -> object:
    settings = get_settings()

    if args.command == "search":
        async with SearchOrchestrator(settings=settings) as orchestrator:
            records = await orchestrator.search(
                args.query,
                _platforms(args.platforms),
                args.max_results,
                language=args.language,
                time_filter=args.time_filter,
                show_progress=not args.quiet,
            )
        return [record.to_dict() for record in records]

    if args.command == "ads":
        async with AdOrchestrator(settings=settings) as orchestrator:
            records = await orchestrator.search(
                args.query,
                _platforms(args.platforms),
                args.max_results,
                show_progress=not args.quiet,
            )
        return [record.to_dict() for record in records]

    async with AIFallbackClient(settings=settings) as client:
        if args.command == "status":
            return client.status()
        result = await client.run(
            args.prompt,
            temperature=args.temperature,
            max_tokens=args.max_tokens,
            force_backup=args.force_backup,
        )
        return {
            "text": result.text,
            "provider": result.provider,
            "path": [state.value for state in result.path],
        }


def main() -> None:
    parser = argparse.ArgumentParser(description="pulse-search CLI")
    parser.add_argument("--log-level", default="INFO")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search")
    search.add_argument("--query", required=True)
    search.add_argument("--platforms", default=",".join(DEFAULT_CONTENT_PLATFORMS))
    search.add_argument("--language", default="en")
    search.add_argument("--time-filter", default="week")
    search.add_argument("--max-results", type=int, default=50)
    search.add_argument("--quiet", action="store_true")

    ads = sub.add_parser("ads")
    ads.add_argument("--query", required=True)
    ads.add_argument("--platforms", default=",".join(DEFAULT_AD_PLATFORMS))
    ads.add_argument("--max-results", type=int, default=20)
    ads.add_argument("--quiet", action="store_true")

    ai = sub.add_parser("ai")
    ai.add_argument("--prompt", required=True)
    ai.add_argument("--temperature", type=float, default=None)
    ai.add_argument("--max-tokens", type=int, default=None)
    ai.add_argument("--force-backup", action="store_true")

    sub.add_parser("status")

    args = parser.parse_args()
    configure_logging(level=getattr(logging, str(args.log_level).upper(), logging.INFO))

    try:
        payload = asyncio.run(_run(args))
    except PulseSearchError as exc:
        print(json.dumps({"error": str(exc)}, ensure_ascii=False))
        sys.exit(1)

    print(json.dumps(payload, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
