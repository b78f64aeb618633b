"""Command-line access to the content operations.

Usage:
    python -m content_forge analyze "home espresso"
    python -m content_forge plan "home espresso" --platform YouTube
    python -m content_forge concepts "home espresso"
    python -m content_forge hooks "Why your espresso tastes sour"
    python -m content_forge storyboard script.txt
    python -m content_forge trending

Output is JSON on stdout. Configuration comes from the usual sources
(``GEMINI_*`` environment variables, pyproject.toml, the home config file).
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path
import sys
from typing import Any

from content_forge.core.models import Platform
from content_forge.exceptions import ContentForgeError
from content_forge.forge import ContentForgeClient, create_client

# ruff: noqa: T201


def _to_json(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_to_json(v) for v in value]
    if hasattr(value, "to_payload"):
        return value.to_payload()
    if hasattr(value, "value") and hasattr(value, "sources"):
        return {"value": value.value, "sources": _to_json(value.sources)}
    return value


async def _run(client: ContentForgeClient, args: argparse.Namespace) -> Any:
    match args.command:
        case "analyze":
            return await client.analyze_niche(args.niche)
        case "plan":
            return await client.build_strategy(args.niche, Platform(args.platform))
        case "concepts":
            return await client.generate_video_concepts(args.niche)
        case "hooks":
            return await client.generate_viral_hooks(args.title)
        case "storyboard":
            script = Path(args.file).read_text(encoding="utf-8")
            return await client.split_script_into_storyboard(script)
        case "trending":
            return await client.trending_niches()
    raise ValueError(f"Unknown command: {args.command}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m content_forge",
        description="Research niches and plan faceless video content",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("analyze", help="Market analysis for a niche").add_argument("niche")
    plan = sub.add_parser("plan", help="Growth roadmap for a niche")
    plan.add_argument("niche")
    plan.add_argument(
        "--platform",
        choices=[p.value for p in Platform],
        default=Platform.YOUTUBE.value,
    )
    sub.add_parser("concepts", help="Video concepts for a niche").add_argument("niche")
    sub.add_parser("hooks", help="Viral hooks for a video title").add_argument("title")
    sub.add_parser(
        "storyboard", help="Split a script file into scenes"
    ).add_argument("file")
    sub.add_parser("trending", help="Trending faceless niches")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        client = create_client()
        result = asyncio.run(_run(client, args))
    except (ContentForgeError, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(_to_json(result), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
