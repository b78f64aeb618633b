"""Inspect the effective configuration from the command line."""

import argparse
import json
import sys
from typing import Any

from .api import check_environment, resolve_config
from .audit import generate_telemetry_summary
from .types import ResolvedConfig

# ruff: noqa: T201


def get_config_info(profile: str | None = None) -> dict[str, Any]:
    """Return the effective configuration as a JSON-ready dict, secrets redacted."""
    try:
        resolved = resolve_config(profile=profile)
    except ValueError as e:
        return {"status": "invalid", "error": str(e), "config": None, "sources": {}}
    return {
        "status": "valid",
        "config": resolved.values_dict(redact=True),
        "sources": dict(resolved.origin),
        "source_counts": generate_telemetry_summary(resolved.origin),
        "environment": check_environment(),
        "warnings": config_warnings(resolved),
    }


def config_warnings(resolved: ResolvedConfig) -> list[str]:
    """Non-fatal issues worth showing to the user."""
    warnings = []
    if not resolved.api_key:
        warnings.append("No API key configured - only mock responses will work")
    if resolved.use_real_api and resolved.retry_all_errors:
        warnings.append(
            "retry_all_errors is on - invalid requests will be retried too"
        )
    if resolved.poll_timeout < resolved.poll_interval:
        warnings.append("poll_timeout is shorter than poll_interval")
    return warnings


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``python -m content_forge.config``."""
    parser = argparse.ArgumentParser(
        prog="python -m content_forge.config",
        description="Show the effective content-forge configuration",
    )
    parser.add_argument("--profile", help="Configuration profile to use")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    args = parser.parse_args(argv)

    if args.json:
        info = get_config_info(args.profile)
        print(json.dumps(info, indent=2, default=str))
        return 0 if info["status"] == "valid" else 1

    try:
        resolved = resolve_config(profile=args.profile)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    print("=== Effective Configuration ===")
    print(resolved.audit())
    for warning in config_warnings(resolved):
        print(f"warning: {warning}")
    return 0
