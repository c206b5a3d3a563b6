#!/usr/bin/env python3
"""Humanize a short passage and report which path produced the result.

Demonstrates:
- Loading config and replacing the API key from the environment
- Requesting the tagged result to tell remote output from the fallback
- Checking the remaining credit balance

Usage:
    REHUMANIZE_API_KEY=... python examples/humanize_text.py "Some text to rewrite."
"""
from __future__ import annotations

import asyncio
import os
import sys
from dataclasses import replace

from rehumanize import HumanizeOptions, HumanizeService, load_config
from rehumanize.models import Readability, Tone


async def run(text: str) -> None:
    config = load_config()
    if api_key := os.environ.get("REHUMANIZE_API_KEY"):
        config = replace(config, service=replace(config.service, api_key=api_key))

    service = HumanizeService(config)
    options = HumanizeOptions(readability=Readability.ADVANCED, tone=Tone.PROFESSIONAL)

    result = await service.humanize_detailed(text, options)
    print(f"Source: {result.source}")
    print(result.text)
    print(f"Credits remaining: {await service.get_credits_remaining()}")


def main() -> None:
    if len(sys.argv) < 2:
        print('Usage: python examples/humanize_text.py "<text>"')
        sys.exit(1)
    asyncio.run(run(sys.argv[1]))


if __name__ == "__main__":
    main()
