#!/usr/bin/env python3
"""Run a headless reveal session and print each stage as it happens.

By default the visitor is located through the configured IP geolocation
endpoint (``REVEAL_GEOLOCATION_URL``). Pass ``--lat``/``--lon`` to skip the
lookup and reveal from a fixed coordinate instead.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyreveal import (  # noqa: E402
    Coordinate,
    GeolocationSource,
    IpGeolocationClient,
    RevealConfig,
    RevealSession,
    RevealStage,
    RevealState,
    StaticGeolocationSource,
)


def _print_state(started: float, state: RevealState) -> None:
    elapsed = time.monotonic() - started
    endpoint = f" line_end={state.line_endpoint}" if state.line_endpoint is not None else ""
    print(f"[{elapsed:6.3f}s] gen={state.generation} stage={state.stage.value}{endpoint}")


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, object] = {}
    if args.fast:
        overrides.update(fit_duration=0.0, line_interval=0.0, distance_delay=0.0)
    config = RevealConfig.from_env(**overrides)

    async with IpGeolocationClient(config) as client:
        source: GeolocationSource = client
        if args.lat is not None and args.lon is not None:
            source = StaticGeolocationSource(Coordinate(latitude=args.lat, longitude=args.lon))

        async with RevealSession(config, source=source) as session:
            started = time.monotonic()

            def _on_state(state: RevealState) -> None:
                is_step = state.stage is RevealStage.ANIMATING_LINE and state.line_endpoint is not None
                if args.steps or not is_step:
                    _print_state(started, state)

            session.sequencer.subscribe(_on_state)

            visitor = await session.run()
            if visitor is None:
                print("Loading... (visitor location could not be resolved)")
                return 1

            reached = await session.wait_for_stage(RevealStage.DISTANCE_REVEALED, timeout=args.timeout)
            if not reached:
                print(f"Reveal did not finish within {args.timeout}s (stage={session.state.stage.value})")
                return 1

            print(session.distance_text())
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Headless visitor-to-owner reveal.")
    parser.add_argument("--lat", type=float, help="Visitor latitude (skips the IP lookup)")
    parser.add_argument("--lon", type=float, help="Visitor longitude (skips the IP lookup)")
    parser.add_argument("--fast", action="store_true", help="Zero all camera/line/grace delays")
    parser.add_argument("--steps", action="store_true", help="Print every line animation step")
    parser.add_argument("--timeout", type=float, default=10.0, help="Seconds to wait for the full reveal")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
