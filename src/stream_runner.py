"""
Stream pump.fun and PumpSwap events to the log.

Runs one websocket subscription per program id, all sharing a single
filtered logging handler. A subscription that fails is logged; the others
keep running.

Usage:
    pump-stream --config config/stream.example.yaml --log-file stream.log
"""

import argparse
import asyncio
import sys
from datetime import datetime

import uvloop

from config_loader import StreamConfig, load_stream_config
from core.errors import PumpStreamError
from monitoring.handler import EventHandler, FilteredLoggingEventHandler
from monitoring.logs_listener import ProgramLogsListener
from utils.logger import get_logger, parse_log_level, setup_console_logging, setup_file_logging

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Stream pump.fun / PumpSwap program events")
    parser.add_argument("--config", help="YAML stream config")
    parser.add_argument("--log-file", help="Also log to this file (under logs/)")
    parser.add_argument(
        "--program",
        action="append",
        dest="programs",
        help="Program id to subscribe to (repeatable, overrides config)",
    )
    return parser.parse_args(argv)


async def run_subscription(listener: ProgramLogsListener) -> None:
    try:
        await listener.subscribe()
    except PumpStreamError as e:
        logger.error(f"Subscription for program {listener.program_id} failed: {e}")


async def run_stream(config: StreamConfig, handler: EventHandler) -> None:
    """Subscribe to every configured program concurrently with one shared handler."""
    listeners = [
        ProgramLogsListener(program_id, handler, config)
        for program_id in config.program_ids
    ]
    await asyncio.gather(*(run_subscription(listener) for listener in listeners))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = load_stream_config(args.config)
        if args.programs:
            config = config.with_program_ids(args.programs)
    except (PumpStreamError, OSError) as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2

    level = parse_log_level(config.log_level)
    setup_console_logging(level)
    if args.log_file:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        setup_file_logging(args.log_file.replace(".log", f"_{timestamp}.log"), level)

    handler = FilteredLoggingEventHandler(config.event_filter)
    asyncio.set_event_loop_policy(uvloop.EventLoopPolicy())
    try:
        asyncio.run(run_stream(config, handler))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
