"""
Print new pump.fun tokens and bonding curve completions as they happen.

Shows how to write a custom handler: override only the callbacks you need.

Usage:
    uv run learning-examples/listen_new_tokens.py
"""

import asyncio
import os
import sys

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from dotenv import load_dotenv

from config_loader import load_stream_config
from monitoring.handler import EventContext, EventFilter, EventHandler
from monitoring.logs_listener import ProgramLogsListener
from platforms.pumpfun import PumpFunAddresses
from utils.logger import setup_console_logging

load_dotenv()


class NewTokenPrinter(EventHandler):
    def on_create_event(self, event, ctx: EventContext) -> None:
        print(f"[{ctx.slot}] {event.symbol} ({event.name}) mint={event.mint} creator={event.creator}")

    def on_create_v2_event(self, event, ctx: EventContext) -> None:
        mode = " mayhem" if event.is_mayhem_mode else ""
        print(f"[{ctx.slot}] {event.symbol} ({event.name}) mint={event.mint}{mode}")

    def on_complete_event(self, event, ctx: EventContext) -> None:
        print(f"[{ctx.slot}] curve complete: {event.mint}")


async def main() -> None:
    setup_console_logging()
    config = load_stream_config().with_event_filter(
        EventFilter(create=True, create_v2=True, complete=True, trade=False,
                    buy=False, sell=False, create_pool=False)
    )
    listener = ProgramLogsListener(PumpFunAddresses.PROGRAM, NewTokenPrinter(), config)
    await listener.subscribe()


if __name__ == "__main__":
    asyncio.run(main())
