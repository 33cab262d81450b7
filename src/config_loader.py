"""
Stream configuration loading.

Settings come from an optional YAML file; ``SOLANA_NODE_WSS_ENDPOINT``
from the environment (or a ``.env`` file) overrides the endpoint.

Example YAML:

    wss_endpoint: wss://api.mainnet-beta.solana.com
    connect_timeout: 10
    timeout: 60
    keep_alive: true
    commitment: processed
    program_ids:
      - 6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P
    log_level: INFO
    events: pump_only        # or a mapping: {create: true, trade: false, ...}
"""

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from solders.pubkey import Pubkey

from core.errors import ConfigError
from monitoring.handler import EventFilter
from platforms.pumpfun.address_provider import PumpFunAddresses
from platforms.pumpswap.address_provider import PumpSwapAddresses
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_WSS_ENDPOINT = "wss://api.mainnet-beta.solana.com"
WSS_ENV_VAR = "SOLANA_NODE_WSS_ENDPOINT"
VALID_COMMITMENTS = ("processed", "confirmed", "finalized")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

EVENT_FILTER_PRESETS = {
    "all": EventFilter.all,
    "none": EventFilter.none,
    "pump_only": EventFilter.pump_only,
    "pumpamm_only": EventFilter.pumpamm_only,
}


def _default_program_ids() -> list[str]:
    return [str(PumpFunAddresses.PROGRAM), str(PumpSwapAddresses.PROGRAM)]


@dataclass(frozen=True)
class StreamConfig:
    """Connection and filtering settings for the log stream."""

    wss_endpoint: str = DEFAULT_WSS_ENDPOINT
    connect_timeout: float = 10.0  # seconds
    timeout: float = 60.0  # max silence on an open stream, seconds
    keep_alive: bool = True
    ping_interval: float = 20.0
    commitment: str = "processed"
    program_ids: list[str] = field(default_factory=_default_program_ids)
    event_filter: EventFilter = field(default_factory=EventFilter.all)
    log_level: str = "INFO"

    def __post_init__(self):
        validate_stream_config(self)

    def with_endpoint(self, wss_endpoint: str) -> "StreamConfig":
        return replace(self, wss_endpoint=wss_endpoint)

    def with_timeouts(self, connect_timeout: float, timeout: float) -> "StreamConfig":
        return replace(self, connect_timeout=connect_timeout, timeout=timeout)

    def with_commitment(self, commitment: str) -> "StreamConfig":
        return replace(self, commitment=commitment)

    def with_event_filter(self, event_filter: EventFilter) -> "StreamConfig":
        return replace(self, event_filter=event_filter)

    def with_program_ids(self, program_ids: list[str]) -> "StreamConfig":
        return replace(self, program_ids=list(program_ids))


def validate_stream_config(config: StreamConfig) -> None:
    """Raise ConfigError describing the first invalid setting."""
    if not config.wss_endpoint.startswith(("ws://", "wss://")):
        raise ConfigError(f"wss_endpoint must be a ws:// or wss:// URL, got {config.wss_endpoint!r}")
    if config.connect_timeout <= 0 or config.timeout <= 0:
        raise ConfigError("timeouts must be positive")
    if config.ping_interval <= 0:
        raise ConfigError("ping_interval must be positive")
    if config.commitment not in VALID_COMMITMENTS:
        raise ConfigError(
            f"commitment must be one of {', '.join(VALID_COMMITMENTS)}, got {config.commitment!r}"
        )
    if config.log_level.upper() not in VALID_LOG_LEVELS:
        raise ConfigError(f"Unknown log_level {config.log_level!r}")
    if not config.program_ids:
        raise ConfigError("program_ids must not be empty")
    for program_id in config.program_ids:
        try:
            Pubkey.from_string(program_id)
        except ValueError as e:
            raise ConfigError(f"Invalid program id {program_id!r}") from e


def parse_event_filter(value: Any) -> EventFilter:
    """Build an EventFilter from a preset name or a mapping of kind -> bool."""
    if value is None:
        return EventFilter.all()
    if isinstance(value, str):
        preset = EVENT_FILTER_PRESETS.get(value)
        if preset is None:
            raise ConfigError(
                f"Unknown events preset {value!r}; expected one of {', '.join(EVENT_FILTER_PRESETS)}"
            )
        return preset()
    if isinstance(value, dict):
        known = {f.name for f in fields(EventFilter)}
        unknown = set(value) - known
        if unknown:
            raise ConfigError(f"Unknown event kinds in filter: {', '.join(sorted(unknown))}")
        return EventFilter(**{name: bool(flag) for name, flag in value.items()})
    raise ConfigError(f"events must be a preset name or a mapping, got {type(value).__name__}")


def load_stream_config(path: str | Path | None = None) -> StreamConfig:
    """Load stream settings from YAML plus environment overrides.

    Args:
        path: YAML file; defaults are used when omitted

    Raises:
        ConfigError: on unknown keys or invalid values
    """
    load_dotenv()

    raw: dict[str, Any] = {}
    if path is not None:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ConfigError(f"{path}: top level must be a mapping")

    raw = dict(raw)
    event_filter = parse_event_filter(raw.pop("events", None))

    known = {f.name for f in fields(StreamConfig)} - {"event_filter"}
    unknown = set(raw) - known
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    env_endpoint = os.getenv(WSS_ENV_VAR)
    if env_endpoint:
        raw["wss_endpoint"] = env_endpoint

    if "program_ids" in raw:
        raw["program_ids"] = [str(p) for p in raw["program_ids"] or []]

    try:
        config = StreamConfig(event_filter=event_filter, **raw)
    except TypeError as e:
        raise ConfigError(str(e)) from e

    logger.info(
        f"Stream config: endpoint={config.wss_endpoint}, commitment={config.commitment}, "
        f"programs={len(config.program_ids)}"
    )
    return config
