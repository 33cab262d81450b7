"""Exception hierarchy for the event stream and the instruction toolkit."""


class PumpStreamError(Exception):
    """Base class for all errors raised by this package."""


class ConnectionFailedError(PumpStreamError):
    """Websocket connect or handshake failed."""


class ConnectionTimeoutError(PumpStreamError):
    """Websocket connect did not finish within the configured timeout."""


class SubscribeError(PumpStreamError):
    """Subscription was rejected, or the stream closed or errored."""


class SignatureParseError(PumpStreamError):
    """A transaction signature could not be parsed."""


class EventDecodeError(PumpStreamError, ValueError):
    """An event body does not match its schema."""


class DerivationError(PumpStreamError, ValueError):
    """Program address derivation failed."""


class ConfigError(PumpStreamError, ValueError):
    """Invalid stream configuration."""
