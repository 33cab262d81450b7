"""Log subscription, event dispatching and handlers."""
