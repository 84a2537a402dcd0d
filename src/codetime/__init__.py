"""Self-hosted coding time tracker fed by editor heartbeats."""

__version__ = "0.1.0"
