"""HookBridge: relay chat slash commands to per-table update webhooks."""

__version__ = "0.1.0"
