"""docweave - component reference resolution and composition engine."""

__version__ = "0.1.0"
