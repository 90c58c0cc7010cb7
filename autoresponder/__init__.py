"""Auto-response bot for the community chat: rule matching, rule admin and chat API."""

__version__ = "0.1.0"
