"""Version information for neo-quotas."""

__version__ = "0.1.0"
