"""profnet — professional network connections and messaging core."""

__version__ = "0.1.0"
