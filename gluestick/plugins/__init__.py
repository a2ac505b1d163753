from gluestick.plugins.timestamps import TimestampsMixin

__all__ = [
    "TimestampsMixin",
]
