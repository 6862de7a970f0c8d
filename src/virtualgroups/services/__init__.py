from .record_loader import RecordLoader

__all__ = [
    "RecordLoader",
]
