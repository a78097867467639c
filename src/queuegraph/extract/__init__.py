"""Listener and sender extraction from parsed TypeScript sources."""

from .listeners import extract_listeners, listeners_in_file
from .pipeline import extract_records
from .queue_key import resolve_queue_key
from .senders import extract_senders, senders_in_file

__all__ = [
    "extract_listeners",
    "extract_records",
    "extract_senders",
    "listeners_in_file",
    "resolve_queue_key",
    "senders_in_file",
]
