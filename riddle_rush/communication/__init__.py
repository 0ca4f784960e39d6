"""State-change notification and game transcripts."""

from .channels import Event, EventChannel, EventKind
from .markdown_logger import MarkdownLogger

__all__ = ["Event", "EventChannel", "EventKind", "MarkdownLogger"]
