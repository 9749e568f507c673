"""Content repository bridge for data set-up steps."""
from .dummy import dummy_content_for, dummy_data_for_fields
from .manager import ContentManager
from .repository import ContentRepository, PendingContentRepository
from .rest import RestContentRepository

__all__ = [
    "ContentManager",
    "ContentRepository",
    "PendingContentRepository",
    "RestContentRepository",
    "dummy_content_for",
    "dummy_data_for_fields",
]
