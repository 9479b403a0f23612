"""Business logic services for the Threadline application."""

from .feed import FeedService, to_post_response
from .summarizer import SummarizerClient, SummaryService

__all__ = [
    "FeedService",
    "SummarizerClient",
    "SummaryService",
    "to_post_response",
]
