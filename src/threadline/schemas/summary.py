"""Summary schema."""

from pydantic import BaseModel


class SummaryResponse(BaseModel):
    """Summary of a post's replies, or a fallback message."""

    summary: str
