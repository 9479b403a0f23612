"""Shared Pydantic field types for request bodies."""
from __future__ import annotations

from typing import Annotated

from pydantic import Field, StringConstraints

ExternalId = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=128),
    Field(description="Opaque user identifier issued by the identity provider"),
]

PostKey = Annotated[int, Field(gt=0, description="Internal key of the target post")]

Content = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=5000),
    Field(description="Text content"),
]
