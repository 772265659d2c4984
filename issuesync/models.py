"""Data models (Pydantic)."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class Issue(BaseModel):
    """GitHub issue as fetched for republishing."""

    title: str
    body: str = ""
    created_at: datetime
    url: str
    labels: List[str] = Field(default_factory=list)
