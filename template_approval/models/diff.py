"""Line diff chunks shown to reviewers."""

from enum import Enum

from pydantic import BaseModel, Field


class DiffKind(str, Enum):
    """How a chunk of lines changed between two templates."""
    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"


class DiffChunk(BaseModel):
    """A run of consecutive lines sharing the same DiffKind."""
    text: str = Field(..., description="The lines of this chunk, newlines included")
    kind: DiffKind = Field(..., description="Whether the lines were added, removed or kept")

    @property
    def added(self) -> bool:
        return self.kind == DiffKind.ADDED

    @property
    def removed(self) -> bool:
        return self.kind == DiffKind.REMOVED

    class Config:
        frozen = True
