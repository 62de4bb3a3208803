"""Resolution behaviour configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field


class ResolutionConfig(BaseModel):
    """How user settings documents are resolved."""

    strict: bool = Field(
        default=False,
        description="Reject unknown keys instead of ignoring them",
    )
    project_root: Path = Field(
        default=Path("."),
        description="Directory content patterns must stay inside",
    )
