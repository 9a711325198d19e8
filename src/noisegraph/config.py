"""
Builder settings.
"""

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError


def _default_workers() -> int:
    return min(8, os.cpu_count() or 1)


class BuildSettings(BaseModel):
    """Execution settings shared by all map builders."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    workers: int = Field(default_factory=_default_workers, ge=1, description="Worker threads for parallel builds")
    rows_per_batch: int = Field(8, ge=1, description="Rows (or depth slices) handed to a worker at a time")
    show_progress: bool = Field(False, description="Show a tqdm progress bar while building")

    @classmethod
    def create(cls, **kwargs: Any) -> "BuildSettings":
        """
        Validate settings, raising ConfigurationError instead of pydantic's ValidationError.
        """
        try:
            return cls(**kwargs)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid build settings: {e}") from e
