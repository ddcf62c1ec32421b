"""Base models for nexus-sync."""

from pydantic import BaseModel, ConfigDict


class NexusSyncBaseModel(BaseModel):
    """Base model for all nexus-sync domain models."""

    model_config = ConfigDict(
        extra="forbid",  # Don't allow extra fields
        frozen=False,  # Allow modification (can be changed per model)
        validate_assignment=True,  # Validate on attribute assignment
    )


__all__ = ["NexusSyncBaseModel"]
