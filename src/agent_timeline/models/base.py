"""Base Pydantic schemas for the project.

Provides common base classes for all Pydantic models in agent-timeline
with shared configuration and validation behavior.
"""

from pydantic import BaseModel, ConfigDict

__all__ = ["BaseSchema", "FrozenSchema"]


class BaseSchema(BaseModel):
    """Base model for all Pydantic schemas.

    Provides common configuration for all models in the project:
    - from_attributes: Allow validation from arbitrary objects
    - str_strip_whitespace disabled: event content is never altered
    """

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=False,
    )


class FrozenSchema(BaseSchema):
    """Immutable variant used for engine inputs and outputs.

    Events are read-only input and every structure the engine produces is
    built once per call and never mutated afterwards.
    """

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=False,
        frozen=True,
    )
