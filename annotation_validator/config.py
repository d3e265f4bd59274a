"""Validation modes and the immutable per-pass configuration."""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "DEFAULT_PARAMETER_BLACKLIST",
    "ValidationConfig",
    "ValidationMode",
]

# Accessors every annotation exposes that are never validation targets.
DEFAULT_PARAMETER_BLACKLIST: FrozenSet[str] = frozenset(
    {"__eq__", "__str__", "__hash__", "annotation_type"}
)


class ValidationMode(str, Enum):
    """
    Strictness of a validation pass.

    DEFAULT:
        Only the declared expectations are checked.
    ONLY:
        Parameters without an expectation must hold their declared default,
        and the annotation set must match the expectations exactly, in order.
    EXACTLY:
        Parameters without an expectation must be empty (``()``, ``""`` or
        ``None``) whatever their default, and the annotation set must match
        the expectations exactly, in order.
    """

    DEFAULT = "default"
    EXACTLY = "exactly"
    ONLY = "only"

    @property
    def is_strict(self) -> bool:
        return self is not ValidationMode.DEFAULT


class ValidationConfig(BaseModel):
    """Frozen settings of one validation pass.

    Attributes:
        mode: Strictness of the pass.
        parameter_blacklist: Parameter names never subject to the
            undefined-parameter check.
        match_return_type: Also compare return types when matching a method
            against the members of its ancestors.
    """

    model_config = ConfigDict(frozen=True)

    mode: ValidationMode = ValidationMode.DEFAULT
    parameter_blacklist: FrozenSet[str] = Field(default=DEFAULT_PARAMETER_BLACKLIST)
    match_return_type: bool = False
