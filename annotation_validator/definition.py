"""Expectation descriptors.

An :class:`AnnotationDefinition` names one expected annotation type and the
parameter values it is expected to carry. Definitions are immutable:
``param`` returns a new definition with the parameter appended, so a
definition registered on a validation session can never change afterwards.
"""

from __future__ import annotations

import inspect
from typing import Any, NamedTuple, Tuple, Type

from ._dev_utils import get_full_name, get_type_name
from .annotation import Annotation
from .errors import ConfigurationError

__all__ = [
    "AnnotationDefinition",
    "ParamDefinition",
]


class ParamDefinition(NamedTuple):
    """Expected values of one annotation parameter.

    A scalar parameter is expected through a one-element tuple; a
    multi-valued parameter lists every expected element in order.
    """

    name: str
    values: Tuple[Any, ...]


class AnnotationDefinition:
    """Combines an annotation type with optional parameter expectations."""

    __slots__ = ("_annotation_type", "_params")

    def __init__(
        self,
        annotation_type: Type[Annotation],
        params: Tuple[ParamDefinition, ...] = (),
    ):
        if not (inspect.isclass(annotation_type) and issubclass(annotation_type, Annotation)):
            raise ConfigurationError(
                f"{annotation_type!r} is not an annotation type",
                ["Annotation types must subclass annotation_validator.Annotation"],
            )
        self._annotation_type = annotation_type
        self._params = params

    @classmethod
    def type(cls, annotation_type: Type[Annotation]) -> "AnnotationDefinition":
        """Describe an expected annotation type."""
        return cls(annotation_type)

    def param(self, name: str, *values: Any) -> "AnnotationDefinition":
        """
        Describe an expected parameter.

        Parameters:
            name (str): Name of the parameter.
            *values: Expected value, or every expected element of a
                multi-valued parameter in order.

        Raises:
            ConfigurationError: If no value is given.
        """
        if not values:
            raise ConfigurationError(
                f"No expected value given for parameter '{name}' of "
                f"{get_type_name(self._annotation_type)}",
                ["Pass at least one value to param()"],
            )
        return AnnotationDefinition(
            self._annotation_type, self._params + (ParamDefinition(name, values),)
        )

    @property
    def annotation_type(self) -> Type[Annotation]:
        return self._annotation_type

    @property
    def params(self) -> Tuple[ParamDefinition, ...]:
        return self._params

    def __repr__(self) -> str:
        params = "".join(
            f".param({', '.join(map(repr, (p.name,) + p.values))})" for p in self._params
        )
        return f"AnnotationDefinition.type({get_full_name(self._annotation_type)}){params}"
