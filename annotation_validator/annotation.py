r"""Annotation declaration module.

Python has no parametrized annotation system of its own, so this module
provides one. An annotation type is a frozen pydantic model whose fields are
the annotation parameters; an annotation instance is applied to a class,
function or constructor by using it as a decorator, and to a field through
``typing.Annotated`` metadata.

Usage:
    class Marker(Annotation):
        value: str = ""
        tags: Tuple[str, ...] = ()

    @Marker("service")
    class Service:
        name: Annotated[str, Marker("name")]

        @Marker(tags=("fast",))
        def run(self) -> None: ...

Aliases are declared on a parameter with :class:`AliasFor`:

    class Route(Annotation):
        value: Annotated[str, AliasFor("path")] = ""
        path: Annotated[str, AliasFor("value")] = ""

Doxygen Dot Graph of the annotation model:
------------------------------------------
\dot
digraph AnnotationModel {
    rankdir=LR;
    node [shape=rectangle];
    "pydantic.BaseModel" -> "Annotation";
    "Annotation" -> "user annotation types";
    "AliasFor" -> "Annotation" [style=dashed, label="field metadata"];
}
\enddot
"""

from __future__ import annotations

import inspect
import logging
from functools import singledispatchmethod
from types import MethodType
from typing import Annotated, Any, Optional, Tuple, Type, TypeVar, get_origin

from pydantic import BaseModel, ConfigDict
from pydantic_core import PydanticUndefined

from ._dev_utils import get_type_name
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

__all__ = [
    "APPLIED_ANNOTATIONS_ATTR",
    "AliasFor",
    "Annotation",
    "apply_annotation",
    "declared_annotations",
    "field_annotations",
    "unwrap_element",
]

APPLIED_ANNOTATIONS_ATTR = "__applied_annotations__"

E = TypeVar("E")


# -----------------------------------------------------------------------------
# Alias Declaration
# -----------------------------------------------------------------------------


class AliasFor:
    """
    Declares an annotation parameter as an alias of another parameter.

    Without ``annotation`` the alias mirrors a parameter of the same
    annotation (``value`` or ``attribute`` names it). With ``annotation``
    the alias points at a parameter of another annotation type which must be
    co-present on the element, or applied to the declaring annotation type
    itself.
    """

    __slots__ = ("value", "annotation", "attribute")

    def __init__(
        self,
        value: str = "",
        *,
        annotation: Optional[Type["Annotation"]] = None,
        attribute: str = "",
    ):
        self.value = value
        self.annotation = annotation
        self.attribute = attribute

    def __repr__(self) -> str:
        parts = []
        if self.value:
            parts.append(repr(self.value))
        if self.annotation is not None:
            parts.append(f"annotation={get_type_name(self.annotation)}")
        if self.attribute:
            parts.append(f"attribute={self.attribute!r}")
        return f"AliasFor({', '.join(parts)})"


# -----------------------------------------------------------------------------
# Annotation Base Model
# -----------------------------------------------------------------------------


class Annotation(BaseModel):
    """
    Base class of every annotation type.

    Instances are immutable and compare by value, so the same annotation
    reached through two ancestors collapses to one during resolution.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    def __init__(self, *args: Any, **data: Any) -> None:
        # Marker("v1") is shorthand for Marker(value="v1")
        if args:
            if len(args) > 1 or "value" in data:
                raise ConfigurationError(
                    f"{type(self).__name__} accepts at most one positional argument",
                    ["Pass other parameters by keyword"],
                )
            data["value"] = args[0]
        super().__init__(**data)

    def __call__(self, element: E) -> E:
        apply_annotation(element, self)
        return element

    @classmethod
    def annotation_type(cls) -> Type["Annotation"]:
        return cls

    @classmethod
    def parameter_names(cls) -> Tuple[str, ...]:
        """Declared parameters, in declaration order."""
        return tuple(cls.model_fields)

    @classmethod
    def accessor_names(cls) -> Tuple[str, ...]:
        """Parameters plus computed accessors."""
        return cls.parameter_names() + tuple(cls.model_computed_fields)

    @classmethod
    def has_accessor(cls, name: str) -> bool:
        return name in cls.model_fields or name in cls.model_computed_fields

    @classmethod
    def parameter_default(cls, name: str) -> Any:
        """Declared default of ``name``; ``None`` for required parameters."""
        default = cls.model_fields[name].get_default(call_default_factory=True)
        return None if default is PydanticUndefined else default

    @classmethod
    def alias_declaration(cls, name: str) -> Optional[AliasFor]:
        field = cls.model_fields.get(name)
        if field is None:
            return None
        for item in field.metadata:
            if isinstance(item, AliasFor):
                return item
        return None


# -----------------------------------------------------------------------------
# Applying and Reading Annotations
# -----------------------------------------------------------------------------


def unwrap_element(element: Any) -> Any:
    """Return the object that stores annotations for ``element``."""
    if isinstance(element, (staticmethod, classmethod, MethodType)):
        return element.__func__
    if isinstance(element, property):
        return element.fget
    if isinstance(element, singledispatchmethod):
        return element.func
    return element


def _own_namespace(element: Any) -> Any:
    # vars() of a class never includes inherited attributes
    try:
        return vars(element)
    except TypeError:
        return {}


def apply_annotation(element: Any, annotation: Annotation) -> None:
    """
    Record ``annotation`` on ``element``.

    Decorators run bottom-up, so the new annotation is prepended to keep the
    recorded order equal to the source order.

    Raises:
        ConfigurationError: If the element cannot hold annotations or already
            carries an annotation of the same type.
    """
    target = unwrap_element(element)
    existing = tuple(_own_namespace(target).get(APPLIED_ANNOTATIONS_ATTR, ()))

    annotation_type = type(annotation)
    if any(type(present) is annotation_type for present in existing):
        raise ConfigurationError(
            f"{get_type_name(annotation_type)} is already applied to {target!r}",
            ["Annotations are not repeatable; merge the parameters into one"],
        )

    try:
        setattr(target, APPLIED_ANNOTATIONS_ATTR, (annotation,) + existing)
    except (AttributeError, TypeError) as e:
        raise ConfigurationError(
            f"Cannot apply {annotation!r} to {element!r}",
            ["Annotate classes, functions or methods; use Annotated[...] for fields"],
        ) from e

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Applied %r to %r", annotation, target)


def declared_annotations(element: Any) -> Tuple[Annotation, ...]:
    """Annotations declared directly on ``element``, in source order."""
    target = unwrap_element(element)
    return tuple(_own_namespace(target).get(APPLIED_ANNOTATIONS_ATTR, ()))


def field_annotations(owner: type, name: str) -> Tuple[Annotation, ...]:
    """Annotations found in the ``Annotated`` metadata of a class field."""
    try:
        hints = inspect.get_annotations(owner, eval_str=True)
    except NameError:
        hints = inspect.get_annotations(owner)

    hint = hints.get(name)
    if hint is None or get_origin(hint) is not Annotated:
        return ()
    return tuple(item for item in hint.__metadata__ if isinstance(item, Annotation))
