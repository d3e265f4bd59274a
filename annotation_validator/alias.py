"""Alias resolution.

A parameter declared with :class:`~annotation_validator.annotation.AliasFor`
shares its logical value with another parameter, either on the same
annotation (a mirror) or on another annotation type. Aliases are resolved
one hop deep.

Naming rules for the target parameter:

 - mirror (no ``annotation``): ``attribute`` or else ``value``;
 - cross-annotation: ``attribute``, else ``value``, else the declaring
   parameter's own name.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, NamedTuple, Optional, Sequence, Type

from ._dev_utils import get_type_name, log_debug
from .annotation import Annotation
from .errors import AliasResolutionError

logger = logging.getLogger(__name__)

__all__ = [
    "AliasLink",
    "find_alias_target",
    "resolve_alias",
]


class AliasLink(NamedTuple):
    """Directed alias ``source_type.source_parameter -> target_type.target_parameter``."""

    source_type: Type[Annotation]
    source_parameter: str
    target_type: Type[Annotation]
    target_parameter: str

    @property
    def is_mirror(self) -> bool:
        return self.source_type is self.target_type

    def __str__(self) -> str:
        return f"{get_type_name(self.target_type)}.{self.target_parameter}"


def _not_found(target_type: Any, target_parameter: str) -> AliasResolutionError:
    name = get_type_name(target_type) if target_type is not None else "<unknown>"
    return AliasResolutionError(
        f"Referenced alias method {name}.{target_parameter or '<blank>'} not found.",
        ["Check the AliasFor declaration of the parameter"],
    )


@log_debug
def resolve_alias(annotation: Annotation, parameter: str) -> Optional[AliasLink]:
    """
    Return the alias declared on ``parameter`` of ``annotation``, if any.

    Raises:
        AliasResolutionError: If an alias is declared but its target
            parameter does not exist.
    """
    source_type = type(annotation)
    declaration = source_type.alias_declaration(parameter)
    if declaration is None:
        return None

    if declaration.annotation is None:
        target_type = source_type
        target_parameter = declaration.attribute or declaration.value
    else:
        target_type = declaration.annotation
        target_parameter = declaration.attribute or declaration.value or parameter

    if not (
        target_parameter
        and inspect.isclass(target_type)
        and issubclass(target_type, Annotation)
        and target_type.has_accessor(target_parameter)
    ):
        raise _not_found(target_type, target_parameter)

    return AliasLink(source_type, parameter, target_type, target_parameter)


def find_alias_target(
    link: AliasLink,
    annotation: Annotation,
    resolved: Sequence[Annotation],
    source: Any,
) -> Annotation:
    """
    Locate the annotation instance holding the alias value.

    Mirrors resolve to ``annotation`` itself. Otherwise the first co-present
    instance of the target type wins, then an instance applied to the
    declaring annotation type (meta-annotation).

    Raises:
        AliasResolutionError: If no instance of the target type is found.
    """
    if link.is_mirror:
        return annotation

    for candidate in resolved:
        if type(candidate) is link.target_type:
            return candidate

    for candidate in source.list_applied_annotations(type(annotation)):
        if type(candidate) is link.target_type:
            logger.debug("Alias %s resolved through meta-annotation %r", link, candidate)
            return candidate

    raise _not_found(link.target_type, link.target_parameter)
