"""Fluent validation session.

Usage:
    validate().exactly() \\
        .annotation(AnnotationDefinition.type(Marker).param("value", "v1")) \\
        .for_method(method_of(Service, "run"))

A session is single use: the terminal ``for_*`` call runs one validation
pass and either returns or raises :class:`AnnotationAssertionError` with
every mismatch found.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Iterable, List, Optional, Type, Union

from typing_extensions import Self

from ._dev_utils import get_type_name
from .annotation import Annotation
from .assertions import SoftAssertions
from .config import DEFAULT_PARAMETER_BLACKLIST, ValidationConfig, ValidationMode
from .definition import AnnotationDefinition
from .errors import ConfigurationError
from .matcher import AnnotationMatcher
from .resolver import MetadataResolver, MetadataSource
from .targets import (
    ConstructorRef,
    FieldRef,
    MethodRef,
    constructor_of,
    describe_target,
    method_from_function,
)

logger = logging.getLogger(__name__)

__all__ = ["AnnotationValidation"]

EMPTY_DEFAULT_SESSION_MESSAGE = (
    "Please add at least one Annotation to assert or enable strict validation."
)


class AnnotationValidation:
    """
    Collects expectations and validates them against one element.

    Parameters:
        parameters_blacklist (Iterable[str]): Parameter names never checked
            by the undefined-parameter scan.
        source (MetadataSource): Data source for resolution and accessor
            invocation; defaults to Python introspection.
        match_return_type (bool): Also compare return types when matching a
            method against ancestor members.
    """

    def __init__(
        self,
        parameters_blacklist: Iterable[str] = DEFAULT_PARAMETER_BLACKLIST,
        source: Optional[MetadataSource] = None,
        match_return_type: bool = False,
    ):
        self.param_blacklist = frozenset(parameters_blacklist)
        self._definitions: List[AnnotationDefinition] = []
        self._mode = ValidationMode.DEFAULT
        self._resolver = MetadataResolver(source, match_return_type)
        self._match_return_type = match_return_type
        self._consumed = False

    # -------------------------------------------------------------------------
    # Fluent Configuration
    # -------------------------------------------------------------------------

    def annotation(self, annotation_definition: AnnotationDefinition) -> Self:
        """Add an expected annotation."""
        if not isinstance(annotation_definition, AnnotationDefinition):
            raise ConfigurationError(
                f"{annotation_definition!r} is not an AnnotationDefinition",
                ["Build expectations with AnnotationDefinition.type(...)"],
            )
        self._definitions.append(annotation_definition)
        return self

    def exactly(self) -> Self:
        """Require that no other annotations and only the given parameters are present."""
        self._mode = ValidationMode.EXACTLY
        return self

    def only(self) -> Self:
        """Require that no other annotations are present, allowing default parameter values."""
        self._mode = ValidationMode.ONLY
        return self

    @property
    def mode(self) -> ValidationMode:
        return self._mode

    @property
    def definitions(self) -> List[AnnotationDefinition]:
        return list(self._definitions)

    # -------------------------------------------------------------------------
    # Terminal Calls
    # -------------------------------------------------------------------------

    def for_class(self, annotated_class: type) -> None:
        """
        Validate the annotations of a class, its superclasses and interfaces.

        Checks that:
         - all given annotations are found
         - no other annotations are present (strict modes)
         - annotations are in the given order (strict modes)
        """
        if not inspect.isclass(annotated_class):
            raise ConfigurationError(
                f"{annotated_class!r} is not a class",
                [f"Got {type(annotated_class).__name__}, expected a class"],
            )
        self._validate(annotated_class)

    def for_method(
        self,
        annotated_method: Union[MethodRef, Callable[..., Any]],
        owner: Optional[type] = None,
    ) -> None:
        """
        Validate the annotations of a method, including those declared on the
        same method of superclasses and interfaces.

        ``annotated_method`` is a :class:`MethodRef` (see ``method_of``) or a
        function found on ``owner``; the owner is inferred from the function's
        qualified name when omitted.
        """
        if not isinstance(annotated_method, MethodRef):
            annotated_method = method_from_function(annotated_method, owner)
        self._validate(annotated_method)

    def for_field(self, annotated_field: FieldRef) -> None:
        """Validate the annotations of a field (see ``field_of``)."""
        if not isinstance(annotated_field, FieldRef):
            raise ConfigurationError(
                f"{annotated_field!r} is not a field reference",
                ["Use field_of(owner, name) to reference a field"],
            )
        self._validate(annotated_field)

    def for_constructor(self, annotated_constructor: Union[ConstructorRef, type]) -> None:
        """Validate the annotations of a constructor (see ``constructor_of``)."""
        if not isinstance(annotated_constructor, ConstructorRef):
            annotated_constructor = constructor_of(annotated_constructor)
        self._validate(annotated_constructor)

    # -------------------------------------------------------------------------
    # Validation Pass
    # -------------------------------------------------------------------------

    def _freeze(self) -> ValidationConfig:
        if self._consumed:
            raise ConfigurationError(
                "This validation session has already been used",
                ["Start a new session with validate() for every element"],
            )
        self._consumed = True

        if self._mode is ValidationMode.DEFAULT and not self._definitions:
            raise ConfigurationError(
                EMPTY_DEFAULT_SESSION_MESSAGE,
                ["Call annotation(...) at least once", "Or call exactly() / only()"],
            )

        return ValidationConfig(
            mode=self._mode,
            parameter_blacklist=self.param_blacklist,
            match_return_type=self._match_return_type,
        )

    def _validate(self, annotated_object: Any) -> None:
        config = self._freeze()
        description = describe_target(annotated_object)
        logger.debug(
            "Validating %s against %d annotation(s) in %s mode",
            description,
            len(self._definitions),
            config.mode.value,
        )

        softly = SoftAssertions()
        resolved = self._resolver.resolve_applicable(annotated_object)
        matcher = AnnotationMatcher(config, self._resolver.source)

        matched: List[Type[Annotation]] = []
        for definition in self._definitions:
            result = matcher.match(definition, resolved, softly)
            if not result.matched:
                continue
            matched.append(type(result.annotation))
            matcher.check_undefined(result.annotation, result.covered, softly)

        if config.mode.is_strict:
            matcher.check_order(resolved, matched, softly)

        if len(softly):
            logger.debug("%d mismatch(es) found on %s", len(softly), description)
        softly.assert_all(annotated_object, description)

    def __repr__(self) -> str:
        definitions = ", ".join(get_type_name(d.annotation_type) for d in self._definitions)
        return f"{type(self).__name__}(mode={self._mode.value}, annotations=[{definitions}])"
