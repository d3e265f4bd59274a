r"""Match engine.

For every expectation the matcher locates the applied annotation, compares
each expected parameter (retrying through its alias on mismatch) and, in the
strict modes, checks that every other parameter holds its default or empty
value. Every failure goes to a :class:`SoftAssertions`; the matcher itself
never raises.

\dot
digraph MatchParameter {
    rankdir=LR;
    node [shape=rectangle];
    "accessor?" -> "alias resolvable?" -> "invoke" -> "compare" -> "compare alias";
}
\enddot
"""

from __future__ import annotations

import logging
from typing import Any, List, NamedTuple, Optional, Sequence, Tuple, Type

from ._dev_utils import get_full_name
from .alias import AliasLink, find_alias_target, resolve_alias
from .annotation import Annotation
from .assertions import SoftAssertions
from .config import ValidationConfig, ValidationMode
from .definition import AnnotationDefinition, ParamDefinition
from .errors import AliasResolutionError
from .resolver import MetadataSource

logger = logging.getLogger(__name__)

__all__ = [
    "AnnotationMatcher",
    "MatchResult",
    "values_match",
]

ACCESS_OR_INVOCATION_MESSAGE = "Could not access/invoke method for '{}'."
ALIAS_ACCESS_OR_INVOCATION_MESSAGE = "Could not access/invoke aliased method for '{}'."


# -----------------------------------------------------------------------------
# Value Comparison
# -----------------------------------------------------------------------------


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def values_match(actual: Any, expected: Tuple[Any, ...]) -> bool:
    """
    Compare an actual parameter value with the expected values.

    A sequence must hold exactly the expected elements in the expected
    order; a scalar must equal the single expected value.
    """
    if _is_sequence(actual):
        return list(actual) == list(expected)
    return len(expected) == 1 and actual == expected[0]


def _describe_mismatch(name: str, actual: Any, expected: Tuple[Any, ...]) -> str:
    if _is_sequence(actual):
        return (
            f"Unexpected values for Method '{name}': expected exactly "
            f"{list(expected)!r} in this order but was {list(actual)!r}."
        )
    shown = expected[0] if len(expected) == 1 else list(expected)
    return f"Unexpected value for Method '{name}': expected {shown!r} but was {actual!r}."


def _equal_values(actual: Any, other: Any) -> bool:
    if _is_sequence(actual) and _is_sequence(other):
        return list(actual) == list(other)
    return actual == other


# -----------------------------------------------------------------------------
# Matcher
# -----------------------------------------------------------------------------


class MatchResult(NamedTuple):
    """Outcome of matching one expectation."""

    annotation: Optional[Annotation]
    covered: Tuple[str, ...]

    @property
    def matched(self) -> bool:
        return self.annotation is not None


class AnnotationMatcher:
    """
    Matches expectations against a resolved annotation set.

    Parameters:
        config (ValidationConfig): Mode and blacklist of the pass.
        source (MetadataSource): Used to invoke accessors and to find
            meta-annotations for alias targets.
    """

    def __init__(self, config: ValidationConfig, source: MetadataSource):
        self.config = config
        self.source = source

    @staticmethod
    def find(
        annotation_type: Type[Annotation], resolved: Sequence[Annotation]
    ) -> Optional[Annotation]:
        for annotation in resolved:
            if type(annotation) is annotation_type:
                return annotation
        return None

    def match(
        self,
        definition: AnnotationDefinition,
        resolved: Sequence[Annotation],
        softly: SoftAssertions,
    ) -> MatchResult:
        annotation = self.find(definition.annotation_type, resolved)
        if annotation is None:
            softly.record(
                f"Expected Annotation {get_full_name(definition.annotation_type)} not found"
            )
            return MatchResult(None, ())

        covered: List[str] = []
        for param in definition.params:
            self._match_param(annotation, param, resolved, softly, covered)
        return MatchResult(annotation, tuple(covered))

    def _invoke(self, annotation: Annotation, name: str) -> Any:
        return self.source.invoke_accessor(annotation, name)

    def _match_param(
        self,
        annotation: Annotation,
        param: ParamDefinition,
        resolved: Sequence[Annotation],
        softly: SoftAssertions,
        covered: List[str],
    ) -> None:
        name = param.name
        if not type(annotation).has_accessor(name):
            softly.record(f"Method {name} not found.")
            return
        covered.append(name)

        # an unresolvable alias is reported even when the direct value matches
        link: Optional[AliasLink] = None
        holder: Optional[Annotation] = None
        try:
            link = resolve_alias(annotation, name)
            if link is not None:
                holder = find_alias_target(link, annotation, resolved, self.source)
        except AliasResolutionError as e:
            softly.record(e.message)
            return

        # both sides of an alias pair count as checked, whatever the outcome
        if link is not None:
            covered.append(link.target_parameter)

        try:
            actual = self._invoke(annotation, name)
        except Exception:
            logger.debug("Invoking %r.%s failed", annotation, name, exc_info=True)
            softly.record(ACCESS_OR_INVOCATION_MESSAGE.format(name))
            return

        if values_match(actual, param.values):
            return

        if link is not None and holder is not None:
            try:
                alias_actual = self._invoke(holder, link.target_parameter)
            except Exception:
                logger.debug("Invoking alias %s failed", link, exc_info=True)
                softly.record(ALIAS_ACCESS_OR_INVOCATION_MESSAGE.format(name))
                return
            if values_match(alias_actual, param.values):
                logger.debug("Parameter '%s' satisfied through alias %s", name, link)
                return

        softly.record(_describe_mismatch(name, actual, param.values))

    def check_undefined(
        self,
        annotation: Annotation,
        covered: Sequence[str],
        softly: SoftAssertions,
    ) -> None:
        """Check parameters without an expectation according to the mode."""
        mode = self.config.mode
        if mode is ValidationMode.DEFAULT:
            return

        annotation_type = type(annotation)
        for name in annotation_type.parameter_names():
            if name in self.config.parameter_blacklist or name in covered:
                continue

            try:
                actual = self._invoke(annotation, name)
            except Exception:
                logger.debug("Invoking %r.%s failed", annotation, name, exc_info=True)
                softly.record(ACCESS_OR_INVOCATION_MESSAGE.format(name))
                continue

            if mode is ValidationMode.ONLY:
                default = annotation_type.parameter_default(name)
                softly.check(
                    _equal_values(actual, default),
                    f"Unexpected value for Method '{name}' found: "
                    f"expected default {default!r} but was {actual!r}.",
                )
            elif _is_sequence(actual):
                softly.check(
                    len(actual) == 0,
                    f"Unexpected values for Method '{name}' found: {list(actual)!r}.",
                )
            elif isinstance(actual, str):
                softly.check(
                    actual == "", f"Unexpected value for Method '{name}' found: {actual!r}."
                )
            else:
                softly.check(
                    actual is None, f"Unexpected value for Method '{name}' found: {actual!r}."
                )

    @staticmethod
    def check_order(
        resolved: Sequence[Annotation],
        matched: Sequence[Type[Annotation]],
        softly: SoftAssertions,
    ) -> None:
        """The resolved set must equal the matched types, in order."""
        actual = [get_full_name(type(annotation)) for annotation in resolved]
        expected = [get_full_name(annotation_type) for annotation_type in matched]
        softly.check(
            actual == expected,
            f"Expected annotations {expected} in exactly this order but found {actual}.",
        )
