r"""Exception hierarchy for annotation validation.

Configuration errors are raised immediately when the caller misuses the
API. Assertion mismatches are collected during a validation pass and raised
together as one :class:`AnnotationAssertionError`.

Doxygen Dot Graph of Exception Hierarchy:
------------------------------------------
\dot
digraph ExceptionHierarchy {
    node [shape=rectangle];
    "Exception" -> "ValidationError";
    "ValidationError" -> "ConfigurationError";
    "ValidationError" -> "AnnotationAssertionError";
    "ValidationError" -> "AliasResolutionError";
}
\enddot
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

__all__ = [
    "ValidationError",
    "ConfigurationError",
    "AnnotationAssertionError",
    "AliasResolutionError",
]


class ValidationError(Exception):
    """Base exception for validation errors with rich context."""

    def __init__(
        self,
        message: str,
        suggestions: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.suggestions = suggestions or []
        self.context = context or {}

        enhanced_message = self._build_enhanced_message()
        super().__init__(enhanced_message)

    def _build_enhanced_message(self) -> str:
        """Build enhanced error message with context and suggestions."""
        lines = [self.message]

        if self.context:
            if "expected" in self.context and "actual" in self.context:
                lines.append(f"  Expected: {self.context['expected']}")
                lines.append(f"  Actual: {self.context['actual']}")

            if "artifact_name" in self.context:
                lines.append(f"  Artifact: {self.context['artifact_name']}")

        if self.suggestions:
            lines.append("  Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"    • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(ValidationError, ValueError):
    """Raised when the validation API is used incorrectly."""

    pass


class AliasResolutionError(ValidationError, LookupError):
    """Raised when a declared alias target cannot be located."""

    pass


class AnnotationAssertionError(ValidationError, AssertionError):
    """
    Composite failure of one validation pass.

    The message starts with the validated element so that failures stay
    attributable when many elements are validated in a loop.

    Attributes:
        errors (List[str]): Every recorded mismatch, in discovery order.
        annotated_object (Any): The element that was validated.
        description (str): Human readable identity of the element.
    """

    def __init__(
        self,
        errors: Sequence[str],
        annotated_object: Any,
        description: Optional[str] = None,
    ):
        self.errors = list(errors)
        self.annotated_object = annotated_object
        self.description = description if description is not None else str(annotated_object)
        super().__init__(self._format(self.errors, self.description))

    @staticmethod
    def _format(errors: List[str], description: str) -> str:
        noun = "assertion" if len(errors) == 1 else "assertions"
        lines = [
            "",
            f"Error on Validating {description}",
            "",
            f"The following {len(errors)} {noun} failed:",
        ]
        lines.extend(f"{index}) {error}" for index, error in enumerate(errors, 1))
        return "\n".join(lines)
