"""Soft assertions: collect every mismatch, raise once."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from .errors import AnnotationAssertionError

logger = logging.getLogger(__name__)

__all__ = ["SoftAssertions"]


class SoftAssertions:
    """
    Ordered collection of mismatch messages for one validation pass.

    ``record`` and ``check`` never raise; ``assert_all`` raises a single
    :class:`AnnotationAssertionError` when anything was recorded.
    """

    def __init__(self) -> None:
        self._errors: List[str] = []

    def record(self, message: str) -> None:
        logger.debug("Mismatch: %s", message)
        self._errors.append(message)

    def check(self, condition: bool, message: str) -> bool:
        """Record ``message`` unless ``condition`` holds; return ``condition``."""
        if not condition:
            self.record(message)
        return condition

    @property
    def errors(self) -> List[str]:
        return list(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def assert_all(self, annotated_object: Any, description: Optional[str] = None) -> None:
        """
        Raise the collected mismatches, if any.

        Raises:
            AnnotationAssertionError: Carrying ``annotated_object`` and every
                recorded message.
        """
        if self._errors:
            raise AnnotationAssertionError(self._errors, annotated_object, description)
