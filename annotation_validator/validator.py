"""Entry point of the validation API."""

from __future__ import annotations

from typing import Iterable, Optional

from .config import DEFAULT_PARAMETER_BLACKLIST
from .resolver import MetadataSource
from .validation import AnnotationValidation

__all__ = ["validate"]


def validate(
    blacklist: Iterable[str] = (),
    *,
    source: Optional[MetadataSource] = None,
    match_return_type: bool = False,
) -> AnnotationValidation:
    """
    Start a validation session.

    Parameters:
        blacklist (Iterable[str]): Extra parameter names that are never
            checked by the undefined-parameter scan, added to
            ``DEFAULT_PARAMETER_BLACKLIST``.
        source (MetadataSource): Alternative metadata source.
        match_return_type (bool): Also compare return types when matching an
            overriding method against ancestor members.

    Returns:
        AnnotationValidation: A fresh, single-use session.

    Example:
        >>> validate().only() \\
        ...     .annotation(AnnotationDefinition.type(Marker).param("value", "v1")) \\
        ...     .for_class(Service)
    """
    if isinstance(blacklist, str):
        blacklist = (blacklist,)
    return AnnotationValidation(
        DEFAULT_PARAMETER_BLACKLIST | frozenset(blacklist),
        source=source,
        match_return_type=match_return_type,
    )
