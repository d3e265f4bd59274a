r"""Metadata resolution.

Computes the ordered, de-duplicated set of annotations that logically apply
to a target element, walking superclasses and interfaces.

Python has no separate notion of interfaces, so the hierarchy is split the
way single-inheritance languages see it:

 - supertypes: the primary base chain (``__bases__[0]`` repeatedly), without
   ``object``;
 - interfaces: every other class in the MRO (mixins, ABCs, protocols).

Doxygen Dot Graph of the lookup order for ``class C(B, I)``:
------------------------------------------------------------
\dot
digraph LookupOrder {
    rankdir=LR;
    node [shape=rectangle];
    "C" -> "interfaces of C" -> "B" -> "interfaces of B" -> "...";
}
\enddot
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from ._dev_utils import log_debug
from .annotation import Annotation, declared_annotations, field_annotations
from .targets import ConstructorRef, FieldRef, MemberInfo, MethodRef, declared_members

logger = logging.getLogger(__name__)

__all__ = [
    "IntrospectionSource",
    "MetadataResolver",
    "MetadataSource",
]

# Generic/Protocol plumbing shows up in MROs but never carries annotations
_TYPING_MODULES = frozenset({"typing", "typing_extensions"})


# -----------------------------------------------------------------------------
# Data Source
# -----------------------------------------------------------------------------


@runtime_checkable
class MetadataSource(Protocol):
    """Capabilities the resolver and matcher need from the host runtime."""

    def list_applied_annotations(self, element: Any) -> Tuple[Annotation, ...]: ...

    def list_declared_members(self, cls: type) -> List[MemberInfo]: ...

    def get_supertypes(self, cls: type) -> List[type]: ...

    def get_interfaces(self, cls: type) -> List[type]: ...

    def invoke_accessor(self, annotation: Annotation, name: str) -> Any: ...


class IntrospectionSource:
    """:class:`MetadataSource` backed by Python introspection."""

    def list_applied_annotations(self, element: Any) -> Tuple[Annotation, ...]:
        if isinstance(element, FieldRef):
            return field_annotations(element.owner, element.name)
        if isinstance(element, ConstructorRef):
            if element.function is None:
                return ()
            return declared_annotations(element.function)
        if isinstance(element, (MethodRef, MemberInfo)):
            return declared_annotations(element.function)
        return declared_annotations(element)

    def list_declared_members(self, cls: type) -> List[MemberInfo]:
        return declared_members(cls)

    def get_supertypes(self, cls: type) -> List[type]:
        supertypes = []
        base = cls.__bases__[0] if cls.__bases__ else None
        while base is not None and base is not object:
            supertypes.append(base)
            base = base.__bases__[0] if base.__bases__ else None
        return supertypes

    def get_interfaces(self, cls: type) -> List[type]:
        primary = {cls, object, *self.get_supertypes(cls)}
        return [
            k
            for k in cls.__mro__
            if k not in primary and k.__module__ not in _TYPING_MODULES
        ]

    def invoke_accessor(self, annotation: Annotation, name: str) -> Any:
        return getattr(annotation, name)


# -----------------------------------------------------------------------------
# Resolver
# -----------------------------------------------------------------------------


def _add_if_not_present(collection: List[Annotation], annotations: Sequence[Annotation]) -> None:
    for annotation in annotations:
        if annotation not in collection:
            collection.append(annotation)


class MetadataResolver:
    """
    Resolves the annotations applicable to a class, method, field or constructor.

    Parameters:
        source (MetadataSource): Data source; defaults to introspection.
        match_return_type (bool): Also require equal return types when
            matching a method against the members of its ancestors.
    """

    def __init__(self, source: Optional[MetadataSource] = None, match_return_type: bool = False):
        self.source = source if source is not None else IntrospectionSource()
        self.match_return_type = match_return_type

    @log_debug
    def resolve_applicable(self, target: Any) -> Tuple[Annotation, ...]:
        """Return every annotation applicable to ``target``, in discovery order."""
        if isinstance(target, (FieldRef, ConstructorRef)):
            resolved = list(self.source.list_applied_annotations(target))
        elif isinstance(target, MethodRef):
            resolved = self._resolve_method(target)
        else:
            resolved = self._resolve_class(target)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Resolved %d annotation(s) for %s: %s",
                len(resolved),
                target,
                [type(a).__name__ for a in resolved],
            )
        return tuple(resolved)

    def _hierarchy(self, cls: type) -> List[type]:
        return [cls] + self.source.get_supertypes(cls)

    def _resolve_class(self, cls: type) -> List[Annotation]:
        resolved: List[Annotation] = []
        for klass in self._hierarchy(cls):
            _add_if_not_present(resolved, self.source.list_applied_annotations(klass))
            for interface in self.source.get_interfaces(klass):
                _add_if_not_present(resolved, self.source.list_applied_annotations(interface))
        return resolved

    def _resolve_method(self, method: MethodRef) -> List[Annotation]:
        resolved: List[Annotation] = []
        for klass in self._hierarchy(method.owner):
            members = list(self.source.list_declared_members(klass))
            for interface in self.source.get_interfaces(klass):
                members.extend(self.source.list_declared_members(interface))

            for member in members:
                if self.is_same_method(member, method):
                    _add_if_not_present(resolved, self.source.list_applied_annotations(member))
        return resolved

    def is_same_method(self, member: MemberInfo, method: MethodRef) -> bool:
        if member.name != method.name:
            return False
        if member.parameter_types != method.parameter_types:
            return False
        return not self.match_return_type or member.return_type == method.return_type
