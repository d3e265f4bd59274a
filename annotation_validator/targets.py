r"""Validation targets.

A target is the element whose annotations are validated: a class, a method,
a field or a constructor. Classes are used as they are; the other elements
are described by small immutable references that remember the owning class,
since a Python function does not know the class it was declared in.

Methods are identified by name and parameter types, which makes
``functools.singledispatchmethod`` implementations addressable as overloads:

    method_of(Parser, "feed", str)
    method_of(Parser, "feed", bytes)
"""

from __future__ import annotations

import inspect
import sys
import typing
from functools import singledispatchmethod
from typing import Any, Callable, List, NamedTuple, Optional, Tuple

from ._dev_utils import get_full_name, get_type_name
from .annotation import unwrap_element
from .errors import ConfigurationError

__all__ = [
    "MemberInfo",
    "MethodRef",
    "FieldRef",
    "ConstructorRef",
    "constructor_of",
    "declared_members",
    "describe_target",
    "field_of",
    "method_from_function",
    "method_of",
    "signature_of",
]


# -----------------------------------------------------------------------------
# Signatures
# -----------------------------------------------------------------------------


def _format_types(types: Tuple[Any, ...]) -> str:
    return ", ".join(get_type_name(t) for t in types)


def signature_of(function: Callable, bound: bool = True) -> Tuple[Tuple[Any, ...], Any]:
    """
    Return ``(parameter_types, return_type)`` of a function.

    Type hints are resolved when possible and fall back to the raw
    annotations otherwise. The leading ``self``/``cls`` parameter is dropped
    for bound callables; unannotated parameters are typed ``typing.Any``.
    """
    try:
        hints = typing.get_type_hints(function)
    except (AttributeError, NameError, TypeError):
        hints = dict(getattr(function, "__annotations__", {}))

    try:
        parameters = list(inspect.signature(function).parameters.values())
    except (TypeError, ValueError):
        parameters = []

    if bound and parameters:
        parameters = parameters[1:]

    parameter_types = tuple(hints.get(p.name, Any) for p in parameters)
    return parameter_types, hints.get("return", Any)


class MemberInfo(NamedTuple):
    """A callable member declared directly on a class."""

    name: str
    function: Callable
    parameter_types: Tuple[Any, ...]
    return_type: Any

    @classmethod
    def of(cls, name: str, function: Callable, bound: bool = True) -> "MemberInfo":
        parameter_types, return_type = signature_of(function, bound)
        return cls(name, function, parameter_types, return_type)


def declared_members(owner: type) -> List[MemberInfo]:
    """
    Callable members declared on ``owner`` itself, in definition order.

    Every registered implementation of a ``singledispatchmethod`` is a
    separate member sharing the method name.
    """
    members: List[MemberInfo] = []
    for name, attr in vars(owner).items():
        if isinstance(attr, singledispatchmethod):
            seen: List[Callable] = []
            for implementation in attr.dispatcher.registry.values():
                if implementation in seen:
                    continue
                seen.append(implementation)
                members.append(MemberInfo.of(name, implementation))
        elif isinstance(attr, staticmethod):
            members.append(MemberInfo.of(name, attr.__func__, bound=False))
        elif isinstance(attr, classmethod):
            members.append(MemberInfo.of(name, attr.__func__))
        elif isinstance(attr, property):
            if attr.fget is not None:
                members.append(MemberInfo.of(name, attr.fget))
        elif inspect.isfunction(attr):
            members.append(MemberInfo.of(name, attr))
    return members


# -----------------------------------------------------------------------------
# Target References
# -----------------------------------------------------------------------------


class MethodRef(NamedTuple):
    """A method identified by its declaring class, name and parameter types."""

    owner: type
    name: str
    function: Callable
    parameter_types: Tuple[Any, ...]
    return_type: Any = Any

    def __str__(self) -> str:
        return (
            f"method {get_full_name(self.owner)}.{self.name}"
            f"({_format_types(self.parameter_types)})"
        )


class FieldRef(NamedTuple):
    """A class field, annotated through ``typing.Annotated`` metadata."""

    owner: type
    name: str

    def __str__(self) -> str:
        return f"field {get_full_name(self.owner)}.{self.name}"


class ConstructorRef(NamedTuple):
    """
    The constructor of a class.

    ``function`` is ``None`` when the class does not define its own
    ``__init__``; constructors are never inherited for validation purposes.
    """

    owner: type
    function: Optional[Callable]
    parameter_types: Tuple[Any, ...] = ()

    def __str__(self) -> str:
        return (
            f"constructor {get_full_name(self.owner)}"
            f"({_format_types(self.parameter_types)})"
        )


def describe_target(target: Any) -> str:
    """Human readable identity of a validation target."""
    if inspect.isclass(target):
        return f"class {get_full_name(target)}"
    return str(target)


# -----------------------------------------------------------------------------
# Factories
# -----------------------------------------------------------------------------


def _require_class(owner: Any) -> type:
    if not inspect.isclass(owner):
        raise ConfigurationError(
            f"{owner!r} is not a class",
            [
                "Ensure you're passing a class, not an instance",
                f"Got {type(owner).__name__}, expected a class",
            ],
        )
    return owner


def method_of(owner: type, name: str, *parameter_types: Any) -> MethodRef:
    """
    Look up a method of ``owner`` or of one of its ancestors.

    Parameters:
        owner (type): The class the method is looked up on.
        name (str): The method name.
        *parameter_types: Parameter types (without ``self``). When omitted,
            the name alone must identify the method.

    Raises:
        ConfigurationError: If no method matches, or the name is overloaded
            and no parameter types were given.
    """
    _require_class(owner)
    wanted = tuple(parameter_types)

    for cls in owner.__mro__:
        candidates = [m for m in declared_members(cls) if m.name == name]
        if wanted:
            candidates = [m for m in candidates if m.parameter_types == wanted]
        if not candidates:
            continue
        if len(candidates) > 1:
            overloads = [f"{name}({_format_types(m.parameter_types)})" for m in candidates]
            raise ConfigurationError(
                f"Method {name} of {get_full_name(cls)} is overloaded",
                [f"Pass parameter types to select one of: {', '.join(overloads)}"],
            )
        member = candidates[0]
        return MethodRef(cls, name, member.function, member.parameter_types, member.return_type)

    signature = f"{name}({_format_types(wanted)})" if wanted else name
    raise ConfigurationError(
        f"Method {signature} not found in {get_full_name(owner)}",
        ["Check the method name and its parameter type annotations"],
    )


def _owner_from_qualname(function: Callable) -> type:
    module = sys.modules.get(getattr(function, "__module__", None) or "")
    path = getattr(function, "__qualname__", "").split(".")[:-1]
    if module is None or not path or "<locals>" in path:
        raise ConfigurationError(
            f"Cannot determine the class declaring {function!r}",
            ["Pass the owner explicitly or use method_of(owner, name, ...)"],
        )
    owner: Any = module
    for part in path:
        owner = getattr(owner, part, None)
        if owner is None:
            break
    if not inspect.isclass(owner):
        raise ConfigurationError(
            f"Cannot determine the class declaring {function!r}",
            ["Pass the owner explicitly or use method_of(owner, name, ...)"],
        )
    return owner


def method_from_function(function: Callable, owner: Optional[type] = None) -> MethodRef:
    """Build a :class:`MethodRef` from a function object found on a class."""
    target = unwrap_element(function)
    if owner is None:
        owner = _owner_from_qualname(target)
    _require_class(owner)

    for cls in owner.__mro__:
        for member in declared_members(cls):
            if member.function is target:
                return MethodRef(
                    cls, member.name, member.function, member.parameter_types, member.return_type
                )

    raise ConfigurationError(
        f"{target!r} is not a method of {get_full_name(owner)}",
        ["Check that the function is declared on the given class or its ancestors"],
    )


def field_of(owner: type, name: str) -> FieldRef:
    """
    Reference the field ``name`` declared on ``owner``.

    Raises:
        ConfigurationError: If ``owner`` neither annotates nor assigns ``name``.
    """
    _require_class(owner)
    if name not in inspect.get_annotations(owner) and name not in vars(owner):
        raise ConfigurationError(
            f"Field {name} not found in {get_full_name(owner)}",
            ["Fields must be declared on the class itself, not inherited"],
        )
    return FieldRef(owner, name)


def constructor_of(owner: type, *parameter_types: Any) -> ConstructorRef:
    """
    Reference the constructor of ``owner``.

    Raises:
        ConfigurationError: If parameter types are given and do not match.
    """
    _require_class(owner)
    init = vars(owner).get("__init__")

    if inspect.isfunction(init):
        function: Optional[Callable] = init
        declared_types, _ = signature_of(init)
    else:
        function = None
        inherited = getattr(owner, "__init__", None)
        declared_types = signature_of(inherited)[0] if inspect.isfunction(inherited) else ()

    if parameter_types and tuple(parameter_types) != declared_types:
        raise ConfigurationError(
            f"Constructor {get_full_name(owner)}({_format_types(tuple(parameter_types))}) not found",
            [f"Declared constructor is {get_full_name(owner)}({_format_types(declared_types)})"],
        )
    return ConstructorRef(owner, function, declared_types)
