from typing import Any

import pytest

from annotation_validator import (
    ConfigurationError,
    ConstructorRef,
    FieldRef,
    MethodRef,
    constructor_of,
    declared_annotations,
    describe_target,
    field_of,
    method_of,
)
from annotation_validator.targets import declared_members, method_from_function, signature_of

from annotated_classes import (
    AnnotatedClass,
    AnnotatedSubclass,
    Dispatching,
    InheritsConstructor,
    Marker,
    ValueTargets,
    WithConstructor,
)

# -------------------------------------------------------------------
# Signatures and members
# -------------------------------------------------------------------


def test_signature_drops_self_and_resolves_hints():
    assert signature_of(AnnotatedClass.overloaded_method) == ((str, str), type(None))


def test_signature_of_unannotated_parameters():
    def func(self, data):
        pass

    assert signature_of(func) == ((Any,), Any)
    assert signature_of(func, bound=False) == ((Any, Any), Any)


def test_declared_members_split_dispatch_implementations():
    members = [m for m in declared_members(Dispatching) if m.name == "feed"]
    assert [m.parameter_types for m in members] == [(Any,), (str,), (int,)]


def test_declared_members_of_wrapped_callables():
    names = {m.name: m for m in declared_members(ValueTargets)}
    assert names["static_marked"].parameter_types == ()
    assert names["marked_property"].return_type is str


def test_declared_members_are_not_inherited():
    names = [m.name for m in declared_members(AnnotatedSubclass)]
    assert names == ["overloaded_method", "method_with_annotations"]


# -------------------------------------------------------------------
# method_of
# -------------------------------------------------------------------


def test_method_of_by_name():
    ref = method_of(AnnotatedClass, "method_with_annotations")
    assert ref.owner is AnnotatedClass
    assert ref.function is AnnotatedClass.method_with_annotations
    assert ref.parameter_types == ()


def test_method_of_finds_inherited_method():
    ref = method_of(AnnotatedSubclass, "method_without_annotations")
    assert ref.owner is AnnotatedClass


def test_method_of_selects_overload_by_parameter_types():
    own = method_of(AnnotatedSubclass, "overloaded_method", str, int)
    inherited = method_of(AnnotatedSubclass, "overloaded_method", str, str)

    assert own.owner is AnnotatedSubclass
    assert inherited.owner is AnnotatedClass


def test_method_of_dispatch_implementation():
    ref = method_of(Dispatching, "feed", str)
    assert declared_annotations(ref.function) == (Marker("text"),)


def test_method_of_ambiguous_overload():
    with pytest.raises(ConfigurationError) as excinfo:
        method_of(Dispatching, "feed")
    assert "is overloaded" in str(excinfo.value)
    assert "feed(str)" in str(excinfo.value)


def test_method_of_unknown_method():
    with pytest.raises(ConfigurationError, match="Method no_such_method not found"):
        method_of(AnnotatedClass, "no_such_method")


def test_method_of_unknown_overload():
    with pytest.raises(ConfigurationError, match=r"overloaded_method\(int\) not found"):
        method_of(AnnotatedClass, "overloaded_method", int)


def test_method_of_requires_class():
    with pytest.raises(ConfigurationError, match="is not a class"):
        method_of(AnnotatedClass(), "method_with_annotations")


def test_method_from_function_infers_owner():
    ref = method_from_function(AnnotatedClass.method_with_annotations)
    assert ref == method_of(AnnotatedClass, "method_with_annotations")


def test_method_from_function_with_explicit_owner():
    ref = method_from_function(AnnotatedClass.method_without_annotations, AnnotatedSubclass)
    assert ref.owner is AnnotatedClass


def test_method_from_local_function_needs_owner():
    def local():
        pass

    with pytest.raises(ConfigurationError, match="Cannot determine the class"):
        method_from_function(local)


# -------------------------------------------------------------------
# Fields and constructors
# -------------------------------------------------------------------


def test_field_of():
    assert field_of(AnnotatedClass, "field_with_annotations") == FieldRef(
        AnnotatedClass, "field_with_annotations"
    )


def test_field_of_unknown_or_inherited_field():
    with pytest.raises(ConfigurationError, match="Field no_such_field not found"):
        field_of(AnnotatedClass, "no_such_field")
    with pytest.raises(ConfigurationError):
        field_of(AnnotatedSubclass, "field_with_annotations")


def test_constructor_of_own_init():
    ref = constructor_of(WithConstructor, int)
    assert ref == ConstructorRef(WithConstructor, WithConstructor.__init__, (int,))


def test_constructor_of_inherited_init():
    ref = constructor_of(InheritsConstructor)
    assert ref.function is None
    assert ref.parameter_types == (int,)


def test_constructor_of_wrong_parameter_types():
    with pytest.raises(ConfigurationError, match="not found"):
        constructor_of(WithConstructor, str)


# -------------------------------------------------------------------
# Descriptions
# -------------------------------------------------------------------


def test_describe_target():
    assert describe_target(AnnotatedClass) == "class annotated_classes.AnnotatedClass"
    assert describe_target(method_of(AnnotatedClass, "overloaded_method")) == (
        "method annotated_classes.AnnotatedClass.overloaded_method(str, str)"
    )
    assert describe_target(field_of(AnnotatedClass, "field_with_annotations")) == (
        "field annotated_classes.AnnotatedClass.field_with_annotations"
    )
    assert describe_target(constructor_of(WithConstructor)) == (
        "constructor annotated_classes.WithConstructor(int)"
    )


def test_method_ref_is_hashable():
    ref = method_of(AnnotatedClass, "method_with_annotations")
    assert isinstance(ref, MethodRef)
    assert {ref: 1}[method_of(AnnotatedClass, "method_with_annotations")] == 1
