"""Annotation types and annotated classes shared by the test suite."""

from abc import ABC, abstractmethod
from enum import Enum
from functools import singledispatchmethod
from typing import Annotated, Optional, Tuple

from pydantic import computed_field

from annotation_validator import AliasFor, Annotation

# -------------------------------------------------------------------
# Annotation types
# -------------------------------------------------------------------


class Level(Enum):
    LOW = "low"
    HIGH = "high"


class Marker(Annotation):
    value: str = ""


class Describe(Annotation):
    parameter: str = "default"
    another_parameter: Tuple[str, ...] = ()


class Priority(Annotation):
    value: Annotated[Level, AliasFor("level")] = Level.LOW
    level: Annotated[Level, AliasFor("value")] = Level.LOW


@Priority(Level.HIGH)
class AliasedPriority(Annotation):
    referenced_level: Annotated[Level, AliasFor(annotation=Priority, attribute="level")] = Level.LOW
    value: Annotated[Level, AliasFor(annotation=Priority)] = Level.HIGH


class Route(Annotation):
    value: Annotated[str, AliasFor("path")] = ""
    path: Annotated[str, AliasFor("value")] = ""


class Limit(Annotation):
    maximum: int = 0


class Bounded(Annotation):
    size: Annotated[int, AliasFor(annotation=Limit, attribute="maximum")] = 0


class BrokenAlias(Annotation):
    value: Annotated[str, AliasFor(annotation=Marker, attribute="missing")] = ""


class Numbers(Annotation):
    values: Tuple[int, ...] = ()


class Flags(Annotation):
    enabled: bool = False
    label: Optional[str] = None


class Computed(Annotation):
    value: int = 0

    @computed_field(repr=False)
    @property
    def inverse(self) -> float:
        return 1 / self.value


class InterfaceMarker(Annotation):
    pass


class InterfaceForAbstractMarker(Annotation):
    pass


class AbstractClassMarker(Annotation):
    pass


class Shared(Annotation):
    value: str = "shared"


# -------------------------------------------------------------------
# Class hierarchy
# -------------------------------------------------------------------


@InterfaceMarker()
class AnnotatedInterface(ABC):
    @InterfaceMarker()
    @abstractmethod
    def annotated_interface_method(self) -> None: ...


@InterfaceForAbstractMarker()
class AnnotatedInterfaceForAbstractClass(ABC):
    @InterfaceForAbstractMarker()
    @abstractmethod
    def annotated_interface_method_for_abstract_class(self) -> None: ...


@AbstractClassMarker()
class AnnotatedAbstractClass(AnnotatedInterfaceForAbstractClass):
    @AbstractClassMarker()
    @abstractmethod
    def annotated_abstract_method(self) -> None: ...


@Describe(another_parameter=("one", "two"))
class AnnotatedClass(AnnotatedAbstractClass, AnnotatedInterface):
    field_with_annotations: Annotated[str, Describe(parameter="testvalue")] = ""
    field_without_annotations: str = ""

    @Describe(parameter="testvalue", another_parameter=("another",))
    @Priority(Level.HIGH)
    def method_with_annotations(self) -> None:
        pass

    @AliasedPriority(referenced_level=Level.HIGH)
    def method_with_alias_annotations(self) -> None:
        pass

    def method_without_annotations(self) -> None:
        pass

    def annotated_interface_method(self) -> None:
        pass

    def annotated_interface_method_for_abstract_class(self) -> None:
        pass

    def annotated_abstract_method(self) -> None:
        pass

    @Priority(Level.HIGH)
    def overloaded_method(self, foo: str, bar: str) -> None:
        pass


class AnnotatedSubclass(AnnotatedClass):
    def overloaded_method(self, foo: str, bar: int) -> None:
        pass

    def method_with_annotations(self) -> None:
        pass


class Dispatching:
    @singledispatchmethod
    def feed(self, data) -> None:
        pass

    @feed.register
    @Marker("text")
    def _(self, data: str) -> None:
        pass

    @feed.register
    @Marker("number")
    def _(self, data: int) -> None:
        pass


# -------------------------------------------------------------------
# Aliases, values and constructors
# -------------------------------------------------------------------


class AliasTargets:
    @Bounded()
    @Limit(maximum=5)
    def bounded_with_limit(self) -> None:
        pass

    @Bounded()
    def bounded_without_limit(self) -> None:
        pass

    @Route(path="/items")
    def mirrored_route(self) -> None:
        pass

    @Route(value="/both", path="/both")
    def mirrored_both(self) -> None:
        pass

    @BrokenAlias()
    def broken_alias(self) -> None:
        pass


class ValueTargets:
    @Marker("v1")
    def marked(self) -> None:
        pass

    @Numbers(values=(1, 2))
    def numbered(self) -> None:
        pass

    @Flags(enabled=True)
    def flagged(self) -> None:
        pass

    @Computed()
    def computed(self) -> None:
        pass

    @Marker("static")
    @staticmethod
    def static_marked() -> None:
        pass

    @Marker("property")
    @property
    def marked_property(self) -> str:
        return "value"


class WithConstructor:
    @Marker("init")
    def __init__(self, size: int) -> None:
        self.size = size


class InheritsConstructor(WithConstructor):
    pass


# -------------------------------------------------------------------
# De-duplication
# -------------------------------------------------------------------


@Shared()
class SharedInterface:
    pass


class Root:
    pass


@Marker("first")
class FirstBase(Root, SharedInterface):
    pass


@Marker("second")
class SecondBase(FirstBase, SharedInterface):
    pass


@Shared()
class EqualAnnotationChild(SecondBase):
    pass


# -------------------------------------------------------------------
# Return types
# -------------------------------------------------------------------


class Producer:
    @Marker("producer")
    def produce(self) -> object:
        return object()


class NarrowingProducer(Producer):
    def produce(self) -> str:
        return ""
