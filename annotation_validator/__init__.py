from ._version import __version__
from .alias import AliasLink, find_alias_target, resolve_alias
from .annotation import AliasFor, Annotation, declared_annotations, field_annotations
from .assertions import SoftAssertions
from .config import DEFAULT_PARAMETER_BLACKLIST, ValidationConfig, ValidationMode
from .definition import AnnotationDefinition, ParamDefinition
from .errors import (
    AliasResolutionError,
    AnnotationAssertionError,
    ConfigurationError,
    ValidationError,
)
from .matcher import AnnotationMatcher, MatchResult
from .resolver import IntrospectionSource, MetadataResolver, MetadataSource
from .targets import (
    ConstructorRef,
    FieldRef,
    MethodRef,
    constructor_of,
    describe_target,
    field_of,
    method_of,
)
from .validation import AnnotationValidation
from .validator import validate

__all__ = [
    "validate",
    "AnnotationValidation",
    "AnnotationDefinition",
    "ParamDefinition",
    "Annotation",
    "AliasFor",
    "declared_annotations",
    "field_annotations",
    "ValidationMode",
    "ValidationConfig",
    "DEFAULT_PARAMETER_BLACKLIST",
    "MetadataResolver",
    "MetadataSource",
    "IntrospectionSource",
    "AliasLink",
    "resolve_alias",
    "find_alias_target",
    "AnnotationMatcher",
    "MatchResult",
    "SoftAssertions",
    "MethodRef",
    "FieldRef",
    "ConstructorRef",
    "method_of",
    "field_of",
    "constructor_of",
    "describe_target",
    "ValidationError",
    "ConfigurationError",
    "AnnotationAssertionError",
    "AliasResolutionError",
    "__version__",
]
