"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from annotation_validator import (
    AnnotationMatcher,
    IntrospectionSource,
    MetadataResolver,
    SoftAssertions,
    ValidationConfig,
    ValidationMode,
)

# =============================================================================
# Fixtures: Resolution
# =============================================================================


@pytest.fixture
def source():
    """The default introspection-backed metadata source."""
    return IntrospectionSource()


@pytest.fixture
def resolver(source):
    """A resolver matching methods by name and parameter types."""
    return MetadataResolver(source)


# =============================================================================
# Fixtures: Matching
# =============================================================================


@pytest.fixture
def softly():
    """A fresh mismatch collector."""
    return SoftAssertions()


@pytest.fixture
def make_matcher(source):
    """Build a matcher for the given mode."""

    def _make(mode: ValidationMode = ValidationMode.DEFAULT, **kwargs) -> AnnotationMatcher:
        return AnnotationMatcher(ValidationConfig(mode=mode, **kwargs), source)

    return _make
