import pytest

from annotation_validator import (
    AliasResolutionError,
    AnnotationAssertionError,
    ConfigurationError,
    SoftAssertions,
    ValidationError,
)

# -------------------------------------------------------------------
# Exception hierarchy
# -------------------------------------------------------------------


@pytest.mark.parametrize(
    "error_class, builtin",
    [
        (ConfigurationError, ValueError),
        (AliasResolutionError, LookupError),
        (AnnotationAssertionError, AssertionError),
    ],
)
def test_errors_extend_validation_error(error_class, builtin):
    assert issubclass(error_class, ValidationError)
    assert issubclass(error_class, builtin)


def test_enhanced_message():
    error = ValidationError(
        "Mismatch",
        suggestions=["Check the value"],
        context={"expected": "a", "actual": "b", "artifact_name": "Marker"},
    )
    assert error.message == "Mismatch"
    assert str(error) == (
        "Mismatch\n"
        "  Expected: a\n"
        "  Actual: b\n"
        "  Artifact: Marker\n"
        "  Suggestions:\n"
        "    • Check the value"
    )


def test_plain_message():
    error = ConfigurationError("Broken")
    assert str(error) == "Broken"
    assert error.suggestions == []
    assert error.context == {}


def test_assertion_error_payload():
    error = AnnotationAssertionError(["first", "second"], "target", "class mod.Target")
    assert error.errors == ["first", "second"]
    assert error.annotated_object == "target"
    assert error.description == "class mod.Target"
    assert str(error) == (
        "\nError on Validating class mod.Target\n"
        "\nThe following 2 assertions failed:\n"
        "1) first\n"
        "2) second"
    )


def test_assertion_error_describes_object_by_default():
    error = AnnotationAssertionError(["only"], 42)
    assert "Error on Validating 42" in str(error)
    assert "The following 1 assertion failed:" in str(error)


# -------------------------------------------------------------------
# Soft assertions
# -------------------------------------------------------------------


def test_soft_assertions_collect_in_order(softly):
    softly.record("first")
    assert softly.check(True, "ignored")
    assert not softly.check(False, "second")

    assert softly.errors == ["first", "second"]
    assert len(softly) == 2


def test_soft_assertions_raise_once(softly):
    softly.record("first")
    softly.record("second")
    with pytest.raises(AnnotationAssertionError) as excinfo:
        softly.assert_all("target", "target description")
    assert excinfo.value.errors == ["first", "second"]
    assert excinfo.value.description == "target description"


def test_soft_assertions_without_errors_do_not_raise():
    SoftAssertions().assert_all("target")


def test_errors_property_is_a_copy(softly):
    softly.errors.append("leak")
    assert len(softly) == 0
