import pytest

from lazybundle.utils.exceptions import (
    BundlePropertyError,
    ConfigurationError,
    EnumError,
    InvalidEnumError,
    InvalidEnumTypeError,
    KeyNotFoundError,
    LazyBundleError,
    NumberFormatError,
    SourceUnavailableError,
    SynonymCollisionError,
    ValueFormatError,
    explain_exception,
)


def test_repr_includes_class_and_message():
    err = LazyBundleError("test message")
    assert "LazyBundleError" in repr(err)
    assert "test message" in repr(err)


def test_bundle_errors_format_bundle_key_and_reason():
    assert str(SourceUnavailableError("app.Settings", "port")) == (
        "Failed to retrieve key from bundle app.Settings, port: bundle could not be loaded"
    )
    assert str(KeyNotFoundError("app.Settings", "port")).endswith("port: key not found")


def test_number_format_error_details():
    err = NumberFormatError("app.Settings", "port", "eighty")
    assert err.details == {"bundle": "app.Settings", "key": "port", "text": "eighty", "type": "integer"}
    assert "'eighty'" in str(err)
    assert err.type_label == "integer"


def test_value_format_error_custom_label():
    err = ValueFormatError("b", "k", "maybe", type_label="boolean")
    assert "parsed as boolean" in str(err)


@pytest.mark.parametrize(
    "error, bases",
    [
        (SourceUnavailableError("b", "k"), (BundlePropertyError,)),
        (KeyNotFoundError("b", "k"), (BundlePropertyError,)),
        (NumberFormatError("b", "k", "x"), (ValueFormatError, ValueError)),
        (InvalidEnumError("bad", dict, "x"), (EnumError, ValueError)),
        (InvalidEnumTypeError("bad", dict), (EnumError, TypeError)),
        (SynonymCollisionError("dup", dict, "a", 1), (EnumError, ValueError)),
        (ConfigurationError("bad"), (LazyBundleError,)),
    ],
)
def test_hierarchy(error, bases):
    assert isinstance(error, LazyBundleError)
    for base in bases:
        assert isinstance(error, base)


def test_enum_error_details():
    err = SynonymCollisionError("dup", dict, "alias", 1)
    assert err.details == {"enum_type": "dict", "alias": "alias", "existing": 1}


def test_explain_exception():
    text = explain_exception(KeyNotFoundError("app.Settings", "port"))
    assert text.splitlines()[0].startswith("KeyNotFoundError: Failed to retrieve key")
    assert "Details:" in text
    assert explain_exception(RuntimeError("plain")) == "plain"
