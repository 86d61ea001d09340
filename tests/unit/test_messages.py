from lazybundle import messages
from lazybundle.bundles import registry


def test_get_unknown_key_returns_placeholder():
    assert messages.get("test_get_unknownKey()") == "[test_get_unknownKey()]"


def test_get_known_key():
    assert messages.get("TYPE_CANNOT_BE_NULL") == "Type cannot be None"
    assert messages.get("EnumWrapper.SYNONYM_ALREADY_EXISTS") == "Synonym already exists: "


def test_catalog_is_served_by_default_registry():
    assert messages.bundle() is registry.for_name(messages.BUNDLE_NAME)


def test_catalog_override_falls_back_per_key(monkeypatch, tmp_path):
    (tmp_path / "lazybundle").mkdir()
    (tmp_path / "lazybundle" / "Messages.toml").write_text(
        'INVALID_ENUM = "Unknown value: "\n', encoding="utf-8"
    )
    monkeypatch.setenv("LAZYBUNDLE_PATH", str(tmp_path))
    monkeypatch.setattr(registry, "_DEFAULT_REGISTRY", None)

    assert messages.get("INVALID_ENUM") == "Unknown value: "
    assert messages.get("TYPE_CANNOT_BE_NULL") == "Type cannot be None"
    assert messages.get("absent.key") == "[absent.key]"


def test_get_survives_malformed_cache_config(monkeypatch):
    monkeypatch.setenv("LAZYBUNDLE_CACHE", "max_items=lots")
    monkeypatch.setattr(registry, "_DEFAULT_REGISTRY", None)

    assert messages.get("INVALID_ENUM") == "Invalid enum name: "
    assert messages.get("absent.key") == "[absent.key]"
    assert registry._DEFAULT_REGISTRY is None
