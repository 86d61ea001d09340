import enum
import threading

import pytest

from lazybundle.enums import EnumRegistry, EnumWrapper, for_enum
from lazybundle.utils.exceptions import InvalidEnumTypeError


class Color(enum.Enum):
    RED = "r"
    LIGHT_BLUE = "lb"


class NotAnEnum:
    pass


def test_for_type_should_return_singleton(enum_registry):
    wrapper = enum_registry.for_type(Color)
    assert isinstance(wrapper, EnumWrapper)
    assert enum_registry.for_type(Color) is wrapper
    assert wrapper.enum_type is Color


def test_synonyms_persist_across_requests(enum_registry):
    enum_registry.for_type(Color).set_synonym("crimson", Color.RED)
    assert enum_registry.for_type(Color).value_of("crimson") is Color.RED


def test_non_enumerable_types_are_rejected_and_not_registered(enum_registry):
    with pytest.raises(InvalidEnumTypeError):
        enum_registry.for_type(NotAnEnum)
    assert NotAnEnum not in enum_registry
    assert len(enum_registry) == 0


@pytest.mark.parametrize("bogus", [Color.RED, "Color", 3, [Color]])
def test_non_type_arguments_are_rejected(enum_registry, bogus):
    with pytest.raises(InvalidEnumTypeError):
        enum_registry.for_type(bogus)


def test_registry_lists_types(enum_registry):
    enum_registry.for_type(Color)
    assert enum_registry.types() == (Color,)
    assert Color in enum_registry
    assert [Color] not in enum_registry


def test_concurrent_first_requests_yield_one_wrapper():
    reg = EnumRegistry()
    barrier = threading.Barrier(6)
    seen = []

    def request():
        barrier.wait(timeout=5)
        seen.append(reg.for_type(Color))

    threads = [threading.Thread(target=request) for _ in range(6)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    assert len(seen) == 6
    assert all(wrapper is seen[0] for wrapper in seen)


def test_module_level_for_enum_uses_default_registry():
    assert for_enum(Color) is for_enum(Color)
    assert for_enum(Color).value_of("lightblue") is Color.LIGHT_BLUE


def test_none_type_reports_missing_type(enum_registry):
    with pytest.raises(InvalidEnumTypeError, match="Type cannot be None") as excinfo:
        enum_registry.for_type(None)
    assert excinfo.value.details["enum_type"] == "None"
    assert len(enum_registry) == 0
