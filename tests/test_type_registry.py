"""Tests for TypeRegistry registration and lookups."""

import logging
import threading
import types
import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest

from tagged_struct import AUTO, FieldType, SetupError, Struct, TypeRegistry, auto_type_id, is_type_id, new_type_id, set_log_level, set_logger

from .option_types import NOTHING_ID, SOME_ID, UNKNOWN_ID, Nothing, Option, Sample, Some


def test_register_maps_both_directions(registry):
    """A registered class is found by its type id and vice versa."""
    assert registry.lookup_descriptor(SOME_ID) is Some
    assert registry.lookup_type_id(Some) == SOME_ID
    assert registry.lookup_descriptor(NOTHING_ID) is Nothing
    assert registry.lookup_type_id(Nothing) == NOTHING_ID


def test_lookups_are_total(registry):
    """Unknown keys return None instead of raising."""
    assert registry.lookup_descriptor(UNKNOWN_ID) is None
    assert registry.lookup_descriptor(["not", "hashable"]) is None
    assert registry.lookup_type_id(dict) is None
    assert registry.lookup_type_id(Option) is None


def test_lookup_type_id_ignores_parent_registration(registry):
    """A subclass of a registered class is not itself registered."""

    class LoudSome(Some):
        pass

    assert registry.lookup_type_id(LoudSome) is None
    assert LoudSome.__type_id__ is None


def test_register_same_pair_twice_is_idempotent(registry, caplog):
    """Re-registering an identical pair changes nothing and logs nothing."""
    with caplog.at_level(logging.WARNING, logger="tagged_struct"):
        registry.register(Some, SOME_ID)

    assert len(registry) == 3
    assert registry.lookup_type_id(Some) == SOME_ID
    assert caplog.records == []


def test_reregistering_class_with_new_id_last_write_wins(registry, caplog):
    """The newest type id for a class replaces the old one."""
    new_id = new_type_id()
    with caplog.at_level(logging.WARNING, logger="tagged_struct"):
        registry.register(Some, new_id)

    assert registry.lookup_type_id(Some) == new_id
    assert registry.lookup_descriptor(new_id) is Some
    assert registry.lookup_descriptor(SOME_ID) is None
    assert Some.__type_id__ == new_id
    assert any("re-registered" in record.message for record in caplog.records)


def test_reusing_type_id_for_another_class_last_write_wins(registry, caplog):
    """The newest class registered under a type id replaces the old one."""

    class Other(Struct):
        pass

    with caplog.at_level(logging.WARNING, logger="tagged_struct"):
        registry.register(Other, SOME_ID)

    assert registry.lookup_descriptor(SOME_ID) is Other
    assert registry.lookup_type_id(Some) is None
    assert any("reassigned" in record.message for record in caplog.records)


def test_displaced_class_stops_reporting_type_id(registry):
    """A class whose type id was handed to another class no longer claims it."""

    class Other(Struct):
        pass

    registry.register(Other, SOME_ID)

    assert Some.__type_id__ is None
    assert Some(1).type_id is None
    assert Other().type_id == SOME_ID


def test_register_accepts_uuid_objects(empty_registry):
    """uuid.UUID type ids are stored in canonical string form."""

    class Thing(Struct):
        pass

    type_id = uuid.UUID("5a0c3f1e-2b7d-4e8a-9c61-0f3d2e4b5a67")
    empty_registry.register(Thing, type_id)

    assert empty_registry.lookup_type_id(Thing) == "5a0c3f1e-2b7d-4e8a-9c61-0f3d2e4b5a67"
    assert empty_registry.lookup_descriptor(str(type_id)) is Thing


def test_register_does_not_validate_type_id_syntax(empty_registry):
    """Any string is accepted as a type id."""

    class Thing(Struct):
        pass

    empty_registry.register(Thing, "thing")

    assert empty_registry.lookup_descriptor("thing") is Thing


def test_register_auto_derives_stable_type_id(empty_registry):
    """AUTO type ids are canonical UUIDs derived from the class name."""

    class Thing(Struct):
        pass

    empty_registry.register(Thing, AUTO)
    type_id = empty_registry.lookup_type_id(Thing)

    assert is_type_id(type_id)
    assert type_id == auto_type_id(Thing)

    other_registry = TypeRegistry.initialize()
    other_registry.register(Thing, AUTO)
    assert other_registry.lookup_type_id(Thing) == type_id


def test_register_plain_class(empty_registry):
    """Classes that do not derive from Struct can be registered too."""

    class Plain:
        pass

    empty_registry.register(Plain, SOME_ID)

    assert empty_registry.lookup_type_id(Plain) == SOME_ID
    assert not hasattr(Plain, "__type_id__")


def test_register_stores_schema(empty_registry):
    """A schema is validated, normalized to strings and exposed on the class."""

    class Node(Struct):
        pass

    empty_registry.register(Node, NOTHING_ID, {"value": FieldType.NUMBER, "label": "string", "next": SOME_ID})

    expected = {"value": "number", "label": "string", "next": SOME_ID}
    assert empty_registry.lookup_schema(Node) == expected
    assert Node.__schema__ == expected


def test_reregistering_without_schema_keeps_schema(empty_registry):
    class Node(Struct):
        pass

    empty_registry.register(Node, NOTHING_ID, {"value": "number"})
    empty_registry.register(Node, NOTHING_ID)

    assert empty_registry.lookup_schema(Node) == {"value": "number"}


def test_lookup_schema_without_schema(registry):
    assert registry.lookup_schema(Some) is None
    assert registry.lookup_schema(dict) is None


@pytest.mark.parametrize("schema", [
    {"value": "decimal"},
    {"value": 3},
    {1: "number"},
    ["value"],
])
def test_register_rejects_invalid_schema(empty_registry, schema):
    """A malformed schema raises SetupError and registers nothing."""

    class Node(Struct):
        pass

    with pytest.raises(SetupError):
        empty_registry.register(Node, NOTHING_ID, schema)

    assert len(empty_registry) == 0
    assert empty_registry.lookup_type_id(Node) is None


def test_contains_len_and_registered_types(registry):
    assert Some in registry
    assert Option not in registry
    assert len(registry) == 3
    assert set(registry.registered_types()) == {Some, Nothing, Sample}


def test_copy_is_independent(registry):
    """Registrations on a copy do not leak back into the original."""

    class Extra(Struct):
        pass

    copied = registry.copy()
    copied.register(Extra, new_type_id())

    assert Extra in copied
    assert Extra not in registry
    assert copied.lookup_type_id(Some) == SOME_ID


def test_set_logger_receives_registry_warnings(registry):
    """Warnings go to the logger installed with set_logger()."""
    records = []

    class ListHandler(logging.Handler):
        def emit(self, record):
            records.append(record)

    custom_logger = logging.getLogger("tests.custom")
    custom_logger.addHandler(ListHandler())
    custom_logger.setLevel(logging.WARNING)
    set_logger(custom_logger)

    registry.register(Some, new_type_id())

    assert len(records) == 1
    assert records[0].levelno == logging.WARNING


def test_set_log_level_enables_registration_debug(empty_registry, caplog):
    set_log_level(logging.DEBUG)

    class Thing(Struct):
        pass

    with caplog.at_level(logging.DEBUG):
        empty_registry.register(Thing, NOTHING_ID)

    assert logging.getLogger("tagged_struct").level == logging.DEBUG
    assert any("Registered type 'Thing'" in record.message for record in caplog.records)


def test_concurrent_registration_and_lookup(empty_registry):
    """Registrations from many threads all land, while readers keep getting consistent answers."""
    generated = [types.new_class(f"Generated{idx}", (Struct,)) for idx in range(200)]
    type_ids = [new_type_id() for _ in generated]
    stop = threading.Event()
    inconsistencies = []

    def read_continuously():
        while not stop.is_set():
            for type_, type_id in zip(generated, type_ids):
                found = empty_registry.lookup_descriptor(type_id)
                if found is not None and found is not type_:
                    inconsistencies.append(type_id)

    reader = threading.Thread(target=read_continuously)
    reader.start()
    try:
        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(empty_registry.register, generated, type_ids))
    finally:
        stop.set()
        reader.join()

    assert len(empty_registry) == len(generated)
    assert inconsistencies == []
    for type_, type_id in zip(generated, type_ids):
        assert empty_registry.lookup_type_id(type_) == type_id


def test_registry_encode_and_decode_shortcuts(registry):
    text = registry.encode(Some(5))
    restored = registry.decode(text)

    assert isinstance(restored, Some)
    assert restored.unwrap_or(0) == 5


def test_fresh_registry_is_empty():
    registry = TypeRegistry.initialize()

    assert len(registry) == 0
    assert registry.registered_types() == []
