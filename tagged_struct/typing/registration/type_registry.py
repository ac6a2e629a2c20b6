from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Mapping, TYPE_CHECKING
from uuid import UUID
from bidict import bidict

from .type_id import auto_type_id
from ..fields.field_type import Schema, validate_schema
from ...utilities.logger import get_logger
from ...utilities.special_values import AUTO

if TYPE_CHECKING:
    from ..serialization.codec import CodecConfig


@dataclass
class TypeRegistry:
    """ A registry of all types that can be encoded to and decoded from tagged JSON documents.

    Registration is expected to happen once per type during start-up. Writes are serialized by a lock and
    publish a fresh copy of the maps, so lookups never lock and never observe a half-applied registration.

    NOTE: Duplicate registration is not an error. The last registration for a type id or for a type wins silently
    (a warning is logged). Register each type exactly once. """

    type_id_dict: bidict[str, type] = field(default_factory=bidict)
    """ Maps type ids -> types. The inverse maps types -> type ids, keyed by class identity. """

    schema_dict: dict[str, Schema] = field(default_factory=dict)
    """ Optional field schemas keyed by type id. Stored for introspection, never enforced. """

    _lock: Lock = field(default_factory=Lock, init=False, repr=False, compare=False)

    @classmethod
    def initialize(cls) -> 'TypeRegistry':
        return TypeRegistry(
            type_id_dict=bidict(),
            schema_dict={}
        )

    def register(self, descriptor: type, type_id: str | UUID, schema: Mapping[str, Any] | None = None) -> None:
        """ Associates a type with a type id in both directions.

        Args:
            descriptor: The class whose instances will be tagged with type_id.
            type_id: Canonical UUID string (or uuid.UUID). Pass AUTO to derive one from the class name.
            schema: Optional mapping of field name -> FieldType (or the type id of another registered type).
        """
        from ..struct.struct import Struct

        if type_id == AUTO:
            type_id = auto_type_id(descriptor)
        type_id = str(type_id)

        validated_schema = validate_schema(schema, getattr(descriptor, "__name__", repr(descriptor))) if schema is not None else None

        with self._lock:
            previous_descriptor = self.type_id_dict.get(type_id)
            previous_type_id = self.type_id_dict.inverse.get(descriptor)

            if previous_descriptor is not None and previous_descriptor is not descriptor:
                get_logger().warning(f"Type id '{type_id}' was registered to '{previous_descriptor.__name__}' and is now reassigned to '{descriptor.__name__}'.")
            if previous_type_id is not None and previous_type_id != type_id:
                get_logger().warning(f"Type '{descriptor.__name__}' was registered with type id '{previous_type_id}' and is now re-registered with '{type_id}'. Documents tagged '{previous_type_id}' will no longer decode into it.")

            # Copy, update, then swap so concurrent readers only ever see complete snapshots
            type_id_dict = self.type_id_dict.copy()
            type_id_dict.forceput(type_id, descriptor)

            schema_dict = dict(self.schema_dict)
            if previous_type_id is not None and previous_type_id != type_id:
                schema_dict.pop(previous_type_id, None)
            if previous_descriptor is not None and previous_descriptor is not descriptor:
                schema_dict.pop(type_id, None)
            if validated_schema is not None:
                schema_dict[type_id] = validated_schema

            self.schema_dict = schema_dict
            self.type_id_dict = type_id_dict

        # A class that lost its type id to another class no longer reports it
        if previous_descriptor is not None and previous_descriptor is not descriptor and _is_struct(previous_descriptor, Struct) \
                and previous_descriptor.__type_id__ == type_id:
            previous_descriptor.__type_id__ = None
            previous_descriptor.__schema__ = None

        # Expose the type id (and schema) on the class so newly constructed values can report it
        if _is_struct(descriptor, Struct):
            descriptor.__type_id__ = type_id
            if validated_schema is not None:
                descriptor.__schema__ = validated_schema

        get_logger().debug(f"Registered type '{getattr(descriptor, '__name__', descriptor)}' with type id '{type_id}'.")

    def lookup_descriptor(self, type_id: str) -> type | None:
        """ Returns None if no type is registered with the type id. """
        try:
            return self.type_id_dict.get(type_id)
        except TypeError: # Unhashable lookups simply aren't registered
            return None

    def lookup_type_id(self, descriptor: type) -> str | None:
        """ Return the type id for the type. Parent classes are not consulted. """
        try:
            return self.type_id_dict.inverse.get(descriptor)
        except TypeError:
            return None

    def lookup_schema(self, descriptor: type) -> Schema | None:
        """ Returns the schema the type was registered with, if any. """
        type_id = self.lookup_type_id(descriptor)
        if type_id is None:
            return None
        return self.schema_dict.get(type_id)

    def registered_types(self) -> list[type]:
        """ Returns all registered types. """
        return list(self.type_id_dict.values())

    def copy(self) -> 'TypeRegistry':
        """ Returns an independent registry seeded with the current registrations. """
        return TypeRegistry(
            type_id_dict=self.type_id_dict.copy(),
            schema_dict=dict(self.schema_dict)
        )

    def encode(self, obj: Any, config: 'CodecConfig | None' = None) -> str:
        """ Wraps encode for easy access. """
        from ..serialization.codec import encode
        return encode(obj, registry=self, config=config)

    def decode(self, text: str | bytes | bytearray) -> Any:
        """ Wraps decode for easy access. """
        from ..serialization.codec import decode
        return decode(text, registry=self)

    def __contains__(self, descriptor: object) -> bool:
        return self.lookup_type_id(descriptor) is not None # type: ignore

    def __len__(self) -> int:
        return len(self.type_id_dict)

def _is_struct(descriptor: Any, struct_type: type) -> bool:
    return isinstance(descriptor, type) and issubclass(descriptor, struct_type)
