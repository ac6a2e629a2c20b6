from abc import ABC
from typing import Any, ClassVar, Self, TYPE_CHECKING

from ..serialization.vars import TYPE_ID_KEY
from ...utilities.setup_error import SetupError

if TYPE_CHECKING:
	from ..registration.type_registry import TypeRegistry


class Struct(ABC):
	""" Base class for values that keep their type across an encode/decode round trip.

	Instance attributes are the wire fields, methods are the behavior restored on decode. Register a subclass either with
	TypeRegistry.register() or with class keywords, which register into the module-level type_registry:

		class Some(Option, type_id="a30deba3-479f-4d5c-a008-cefe9200884a"):
			def __init__(self, v):
				self.v = v
	"""
	__type_id__: ClassVar[str | None] = None
	__schema__: ClassVar[dict[str, str] | None] = None

	# Set on restored values only; a slot, so it never shows up among the own fields
	__slots__ = ("_decoded_type_id",)

	def __init_subclass__(cls, type_id: str | None = None, schema: dict[str, Any] | None = None, registry: 'TypeRegistry | None' = None, **kwargs: Any) -> None:
		super().__init_subclass__(**kwargs)

		# A subclass never inherits its parent's wire identity
		cls.__type_id__ = None
		cls.__schema__ = None

		if type_id is None:
			if schema is not None:
				raise SetupError(f"Struct '{cls.__name__}' declares a schema but no type_id to register it under.")
			return

		if registry is None:
			from .. import type_registry as registry
		registry.register(cls, type_id, schema)

	@property
	def type_id(self) -> str | None:
		""" The type id this value was restored from, or else the one its class was last registered with.
		Never stored as an instance field. """
		decoded_type_id = getattr(self, "_decoded_type_id", None)
		if decoded_type_id is not None:
			return decoded_type_id
		return type(self).__type_id__

	def to_fields(self) -> dict[str, Any]:
		""" Returns the own fields written to the wire, in attribute order. Override to hide derived state. """
		return dict(vars(self))

	@classmethod
	def from_fields(cls, fields: dict[str, Any]) -> Self:
		""" Restores an instance from decoded fields without running __init__. Override for custom construction. """
		instance = cls.__new__(cls)
		vars(instance).update(fields)
		return instance

	def __eq__(self, other: object) -> bool:
		if type(other) is not type(self):
			return NotImplemented
		return vars(self) == vars(other)

	__hash__ = None # type: ignore

	def __repr__(self) -> str:
		fields = ", ".join(f"{field_name}={field_value!r}" for field_name, field_value in vars(self).items())
		return f"{type(self).__name__}({fields})"

def struct_to_fields(obj: Any) -> dict[str, Any]:
	""" Returns the own fields of any registered value. Plain classes contribute their instance __dict__. """
	if isinstance(obj, Struct):
		fields = obj.to_fields()
	else:
		fields = dict(vars(obj))

	if TYPE_ID_KEY in fields:
		from ...utilities.encoding_error import EncodingError
		raise EncodingError(f"Value of type '{type(obj).__name__}' has an own field named '{TYPE_ID_KEY}', which is reserved for the type id.")
	return fields

def struct_from_fields(cls: type, fields: dict[str, Any], type_id: str | None = None) -> Any:
	""" Restores a value of a registered class from its decoded own fields, remembering the type id it came from. """
	if issubclass(cls, Struct):
		instance = cls.from_fields(fields)
		if isinstance(instance, Struct) and type_id is not None:
			instance._decoded_type_id = type_id
		return instance

	instance = cls.__new__(cls)
	vars(instance).update(fields)
	return instance

def type_id_of(value: Any, registry: 'TypeRegistry | None' = None) -> str | None:
	""" Returns the type id of any value: the id a Struct was restored from if it has one, otherwise the id its exact
	class holds in the registry (the module-level type_registry by default). None for unregistered values. """
	if isinstance(value, Struct):
		decoded_type_id = getattr(value, "_decoded_type_id", None)
		if decoded_type_id is not None:
			return decoded_type_id

	if registry is None:
		from .. import type_registry as registry
	return registry.lookup_type_id(type(value))
