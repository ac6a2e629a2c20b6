from enum import StrEnum
from typing import Any, Mapping

from ..registration.type_id import is_type_id
from ...utilities.setup_error import SetupError


class FieldType(StrEnum):
	""" Declared JSON shape of a Struct field. A schema value may also be the type id of another registered type. """
	NULL = "null"
	BOOLEAN = "boolean"
	NUMBER = "number"
	STRING = "string"
	ARRAY = "array"
	OBJECT = "object"

FIELD_TYPE_VALUES = frozenset(field_type.value for field_type in FieldType)

Schema = dict[str, str]

def validate_schema(schema: Mapping[Any, Any], type_name: str) -> Schema:
	""" Validates a schema declaration and returns a plain copy of it.
	Only the declaration is checked. Field values are never validated against the schema. """
	if not isinstance(schema, Mapping):
		raise SetupError(f"Schema for '{type_name}' must be a mapping of field names to field types. Instead received {type(schema).__name__}.")

	validated: Schema = {}
	for field_name, field_type in schema.items():
		if not isinstance(field_name, str):
			raise SetupError(f"Schema for '{type_name}' has a non-string field name {field_name!r}.")

		if isinstance(field_type, FieldType):
			validated[field_name] = field_type.value
		elif isinstance(field_type, str) and (field_type in FIELD_TYPE_VALUES or is_type_id(field_type)):
			validated[field_name] = field_type
		else:
			raise SetupError(f"Schema for '{type_name}' declares field '{field_name}' with unknown field type {field_type!r}. Expected one of {', '.join(FieldType)} or a type id.")

	return validated
