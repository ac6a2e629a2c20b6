"""
Tagged types for JSON.

Values of registered classes are written as tagged documents ({"_": "<type id>", ...fields}) and
restored on decode into instances of the same class, methods included, with no type argument.
"""

from .typing import type_registry, TypeRegistry, Struct, type_id_of, FieldType, Schema, TYPE_ID_KEY, new_type_id, is_type_id, auto_type_id
from .typing.serialization.codec import encode, decode, CodecConfig
from .typing.serialization.obj_to_json import obj_to_json
from .typing.serialization.json_to_obj import json_to_obj
from .document.document_context import DocumentContext
from .utilities.serde_error import SerdeError
from .utilities.unregistered_type_error import UnregisteredTypeError
from .utilities.malformed_input_error import MalformedInputError
from .utilities.encoding_error import EncodingError
from .utilities.setup_error import SetupError
from .utilities.special_values import AUTO
from .utilities.logger import set_logger, set_log_level


def register(descriptor: type, type_id: str, schema: dict[str, str] | None = None) -> None:
    """ Registers a type with the module-level type_registry. """
    type_registry.register(descriptor, type_id, schema)
