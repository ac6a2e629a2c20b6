"""
Type Registration Module

This module provides a centralized type registry for managing all serializable types
in the application. The module maintains a stateful `type_registry` object, used by
encode/decode whenever no registry is passed explicitly.
"""

from .registration.type_registry import TypeRegistry
from .registration.type_id import new_type_id, is_type_id, auto_type_id
from .fields.field_type import FieldType, Schema
from .struct.struct import Struct, type_id_of
from .serialization.vars import TYPE_ID_KEY, get_type_id, remove_type_id


# Module-level stateful variable, filled in by register() calls (or Struct class keywords) at import time
type_registry: TypeRegistry = TypeRegistry.initialize()
