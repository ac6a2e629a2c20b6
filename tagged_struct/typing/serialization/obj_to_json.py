import math
from typing import Any, TYPE_CHECKING

from ..struct.struct import struct_to_fields
from .vars import TYPE_ID_KEY
from ...document.document_context import DocumentContext
from ...utilities.encoding_error import EncodingError
from ...utilities.unregistered_type_error import UnregisteredTypeError

if TYPE_CHECKING:
	from ..registration.type_registry import TypeRegistry

# (value, document_context, output container, slot in the output container)
_Pending = tuple[Any, DocumentContext, Any, Any]


def obj_to_json(obj: Any, registry: 'TypeRegistry | None' = None, document_context: DocumentContext | None = None) -> Any:
	"""
	Converts a Python value into a JSON-compatible tree.

	Instances of registered types become tagged documents: {"_": <type id>, <own field>: <value>, ...}, with every field converted
	recursively. Lists and tuples become lists, dicts are walked value by value. Anything else must be None, bool, int, float or str.

	The walk keeps its own stack, so nesting depth is not limited by the interpreter's recursion limit.
	"""
	if registry is None:
		from .. import type_registry as registry
	if document_context is None:
		document_context = DocumentContext(root_type_id=registry.lookup_type_id(type(obj)))

	result: list[Any] = [None]
	markers: set[int] = set()
	# Holds pending values, plus the int markers of containers whose children are still being converted
	pending: list[_Pending | int] = [(obj, document_context, result, 0)]
	while pending:
		entry = pending.pop()
		if isinstance(entry, int):
			markers.discard(entry)
			continue
		value, value_context, output, slot = entry
		output[slot] = _convert(value, registry, value_context, markers, pending)

	return result[0]

def _convert(obj: Any, registry: 'TypeRegistry', document_context: DocumentContext, markers: set[int], pending: list[_Pending | int]) -> Any:
	""" Converts a single node. Containers come back empty-slotted, with their children queued on pending. """
	# Handle types from specific (complex) to general (simple)
	type_id = registry.lookup_type_id(type(obj))
	if type_id is not None:
		_enter(obj, markers, document_context, pending)
		output: Any = { TYPE_ID_KEY: type_id } # The type id always comes first
		children = [(field_value, document_context.subpath(field_name), field_name) for field_name, field_value in struct_to_fields(obj).items()]

	# Primitives are matched on exact type. Subclasses (enums, str subclasses) are not part of the wire format.
	elif obj is None or type(obj) in (bool, int, str):
		return obj

	elif type(obj) is float:
		if not math.isfinite(obj):
			raise EncodingError(f"Cannot encode non-finite number {obj!r}; JSON has no representation for it.\n{document_context}")
		return obj

	elif type(obj) in (list, tuple):
		_enter(obj, markers, document_context, pending)
		output = [None] * len(obj)
		children = [(item, document_context.subidx(idx), idx) for idx, item in enumerate(obj)]

	elif type(obj) is dict:
		_enter(obj, markers, document_context, pending)
		output = {}
		children = []
		for key, value in obj.items():
			if not isinstance(key, str):
				raise EncodingError(f"Cannot encode dict key {key!r} of type {type(key).__name__}; keys must be strings.\n{document_context}")
			children.append((value, document_context.subkey(key), key))

	else:
		raise UnregisteredTypeError(type(obj), f"Type '{type(obj).__name__}' is not registered for serialization.\n{document_context}")

	if isinstance(output, dict):
		# Reserve the keys now so the output keeps field order whatever order the children finish in
		output.update(dict.fromkeys(slot for _, _, slot in children))
	pending.extend((value, value_context, output, slot) for value, value_context, slot in reversed(children))
	return output

def _enter(obj: Any, markers: set[int], document_context: DocumentContext, pending: list[_Pending | int]) -> None:
	""" Marks a container as being on the current path until all of its children are converted. """
	marker = id(obj)
	if marker in markers:
		raise EncodingError(f"Circular reference detected.\n{document_context}")
	markers.add(marker)
	pending.append(marker)
