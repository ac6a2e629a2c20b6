from typing import Any, TYPE_CHECKING

from ..struct.struct import struct_from_fields
from .vars import get_type_id, remove_type_id
from ...document.document_context import DocumentContext
from ...utilities.logger import get_logger

if TYPE_CHECKING:
	from ..registration.type_registry import TypeRegistry


def json_to_obj(json_tree: Any, registry: 'TypeRegistry | None' = None, document_context: DocumentContext | None = None) -> Any:
	""" Restores registered types inside a decoded JSON tree.

	The walk is bottom-up: a dict's values are restored before the dict itself is inspected, so nested tagged values
	are already live by the time their enclosing document is converted. It keeps its own stack, so nesting depth is not
	limited by the interpreter's recursion limit.

	A dict whose "_" names a registered type id becomes an instance of that type, with "_" dropped from its fields.
	A dict whose type id is unknown is returned as a plain dict, "_" included. The input tree is not modified. """
	if registry is None:
		from .. import type_registry as registry
	if document_context is None:
		document_context = DocumentContext(root_type_id=get_type_id(json_tree))

	result: list[Any] = [None]
	# (children restored?, node, document_context, output container, slot in the output container)
	pending: list[tuple[bool, Any, DocumentContext, Any, Any]] = [(False, json_tree, document_context, result, 0)]
	while pending:
		children_restored, node, node_context, output, slot = pending.pop()

		if children_restored:
			output[slot] = _restore_document(node, registry, node_context)

		elif isinstance(node, list):
			restored_list: list[Any] = [None] * len(node)
			output[slot] = restored_list
			pending.extend((False, element, node_context.subidx(idx), restored_list, idx) for idx, element in reversed(list(enumerate(node))))

		elif isinstance(node, dict):
			# Restore the children first; the document itself is converted once they are all done
			restored = dict.fromkeys(node)
			pending.append((True, restored, node_context, output, slot))
			pending.extend((False, value, node_context.subkey(key), restored, key) for key, value in reversed(node.items()))

		else:
			output[slot] = node

	return result[0]

def _restore_document(restored: dict[str, Any], registry: 'TypeRegistry', document_context: DocumentContext) -> Any:
	type_id = get_type_id(restored)
	if type_id is None:
		return restored

	descriptor = registry.lookup_descriptor(type_id)
	if descriptor is None:
		# Leave foreign documents untouched, type id included
		get_logger().debug(f"Unrecognized type id '{type_id}', leaving document as a plain dict.\n{document_context}")
		return restored

	return struct_from_fields(descriptor, remove_type_id(restored), type_id)
