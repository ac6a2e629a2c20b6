from __future__ import annotations
from dataclasses import dataclass, field

from ..typing.fields.field_path import FieldPath


@dataclass(frozen=True, eq=False)
class DocumentContext:
    """ Tracks where an encode or decode walk currently is. Printed into error and log messages.

    Each context links to its parent and holds only its own path segment, so descending one level is constant time
    no matter how deep the tree is. The full path is joined only when it is asked for. """

    root_type_id: str | None = None
    """ The type id of the root value, if the root is a tagged value. """

    parent: DocumentContext | None = field(default=None, repr=False)

    segment: str = ""
    """ This node's part of the path, e.g. '.name', '[3]' or '{key}'. Empty at the root. """

    @property
    def document_path(self) -> FieldPath:
        """ The path of the current node relative to the root of the value passed to encode/decode.
        List elements will be returned as [idx]. """
        segments = []
        context: DocumentContext | None = self
        while context is not None:
            segments.append(context.segment)
            context = context.parent
        segments.reverse()
        return FieldPath.join(segments)

    def child(self, segment: str) -> DocumentContext:
        return DocumentContext(root_type_id=self.root_type_id, parent=self, segment=segment)

    def subpath(self, field_name: str) -> DocumentContext:
        """ Returns a new DocumentContext pointing at a struct field. """
        return self.child(FieldPath.field_segment(field_name))

    def subidx(self, idx: int) -> DocumentContext:
        """ Returns a new DocumentContext pointing at a sequence element. """
        return self.child(FieldPath.idx_segment(idx))

    def subkey(self, key: str) -> DocumentContext:
        """ Returns a new DocumentContext pointing at a dictionary entry. """
        return self.child(FieldPath.key_segment(key))

    def __str__(self) -> str:
        """ Printable to logs. """
        output = f"Document path: {self.document_path}"
        if self.root_type_id:
            output += f"\nRoot type id: {self.root_type_id}"
        return output
