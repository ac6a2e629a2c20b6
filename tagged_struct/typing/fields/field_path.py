class FieldPath(str):
    """ String representation of a path within a value tree, rooted at '$'.

    Struct fields are joined with '.', sequence indices appear as [idx] and dictionary keys as {key}. """

    ROOT = "$"

    def __new__(cls, path: str = ROOT) -> 'FieldPath':
        return super().__new__(cls, path)

    def subfield(self, field_name: str) -> 'FieldPath':
        """ Returns a new FieldPath which points to the specified struct field of the current path. """
        return FieldPath(str(self) + self.field_segment(field_name))

    def subidx(self, idx: int) -> 'FieldPath':
        """ Returns a new FieldPath which points to the specified index of an element of the current path. """
        return FieldPath(str(self) + self.idx_segment(idx))

    def subkey(self, key: str) -> 'FieldPath':
        """ Returns a new FieldPath which points to the specified dictionary key of the current path. """
        return FieldPath(str(self) + self.key_segment(key))

    @classmethod
    def join(cls, segments: list[str]) -> 'FieldPath':
        """ Builds a path from the root and the given segments, in order. """
        return cls(cls.ROOT + "".join(segments))

    @staticmethod
    def field_segment(field_name: str) -> str:
        return "." + FieldPath.escape_periods(field_name)

    @staticmethod
    def idx_segment(idx: int) -> str:
        return f"[{idx}]"

    @staticmethod
    def key_segment(key: str) -> str:
        return f"{{{FieldPath.escape_periods(str(key))}}}"

    @staticmethod
    def escape_periods(field_name: str) -> str:
        """ Escapes periods in a field name by replacing them with |||.
        This keeps field names containing periods from being read as nested fields. """
        return field_name.replace(".", "|||")
