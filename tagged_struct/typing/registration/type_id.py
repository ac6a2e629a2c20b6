import re
import uuid


TYPE_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")
""" Canonical textual form of a type id: 8-4-4-4-12 hex digits. """

AUTO_TYPE_ID_NAMESPACE = uuid.UUID("6f1c2b5e-8d3a-4f7e-9b0c-2a4d6e8f1b3c")
""" Namespace for type ids derived from class names. Changing this changes every AUTO type id. """


def new_type_id() -> str:
    """ Generates a fresh random type id. Paste the result into your register() call, it must stay stable once values are persisted. """
    return str(uuid.uuid4())

def is_type_id(value: object) -> bool:
    """ Returns True if the value is a string in canonical type id form. """
    return isinstance(value, str) and TYPE_ID_PATTERN.match(value) is not None

def auto_type_id(cls: type) -> str:
    """ Derives a deterministic type id from the class's module and qualified name. """
    return str(uuid.uuid5(AUTO_TYPE_ID_NAMESPACE, f"{cls.__module__}.{cls.__qualname__}"))
