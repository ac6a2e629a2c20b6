from typing import Any


TYPE_ID_KEY = "_"
""" Reserved key holding the type id in every tagged document. """

def get_type_id(json_tree: Any) -> str | None:
    """ Get the type_id from a decoded JSON node, if it asserts one. """

    if not isinstance(json_tree, dict):
        return None

    type_id = json_tree.get(TYPE_ID_KEY, None)
    if not isinstance(type_id, str):
        return None

    return type_id

def remove_type_id(json_tree: dict) -> dict:
    """ Removes the type id from the decoded JSON node, if present. """
    if TYPE_ID_KEY in json_tree:
        del json_tree[TYPE_ID_KEY]
    return json_tree
