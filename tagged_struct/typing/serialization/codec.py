import json
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from .json_to_obj import json_to_obj
from .obj_to_json import obj_to_json
from ...utilities.encoding_error import EncodingError
from ...utilities.malformed_input_error import MalformedInputError

if TYPE_CHECKING:
    from ..registration.type_registry import TypeRegistry


@dataclass(frozen=True)
class CodecConfig:
    """ Formatting options for encode(). None of them change what decode() accepts. """

    indent: int | str | None = None
    """ None writes compact JSON; an int or string pretty-prints with that indent. """

    ensure_ascii: bool = False
    """ Escape non-ASCII characters as \\uXXXX. """

DEFAULT_CODEC_CONFIG = CodecConfig()

def encode(obj: Any, registry: 'TypeRegistry | None' = None, config: CodecConfig | None = None) -> str:
    """ Encodes a value as JSON text, tagging every registered value with its type id.

    Raises:
        UnregisteredTypeError: A value in the graph is not a primitive, list, tuple or dict, and its type was never registered.
        EncodingError: The graph contains a cycle, a non-string dict key, a non-finite float or a field named "_",
            or is nested deeper than the json module can write.
    """
    config = config or DEFAULT_CODEC_CONFIG
    json_tree = obj_to_json(obj, registry)

    try:
        # Key order is part of the stable encoding, so keys are never sorted
        return json.dumps(json_tree, indent=config.indent, ensure_ascii=config.ensure_ascii, allow_nan=False)
    except RecursionError as e:
        raise EncodingError("Value is nested too deeply to be written as JSON text.") from e

def decode(text: str | bytes | bytearray, registry: 'TypeRegistry | None' = None) -> Any:
    """ Decodes JSON text and restores every tagged document whose type id is registered.

    Raises:
        MalformedInputError: The text is not valid JSON, or is nested deeper than the json module can read.
    """
    try:
        json_tree = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Malformed JSON input: {e.msg} (line {e.lineno}, column {e.colno}).", e.lineno, e.colno) from e
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"Malformed JSON input: {e}.") from e
    except RecursionError as e:
        raise MalformedInputError("Malformed JSON input: nested too deeply to be read.") from e

    return json_to_obj(json_tree, registry)

def _reject_constant(constant: str) -> Any:
    """ NaN, Infinity and -Infinity are accepted by the json module but are not valid JSON. """
    raise MalformedInputError(f"Malformed JSON input: '{constant}' is not a valid JSON number.")
