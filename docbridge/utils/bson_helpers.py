"""BSON helper utilities."""
import json
from typing import Any

from bson import json_util
from bson.errors import BSONError
from bson.json_util import RELAXED_JSON_OPTIONS


def parse_json_to_bson(data: Any) -> Any:
    """
    Decode Extended JSON wrappers in JSON-compatible data into BSON values.

    ``{"$oid": "..."}`` becomes an ObjectId, ``{"$date": ...}`` a datetime and
    so on. Plain JSON values come back unchanged. Values that are already
    BSON types are accepted too.

    Raises:
        ValueError: If a wrapper is malformed, e.g. ``{"$oid": "zz"}``
    """
    try:
        return json_util.loads(json_util.dumps(data))
    except (BSONError, TypeError, ValueError, IndexError) as e:
        raise ValueError(f"Invalid Extended JSON value: {e}") from e


def parse_bson_to_json(bson_data: Any) -> Any:
    """Convert BSON data to relaxed Extended JSON compatible data."""
    return json.loads(json_util.dumps(bson_data, json_options=RELAXED_JSON_OPTIONS))
