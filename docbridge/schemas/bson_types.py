"""Pydantic field types for BSON documents and values."""
from typing import Annotated, Any, Dict

from pydantic import AfterValidator, PlainSerializer

from docbridge.utils.bson_helpers import parse_bson_to_json, parse_json_to_bson

# Extended JSON wrappers are decoded on the way in, BSON values are written
# back out as relaxed Extended JSON. Python-mode dumps keep the BSON values
# so they can be handed to the driver unchanged.
BsonValue = Annotated[
    Any,
    AfterValidator(parse_json_to_bson),
    PlainSerializer(parse_bson_to_json, when_used="json"),
]

BsonDocument = Annotated[
    Dict[str, Any],
    AfterValidator(parse_json_to_bson),
    PlainSerializer(parse_bson_to_json, when_used="json"),
]

# Values read back from the database are already BSON. They are only
# encoded on output, so stored keys such as "$numberLong" stay literal.
StoredBsonValue = Annotated[
    Any,
    PlainSerializer(parse_bson_to_json, when_used="json"),
]

StoredBsonDocument = Annotated[
    Dict[str, Any],
    PlainSerializer(parse_bson_to_json, when_used="json"),
]
