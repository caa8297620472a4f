"""MongoDB request schemas."""
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError

from docbridge.schemas.bson_types import BsonDocument
from docbridge.schemas.errors import InvalidRequestError
from docbridge.schemas.request.options import (
    DeleteOptions,
    FindOneOptions,
    FindOptions,
    InsertManyOptions,
    InsertOneOptions,
    ReplaceOptions,
    UpdateOptions,
)

RequestT = TypeVar("RequestT", bound=BaseModel)


class NamespacePayload(BaseModel):
    """Database and collection a request targets.

    Request schemas inherit these fields, so they sit at the top level of
    the payload next to the operation's own fields.
    """
    database: str = Field(..., description="The name of the database")
    collection: str = Field(..., description="The name of the collection")

    @property
    def namespace(self) -> "NamespacePayload":
        return NamespacePayload(database=self.database, collection=self.collection)


class InsertOneRequest(NamespacePayload):
    """Request schema for insert_one."""
    document: BsonDocument = Field(..., description="Document to insert")
    options: Optional[InsertOneOptions] = None


class InsertManyRequest(NamespacePayload):
    """Request schema for insert_many."""
    documents: List[BsonDocument] = Field(..., description="Documents to insert, in order")
    options: Optional[InsertManyOptions] = None


class FindOneRequest(NamespacePayload):
    """Request schema for find_one."""
    filter: BsonDocument = Field(default_factory=dict, description="MongoDB filter query document, matches all when empty")
    options: Optional[FindOneOptions] = None


class FindManyRequest(NamespacePayload):
    """Request schema for find."""
    filter: BsonDocument = Field(default_factory=dict, description="MongoDB filter query document, matches all when empty")
    options: Optional[FindOptions] = None


class UpdateRequest(NamespacePayload):
    """Request schema for update_one and update_many."""
    filter: BsonDocument = Field(..., description="MongoDB filter query document")
    update: BsonDocument = Field(..., description="Update operators to apply, e.g. {'$set': {...}}")
    options: Optional[UpdateOptions] = None


class ReplaceOneRequest(NamespacePayload):
    """Request schema for replace_one."""
    filter: BsonDocument = Field(..., description="MongoDB filter query document")
    replacement: BsonDocument = Field(..., description="Document replacing the matched one")
    options: Optional[ReplaceOptions] = None


class DeleteRequest(NamespacePayload):
    """Request schema for delete_one and delete_many."""
    filter: BsonDocument = Field(..., description="MongoDB filter query document")
    options: Optional[DeleteOptions] = None


class CollectionQuery(BaseModel):
    """Query schema for listing the collections of a database."""
    database: str = Field(..., description="The name of the database")


def parse_request(model: Type[RequestT], payload: Any) -> RequestT:
    """
    Validate a decoded JSON payload against a request schema.

    Args:
        model: The request schema class, e.g. ``InsertManyRequest``
        payload: The decoded JSON body

    Returns:
        The populated request

    Raises:
        InvalidRequestError: If the payload does not have the schema's shape
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        errors: List[Dict[str, Any]] = e.errors(include_url=False, include_context=False)
        raise InvalidRequestError(model.__name__, errors) from e
