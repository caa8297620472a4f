"""Per-operation driver option schemas.

Each record mirrors the keyword arguments pymongo accepts for one collection
method. Field names may be sent in snake_case or in the camelCase used by
the MongoDB drivers on the wire. Write and read concerns are collection
level settings in pymongo and are applied with ``Collection.with_options``;
everything else is passed to the driver call as a keyword argument.
"""
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pymongo.read_concern import ReadConcern
from pymongo.write_concern import WriteConcern

from docbridge.schemas.bson_types import BsonDocument, BsonValue

SortSpec = Union[BsonDocument, List[Tuple[str, Any]]]
HintSpec = Union[str, BsonDocument, List[Tuple[str, Any]]]
ProjectionSpec = Union[BsonDocument, List[str]]

# Fields applied through Collection.with_options rather than per call
COLLECTION_LEVEL_FIELDS = ("write_concern", "read_concern")


class DriverOptionsModel(BaseModel):
    """Base schema for option records passed through to the driver."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class WriteConcernOptions(DriverOptionsModel):
    """Write concern for a single write operation."""
    w: Optional[Union[int, str]] = Field(None, description="Number of acknowledging members or a tag such as 'majority'")
    j: Optional[bool] = Field(None, description="Wait for the journal commit")
    wtimeout: Optional[int] = Field(None, ge=0, description="Write concern timeout in milliseconds")
    fsync: Optional[bool] = None

    def to_write_concern(self) -> WriteConcern:
        return WriteConcern(**self.model_dump(exclude_none=True))


class ReadConcernOptions(DriverOptionsModel):
    """Read concern for a single read operation."""
    level: Optional[str] = Field(None, description="Read concern level, e.g. 'majority'")

    def to_read_concern(self) -> ReadConcern:
        return ReadConcern(self.level)


class OperationOptions(DriverOptionsModel):
    """Fields common to every operation."""
    comment: Optional[BsonValue] = Field(None, description="Comment attached to the command in server logs")

    def driver_kwargs(self) -> Dict[str, Any]:
        """
        Keyword arguments for the pymongo collection method.

        Unset fields are omitted so the driver applies its own defaults.
        Ordered key documents (sort, hint) are turned into lists of pairs.
        """
        kwargs = {}
        for name in type(self).model_fields:
            if name in COLLECTION_LEVEL_FIELDS:
                continue
            value = getattr(self, name)
            if value is None:
                continue
            if name in ("sort", "hint") and isinstance(value, dict):
                value = list(value.items())
            kwargs[name] = value
        return kwargs

    def collection_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``Collection.with_options``, empty when none are set."""
        overrides = {}
        write_concern = getattr(self, "write_concern", None)
        if write_concern is not None:
            overrides["write_concern"] = write_concern.to_write_concern()
        read_concern = getattr(self, "read_concern", None)
        if read_concern is not None:
            overrides["read_concern"] = read_concern.to_read_concern()
        return overrides


class WriteOptions(OperationOptions):
    write_concern: Optional[WriteConcernOptions] = None


class InsertOneOptions(WriteOptions):
    """Options for insert_one."""
    bypass_document_validation: Optional[bool] = None


class InsertManyOptions(WriteOptions):
    """Options for insert_many."""
    ordered: Optional[bool] = Field(None, description="Stop at the first failed insert")
    bypass_document_validation: Optional[bool] = None


class FindOneOptions(OperationOptions):
    """Options for find_one."""
    projection: Optional[ProjectionSpec] = None
    sort: Optional[SortSpec] = None
    skip: Optional[int] = Field(None, ge=0)
    max_time_ms: Optional[int] = Field(None, ge=0, alias="maxTimeMS")
    collation: Optional[BsonDocument] = None
    hint: Optional[HintSpec] = None
    allow_partial_results: Optional[bool] = None
    show_record_id: Optional[bool] = None
    return_key: Optional[bool] = None
    min: Optional[BsonDocument] = None
    max: Optional[BsonDocument] = None
    read_concern: Optional[ReadConcernOptions] = None


class FindOptions(FindOneOptions):
    """Options for find."""
    limit: Optional[int] = None
    batch_size: Optional[int] = Field(None, ge=0)
    allow_disk_use: Optional[bool] = None
    no_cursor_timeout: Optional[bool] = None


class UpdateOptions(WriteOptions):
    """Options for update_one and update_many."""
    upsert: Optional[bool] = Field(None, description="Insert a document when nothing matches the filter")
    array_filters: Optional[List[BsonDocument]] = None
    bypass_document_validation: Optional[bool] = None
    collation: Optional[BsonDocument] = None
    hint: Optional[HintSpec] = None
    let: Optional[BsonDocument] = None


class ReplaceOptions(WriteOptions):
    """Options for replace_one."""
    upsert: Optional[bool] = Field(None, description="Insert the replacement when nothing matches the filter")
    bypass_document_validation: Optional[bool] = None
    collation: Optional[BsonDocument] = None
    hint: Optional[HintSpec] = None
    let: Optional[BsonDocument] = None


class DeleteOptions(WriteOptions):
    """Options for delete_one and delete_many."""
    collation: Optional[BsonDocument] = None
    hint: Optional[HintSpec] = None
    let: Optional[BsonDocument] = None
