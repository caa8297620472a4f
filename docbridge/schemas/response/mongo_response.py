"""MongoDB response schemas."""
from typing import Any, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, model_serializer

from docbridge.schemas.bson_types import StoredBsonDocument, StoredBsonValue


class InsertOneResponse(BaseModel):
    """Response schema for insert_one."""
    inserted_id: StoredBsonValue

    @classmethod
    def from_result(cls, result) -> "InsertOneResponse":
        return cls(inserted_id=result.inserted_id)


class InsertManyResponse(BaseModel):
    """Response schema for insert_many."""
    inserted_ids: List[StoredBsonValue]

    @classmethod
    def from_inserted_ids(cls, inserted_ids: Union[Mapping[int, Any], Sequence[Any]]) -> "InsertManyResponse":
        """
        Build the response from the identifiers the driver reported.

        A mapping of submission index to identifier is ordered by index, so
        the i-th identifier belongs to the i-th submitted document however
        the mapping happens to iterate. A sequence is taken as already ordered.
        """
        if isinstance(inserted_ids, Mapping):
            ordered = [inserted_id for _, inserted_id in sorted(inserted_ids.items(), key=lambda item: item[0])]
        else:
            ordered = list(inserted_ids)
        return cls(inserted_ids=ordered)

    @classmethod
    def from_result(cls, result) -> "InsertManyResponse":
        return cls.from_inserted_ids(result.inserted_ids)


class FindOneResponse(BaseModel):
    """Response schema for find_one. ``document`` is null when nothing matched."""
    document: Optional[StoredBsonDocument] = None


class FindManyResponse(BaseModel):
    """Response schema for find."""
    documents: List[StoredBsonDocument]


class UpdateResponse(BaseModel):
    """Response schema for update and replace operations."""
    matched_count: int
    modified_count: int
    upserted_id: Optional[StoredBsonValue] = None

    @model_serializer(mode="wrap")
    def _omit_absent_upserted_id(self, handler):
        # Absent upserts leave the key out instead of writing null
        data = handler(self)
        if self.upserted_id is None:
            data.pop("upserted_id", None)
        return data

    @classmethod
    def from_update_result(cls, result) -> "UpdateResponse":
        return cls(
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=result.upserted_id,
        )


class DeleteResponse(BaseModel):
    """Response schema for delete operations."""
    deleted_count: int

    @classmethod
    def from_result(cls, result) -> "DeleteResponse":
        return cls(deleted_count=result.deleted_count)


class CollectionsResponse(BaseModel):
    """Response schema for listing collections."""
    collections: List[str]
