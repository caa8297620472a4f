"""MongoDB document and collection endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Request
from pymongo.errors import PyMongoError

from docbridge.schemas.request.mongo_request import (
    CollectionQuery,
    DeleteRequest,
    FindManyRequest,
    FindOneRequest,
    InsertManyRequest,
    InsertOneRequest,
    ReplaceOneRequest,
    UpdateRequest,
    parse_request,
)
from docbridge.schemas.response.mongo_response import (
    CollectionsResponse,
    DeleteResponse,
    FindManyResponse,
    FindOneResponse,
    InsertManyResponse,
    InsertOneResponse,
    UpdateResponse,
)
from docbridge.services.mongodb import document_service
from docbridge.services.mongodb.client import get_client

router = APIRouter()


def _driver_failure(action: str, e: PyMongoError) -> HTTPException:
    return HTTPException(
        status_code=500,
        detail=f"Failed to {action}: {str(e)}"
    )


@router.post("/documents/insert-one", response_model=InsertOneResponse)
async def insert_one_document(request: InsertOneRequest, client=Depends(get_client)):
    """Insert a single document and return its identifier."""
    try:
        return await document_service.insert_one(client, request)
    except PyMongoError as e:
        raise _driver_failure("insert document", e)


@router.post("/documents/insert-many", response_model=InsertManyResponse)
async def insert_many_documents(request: InsertManyRequest, client=Depends(get_client)):
    """
    Insert several documents.

    The returned identifiers are in the same order as the submitted documents.
    """
    try:
        return await document_service.insert_many(client, request)
    except PyMongoError as e:
        raise _driver_failure("insert documents", e)


@router.post("/documents/find-one", response_model=FindOneResponse)
async def find_one_document(request: FindOneRequest, client=Depends(get_client)):
    """Return the first document matching the filter, or null."""
    try:
        return await document_service.find_one(client, request)
    except PyMongoError as e:
        raise _driver_failure("query document", e)


@router.post("/documents/find", response_model=FindManyResponse)
async def find_documents(request: FindManyRequest, client=Depends(get_client)):
    """
    Find documents in a MongoDB collection.

    - filter: MongoDB filter query document, all documents when omitted
    - options: projection, sort, skip, limit and the other find options
    """
    try:
        return await document_service.find_many(client, request)
    except PyMongoError as e:
        raise _driver_failure("query documents", e)


@router.post("/documents/update-one", response_model=UpdateResponse)
async def update_one_document(request: UpdateRequest, client=Depends(get_client)):
    """Update the first document matching the filter."""
    try:
        return await document_service.update_one(client, request)
    except PyMongoError as e:
        raise _driver_failure("update document", e)


@router.post("/documents/update-many", response_model=UpdateResponse)
async def update_many_documents(request: UpdateRequest, client=Depends(get_client)):
    """Update every document matching the filter."""
    try:
        return await document_service.update_many(client, request)
    except PyMongoError as e:
        raise _driver_failure("update documents", e)


@router.post("/documents/replace-one", response_model=UpdateResponse)
async def replace_one_document(request: ReplaceOneRequest, client=Depends(get_client)):
    """Replace the first document matching the filter."""
    try:
        return await document_service.replace_one(client, request)
    except PyMongoError as e:
        raise _driver_failure("replace document", e)


@router.post("/documents/delete-one", response_model=DeleteResponse)
async def delete_one_document(request: DeleteRequest, client=Depends(get_client)):
    """Delete the first document matching the filter."""
    try:
        return await document_service.delete_one(client, request)
    except PyMongoError as e:
        raise _driver_failure("delete document", e)


@router.post("/documents/delete-many", response_model=DeleteResponse)
async def delete_many_documents(request: DeleteRequest, client=Depends(get_client)):
    """Delete every document matching the filter."""
    try:
        return await document_service.delete_many(client, request)
    except PyMongoError as e:
        raise _driver_failure("delete documents", e)


@router.get("/collections", response_model=CollectionsResponse)
async def list_collections(request: Request, client=Depends(get_client)):
    """
    Return the names of the collections in a database.

    - database: The name of the database, as a query parameter
    """
    query = parse_request(CollectionQuery, dict(request.query_params))
    try:
        return await document_service.list_collections(client, query)
    except PyMongoError as e:
        raise _driver_failure("list collections", e)
