"""MongoDB document service.

Runs a parsed request against its collection and converts the driver result
into the matching response schema. Driver errors are not caught here.
"""
import logging
from typing import Any, Dict, Optional

from docbridge.schemas.request.mongo_request import (
    CollectionQuery,
    DeleteRequest,
    FindManyRequest,
    FindOneRequest,
    InsertManyRequest,
    InsertOneRequest,
    NamespacePayload,
    ReplaceOneRequest,
    UpdateRequest,
)
from docbridge.schemas.request.options import OperationOptions
from docbridge.schemas.response.mongo_response import (
    CollectionsResponse,
    DeleteResponse,
    FindManyResponse,
    FindOneResponse,
    InsertManyResponse,
    InsertOneResponse,
    UpdateResponse,
)

logger = logging.getLogger(__name__)


def get_collection(client, namespace: NamespacePayload, options: Optional[OperationOptions] = None):
    """
    Get the collection a request targets.

    Write and read concerns from the options are applied to the returned
    collection; without them the client's defaults stay in place.
    """
    collection = client[namespace.database][namespace.collection]
    if options is not None:
        overrides = options.collection_options()
        if overrides:
            collection = collection.with_options(**overrides)
    return collection


def driver_kwargs(options: Optional[OperationOptions]) -> Dict[str, Any]:
    """Keyword arguments for the driver call, empty when no options were sent."""
    if options is None:
        return {}
    return options.driver_kwargs()


async def insert_one(client, request: InsertOneRequest) -> InsertOneResponse:
    collection = get_collection(client, request.namespace, request.options)
    logger.debug("insert_one on %s.%s", request.database, request.collection)
    result = await collection.insert_one(request.document, **driver_kwargs(request.options))
    return InsertOneResponse.from_result(result)


async def insert_many(client, request: InsertManyRequest) -> InsertManyResponse:
    collection = get_collection(client, request.namespace, request.options)
    logger.debug("insert_many of %d documents on %s.%s", len(request.documents), request.database, request.collection)
    if not request.documents:
        # The driver refuses an empty batch; nothing was inserted
        return InsertManyResponse(inserted_ids=[])
    result = await collection.insert_many(request.documents, **driver_kwargs(request.options))
    return InsertManyResponse.from_result(result)


async def find_one(client, request: FindOneRequest) -> FindOneResponse:
    collection = get_collection(client, request.namespace, request.options)
    logger.debug("find_one on %s.%s", request.database, request.collection)
    document = await collection.find_one(request.filter, **driver_kwargs(request.options))
    return FindOneResponse(document=document)


async def find_many(client, request: FindManyRequest) -> FindManyResponse:
    collection = get_collection(client, request.namespace, request.options)
    logger.debug("find on %s.%s", request.database, request.collection)
    cursor = collection.find(request.filter, **driver_kwargs(request.options))
    documents = await cursor.to_list(length=None)
    return FindManyResponse(documents=documents)


async def update_one(client, request: UpdateRequest) -> UpdateResponse:
    collection = get_collection(client, request.namespace, request.options)
    logger.debug("update_one on %s.%s", request.database, request.collection)
    result = await collection.update_one(request.filter, request.update, **driver_kwargs(request.options))
    return UpdateResponse.from_update_result(result)


async def update_many(client, request: UpdateRequest) -> UpdateResponse:
    collection = get_collection(client, request.namespace, request.options)
    logger.debug("update_many on %s.%s", request.database, request.collection)
    result = await collection.update_many(request.filter, request.update, **driver_kwargs(request.options))
    return UpdateResponse.from_update_result(result)


async def replace_one(client, request: ReplaceOneRequest) -> UpdateResponse:
    collection = get_collection(client, request.namespace, request.options)
    logger.debug("replace_one on %s.%s", request.database, request.collection)
    result = await collection.replace_one(request.filter, request.replacement, **driver_kwargs(request.options))
    return UpdateResponse.from_update_result(result)


async def delete_one(client, request: DeleteRequest) -> DeleteResponse:
    collection = get_collection(client, request.namespace, request.options)
    logger.debug("delete_one on %s.%s", request.database, request.collection)
    result = await collection.delete_one(request.filter, **driver_kwargs(request.options))
    return DeleteResponse.from_result(result)


async def delete_many(client, request: DeleteRequest) -> DeleteResponse:
    collection = get_collection(client, request.namespace, request.options)
    logger.debug("delete_many on %s.%s", request.database, request.collection)
    result = await collection.delete_many(request.filter, **driver_kwargs(request.options))
    return DeleteResponse.from_result(result)


async def list_collections(client, query: CollectionQuery) -> CollectionsResponse:
    logger.debug("list_collection_names on %s", query.database)
    names = await client[query.database].list_collection_names()
    return CollectionsResponse(collections=names)
