import json
import logging
from typing import Any, Callable

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from central_api.repositories import (
    DocumentValidationError,
    PersistenceError,
    Repository,
    RepositoryRegistry,
)
from central_api.resources import Resource
from central_api.schemas import MessageOut, validation_message

logger = logging.getLogger("central_api.crud")

INVALID_JSON_MESSAGE = "Corpo da requisição inválido: JSON malformado."
INVALID_BODY_MESSAGE = "Corpo da requisição deve ser um objeto JSON."


def get_registry(request: Request) -> RepositoryRegistry:
    return request.app.state.repositories


async def _read_body(request: Request) -> dict:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail=INVALID_JSON_MESSAGE)
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail=INVALID_BODY_MESSAGE)
    return body


def _validate(resource: Resource, data: dict) -> dict:
    try:
        return resource.schema_in.model_validate(data).model_dump()
    except ValidationError as exc:
        message = validation_message(exc, resource.label)
        logger.info("%s: %s", resource.name, message)
        raise HTTPException(status_code=400, detail=message)


async def _call(resource: Resource, func: Callable, *args: Any) -> Any:
    try:
        return await run_in_threadpool(func, *args)
    except DocumentValidationError as exc:
        logger.info("%s: %s", resource.name, exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except PersistenceError as exc:
        logger.exception("Falha de persistência em %s", resource.name)
        raise HTTPException(status_code=500, detail=str(exc))


def _not_found(resource: Resource, suffix: str = ".") -> HTTPException:
    return HTTPException(status_code=404, detail=f"{resource.not_found}{suffix}")


def build_router(resource: Resource) -> APIRouter:
    """List/get/get-by-name/create/update/delete routes for one resource."""
    router = APIRouter(prefix=f"/{resource.name}", tags=[resource.tag])
    schema_out = resource.schema_out
    body_docs = {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": resource.schema_in.model_json_schema()}},
        }
    }
    errors = {
        400: {"model": MessageOut, "description": "Dados inválidos"},
        404: {"model": MessageOut, "description": f"{resource.not_found}"},
        500: {"model": MessageOut, "description": "Erro de persistência"},
    }

    def get_repository(registry: RepositoryRegistry = Depends(get_registry)) -> Repository:
        return registry.for_resource(resource)

    @router.get("", response_model=list[schema_out], summary=f"Listar {resource.tag.lower()}")
    async def list_documents(repo: Repository = Depends(get_repository)):
        return await _call(resource, repo.list)

    @router.get(
        "/name/{name}",
        response_model=schema_out,
        responses=errors,
        summary=f"Buscar {resource.label.lower()} por nome",
    )
    async def get_by_name(name: str, repo: Repository = Depends(get_repository)):
        document = await _call(resource, repo.find_one, resource.lookup_field, name)
        if document is None:
            raise _not_found(resource)
        return document

    @router.get("/{doc_id}", response_model=schema_out, responses=errors, summary=f"Obter {resource.label.lower()} por ID")
    async def get_document(doc_id: str, repo: Repository = Depends(get_repository)):
        document = await _call(resource, repo.get, doc_id)
        if document is None:
            raise _not_found(resource)
        return document

    @router.post(
        "",
        status_code=201,
        response_model=schema_out,
        responses=errors,
        openapi_extra=body_docs,
        summary=f"Criar {resource.label.lower()}",
    )
    async def create_document(request: Request, repo: Repository = Depends(get_repository)):
        data = _validate(resource, await _read_body(request))
        document = await _call(resource, repo.create, data)
        logger.info("%s criado: %s", resource.name, document.get("id"))
        return document

    @router.put(
        "/{doc_id}",
        response_model=schema_out,
        responses=errors,
        openapi_extra=body_docs,
        summary=f"Atualizar {resource.label.lower()}",
    )
    async def update_document(doc_id: str, request: Request, repo: Repository = Depends(get_repository)):
        body = await _read_body(request)
        existing = await _call(resource, repo.get, doc_id)
        if existing is None:
            raise _not_found(resource, " para atualização.")
        # O documento final precisa continuar válido, não só o trecho enviado.
        data = _validate(resource, {**existing, **body})
        document = await _call(resource, repo.update, doc_id, data)
        if document is None:
            raise _not_found(resource, " para atualização.")
        return document

    @router.delete(
        "/{doc_id}",
        status_code=204,
        response_class=Response,
        responses=errors,
        summary=f"Remover {resource.label.lower()}",
    )
    async def delete_document(doc_id: str, repo: Repository = Depends(get_repository)):
        deleted = await _call(resource, repo.delete, doc_id)
        if not deleted:
            raise _not_found(resource, " para exclusão.")
        return Response(status_code=204)

    return router
