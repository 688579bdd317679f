import asyncio
import logging
import os

import django
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "central.settings")
django.setup()

from django.conf import settings

from central_api.crud import build_router
from central_api.repositories import RepositoryRegistry
from central_api.resources import RESOURCES
from central_api.schemas import MessageOut

logger = logging.getLogger("central_api")

GENERIC_ERROR_MESSAGE = "Algo deu errado!"

app = FastAPI(
    title="API Central de Compras",
    version="1.0.0",
    description=(
        "API completa para gerenciar fornecedores, produtos, usuários, lojas, "
        "pedidos e campanhas em uma central de compras."
    ),
    docs_url="/api-docs",
    redoc_url=None,
    servers=[{"url": f"http://localhost:{settings.API_PORT}", "description": "Servidor Local"}],
)
app.state.repositories = RepositoryRegistry.from_settings()

allow_all_origins = "*" in settings.CORS_ALLOWED_ORIGINS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all_origins else settings.CORS_ALLOWED_ORIGINS,
    # Credenciais não podem ser combinadas com origem "*".
    allow_credentials=not allow_all_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail
    content = detail if isinstance(detail, dict) else {"message": detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{field}: {error.get('msg')}")
    message = "Requisição inválida: " + "; ".join(parts)
    logger.info("%s %s -> 400 %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled API error", exc_info=exc)
    error = str(exc) if settings.API_EXPOSE_ERRORS else {}
    return JSONResponse(status_code=500, content={"message": GENERIC_ERROR_MESSAGE, "error": error})


def _fatal_loop_exception_handler(loop, context) -> None:
    """Exceptions nobody awaited end the process, like an unhandled rejection would."""
    exc = context.get("exception")
    logger.critical("REJEIÇÃO NÃO CAPTURADA! Encerrando...")
    if exc is not None:
        logger.critical("%s: %s", type(exc).__name__, exc, exc_info=exc)
    else:
        logger.critical(context.get("message", "erro desconhecido"))
    for handler in logger.handlers:
        handler.flush()
    os._exit(1)


@app.on_event("startup")
async def startup():
    asyncio.get_running_loop().set_exception_handler(_fatal_loop_exception_handler)
    logger.info(
        "API Central de Compras iniciada (armazenamento=%s, ambiente=%s)",
        app.state.repositories.backend,
        settings.ENVIRONMENT,
    )


@app.get("/", response_model=MessageOut, tags=["Status"])
async def index():
    return {"message": "API Central de Compras está no ar!"}


for _resource in RESOURCES:
    app.include_router(build_router(_resource))
