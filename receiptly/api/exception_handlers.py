# FILE: receiptly/api/exception_handlers.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from receiptly.api.response import err
from receiptly.pdf.raster_export import DocumentGenerationError
from receiptly.services.number_words import AmountOutOfRangeError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # exc.detail can be str/dict/list
        msg = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return err(msg=msg, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return err(msg="Validation error", status_code=422)

    @app.exception_handler(AmountOutOfRangeError)
    async def amount_exception_handler(request: Request, exc: AmountOutOfRangeError) -> JSONResponse:
        return err(msg=str(exc), status_code=422, code="amount_out_of_range")

    @app.exception_handler(DocumentGenerationError)
    async def generation_exception_handler(request: Request, exc: DocumentGenerationError) -> JSONResponse:
        return err(msg=str(exc), status_code=500, code="generation_failed")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return err(msg="Internal server error", status_code=500)
