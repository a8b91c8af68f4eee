"""Domain errors and RFC 7807 Problem Details error handling."""

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class PageBuilderError(Exception):
    """Base exception for store-layer failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class UpstreamUnavailableError(PageBuilderError):
    """The backing data service failed (connection, timeout, driver error)."""


class NotFoundError(PageBuilderError):
    """A requested page or component no longer exists."""


class InsertError(PageBuilderError):
    """A new record could not be persisted; nothing was retained."""


_DOMAIN_STATUS = {
    NotFoundError: (404, "Not Found"),
    InsertError: (409, "Insert Failed"),
    UpstreamUnavailableError: (503, "Upstream Unavailable"),
}


class ProblemDetailError(Exception):
    """Raise for RFC 7807 problem+json responses."""

    def __init__(
        self,
        status: int,
        title: str,
        detail: str,
        error_type: str | None = None,
    ):
        self.status = status
        self.title = title
        self.detail = detail
        self.error_type = error_type or "about:blank"


def _problem(request: Request, status: int, title: str, detail, error_type: str = "about:blank"):
    return JSONResponse(
        status_code=status,
        content={
            "type": error_type,
            "title": title,
            "status": status,
            "detail": detail,
            "instance": str(request.url.path),
        },
        media_type="application/problem+json",
    )


async def problem_detail_handler(request: Request, exc: ProblemDetailError) -> JSONResponse:
    return _problem(request, exc.status, exc.title, exc.detail, exc.error_type)


async def page_builder_error_handler(request: Request, exc: PageBuilderError) -> JSONResponse:
    status, title = 500, "Internal Server Error"
    for error_cls, mapped in _DOMAIN_STATUS.items():
        if isinstance(exc, error_cls):
            status, title = mapped
            break
    return _problem(request, status, title, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    title = exc.detail if isinstance(exc.detail, str) else "Error"
    return _problem(request, exc.status_code, title, exc.detail)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _problem(request, 422, "Validation Error", jsonable_encoder(exc.errors()))
