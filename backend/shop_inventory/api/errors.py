from html import escape

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shop_inventory.utils.log import get_logger

log = get_logger("http")

_NOT_FOUND_PAGE = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8" /><title>404 - Not found</title></head>
<body>
  <h1>404</h1>
  <p>Page <code>{path}</code> does not exist.</p>
  <a href="/">Back to the product list</a>
</body>
</html>
"""


def _is_api(request: Request) -> bool:
    return request.url.path.startswith("/api/")


async def http_error(request: Request, exc: StarletteHTTPException):
    # a bare "Not Found" comes from routing, not from a handler
    if exc.status_code == 404 and exc.detail == "Not Found":
        if not _is_api(request):
            return HTMLResponse(_NOT_FOUND_PAGE.format(path=escape(request.url.path)), status_code=404)
        return JSONResponse(
            {"error": f"Endpoint {request.url.path} does not exist."}, status_code=404
        )
    return JSONResponse(
        {"error": str(exc.detail)},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": "Request body must be a JSON object."}, status_code=400)


async def unhandled_error(request: Request, exc: Exception):
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Internal server error."}, status_code=500)


def install(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_error)
    app.add_exception_handler(RequestValidationError, validation_error)
    app.add_exception_handler(Exception, unhandled_error)
