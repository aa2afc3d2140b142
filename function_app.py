from contextlib import asynccontextmanager

import azure.functions as func
from fastapi import (
    FastAPI,
    status,
    Request,
)
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.openapi.docs import get_swagger_ui_html

from catalog_api.config import get_app_settings
from catalog_api.db import close_client
from catalog_api.exceptions import ApplicationError, ValidationError
from catalog_api.logging_config import logger, tracer
from catalog_api.routes.product_route import router as product_router


NON_JSON_BODY_MESSAGE = "Request body must be JSON (Content-Type: application/json)."
INVALID_JSON_MESSAGE = "Request body is not valid JSON."


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    await close_client()


app = FastAPI(
    title="Loja de Departamentos API",
    description="API to manage the products of a department store",
    version="1.0.0",
    docs_url=None,  # Served by the custom /api-docs route below
    redoc_url=None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_app_settings().cors_allow_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api-docs", include_in_schema=False)
async def custom_swagger_ui_html(req: Request) -> HTMLResponse:
    cdn_swagger_js_url = (
        "https://cdnjs.cloudflare.com/ajax/libs/swagger-ui/5.17.14/swagger-ui-bundle.js"
    )
    cdn_swagger_css_url = (
        "https://cdnjs.cloudflare.com/ajax/libs/swagger-ui/5.17.14/swagger-ui.css"
    )
    cdn_favicon_url = "https://fastapi.tiangolo.com/img/favicon.png"

    return get_swagger_ui_html(
        openapi_url="",
        title=app.title + " - Swagger UI",
        swagger_ui_parameters={"spec": app.openapi()},
        swagger_js_url=cdn_swagger_js_url,
        swagger_css_url=cdn_swagger_css_url,
        swagger_favicon_url=cdn_favicon_url,
    )


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    # Non-JSON, malformed JSON and wrongly typed fields share the 422 {error} shape
    errors = exc.errors()
    logger.info(
        "Rejected malformed request body",
        extra={"path": request.url.path, "errors": errors},
    )
    content_type = request.headers.get("content-type", "")
    fields = [
        ".".join(part for part in err.get("loc", ())[1:] if isinstance(part, str))
        for err in errors
    ]
    fields = [field for field in fields if field]

    if content_type and "json" not in content_type:
        message = NON_JSON_BODY_MESSAGE
    elif any(err.get("type") == "json_invalid" for err in errors):
        message = INVALID_JSON_MESSAGE
    elif fields:
        message = f"Invalid fields: {', '.join(fields)}"
    else:
        message = str(ValidationError())
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": message},
    )


@app.exception_handler(ApplicationError)
async def handle_application_error(request: Request, exc: ApplicationError):
    # Reached only by errors raised outside the routes, e.g. missing configuration
    logger.error(
        f"Application error: {exc}",
        extra={"error_type": type(exc).__name__, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
    )


app.include_router(product_router)

function_app = func.FunctionApp()


@function_app.route(route="{*route}", auth_level=func.AuthLevel.ANONYMOUS)
async def main(req: func.HttpRequest) -> func.HttpResponse:
    """Azure Functions entry point routed through FastAPI."""
    with tracer.start_as_current_span("process_request") as span:
        span.set_attribute("http.method", req.method)
        span.set_attribute("http.url", str(req.url))
        span.set_attribute("http.route", req.route_params.get('route', ''))

        logger.info(
            f"Processing {req.method} request",
            extra={
                "method": req.method,
                "path": str(req.url),
                "route": req.route_params.get('route', '')
            }
        )

        try:
            response = await func.AsgiMiddleware(app).handle_async(req)
            span.set_attribute("http.status_code", response.status_code)
            return response
        except Exception as e:
            span.set_attribute("error", True)
            span.set_attribute("error.type", type(e).__name__)
            span.set_attribute("error.message", str(e))

            logger.error(
                f"Error processing request: {str(e)}",
                extra={"error_type": type(e).__name__}
            )
            return func.HttpResponse(
                body=str(e),
                status_code=500
            )
