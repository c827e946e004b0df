import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_settings
from exceptions import InvalidInputError, NotFoundError, UpstreamReadError
from log_config import get_logger, setup_logging
from routers import availability_router, pricing_router, rates_router

settings = get_settings()
setup_logging(settings.log_level, settings.log_format)
logger = get_logger(__name__)

# App instance
app = FastAPI(title="Availability & Pricing API")

# CORS
app.add_middleware(
     CORSMiddleware,
     allow_origins=list(settings.cors_origins),
     allow_credentials=True,
     allow_methods=["*"],
     allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
     return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(UpstreamReadError)
async def upstream_read_error_handler(request: Request, exc: UpstreamReadError):
     logger.error("Upstream read failed for %s %s: %s", request.method, request.url.path, exc)
     return _error(500, "Failed to fetch data")


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError):
     logger.info("Not found: %s (%s)", request.url.path, exc)
     return _error(404, str(exc) or "Not found")


@app.exception_handler(InvalidInputError)
async def invalid_input_error_handler(request: Request, exc: InvalidInputError):
     return _error(400, str(exc))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
     logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
     return _error(400, "Invalid request parameters")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
     message = "Route not found" if exc.status_code == 404 else str(exc.detail)
     return _error(exc.status_code, message)


app.include_router(availability_router)
app.include_router(rates_router)
app.include_router(pricing_router)


# Internal error fallback middleware
@app.middleware("http")
async def internal_error_middleware(request: Request, call_next):
     try:
          return await call_next(request)
     except Exception:
          logger.exception("Unhandled error on %s %s", request.method, request.url.path)
          return _error(500, "Internal server error")


if __name__ == "__main__":
     uvicorn.run("main:app", host="0.0.0.0", port=settings.port, reload=True)
