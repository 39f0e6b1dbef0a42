import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError

from fullservice.core.config import get_settings
from fullservice.core.database import Base, engine
from fullservice.core.errors import FullServiceError, TransportError, ValidationError
from fullservice.routers import admin, articles, auth, health, listings, orders, payment_methods

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# --- Load settings ---
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(err: FullServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=err.status_code,
        content={"detail": err.message, "code": err.code},
    )


@app.exception_handler(FullServiceError)
async def domain_error_handler(request: Request, exc: FullServiceError):
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    message = "Please fill all fields"
    if fields:
        message = f"{message}: {', '.join(fields)}"
    return _error_response(ValidationError(message))


@app.exception_handler(DBAPIError)
async def store_error_handler(request: Request, exc: Exception):
    logger.error("Store request failed on %s: %s", request.url.path, exc)
    return _error_response(TransportError())


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s", request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# --- Routers ---
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(listings.router)
app.include_router(articles.router)
app.include_router(payment_methods.router)
app.include_router(orders.router)
app.include_router(admin.router)


@app.get("/")
def root():
    return {"message": f"{settings.app_name} backend is running"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("fullservice.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
