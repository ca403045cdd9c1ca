import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import settings
from .database import init_db
from .middleware.audit import audit_middleware
from .routers import availability, bookings, schedule, schedule_overrides
from .services.admission import AdmissionError

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_db()
    logger.info("Salon booking API started")
    yield


app = FastAPI(title="Salon Booking API", lifespan=lifespan)

app.middleware("http")(audit_middleware)


# ===== Error shapes =====

@app.exception_handler(AdmissionError)
async def admission_error_handler(_request: Request, exc: AdmissionError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(HTTPException)
async def http_error_handler(_request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request.", "details": jsonable_encoder(exc.errors())},
    )


# ===== Routers =====

app.include_router(availability.router)
app.include_router(schedule.router)
app.include_router(schedule_overrides.router)
app.include_router(bookings.router)


@app.get("/health")
def health():
    return {"status": "ok"}
