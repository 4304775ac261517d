from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from voice_capture.api import admin, auth, profile, recordings, sentences, sessions
from voice_capture.core.config import DEFAULT_JWT_SECRET, settings
from voice_capture.core.errors import ServiceError
from voice_capture.core.logger import get_logger
from voice_capture.db.base import engine, Base
from voice_capture.services.storage import UPLOADS_DIR

logger = get_logger(__name__)

# Create DB tables
Base.metadata.create_all(bind=engine)

if settings.JWT_SECRET == DEFAULT_JWT_SECRET:
    logger.warning("JWT_SECRET is not set, using the development secret")

app = FastAPI(title="Voice Capture Server")


app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"detail": "Malformed request", "errors": jsonable_encoder(exc.errors())},
    )


app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(sentences.router)
app.include_router(sessions.router)
app.include_router(recordings.router)
app.include_router(admin.router)

app.mount(
    settings.UPLOADS_URL_PREFIX, StaticFiles(directory=UPLOADS_DIR), name="uploads"
)


@app.get("/health")
def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("voice_capture.main:app", host="0.0.0.0", port=8000, reload=True)
