import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import load_settings
from .errors import ValidationError
from .models import HealthResponse
from .routes.archive_routes import router as archive_router
from .routes.chat_routes import router as chat_router
from .routes.reading_routes import router as reading_router

logging.basicConfig(
    level=getattr(logging, load_settings().log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Palm Oracle", version="0.1.0")

app.include_router(reading_router)
app.include_router(chat_router)
app.include_router(archive_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": exc.message})


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(mode="offline" if load_settings().offline else "model")
