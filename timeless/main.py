from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from timeless.api.reservations import router as reservations_router
from timeless.core.config import settings
from timeless.core.logging_config import configure_logging

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Timeless Reservations API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reservations_router, tags=["reservations"])


@app.get("/api/health")
def health() -> dict[str, object]:
    return {"ok": True, "service": settings.SERVICE_NAME}
