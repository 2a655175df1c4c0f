import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.posgo.api.v1.api import api_router
from backend.posgo.core.config import settings
from backend.posgo.middleware.language import LanguageMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="PosGo! Point of Sale")

# ─── CORS: configured origins only ──────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type", "Accept", "Accept-Language"],
    expose_headers=["Content-Disposition", "Content-Language"],
)

app.add_middleware(LanguageMiddleware)

app.include_router(api_router)

