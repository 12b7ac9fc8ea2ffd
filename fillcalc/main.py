from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import calculator, materials

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("fillcalc")

app = FastAPI(
    title=settings.APP_NAME,
    description="Volume and weight of material needed to fill a container around an optional void",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(calculator.router, prefix="/api")
app.include_router(materials.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "fillcalc"}
