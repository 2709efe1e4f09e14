from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from deepsearch.api.routes import documents, research
from deepsearch.config import settings
from deepsearch.services import logger as log_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    log_service.log_event(event_type="startup", message="DeepSearch API starting")
    yield
    log_service.log_event(event_type="shutdown", message="DeepSearch API stopping")


app = FastAPI(
    title="DeepSearch",
    description="Multi-perspective research reports with PDF export",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(research.router)
app.include_router(documents.router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "service": "deepsearch"}
