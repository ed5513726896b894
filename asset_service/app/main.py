from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import asset_engine, Base
from shared.core.log_config import setup_logging
from shared.exception_handler import setup_exception_handlers
from . import models  # noqa: F401  registers every table on Base
from .core.error_handlers import setup_domain_exception_handlers
from .router.assets import assets_router
from .router.classification import classification_router
from .router.reference import reference_router

setup_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)

app = FastAPI(title="Asset Catalog Service API")

# Create all tables
Base.metadata.create_all(bind=asset_engine)

# Allow requests from the React app
origins = [
    "http://localhost:8080",
    "http://127.0.0.1:8002"
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)
setup_domain_exception_handlers(app)

# Include routers
app.include_router(classification_router.router)
app.include_router(reference_router.router)
app.include_router(assets_router.router)
