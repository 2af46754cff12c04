# Main FastAPI application file
# File: api/main.py

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Dict

from building_compliance import __version__
from building_compliance.utils import ComplianceLogger
from api.endpoints.catalog import router as catalog_router
from api.endpoints.elements import router as elements_router
from api.endpoints.rules import router as rules_router
from api.utils.auth import get_api_key
from api.utils.config import Config
from api.utils.db import check_supabase_connection
from api.utils.logging import api_logger as logger

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup code (runs before application starts)
    ComplianceLogger.configure(debug_mode=Config.DEBUG, log_to_file=Config.ENVIRONMENT == "production")
    logger.info("Run on application startup.")
    Config.validate()
    
    if not check_supabase_connection():
        logger.error("Failed to connect to Supabase database. API may not function correctly.")
    
    yield
    
    logger.info("Application shutting down.")

app = FastAPI(
    title="Building Compliance API",
    description="""
    # Building Compliance API
    
    Configure building elements, compose their layer build-up from the
    material catalog and check their thermal compliance.
    
    ## Authentication
    
    All endpoints except the status endpoints require an API key in the
    `X-API-Key` header.
    
    ## Workflow
    
    1. Walk the element configuration with `POST /rules/transition`
    2. Create the element with `POST /projects/{project_id}/types/{type_id}/spaces/{space_id}/elements/create`
    3. Pick layer materials with the `/catalog` endpoints and store the
       full element with `PUT .../elements/{element_id}`
    4. Check it with `POST .../elements/{element_id}/compliance-check`
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Elements",
            "description": "Building elements of a space and their layers"
        },
        {
            "name": "Catalog",
            "description": "Layer material catalog queries"
        },
        {
            "name": "Rules",
            "description": "Element configuration rules"
        },
        {
            "name": "Status",
            "description": "API status and health check endpoints"
        },
    ],
    lifespan=lifespan,
)

@app.get("/", tags=["Status"])
async def root():
    return {"status": "online", "message": "Building Compliance API is running"}

@app.get("/health", tags=["Status"], response_model=Dict[str, str])
async def health_check():
    """Check if the API service is healthy."""
    return {"status": "healthy", "message": "Building Compliance API is running"}

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict this in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers with dependencies
app.include_router(
    catalog_router,
    prefix="/catalog",
    tags=["Catalog"],
    dependencies=[Depends(get_api_key)]
)

app.include_router(
    rules_router,
    prefix="/rules",
    tags=["Rules"],
    dependencies=[Depends(get_api_key)]
)

app.include_router(
    elements_router,
    prefix="/projects/{project_id}/types/{type_id}/spaces/{space_id}/elements",
    tags=["Elements"],
    dependencies=[Depends(get_api_key)]
)

logger.info("==== API INITIALIZATION COMPLETE ====")

# Run with: uvicorn api.main:app --reload
