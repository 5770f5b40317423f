"""
Main FastAPI application entry point.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from repufrenos.config import get_settings
from repufrenos.database import SessionLocal, init_db
from repufrenos.log import configure_logging
from repufrenos.routers import admin, auth, cart, contact, products, site, vehicles, workshop
from repufrenos.services.catalog import seed_catalog
from repufrenos.tracker.errors import BackupFormatError, MissingVehicleError, RecordNotFoundError

settings = get_settings()
configure_logging(settings.log_level, settings.log_file)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan events for the application.
    Handles startup and shutdown events.
    """
    # Startup
    print("🚀 Starting REPUFRENOS.CL...")
    print("📊 Initializing database...")
    await init_db()
    async with SessionLocal() as db:
        seeded = await seed_catalog(db)
    if seeded:
        print(f"🌱 Loaded {seeded} products from the bundled catalog")
    print("✅ Database initialized successfully")
    print(f"🌐 API available at: {settings.api_v1_prefix}")
    print("📖 Interactive docs: http://localhost:8000/docs")

    yield

    # Shutdown
    print("👋 Shutting down REPUFRENOS.CL...")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    ## 🔧 REPUFRENOS.CL API

    Brake parts storefront with a vehicle service tracker.

    ### Areas:
    * **Products**: Catalog, search and featured products
    * **Cart**: Per-client cart with WhatsApp checkout
    * **Contact**: Contact form and chat inquiries by email
    * **Vehicles**: Vehicles with oil change, brake and mechanic service history
    * **Workshop**: Workshop details and JSON backups
    * **Admin**: Settings, products and image uploads
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RecordNotFoundError)
async def record_not_found_handler(request: Request, exc: RecordNotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(MissingVehicleError)
@app.exception_handler(BackupFormatError)
async def bad_request_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


# Include routers
app.include_router(auth.router, prefix=settings.api_v1_prefix)
app.include_router(products.router, prefix=settings.api_v1_prefix)
app.include_router(cart.router, prefix=settings.api_v1_prefix)
app.include_router(contact.router, prefix=settings.api_v1_prefix)
app.include_router(vehicles.router, prefix=settings.api_v1_prefix)
app.include_router(workshop.router, prefix=settings.api_v1_prefix)
app.include_router(admin.router, prefix=settings.api_v1_prefix)
app.include_router(site.router, prefix=settings.api_v1_prefix)
app.include_router(site.root_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Bienvenido a REPUFRENOS.CL",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "repufrenos.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
