from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
import logging
from app import dependencies
from app.tariff_loader import TariffSourceError
from app.utils.exception_handlers import validation_exception_handler, tariff_source_exception_handler
from app.routes import invoice_routes, quote_routes
from configurations import LOG_LEVEL

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="GGX Rate Engine API",
    description="API for quoting courier shipments from the branch tariff and totalling invoices",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Quote",
            "description": "Tariff lookup and shipment quoting"
        },
        {
            "name": "Invoice",
            "description": "Invoice totals and numbering"
        },
        {
            "name": "Health",
            "description": "Health check endpoint"
        }
    ],
    openapi_url="/openapi.json"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(TariffSourceError, tariff_source_exception_handler)

# Include routes
app.include_router(quote_routes.router)
app.include_router(invoice_routes.router)


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "Welcome to GGX Rate Engine API",
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    try:
        # Tariff load errors are reported in the body
        calculator = dependencies.init_calculator()
        index = calculator.index
        return {
            "status": "healthy",
            "message": "Service is running",
            "tariff": {
                "rows": index.row_count,
                "skipped_rows": index.skipped_rows,
                "countries": len(calculator.list_countries()),
                "services": list(calculator.list_services())
            },
            "version": "1.0.0"
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return {
            "status": "unhealthy",
            "message": "Service is experiencing issues",
            "error": str(e)
        }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level="info"
    )
