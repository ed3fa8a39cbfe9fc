from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from bankdash.core.database import Base, async_engine, AsyncSessionLocal
from bankdash.core.config import settings
from bankdash.core.exceptions import BankingError
from bankdash.core.logging_config import setup_logging
from bankdash.modules.accounts.router import router as accounts_router
from bankdash.modules.accounts.services import seed_sample_accounts
from bankdash.modules.transactions.router import router as transactions_router

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger("bankdash.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    # Startup
    async with async_engine.begin() as conn:
        # Create all tables (for development - use Alembic in production)
        await conn.run_sync(Base.metadata.create_all)

    if settings.SEED_SAMPLE_DATA:
        async with AsyncSessionLocal() as session:
            await seed_sample_accounts(session)

    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} started ({settings.ENVIRONMENT})")

    yield

    # Shutdown
    await async_engine.dispose()


app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Accounts, transactions and paginated transaction history",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BankingError)
async def banking_error_handler(request: Request, exc: BankingError):
    return JSONResponse(status_code=exc.status_code, content=exc.content)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    if request.method == "POST":
        message = "Incomplete transaction details."
    else:
        message = "Invalid request parameters."

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "type": "Error",
            "name": "Bad request",
            "message": message,
            "details": details,
        }
    )


# Include routers
app.include_router(accounts_router)
app.include_router(transactions_router)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"Welcome to the {settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "docs": "/docs"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
