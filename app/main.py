# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Gestor Financeiro API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.exceptions import (
    FinanceAPIException,
    finance_exception_handler,
    validation_exception_handler,
)
from app.routers import health, users, categories, expenses, incomes, budgets
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    The API holds no connections of its own; the Supabase client is
    created lazily on first use.
    """
    logger.info(f"Starting Gestor Financeiro API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Gestor Financeiro API")


# Create FastAPI application
app = FastAPI(
    title="Gestor Financeiro API",
    description="""
## Personal Finance API

Track expenses and incomes, organize them in categories and plan
monthly budgets per category.

### Quick Start

```bash
# 1. Register
curl -X POST http://localhost:8000/api/v1/auth/register \\
  -H "Content-Type: application/json" \\
  -d '{"username": "maria", "email": "maria@example.com", "password": "secret123"}'

# 2. Log in and keep the access_token
curl -X POST http://localhost:8000/api/v1/auth/login \\
  -H "Content-Type: application/json" \\
  -d '{"email": "maria@example.com", "password": "secret123"}'

# 3. Register an expense
curl -X POST http://localhost:8000/api/v1/expenses \\
  -H "Authorization: Bearer $TOKEN" \\
  -H "Content-Type: application/json" \\
  -d '{"date": "2024-03-10", "category": "Mercado", "amount": "150.00"}'

# 4. Monthly totals
curl "http://localhost:8000/api/v1/expenses/charts/bar?start=2024-01&end=2024-06" \\
  -H "Authorization: Bearer $TOKEN"
```
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Registration, login and token verification",
        },
        {
            "name": "Users",
            "description": "Own account and account administration",
        },
        {
            "name": "Categories",
            "description": "Expense and income categories",
        },
        {
            "name": "Expenses",
            "description": "Expenses, range searches and charts",
        },
        {
            "name": "Incomes",
            "description": "Incomes, range searches and charts",
        },
        {
            "name": "Budgets",
            "description": "Monthly spending limits per category",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(FinanceAPIException)
async def handle_finance_exception(request: Request, exc: FinanceAPIException):
    """Handle domain exceptions raised by the services."""
    return await finance_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies, paths and queries."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Account endpoints
app.include_router(
    users.router,
    prefix="/api/v1/users",
    tags=["Users"]
)

# Category endpoints
app.include_router(
    categories.router,
    prefix="/api/v1/categories",
    tags=["Categories"]
)

# Expense endpoints
app.include_router(
    expenses.router,
    prefix="/api/v1/expenses",
    tags=["Expenses"]
)

# Income endpoints
app.include_router(
    incomes.router,
    prefix="/api/v1/incomes",
    tags=["Incomes"]
)

# Monthly budget endpoints
app.include_router(
    budgets.router,
    prefix="/api/v1/budgets",
    tags=["Budgets"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Gestor Financeiro API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
