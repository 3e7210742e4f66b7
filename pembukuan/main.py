import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pembukuan import auth, config
from pembukuan.database import Base, SessionLocal, engine
from pembukuan.errors import ApiError
from pembukuan.logging_config import configure_logging
from pembukuan.routers import chart_of_accounts, home, transactions, users
from pembukuan.seed import seed_database

# Get a logger for this module (pembukuan.main)
logger = logging.getLogger(__name__)

API_PREFIX = "/api"
INTERNAL_ERROR = "An unexpected error occurred. Please try again."


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Malformed JSON or a body field of the wrong JSON type
        errors = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg")}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"code": 400, "error": "Invalid JSON payload", "errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"code": exc.status_code, "error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"code": 500, "error": INTERNAL_ERROR})


def create_app(seed: bool = config.SEED_DEMO_DATA) -> FastAPI:
    configure_logging()
    logger.info("Application starting up...")

    # Create database tables
    Base.metadata.create_all(bind=engine)
    if seed:
        db = SessionLocal()
        try:
            seed_database(db)
        finally:
            db.close()

    app = FastAPI(title="Pembukuan API", version="1.0.0")

    # Enable CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOWED_ORIGINS,
        allow_credentials="*" not in config.CORS_ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        openapi_schema = get_openapi(
            title="Pembukuan API",
            version="1.0.0",
            description="Bookkeeping API: chart of accounts, omzet and pengeluaran transactions, users",
            routes=app.routes,
        )
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
            }
        }
        # Apply security globally to all endpoints
        openapi_schema["security"] = [{"BearerAuth": []}]
        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    register_exception_handlers(app)

    app.include_router(auth.router, prefix=API_PREFIX)
    app.include_router(home.router, prefix=API_PREFIX)
    app.include_router(users.router, prefix=API_PREFIX)
    app.include_router(chart_of_accounts.router, prefix=API_PREFIX)
    app.include_router(transactions.omzet_router, prefix=API_PREFIX)
    app.include_router(transactions.pengeluaran_router, prefix=API_PREFIX)

    @app.get("/")
    async def root():
        return {"message": "Welcome to the Pembukuan API"}

    return app


app = create_app()
