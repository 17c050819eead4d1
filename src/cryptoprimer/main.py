from fastapi import (
    FastAPI,
    Request,
    status,
)
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cryptoprimer.middleware import RateLimit
from cryptoprimer.routers import get_routers
from cryptoprimer.shared import Logger, load_config
from cryptoprimer.shared.config import RateLimit as RateLimitConfig

logger = Logger(__name__).get_logger()

config = load_config()


def format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into `body.field: message; ...`."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request fields as 400 with a readable message."""
    detail = format_validation_errors(exc)
    logger.warning("Validation error on %s: %s", request.url.path, detail)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail},
    )


# ================================================================================
#       FastAPI Setup
# ================================================================================
def create_app(rate_limit: RateLimitConfig = config.network.rate_limit) -> FastAPI:
    new_app = FastAPI(title=config.general.name)

    for router in get_routers():
        new_app.include_router(router)

    new_app.add_exception_handler(RequestValidationError, validation_exception_handler)

    origins = ["*"]

    new_app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    new_app.add_middleware(
        RateLimit,
        timeout_period_s=rate_limit.timeout_period,
        max_per_second=rate_limit.requests_per_second,
    )

    return new_app


app = create_app()


# ================================================================================
#       Command Line
# ================================================================================
def welcome():
    # Log server banner
    for line in config.general.title.split("\n"):
        logger.info(line)

    logger.info("Starting %s on %s:%s", config.general.name, config.network.host, config.network.port)


def main():
    welcome()

    import uvicorn

    uvicorn.run(
        "cryptoprimer.main:app",
        host=config.network.host,
        port=config.network.port,
        reload=config.network.reload,
    )


if __name__ == "__main__":
    main()
