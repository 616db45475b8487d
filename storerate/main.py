import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from storerate.core.config import settings
from storerate.core.exceptions import StoreRatingError
from storerate.core.logging_config import setup_logging
from storerate.db.session import init_db, test_connection
from storerate.routers.admin_router import router as admin_router
from storerate.routers.rating_router import router as rating_router
from storerate.routers.store_router import router as store_router
from storerate.routers.user_router import router as user_router
from storerate.middleware.auth_middleware import AuthMiddleware

logger = logging.getLogger(__name__)

app = FastAPI(title="Store Rating API")


def first_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    message = str(errors[0].get("msg", "Invalid input"))
    # pydantic prefixes messages raised from our validators
    return message.removeprefix("Value error, ")


@app.exception_handler(StoreRatingError)
async def store_rating_error_handler(request: Request, exc: StoreRatingError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": first_error_message(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.on_event("startup")
def startup_event():
    setup_logging()
    logger.info("Starting server...")
    init_db()
    test_connection()


app.add_middleware(AuthMiddleware)
app.include_router(user_router)
app.include_router(admin_router)
app.include_router(store_router)
app.include_router(rating_router)


@app.get("/ping")
def ping():
    return {"ping": "pong"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("storerate.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
