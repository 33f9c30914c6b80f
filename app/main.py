import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import settings
from app.core.errors import UserAdminError, ValidationError, describe_errors
from app.database import create_db_and_tables
from app.routers import auth
from app.routers import users

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)
app.include_router(auth.router)
app.include_router(users.router)


@app.exception_handler(UserAdminError)
async def user_admin_error_handler(request: Request, exc: UserAdminError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError(describe_errors(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.on_event("startup")
def on_startup():
    logger.info("%s starting (%s)", settings.app_name, settings.environment)
    create_db_and_tables()


@app.get("/")
def root():
    return {"message": f"{settings.app_name} is running"}
