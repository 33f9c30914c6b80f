from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Request
from sqlmodel import Session

from app.database import get_session
from app.models.user import User
from app.core.security import get_current_user
from app.services.user_admin import RequestContext, UserAdminService

router = APIRouter(prefix="/admin/users", tags=["admin-users"])

service = UserAdminService()


def get_request_context(
    session: Session = Depends(get_session),
    current_user: Optional[User] = Depends(get_current_user),
) -> RequestContext:
    return RequestContext(session=session, user=current_user)


# Inputs are handed to the service untouched: it owns validation so that the
# admin check always runs first.

@router.get("/get")
def get_user(request: Request, ctx: RequestContext = Depends(get_request_context)):
    return service.get_user(ctx, dict(request.query_params))


@router.get("/list")
def list_users(request: Request, ctx: RequestContext = Depends(get_request_context)):
    return service.list_users(ctx, dict(request.query_params))


@router.post("/add")
def add_user(
    payload: Any = Body(default=None),
    ctx: RequestContext = Depends(get_request_context),
):
    return service.add_user(ctx, payload)


@router.post("/update")
def update_user(
    payload: Any = Body(default=None),
    ctx: RequestContext = Depends(get_request_context),
):
    return service.update_user(ctx, payload)


@router.post("/delete")
def delete_user(
    payload: Any = Body(default=None),
    ctx: RequestContext = Depends(get_request_context),
):
    return service.delete_user(ctx, payload)
