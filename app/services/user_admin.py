"""Admin-only user management.

Each operation takes an explicit :class:`RequestContext` and the raw input of
the call. Guards run in order (admin gate, then requested-user lookup where the
operation targets an existing user) and raise :mod:`app.core.errors`
exceptions; nothing touches the store before the admin gate has passed.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from fastapi import status
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, col, or_, select

from app.core.avatar import get_avatar_url_from_user
from app.core.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StoreFailure,
    ValidationError,
    describe_errors,
)
from app.core.redaction import exclude
from app.models.user import Role, User, UserCreate, UserUpdate


logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 40


@dataclass(frozen=True)
class RequestContext:
    session: Session
    user: Optional[User]
    requested_user: Optional[Dict[str, Any]] = None


class UserIdInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")


class ListUsersInput(BaseModel):
    search: Optional[str] = None
    skip: Optional[int] = Field(default=None, ge=0)
    take: Optional[int] = Field(default=None, ge=1, le=MAX_PAGE_SIZE)


def _parse(model, raw_input: Any):
    try:
        return model.model_validate({} if raw_input is None else raw_input)
    except PydanticValidationError as exc:
        raise ValidationError(describe_errors(exc.errors())) from exc


def _public(user: User) -> Dict[str, Any]:
    return exclude(user.model_dump())


@contextmanager
def _store_errors(session: Session):
    try:
        yield
    except IntegrityError as exc:
        session.rollback()
        logger.warning("Constraint violated: %s", exc.orig)
        raise ConflictError(str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Store failure: %s", exc, exc_info=True)
        raise StoreFailure(str(getattr(exc, "orig", None) or exc)) from exc


# =========================
# GUARDS
# =========================

def require_admin(ctx: RequestContext) -> RequestContext:
    if ctx.user is None:
        raise AuthorizationError("Authentication required", status_code=status.HTTP_401_UNAUTHORIZED)

    if ctx.user.role != Role.ADMIN:
        logger.warning("User %s refused admin access", ctx.user.id)
        raise AuthorizationError("Admin access required")

    return ctx


def resolve_requested_user(ctx: RequestContext, raw_input: Any) -> RequestContext:
    """Load the user named by ``userId`` into a new context as ``requested_user``."""
    try:
        user_id = UserIdInput.model_validate({} if raw_input is None else raw_input).user_id
    except PydanticValidationError as exc:
        raise ValidationError("User id is required") from exc

    with _store_errors(ctx.session):
        user = ctx.session.get(User, user_id)

    if user is None:
        raise NotFoundError("User not found")

    return replace(ctx, requested_user=_public(user))


# =========================
# OPERATIONS
# =========================

class UserAdminService:

    def get_user(self, ctx: RequestContext, raw_input: Any) -> Dict[str, Any]:
        ctx = resolve_requested_user(require_admin(ctx), raw_input)
        return {"user": ctx.requested_user}

    def list_users(self, ctx: RequestContext, raw_input: Any = None) -> List[Dict[str, Any]]:
        """Page through users by id, optionally filtered on username or email.

        The search is a substring match with LIKE wildcards escaped; case
        sensitivity follows the database's LIKE (insensitive for ASCII on
        SQLite, sensitive on PostgreSQL).
        """
        require_admin(ctx)
        params = _parse(ListUsersInput, raw_input)

        statement = select(User).order_by(User.id)
        if params.search:
            statement = statement.where(
                or_(
                    col(User.username).contains(params.search, autoescape=True),
                    col(User.email).contains(params.search, autoescape=True),
                )
            )
        if params.skip is not None:
            statement = statement.offset(params.skip)
        if params.take is not None:
            statement = statement.limit(params.take)

        with _store_errors(ctx.session):
            users = ctx.session.exec(statement).all()

        return [
            {
                **_public(user),
                "avatar": get_avatar_url_from_user(user.avatar, user.username, user.email),
            }
            for user in users
        ]

    def add_user(self, ctx: RequestContext, raw_input: Any) -> Dict[str, Any]:
        require_admin(ctx)
        body = _parse(UserCreate, raw_input)

        actor_id = ctx.user.id
        user = User.model_validate(body)
        with _store_errors(ctx.session):
            ctx.session.add(user)
            ctx.session.commit()
            ctx.session.refresh(user)

        logger.info("Admin %s added user %s", actor_id, user.id)
        return {"user": _public(user), "message": f"User with id: {user.id} added successfully"}

    def update_user(self, ctx: RequestContext, raw_input: Any) -> Dict[str, Any]:
        ctx = resolve_requested_user(require_admin(ctx), raw_input)
        changes = _parse(UserUpdate, raw_input).model_dump(exclude_unset=True)
        actor_id = ctx.user.id

        with _store_errors(ctx.session):
            user = ctx.session.get(User, ctx.requested_user["id"])
            user.sqlmodel_update(changes)
            ctx.session.add(user)
            ctx.session.commit()
            ctx.session.refresh(user)

        logger.info("Admin %s updated user %s (%s)", actor_id, user.id, ", ".join(sorted(changes)) or "no changes")
        return {"user": _public(user), "message": f"User with id: {user.id} updated successfully"}

    def delete_user(self, ctx: RequestContext, raw_input: Any) -> Dict[str, Any]:
        ctx = resolve_requested_user(require_admin(ctx), raw_input)
        user_id = ctx.requested_user["id"]
        actor_id = ctx.user.id

        with _store_errors(ctx.session):
            ctx.session.delete(ctx.session.get(User, user_id))
            ctx.session.commit()

        logger.info("Admin %s deleted user %s", actor_id, user_id)
        return {"message": f"User with id: {user_id} deleted successfully"}
