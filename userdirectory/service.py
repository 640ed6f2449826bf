"""HTTP API for creating and looking up users in the in-memory directory."""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from fastapi import FastAPI, HTTPException, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import ServiceConfig
from .identifiers import next_id
from .models import NewUser, NewUserRequest, User, first_validation_error
from .store import UserStore

logger = logging.getLogger("userdirectory.service")


class UserResponse(BaseModel):
    id: uuid.UUID
    name: str
    nick: str
    birth_date: date
    stack: Optional[List[str]] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            nick=user.nick,
            birth_date=user.birth_date,
            stack=None if user.stack is None else list(user.stack),
        )


def _parse_identifier(raw: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(raw)
    except ValueError:
        return None


def seed_store(
    store: UserStore,
    payloads: List[Dict[str, Any]],
    id_generator: Callable[[], uuid.UUID],
) -> List[User]:
    """Insert configured seed users, validating each like a create request."""

    users = [NewUser.from_payload(payload) for payload in payloads]
    created: List[User] = []
    for new_user in users:
        user = new_user.to_user(id_generator())
        store.insert(user)
        created.append(user)
    if created:
        logger.info("Seeded user directory with %s user(s)", len(created))
    return created


def register_api_routes(
    app: FastAPI,
    store: UserStore,
    *,
    id_generator: Callable[[], uuid.UUID],
) -> None:
    """Expose the JSON API endpoints on the provided FastAPI application."""

    @app.get("/healthz")
    def healthcheck() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/user", response_model=List[UserResponse])
    def search_users() -> List[UserResponse]:
        users = sorted(store.list_all(), key=lambda user: user.id)
        return [UserResponse.from_user(user) for user in users]

    @app.get("/user/{user_id}", response_model=UserResponse)
    def find_user(user_id: str) -> UserResponse:
        identifier = _parse_identifier(user_id)
        user = store.get(identifier) if identifier is not None else None
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return UserResponse.from_user(user)

    @app.post("/user", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
    def create_user(request: NewUserRequest) -> UserResponse:
        user = request.to_new_user().to_user(id_generator())
        store.insert(user)
        logger.info("Created user %s (nick=%s)", user.id, user.nick)
        return UserResponse.from_user(user)

    @app.get("/count-user", response_model=int)
    def count_users() -> int:
        return store.count()

    app.add_api_route("/user-count", count_users, methods=["GET"], response_model=int)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(_: object, exc: RequestValidationError):
        error = first_validation_error(exc.errors())
        logger.info("Rejected request (field=%s): %s", error.field, error.message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": error.to_detail()},
        )


def create_app(
    *,
    store: UserStore | None = None,
    id_generator: Callable[[], uuid.UUID] | None = None,
    config: ServiceConfig | None = None,
) -> FastAPI:
    """Instantiate the FastAPI application for the user directory."""

    app_store = store if store is not None else UserStore()
    app_config = config or ServiceConfig()
    generator = id_generator or next_id

    seed_store(app_store, [dict(entry) for entry in app_config.seed_users], generator)

    app = FastAPI(
        title="User Directory API",
        version="0.1.0",
        description="In-memory directory of users with validated profiles.",
    )
    app.state.store = app_store
    app.state.config = app_config

    register_api_routes(app, app_store, id_generator=generator)

    return app


__all__ = ["UserResponse", "create_app", "register_api_routes", "seed_store"]
