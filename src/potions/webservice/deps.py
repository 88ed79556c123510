"""Dependency providers for the potions webservice."""

from fastapi import Request

from potions.auth.service import UserService
from potions.auth.tokens import TokenService
from potions.potions_api.db_api import DBAPI


def get_db_api() -> DBAPI:
    """Return the potions DB API facade."""
    return DBAPI()


def get_user_service() -> UserService:
    """Return the credential service."""
    return UserService()


def get_token_service(request: Request) -> TokenService:
    """Return the token service the app was built with."""
    return request.app.state.token_service
