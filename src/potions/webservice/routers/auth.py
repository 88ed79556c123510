"""Registration and session endpoints."""

from fastapi import APIRouter, Depends, Response

from potions.auth.service import UserService
from potions.auth.tokens import TokenService
from potions.configs import COOKIE_NAME, COOKIE_SECURE
from potions.webservice.deps import get_token_service, get_user_service
from potions.webservice.schemas.common import Credentials, LoginResponse, MessageResponse, RegisterRequest

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=MessageResponse, status_code=201)
def register(payload: RegisterRequest, users: UserService = Depends(get_user_service)) -> MessageResponse:
    """Create a user account."""
    users.create_user(payload.username, payload.password)
    return MessageResponse(message="User created")


@router.post("/login", response_model=LoginResponse)
def login(
    payload: Credentials,
    response: Response,
    users: UserService = Depends(get_user_service),
    tokens: TokenService = Depends(get_token_service),
) -> LoginResponse:
    """Check credentials and set the session cookie."""
    user = users.verify(payload.username, payload.password)
    token = tokens.issue(user.principal())
    response.set_cookie(
        COOKIE_NAME,
        token,
        max_age=tokens.ttl_seconds,
        httponly=True,
        samesite="strict",
        secure=COOKIE_SECURE,
    )
    return LoginResponse(message="Logged in", cookie_name=COOKIE_NAME)


@router.get("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """Clear the session cookie."""
    response.delete_cookie(COOKIE_NAME, httponly=True, samesite="strict", secure=COOKIE_SECURE)
    return MessageResponse(message="Logged out")
