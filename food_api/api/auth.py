"""
Food API — Auth API routes
/api/logout and /api/user sit behind FirebaseAuthMiddleware, which puts
the verified identity on request.state.user.
"""
from fastapi import APIRouter, Depends, Request, status

from food_api.api.deps import get_identity
from food_api.schemas.auth import Credentials, CurrentUserResponse, SessionResponse
from food_api.schemas.common import MessageResponse
from food_api.services.identity import IdentityGateway

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/signup", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def signup(payload: Credentials, identity: IdentityGateway = Depends(get_identity)):
    session = await identity.sign_up(payload.email, payload.password)
    return SessionResponse(message="User created.", token=session.token, user=session.user)


@router.post("/login", response_model=SessionResponse)
async def login(payload: Credentials, identity: IdentityGateway = Depends(get_identity)):
    session = await identity.log_in(payload.email, payload.password)
    return SessionResponse(message="Logged in.", token=session.token, user=session.user)


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request, identity: IdentityGateway = Depends(get_identity)):
    """Revoke every session of the caller; old ID tokens stop verifying."""
    await identity.revoke_sessions(request.state.user.uid)
    return MessageResponse(message="Logged out.")


@router.get("/user", response_model=CurrentUserResponse)
async def current_user(request: Request, identity: IdentityGateway = Depends(get_identity)):
    return CurrentUserResponse(user=await identity.get_user(request.state.user.uid))
