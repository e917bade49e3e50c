"""
Auth Routes

- POST /auth/register  create an account (409 if the email is taken)
- POST /auth/login     exchange credentials for a bearer token
- POST /auth/onboard   set bio and country; returns a token with onboarded=true
"""

from fastapi import APIRouter, status

from showlist.api.dependencies import CurrentUserDep, UserServiceDep
from showlist.api.models.auth import LoginRequest, OnboardRequest, RegisterRequest

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, users: UserServiceDep):
    user = await users.register(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    return {"success": True, "user": user}


@router.post("/login")
async def login(body: LoginRequest, users: UserServiceDep):
    token = await users.login(body.email, body.password)
    return {"success": True, "token": token}


@router.post("/onboard")
async def onboard(body: OnboardRequest, user_id: CurrentUserDep, users: UserServiceDep):
    token = await users.onboard(user_id, bio=body.bio, country=body.country)
    return {"success": True, "token": token}
