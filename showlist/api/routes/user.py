"""
User Profile Routes

- GET    /user/profile  cached profile of the caller
- PUT    /user/profile  replace editable fields (written through to the cache)
- DELETE /user/profile  delete the account with all watchlists and items
"""

from fastapi import APIRouter

from showlist.api.dependencies import CurrentUserDep, UserServiceDep
from showlist.api.models.auth import ProfileUpdateRequest

router = APIRouter(prefix="/user", tags=["User"])


@router.get("/profile")
async def get_profile(user_id: CurrentUserDep, users: UserServiceDep):
    return {"success": True, "profile": await users.get_profile(user_id)}


@router.put("/profile")
async def update_profile(body: ProfileUpdateRequest, user_id: CurrentUserDep, users: UserServiceDep):
    profile = await users.update_profile(
        user_id,
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        bio=body.bio,
        country=body.country,
    )
    return {"success": True, "profile": profile}


@router.delete("/profile")
async def delete_profile(user_id: CurrentUserDep, users: UserServiceDep):
    await users.delete_account(user_id)
    return {"success": True}
