from fastapi import APIRouter
from cms_admin.api.endpoints import (
    users,
    comments
)

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(comments.router, prefix="/admin/comments", tags=["comments"])
