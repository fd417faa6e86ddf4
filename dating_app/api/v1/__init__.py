"""
API routes aggregation
"""
from fastapi import APIRouter
from dating_app.api.v1 import auth, users, requests, chat, upload

api_router = APIRouter()

# Authentication
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])

# Users
api_router.include_router(users.router, prefix="/users", tags=["users"])

# Match requests
api_router.include_router(requests.router, prefix="/requests", tags=["requests"])

# Chat
api_router.include_router(chat.router, prefix="/chat", tags=["chat"])

# Uploads
api_router.include_router(upload.router, prefix="/upload", tags=["upload"])
