"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from mindfulchat.api.routes import auth, conversations, chat, exercises, mood, crisis

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(conversations.router)
api_router.include_router(chat.router)
api_router.include_router(exercises.router)
api_router.include_router(exercises.seed_router)
api_router.include_router(mood.router)
api_router.include_router(crisis.router)
