"""
FastAPI entrypoint for MindfulChat backend application.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mindfulchat.core.config import settings
from mindfulchat.core.errors import register_exception_handlers
from mindfulchat.core.logging import configure_logging
from mindfulchat.api.router import api_router

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="MindfulChat API",
    description="Backend API for the MindfulChat mental-wellness companion",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "MindfulChat API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
