"""
API Routers module.
"""
from app.routers import auth, health, photos, users

__all__ = ["auth", "health", "photos", "users"]
