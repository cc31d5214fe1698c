from fastapi import APIRouter

from appointme.api.routes import (
    admin_auth,
    auth,
    bookings,
    chatbot,
    notifications,
    profile,
    provider_applications,
    services,
    user_settings,
    utils,
)

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(admin_auth.router)
api_router.include_router(utils.router)

# Marketplace routes
api_router.include_router(services.router)
api_router.include_router(bookings.router)
api_router.include_router(provider_applications.router)
api_router.include_router(notifications.router)

# Account routes
api_router.include_router(profile.router)
api_router.include_router(user_settings.router)

api_router.include_router(chatbot.router)
