from fastapi import APIRouter

from api.routes.email import router as email_router
from api.routes.notify import router as notify_router
from api.routes.push import router as push_router
from api.routes.system import router as system_router
from api.routes.whatsapp import router as whatsapp_router

api_router = APIRouter()

# Notification endpoints served under /api
notifications_router = APIRouter()
notifications_router.include_router(email_router)
notifications_router.include_router(whatsapp_router)
notifications_router.include_router(push_router)
notifications_router.include_router(notify_router)

api_router.include_router(system_router)
api_router.include_router(notifications_router, prefix="/api")
