from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.router import api_router
from api.dependencies.rate_limits import setup_rate_limiter
from infrastructure.services import get_settings
from server.exception_handlers import setup_exception_handlers
from server.lifespan import lifespan
from server.middleware import CorrelationIdMiddleware

settings = get_settings()

handler = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
setup_rate_limiter(handler)
setup_exception_handlers(handler)

handler.add_middleware(CorrelationIdMiddleware)
handler.add_middleware(
    CORSMiddleware,
    allow_origins=settings.server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


handler.include_router(api_router)
