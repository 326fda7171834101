from fastapi import APIRouter, Request

from api.dependencies.rate_limits import get_limiter
from infrastructure.services import NotificationServiceDep, SettingsDep

router = APIRouter(tags=["System"])
limiter = get_limiter()


# Load balancer health checks hit these every few seconds, so the rate limit is generous.
@router.get("/version")
@limiter.limit("50/minute")
def get_version(request: Request, settings: SettingsDep):  # pylint: disable=unused-argument
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
@limiter.limit("50/minute")
def get_health(request: Request):  # pylint: disable=unused-argument
    """Healthcheck endpoint."""
    return {"status": "ok"}


@router.get("/health/channels")
@limiter.limit("10/minute")
def get_channels_health(
    request: Request,  # pylint: disable=unused-argument
    notification_service: NotificationServiceDep,
):
    """Provider configuration health of every notification channel."""
    health = notification_service.health_check()
    return {
        "channels": {
            name: {
                "healthy": result.is_success,
                "message": result.message,
                "errorCode": result.error_code,
            }
            for name, result in health.items()
        }
    }
