import sentry_sdk

from timetrack.core.config import settings
from timetrack.core.logging import get_logger

logger = get_logger(__name__)


def configure_error_monitoring() -> None:
    if not settings.sentry_dsn:
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.env,
        traces_sample_rate=0.2,
        send_default_pii=False,
    )
    logger.info("sentry_enabled", env=settings.env)


def capture_exception(exc: BaseException) -> None:
    if settings.sentry_dsn:
        sentry_sdk.capture_exception(exc)
