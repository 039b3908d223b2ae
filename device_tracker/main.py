from prometheus_fastapi_instrumentator import Instrumentator

from device_tracker import create_app
from device_tracker.core.logging import configure_logging
from device_tracker.settings import get_settings

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
app = create_app(settings)

if settings.METRICS_ENABLED:
    Instrumentator().instrument(app).expose(app)


def run() -> None:
    import uvicorn

    # uvicorn drains in-flight requests on SIGTERM before the lifespan closes
    # the database.
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)
