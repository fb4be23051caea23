"""form-demo - GET vs POST form handling, shown without a framework's model binding."""

from robyn import Robyn

from app.api.forms import router as forms_router
from app.api.health import router as health_router
from app.api.static import router as static_router
from app.core.lifespan import create_lifespan
from app.core.logger import LogIcon, logger
from app.core.settings import settings as st
from app.events.static_directory import StaticDirectoryEvent
from app.middlewares.base import MiddlewareHandler
from app.middlewares.headers import SecurityHeadersMiddleware

app = Robyn(__file__)

# Lifespan events
lifespan = create_lifespan(app)
lifespan.register(StaticDirectoryEvent)

app.startup_handler(lifespan.startup)
app.shutdown_handler(lifespan.shutdown)

# Routers
app.include_router(health_router)
app.include_router(forms_router)
app.include_router(static_router)

# Middlewares
middlewares = MiddlewareHandler(app)
middlewares.register(SecurityHeadersMiddleware())


def main() -> None:
    logger.info(f"Starting {st.API_NAME}", icon=LogIcon.START, host=st.API_HOST, port=st.API_PORT)
    app.start(host=st.API_HOST, port=st.API_PORT)


if __name__ == "__main__":
    main()
