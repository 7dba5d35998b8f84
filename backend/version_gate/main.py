from contextlib import asynccontextmanager

from fastapi import FastAPI

from version_gate.api import gate as gate_router
from version_gate.api import version as version_router
from version_gate.core import runtime
from version_gate.core.config import settings
from version_gate.core.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the controller and run the launch-time refresh.

    The launch refresh fails open, so an unreachable version service never
    blocks startup.
    """
    configure_logging(settings.log_level)
    controller = runtime.build_controller(settings)
    await controller.refresh()

    yield

    await runtime.shutdown()


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.include_router(gate_router.router, prefix=settings.api_v1_prefix)
app.include_router(version_router.router, prefix=settings.api_v1_prefix)


@app.get('/')
async def root():
    return {'status': 'ok', 'app': settings.app_name}
