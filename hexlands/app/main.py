"""FastAPI application for the Hexlands game server."""

import common.app

from .routers import catan

app = common.app.create_app('Hexlands')

app.include_router(catan.router)
