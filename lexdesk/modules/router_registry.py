"""Central router registry for module-oriented composition."""
from __future__ import annotations

from fastapi import FastAPI

from lexdesk.modules.billing.router import ROUTERS as BILLING_ROUTERS
from lexdesk.modules.matters.router import ROUTERS as MATTERS_ROUTERS

ALL_ROUTERS = MATTERS_ROUTERS + BILLING_ROUTERS


def include_all_routers(app: FastAPI) -> None:
    for router in ALL_ROUTERS:
        app.include_router(router)
