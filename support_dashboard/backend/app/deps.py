# support_dashboard/backend/app/deps.py

from fastapi import Depends, HTTPException, Request

from .dashboard.controller import DashboardController
from .store.sql import SqlTicketStore


def get_controller(request: Request) -> DashboardController:
    """FastAPI dependency returning the process-wide dashboard controller."""
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        raise HTTPException(status_code=503, detail="Dashboard is not initialised")
    return controller


def uses_local_store(controller: DashboardController) -> bool:
    return isinstance(controller.store, SqlTicketStore)


def get_local_controller(
    controller: DashboardController = Depends(get_controller),
) -> DashboardController:
    """
    Like get_controller, but only when the dashboard reads the local tickets
    table. Writes to that table would never show up on a dashboard fed by a
    remote store.
    """
    if not uses_local_store(controller):
        raise HTTPException(
            status_code=409,
            detail="Tickets are managed by the remote ticket store; "
            "create and edit them there",
        )
    return controller
