# support_dashboard/backend/app/api/v1/dashboard.py

from fastapi import APIRouter, Depends

from ...dashboard.controller import DashboardController
from ...deps import get_controller
from ...schemas.dashboard import DashboardView, FilterSpec, SelectionUpdate

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardView)
def get_view(controller: DashboardController = Depends(get_controller)):
    return controller.derived_view()


@router.post("/reload", response_model=DashboardView)
async def reload_tickets(controller: DashboardController = Depends(get_controller)):
    # store failures come back in last_error, never as a 5xx
    return await controller.reload()


@router.put("/filters", response_model=DashboardView)
def replace_filters(
    spec: FilterSpec,
    controller: DashboardController = Depends(get_controller),
):
    return controller.update_filters(spec)


@router.delete("/filters", response_model=DashboardView)
def clear_filters(controller: DashboardController = Depends(get_controller)):
    return controller.clear_filters()


@router.put("/selection", response_model=DashboardView)
def select_ticket(
    payload: SelectionUpdate,
    controller: DashboardController = Depends(get_controller),
):
    return controller.select_ticket(payload.ticket_id)
