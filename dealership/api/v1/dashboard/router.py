from datetime import date

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.api.v1.dashboard.schemas import DashboardResponse
from dealership.api.v1.dashboard.service import DashboardService
from dealership.core.deps import get_db, get_current_active_admin_user

router = APIRouter()


@router.get(
    "",
    response_model=DashboardResponse,
    status_code=status.HTTP_200_OK,
    summary="Get admin dashboard data",
    description="Listing counts by status and sell-inquiry counts. Admin only.",
    dependencies=[Depends(get_current_active_admin_user)],
)
async def get_dashboard(db: AsyncSession = Depends(get_db)):
    return await DashboardService(db).get_dashboard_data()


@router.get(
    "/export",
    status_code=status.HTTP_200_OK,
    summary="Export inventory to Excel",
    description="Download every listing as an Excel (.xlsx) file. Admin only.",
    dependencies=[Depends(get_current_active_admin_user)],
)
async def export_inventory_excel(db: AsyncSession = Depends(get_db)):
    content = await DashboardService(db).export_inventory_to_excel()
    filename = f"inventory_{date.today().isoformat()}.xlsx"
    return Response(
        content=content,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
