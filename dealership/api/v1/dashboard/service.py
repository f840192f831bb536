import io

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.api.v1.dashboard.schemas import DashboardResponse
from dealership.core.listing_query import ListingFilter, StatusFilter, build_statement
from dealership.models.car import Car
from dealership.models.enums import CarStatus, InquiryStatus
from dealership.models.sell_inquiry import SellInquiry

EXPORT_HEADERS = ["Brand", "Model", "Price", "Status", "Fuel", "KM", "Year"]


class DashboardService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, query) -> int:
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def get_dashboard_data(self) -> DashboardResponse:
        """Inventory and inquiry counters for the admin dashboard."""
        status_counts = dict(
            (await self.db.execute(select(Car.status, func.count(Car.id)).group_by(Car.status))).all()
        )
        return DashboardResponse(
            total_cars=sum(status_counts.values()),
            available_cars=status_counts.get(CarStatus.available.value, 0),
            sold_cars=status_counts.get(CarStatus.sold.value, 0),
            upcoming_cars=status_counts.get(CarStatus.upcoming.value, 0),
            featured_cars=await self._count(
                select(func.count(Car.id)).where(Car.is_featured.is_(True))
            ),
            total_inquiries=await self._count(select(func.count(SellInquiry.id))),
            pending_inquiries=await self._count(
                select(func.count(SellInquiry.id)).where(SellInquiry.status == InquiryStatus.pending.value)
            ),
        )

    async def export_inventory_to_excel(self) -> bytes:
        """Every listing, newest first, as an .xlsx workbook."""
        result = await self.db.execute(build_statement(ListingFilter(status=StatusFilter.all)))
        cars = result.scalars().all()

        wb = Workbook()
        ws = wb.active
        ws.title = "Inventory"

        for col, header in enumerate(EXPORT_HEADERS, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = Font(bold=True)
            cell.alignment = Alignment(horizontal="center", wrap_text=True)

        for row_idx, car in enumerate(cars, start=2):
            ws.cell(row=row_idx, column=1, value=car.brand)
            ws.cell(row=row_idx, column=2, value=car.model)
            ws.cell(row=row_idx, column=3, value=car.price)
            ws.cell(row=row_idx, column=4, value=car.status)
            ws.cell(row=row_idx, column=5, value=car.fuel_type)
            ws.cell(row=row_idx, column=6, value=car.km_driven)
            ws.cell(row=row_idx, column=7, value=car.year)

        buffer = io.BytesIO()
        wb.save(buffer)
        buffer.seek(0)
        return buffer.getvalue()
