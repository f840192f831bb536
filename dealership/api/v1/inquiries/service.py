from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.api.v1.inquiries.schemas import InquiryCreate, InquiryUpdate
from dealership.core.exceptions import AppException
from dealership.models.enums import InquiryStatus
from dealership.models.sell_inquiry import SellInquiry


class InquiryService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_inquiry(self, data: InquiryCreate) -> SellInquiry:
        inquiry = SellInquiry(
            owner_name=data.owner_name.strip(),
            phone=data.phone.strip(),
            whatsapp=data.whatsapp,
            brand=data.brand.strip(),
            model=data.model.strip(),
            year=data.year,
            km_driven=data.km_driven,
            fuel_type=data.fuel_type.value if data.fuel_type else None,
            transmission=data.transmission.value if data.transmission else None,
            expected_price=data.expected_price,
            description=data.description,
            status=InquiryStatus.pending.value,
        )
        self.db.add(inquiry)
        await self.db.commit()
        await self.db.refresh(inquiry)
        return inquiry

    async def get_inquiries(
        self,
        skip: int = 0,
        limit: int = 100,
        status: Optional[InquiryStatus] = None,
    ) -> List[SellInquiry]:
        query = select(SellInquiry)
        if status:
            query = query.where(SellInquiry.status == status.value)
        query = query.order_by(SellInquiry.created_at.desc(), SellInquiry.id).offset(skip).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_inquiry(self, inquiry_id: UUID, data: InquiryUpdate) -> SellInquiry:
        inquiry = await self.db.get(SellInquiry, inquiry_id)
        if not inquiry:
            AppException().raise_404(f"Inquiry with id {inquiry_id} not found")
        update_data = data.model_dump(exclude_unset=True)
        if "status" in update_data:
            if update_data["status"] is None:
                AppException().raise_400("status cannot be null")
            inquiry.status = update_data["status"].value
        if "admin_notes" in update_data:
            inquiry.admin_notes = update_data["admin_notes"]
        await self.db.commit()
        await self.db.refresh(inquiry)
        return inquiry

    async def delete_inquiry(self, inquiry_id: UUID) -> None:
        inquiry = await self.db.get(SellInquiry, inquiry_id)
        if not inquiry:
            AppException().raise_404(f"Inquiry with id {inquiry_id} not found")
        await self.db.delete(inquiry)
        await self.db.commit()
