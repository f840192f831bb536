from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dealership.api.v1.inquiries.schemas import InquiryCreate, InquiryResponse, InquiryUpdate
from dealership.api.v1.inquiries.service import InquiryService
from dealership.core.deps import get_db, get_current_active_admin_user
from dealership.core.email import send_inquiry_alert
from dealership.models.enums import InquiryStatus

router = APIRouter()


@router.post(
    "",
    response_model=InquiryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a sell-your-car request",
    description="Public. The dealership is alerted by e-mail when INQUIRY_ALERT_EMAIL is configured.",
)
async def create_inquiry(
    data: InquiryCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
):
    inquiry = await InquiryService(db).create_inquiry(data)
    background_tasks.add_task(send_inquiry_alert, inquiry)
    return InquiryResponse.model_validate(inquiry)


@router.get(
    "",
    response_model=List[InquiryResponse],
    summary="List sell inquiries",
    dependencies=[Depends(get_current_active_admin_user)],
)
async def list_inquiries(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    status: Optional[InquiryStatus] = Query(None, description="pending/contacted/closed"),
    db: AsyncSession = Depends(get_db),
):
    inquiries = await InquiryService(db).get_inquiries(skip=skip, limit=limit, status=status)
    return [InquiryResponse.model_validate(i) for i in inquiries]


@router.patch(
    "/{inquiry_id}",
    response_model=InquiryResponse,
    summary="Update inquiry status or notes",
    dependencies=[Depends(get_current_active_admin_user)],
)
async def update_inquiry(
    inquiry_id: UUID,
    data: InquiryUpdate,
    db: AsyncSession = Depends(get_db),
):
    inquiry = await InquiryService(db).update_inquiry(inquiry_id, data)
    return InquiryResponse.model_validate(inquiry)


@router.delete(
    "/{inquiry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete inquiry",
    dependencies=[Depends(get_current_active_admin_user)],
)
async def delete_inquiry(
    inquiry_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    await InquiryService(db).delete_inquiry(inquiry_id)
    return None
