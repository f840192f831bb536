from pydantic import BaseModel


class DashboardResponse(BaseModel):
    total_cars: int
    available_cars: int
    sold_cars: int
    upcoming_cars: int
    featured_cars: int
    total_inquiries: int
    pending_inquiries: int
