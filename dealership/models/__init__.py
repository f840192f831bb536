# Import every model so string relationships resolve wherever one is used.
from dealership.models.user import User  # noqa: F401
from dealership.models.car import Car  # noqa: F401
from dealership.models.car_image import CarImage  # noqa: F401
from dealership.models.sell_inquiry import SellInquiry  # noqa: F401
