from .booking_status import BookingStatus as BookingStatus
from .role import Role as Role
