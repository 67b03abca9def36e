from .booking_repository import BookingRepository as BookingRepository
from .booking_repository import VehicleSchedule as VehicleSchedule
from .vehicle_catalog import VehicleCatalog as VehicleCatalog
