from .entity import Booking as Booking
from .enum import BookingStatus as BookingStatus
from .enum import Role as Role
from .factory import BookingFactory as BookingFactory
from .repository import BookingRepository as BookingRepository
from .repository import VehicleCatalog as VehicleCatalog
from .repository import VehicleSchedule as VehicleSchedule
from .value_object import AvailabilityReport as AvailabilityReport
from .value_object import BookingId as BookingId
from .value_object import Caller as Caller
from .value_object import PaymentReference as PaymentReference
from .value_object import RenterInfo as RenterInfo
from .value_object import TimeWindow as TimeWindow
from .value_object import VehicleAvailability as VehicleAvailability
from .value_object import VehicleSnapshot as VehicleSnapshot
