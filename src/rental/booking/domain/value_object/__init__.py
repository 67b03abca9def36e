from .availability_report import AvailabilityReport as AvailabilityReport
from .availability_report import VehicleAvailability as VehicleAvailability
from .booking_id import BookingId as BookingId
from .caller import Caller as Caller
from .owner_dashboard import OwnerDashboard as OwnerDashboard
from .payment_reference import PaymentReference as PaymentReference
from .renter_info import RenterInfo as RenterInfo
from .time_window import TimeWindow as TimeWindow
from .vehicle_snapshot import VehicleSnapshot as VehicleSnapshot
