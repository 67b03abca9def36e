from .booking_events import BookingCancelled as BookingCancelled
from .booking_events import BookingConfirmed as BookingConfirmed
from .booking_events import BookingCreated as BookingCreated
from .payment_succeeded import PaymentSucceeded as PaymentSucceeded
