from .currency import Currency as Currency
from .iso_date_time import IsoDateTime as IsoDateTime
from .money import Money as Money
from .user_id import UserId as UserId
from .vehicle_id import VehicleId as VehicleId
