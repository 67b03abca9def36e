from __future__ import annotations

from pydantic import BaseModel

from rental.booking.domain.entity import Booking
from rental.booking.domain.value_object import (
    AvailabilityReport,
    OwnerDashboard,
    VehicleAvailability,
)


class BookingData(BaseModel):
    """予約データのレスポンスモデル"""

    booking_id: str
    vehicle_id: str
    renter_id: str
    owner_id: str
    start_at: str
    end_at: str
    status: str
    price_amount: str | None = None
    price_currency: str | None = None
    payment_reference: str | None = None
    renter_name: str | None = None
    renter_email: str | None = None
    created_at: str
    updated_at: str


class AvailabilityData(BaseModel):
    """空き状況のレスポンスモデル"""

    vehicle_id: str
    start_at: str
    end_at: str
    available: bool
    conflicting_booking_id: str | None = None
    conflict_ends_at: str | None = None
    next_booking_starts_at: str | None = None


class VehicleAvailabilityData(BaseModel):
    """車両ごとの稼働状況のレスポンスモデル"""

    vehicle_id: str
    booked_now: bool
    next_available_at: str | None = None
    current_booking_id: str | None = None


class MoneyData(BaseModel):
    amount: str
    currency: str


class DashboardData(BaseModel):
    """オーナー向けダッシュボードのレスポンスモデル"""

    total_vehicles: int
    total_bookings: int
    pending_bookings: int
    confirmed_bookings: int
    confirmed_revenue: list[MoneyData]
    recent_bookings: list[BookingData]


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: BookingData


class BookingListResponse(BaseModel):
    status: str = "success"
    data: list[BookingData]
    count: int


class AvailabilityResponse(BaseModel):
    status: str = "success"
    data: AvailabilityData


class AvailabilityListResponse(BaseModel):
    status: str = "success"
    data: list[AvailabilityData]
    count: int


class DashboardResponse(BaseModel):
    status: str = "success"
    data: DashboardData


class VehicleAvailabilityListResponse(BaseModel):
    status: str = "success"
    data: list[VehicleAvailabilityData]
    count: int


def _iso(value) -> str | None:
    return value.isoformat() if value is not None else None


def to_booking_data(booking: Booking) -> BookingData:
    """Booking エンティティをレスポンスモデルに変換する"""
    return BookingData(
        booking_id=str(booking.id),
        vehicle_id=str(booking.vehicle_id),
        renter_id=str(booking.renter_id),
        owner_id=str(booking.owner_id),
        start_at=booking.window.start.isoformat(),
        end_at=booking.window.end.isoformat(),
        status=booking.status.value,
        price_amount=str(booking.price.amount) if booking.price else None,
        price_currency=str(booking.price.currency) if booking.price else None,
        payment_reference=(
            str(booking.payment_reference) if booking.payment_reference else None
        ),
        renter_name=booking.renter_info.name if booking.renter_info else None,
        renter_email=booking.renter_info.email if booking.renter_info else None,
        created_at=booking.created_at.isoformat(),
        updated_at=booking.updated_at.isoformat(),
    )


def to_response(booking: Booking) -> dict:
    """Booking エンティティをレスポンス辞書に変換する"""
    return SuccessResponse(data=to_booking_data(booking)).model_dump()


def to_list_response(bookings: list[Booking]) -> dict:
    return BookingListResponse(
        data=[to_booking_data(b) for b in bookings], count=len(bookings)
    ).model_dump()


def to_availability_data(report: AvailabilityReport) -> AvailabilityData:
    return AvailabilityData(
        vehicle_id=str(report.vehicle_id),
        start_at=report.window.start.isoformat(),
        end_at=report.window.end.isoformat(),
        available=report.available,
        conflicting_booking_id=(
            str(report.conflicting_booking.id) if report.conflicting_booking else None
        ),
        conflict_ends_at=_iso(report.conflict_ends_at),
        next_booking_starts_at=_iso(report.next_booking_starts_at),
    )


def to_availability_response(report: AvailabilityReport) -> dict:
    return AvailabilityResponse(data=to_availability_data(report)).model_dump()


def to_availability_list_response(reports: list[AvailabilityReport]) -> dict:
    return AvailabilityListResponse(
        data=[to_availability_data(r) for r in reports], count=len(reports)
    ).model_dump()


def to_vehicle_availability_response(items: list[VehicleAvailability]) -> dict:
    return VehicleAvailabilityListResponse(
        data=[
            VehicleAvailabilityData(
                vehicle_id=str(item.vehicle_id),
                booked_now=item.booked_now,
                next_available_at=_iso(item.next_available_at),
                current_booking_id=(
                    str(item.current_booking.id) if item.current_booking else None
                ),
            )
            for item in items
        ],
        count=len(items),
    ).model_dump()


def to_dashboard_response(dashboard: OwnerDashboard) -> dict:
    """OwnerDashboard をレスポンス辞書に変換する"""
    return DashboardResponse(
        data=DashboardData(
            total_vehicles=dashboard.total_vehicles,
            total_bookings=dashboard.total_bookings,
            pending_bookings=dashboard.pending_bookings,
            confirmed_bookings=dashboard.confirmed_bookings,
            confirmed_revenue=[
                MoneyData(amount=str(m.amount), currency=str(m.currency))
                for m in dashboard.confirmed_revenue
            ],
            recent_bookings=[to_booking_data(b) for b in dashboard.recent_bookings],
        )
    ).model_dump()
