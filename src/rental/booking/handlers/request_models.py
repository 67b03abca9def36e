from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from rental.booking.domain.enum import BookingStatus
from rental.shared.utils import to_decimal


class TimeWindowRequest(BaseModel):
    """予約期間の入力スキーマ"""

    vehicle_id: str = Field(..., min_length=1, description="車両ID")

    start_at: str = Field(
        ...,
        description="貸出開始（ISO 8601形式）",
        examples=["2026-11-01T10:00:00Z"],
    )

    end_at: str = Field(
        ...,
        description="返却（ISO 8601形式）",
        examples=["2026-11-01T13:00:00Z"],
    )


class CheckAvailabilityRequest(TimeWindowRequest):
    """空き状況確認リクエスト（クエリパラメータ）"""


class SearchAvailabilityRequest(BaseModel):
    """全車両の空き状況検索リクエスト（クエリパラメータ）"""

    start_at: str = Field(..., description="貸出開始（ISO 8601形式）")
    end_at: str = Field(..., description="返却（ISO 8601形式）")


class CreateBookingRequest(TimeWindowRequest):
    """車両予約リクエストスキーマ"""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "vehicle_id": "vehicle-001",
                    "start_at": "2026-11-01T10:00:00Z",
                    "end_at": "2026-11-01T13:00:00Z",
                }
            ]
        }
    }


class CreateOfflineBookingRequest(TimeWindowRequest):
    """オフライン予約リクエストスキーマ"""

    renter_name: str = Field(..., min_length=1, description="利用者名")
    renter_email: str = Field(..., min_length=3, description="利用者メールアドレス")
    renter_phone: str | None = Field(default=None, description="利用者電話番号")
    renter_id: str | None = Field(default=None, min_length=1, description="利用者ID")
    amount: Decimal | None = Field(
        default=None,
        ge=0,
        description="受領済み金額（省略時は決済待ち）",
    )

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount_to_decimal(cls, v):
        if v is None:
            return v
        return to_decimal(v)


class ChangeStatusRequest(BaseModel):
    """予約ステータス変更リクエスト"""

    status: BookingStatus = Field(..., description="変更後のステータス")


class PaymentSucceededRequest(BaseModel):
    """決済成功イベントのスキーマ"""

    booking_id: str = Field(..., min_length=1)
    payment_reference: str = Field(..., min_length=1)
    amount_paid_minor_units: int = Field(
        ...,
        ge=0,
        description="支払額（最小通貨単位）",
    )
    paid_at: str = Field(..., description="決済日時（ISO 8601形式）")
