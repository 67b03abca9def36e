from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class Settings:
    """実行時設定（環境変数から読み込む）"""

    table_name: str | None = None
    vehicle_table_name: str | None = None
    notification_queue_url: str | None = None
    min_booking_minutes: int = 60
    persistence_timeout_seconds: float = 3.0
    status_update_max_attempts: int = 3
    booking_place_max_attempts: int = 3

    def __post_init__(self) -> None:
        if self.min_booking_minutes < 0:
            raise ValueError("MIN_BOOKING_MINUTES cannot be negative")
        if self.persistence_timeout_seconds <= 0:
            raise ValueError("PERSISTENCE_TIMEOUT_SECONDS must be positive")
        if self.status_update_max_attempts < 1:
            raise ValueError("STATUS_UPDATE_MAX_ATTEMPTS must be at least 1")
        if self.booking_place_max_attempts < 1:
            raise ValueError("BOOKING_PLACE_MAX_ATTEMPTS must be at least 1")

    @property
    def minimum_booking_duration(self) -> timedelta:
        return timedelta(minutes=self.min_booking_minutes)

    @classmethod
    def from_env(cls) -> Settings:
        """環境変数から設定を生成する"""
        return cls(
            table_name=os.getenv("TABLE_NAME"),
            vehicle_table_name=os.getenv("VEHICLE_TABLE_NAME"),
            notification_queue_url=os.getenv("NOTIFICATION_QUEUE_URL"),
            min_booking_minutes=int(os.getenv("MIN_BOOKING_MINUTES", "60")),
            persistence_timeout_seconds=float(
                os.getenv("PERSISTENCE_TIMEOUT_SECONDS", "3")
            ),
            status_update_max_attempts=int(
                os.getenv("STATUS_UPDATE_MAX_ATTEMPTS", "3")
            ),
            booking_place_max_attempts=int(
                os.getenv("BOOKING_PLACE_MAX_ATTEMPTS", "3")
            ),
        )
