import os
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr, Key

from rental.booking.domain.repository import VehicleCatalog
from rental.booking.domain.value_object import VehicleSnapshot
from rental.booking.infrastructure.dynamodb_support import (
    client_config,
    translate_infrastructure_errors,
)
from rental.shared.domain import Currency, Money, UserId, VehicleId

PROFILE_SK = "PROFILE"


class DynamoDBVehicleCatalog(VehicleCatalog):
    """DynamoDBの車両テーブルを読み取る VehicleCatalog の実装

    - PK=VEHICLE#<vehicle_id>, SK=PROFILE
    - GSI1 (OWNER#<owner_id>) でオーナーの車両を引く
    """

    def __init__(
        self, table_name: str | None = None, timeout_seconds: float = 3.0
    ) -> None:
        self.table_name = table_name or os.getenv("VEHICLE_TABLE_NAME")
        dynamodb = boto3.resource("dynamodb", config=client_config(timeout_seconds))
        self.table = dynamodb.Table(self.table_name)

    def find_by_id(self, vehicle_id: VehicleId) -> VehicleSnapshot | None:
        with translate_infrastructure_errors("get_item"):
            item = self.table.get_item(
                Key={"PK": f"VEHICLE#{vehicle_id}", "SK": PROFILE_SK}
            ).get("Item")
        if not item:
            return None
        return self._to_snapshot(item)

    def find_by_owner(self, owner_id: UserId) -> list[VehicleSnapshot]:
        items: list[dict] = []
        kwargs: dict = {
            "IndexName": "GSI1",
            "KeyConditionExpression": Key("GSI1PK").eq(f"OWNER#{owner_id}"),
        }
        with translate_infrastructure_errors("query"):
            while True:
                response = self.table.query(**kwargs)
                items.extend(response.get("Items", []))
                if "LastEvaluatedKey" not in response:
                    break
                kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]
        return [self._to_snapshot(item) for item in items]

    def list_all(self) -> list[VehicleSnapshot]:
        items: list[dict] = []
        kwargs: dict = {"FilterExpression": Attr("SK").eq(PROFILE_SK)}
        with translate_infrastructure_errors("scan"):
            while True:
                response = self.table.scan(**kwargs)
                items.extend(response.get("Items", []))
                if "LastEvaluatedKey" not in response:
                    break
                kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]
        return [self._to_snapshot(item) for item in items]

    def _to_snapshot(self, item: dict) -> VehicleSnapshot:
        return VehicleSnapshot(
            vehicle_id=VehicleId(value=item["vehicle_id"]),
            owner_id=UserId(value=item["owner_id"]),
            daily_rate=Money(
                amount=Decimal(str(item["daily_rate"])),
                currency=Currency(item.get("currency", "INR")),
            ),
            is_available=bool(item.get("is_available", True)),
        )
