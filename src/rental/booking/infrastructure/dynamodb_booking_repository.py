import os
from datetime import datetime
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from rental.booking.domain.entity import Booking
from rental.booking.domain.enum import BookingStatus
from rental.booking.domain.repository import BookingRepository, VehicleSchedule
from rental.booking.domain.value_object import (
    BookingId,
    PaymentReference,
    RenterInfo,
    TimeWindow,
)
from rental.booking.infrastructure.dynamodb_support import (
    client_config,
    error_code,
    translate_infrastructure_errors,
)
from rental.shared.domain import Currency, Money, UserId, VehicleId
from rental.shared.domain.exception.exceptions import (
    DuplicateResourceException,
    OptimisticLockException,
)
from rental.shared.domain.value_object import IsoDateTime

SCHEDULE_SK = "SCHEDULE"
POINTER_SK = "POINTER"


def _vehicle_pk(vehicle_id: VehicleId) -> str:
    return f"VEHICLE#{vehicle_id}"


def _booking_sk(booking_id: BookingId) -> str:
    return f"BOOKING#{booking_id}"


def _timestamp(dt: datetime) -> str:
    return IsoDateTime.to_utc(dt).isoformat()


class DynamoDBBookingRepository(BookingRepository):
    """DynamoDBを使用した BookingRepository の具象実装

    テーブル設計（単一テーブル）:
    - PK=VEHICLE#<vehicle_id>, SK=SCHEDULE        車両ごとの version
    - PK=VEHICLE#<vehicle_id>, SK=BOOKING#<id>    予約本体
    - PK=BOOKING#<id>,         SK=POINTER         予約ID -> 車両IDの索引
    - GSI1 (RENTER#<renter_id>, 作成日時) / GSI2 (OWNER#<owner_id>, 作成日時)
    新規予約は version の条件付き更新と予約の書き込みを 1 トランザクションで行う。
    """

    def __init__(
        self, table_name: str | None = None, timeout_seconds: float = 3.0
    ) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb", config=client_config(timeout_seconds))
        self.table = self.dynamodb.Table(self.table_name)

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        """予約IDで検索（索引 -> 本体の順に強い整合性で読む）"""
        with translate_infrastructure_errors("get_item"):
            pointer = self.table.get_item(
                Key={"PK": f"BOOKING#{booking_id}", "SK": POINTER_SK},
                ConsistentRead=True,
            ).get("Item")
            if not pointer:
                return None

            item = self.table.get_item(
                Key={
                    "PK": _vehicle_pk(VehicleId(pointer["vehicle_id"])),
                    "SK": _booking_sk(booking_id),
                },
                ConsistentRead=True,
            ).get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def get_schedule(self, vehicle_id: VehicleId) -> VehicleSchedule:
        """version を先に読み、その後に予約を読む

        version 取得後に追加された予約があれば add() の条件で検出される。
        """
        with translate_infrastructure_errors("get_schedule"):
            schedule = self.table.get_item(
                Key={"PK": _vehicle_pk(vehicle_id), "SK": SCHEDULE_SK},
                ConsistentRead=True,
            ).get("Item")
            items = self._query_all(
                KeyConditionExpression=Key("PK").eq(_vehicle_pk(vehicle_id))
                & Key("SK").begins_with("BOOKING#"),
                ConsistentRead=True,
            )

        version = int(schedule["version"]) if schedule else 0
        bookings = tuple(
            booking for booking in map(self._to_entity, items) if booking.is_active
        )
        return VehicleSchedule(vehicle_id=vehicle_id, bookings=bookings, version=version)

    def add(self, booking: Booking, expected_version: int) -> None:
        """車両の version を条件に予約を追加する"""
        if expected_version == 0:
            version_condition = "attribute_not_exists(PK)"
            version_values: dict = {}
        else:
            version_condition = "#version = :expected"
            version_values = {":expected": expected_version}

        transact_items = [
            {
                "Update": {
                    "TableName": self.table_name,
                    "Key": {"PK": _vehicle_pk(booking.vehicle_id), "SK": SCHEDULE_SK},
                    "UpdateExpression": "SET #version = :next",
                    "ConditionExpression": version_condition,
                    "ExpressionAttributeNames": {"#version": "version"},
                    "ExpressionAttributeValues": {
                        ":next": expected_version + 1,
                        **version_values,
                    },
                }
            },
            {
                "Put": {
                    "TableName": self.table_name,
                    "Item": self._to_item(booking),
                    "ConditionExpression": "attribute_not_exists(PK)",
                }
            },
            {
                "Put": {
                    "TableName": self.table_name,
                    "Item": {
                        "PK": f"BOOKING#{booking.id}",
                        "SK": POINTER_SK,
                        "entity_type": "BOOKING_POINTER",
                        "vehicle_id": str(booking.vehicle_id),
                    },
                    "ConditionExpression": "attribute_not_exists(PK)",
                }
            },
        ]

        try:
            with translate_infrastructure_errors("transact_write_items"):
                self.dynamodb.meta.client.transact_write_items(
                    TransactItems=transact_items
                )
        except ClientError as e:
            if error_code(e) != "TransactionCanceledException":
                raise
            reasons = [
                reason.get("Code") for reason in e.response.get("CancellationReasons", [])
            ]
            if reasons and reasons[0] == "ConditionalCheckFailed":
                raise OptimisticLockException(
                    f"Vehicle schedule conflict: expected version {expected_version}, "
                    f"vehicle_id={booking.vehicle_id}"
                ) from e
            if "ConditionalCheckFailed" in reasons:
                raise DuplicateResourceException(
                    f"Booking already exists: {booking.id}"
                ) from e
            raise

    def update(
        self,
        booking: Booking,
        expected_status: BookingStatus,
        expected_updated_at: datetime,
    ) -> None:
        """予約のステータスを更新する"""
        assignments = ["#status = :status", "updated_at = :updated_at"]
        values: dict = {
            ":status": booking.status.value,
            ":updated_at": _timestamp(booking.updated_at),
        }
        if booking.price is not None:
            assignments += ["price_amount = :price_amount", "price_currency = :price_currency"]
            values[":price_amount"] = str(booking.price.amount)
            values[":price_currency"] = str(booking.price.currency)
        if booking.payment_reference is not None:
            assignments.append("payment_reference = :payment_reference")
            values[":payment_reference"] = str(booking.payment_reference)

        try:
            with translate_infrastructure_errors("update_item"):
                self.table.update_item(
                    Key={
                        "PK": _vehicle_pk(booking.vehicle_id),
                        "SK": _booking_sk(booking.id),
                    },
                    UpdateExpression="SET " + ", ".join(assignments),
                    ConditionExpression=Attr("status").eq(expected_status.value)
                    & Attr("updated_at").eq(_timestamp(expected_updated_at)),
                    ExpressionAttributeNames={"#status": "status"},
                    ExpressionAttributeValues=values,
                )
        except ClientError as e:
            if error_code(e) == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Booking status conflict: "
                    f"expected {expected_status}, "
                    f"booking_id={booking.id}"
                ) from e
            raise

    def find_by_vehicle(self, vehicle_id: VehicleId) -> list[Booking]:
        with translate_infrastructure_errors("query"):
            items = self._query_all(
                KeyConditionExpression=Key("PK").eq(_vehicle_pk(vehicle_id))
                & Key("SK").begins_with("BOOKING#"),
            )
        bookings = [self._to_entity(item) for item in items]
        return sorted(bookings, key=lambda b: b.created_at, reverse=True)

    def find_by_renter(self, renter_id: UserId) -> list[Booking]:
        with translate_infrastructure_errors("query"):
            items = self._query_all(
                IndexName="GSI1",
                KeyConditionExpression=Key("GSI1PK").eq(f"RENTER#{renter_id}"),
                ScanIndexForward=False,
            )
        return [self._to_entity(item) for item in items]

    def find_by_owner(self, owner_id: UserId) -> list[Booking]:
        with translate_infrastructure_errors("query"):
            items = self._query_all(
                IndexName="GSI2",
                KeyConditionExpression=Key("GSI2PK").eq(f"OWNER#{owner_id}"),
                ScanIndexForward=False,
            )
        return [self._to_entity(item) for item in items]

    def _query_all(self, **kwargs) -> list[dict]:
        """ページングをたどって全件取得する"""
        items: list[dict] = []
        while True:
            response = self.table.query(**kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key

    def _to_item(self, booking: Booking) -> dict:
        """ドメインエンティティを DynamoDB アイテムに変換する"""
        created_at = _timestamp(booking.created_at)
        item = {
            "PK": _vehicle_pk(booking.vehicle_id),
            "SK": _booking_sk(booking.id),
            "entity_type": "BOOKING",
            "booking_id": str(booking.id),
            "vehicle_id": str(booking.vehicle_id),
            "renter_id": str(booking.renter_id),
            "owner_id": str(booking.owner_id),
            "start_at": _timestamp(booking.window.start),
            "end_at": _timestamp(booking.window.end),
            "status": booking.status.value,
            "created_at": created_at,
            "updated_at": _timestamp(booking.updated_at),
            "GSI1PK": f"RENTER#{booking.renter_id}",
            "GSI1SK": created_at,
            "GSI2PK": f"OWNER#{booking.owner_id}",
            "GSI2SK": created_at,
        }
        if booking.price is not None:
            item["price_amount"] = str(booking.price.amount)
            item["price_currency"] = str(booking.price.currency)
        if booking.payment_reference is not None:
            item["payment_reference"] = str(booking.payment_reference)
        if booking.renter_info is not None:
            item["renter_name"] = booking.renter_info.name
            item["renter_email"] = booking.renter_info.email
            if booking.renter_info.phone:
                item["renter_phone"] = booking.renter_info.phone
        return item

    def _to_entity(self, item: dict) -> Booking:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        price = None
        if "price_amount" in item:
            price = Money(
                amount=Decimal(item["price_amount"]),
                currency=Currency(item["price_currency"]),
            )
        renter_info = None
        if "renter_name" in item:
            renter_info = RenterInfo(
                name=item["renter_name"],
                email=item["renter_email"],
                phone=item.get("renter_phone"),
            )
        payment_reference = None
        if "payment_reference" in item:
            payment_reference = PaymentReference(item["payment_reference"])

        return Booking(
            id=BookingId(value=item["booking_id"]),
            vehicle_id=VehicleId(value=item["vehicle_id"]),
            renter_id=UserId(value=item["renter_id"]),
            owner_id=UserId(value=item["owner_id"]),
            window=TimeWindow(
                start=IsoDateTime.from_string(item["start_at"]).value,
                end=IsoDateTime.from_string(item["end_at"]).value,
            ),
            created_at=IsoDateTime.from_string(item["created_at"]).value,
            updated_at=IsoDateTime.from_string(item["updated_at"]).value,
            status=BookingStatus(item["status"]),
            price=price,
            payment_reference=payment_reference,
            renter_info=renter_info,
        )
