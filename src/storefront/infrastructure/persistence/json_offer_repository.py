"""JSON-file-backed implementation of OfferRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.offer import Offer, OfferType, normalize_code
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.offer_repository import OfferRepository
from storefront.infrastructure.persistence.json_file import JsonFile


def _keep_claimed_uses(stored: dict, record: dict) -> None:
    record["used_count"] = max(stored.get("used_count", 0), record["used_count"])


class JsonOfferRepository(OfferRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OfferRepository interface --------------------------------------------

    def next_id(self) -> str:
        return str(self._file.next_numeric_id())

    def get_by_id(self, offer_id: str) -> Offer | None:
        raw = self._file.find(lambda r: r["id"] == offer_id)
        return self._to_domain(raw) if raw is not None else None

    def get_by_code(self, code: str) -> Offer | None:
        wanted = normalize_code(code)
        raw = self._file.find(lambda r: r["code"].upper() == wanted)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Offer]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, offer: Offer) -> None:
        self._file.upsert(self._to_raw(offer), merge=_keep_claimed_uses)

    def delete(self, offer_id: str) -> None:
        self._file.remove(offer_id)

    def claim_usage(self, offer_id: str) -> bool:
        with self._file.editing() as records:
            for raw in records:
                if raw["id"] == offer_id:
                    break
            else:
                raise EntityNotFoundError(f"Offer with ID '{offer_id}' not found")
            max_uses = raw.get("max_uses")
            if max_uses is not None and raw["used_count"] >= max_uses:
                return False
            raw["used_count"] += 1
            return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(offer: Offer) -> dict:
        return {
            "id": offer.id,
            "title": offer.title,
            "code": offer.code,
            "type": offer.type.value,
            "value": str(offer.value),
            "min_amount": str(offer.min_amount.amount) if offer.min_amount else None,
            "max_uses": offer.max_uses,
            "used_count": offer.used_count,
            "is_active": offer.is_active,
            "starts_at": offer.starts_at.isoformat(),
            "ends_at": offer.ends_at.isoformat(),
            "description": offer.description,
            "product_ids": sorted(offer.product_ids),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Offer:
        min_amount = raw.get("min_amount")
        return Offer(
            id=raw["id"],
            title=raw["title"],
            code=raw["code"],
            type=OfferType(raw["type"]),
            value=Decimal(raw["value"]),
            min_amount=Money(Decimal(min_amount)) if min_amount is not None else None,
            max_uses=raw.get("max_uses"),
            used_count=raw.get("used_count", 0),
            is_active=raw.get("is_active", True),
            starts_at=datetime.fromisoformat(raw["starts_at"]),
            ends_at=datetime.fromisoformat(raw["ends_at"]),
            description=raw.get("description", ""),
            product_ids=frozenset(raw.get("product_ids", [])),
        )
