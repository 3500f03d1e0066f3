from __future__ import annotations

import uuid

from ..extensions import db
from venuehub.time_utils import to_utc_z, utcnow


def new_id() -> str:
    return str(uuid.uuid4())


def money(value) -> float | None:
    return float(value) if value is not None else None


class Organization(db.Model):
    """
    Multi-tenant root: every tenant is an Organization.

    Venues, bookings, payments, invoices and profiles all carry
    organization_id. No data may cross organization boundaries.
    """
    __tablename__ = "organizations"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Organization id={self.id} name={self.name!r}>"

    def to_dict(self, embed: bool = False) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": to_utc_z(self.created_at),
        }
