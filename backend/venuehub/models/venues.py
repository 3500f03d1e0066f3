from __future__ import annotations

from ..extensions import db
from venuehub.time_utils import to_utc_z, utcnow
from .tenancy import new_id, money


VENUE_STATUSES = ("active", "inactive", "maintenance")


class Venue(db.Model):
    __tablename__ = "venues"
    __table_args__ = (
        db.Index("ix_venues_org_created", "organization_id", "created_at"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    organization_id = db.Column(db.String(36), db.ForeignKey("organizations.id"), nullable=False, index=True)

    name = db.Column(db.String(255), nullable=False)
    location = db.Column(db.String(255), nullable=True)
    capacity = db.Column(db.Integer, nullable=False)
    price_per_hour = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    description = db.Column(db.Text, nullable=True)

    # Comma-separated tags, e.g. "wifi, parking, stage"
    amenities = db.Column(db.Text, nullable=True)

    status = db.Column(db.String(32), nullable=False, default="active")
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    organization = db.relationship("Organization", backref=db.backref("venues", lazy=True))

    def __repr__(self) -> str:
        return f"<Venue id={self.id} name={self.name!r} organization_id={self.organization_id}>"

    def to_dict(self, embed: bool = False) -> dict:
        return {
            "id": self.id,
            "organization_id": self.organization_id,
            "name": self.name,
            "location": self.location,
            "capacity": self.capacity,
            "price_per_hour": money(self.price_per_hour),
            "description": self.description,
            "amenities": self.amenities,
            "status": self.status,
            "created_at": to_utc_z(self.created_at),
        }
