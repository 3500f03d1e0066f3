from __future__ import annotations

from ..extensions import db
from venuehub.time_utils import iso_date, iso_time, to_utc_z, utcnow
from .tenancy import new_id, money


BOOKING_STATUSES = ("pending", "confirmed", "cancelled")


class Booking(db.Model):
    """
    A venue reservation for one date and time range.

    organization_id is always the venue's organization; the service layer
    checks the venue against the caller's tenant before inserting.
    """
    __tablename__ = "bookings"
    __table_args__ = (
        db.Index("ix_bookings_org_date", "organization_id", "booking_date"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    organization_id = db.Column(db.String(36), db.ForeignKey("organizations.id"), nullable=False, index=True)
    venue_id = db.Column(db.String(36), db.ForeignKey("venues.id"), nullable=False, index=True)

    customer_name = db.Column(db.String(255), nullable=False)
    customer_email = db.Column(db.String(255), nullable=False)
    customer_phone = db.Column(db.String(64), nullable=True)

    booking_date = db.Column(db.Date, nullable=False)
    start_time = db.Column(db.Time, nullable=False)
    end_time = db.Column(db.Time, nullable=False)

    status = db.Column(db.String(32), nullable=False, default="pending")
    total_price = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    venue = db.relationship("Venue", backref=db.backref("bookings", lazy=True))

    def to_dict(self, embed: bool = False) -> dict:
        data = {
            "id": self.id,
            "organization_id": self.organization_id,
            "venue_id": self.venue_id,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "booking_date": iso_date(self.booking_date),
            "start_time": iso_time(self.start_time),
            "end_time": iso_time(self.end_time),
            "status": self.status,
            "total_price": money(self.total_price),
            "notes": self.notes,
            "created_at": to_utc_z(self.created_at),
        }
        if embed:
            data["venue"] = {
                "name": self.venue.name,
                "location": self.venue.location,
            } if self.venue else None
            data["payments"] = [
                {"status": payment.status, "amount": money(payment.amount)}
                for payment in self.payments
            ]
        return data
