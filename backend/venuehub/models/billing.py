from __future__ import annotations

from ..extensions import db
from venuehub.time_utils import iso_date, to_utc_z, utcnow
from .tenancy import new_id, money


PAYMENT_STATUSES = ("pending", "paid", "failed", "refunded")
PAYMENT_METHODS = ("cash", "card", "bank_transfer", "check", "other")
INVOICE_STATUSES = ("pending", "paid", "overdue", "cancelled")


class Payment(db.Model):
    __tablename__ = "payments"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    organization_id = db.Column(db.String(36), db.ForeignKey("organizations.id"), nullable=False, index=True)
    booking_id = db.Column(db.String(36), db.ForeignKey("bookings.id"), nullable=False, index=True)

    amount = db.Column(db.Numeric(12, 2), nullable=False)
    payment_method = db.Column(db.String(32), nullable=False)
    status = db.Column(db.String(32), nullable=False, default="pending")

    # Display reference, "TXN-<epoch millis>"
    transaction_id = db.Column(db.String(64), nullable=False, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    booking = db.relationship("Booking", backref=db.backref("payments", lazy=True))

    def to_dict(self, embed: bool = False) -> dict:
        data = {
            "id": self.id,
            "organization_id": self.organization_id,
            "booking_id": self.booking_id,
            "amount": money(self.amount),
            "payment_method": self.payment_method,
            "status": self.status,
            "transaction_id": self.transaction_id,
            "created_at": to_utc_z(self.created_at),
        }
        if embed:
            data["booking"] = {
                "customer_name": self.booking.customer_name,
                "customer_email": self.booking.customer_email,
                "total_price": money(self.booking.total_price),
            } if self.booking else None
        return data


class Invoice(db.Model):
    __tablename__ = "invoices"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    organization_id = db.Column(db.String(36), db.ForeignKey("organizations.id"), nullable=False, index=True)
    booking_id = db.Column(db.String(36), db.ForeignKey("bookings.id"), nullable=False, index=True)
    # Payment that settles this invoice, if any
    payment_id = db.Column(db.String(36), db.ForeignKey("payments.id"), nullable=True, index=True)

    amount = db.Column(db.Numeric(12, 2), nullable=False)
    due_date = db.Column(db.Date, nullable=False)
    status = db.Column(db.String(32), nullable=False, default="pending")
    notes = db.Column(db.Text, nullable=True)

    # Display reference, "INV-<epoch millis>"
    invoice_number = db.Column(db.String(64), nullable=False, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    booking = db.relationship("Booking", backref=db.backref("invoices", lazy=True))
    payment = db.relationship("Payment", backref=db.backref("invoices", lazy=True))

    def to_dict(self, embed: bool = False) -> dict:
        data = {
            "id": self.id,
            "organization_id": self.organization_id,
            "booking_id": self.booking_id,
            "payment_id": self.payment_id,
            "amount": money(self.amount),
            "due_date": iso_date(self.due_date),
            "status": self.status,
            "notes": self.notes,
            "invoice_number": self.invoice_number,
            "created_at": to_utc_z(self.created_at),
        }
        if embed:
            data["booking"] = {
                "customer_name": self.booking.customer_name,
                "customer_email": self.booking.customer_email,
                "total_price": money(self.booking.total_price),
                "booking_date": iso_date(self.booking.booking_date),
            } if self.booking else None
            data["payment"] = {"status": self.payment.status} if self.payment else None
        return data
