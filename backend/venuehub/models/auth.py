from __future__ import annotations

from ..extensions import db
from venuehub.time_utils import to_utc_z, utcnow
from .tenancy import new_id


class User(db.Model):
    """
    Authentication identity (SQL provider only).

    Emails are globally unique: an identity signs in before its tenant is known.
    Role and tenant live on Profile, never here.
    """
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)

    # Bcrypt hashed password
    password_hash = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    last_sign_in_at = db.Column(db.DateTime(timezone=True), nullable=True)

    def to_dict(self, embed: bool = False) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "created_at": to_utc_z(self.created_at),
            "last_sign_in_at": to_utc_z(self.last_sign_in_at),
        }


class SessionToken(db.Model):
    """
    Server-side session. Only the SHA-256 hash of the token is stored;
    the plaintext travels in the auth cookie or a Bearer header.
    """
    __tablename__ = "session_tokens"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token_hash = db.Column(db.String(64), nullable=False, unique=True, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    last_used_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    expires_at = db.Column(db.DateTime(timezone=True), nullable=False)

    is_revoked = db.Column(db.Boolean, nullable=False, default=False)
    revoked_at = db.Column(db.DateTime(timezone=True), nullable=True)
    revoked_reason = db.Column(db.String(255), nullable=True)

    user = db.relationship("User", backref=db.backref("sessions", lazy=True, cascade="all, delete-orphan"))


class Profile(db.Model):
    """
    Role and tenant link for an identity; shares the identity's id.

    Exactly one per dashboard user. A missing profile is an authorization
    failure, not a data error.
    """
    __tablename__ = "profiles"

    id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    organization_id = db.Column(db.String(36), db.ForeignKey("organizations.id"), nullable=False, index=True)
    role = db.Column(db.String(32), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    organization = db.relationship("Organization", backref=db.backref("profiles", lazy=True))

    def to_dict(self, embed: bool = False) -> dict:
        return {
            "id": self.id,
            "organization_id": self.organization_id,
            "role": self.role,
            "name": self.name,
            "email": self.email,
            "created_at": to_utc_z(self.created_at),
        }
