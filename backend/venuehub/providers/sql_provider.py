"""
Self-hosted provider: identities, sessions and tenant data in SQLAlchemy.

Sessions are opaque random tokens. The client holds the plaintext token,
the database stores only its SHA-256 hash with an absolute expiry.
Any SQLAlchemyError rolls the session back and surfaces as BackendError.
"""

from __future__ import annotations

import hashlib
import secrets
import time
from contextlib import contextmanager
from datetime import timedelta

from sqlalchemy import func, text
from sqlalchemy.exc import SQLAlchemyError

from ..errors import BackendError, InvalidCredentials
from ..extensions import db
from ..models import Booking, Invoice, Organization, Payment, Profile, SessionToken, User, Venue
from ..passwords import hash_password, verify_password
from ..time_utils import as_naive_utc, utcnow
from .base import AuthSession, BackendProvider, Identity


def generate_token() -> str:
    """64 hex characters (32 bytes) from a cryptographically secure source."""
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    # Tokens are high-entropy, so a fast hash is sufficient
    return hashlib.sha256(token.encode('utf-8')).hexdigest()


def _describe(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


@contextmanager
def _guard():
    try:
        yield
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise BackendError(_describe(exc)) from exc


def _identity(user: User) -> Identity:
    return Identity(id=user.id, email=user.email)


class SqlProvider(BackendProvider):
    name = "sql"

    MODELS = {
        "venues": Venue,
        "bookings": Booking,
        "payments": Payment,
        "invoices": Invoice,
    }
    ORDERING = {
        "venues": "created_at",
        "bookings": "booking_date",
        "payments": "created_at",
        "invoices": "created_at",
    }

    def __init__(self, session_lifetime: timedelta = timedelta(hours=24), bcrypt_rounds: int = 12):
        self.session_lifetime = session_lifetime
        self.bcrypt_rounds = bcrypt_rounds

    # =========================================================================
    # AUTH
    # =========================================================================

    def _find_user_by_email(self, email: str) -> User | None:
        return db.session.query(User).filter(func.lower(User.email) == email.strip().lower()).first()

    def sign_in(self, email: str, password: str) -> AuthSession:
        with _guard():
            user = self._find_user_by_email(email)
            if user is None or not verify_password(password, user.password_hash):
                raise InvalidCredentials("Invalid login credentials")

            token = generate_token()
            now = utcnow()
            expires_at = now + self.session_lifetime
            db.session.add(SessionToken(
                user_id=user.id,
                token_hash=hash_token(token),
                created_at=now,
                last_used_at=now,
                expires_at=expires_at,
                is_revoked=False,
            ))
            user.last_sign_in_at = now
            db.session.commit()

            return AuthSession(identity=_identity(user), token=token, expires_at=expires_at)

    def sign_out(self, token: str) -> None:
        with _guard():
            session = db.session.query(SessionToken).filter_by(
                token_hash=hash_token(token),
                is_revoked=False,
            ).first()
            if session is None:
                return
            session.is_revoked = True
            session.revoked_at = utcnow()
            session.revoked_reason = "User sign out"
            db.session.commit()

    def get_identity(self, token: str) -> Identity | None:
        now = utcnow()
        with _guard():
            session = db.session.query(SessionToken).filter_by(
                token_hash=hash_token(token),
                is_revoked=False,
            ).first()
            if session is None or as_naive_utc(session.expires_at) < now:
                return None

            user = session.user
            if user is None:
                return None

            session.last_used_at = now
            db.session.commit()
            return _identity(user)

    def get_identity_by_id(self, identity_id: str) -> Identity | None:
        with _guard():
            user = db.session.get(User, identity_id)
            return _identity(user) if user else None

    def create_identity(self, email: str, password: str) -> Identity:
        with _guard():
            if self._find_user_by_email(email) is not None:
                raise BackendError("A user with this email address has already been registered")

            user = User(
                email=email.strip().lower(),
                password_hash=hash_password(password, rounds=self.bcrypt_rounds),
            )
            db.session.add(user)
            db.session.commit()
            return _identity(user)

    def delete_identity(self, identity_id: str) -> None:
        with _guard():
            user = db.session.get(User, identity_id)
            if user is None:
                raise BackendError("User not found")
            db.session.query(Profile).filter_by(id=identity_id).delete()
            db.session.delete(user)
            db.session.commit()

    # =========================================================================
    # TENANCY
    # =========================================================================

    def get_profile(self, identity_id: str) -> dict | None:
        with _guard():
            profile = db.session.query(Profile).filter_by(id=identity_id).first()
            return profile.to_dict() if profile else None

    def create_profile(self, values: dict) -> dict:
        with _guard():
            profile = Profile(**values)
            db.session.add(profile)
            db.session.commit()
            return profile.to_dict()

    def get_organization(self, organization_id: str) -> dict | None:
        with _guard():
            org = db.session.get(Organization, organization_id)
            return org.to_dict() if org else None

    def list_organizations(self) -> list[dict]:
        with _guard():
            orgs = db.session.query(Organization).order_by(Organization.name.asc()).all()
            return [org.to_dict() for org in orgs]

    def create_organization(self, values: dict) -> dict:
        with _guard():
            org = Organization(**values)
            db.session.add(org)
            db.session.commit()
            return org.to_dict()

    # =========================================================================
    # TENANT-OWNED RESOURCES
    # =========================================================================

    def _model(self, resource: str):
        self.check_resource(resource)
        return self.MODELS[resource]

    def _scoped(self, resource: str, organization_id: str):
        model = self._model(resource)
        return model, db.session.query(model).filter(model.organization_id == organization_id)

    def list_records(self, resource: str, organization_id: str) -> list[dict]:
        with _guard():
            model, query = self._scoped(resource, organization_id)
            ordering = getattr(model, self.ORDERING[resource])
            rows = query.order_by(ordering.desc(), model.created_at.desc()).all()
            return [row.to_dict(embed=True) for row in rows]

    def get_record(self, resource: str, organization_id: str, record_id: str) -> dict | None:
        with _guard():
            model, query = self._scoped(resource, organization_id)
            row = query.filter(model.id == record_id).first()
            return row.to_dict(embed=True) if row else None

    def create_record(self, resource: str, values: dict) -> dict:
        model = self._model(resource)
        if not values.get("organization_id"):
            raise ValueError("organization_id is required")
        with _guard():
            row = model(**values)
            db.session.add(row)
            db.session.commit()
            return row.to_dict(embed=True)

    def update_record(self, resource: str, organization_id: str, record_id: str, changes: dict) -> dict | None:
        with _guard():
            model, query = self._scoped(resource, organization_id)
            row = query.filter(model.id == record_id).first()
            if row is None:
                return None
            for key, value in changes.items():
                setattr(row, key, value)
            db.session.commit()
            return row.to_dict(embed=True)

    def health(self) -> dict:
        start_time = time.time()
        with _guard():
            db.session.execute(text("SELECT 1"))
        return {
            "provider": self.name,
            "status": "healthy",
            "latency_ms": round((time.time() - start_time) * 1000, 2),
        }
