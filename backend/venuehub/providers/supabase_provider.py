"""
Managed provider: Supabase auth + Postgres (PostgREST).

Data calls use a service-role client, which bypasses row-level security,
so every resource query here filters on organization_id itself.

Sign-in uses a short-lived client per call with session persistence off:
no signed-in session is ever held by the shared client.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Callable

import httpx
from supabase import AuthError, Client, ClientOptions, PostgrestAPIError, create_client

from ..errors import BackendError, InvalidCredentials
from .base import AuthSession, BackendProvider, Identity


PROFILE_COLUMNS = "id, organization_id, role, name, email, created_at"


def _jsonable(values: dict) -> dict:
    """PostgREST takes JSON; convert Decimal and date/time values."""
    result = {}
    for key, value in values.items():
        if isinstance(value, Decimal):
            value = float(value)
        elif isinstance(value, (date, datetime, time)):
            value = value.isoformat()
        result[key] = value
    return result


def _identity(user) -> Identity:
    return Identity(id=str(user.id), email=user.email)


class SupabaseProvider(BackendProvider):
    name = "supabase"

    # PostgREST select strings with foreign-key embeds
    SELECTS = {
        "venues": "*",
        "bookings": "*, venue:venues(name, location), payments(status, amount)",
        "payments": "*, booking:bookings(customer_name, customer_email, total_price)",
        "invoices": (
            "*, booking:bookings(customer_name, customer_email, total_price, booking_date),"
            " payment:payments(status)"
        ),
    }
    ORDERING = {
        "venues": "created_at",
        "bookings": "booking_date",
        "payments": "created_at",
        "invoices": "created_at",
    }

    def __init__(
        self,
        url: str,
        service_key: str,
        anon_key: str | None = None,
        *,
        client: Client | None = None,
        auth_client_factory: Callable[[], Client] | None = None,
    ):
        self.url = url
        self.service_key = service_key
        self.anon_key = anon_key or service_key
        self._client = client
        self._auth_client_factory = auth_client_factory

    @staticmethod
    def _options() -> ClientOptions:
        return ClientOptions(persist_session=False, auto_refresh_token=False)

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = create_client(self.url, self.service_key, options=self._options())
        return self._client

    def _auth_client(self) -> Client:
        if self._auth_client_factory is not None:
            return self._auth_client_factory()
        return create_client(self.url, self.anon_key, options=self._options())

    def _execute(self, query) -> list[dict]:
        try:
            response = query.execute()
        except PostgrestAPIError as exc:
            raise BackendError(exc.message or str(exc)) from exc
        except httpx.HTTPError as exc:
            raise BackendError(f"Backend unreachable: {exc}") from exc
        return response.data or []

    # =========================================================================
    # AUTH
    # =========================================================================

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            response = self._auth_client().auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except AuthError as exc:
            raise InvalidCredentials(str(exc) or "Sign in failed") from exc
        except httpx.HTTPError as exc:
            raise BackendError(f"Backend unreachable: {exc}") from exc

        if response.user is None or response.session is None:
            raise BackendError("Sign in failed: No user data")

        expires_at = None
        if response.session.expires_at:
            expires_at = datetime.fromtimestamp(response.session.expires_at, tz=timezone.utc)
        return AuthSession(
            identity=_identity(response.user),
            token=response.session.access_token,
            expires_at=expires_at,
        )

    def sign_out(self, token: str) -> None:
        try:
            self.client.auth.admin.sign_out(token)
        except AuthError as exc:
            raise BackendError(str(exc) or "Failed to sign out") from exc
        except httpx.HTTPError as exc:
            raise BackendError(f"Backend unreachable: {exc}") from exc

    def get_identity(self, token: str) -> Identity | None:
        try:
            response = self.client.auth.get_user(token)
        except AuthError:
            # Expired, revoked or malformed JWT: simply no session
            return None
        except httpx.HTTPError as exc:
            raise BackendError(f"Backend unreachable: {exc}") from exc
        if response is None or response.user is None:
            return None
        return _identity(response.user)

    def get_identity_by_id(self, identity_id: str) -> Identity | None:
        try:
            response = self.client.auth.admin.get_user_by_id(identity_id)
        except AuthError:
            return None
        except httpx.HTTPError as exc:
            raise BackendError(f"Backend unreachable: {exc}") from exc
        if response is None or response.user is None:
            return None
        return _identity(response.user)

    def create_identity(self, email: str, password: str) -> Identity:
        try:
            response = self.client.auth.admin.create_user({
                "email": email,
                "password": password,
                # Admin-created users skip the confirmation mail
                "email_confirm": True,
            })
        except AuthError as exc:
            raise BackendError(str(exc) or "Unknown error") from exc
        except httpx.HTTPError as exc:
            raise BackendError(f"Backend unreachable: {exc}") from exc
        if response.user is None:
            raise BackendError("Unknown error")
        return _identity(response.user)

    def delete_identity(self, identity_id: str) -> None:
        try:
            self.client.auth.admin.delete_user(identity_id)
        except AuthError as exc:
            raise BackendError(str(exc) or "Failed to delete user") from exc
        except httpx.HTTPError as exc:
            raise BackendError(f"Backend unreachable: {exc}") from exc

    # =========================================================================
    # TENANCY
    # =========================================================================

    def get_profile(self, identity_id: str) -> dict | None:
        rows = self._execute(
            self.client.table("profiles").select(PROFILE_COLUMNS).eq("id", identity_id).limit(1)
        )
        return rows[0] if rows else None

    def create_profile(self, values: dict) -> dict:
        rows = self._execute(self.client.table("profiles").insert(_jsonable(values)))
        if not rows:
            raise BackendError("Profile insert returned no row")
        return rows[0]

    def get_organization(self, organization_id: str) -> dict | None:
        rows = self._execute(
            self.client.table("organizations").select("*").eq("id", organization_id).limit(1)
        )
        return rows[0] if rows else None

    def list_organizations(self) -> list[dict]:
        return self._execute(self.client.table("organizations").select("*").order("name"))

    def create_organization(self, values: dict) -> dict:
        rows = self._execute(self.client.table("organizations").insert(_jsonable(values)))
        if not rows:
            raise BackendError("Organization insert returned no row")
        return rows[0]

    # =========================================================================
    # TENANT-OWNED RESOURCES
    # =========================================================================

    def list_records(self, resource: str, organization_id: str) -> list[dict]:
        self.check_resource(resource)
        return self._execute(
            self.client.table(resource)
            .select(self.SELECTS[resource])
            .eq("organization_id", organization_id)
            .order(self.ORDERING[resource], desc=True)
        )

    def get_record(self, resource: str, organization_id: str, record_id: str) -> dict | None:
        self.check_resource(resource)
        rows = self._execute(
            self.client.table(resource)
            .select(self.SELECTS[resource])
            .eq("id", record_id)
            .eq("organization_id", organization_id)
            .limit(1)
        )
        return rows[0] if rows else None

    def create_record(self, resource: str, values: dict) -> dict:
        self.check_resource(resource)
        if not values.get("organization_id"):
            raise ValueError("organization_id is required")
        rows = self._execute(self.client.table(resource).insert(_jsonable(values)))
        if not rows:
            raise BackendError(f"Insert into {resource} returned no row")
        row = rows[0]
        # Re-read to include the embeds the list endpoints return
        return self.get_record(resource, row["organization_id"], row["id"]) or row

    def update_record(self, resource: str, organization_id: str, record_id: str, changes: dict) -> dict | None:
        self.check_resource(resource)
        rows = self._execute(
            self.client.table(resource)
            .update(_jsonable(changes))
            .eq("id", record_id)
            .eq("organization_id", organization_id)
        )
        if not rows:
            return None
        return self.get_record(resource, organization_id, record_id) or rows[0]

    def health(self) -> dict:
        self._execute(self.client.table("organizations").select("id").limit(1))
        return {"provider": self.name, "status": "healthy"}
