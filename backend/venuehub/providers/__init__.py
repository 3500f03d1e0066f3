"""
Provider registry.

One provider instance per application, built from config and stored in
app.extensions. Providers hold connection settings only; session state
always arrives with the request.
"""

from __future__ import annotations

from datetime import timedelta

from flask import Flask, current_app

from .base import AuthSession, BackendProvider, Identity, RESOURCES


EXTENSION_KEY = "venuehub.provider"


def build_provider(config) -> BackendProvider:
    kind = (config.get("BACKEND_PROVIDER") or "sql").lower()

    if kind == "sql":
        from .sql_provider import SqlProvider
        return SqlProvider(
            session_lifetime=timedelta(hours=config.get("SESSION_LIFETIME_HOURS", 24)),
            bcrypt_rounds=config.get("BCRYPT_ROUNDS", 12),
        )

    if kind == "supabase":
        url = config.get("SUPABASE_URL")
        service_key = config.get("SUPABASE_SERVICE_KEY")
        if not url or not service_key:
            raise RuntimeError("BACKEND_PROVIDER=supabase requires SUPABASE_URL and SUPABASE_SERVICE_KEY")
        from .supabase_provider import SupabaseProvider
        return SupabaseProvider(url, service_key, config.get("SUPABASE_ANON_KEY"))

    raise RuntimeError(f"Unknown BACKEND_PROVIDER: {kind!r}")


def init_app(app: Flask) -> None:
    app.extensions[EXTENSION_KEY] = build_provider(app.config)


def get_provider() -> BackendProvider:
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "AuthSession", "BackendProvider", "Identity", "RESOURCES",
    "build_provider", "init_app", "get_provider",
]
