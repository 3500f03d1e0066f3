"""
Pytest fixtures for VenueHub backend tests.

Provides the app on in-memory SQLite (sql provider), a per-test clean
database, two tenants with users in every role, and token helpers.
"""

from datetime import date, time
from decimal import Decimal

import pytest

from venuehub import create_app
from venuehub.config import TestingConfig
from venuehub.extensions import db
from venuehub.models import Booking, Invoice, Organization, Payment, Profile, User, Venue
from venuehub.passwords import hash_password
from venuehub.providers import get_provider


PASSWORD = "Password123!"


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app(TestingConfig)

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def provider(db_session):
    return get_provider()


@pytest.fixture(scope='function')
def org_a(db_session):
    """Create Organization A (first tenant)."""
    org = Organization(name="Org A - Acme Events")
    db_session.add(org)
    db_session.commit()
    return org


@pytest.fixture(scope='function')
def org_b(db_session):
    """Create Organization B (second tenant)."""
    org = Organization(name="Org B - Beta Venues")
    db_session.add(org)
    db_session.commit()
    return org


def make_user(db_session, email, org=None, role=None, name="Test User"):
    """Create an identity, plus a profile when org and role are given."""
    user = User(email=email, password_hash=hash_password(PASSWORD, rounds=4))
    db_session.add(user)
    db_session.flush()
    if org is not None:
        db_session.add(Profile(
            id=user.id,
            organization_id=org.id,
            role=role,
            name=name,
            email=email,
        ))
    db_session.commit()
    return user


@pytest.fixture(scope='function')
def owner_a(db_session, org_a):
    return make_user(db_session, "owner_a@acme.com", org_a, "owner", "Olivia Owner")


@pytest.fixture(scope='function')
def manager_b(db_session, org_b):
    return make_user(db_session, "manager_b@beta.com", org_b, "manager", "Max Manager")


@pytest.fixture(scope='function')
def super_admin(db_session, org_a):
    return make_user(db_session, "admin@venuehub.local", org_a, "super_admin", "Sam Super")


@pytest.fixture(scope='function')
def no_profile_user(db_session):
    """Identity that can authenticate but was never onboarded."""
    return make_user(db_session, "orphan@acme.com")


def seed_org_data(db_session, org, label="A"):
    """One venue, booking, payment and invoice owned by org."""
    venue = Venue(
        organization_id=org.id,
        name=f"Hall {label}",
        location=f"Street {label}",
        capacity=100,
        price_per_hour=Decimal("50.00"),
    )
    db_session.add(venue)
    db_session.flush()

    booking = Booking(
        organization_id=org.id,
        venue_id=venue.id,
        customer_name=f"Customer {label}",
        customer_email=f"customer_{label.lower()}@example.com",
        booking_date=date(2026, 11, 2),
        start_time=time(18, 0),
        end_time=time(22, 0),
        total_price=Decimal("200.00"),
    )
    db_session.add(booking)
    db_session.flush()

    payment = Payment(
        organization_id=org.id,
        booking_id=booking.id,
        amount=Decimal("100.00"),
        payment_method="card",
        transaction_id="TXN-1",
    )
    invoice = Invoice(
        organization_id=org.id,
        booking_id=booking.id,
        amount=Decimal("200.00"),
        due_date=date(2026, 11, 30),
        invoice_number="INV-1",
    )
    db_session.add_all([payment, invoice])
    db_session.commit()

    return {
        "venue": venue.id,
        "booking": booking.id,
        "payment": payment.id,
        "invoice": invoice.id,
    }


@pytest.fixture(scope='function')
def data_a(db_session, org_a):
    return seed_org_data(db_session, org_a, "A")


@pytest.fixture(scope='function')
def data_b(db_session, org_b):
    return seed_org_data(db_session, org_b, "B")


def get_auth_token(email: str, password: str = PASSWORD) -> str:
    """Helper to get a session token for a user (requires app context)."""
    return get_provider().sign_in(email, password).token


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture(scope='function')
def owner_headers(owner_a):
    return auth_headers(get_auth_token(owner_a.email))


@pytest.fixture(scope='function')
def manager_headers(manager_b):
    return auth_headers(get_auth_token(manager_b.email))


@pytest.fixture(scope='function')
def admin_headers(super_admin):
    return auth_headers(get_auth_token(super_admin.email))


@pytest.fixture(scope='function')
def no_profile_headers(no_profile_user):
    return auth_headers(get_auth_token(no_profile_user.email))
