from .tenancy import Organization
from .auth import User, SessionToken, Profile
from .venues import Venue
from .bookings import Booking
from .billing import Payment, Invoice

__all__ = [
    'Organization',
    'User', 'SessionToken', 'Profile',
    'Venue',
    'Booking',
    'Payment', 'Invoice',
]
