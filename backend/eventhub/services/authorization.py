"""
Authorization gate.

Each check runs after the caller's identity is known and either returns
quietly or raises `PermissionDeniedError`. Missing identity is handled
earlier by `get_current_user` (401).
"""

from dataclasses import dataclass
from typing import Optional

from eventhub.core.exceptions import PermissionDeniedError
from eventhub.models import Booking, Event, User


def can_create_event(user: User) -> bool:
    return user.is_admin


def can_modify_event(user: User, event: Event) -> bool:
    return user.is_admin or event.organizer_id == user.id


def can_access_booking(user: User, booking: Booking) -> bool:
    return user.is_admin or booking.user_id == user.id


def can_manage_users(user: User) -> bool:
    return user.is_admin


def require_event_creator(user: User) -> None:
    if not can_create_event(user):
        raise PermissionDeniedError()


def require_event_owner(user: User, event: Event) -> None:
    if not can_modify_event(user, event):
        raise PermissionDeniedError()


def require_booking_owner(user: User, booking: Booking) -> None:
    if not can_access_booking(user, booking):
        raise PermissionDeniedError()


def require_admin(user: User) -> None:
    if not can_manage_users(user):
        raise PermissionDeniedError()


@dataclass(frozen=True)
class BookingScope:
    """Which bookings a listing may return: one user's, or one event's."""

    user_id: Optional[int] = None
    event_id: Optional[int] = None


def booking_list_scope(user: User, event_filter: Optional[int]) -> BookingScope:
    """
    Admins with an event filter see every booking for that event. Everyone
    else, admins without a filter included, sees only their own bookings; a
    non-admin's event filter is ignored.
    """
    if user.is_admin and event_filter is not None:
        return BookingScope(event_id=event_filter)
    return BookingScope(user_id=user.id)
