from eventhub.models.user import User
from eventhub.models.category import Category
from eventhub.models.event import Event
from eventhub.models.booking import Booking

__all__ = ["User", "Category", "Event", "Booking"]
