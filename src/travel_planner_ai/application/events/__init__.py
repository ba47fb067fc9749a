"""Event routing and delivery."""

from .event_router import EventHandler, EventRouter, Subscription
from .handlers import LiveDeliveryHandler, PersistenceHandler

__all__ = ["EventHandler", "EventRouter", "Subscription", "LiveDeliveryHandler", "PersistenceHandler"]
