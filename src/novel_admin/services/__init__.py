"""Business logic services for the novel platform admin API."""

from .aggregation import DailyBucket, Event, bucket_events, traffic_window
from .auth import AdminSession, AuthService
from .gateway import AnyOf, DataGateway, Where
from .ordering import OrderMaintainer
from .storage import ObjectStorage

__all__ = [
    "AdminSession",
    "AnyOf",
    "AuthService",
    "DailyBucket",
    "DataGateway",
    "Event",
    "ObjectStorage",
    "OrderMaintainer",
    "Where",
    "bucket_events",
    "traffic_window",
]
