"""
Base Domain Classes

Foundational building blocks shared by all bounded contexts:
- ValueObject: Immutable objects compared by value
- DomainEvent: Events that represent something that happened
- EventRecorder: Mixin that lets Django models collect domain events
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass


@dataclass
class DomainEvent:
    """
    Base class for domain events

    Domain events represent something that happened in the domain.
    They are used to communicate between bounded contexts.
    Metadata fields are keyword-only so subclasses can declare
    required payload fields.
    """
    event_id: UUID = field(default_factory=uuid4, kw_only=True)
    occurred_at: datetime = field(default_factory=datetime.now, kw_only=True)
    aggregate_id: Optional[Any] = field(default=None, kw_only=True)

    def to_dict(self) -> dict:
        """Convert event to dictionary for serialization"""
        return {
            'event_id': str(self.event_id),
            'event_type': self.__class__.__name__,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': str(self.aggregate_id) if self.aggregate_id is not None else None,
        }


class EventRecorder:
    """
    Mixin for aggregate roots persisted as Django models

    Events are kept on the instance until a unit of work collects them.
    """

    def add_event(self, event: DomainEvent):
        """Add a domain event to be published"""
        self.__dict__.setdefault('_pending_events', []).append(event)

    def clear_events(self):
        """Clear all collected events (called after publishing)"""
        self.__dict__['_pending_events'] = []

    @property
    def events(self) -> List[DomainEvent]:
        """Get copy of collected events"""
        return list(self.__dict__.get('_pending_events', []))
