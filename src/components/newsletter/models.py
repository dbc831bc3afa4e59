"""
Newsletter component models.

Subscriber identity is the lower-cased email address.
State machine: absent → active, inactive → active (reactivation),
active → (subscribe again) rejected as already subscribed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from uuid import UUID

# --- State Machine ---


class SubscriberState(Enum):
    """
    Newsletter subscriber state.

    ABSENT is never stored; it describes an email with no row.
    """

    ABSENT = "absent"
    ACTIVE = "active"
    INACTIVE = "inactive"


# Valid state transitions on subscribe
VALID_TRANSITIONS: dict[SubscriberState, set[SubscriberState]] = {
    SubscriberState.ABSENT: {SubscriberState.ACTIVE},
    SubscriberState.INACTIVE: {SubscriberState.ACTIVE},
    SubscriberState.ACTIVE: set(),  # Already subscribed
}


def can_transition(from_state: SubscriberState, to_state: SubscriberState) -> bool:
    """Check if a state transition is valid."""
    return to_state in VALID_TRANSITIONS.get(from_state, set())


# --- Entity ---


@dataclass
class NewsletterSubscriber:
    id: UUID
    email: str
    name: str | None = None
    is_active: bool = True
    subscribed_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def state(self) -> SubscriberState:
        return SubscriberState.ACTIVE if self.is_active else SubscriberState.INACTIVE


# --- Input Models ---


@dataclass(frozen=True)
class SubscribeInput:
    """Input for a new subscription. Email must already be validated."""

    email: str
    name: str | None = None


@dataclass(frozen=True)
class ListSubscribersInput:
    page: int = 1
    page_size: int = 20
    search: str | None = None  # Substring of email or name


@dataclass(frozen=True)
class DeleteSubscriberInput:
    subscriber_id: UUID


# --- Output Models ---


@dataclass(frozen=True)
class SubscribeOutput:
    success: bool
    subscriber_id: UUID | None = None
    reactivated: bool = False


@dataclass(frozen=True)
class SubscriberPage:
    data: list[NewsletterSubscriber]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0


@dataclass(frozen=True)
class DeleteSubscriberOutput:
    success: bool
