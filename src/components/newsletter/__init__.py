"""
Newsletter component.

Subscriber state machine (absent/active/inactive) and subscriber admin.
"""

from src.components.newsletter.component import (
    ALREADY_SUBSCRIBED,
    create_subscriber,
    mask_email,
    reactivate_subscriber,
    run,
    run_delete,
    run_list,
    run_subscribe,
    subscriber_state,
)
from src.components.newsletter.models import (
    VALID_TRANSITIONS,
    DeleteSubscriberInput,
    DeleteSubscriberOutput,
    ListSubscribersInput,
    NewsletterSubscriber,
    SubscribeInput,
    SubscribeOutput,
    SubscriberPage,
    SubscriberState,
    can_transition,
)
from src.components.newsletter.ports import NewsletterRepoPort

__all__ = [
    # Component
    "run",
    "run_subscribe",
    "run_list",
    "run_delete",
    # Pure functions
    "create_subscriber",
    "reactivate_subscriber",
    "subscriber_state",
    "mask_email",
    # Constants
    "ALREADY_SUBSCRIBED",
    # Models
    "NewsletterSubscriber",
    "SubscriberState",
    "VALID_TRANSITIONS",
    "can_transition",
    # Input/Output
    "SubscribeInput",
    "SubscribeOutput",
    "ListSubscribersInput",
    "SubscriberPage",
    "DeleteSubscriberInput",
    "DeleteSubscriberOutput",
    # Ports
    "NewsletterRepoPort",
]
