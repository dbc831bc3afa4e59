"""
Revalidation component.

On-demand cache revalidation of public blog pages.
"""

from src.components.revalidation.adapters import (
    StubRevalidationAdapter,
    WebhookRevalidationAdapter,
)
from src.components.revalidation.component import paths_for, revalidate
from src.components.revalidation.models import (
    RevalidateInput,
    RevalidationError,
    RevalidationResult,
)
from src.components.revalidation.ports import RevalidationPort

__all__ = [
    "revalidate",
    "paths_for",
    "RevalidateInput",
    "RevalidationResult",
    "RevalidationError",
    "RevalidationPort",
    "StubRevalidationAdapter",
    "WebhookRevalidationAdapter",
]
