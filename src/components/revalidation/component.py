"""
Revalidation component.

Refreshes the blog listing page and, when a slug is given, the post page.
Only the listing refresh is required to succeed; any failure on the post
page is logged and reported in `errors`.
"""

from __future__ import annotations

import logging

from src.components.revalidation.models import RevalidateInput, RevalidationResult
from src.components.revalidation.ports import RevalidationPort
from src.rules.models import RevalidationRules

logger = logging.getLogger(__name__)


def paths_for(slug: str | None, rules: RevalidationRules) -> tuple[str, str | None]:
    """Listing path plus the post path when a non-empty slug was supplied."""
    post_path = f"{rules.post_path_prefix}{slug}" if isinstance(slug, str) and slug else None
    return rules.listing_path, post_path


async def revalidate(
    inp: RevalidateInput,
    port: RevalidationPort,
    rules: RevalidationRules | None = None,
) -> RevalidationResult:
    """
    Revalidate public blog pages.

    Raises:
        RevalidationError: the listing page could not be revalidated
    """
    rules = rules or RevalidationRules()
    listing_path, post_path = paths_for(inp.slug, rules)

    await port.revalidate_path(listing_path)
    result = RevalidationResult(success=True, paths_revalidated=[listing_path])

    if post_path is None:
        return result

    try:
        await port.revalidate_path(post_path)
    except Exception as e:
        logger.warning("Failed to revalidate %s: %s", post_path, e, exc_info=True)
        result.errors.append(str(e))
    else:
        result.paths_revalidated.append(post_path)

    return result
