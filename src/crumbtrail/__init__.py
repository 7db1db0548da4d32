"""crumbtrail - Breadcrumb trails for hierarchical content.

Resolves the chain of ancestor items of a content item from its
identifier, tolerating gaps where no ancestor item exists.
"""

from crumbtrail.core.breadcrumbs import (
    DEFAULT_TIEBREAKER,
    AmbiguousAncestorError,
    BreadcrumbTrail,
    ErrorTiebreaker,
    FirstTiebreaker,
    Tiebreaker,
    breadcrumbs_trail,
)
from crumbtrail.core.identifier import Identifier
from crumbtrail.core.items import Item, ItemIndex

__all__ = [
    "DEFAULT_TIEBREAKER",
    "AmbiguousAncestorError",
    "BreadcrumbTrail",
    "ErrorTiebreaker",
    "FirstTiebreaker",
    "Identifier",
    "Item",
    "ItemIndex",
    "Tiebreaker",
    "breadcrumbs_trail",
]
