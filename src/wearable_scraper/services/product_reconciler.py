"""Insert-or-update of scraped products against the catalog.

Identity: same case-insensitive title, or same URL. The first catalog entry
that matches wins; nothing here ever raises on ambiguity.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence

from ..domain.models import UNKNOWN, Product, ProductCandidate
from ..utils.time import current_time_ms


@dataclass(frozen=True)
class ReconcileResult:
    catalog: tuple[Product, ...]
    product: Product
    is_new: bool


def new_product_id() -> str:
    return f"product-{uuid.uuid4()}"


def normalize_title(title: str) -> str:
    return (title or "").strip().lower()


def find_match(title: str, url: str, catalog: Sequence[Product]) -> Optional[int]:
    """Index of the first product sharing ``title`` or ``url``, else None.

    Empty titles and URLs never match anything.
    """
    key = normalize_title(title)
    for index, existing in enumerate(catalog):
        if key and normalize_title(existing.title) == key:
            return index
        if url and existing.url == url:
            return index
    return None


def reconcile(
    candidate: ProductCandidate,
    catalog: Sequence[Product],
    *,
    now_ms: Optional[int] = None,
    id_factory: Callable[[], str] = new_product_id,
) -> ReconcileResult:
    now = current_time_ms() if now_ms is None else now_ms
    products = tuple(catalog)
    index = find_match(candidate.title, candidate.url, products)

    if index is None:
        created = Product(
            id=id_factory(),
            title=candidate.title,
            description=candidate.description,
            url=candidate.url,
            source=candidate.source,
            category=candidate.category,
            body_placement=candidate.body_placement,
            sensory_inputs=candidate.sensory_inputs,
            features=candidate.features,
            is_always_on=candidate.is_always_on,
            price=candidate.price if candidate.price is not None else UNKNOWN,
            pricing_model=candidate.pricing_model if candidate.pricing_model is not None else UNKNOWN,
            headings=candidate.headings if candidate.headings is not None else (),
            timestamp=now,
            last_updated=now,
        )
        return ReconcileResult(catalog=products + (created,), product=created, is_new=True)

    existing = products[index]
    updated = replace(
        existing,
        title=candidate.title,
        description=candidate.description,
        url=candidate.url,
        source=candidate.source,
        category=candidate.category,
        body_placement=candidate.body_placement,
        sensory_inputs=candidate.sensory_inputs,
        features=candidate.features,
        is_always_on=candidate.is_always_on,
        price=candidate.price if candidate.price is not None else existing.price,
        pricing_model=candidate.pricing_model if candidate.pricing_model is not None else existing.pricing_model,
        headings=candidate.headings if candidate.headings is not None else existing.headings,
        # Strictly increasing even when two writes land in the same millisecond.
        last_updated=max(now, existing.last_updated + 1),
    )
    return ReconcileResult(
        catalog=products[:index] + (updated,) + products[index + 1 :],
        product=updated,
        is_new=False,
    )
