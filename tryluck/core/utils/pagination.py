"""Page/limit slicing for admin listings."""

from __future__ import annotations

from typing import Any, Dict

from sqlalchemy.orm import Query

MAX_PER_PAGE = 100


def paginate(query: Query, page: int = 1, per_page: int = 20) -> Dict[str, Any]:
    """Slice ``query`` to one page; ``per_page`` is clamped to 1..MAX_PER_PAGE."""
    page = max(page, 1)
    per_page = min(max(per_page, 1), MAX_PER_PAGE)
    total = query.order_by(None).count()
    return {
        "items": query.offset((page - 1) * per_page).limit(per_page).all(),
        "page": page,
        "per_page": per_page,
        "total": total,
        "pages": -(-total // per_page),
    }
