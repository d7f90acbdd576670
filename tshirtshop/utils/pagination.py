import math
from typing import Dict, Tuple


def normalize_paging(page, page_size, max_page_size: int = 100) -> Tuple[int, int]:
    p = _as_int(page)
    ps = _as_int(page_size)
    p = p if p and p > 0 else 1
    ps = ps if ps and ps > 0 else 20
    ps = min(ps, max_page_size)
    return p, ps


def pagination_meta(page: int, page_size: int, total: int) -> Dict:
    return {
        "currentPage": page,
        "currentPageSize": page_size,
        "totalPages": math.ceil(total / page_size) if total else 0,
        "totalRecords": total,
    }


def _as_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
