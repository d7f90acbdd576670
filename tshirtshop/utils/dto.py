from typing import Any, Dict

from ..services.pricing import round_money


def to_product_dto(row: Any) -> Dict:
    return {
        "product_id": getattr(row, "product_id", None),
        "name": getattr(row, "name", None),
        "description": getattr(row, "description", None),
        "price": f"{round_money(getattr(row, 'price', 0))}",
        "discounted_price": f"{round_money(getattr(row, 'discounted_price', 0))}",
        "image": getattr(row, "image", None),
        "image_2": getattr(row, "image_2", None),
        "thumbnail": getattr(row, "thumbnail", None),
        "display": getattr(row, "display", 0) or 0,
    }
