from typing import Any, Dict, List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import selectinload
from ..errors import NotFound, ValidationError
from ..models.attribute import Attribute
from ..models.product import Product, ProductCategory
from ..models.category import Category, Department
from ..models.review import Review
from ..models.tax import Tax
from ..utils.pagination import normalize_paging, pagination_meta
from ..utils.dto import to_product_dto
from .logging import log_event


def _as_id(value: Any, field: str, code: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer", code=code, field=field) from None


class CatalogService:
    """Catalog queries.

    Responsibilities:
    - List/search products with pagination and optional category/department filter
    - Get single product detail, its categories, locations and attributes
    - List departments and categories, alone or nested
    - Attributes, attribute values and taxes
    - Product reviews, the only write this service does
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def list_products(
        self,
        *,
        query: Optional[str] = None,
        category_id: Optional[int] = None,
        department_id: Optional[int] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> Dict:
        """Return dict: { paginationMeta, rows: [ProductDTO] }"""
        p, ps = normalize_paging(page, page_size)
        with self._session_factory() as session:
            q = session.query(Product)
            if query:
                like = f"%{query.strip()}%"
                q = q.filter(or_(Product.name.ilike(like), Product.description.ilike(like)))
            if category_id is not None:
                q = q.join(ProductCategory, ProductCategory.product_id == Product.product_id).filter(
                    ProductCategory.category_id == int(category_id)
                )
            elif department_id is not None:
                q = (
                    q.join(ProductCategory, ProductCategory.product_id == Product.product_id)
                    .join(Category, Category.category_id == ProductCategory.category_id)
                    .filter(Category.department_id == int(department_id))
                    .distinct()
                )
            total = q.count()
            rows = q.order_by(Product.product_id).offset((p - 1) * ps).limit(ps).all()
            return {"paginationMeta": pagination_meta(p, ps, total), "rows": [to_product_dto(r) for r in rows]}

    def search_products(self, query: str, *, page: int = 1, page_size: int = 20) -> Dict:
        if not (query or "").strip():
            raise ValidationError("query_string required", code="PRO_02", field="query_string")
        return self.list_products(query=query, page=page, page_size=page_size)

    def get_product(self, product_id) -> Dict:
        """Return ProductDTO for given product id."""
        with self._session_factory() as session:
            return to_product_dto(self._product(session, product_id))

    def list_departments(self) -> List[Dict]:
        with self._session_factory() as session:
            return [d.to_dict() for d in session.query(Department).order_by(Department.department_id).all()]

    def list_categories(self, department_id: Optional[int] = None) -> List[Dict]:
        with self._session_factory() as session:
            q = session.query(Category)
            if department_id is not None:
                q = q.filter(Category.department_id == int(department_id))
            return [c.to_dict() for c in q.order_by(Category.category_id).all()]

    def get_products_in_category(self, category_id, *, page: int = 1, page_size: int = 20) -> Dict:
        return self.list_products(
            category_id=_as_id(category_id, "category_id", "CAT_02"), page=page, page_size=page_size
        )

    def get_products_in_department(self, department_id, *, page: int = 1, page_size: int = 20) -> Dict:
        return self.list_products(
            department_id=_as_id(department_id, "department_id", "DEP_01"), page=page, page_size=page_size
        )

    @staticmethod
    def _product(session, product_id) -> Product:
        pid = _as_id(product_id, "product_id", "PRO_03")
        r = session.get(Product, pid)
        if not r:
            raise NotFound(f"Product with id {pid} does not exist", code="PRO_01")
        return r

    @staticmethod
    def _department(session, department_id) -> Department:
        did = _as_id(department_id, "department_id", "DEP_01")
        d = session.get(Department, did)
        if not d:
            raise NotFound(f"Department with id {did} does not exist", code="DEP_02")
        return d

    def get_department(self, department_id) -> Dict:
        with self._session_factory() as session:
            return self._department(session, department_id).to_dict()

    def get_category(self, category_id) -> Dict:
        cid = _as_id(category_id, "category_id", "CAT_02")
        with self._session_factory() as session:
            c = session.get(Category, cid)
            if not c:
                raise NotFound(f"Category with id {cid} does not exist", code="CAT_01")
            return c.to_dict()

    def get_department_categories(self, department_id) -> List[Dict]:
        with self._session_factory() as session:
            d = self._department(session, department_id)
            return [c.to_dict() for c in sorted(d.categories, key=lambda c: c.category_id)]

    def departments_with_categories(self) -> List[Dict]:
        with self._session_factory() as session:
            rows = (
                session.query(Department)
                .options(selectinload(Department.categories))
                .order_by(Department.department_id)
                .all()
            )
            out = []
            for d in rows:
                data = d.to_dict()
                data["categories"] = [c.to_dict() for c in sorted(d.categories, key=lambda c: c.category_id)]
                out.append(data)
            return out

    def get_product_categories(self, product_id) -> List[Dict]:
        with self._session_factory() as session:
            p = self._product(session, product_id)
            return [c.to_dict() for c in sorted(p.categories, key=lambda c: c.category_id)]

    def get_product_locations(self, product_id) -> List[Dict]:
        """Category and department pairs a product is listed under."""
        with self._session_factory() as session:
            p = self._product(session, product_id)
            return [
                {
                    "category_id": c.category_id,
                    "category_name": c.name,
                    "department_id": c.department.department_id,
                    "department_name": c.department.name,
                }
                for c in sorted(p.categories, key=lambda c: c.category_id)
            ]

    # Attributes

    def list_attributes(self) -> List[Dict]:
        with self._session_factory() as session:
            return [a.to_dict() for a in session.query(Attribute).order_by(Attribute.attribute_id).all()]

    @staticmethod
    def _attribute(session, attribute_id) -> Attribute:
        aid = _as_id(attribute_id, "attribute_id", "ATR_02")
        a = session.get(Attribute, aid)
        if not a:
            raise NotFound(f"Attribute with id {aid} does not exist", code="ATR_01")
        return a

    def get_attribute(self, attribute_id) -> Dict:
        with self._session_factory() as session:
            return self._attribute(session, attribute_id).to_dict()

    def get_attribute_values(self, attribute_id) -> List[Dict]:
        with self._session_factory() as session:
            return [v.to_dict() for v in self._attribute(session, attribute_id).values]

    def get_product_attributes(self, product_id) -> List[Dict]:
        """Attribute values a product is offered in, e.g. its sizes and colors."""
        with self._session_factory() as session:
            p = self._product(session, product_id)
            rows = sorted(p.attribute_values, key=lambda v: (v.attribute_id, v.attribute_value_id))
            return [
                {
                    "attribute_name": v.attribute.name,
                    "attribute_value_id": v.attribute_value_id,
                    "attribute_value": v.value,
                }
                for v in rows
            ]

    # Taxes

    def list_taxes(self) -> List[Dict]:
        with self._session_factory() as session:
            return [t.to_dict() for t in session.query(Tax).order_by(Tax.tax_id).all()]

    def get_tax(self, tax_id) -> Dict:
        tid = _as_id(tax_id, "tax_id", "TAX_02")
        with self._session_factory() as session:
            t = session.get(Tax, tid)
            if not t:
                raise NotFound(f"Tax with id {tid} does not exist", code="TAX_01")
            return t.to_dict()

    # Reviews

    def get_product_reviews(self, product_id) -> List[Dict]:
        with self._session_factory() as session:
            p = self._product(session, product_id)
            rows = (
                session.query(Review)
                .options(selectinload(Review.customer))
                .filter(Review.product_id == p.product_id)
                .order_by(Review.review_id)
                .all()
            )
            return [
                {
                    "name": r.customer.name,
                    "review": r.review,
                    "rating": r.rating,
                    "created_on": r.created_on.isoformat(),
                }
                for r in rows
            ]

    def create_product_review(self, product_id, *, customer_id: int, review: str, rating: Any) -> Dict:
        text = str(review or "").strip()
        if not text:
            raise ValidationError("review required", code="REV_01", field="review")
        try:
            stars = 0 if isinstance(rating, bool) else int(str(rating).strip())
        except ValueError:
            stars = 0
        if not 1 <= stars <= 5:
            raise ValidationError("rating must be an integer from 1 to 5", code="REV_02", field="rating")
        with self._session_factory() as session:
            p = self._product(session, product_id)
            r = Review(product_id=p.product_id, customer_id=int(customer_id), review=text, rating=stars)
            session.add(r)
            session.flush()
            log_event("info", "review.created", product_id=p.product_id, customer_id=customer_id, rating=stars)
            return r.to_dict()
