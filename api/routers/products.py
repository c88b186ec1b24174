"""
Products API Endpoints.

Paginated, searchable catalog listing.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_record_store
from api.models import ProductListResponse, SaleRecordResponse
from repositories.record_store import RecordStore, StoreUnavailable
from services.catalog_service import MAX_PER_PAGE, list_products

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/products",
    response_model=ProductListResponse,
    summary="List Products",
    description="Browse catalog entries with pagination and free-text search over title, description and price."
)
def get_products(
    page: int = Query(1, ge=1, description="1-based page number"),
    per_page: int = Query(10, ge=1, le=MAX_PER_PAGE, description="Items per page"),
    search: str = Query("", description="Matches title or description, or the exact price"),
    store: RecordStore = Depends(get_record_store),
):
    """
    List catalog entries.

    **Example usage:**
    - First page: `GET /api/v1/products`
    - Search: `GET /api/v1/products?search=backpack&per_page=20`
    - Exact price: `GET /api/v1/products?search=329.85`
    """
    try:
        result = list_products(store, page=page, per_page=per_page, search=search)

        return ProductListResponse(
            total=result.total,
            page=result.page,
            per_page=result.per_page,
            total_pages=result.total_pages,
            data=[
                SaleRecordResponse(
                    id=record.id,
                    title=record.title,
                    description=record.description,
                    price=record.price,
                    category=record.category,
                    image=record.image,
                    rating=dict(record.rating) if record.rating is not None else None,
                    sold=record.sold,
                    sold_date=record.sold_date,
                )
                for record in result.records
            ],
        )

    except StoreUnavailable:
        raise
    except Exception as e:
        logger.exception("Failed to list products")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to list products: {str(e)}"
        )
