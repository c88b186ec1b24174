"""
API Request and Response Models.

Pydantic models for serializing responses. Field aliases carry the camelCase
names the dashboard depends on.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# Product Models
# ============================================================================

class SaleRecordResponse(BaseModel):
    """Single catalog entry in API response."""
    id: int
    title: str
    description: str
    price: float
    category: str
    image: Optional[str] = None
    rating: Optional[Dict[str, Any]] = None
    sold: bool
    sold_date: Optional[datetime] = Field(None, alias="soldDate")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "title": "Fjallraven Backpack",
                "description": "Your perfect pack for everyday use",
                "price": 329.85,
                "category": "men's clothing",
                "image": "https://example.com/backpack.jpg",
                "rating": {"rate": 3.9, "count": 120},
                "sold": True,
                "soldDate": "2024-03-10T00:00:00Z"
            }
        }


class ProductListResponse(BaseModel):
    """Response for paginated product listing."""
    total: int
    page: int
    per_page: int
    total_pages: int
    data: List[SaleRecordResponse]

    class Config:
        json_schema_extra = {
            "example": {
                "total": 60,
                "page": 1,
                "per_page": 10,
                "total_pages": 6,
                "data": []
            }
        }


# ============================================================================
# Analytics Models
# ============================================================================

class StatisticsResponse(BaseModel):
    """Monthly sales totals."""
    total_sales_amount: Optional[float] = Field(None, alias="totalSalesAmount")
    total_sold_items: int = Field(..., alias="totalSoldItems")
    total_not_sold_items: int = Field(..., alias="totalNotSoldItems")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "totalSalesAmount": 150.0,
                "totalSoldItems": 1,
                "totalNotSoldItems": 1
            }
        }


class CombinedResponse(BaseModel):
    """Statistics, price histogram and category breakdown for one month."""
    statistics: StatisticsResponse
    bar_chart: Dict[str, int] = Field(..., alias="barChart")
    pie_chart: Dict[str, int] = Field(..., alias="pieChart")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "statistics": {
                    "totalSalesAmount": 150.0,
                    "totalSoldItems": 1,
                    "totalNotSoldItems": 1
                },
                "barChart": {
                    "0-100": 0,
                    "101-200": 2,
                    "201-300": 0,
                    "301-400": 0,
                    "401-500": 0,
                    "501-600": 0,
                    "601-700": 0,
                    "701-800": 0,
                    "801-900": 0,
                    "901-above": 0
                },
                "pieChart": {"A": 1, "B": 1}
            }
        }


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None
    status_code: int

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Invalid request",
                "detail": "Month query parameter is required",
                "status_code": 400
            }
        }
