from typing import List, Any
from math import ceil
from sqlalchemy.orm import Query
from pydantic import BaseModel

class PaginationParams(BaseModel):
    page: int = 1
    page_size: int = 50
    
    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size
    
    def validate_bounds(self, max_page_size: int = 1000):
        if self.page < 1:
            raise ValueError("Page must be >= 1")
        if self.page_size < 1 or self.page_size > max_page_size:
            raise ValueError(f"Page size must be between 1 and {max_page_size}")

class PaginatedResult(BaseModel):
    items: List[Any]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_prev: bool

def paginate(
    query: Query,
    page: int = 1,
    page_size: int = 50,
    max_page_size: int = 1000
) -> PaginatedResult:
    params = PaginationParams(page=page, page_size=page_size)
    params.validate_bounds(max_page_size)
    total = query.order_by(None).count()
    items = query.offset(params.offset).limit(page_size).all()
    
    total_pages = ceil(total / page_size) if total > 0 else 0
    
    return PaginatedResult(
        items=items,
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1
    )
