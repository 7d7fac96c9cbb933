"""
Pagination envelope shared by all collection endpoints.
"""

from pydantic import BaseModel
from typing import Generic, List, TypeVar

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of a collection."""
    total_pages: int
    total_docs_count: int
    current_page: int
    docs: List[T]
