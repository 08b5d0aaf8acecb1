import logging
import math
from typing import Any, Dict, Generic, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, conint

from clinic_desk.schemas.sche_base import MetadataSchema

T = TypeVar("T")

logger = logging.getLogger(__name__)


class PaginationParams(BaseModel):
    page_size: Optional[conint(gt=0, lt=1001)] = 20
    page: Optional[conint(gt=0)] = 1


class Page(BaseModel, Generic[T]):
    code: str = ''
    message: str = ''
    data: List[T]
    metadata: MetadataSchema

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def create(cls, code: str, message: str, data: List[T], metadata: MetadataSchema) -> "Page[T]":
        return cls(
            code=code,
            message=message,
            data=data,
            metadata=metadata
        )


def _total_pages(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


def paginate(items: Sequence[Any], params: PaginationParams) -> Page:
    """Slice an already fetched list into one page."""
    total = len(items)
    start = params.page_size * (params.page - 1)
    data = list(items[start:start + params.page_size])

    metadata = MetadataSchema(
        current_page=params.page,
        page_size=params.page_size,
        total_items=total,
        total_pages=_total_pages(total, params.page_size),
    )
    return Page.create('200', 'Success', data, metadata)


def page_from_clinic(data: List[Any], pagination: Optional[Dict[str, Any]], params: PaginationParams) -> Page:
    """Wrap a page the clinic backend already cut, keeping its totals."""
    pagination = pagination or {}
    total = int(pagination.get('total', len(data)))
    pages = pagination.get('pages')
    if pages is None:
        logger.debug("Clinic backend sent no page count, deriving it from the total")
        pages = _total_pages(total, params.page_size)

    metadata = MetadataSchema(
        current_page=params.page,
        page_size=params.page_size,
        total_items=total,
        total_pages=int(pages),
    )
    return Page.create('200', 'Success', data, metadata)
