from pydantic import Field
from typing import List, Optional

from scripts.models.common_models import CamelModel, UtcDatetime
from scripts.models.file_management import FileInfo


class SizeRange(CamelModel):
    min: Optional[int] = None
    max: Optional[int] = None


class DateRange(CamelModel):
    from_: Optional[UtcDatetime] = Field(default=None, alias="from")
    to: Optional[UtcDatetime] = None


class SearchFilters(CamelModel):
    """Every field is optional; the ones present are ANDed together."""
    name: Optional[str] = None
    type: Optional[str] = None
    size: Optional[SizeRange] = None
    date_created: Optional[DateRange] = None
    provider: Optional[int] = None


class RawSearchRequest(CamelModel):
    query: str = Field(min_length=1)


class AdvancedSearchRequest(CamelModel):
    filters: SearchFilters


class SmartSearchRequest(CamelModel):
    prompt: str = Field(min_length=1)


class ParsedSmartQuery(CamelModel):
    filters: SearchFilters
    original_prompt: str


class SmartSearchResponse(CamelModel):
    parsed_query: ParsedSmartQuery
    results: List[FileInfo]
