"""
File search: plain substring search, structured filter search and the
keyword heuristics that turn a free-text prompt into filters.
"""
import re
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

from app_constants.constants import SmartSearch
from app_constants.log_module import logger
from scripts.models.file_management import FileMetadata
from scripts.models.search_models import SearchFilters, ParsedSmartQuery, SizeRange, DateRange
from scripts.utils.common_utils import utcnow, as_naive_utc, start_of_day, subtract_month
from scripts.utils.storage_util import BaseStorage


def search_items(storage: BaseStorage, user_id: int, query: str) -> List[FileMetadata]:
    query = query.lower()
    return [file for file in storage.list(FileMetadata, user_id=user_id) if query in file.name.lower()]


def matches_filters(file: FileMetadata, filters: SearchFilters) -> bool:
    if filters.name and filters.name.lower() not in file.name.lower():
        return False

    if filters.type and (not file.mime_type or filters.type not in file.mime_type):
        return False

    if filters.size:
        if filters.size.min is not None and (file.size is None or file.size < filters.size.min):
            return False
        if filters.size.max is not None and (file.size is None or file.size > filters.size.max):
            return False

    if filters.date_created:
        date_from = as_naive_utc(filters.date_created.from_)
        date_to = as_naive_utc(filters.date_created.to)
        if date_from and (file.created_at is None or file.created_at < date_from):
            return False
        if date_to and (file.created_at is None or file.created_at > date_to):
            return False

    if filters.provider is not None and file.provider_id != filters.provider:
        return False

    return True


def advanced_search(storage: BaseStorage, user_id: int, filters: SearchFilters) -> List[FileMetadata]:
    return [file for file in storage.list(FileMetadata, user_id=user_id) if matches_filters(file, filters)]


# ---------- smart query rules ----------

def _date_range(keyword: str, now: datetime) -> DateRange:
    today = start_of_day(now)
    if keyword == "today":
        return DateRange(from_=today)
    if keyword == "yesterday":
        return DateRange(from_=today - timedelta(days=1), to=today)
    if keyword == "last week":
        return DateRange(from_=now - timedelta(days=7))
    if keyword == "last month":
        return DateRange(from_=subtract_month(now))
    return DateRange(from_=today.replace(day=1))


def _apply_type(prompt: str, filters: SearchFilters, now: datetime) -> None:
    match = re.search(SmartSearch.type_pattern, prompt, re.IGNORECASE)
    if match:
        filters.type = match.group(1).lower()


def _apply_date(prompt: str, filters: SearchFilters, now: datetime) -> None:
    for keyword in SmartSearch.date_keywords:
        if re.search(rf"\b{keyword}\b", prompt, re.IGNORECASE):
            filters.date_created = _date_range(keyword, now)
            return


def _apply_size(prompt: str, filters: SearchFilters, now: datetime) -> None:
    # large/big is tested first and wins over small/tiny
    if re.search(SmartSearch.large_pattern, prompt, re.IGNORECASE):
        filters.size = SizeRange(min=SmartSearch.one_mib)
    elif re.search(SmartSearch.small_pattern, prompt, re.IGNORECASE):
        filters.size = SizeRange(max=SmartSearch.one_mib)


def _apply_name(prompt: str, filters: SearchFilters, now: datetime) -> None:
    words = [word for word in prompt.split() if word.lower() not in SmartSearch.stop_words]
    if not words:
        return
    # max keeps the first of equally long words
    longest = max(words, key=len)
    if len(longest) > SmartSearch.min_name_length:
        filters.name = longest


SMART_QUERY_RULES: List[Tuple[str, Callable[[str, SearchFilters, datetime], None]]] = [
    ("type", _apply_type),
    ("date", _apply_date),
    ("size", _apply_size),
    ("name", _apply_name),
]


def parse_smart_query(prompt: str, now: Optional[datetime] = None) -> ParsedSmartQuery:
    now = now or utcnow()
    filters = SearchFilters()
    for _, rule in SMART_QUERY_RULES:
        rule(prompt, filters, now)
    logger.debug(f"Smart query '{prompt}' parsed to {filters.model_dump(exclude_none=True)}")
    return ParsedSmartQuery(filters=filters, original_prompt=prompt)
