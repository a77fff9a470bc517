from typing import List
from fastapi import APIRouter, Depends

from app_constants.connectors import get_storage
from app_constants.log_module import logger
from app_constants.url import Routes, SearchAPI
from scripts.models.file_management import FileInfo
from scripts.models.search_models import (RawSearchRequest, AdvancedSearchRequest, SmartSearchRequest,
                                          SmartSearchResponse)
from scripts.models.user_management import User
from scripts.handlers.user_management_handler import get_current_user
from scripts.handlers.search_handler import search_items, advanced_search, parse_smart_query
from scripts.utils.exceptions import InternalError
from scripts.utils.storage_util import BaseStorage


router = APIRouter(prefix=Routes.search, tags=["search"])


@router.post(SearchAPI.raw, response_model=List[FileInfo])
async def raw_search(search_request: RawSearchRequest,
                     current_user: User = Depends(get_current_user),
                     storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Raw search for '{search_request.query}'")
        return [FileInfo.model_validate(file) for file in search_items(storage, current_user.id,
                                                                       search_request.query)]
    except Exception as e:
        logger.exception(f"Search failed: {e}")
        raise InternalError("Search failed")


@router.post(SearchAPI.advanced, response_model=List[FileInfo])
async def advanced_search_service(search_request: AdvancedSearchRequest,
                                  current_user: User = Depends(get_current_user),
                                  storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Advanced search with {search_request.filters.model_dump(exclude_none=True)}")
        return [FileInfo.model_validate(file) for file in advanced_search(storage, current_user.id,
                                                                          search_request.filters)]
    except Exception as e:
        logger.exception(f"Advanced search failed: {e}")
        raise InternalError("Advanced search failed")


@router.post(SearchAPI.smart, response_model=SmartSearchResponse)
async def smart_search(search_request: SmartSearchRequest,
                       current_user: User = Depends(get_current_user),
                       storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Smart search for '{search_request.prompt}'")
        parsed_query = parse_smart_query(search_request.prompt)
        results = advanced_search(storage, current_user.id, parsed_query.filters)
        return SmartSearchResponse(parsed_query=parsed_query,
                                   results=[FileInfo.model_validate(file) for file in results])
    except Exception as e:
        logger.exception(f"Smart search failed: {e}")
        raise InternalError("Smart search failed")
