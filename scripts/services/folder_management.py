from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from app_constants.connectors import get_storage
from app_constants.log_module import logger
from app_constants.url import Routes, FolderAPI
from scripts.models.folder_management import FolderCreate, FolderContents, FolderInfo
from scripts.models.user_management import User
from scripts.handlers.user_management_handler import get_current_user
from scripts.handlers.folder_management_handler import create_folder, get_folder_contents, get_owned_folder
from scripts.utils.exceptions import DashboardException, InternalError
from scripts.utils.storage_util import BaseStorage

router = APIRouter(prefix=Routes.folders, tags=["folders"])


@router.post(FolderAPI.create, response_model=FolderInfo, status_code=status.HTTP_201_CREATED)
async def create_folder_service(
    folder: FolderCreate,
    current_user: User = Depends(get_current_user),
    storage: BaseStorage = Depends(get_storage)
):
    try:
        logger.info(f"Running create folder..!")
        new_folder = create_folder(storage, current_user.id, folder)
        storage.commit()
        return FolderInfo.model_validate(new_folder)
    except DashboardException:
        storage.rollback()
        raise
    except Exception as e:
        storage.rollback()
        logger.exception(f"Failed to create the folder: {e}")
        raise InternalError("Failed to create folder")


@router.get(FolderAPI.contents, response_model=FolderContents)
async def folder_contents(
        folder_id: Optional[int] = Query(default=None, alias="folderId"),
        current_user: User = Depends(get_current_user),
        storage: BaseStorage = Depends(get_storage)
):
    try:
        logger.info(f"Listing directory {folder_id if folder_id is not None else 'root'}....!")
        return get_folder_contents(storage, current_user.id, folder_id)
    except DashboardException:
        raise
    except Exception as e:
        logger.exception(f"Failed to list directory: {e}")
        raise InternalError("Failed to retrieve folder contents")


@router.get(FolderAPI.folder, response_model=FolderInfo)
async def get_folder_service(
        folder_id: int,
        current_user: User = Depends(get_current_user),
        storage: BaseStorage = Depends(get_storage)
):
    logger.info(f"Fetching folder {folder_id}")
    return FolderInfo.model_validate(get_owned_folder(storage, folder_id, current_user.id))
