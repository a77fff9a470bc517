from typing import List, Optional
from fastapi import APIRouter, Depends, status

from app_constants.connectors import get_storage
from app_constants.log_module import logger
from app_constants.url import Routes, FilesAPI
from scripts.models.common_models import SuccessResponse
from scripts.models.file_management import FileUpload, FileInfo, TagRequest, TagResponse
from scripts.models.user_management import User
from scripts.handlers.user_management_handler import get_current_user
from scripts.handlers.file_management_handler import (create_file, get_existing_file, get_owned_file,
                                                      assert_owner_or_shared, delete_file, toggle_favorite,
                                                      get_user_favorite_files, add_tag, remove_tag)
from scripts.utils.exceptions import DashboardException, InternalError
from scripts.utils.storage_util import BaseStorage


router = APIRouter(prefix=Routes.files, tags=["files"])


@router.post(FilesAPI.upload, response_model=FileInfo, status_code=status.HTTP_201_CREATED)
async def upload_file(file_data: FileUpload,
                      current_user: User = Depends(get_current_user),
                      storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Uploading file...!")
        logger.info(f"File name: {file_data.name}")
        db_file = create_file(storage, current_user.id, file_data)
        storage.commit()
        return FileInfo.model_validate(db_file)
    except DashboardException:
        storage.rollback()
        raise
    except Exception as e:
        storage.rollback()
        logger.exception(f"Failed to upload file: {e}")
        raise InternalError("Failed to upload file")


@router.get(FilesAPI.favorites, response_model=List[FileInfo])
async def favorite_files(current_user: User = Depends(get_current_user),
                         storage: BaseStorage = Depends(get_storage)):
    logger.info(f"Fetching favorites of user {current_user.id}")
    return [FileInfo.model_validate(file) for file in get_user_favorite_files(storage, current_user.id)]


@router.get(FilesAPI.file, response_model=FileInfo)
async def get_file_metadata(file_id: int,
                            token: Optional[str] = None,
                            current_user: User = Depends(get_current_user),
                            storage: BaseStorage = Depends(get_storage)):
    logger.info(f"Fetching file {file_id}")
    file = get_existing_file(storage, file_id)
    assert_owner_or_shared(storage, file, current_user, token)
    return FileInfo.model_validate(file)


@router.delete(FilesAPI.file, response_model=SuccessResponse)
async def delete_file_service(file_id: int,
                              current_user: User = Depends(get_current_user),
                              storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Deleting file {file_id}")
        get_owned_file(storage, file_id, current_user.id)
        delete_file(storage, file_id)
        storage.commit()
        return SuccessResponse()
    except DashboardException:
        storage.rollback()
        raise
    except Exception as e:
        storage.rollback()
        logger.exception(f"Failed to delete file: {e}")
        raise InternalError("Failed to delete file")


@router.patch(FilesAPI.favorite, response_model=FileInfo)
async def toggle_favorite_service(file_id: int,
                                  current_user: User = Depends(get_current_user),
                                  storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Toggling favorite on file {file_id}")
        get_owned_file(storage, file_id, current_user.id)
        file = toggle_favorite(storage, file_id)
        storage.commit()
        return FileInfo.model_validate(file)
    except DashboardException:
        storage.rollback()
        raise
    except Exception as e:
        storage.rollback()
        logger.exception(f"Failed to toggle favorite: {e}")
        raise InternalError("Failed to update favorite status")


@router.post(FilesAPI.tags, response_model=TagResponse)
async def add_tag_service(file_id: int,
                          tag_request: TagRequest,
                          current_user: User = Depends(get_current_user),
                          storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Tagging file {file_id} with '{tag_request.tag}'")
        get_owned_file(storage, file_id, current_user.id)
        tags = add_tag(storage, file_id, tag_request.tag)
        storage.commit()
        return tags
    except DashboardException:
        storage.rollback()
        raise
    except Exception as e:
        storage.rollback()
        logger.exception(f"Failed to add tag: {e}")
        raise InternalError("Failed to add tag")


@router.delete(FilesAPI.tag, response_model=TagResponse)
async def remove_tag_service(file_id: int,
                             tag: str,
                             current_user: User = Depends(get_current_user),
                             storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Removing tag '{tag}' from file {file_id}")
        get_owned_file(storage, file_id, current_user.id)
        tags = remove_tag(storage, file_id, tag)
        storage.commit()
        return tags
    except DashboardException:
        storage.rollback()
        raise
    except Exception as e:
        storage.rollback()
        logger.exception(f"Failed to remove tag: {e}")
        raise InternalError("Failed to remove tag")
