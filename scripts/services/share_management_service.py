from typing import List
from fastapi import APIRouter, Depends

from app_constants.connectors import get_storage
from app_constants.log_module import logger
from app_constants.url import Routes, ShareAPI
from scripts.models.file_management import FileShare, ShareLinkInfo, SharedFileInfo, RevokeResponse, FileInfo
from scripts.models.user_management import User
from scripts.handlers.user_management_handler import get_current_user
from scripts.handlers.file_management_handler import get_owned_file
from scripts.handlers.share_management_handler import (generate_share_link, get_user_shared_files,
                                                       revoke_share_link, resolve_share_token)
from scripts.utils.exceptions import DashboardException, InternalError
from scripts.utils.storage_util import BaseStorage


router = APIRouter(prefix=Routes.share, tags=["share"])
public_router = APIRouter(prefix=Routes.shared, tags=["share"])


@router.post(ShareAPI.share, response_model=ShareLinkInfo)
async def share_file(share_data: FileShare,
                     current_user: User = Depends(get_current_user),
                     storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Sharing file {share_data.file_id}...!")
        share_link = generate_share_link(storage, share_data.file_id, current_user.id, share_data.expires_in)
        storage.commit()
        return share_link
    except DashboardException:
        storage.rollback()
        raise
    except Exception as e:
        storage.rollback()
        logger.exception(f"Failed to share the file: {e}")
        raise InternalError("Failed to generate share link")


@router.get(ShareAPI.share, response_model=List[SharedFileInfo])
async def shared_files(current_user: User = Depends(get_current_user),
                       storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Fetching files shared by user {current_user.id}")
        return get_user_shared_files(storage, current_user.id)
    except Exception as e:
        logger.exception(f"Failed to retrieve shared files: {e}")
        raise InternalError("Failed to retrieve shared files")


@router.delete(ShareAPI.revoke, response_model=RevokeResponse)
async def revoke_share(file_id: int,
                       current_user: User = Depends(get_current_user),
                       storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Revoking shares of file {file_id}")
        get_owned_file(storage, file_id, current_user.id)
        revoked = revoke_share_link(storage, file_id)
        storage.commit()
        return RevokeResponse(revoked=revoked)
    except DashboardException:
        storage.rollback()
        raise
    except Exception as e:
        storage.rollback()
        logger.exception(f"Failed to revoke share link: {e}")
        raise InternalError("Failed to revoke share link")


@public_router.get(ShareAPI.public, response_model=FileInfo)
async def get_shared_file(token: str, storage: BaseStorage = Depends(get_storage)):
    logger.info(f"Resolving share token")
    return FileInfo.model_validate(resolve_share_token(storage, token))
