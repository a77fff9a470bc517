from datetime import timedelta
from typing import List, Optional

from app_constants.app_configurations import Share
from app_constants.log_module import logger
from scripts.models.file_management import FileMetadata, SharedFile, ShareLinkInfo, SharedFileInfo, FileInfo
from scripts.utils.common_utils import utcnow, generate_share_token
from scripts.utils.exceptions import AccessDenied, NotFound
from scripts.utils.storage_util import BaseStorage


def build_share_url(token: str) -> str:
    return f"{Share.BASE_URL}/{token}"


def is_share_live(share: SharedFile) -> bool:
    return share.expires_at is None or share.expires_at > utcnow()


def to_share_link_info(share: SharedFile) -> ShareLinkInfo:
    return ShareLinkInfo(id=share.id, file_id=share.file_id, token=share.token,
                         url=build_share_url(share.token), expires_at=share.expires_at)


def generate_share_link(storage: BaseStorage, file_id: int, user_id: int,
                        expires_in: Optional[int] = None) -> ShareLinkInfo:
    """
    Share a file through a random token. A live share of the file is returned
    as is, expiry included; an expired one is replaced.
    """
    file = storage.get(FileMetadata, file_id)
    if not file:
        raise NotFound("File not found")
    if file.user_id != user_id:
        raise AccessDenied("You don't have permission to share this file")

    for share in storage.list(SharedFile, file_id=file_id):
        if is_share_live(share):
            return to_share_link_info(share)
        logger.debug(f"Dropping expired share {share.id} of file {file_id}")
        storage.delete(share)

    share = SharedFile(
        file_id=file_id,
        user_id=user_id,
        token=generate_share_token(),
        expires_at=utcnow() + timedelta(seconds=expires_in) if expires_in else None,
    )
    storage.add(share)
    logger.info(f"File {file_id} shared by user {user_id}")
    return to_share_link_info(share)


def get_user_shared_files(storage: BaseStorage, user_id: int) -> List[SharedFileInfo]:
    shared = []
    for share in storage.list(SharedFile, user_id=user_id):
        file = storage.get(FileMetadata, share.file_id)
        if not file:
            logger.warning(f"Share {share.id} points to missing file {share.file_id}")
            continue
        shared.append(SharedFileInfo(id=share.id, file_id=share.file_id, user_id=share.user_id,
                                     token=share.token, expires_at=share.expires_at,
                                     created_at=share.created_at, file=FileInfo.model_validate(file)))
    return shared


def revoke_share_link(storage: BaseStorage, file_id: int) -> bool:
    shares = storage.list(SharedFile, file_id=file_id)
    for share in shares:
        storage.delete(share)
    return bool(shares)


def is_file_shared_with_user(storage: BaseStorage, file_id: int, viewer_id: int, token: Optional[str]) -> bool:
    """True when the viewer presents the token of a live share of this file."""
    if not token:
        return False
    share = storage.first(SharedFile, token=token)
    granted = bool(share and share.file_id == file_id and is_share_live(share))
    logger.trace(f"Share access for viewer {viewer_id} on file {file_id}: {granted}")
    return granted


def resolve_share_token(storage: BaseStorage, token: str) -> FileMetadata:
    share = storage.first(SharedFile, token=token)
    if not share or not is_share_live(share):
        raise NotFound("File not found or share expired")
    file = storage.get(FileMetadata, share.file_id)
    if not file:
        raise NotFound("File not found or share expired")
    return file
