from typing import List, Optional

from app_constants.log_module import logger
from scripts.models.file_management import FileMetadata, FileUpload, SharedFile, TagResponse
from scripts.models.user_management import User
from scripts.handlers.folder_management_handler import get_owned_folder
from scripts.handlers.share_management_handler import is_file_shared_with_user
from scripts.utils.common_utils import guess_mime_type, join_path, normalize_provider_path
from scripts.utils.exceptions import AccessDenied, NotFound
from scripts.utils.storage_util import BaseStorage


def get_file(storage: BaseStorage, file_id: int) -> Optional[FileMetadata]:
    return storage.get(FileMetadata, file_id)


def get_existing_file(storage: BaseStorage, file_id: int) -> FileMetadata:
    file = get_file(storage, file_id)
    if not file:
        raise NotFound(f"File with id {file_id} not found")
    return file


def get_owned_file(storage: BaseStorage, file_id: int, user_id: int) -> FileMetadata:
    file = get_existing_file(storage, file_id)
    if file.user_id != user_id:
        raise AccessDenied("You don't have permission to modify this file")
    return file


def assert_owner_or_shared(storage: BaseStorage, file: FileMetadata, user: User,
                           token: Optional[str] = None) -> FileMetadata:
    """Read access: the owner, or a viewer holding a live share token of the file."""
    if file.user_id == user.id:
        return file
    if is_file_shared_with_user(storage, file.id, user.id, token):
        return file
    raise AccessDenied("You don't have permission to access this file")


def create_file(storage: BaseStorage, user_id: int, file_data: FileUpload) -> FileMetadata:
    folder = get_owned_folder(storage, file_data.folder_id, user_id) if file_data.folder_id is not None else None
    if file_data.path:
        path = normalize_provider_path(file_data.path)
    else:
        path = join_path(folder.path if folder else None, file_data.name)

    file = FileMetadata(
        name=file_data.name,
        mime_type=file_data.mime_type or guess_mime_type(file_data.name),
        size=file_data.size,
        folder_id=folder.id if folder else None,
        user_id=user_id,
        provider_id=file_data.provider_id,
        external_id=file_data.external_id,
        path=path,
        thumbnail_url=file_data.thumbnail_url,
        is_favorite=False,
        tags=[],
    )
    storage.add(file)
    logger.info(f"Registered file {file.path} for user {user_id}")
    return file


def delete_file(storage: BaseStorage, file_id: int) -> bool:
    file = get_file(storage, file_id)
    if not file:
        return False
    for share in storage.list(SharedFile, file_id=file_id):
        storage.delete(share)
    storage.delete(file)
    return True


def toggle_favorite(storage: BaseStorage, file_id: int) -> FileMetadata:
    file = get_existing_file(storage, file_id)
    file.is_favorite = not file.is_favorite
    return storage.add(file)


def get_user_favorite_files(storage: BaseStorage, user_id: int) -> List[FileMetadata]:
    return storage.list(FileMetadata, user_id=user_id, is_favorite=True)


def add_tag(storage: BaseStorage, file_id: int, tag: str) -> TagResponse:
    file = get_existing_file(storage, file_id)
    tags = list(file.tags or [])
    if tag not in tags:
        # reassign so the JSON column registers the change
        file.tags = tags + [tag]
        storage.add(file)
    return TagResponse(file_id=file_id, tags=list(file.tags or []))


def remove_tag(storage: BaseStorage, file_id: int, tag: str) -> TagResponse:
    file = get_existing_file(storage, file_id)
    tags = list(file.tags or [])
    if tag in tags:
        file.tags = [existing for existing in tags if existing != tag]
        storage.add(file)
    return TagResponse(file_id=file_id, tags=list(file.tags or []))
