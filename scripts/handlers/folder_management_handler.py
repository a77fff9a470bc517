from typing import Optional

from app_constants.log_module import logger
from scripts.models.file_management import FileMetadata, FileInfo
from scripts.models.folder_management import Folder, FolderCreate, FolderContents, FolderInfo
from scripts.utils.common_utils import join_path, normalize_provider_path
from scripts.utils.exceptions import AccessDenied, NotFound, ValidationFailed
from scripts.utils.storage_util import BaseStorage


def get_folder(storage: BaseStorage, folder_id: int) -> Optional[Folder]:
    return storage.get(Folder, folder_id)


def get_root_folder(storage: BaseStorage, user_id: int) -> Optional[Folder]:
    return storage.first(Folder, user_id=user_id, is_root=True)


def get_folder_by_path(storage: BaseStorage, user_id: int, path: str) -> Optional[Folder]:
    return storage.first(Folder, user_id=user_id, path=normalize_provider_path(path))


def get_owned_folder(storage: BaseStorage, folder_id: int, user_id: int) -> Folder:
    folder = get_folder(storage, folder_id)
    if not folder:
        raise NotFound("Folder not found")
    if folder.user_id != user_id:
        raise AccessDenied("You don't have access to this folder")
    return folder


def create_folder(storage: BaseStorage, user_id: int, folder_data: FolderCreate) -> Folder:
    """
    Non-root folders always get a parent: an omitted parentId means the
    user's root folder. The path defaults to the parent's path plus the name.
    """
    if folder_data.is_root:
        raise ValidationFailed("A user can only have one root folder")

    if folder_data.parent_id is not None:
        parent = get_owned_folder(storage, folder_data.parent_id, user_id)
    else:
        parent = get_root_folder(storage, user_id)

    folder = Folder(
        name=folder_data.name,
        parent_id=parent.id if parent else None,
        user_id=user_id,
        provider_id=folder_data.provider_id,
        external_id=folder_data.external_id,
        path=normalize_provider_path(folder_data.path) if folder_data.path
        else join_path(parent.path if parent else None, folder_data.name),
        is_root=False,
    )
    storage.add(folder)
    logger.info(f"Created folder {folder.path} for user {user_id}")
    return folder


def get_folder_contents(storage: BaseStorage, user_id: int, folder_id: Optional[int]) -> FolderContents:
    """
    Immediate children of a folder in the user's own drive, the root folder
    when ``folder_id`` is None.

    The root view also lists parentless folders and unfiled files, since
    those have nowhere else to appear.
    """
    if folder_id is None:
        target = get_root_folder(storage, user_id)
        if not target:
            logger.info(f"User {user_id} has no root folder")
            return FolderContents()
    else:
        target = get_owned_folder(storage, folder_id, user_id)

    folders = storage.list(Folder, user_id=user_id, parent_id=target.id)
    files = storage.list(FileMetadata, user_id=user_id, folder_id=target.id)

    if target.is_root:
        folders += [folder for folder in storage.list(Folder, user_id=user_id, parent_id=None)
                    if not folder.is_root]
        files += storage.list(FileMetadata, user_id=user_id, folder_id=None)
        folders.sort(key=lambda folder: folder.id)
        files.sort(key=lambda file: file.id)

    return FolderContents(
        folders=[FolderInfo.model_validate(folder) for folder in folders],
        files=[FileInfo.model_validate(file) for file in files],
    )
