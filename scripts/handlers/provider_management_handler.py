from datetime import timedelta
from typing import List, Optional

from app_constants.constants import CommonConstants, ProviderDefaults
from app_constants.log_module import logger
from scripts.models.file_management import FileMetadata, FileInfo
from scripts.models.folder_management import FolderContents, ParentFolderLink, VirtualFolderInfo
from scripts.models.provider_management import CloudProvider, UserCloudProvider, ConnectionInfo
from scripts.utils.common_utils import utcnow, as_naive_utc, normalize_provider_path, directory_of
from scripts.utils.exceptions import AccessDenied, NotFound
from scripts.utils.storage_util import BaseStorage


def seed_cloud_providers(storage: BaseStorage) -> List[CloudProvider]:
    if storage.list(CloudProvider):
        return storage.list(CloudProvider)
    providers = [storage.add(CloudProvider(**provider)) for provider in ProviderDefaults.catalog]
    storage.commit()
    logger.info(f"Seeded {len(providers)} cloud providers")
    return providers


def get_supported_providers(storage: BaseStorage) -> List[CloudProvider]:
    return storage.list(CloudProvider, is_active=True)


def get_user_providers(storage: BaseStorage, user_id: int) -> List[UserCloudProvider]:
    return storage.list(UserCloudProvider, user_id=user_id)


def get_user_provider(storage: BaseStorage, user_id: int, provider_id: int) -> Optional[UserCloudProvider]:
    return storage.first(UserCloudProvider, user_id=user_id, provider_id=provider_id)


def connect_user_to_provider(storage: BaseStorage, user_id: int, provider_id: int,
                             connection_info: Optional[ConnectionInfo] = None) -> UserCloudProvider:
    """
    Connect a user to a catalog provider. Re-connecting updates the existing
    row with whatever connection details were supplied instead of adding a
    second one.
    """
    if not storage.get(CloudProvider, provider_id):
        raise NotFound("Provider not found")
    info = connection_info or ConnectionInfo()

    connection = get_user_provider(storage, user_id, provider_id)
    if connection:
        logger.debug(f"Updating connection of user {user_id} to provider {provider_id}")
        if info.access_token is not None:
            connection.access_token = info.access_token
        if info.refresh_token is not None:
            connection.refresh_token = info.refresh_token
        if info.expires_at is not None:
            connection.expires_at = as_naive_utc(info.expires_at)
        if info.is_active is not None:
            connection.is_active = info.is_active
        if info.metadata is not None:
            connection.connection_metadata = info.metadata
        return storage.add(connection)

    connection = UserCloudProvider(
        user_id=user_id,
        provider_id=provider_id,
        access_token=info.access_token or ProviderDefaults.access_token,
        refresh_token=info.refresh_token or ProviderDefaults.refresh_token,
        expires_at=as_naive_utc(info.expires_at) or utcnow() + timedelta(minutes=ProviderDefaults.connection_ttl_minutes),
        is_active=info.is_active if info.is_active is not None else True,
        connection_metadata=info.metadata,
    )
    logger.info(f"Connecting user {user_id} to provider {provider_id}")
    return storage.add(connection)


def disconnect_user_from_provider(storage: BaseStorage, user_id: int, provider_id: int) -> bool:
    connections = storage.list(UserCloudProvider, user_id=user_id, provider_id=provider_id)
    for connection in connections:
        storage.delete(connection)
    return bool(connections)


def update_provider_active_status(storage: BaseStorage, user_id: int, provider_id: int,
                                  is_active: bool) -> UserCloudProvider:
    connection = get_user_provider(storage, user_id, provider_id)
    if not connection:
        raise NotFound("Provider connection not found")
    connection.is_active = is_active
    return storage.add(connection)


def get_provider_contents(storage: BaseStorage, user_id: int, provider_id: int, path: str) -> FolderContents:
    """
    List one directory of a provider's namespace.

    Providers are mocked, so the namespace is rebuilt from the user's file
    rows tagged with the provider: files whose directory is ``path`` are
    listed as files, deeper files surface as one virtual folder per next path
    segment. Below the root a parent entry is prepended for navigating up.
    """
    connection = get_user_provider(storage, user_id, provider_id)
    if not connection or not connection.is_active:
        raise AccessDenied("You don't have access to this cloud provider")

    normalized_path = normalize_provider_path(path)
    prefix = normalized_path if normalized_path == CommonConstants.root_path else f"{normalized_path}/"

    folders = []
    files = []
    seen_dirs = set()
    for file in storage.list(FileMetadata, user_id=user_id, provider_id=provider_id):
        if directory_of(file.path) == normalized_path:
            files.append(FileInfo.model_validate(file))
        elif file.path.startswith(prefix):
            next_dir = file.path[len(prefix):].split("/")[0]
            if next_dir and next_dir not in seen_dirs:
                seen_dirs.add(next_dir)
                folders.append(VirtualFolderInfo(name=next_dir, path=f"{prefix}{next_dir}",
                                                 user_id=user_id, provider_id=provider_id))

    if normalized_path != CommonConstants.root_path:
        parent_path = directory_of(normalized_path)
        parent_name = (CommonConstants.parent_folder_name if parent_path == CommonConstants.root_path
                       else parent_path.split("/")[-1])
        folders.insert(0, ParentFolderLink(name=parent_name, path=parent_path,
                                           is_root=parent_path == CommonConstants.root_path,
                                           provider_id=provider_id))

    logger.debug(f"Provider {provider_id} path {normalized_path}: {len(folders)} folders, {len(files)} files")
    return FolderContents(folders=folders, files=files)
