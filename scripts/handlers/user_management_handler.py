from typing import List, Optional
from fastapi import Depends

from app_constants.app_configurations import Constants
from app_constants.connectors import get_storage
from app_constants.constants import CommonConstants
from app_constants.log_module import logger
from scripts.models.user_management import User, UserCreate, UserUpdate
from scripts.models.folder_management import Folder
from scripts.models.provider_management import CloudProvider
from scripts.handlers.provider_management_handler import connect_user_to_provider
from scripts.utils.common_utils import decode_jwt_token
from scripts.utils.exceptions import NotFound, Unauthenticated, ValidationFailed
from scripts.utils.storage_util import BaseStorage


def hash_password(password: str) -> str:
    return Constants.pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return Constants.pwd_context.verify(password, hashed_password)


def get_user(storage: BaseStorage, user_id: int) -> Optional[User]:
    return storage.get(User, user_id)


def get_user_by_username(storage: BaseStorage, username: str) -> Optional[User]:
    return storage.first(User, username=username)


def get_user_by_email(storage: BaseStorage, email: str) -> Optional[User]:
    return storage.first(User, email=email)


def create_root_folder(storage: BaseStorage, user: User) -> Folder:
    root = Folder(name=CommonConstants.root_folder_name, path=CommonConstants.root_path,
                  user_id=user.id, is_root=True)
    return storage.add(root)


def create_user(storage: BaseStorage, user_data: UserCreate) -> User:
    """Register an account with its root folder and any requested provider connections."""
    if get_user_by_username(storage, user_data.username):
        raise ValidationFailed("Username already exists")
    if get_user_by_email(storage, user_data.email):
        raise ValidationFailed("Email already exists")

    provider_ids: List[int] = user_data.providers or []
    for provider_id in provider_ids:
        if not storage.get(CloudProvider, provider_id):
            raise NotFound(f"Provider {provider_id} not found")

    user = storage.add(User(
        username=user_data.username,
        password=hash_password(user_data.password),
        email=user_data.email,
        full_name=user_data.full_name,
    ))
    create_root_folder(storage, user)
    for provider_id in dict.fromkeys(provider_ids):
        connect_user_to_provider(storage, user.id, provider_id)
    logger.info(f"Created user {user.username} with id {user.id}")
    return user


def authenticate_user(storage: BaseStorage, username: str, password: str) -> User:
    user = get_user_by_username(storage, username)
    if not user or not verify_password(password, user.password):
        logger.info(f"Failed login attempt for {username}")
        raise Unauthenticated("Invalid username or password")
    return user


def update_user(storage: BaseStorage, user: User, user_update: UserUpdate) -> User:
    if user_update.username and user_update.username != user.username:
        if get_user_by_username(storage, user_update.username):
            raise ValidationFailed("Username already exists")
        user.username = user_update.username
    if user_update.email and user_update.email != user.email:
        if get_user_by_email(storage, user_update.email):
            raise ValidationFailed("Email already exists")
        user.email = user_update.email
    if user_update.full_name is not None:
        user.full_name = user_update.full_name
    if user_update.password:
        user.password = hash_password(user_update.password)
    storage.add(user)
    return user


async def get_current_user(token: Optional[str] = Depends(Constants.session_scheme),
                           storage: BaseStorage = Depends(get_storage)) -> User:
    if not token:
        raise Unauthenticated()
    payload = decode_jwt_token(token)
    if not payload or payload.get("sub") is None:
        raise Unauthenticated("Could not validate credentials")
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise Unauthenticated("Could not validate credentials")
    user = get_user(storage, user_id)
    if user is None:
        raise Unauthenticated("Could not validate credentials")
    return user
