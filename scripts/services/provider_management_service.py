from typing import List
from fastapi import APIRouter, Depends

from app_constants.connectors import get_storage
from app_constants.constants import CommonConstants
from app_constants.log_module import logger
from app_constants.url import Routes, ProvidersAPI
from scripts.models.common_models import SuccessResponse
from scripts.models.folder_management import FolderContents
from scripts.models.provider_management import (CloudProviderResponse, ProviderConnect, ProviderStatusUpdate,
                                                ProviderConnectionResponse, UserCloudProviderResponse)
from scripts.models.user_management import User
from scripts.handlers.user_management_handler import get_current_user
from scripts.handlers.provider_management_handler import (get_supported_providers, get_user_providers,
                                                          connect_user_to_provider, update_provider_active_status,
                                                          get_provider_contents, disconnect_user_from_provider)
from scripts.utils.exceptions import DashboardException, InternalError
from scripts.utils.storage_util import BaseStorage


router = APIRouter(prefix=Routes.providers, tags=["providers"])


@router.get(ProvidersAPI.supported, response_model=List[CloudProviderResponse])
async def supported_providers(storage: BaseStorage = Depends(get_storage)):
    logger.info("Fetching supported providers")
    return [CloudProviderResponse.model_validate(provider) for provider in get_supported_providers(storage)]


@router.get(ProvidersAPI.user_connected, response_model=List[ProviderConnectionResponse])
async def user_connected_providers(current_user: User = Depends(get_current_user),
                                   storage: BaseStorage = Depends(get_storage)):
    logger.info(f"Fetching providers connected by user {current_user.id}")
    return [ProviderConnectionResponse.from_connection(connection)
            for connection in get_user_providers(storage, current_user.id)]


@router.post(ProvidersAPI.connect, response_model=UserCloudProviderResponse)
async def connect_provider(connect_request: ProviderConnect,
                           current_user: User = Depends(get_current_user),
                           storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Connecting user {current_user.id} to provider {connect_request.provider_id}")
        connection = connect_user_to_provider(storage, current_user.id, connect_request.provider_id,
                                              connect_request.connection_info)
        storage.commit()
        return UserCloudProviderResponse.from_connection(connection)
    except DashboardException:
        storage.rollback()
        raise
    except Exception as e:
        storage.rollback()
        logger.exception(f"Failed to connect to provider: {e}")
        raise InternalError("Failed to connect to provider")


@router.patch(ProvidersAPI.status, response_model=UserCloudProviderResponse)
async def provider_status(provider_id: int,
                          status_update: ProviderStatusUpdate,
                          current_user: User = Depends(get_current_user),
                          storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Setting provider {provider_id} of user {current_user.id} active={status_update.is_active}")
        connection = update_provider_active_status(storage, current_user.id, provider_id, status_update.is_active)
        storage.commit()
        return UserCloudProviderResponse.from_connection(connection)
    except DashboardException:
        storage.rollback()
        raise
    except Exception as e:
        storage.rollback()
        logger.exception(f"Failed to update provider status: {e}")
        raise InternalError("Failed to update provider status")


@router.get(ProvidersAPI.files, response_model=FolderContents)
async def provider_files(provider_id: int,
                         path: str = CommonConstants.root_path,
                         current_user: User = Depends(get_current_user),
                         storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Listing provider {provider_id} path {path}")
        return get_provider_contents(storage, current_user.id, provider_id, path)
    except DashboardException:
        raise
    except Exception as e:
        logger.exception(f"Error getting provider files: {e}")
        raise InternalError("Failed to retrieve files from cloud provider")


@router.delete(ProvidersAPI.disconnect, response_model=SuccessResponse)
async def disconnect_provider(provider_id: int,
                              current_user: User = Depends(get_current_user),
                              storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Disconnecting user {current_user.id} from provider {provider_id}")
        disconnected = disconnect_user_from_provider(storage, current_user.id, provider_id)
        storage.commit()
        return SuccessResponse(success=disconnected)
    except Exception as e:
        storage.rollback()
        logger.exception(f"Failed to disconnect provider: {e}")
        raise InternalError("Failed to disconnect provider")
