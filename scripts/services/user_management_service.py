from fastapi import APIRouter, Depends, Response, status

from app_constants.app_configurations import Constants, Service
from app_constants.connectors import get_storage
from app_constants.log_module import logger
from app_constants.url import Routes, AuthAPI
from scripts.models.common_models import SuccessResponse
from scripts.models.user_management import User, UserCreate, LoginRequest, UserUpdate, UserResponse
from scripts.handlers.user_management_handler import (get_current_user, create_user, authenticate_user,
                                                      update_user)
from scripts.utils.common_utils import create_jwt_token
from scripts.utils.exceptions import DashboardException, InternalError
from scripts.utils.storage_util import BaseStorage


router = APIRouter(prefix=Routes.auth, tags=["auth"])


def set_session_cookie(response: Response, user: User) -> None:
    token = create_jwt_token(data={"sub": str(user.id)})
    response.set_cookie(
        key=Constants.SESSION_COOKIE,
        value=token,
        max_age=Constants.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=Service.SECURE_COOKIE,
        samesite="lax",
    )


@router.post(AuthAPI.signup, response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(user: UserCreate, response: Response, storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Running signup service for {user.username}")
        db_user = create_user(storage, user)
        storage.commit()
        set_session_cookie(response, db_user)
        return UserResponse.model_validate(db_user)
    except DashboardException:
        storage.rollback()
        raise
    except Exception as e:
        storage.rollback()
        logger.exception(f"Failed to create user: {e}")
        raise InternalError("Failed to create user")


@router.post(AuthAPI.login, response_model=UserResponse)
async def login(credentials: LoginRequest, response: Response, storage: BaseStorage = Depends(get_storage)):
    logger.info(f"Running login service")
    user = authenticate_user(storage, credentials.username, credentials.password)
    set_session_cookie(response, user)
    return UserResponse.model_validate(user)


@router.post(AuthAPI.logout, response_model=SuccessResponse)
async def logout(response: Response):
    logger.info(f"Running logout service")
    response.delete_cookie(key=Constants.SESSION_COOKIE, httponly=True, secure=Service.SECURE_COOKIE,
                           samesite="lax")
    return SuccessResponse()


@router.get(AuthAPI.me, response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    logger.info(f"Fetching user profile")
    return UserResponse.model_validate(current_user)


@router.patch(AuthAPI.profile, response_model=UserResponse)
async def update_profile(user_update: UserUpdate,
                         current_user: User = Depends(get_current_user),
                         storage: BaseStorage = Depends(get_storage)):
    try:
        logger.info(f"Updating profile of user {current_user.id}")
        user = update_user(storage, current_user, user_update)
        storage.commit()
        return UserResponse.model_validate(user)
    except DashboardException:
        storage.rollback()
        raise
    except Exception as e:
        storage.rollback()
        logger.exception(f"Failed to update profile: {e}")
        raise InternalError("Failed to update profile")
