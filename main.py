import traceback
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app_constants.log_module import logger
from app_constants.app_configurations import Service
from app_constants.connectors import db_util
from scripts.handlers.demo_data_handler import seed_demo_account
from scripts.handlers.provider_management_handler import seed_cloud_providers
from scripts.services.user_management_service import router as user_management_router
from scripts.services.provider_management_service import router as provider_management_router
from scripts.services.file_management_service import router as file_management_router
from scripts.services.folder_management import router as folder_management_router
from scripts.services.search_service import router as search_router
from scripts.services.share_management_service import router as share_router, public_router as shared_router
from scripts.utils.exceptions import DashboardException
from scripts.utils.storage_util import SQLStorage


@asynccontextmanager
async def lifespan(_: FastAPI):
    db_util.create_tables()
    with db_util.get_db_context() as db:
        storage = SQLStorage(db)
        if Service.SEED_DEMO_DATA:
            seed_demo_account(storage)
        else:
            seed_cloud_providers(storage)
    logger.info("Store ready")
    yield


app = FastAPI(title="CloudDash", lifespan=lifespan)

app.include_router(user_management_router)
app.include_router(provider_management_router)
app.include_router(file_management_router)
app.include_router(folder_management_router)
app.include_router(search_router)
app.include_router(share_router)
app.include_router(shared_router)


@app.exception_handler(DashboardException)
async def dashboard_exception_handler(request: Request, exc: DashboardException):
    logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.debug(f"{request.method} {request.url.path} -> invalid request data")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                        content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())})


if Service.ENABLE_CORS:
    app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["GET", "POST", "DELETE", "PUT", "PATCH"],
            allow_headers=["*"],
        )

if __name__ == "__main__":
    try:
        logger.debug("APP STARTED")
        logger.info(f"Host: {Service.HOST}, Port: {Service.PORT}")
        # the default store lives in process memory, so a single worker without reload
        uvicorn.run("main:app", host=Service.HOST, port=int(Service.PORT), workers=1)
    except Exception as e:
        traceback.print_exc()
        logger.exception(f"Exception while starting app: {str(e)}", exc_info=True)
        raise
