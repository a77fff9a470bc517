from datetime import timedelta
from typing import Optional

from app_constants.app_configurations import Demo
from app_constants.log_module import logger
from scripts.models.file_management import FileMetadata, SharedFile
from scripts.models.folder_management import Folder
from scripts.models.user_management import User
from scripts.handlers.provider_management_handler import seed_cloud_providers
from scripts.handlers.user_management_handler import get_user_by_username, hash_password, create_root_folder
from scripts.models.provider_management import UserCloudProvider
from scripts.utils.common_utils import utcnow, generate_share_token
from scripts.utils.storage_util import BaseStorage

MIB = 1024 * 1024
KIB = 1024

DEMO_FOLDERS = {
    "Documents": [
        ("Project Proposal.docx", 2.4 * MIB,
         "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
        ("Meeting Notes.txt", 24 * KIB, "text/plain"),
        ("Budget 2025.xlsx", 1.8 * MIB, "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
        ("Client Requirements.docx", 3.2 * MIB,
         "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
        ("Product Roadmap.pptx", 5.4 * MIB,
         "application/vnd.openxmlformats-officedocument.presentationml.presentation"),
    ],
    "Photos": [
        ("Team Photo.jpg", 3.2 * MIB, "image/jpeg"),
        ("Product Launch.png", 4.5 * MIB, "image/png"),
        ("Office Setup.jpg", 2.8 * MIB, "image/jpeg"),
        ("Conference Keynote.jpg", 4.1 * MIB, "image/jpeg"),
        ("UI Mockups.png", 6.7 * MIB, "image/png"),
        ("Team Building Event.jpg", 5.3 * MIB, "image/jpeg"),
    ],
    "Work Projects": [
        ("Company Overview.pdf", 15.6 * MIB, "application/pdf"),
    ],
    "Work Projects/Reports": [
        ("Q1 Analysis.pdf", 8.7 * MIB, "application/pdf"),
        ("Market Research.pdf", 12.4 * MIB, "application/pdf"),
        ("Project Timeline.pdf", 5.2 * MIB, "application/pdf"),
        ("Annual Report 2024.pdf", 18.3 * MIB, "application/pdf"),
        ("Risk Assessment.pdf", 4.6 * MIB, "application/pdf"),
    ],
    "Media": [
        ("Product Demo.mp4", 156.4 * MIB, "video/mp4"),
        ("Promotional Video.mov", 245.8 * MIB, "video/quicktime"),
        ("Company Jingle.mp3", 3.2 * MIB, "audio/mpeg"),
    ],
    "Development": [
        ("app.js", 145 * KIB, "application/javascript"),
        ("styles.css", 82 * KIB, "text/css"),
        ("index.html", 64 * KIB, "text/html"),
        ("database.sql", 1.2 * MIB, "application/sql"),
        ("README.md", 12 * KIB, "text/markdown"),
    ],
}

# folder -> index into the provider catalog (0 gcp, 1 aws, 2 azure)
FOLDER_PROVIDER = {
    "Documents": 0,
    "Photos": 1,
    "Work Projects": 0,
    "Work Projects/Reports": 2,
    "Media": 0,
    "Development": 2,
}

SHARED_DEMO_FILE = "Company Overview.pdf"


def seed_demo_account(storage: BaseStorage) -> Optional[User]:
    """
    Create the demo account with a populated drive. Does nothing when the
    account already exists, so it is safe to run at every boot.
    """
    providers = seed_cloud_providers(storage)
    if get_user_by_username(storage, Demo.USERNAME):
        return None

    now = utcnow()
    user = storage.add(User(username=Demo.USERNAME, password=hash_password(Demo.PASSWORD),
                            email=Demo.EMAIL, full_name=Demo.FULL_NAME, created_at=now))
    root = create_root_folder(storage, user)

    for index, provider in enumerate(providers):
        storage.add(UserCloudProvider(
            user_id=user.id,
            provider_id=provider.id,
            access_token="demo-access-token",
            refresh_token="demo-refresh-token",
            expires_at=now + timedelta(days=7),
            is_active=index == 0,
            connection_metadata={
                "storageUsed": 68 * 1024 * MIB,
                "storageTotal": 100 * 1024 * MIB,
                "accountTier": "Enterprise",
                "accountId": f"SV-{provider.id}X9124",
            },
        ))

    folders = {}
    for folder_path in DEMO_FOLDERS:
        parent_path, _, name = folder_path.rpartition("/")
        parent = folders[parent_path] if parent_path else root
        folders[folder_path] = storage.add(Folder(name=name, path=f"/{folder_path}", user_id=user.id,
                                                  parent_id=parent.id, is_root=False,
                                                  created_at=now, updated_at=now))

    shared_file = None
    for folder_path, entries in DEMO_FOLDERS.items():
        provider = providers[FOLDER_PROVIDER[folder_path]]
        for name, size, mime_type in entries:
            file = storage.add(FileMetadata(
                name=name, size=int(size), mime_type=mime_type, user_id=user.id,
                folder_id=folders[folder_path].id, provider_id=provider.id,
                path=f"/{folder_path}/{name}", created_at=now, updated_at=now,
                is_favorite=False, tags=[],
            ))
            if name == SHARED_DEMO_FILE:
                shared_file = file

    if shared_file:
        storage.add(SharedFile(file_id=shared_file.id, user_id=user.id, token=generate_share_token(),
                               expires_at=now + timedelta(days=7), created_at=now))

    storage.commit()
    logger.info(f"Seeded demo account '{user.username}'")
    return user
