"""Unit tests for the account, folder, provider, file and share handlers"""

from datetime import timedelta

import pytest

from scripts.handlers.file_management_handler import (create_file, delete_file, toggle_favorite, add_tag,
                                                      remove_tag, get_user_favorite_files, assert_owner_or_shared)
from scripts.handlers.folder_management_handler import create_folder, get_folder_contents, get_folder_by_path
from scripts.handlers.provider_management_handler import (get_supported_providers, get_user_providers,
                                                          connect_user_to_provider, update_provider_active_status,
                                                          disconnect_user_from_provider, get_provider_contents)
from scripts.handlers.share_management_handler import (generate_share_link, revoke_share_link,
                                                       get_user_shared_files, resolve_share_token,
                                                       is_file_shared_with_user)
from scripts.handlers.demo_data_handler import seed_demo_account
from scripts.handlers.user_management_handler import authenticate_user, create_user
from scripts.models.file_management import FileMetadata, FileUpload, SharedFile
from scripts.models.folder_management import Folder, FolderCreate
from scripts.models.provider_management import ConnectionInfo
from scripts.models.user_management import User, UserCreate
from scripts.utils.common_utils import utcnow
from scripts.utils.exceptions import AccessDenied, NotFound, Unauthenticated, ValidationFailed


def demo_file(storage, user, name):
    return storage.first(FileMetadata, user_id=user.id, name=name)


class TestAccounts:
    """Account creation and login"""

    def test_every_user_has_exactly_one_root_folder(self, storage, demo_user, make_user):
        alice = make_user("alice")
        for user in (demo_user, alice):
            roots = storage.list(Folder, user_id=user.id, is_root=True)
            assert len(roots) == 1
            assert roots[0].path == "/"

    def test_duplicate_username_is_rejected(self, storage, make_user):
        make_user("alice")
        with pytest.raises(ValidationFailed):
            create_user(storage, UserCreate(username="alice", password="x", email="other@syncvault.io"))

    def test_duplicate_email_is_rejected(self, storage, make_user):
        make_user("alice")
        with pytest.raises(ValidationFailed):
            create_user(storage, UserCreate(username="alicia", password="x", email="alice@syncvault.io"))

    def test_signup_connects_requested_providers(self, storage, demo_user, make_user):
        provider = get_supported_providers(storage)[1]
        alice = make_user("alice", providers=[provider.id])
        connections = get_user_providers(storage, alice.id)
        assert [connection.provider_id for connection in connections] == [provider.id]
        assert connections[0].is_active

    def test_signup_with_unknown_provider_creates_nothing(self, storage, demo_user):
        with pytest.raises(NotFound):
            create_user(storage, UserCreate(username="alice", password="x", email="alice@syncvault.io",
                                            providers=[999]))
        storage.rollback()
        assert storage.first(User, username="alice") is None

    def test_password_is_hashed_and_verified(self, storage, make_user):
        alice = make_user("alice")
        assert alice.password != "secret-pass"
        assert authenticate_user(storage, "alice", "secret-pass").id == alice.id
        with pytest.raises(Unauthenticated):
            authenticate_user(storage, "alice", "wrong")


class TestDemoData:
    """Demo account seeding"""

    def test_seeding_twice_is_a_no_op(self, storage, demo_user):
        assert seed_demo_account(storage) is None
        assert len(get_supported_providers(storage)) == 3

    def test_reports_live_under_work_projects(self, storage, demo_user):
        work_projects = get_folder_by_path(storage, demo_user.id, "/Work Projects")
        contents = get_folder_contents(storage, demo_user.id, work_projects.id)
        assert [folder.name for folder in contents.folders] == ["Reports"]
        assert [file.name for file in contents.files] == ["Company Overview.pdf"]

    def test_demo_share_is_live(self, storage, demo_user):
        shared = get_user_shared_files(storage, demo_user.id)
        assert [entry.file.name for entry in shared] == ["Company Overview.pdf"]
        assert shared[0].expires_at > utcnow()


class TestFolders:
    """Folder creation and listing"""

    def test_fresh_user_has_empty_root(self, storage, make_user):
        alice = make_user("alice")
        contents = get_folder_contents(storage, alice.id, None)
        assert contents.folders == []
        assert contents.files == []

    def test_folder_without_parent_goes_under_root(self, storage, make_user):
        alice = make_user("alice")
        folder = create_folder(storage, alice.id, FolderCreate(name="Work Projects"))
        root = storage.first(Folder, user_id=alice.id, is_root=True)
        assert folder.parent_id == root.id
        assert folder.path == "/Work Projects"

    def test_nested_folder_is_listed_in_parent(self, storage, make_user):
        alice = make_user("alice")
        work = create_folder(storage, alice.id, FolderCreate(name="Work Projects"))
        reports = create_folder(storage, alice.id, FolderCreate(name="Reports", parent_id=work.id))
        assert reports.path == "/Work Projects/Reports"
        assert [folder.id for folder in get_folder_contents(storage, alice.id, work.id).folders] == [reports.id]
        assert [folder.name for folder in get_folder_contents(storage, alice.id, None).folders] == ["Work Projects"]

    def test_second_root_is_rejected(self, storage, make_user):
        alice = make_user("alice")
        with pytest.raises(ValidationFailed):
            create_folder(storage, alice.id, FolderCreate(name="Another", is_root=True))

    def test_parentless_folders_and_unfiled_files_show_at_root(self, storage, make_user):
        alice = make_user("alice")
        orphan = storage.add(Folder(name="Imported", path="/Imported", user_id=alice.id, is_root=False))
        unfiled = create_file(storage, alice.id, FileUpload(name="loose.txt"))
        contents = get_folder_contents(storage, alice.id, None)
        assert [folder.id for folder in contents.folders] == [orphan.id]
        assert [file.id for file in contents.files] == [unfiled.id]

    def test_foreign_folder_is_denied(self, storage, demo_user, make_user):
        alice = make_user("alice")
        documents = get_folder_by_path(storage, demo_user.id, "/Documents")
        with pytest.raises(AccessDenied):
            get_folder_contents(storage, alice.id, documents.id)
        with pytest.raises(AccessDenied):
            create_folder(storage, alice.id, FolderCreate(name="Sneaky", parent_id=documents.id))

    def test_unknown_folder_is_not_found(self, storage, make_user):
        alice = make_user("alice")
        with pytest.raises(NotFound):
            get_folder_contents(storage, alice.id, 12345)


class TestProviders:
    """Provider connections and the provider namespace"""

    def test_reconnecting_updates_the_existing_connection(self, storage, make_user, demo_user):
        alice = make_user("alice")
        provider = get_supported_providers(storage)[0]
        first = connect_user_to_provider(storage, alice.id, provider.id)
        second = connect_user_to_provider(storage, alice.id, provider.id,
                                          ConnectionInfo(access_token="fresh", metadata={"plan": "pro"}))
        assert first.id == second.id
        assert second.access_token == "fresh"
        assert second.connection_metadata == {"plan": "pro"}
        assert len(get_user_providers(storage, alice.id)) == 1

    def test_connecting_unknown_provider_is_not_found(self, storage, make_user):
        alice = make_user("alice")
        with pytest.raises(NotFound):
            connect_user_to_provider(storage, alice.id, 999)

    def test_provider_root_lists_top_level_directories(self, storage, demo_user):
        gcp = get_supported_providers(storage)[0]
        contents = get_provider_contents(storage, demo_user.id, gcp.id, "/")
        assert [folder.name for folder in contents.folders] == ["Documents", "Work Projects", "Media"]
        assert all(folder.kind == "virtual" for folder in contents.folders)
        assert contents.files == []

    def test_provider_subdirectory_has_parent_link(self, storage, demo_user):
        gcp = get_supported_providers(storage)[0]
        contents = get_provider_contents(storage, demo_user.id, gcp.id, "/Work Projects/")
        parent = contents.folders[0]
        assert parent.kind == "parent"
        assert parent.path == "/"
        assert parent.is_root
        assert [file.name for file in contents.files] == ["Company Overview.pdf"]

    def test_nested_provider_directory(self, storage, demo_user):
        azure = get_supported_providers(storage)[2]
        update_provider_active_status(storage, demo_user.id, azure.id, True)
        contents = get_provider_contents(storage, demo_user.id, azure.id, "/Work Projects")
        assert [(folder.kind, folder.path) for folder in contents.folders] == [
            ("parent", "/"), ("virtual", "/Work Projects/Reports")]
        reports = get_provider_contents(storage, demo_user.id, azure.id, "/Work Projects/Reports")
        assert reports.folders[0].name == "Work Projects"
        assert reports.folders[0].path == "/Work Projects"
        assert len(reports.files) == 5

    def test_inactive_connection_is_denied(self, storage, demo_user):
        aws = get_supported_providers(storage)[1]
        with pytest.raises(AccessDenied):
            get_provider_contents(storage, demo_user.id, aws.id, "/")
        update_provider_active_status(storage, demo_user.id, aws.id, True)
        photos = get_provider_contents(storage, demo_user.id, aws.id, "/Photos")
        assert len(photos.files) == 6

    def test_disconnected_provider_is_denied(self, storage, demo_user):
        gcp = get_supported_providers(storage)[0]
        assert disconnect_user_from_provider(storage, demo_user.id, gcp.id)
        assert not disconnect_user_from_provider(storage, demo_user.id, gcp.id)
        with pytest.raises(AccessDenied):
            get_provider_contents(storage, demo_user.id, gcp.id, "/")


class TestFiles:
    """File registration, favorites and tags"""

    def test_upload_derives_path_and_mime_type(self, storage, demo_user):
        documents = get_folder_by_path(storage, demo_user.id, "/Documents")
        file = create_file(storage, demo_user.id, FileUpload(name="minutes.txt", size=12, folder_id=documents.id))
        assert file.path == "/Documents/minutes.txt"
        assert file.mime_type == "text/plain"
        assert file.tags == []
        assert not file.is_favorite

    def test_toggle_favorite_is_involutive(self, storage, demo_user):
        file = demo_file(storage, demo_user, "Team Photo.jpg")
        assert toggle_favorite(storage, file.id).is_favorite
        assert [favorite.id for favorite in get_user_favorite_files(storage, demo_user.id)] == [file.id]
        assert not toggle_favorite(storage, file.id).is_favorite
        assert get_user_favorite_files(storage, demo_user.id) == []

    def test_toggle_favorite_unknown_file(self, storage, demo_user):
        with pytest.raises(NotFound):
            toggle_favorite(storage, 9999)

    def test_add_tag_is_idempotent(self, storage, demo_user):
        file = demo_file(storage, demo_user, "Budget 2025.xlsx")
        once = add_tag(storage, file.id, "finance")
        twice = add_tag(storage, file.id, "finance")
        assert once.tags == twice.tags == ["finance"]

    def test_tags_are_case_sensitive(self, storage, demo_user):
        file = demo_file(storage, demo_user, "Budget 2025.xlsx")
        add_tag(storage, file.id, "finance")
        assert add_tag(storage, file.id, "Finance").tags == ["finance", "Finance"]

    def test_remove_absent_tag_is_a_no_op(self, storage, demo_user):
        file = demo_file(storage, demo_user, "Budget 2025.xlsx")
        add_tag(storage, file.id, "finance")
        assert remove_tag(storage, file.id, "missing").tags == ["finance"]
        assert remove_tag(storage, file.id, "finance").tags == []

    def test_tags_survive_commit(self, storage, demo_user):
        file = demo_file(storage, demo_user, "Budget 2025.xlsx")
        add_tag(storage, file.id, "finance")
        storage.commit()
        storage.refresh(file)
        assert file.tags == ["finance"]

    def test_file_ids_are_not_reused_after_delete(self, storage, demo_user):
        first = create_file(storage, demo_user.id, FileUpload(name="a.txt"))
        storage.commit()
        first_id = first.id
        delete_file(storage, first_id)
        storage.commit()
        second = create_file(storage, demo_user.id, FileUpload(name="b.txt"))
        storage.commit()
        assert second.id > first_id

    def test_delete_removes_shares(self, storage, demo_user):
        file = demo_file(storage, demo_user, "Company Overview.pdf")
        token = storage.first(SharedFile, file_id=file.id).token
        assert delete_file(storage, file.id)
        assert storage.list(SharedFile, file_id=file.id) == []
        with pytest.raises(NotFound):
            resolve_share_token(storage, token)
        assert not delete_file(storage, file.id)

    def test_read_access_needs_ownership_or_share_token(self, storage, demo_user, make_user):
        alice = make_user("alice")
        file = demo_file(storage, demo_user, "Team Photo.jpg")
        assert assert_owner_or_shared(storage, file, demo_user) is file
        with pytest.raises(AccessDenied):
            assert_owner_or_shared(storage, file, alice)
        link = generate_share_link(storage, file.id, demo_user.id)
        with pytest.raises(AccessDenied):
            assert_owner_or_shared(storage, file, alice)
        assert assert_owner_or_shared(storage, file, alice, link.token) is file


class TestSharing:
    """Share link lifecycle"""

    def test_generate_twice_returns_same_token(self, storage, demo_user):
        file = demo_file(storage, demo_user, "Team Photo.jpg")
        first = generate_share_link(storage, file.id, demo_user.id, 3600)
        second = generate_share_link(storage, file.id, demo_user.id, 60)
        assert first.token == second.token
        assert first.expires_at == second.expires_at

    def test_share_ids_are_not_reused_after_revoke(self, storage, demo_user):
        file = demo_file(storage, demo_user, "Team Photo.jpg")
        first = generate_share_link(storage, file.id, demo_user.id)
        storage.commit()
        revoke_share_link(storage, file.id)
        storage.commit()
        second = generate_share_link(storage, file.id, demo_user.id)
        storage.commit()
        assert second.id > first.id

    def test_revoke_then_generate_gives_new_token(self, storage, demo_user):
        file = demo_file(storage, demo_user, "Team Photo.jpg")
        first = generate_share_link(storage, file.id, demo_user.id)
        assert first.expires_at is None
        assert revoke_share_link(storage, file.id)
        assert not revoke_share_link(storage, file.id)
        second = generate_share_link(storage, file.id, demo_user.id)
        assert second.token != first.token

    def test_expiry_is_relative_to_now(self, storage, demo_user):
        file = demo_file(storage, demo_user, "Team Photo.jpg")
        before = utcnow()
        link = generate_share_link(storage, file.id, demo_user.id, 86400)
        after = utcnow()
        assert before + timedelta(seconds=86400) <= link.expires_at <= after + timedelta(seconds=86400)
        assert link.url.endswith(f"/{link.token}")

    def test_expired_share_is_replaced_and_unusable(self, storage, demo_user):
        file = demo_file(storage, demo_user, "Team Photo.jpg")
        stale = storage.add(SharedFile(file_id=file.id, user_id=demo_user.id, token="stale-token",
                                       expires_at=utcnow() - timedelta(minutes=1)))
        assert not is_file_shared_with_user(storage, file.id, 999, stale.token)
        with pytest.raises(NotFound):
            resolve_share_token(storage, "stale-token")
        link = generate_share_link(storage, file.id, demo_user.id)
        assert link.token != "stale-token"
        assert storage.first(SharedFile, token="stale-token") is None

    def test_token_of_another_file_grants_nothing(self, storage, demo_user):
        photo = demo_file(storage, demo_user, "Team Photo.jpg")
        overview = demo_file(storage, demo_user, "Company Overview.pdf")
        token = storage.first(SharedFile, file_id=overview.id).token
        assert is_file_shared_with_user(storage, overview.id, 999, token)
        assert not is_file_shared_with_user(storage, photo.id, 999, token)

    def test_only_owner_can_share(self, storage, demo_user, make_user):
        alice = make_user("alice")
        file = demo_file(storage, demo_user, "Team Photo.jpg")
        with pytest.raises(AccessDenied):
            generate_share_link(storage, file.id, alice.id)
        with pytest.raises(NotFound):
            generate_share_link(storage, 9999, alice.id)
