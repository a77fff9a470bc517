class BaseUrl:
    base_url: str = "/api"

class Routes:
    auth: str = f"{BaseUrl.base_url}/auth"
    providers: str = f"{BaseUrl.base_url}/providers"
    files: str = f"{BaseUrl.base_url}/files"
    folders: str = f"{BaseUrl.base_url}/folders"
    search: str = f"{BaseUrl.base_url}/search"
    share: str = f"{BaseUrl.base_url}/share"
    shared: str = f"{BaseUrl.base_url}/shared"


class AuthAPI:
    signup: str = "/signup"
    login: str = "/login"
    logout: str = "/logout"
    me: str = "/me"
    profile: str = "/profile"

class ProvidersAPI:
    supported: str = ""
    user_connected: str = "/user-connected"
    connect: str = "/connect"
    status: str = "/{provider_id}/status"
    files: str = "/{provider_id}/files"
    disconnect: str = "/{provider_id}"

class FilesAPI:
    upload: str = "/upload"
    favorites: str = "/favorites"
    file: str = "/{file_id}"
    favorite: str = "/{file_id}/favorite"
    tags: str = "/{file_id}/tags"
    tag: str = "/{file_id}/tags/{tag}"

class FolderAPI:
    create: str = "/create"
    contents: str = "/contents"
    folder: str = "/{folder_id}"

class SearchAPI:
    raw: str = "/raw"
    advanced: str = "/advanced"
    smart: str = "/smart"

class ShareAPI:
    share: str = ""
    revoke: str = "/{file_id}"
    public: str = "/{token}"
