class CommonConstants:
    root_folder_name = "My Drive"
    root_path = "/"
    parent_folder_name = "Root"
    default_mime_type = "application/octet-stream"


class ProviderDefaults:
    access_token = "mock-access-token"
    refresh_token = "mock-refresh-token"
    connection_ttl_minutes = 60
    catalog = [
        {"name": "Google Cloud Platform", "type": "gcp", "icon": "gcp", "is_active": True},
        {"name": "Amazon Web Services", "type": "aws", "icon": "aws", "is_active": True},
        {"name": "Microsoft Azure", "type": "azure", "icon": "azure", "is_active": True},
    ]


class SmartSearch:
    one_mib = 1024 * 1024
    type_pattern = r"\b(pdf|docx|doc|txt|jpg|jpeg|png)\b"
    large_pattern = r"\b(large|big)\b"
    small_pattern = r"\b(small|tiny)\b"
    min_name_length = 3
    stop_words = ["find", "search", "show", "me", "get", "the", "files", "documents", "with", "containing", "about"]
    # checked in order, first match wins
    date_keywords = ["today", "yesterday", "last week", "last month", "this month"]


class ShareConstants:
    token_bytes = 16
