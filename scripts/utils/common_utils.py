import calendar
import mimetypes
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt

from app_constants.app_configurations import Constants
from app_constants.constants import CommonConstants, ShareConstants


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every stored datetime takes."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def subtract_month(value: datetime) -> datetime:
    year, month = (value.year, value.month - 1) if value.month > 1 else (value.year - 1, 12)
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def create_jwt_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=Constants.SESSION_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, Constants.SECRET_KEY, algorithm="HS256")
    return encoded_jwt


def decode_jwt_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, Constants.SECRET_KEY, algorithms=["HS256"])
    except jwt.PyJWTError:
        return None


def generate_share_token() -> str:
    return secrets.token_hex(ShareConstants.token_bytes)


def guess_mime_type(filename: str) -> str:
    return mimetypes.guess_type(filename)[0] or CommonConstants.default_mime_type


def normalize_provider_path(path: Optional[str]) -> str:
    """Leading slash always, trailing slash only for the root."""
    path = (path or CommonConstants.root_path).strip()
    if not path.startswith("/"):
        path = f"/{path}"
    if len(path) > 1:
        path = path.rstrip("/") or CommonConstants.root_path
    return path


def join_path(parent_path: Optional[str], name: str) -> str:
    parent_path = normalize_provider_path(parent_path)
    if parent_path == CommonConstants.root_path:
        return f"/{name}"
    return f"{parent_path}/{name}"


def directory_of(path: str) -> str:
    """'/Work Projects/Reports/Q1.pdf' -> '/Work Projects/Reports'"""
    parts = path.split("/")
    parts.pop()
    return "/".join(parts) or CommonConstants.root_path
