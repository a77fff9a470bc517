import os
import configparser
from passlib.context import CryptContext
from fastapi.security import APIKeyCookie

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.environ.get("APP_CONFIG_PATH", os.path.join(BASE_DIR, "conf", "application.conf"))

config = configparser.ConfigParser()
config.read(CONFIG_PATH)


# ---------- VAR DECLARATIONS -----------
LOG_CONFIG_SECTION = "LOG"
SERVICE_SECTION = "SERVICE"
DATABASE_SECTION = "DATABASE"
CONSTANTS_SECTION = "CONSTANTS"
SHARE_SECTION = "SHARE"
DEMO_SECTION = "DEMO"


# Constants
class Constants:
    SECRET_KEY = config.get(CONSTANTS_SECTION, "SECRET_KEY")
    SESSION_EXPIRE_MINUTES = config.getint(CONSTANTS_SECTION, "SESSION_EXPIRE_MINUTES")
    BCRYPT_ROUNDS = config.getint(CONSTANTS_SECTION, "BCRYPT_ROUNDS")
    SESSION_COOKIE = "login-token"
    pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)
    session_scheme = APIKeyCookie(name=SESSION_COOKIE, auto_error=False)

# -----------LOGGING--------------
class Log:
    LOG_BASE_PATH = config.get(LOG_CONFIG_SECTION, 'base_path')
    LOG_LEVEL = config.get(LOG_CONFIG_SECTION, 'level')
    FILE_BACKUP_COUNT = config.get(LOG_CONFIG_SECTION, 'file_backup_count')
    FILE_BACKUP_SIZE = config.get(LOG_CONFIG_SECTION, 'max_log_file_size')
    FILE_NAME = LOG_BASE_PATH + config.get(LOG_CONFIG_SECTION, 'file_name')
    LOG_HANDLERS = config.get(LOG_CONFIG_SECTION, 'handlers')
    LOGGER_NAME = config.get(LOG_CONFIG_SECTION, 'name', fallback='CloudDash-service')
    # raw: the format holds %(...)s placeholders
    LOG_FORMAT = config.get(LOG_CONFIG_SECTION, 'format', raw=True,
                            fallback='%(asctime)s - %(levelname)s - %(message)s')

class Service:
    ENABLE_CORS = config.getboolean(SERVICE_SECTION, "ENABLE_CORS")
    PORT = config.get(SERVICE_SECTION, "PORT")
    HOST = config.get(SERVICE_SECTION, "HOST")
    SECURE_COOKIE = config.getboolean(SERVICE_SECTION, "SECURE_COOKIE")
    SEED_DEMO_DATA = config.getboolean(SERVICE_SECTION, "SEED_DEMO_DATA")

class Database:
    URL: str = str(config.get(DATABASE_SECTION, "URL"))
    ECHO: bool = config.getboolean(DATABASE_SECTION, "ECHO")

class Share:
    BASE_URL: str = config.get(SHARE_SECTION, "BASE_URL").rstrip("/")

class Demo:
    USERNAME = config.get(DEMO_SECTION, "USERNAME")
    PASSWORD = config.get(DEMO_SECTION, "PASSWORD")
    EMAIL = config.get(DEMO_SECTION, "EMAIL")
    FULL_NAME = config.get(DEMO_SECTION, "FULL_NAME")
