"""Constants and enums, some types"""

from sys import version_info
from typing import TypeAlias, Mapping
from enum import Enum, IntEnum

from yarl import URL


if version_info < (3, 11):

    class StrEnum(str, Enum):
        """Enum with possibility to be a query param serializable"""

        def __str__(self):
            return self.value

else:
    from enum import StrEnum


class Language(StrEnum):
    ENGLISH = "english"
    ARABIC = "arabic"
    BULGARIAN = "bulgarian"
    SIMPLIFIED_CHINESE = "schinese"
    TRADITIONAL_CHINESE = "tchinese"
    CZECH = "czech"
    DANISH = "danish"
    DUTCH = "dutch"
    FINNISH = "finnish"
    FRENCH = "french"
    GERMAN = "german"
    GREEK = "greek"
    HUNGARIAN = "hungarian"
    ITALIAN = "italian"
    JAPANESE = "japanese"
    KOREAN = "koreana"
    NORWEGIAN = "norwegian"
    POLISH = "polish"
    PORTUGUESE = "portuguese"
    BRAZILIAN = "brazilian"
    ROMANIAN = "romanian"
    RUSSIAN = "russian"
    SPANISH = "spanish"
    LATIN_AMERICAN_SPANISH = "latam"
    SWEDISH = "swedish"
    THAI = "thai"
    TURKISH = "turkish"
    UKRAINIAN = "ukrainian"
    VIETNAMESE = "vietnamese"


class FriendRelationship(IntEnum):
    NONE = 0
    BLOCKED = 1
    REQUEST_RECIPIENT = 2
    FRIEND = 3
    REQUEST_INITIATOR = 4
    IGNORED = 5
    IGNORED_FRIEND = 6
    SUGGESTED_FRIEND = 7  # removed by steam, kept to parse old data


class EResult(IntEnum):
    """
    Result codes in `success`/`eresult` fields of `Steam` responses.
    Codes that are not listed here resolve to `INVALID`.

    .. seealso:: https://steamerrors.com/
    """

    INVALID = 0
    OK = 1
    FAIL = 2
    NO_CONNECTION = 3
    INVALID_PASSWORD = 5
    LOGGED_IN_ELSEWHERE = 6
    INVALID_PROTOCOL_VER = 7
    INVALID_PARAM = 8
    FILE_NOT_FOUND = 9
    BUSY = 10
    INVALID_STATE = 11
    INVALID_NAME = 12
    INVALID_EMAIL = 13
    DUPLICATE_NAME = 14
    ACCESS_DENIED = 15
    TIMEOUT = 16
    BANNED = 17
    ACCOUNT_NOT_FOUND = 18
    INVALID_STEAM_ID = 19
    SERVICE_UNAVAILABLE = 20
    NOT_LOGGED_ON = 21
    PENDING = 22
    ENCRYPTION_FAILURE = 23
    INSUFFICIENT_PRIVILEGE = 24
    LIMIT_EXCEEDED = 25
    REVOKED = 26
    EXPIRED = 27
    ALREADY_REDEEMED = 28
    DUPLICATE_REQUEST = 29
    ALREADY_OWNED = 30
    IP_NOT_FOUND = 31
    PERSIST_FAILED = 32
    LOCKING_FAILED = 33
    LOGON_SESSION_REPLACED = 34
    CONNECT_FAILED = 35
    HANDSHAKE_FAILED = 36
    IO_FAILURE = 37
    REMOTE_DISCONNECT = 38
    BLOCKED = 40
    IGNORED = 41
    NO_MATCH = 42
    ACCOUNT_DISABLED = 43
    SERVICE_READ_ONLY = 44
    ACCOUNT_LOGON_DENIED = 63
    INVALID_LOGIN_AUTH_CODE = 65
    ACCOUNT_LOGON_DENIED_NO_MAIL = 66
    PARENTAL_CONTROL_RESTRICTED = 69
    EXPIRED_LOGIN_AUTH_CODE = 71
    ACCOUNT_LOCKED_DOWN = 73
    RATE_LIMIT_EXCEEDED = 84
    ACCOUNT_LOGIN_DENIED_NEED_TWO_FACTOR = 85
    ACCOUNT_LOGIN_DENIED_THROTTLE = 87
    TWO_FACTOR_CODE_MISMATCH = 88
    TIME_NOT_SYNCED = 93
    NEED_CAPTCHA = 101
    IP_BANNED = 105
    LIMITED_USER_ACCOUNT = 112

    @classmethod
    def _missing_(cls, value):
        return cls.INVALID


class STEAM_URL:
    COMMUNITY = URL("https://steamcommunity.com")  # use this domain in methods
    STORE = URL("https://store.steampowered.com")
    HELP = URL("https://help.steampowered.com")
    API = URL("https://api.steampowered.com")
    # specific
    LOGIN = COMMUNITY / "login"
    TRADE = COMMUNITY / "tradeoffer"
    GET_WG_TOKEN = API / "IMobileAuthService/GetWGToken/v1/"


# https://github.com/DoctorMcKay/node-steamcommunity/blob/7c564c1453a5ac413d9312b8cf8fe86e7578b309/index.js#L10
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/67.0.3396.99 Safari/537.36"
)
MOBILE_USER_AGENT = (
    "Mozilla/5.0 (Linux; U; Android 4.1.1; en-us; Google Nexus 4 - 4.1.1 - API 16 - 768x1280 Build/JRO03S) "
    "AppleWebKit/534.30 (KHTML, like Gecko) Version/4.0 Mobile Safari/534.30"
)

# registered client id of the android app
OAUTH_CLIENT_ID = "DE45CD61"
OAUTH_SCOPE = "read_profile write_profile read_client write_client"

T_PAYLOAD: TypeAlias = Mapping[str, str | int | float | bool | None]
T_HEADERS: TypeAlias = Mapping[str, str]
