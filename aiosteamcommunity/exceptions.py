from .constants import EResult


class SteamError(Exception):
    """All errors related to Steam"""


class NetworkError(SteamError):
    """
    Raised when request to `Steam` failed on transport level or returned unexpected HTTP status.
    Safe to retry later.
    """

    def __init__(self, msg: str, status: int = None):
        self.msg = msg
        self.status = status

    def __str__(self):
        return self.msg


class ProtocolError(SteamError):
    """Raised when `Steam` response has unexpected shape. Probably `Steam` changed something on their side"""

    def __init__(self, msg: str, data=None):
        self.msg = msg
        self.data = data

    def __str__(self):
        return self.msg


class EResultError(SteamError):
    """Raised when Steam response data contain `success` field with error code"""

    def __init__(self, msg: str, result: EResult, data=None):
        self.msg = msg
        self.result = result
        self.data = data

    def __str__(self):
        return self.msg


class LoginError(SteamError):
    """Raised when a problem with login process occurred"""


class RejectedCredentials(LoginError):
    """Raised when `Steam` refused to log in with passed credentials"""


class LoginChallenge(LoginError):
    """
    Login attempt needs more data from the user.
    Call `login` again with corresponding argument filled.
    """


class EmailGuardRequired(LoginChallenge):
    """`Steam Guard` code sent to email is required. Pass it as `email_code`"""

    def __init__(self, email_domain: str | None):
        self.email_domain = email_domain

    def __str__(self):
        return "SteamGuard"


class MobileGuardRequired(LoginChallenge):
    """Code from `Steam Guard Mobile Authenticator` is required. Pass it as `two_factor_code`"""

    def __str__(self):
        return "SteamGuardMobile"


class CaptchaRequired(LoginChallenge):
    """Captcha must be solved. Pass the answer as `captcha`, the client remembers `captcha_gid` by itself"""

    def __init__(self, captcha_gid: int | str, captcha_url: str):
        self.captcha_gid = captcha_gid
        self.captcha_url = captcha_url

    def __str__(self):
        return "CAPTCHA"


# https://github.com/DoctorMcKay/node-steamcommunity/blob/1067d4572ee9d467e8f686951901c51028c5c995/components/http.js#L94
class SessionExpired(SteamError):
    """Raised when session is expired, and you need to do login"""


class FamilyViewRestricted(SteamError):
    """Raised when requested page is locked behind `Family View`. See `parental_unlock`"""
