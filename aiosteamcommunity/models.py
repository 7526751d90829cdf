from dataclasses import dataclass, field
from typing import NamedTuple, TypeAlias

from .id import SteamID


class RSAKey(NamedTuple):
    modulus: str  # hex
    exponent: str  # hex
    timestamp: str


class LoginStatus(NamedTuple):
    logged_in: bool
    family_view: bool  # logged in, but pages locked until `parental_unlock`


@dataclass(eq=False, slots=True, frozen=True, kw_only=True)
class LoginResult:
    """Data of successfully started session. Persist `cookies` and `steam_guard` to log in later without guard code"""

    session_id: str
    cookies: list[str] = field(default_factory=list)  # name=value
    steam_guard: str | None = None  # machine auth token as "<steam id64>||<token>"
    oauth_token: str | None = None  # mobile login only


# /login/dologin/ response shapes, ordered as `Steam` decides what happened with an attempt


@dataclass(slots=True, frozen=True)
class LoginSuccess:
    oauth: str | None = None  # raw json string of oauth data


@dataclass(slots=True, frozen=True)
class EmailGuardResponse:
    email_domain: str | None = None


@dataclass(slots=True, frozen=True)
class MobileGuardResponse:
    pass


@dataclass(slots=True, frozen=True)
class CaptchaResponse:
    captcha_gid: int | str
    message: str


@dataclass(slots=True, frozen=True)
class RejectedResponse:
    message: str


LoginResponse: TypeAlias = LoginSuccess | EmailGuardResponse | MobileGuardResponse | CaptchaResponse | RejectedResponse


class ClientLogonToken(NamedTuple):
    steam_id: SteamID
    account_name: str
    web_logon_token: str


class Notifications(NamedTuple):
    trades: int  # 1
    game_turns: int  # 2
    moderator_messages: int  # 3
    comments: int  # 4
    items: int  # 5
    invites: int  # 6
    # 7 missing
    gifts: int  # 8
    chats: int  # 9
    help_request_replies: int  # 10
    account_alerts: int  # 11
