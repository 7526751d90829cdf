"""Typed dicts for raw responses."""

from typing import TypedDict


class SteamObjectResponse(TypedDict, total=False):
    success: int
    message: str  # optional, exists if success != 1


class RSAKeyData(TypedDict, total=False):
    success: bool
    publickey_mod: str  # hex
    publickey_exp: str  # hex
    timestamp: str
    token_gid: str


class DoLoginData(TypedDict, total=False):
    success: bool
    message: str
    login_complete: bool
    requires_twofactor: bool
    emailauth_needed: bool
    emaildomain: str
    emailsteamid: str
    captcha_needed: bool
    captcha_gid: int | str
    clear_password_field: bool
    oauth: str  # json encoded `OAuthData`, mobile login only


class OAuthData(TypedDict):
    steamid: str
    account_name: str
    oauth_token: str
    wgtoken: str
    wgtoken_secure: str
    webcookie: str


class WGTokenData(TypedDict, total=False):
    token: str
    token_secure: str


class WGTokenResponse(TypedDict, total=False):
    response: WGTokenData


class ClientJSTokenData(TypedDict, total=False):
    logged_in: bool
    steamid: str
    accountid: int
    account_name: str
    token: str


class NotificationCountsData(TypedDict, total=False):
    notifications: dict[str, int]


class FriendData(TypedDict):
    ulfriendid: str
    efriendrelationship: int


class FriendsListData(TypedDict, total=False):
    success: int
    friendslist: dict[str, list[FriendData]]


class ParentalUnlockData(TypedDict, total=False):
    success: bool
    eresult: int
