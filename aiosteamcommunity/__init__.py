"""
Log in to steam community web, keep session cookies, work with profile and community.
"""

from .exceptions import (
    SteamError,
    NetworkError,
    ProtocolError,
    EResultError,
    LoginError,
    RejectedCredentials,
    LoginChallenge,
    EmailGuardRequired,
    MobileGuardRequired,
    CaptchaRequired,
    SessionExpired,
    FamilyViewRestricted,
)
from .constants import STEAM_URL, Language, EResult, FriendRelationship
from .config import ClientConfig
from .id import SteamID
from .client import SteamCommunity, SteamCommunityBase
from .models import LoginResult, LoginStatus, ClientLogonToken, Notifications
from .helpers import restore_from_cookies
