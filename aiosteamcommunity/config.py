from dataclasses import dataclass

from .constants import Language, MOBILE_USER_AGENT

__all__ = ("ClientConfig", "DEFAULT_CONFIG")


@dataclass(slots=True, frozen=True, kw_only=True)
class ClientConfig:
    """
    Settings of a client instance. Instances do not share any state, use separate clients for separate accounts.

    :param user_agent: `User-Agent` header value of all requests, except login ones in mobile mode.
        Passed session keeps own header if this is not set
    :param mobile_user_agent: `User-Agent` header value of mobile login requests
    :param timeout: total timeout of a request in seconds. Applied only to sessions created by the client
    :param language: language of `Steam` pages and responses. Will be set to a cookie
    :param tz_offset: timezone offset. Will be set to a cookie
    :param profile_url_ttl: seconds to cache resolved profile url
    :param local_address: local interface address to bind to. Applied only to sessions created by the client
    """

    user_agent: str | None = None
    mobile_user_agent: str = MOBILE_USER_AGENT
    timeout: float = 50.0
    language: Language = Language.ENGLISH
    tz_offset: str = "0,0"
    profile_url_ttl: float = 60.0
    local_address: str | None = None


DEFAULT_CONFIG = ClientConfig()
