import asyncio
import logging
from re import compile as re_compile
from typing import Any, Iterable
from urllib.parse import unquote

from yarl import URL
from aiohttp import ClientSession, ClientResponse, ClientError, ClientTimeout, TCPConnector, InvalidURL

try:
    from aiohttp_socks import ProxyConnector
except ImportError:
    ProxyConnector = None

from ..config import ClientConfig
from ..constants import STEAM_URL, Language, T_HEADERS
from ..events import SessionExpiredNotifier
from ..exceptions import NetworkError, ProtocolError, SessionExpired, SteamError, FamilyViewRestricted
from ..id import SteamID
from ..utils import (
    add_cookie_to_session,
    generate_session_id,
    get_cookie_value_from_session,
    patch_session_with_http_proxy,
    remove_cookie_from_session,
    split_cookie,
    steam_id_from_login_cookie,
)

logger = logging.getLogger(__name__)

SESSION_ID_COOKIE = "sessionid"
LANG_COOKIE = "Steam_Language"
TZ_OFFSET_COOKIE = "timezoneOffset"
STEAM_LOGIN_COOKIE = "steamLogin"
STEAM_SECURE_COOKIE = "steamLoginSecure"
MACHINE_AUTH_COOKIE = "steamMachineAuth"  # + steam id64
# every cookie lives on all of them
COOKIE_URLS = (STEAM_URL.COMMUNITY, STEAM_URL.STORE, STEAM_URL.HELP)

FAMILY_VIEW_MARKER = '<div id="parental_notice_instructions">'
SIGN_IN_MARKERS = ("g_steamID = false;", "<title>Sign In</title>")
ERROR_PAGE_MARKER = "<h1>Sorry!</h1>"
ERROR_PAGE_MESSAGE_RE = re_compile(r"<h3>(?P<msg>.+)</h3>")


def is_login_redirect(r: ClientResponse) -> bool:
    """Redirect to `/login` or any page under it. Relative `Location` resolved against response url"""

    location = r.headers.get("Location")
    if not 300 <= r.status < 400 or not location:
        return False

    path = r.url.join(URL(location)).path
    return path == "/login" or path.startswith("/login/")


class SteamHTTPTransportMixin:
    """
    Handler of session instance, proxy, cookies getters/setters.
    Every request of the client goes through `request` method, which checks
    response for expired session and notifies `session_expired` observers.
    """

    # https://github.com/DoctorMcKay/node-steamcommunity/blob/1067d4572ee9d467e8f686951901c51028c5c995/components/http.js

    __slots__ = ()

    # required instance attributes
    session: ClientSession  # to use proxy session need to be patched
    config: ClientConfig
    session_expired: SessionExpiredNotifier
    steam_id: SteamID | None

    @property
    def user_agent(self) -> str | None:
        return self.session.headers.get("User-Agent")

    @user_agent.setter
    def user_agent(self, value: str | None):
        if value is None:
            self.session.headers.pop("User-Agent", None)
        else:
            self.session.headers["User-Agent"] = value

    @property
    def language(self) -> Language | None:
        """Language of Steam html pages, json info, descriptions, etc."""
        value = get_cookie_value_from_session(self.session, STEAM_URL.COMMUNITY, LANG_COOKIE)
        return Language(value) if value else None

    @language.setter
    def language(self, value: Language | None):
        if value is None:
            self.remove_cookie(LANG_COOKIE)
        else:
            self.set_cookie(LANG_COOKIE, value.value)

    @property
    def tz_offset(self) -> str | None:
        return get_cookie_value_from_session(self.session, STEAM_URL.COMMUNITY, TZ_OFFSET_COOKIE)

    @tz_offset.setter
    def tz_offset(self, value: str | None):
        if value is None:
            self.remove_cookie(TZ_OFFSET_COOKIE)
        else:
            self.set_cookie(TZ_OFFSET_COOKIE, value)

    def set_cookie(self, name: str, value: str, *, secure=False, expires: str = None):
        """
        Set cookie to `Steam Community`, `Steam Store` and `Steam Help` domains.
        `secure` cookies will be sent only over `https`.
        """

        for url in COOKIE_URLS:
            add_cookie_to_session(
                self.session,
                url.with_scheme("https" if secure else "http"),
                name,
                value,
                expires=expires,
                secure=secure,
            )

    def remove_cookie(self, name: str):
        """Remove cookie from all `Steam` domains"""

        for url in COOKIE_URLS:
            remove_cookie_from_session(self.session, url, name)

    def get_cookie_string(self, url: URL | str = STEAM_URL.COMMUNITY) -> str:
        """Cookie header value that will be sent to `url`"""

        c = self.session.cookie_jar.filter_cookies(URL(url))
        return "; ".join(f"{name}={morsel.value}" for name, morsel in c.items())

    def get_cookies(self, url: URL | str = STEAM_URL.COMMUNITY) -> list[str]:
        """Cookies visible to `url` as list of `name=value` strings. Can be passed to `set_cookies` later"""

        c = self.session.cookie_jar.filter_cookies(URL(url))
        return [f"{name}={morsel.value}" for name, morsel in c.items()]

    def set_cookies(self, cookies: Iterable[str]):
        """
        Import cookies (list of `name=value` strings), for example, saved after previous login.
        `steamLogin`, `steamLoginSecure` cookies set `steam_id` of the client.

        :raises ValueError: malformed cookie string
        """

        for cookie in cookies:
            name, value = split_cookie(cookie)
            if name in (STEAM_LOGIN_COOKIE, STEAM_SECURE_COOKIE):
                self.steam_id = steam_id_from_login_cookie(value)

            self.set_cookie(name, value, secure=name.startswith(MACHINE_AUTH_COOKIE) or name.endswith("Secure"))

    # because this cookie set to guests also
    @property
    def session_id(self) -> str:
        """`sessionid` cookie value for `Steam Community` domain (https://steamcommunity.com)"""
        return self.get_session_id()

    # https://github.com/DoctorMcKay/node-steamcommunity/blob/7c564c1453a5ac413d9312b8cf8fe86e7578b309/index.js#L177
    def get_session_id(self, domain: URL | str = STEAM_URL.COMMUNITY) -> str:
        """
        Get `sessionid` cookie value for `Steam` domain.
        Generate new one and set to all domains if there is none yet.
        """

        if value := get_cookie_value_from_session(self.session, domain, SESSION_ID_COOKIE):
            return unquote(value)

        value = generate_session_id()
        self.set_session_id(value)
        return value

    def set_session_id(self, value: str | None):
        """Set `sessionid` cookie value for all `Steam` domains"""

        if value is None:
            self.remove_cookie(SESSION_ID_COOKIE)
        else:
            self.set_cookie(SESSION_ID_COOKIE, value)

    async def request(
        self,
        method: str,
        url: URL | str,
        *,
        headers: T_HEADERS = None,
        check_status=True,
        check_session=True,
        **kwargs,
    ) -> ClientResponse:
        """
        Make request with client session, cookies and `User-Agent`.

        :param method: http method
        :param url: absolute url
        :param headers: extra headers to send with request
        :param check_status: raise `NetworkError` on 4xx, 5xx status codes, `FamilyViewRestricted` on locked pages
        :param check_session: detect redirect to login page, which means that session is expired
        :param kwargs: other `aiohttp.ClientSession.request` arguments, like `data`, `params`, `allow_redirects`
        :return: response
        :raises NetworkError: on transport error or bad status code
        :raises SessionExpired: when request was redirected to login page
        :raises FamilyViewRestricted: when requested page is locked by `Family View`
        """

        try:
            r = await self.session.request(method, url, headers=headers, raise_for_status=False, **kwargs)
        except (ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"{method} {url} failed: {e!r}") from e

        logger.debug("%s %s has returned %d", method, r.url, r.status)

        if check_session:
            if any(is_login_redirect(resp) for resp in (*r.history, r)):
                raise self._notify_session_expired("Not Logged In")

        if check_status and r.status >= 400:
            if r.status == 403 and FAMILY_VIEW_MARKER in (await r.text()):
                raise FamilyViewRestricted("Family View Restricted")

            raise NetworkError(f"HTTP error {r.status}", r.status)

        return r

    async def request_json(self, method: str, url: URL | str, **kwargs) -> tuple[ClientResponse, Any]:
        """
        Same as `request`, but return decoded json body with the response.

        :raises ProtocolError: when body is not a json
        """

        r = await self.request(method, url, **kwargs)
        try:
            # steam likes to respond json with text/html or text/javascript content type
            return r, await r.json(content_type=None)
        except ValueError as e:
            raise ProtocolError("Malformed response") from e

    async def request_text(self, method: str, url: URL | str, **kwargs) -> tuple[ClientResponse, str]:
        """
        Same as `request`, but return text body with the response.
        Check `Steam Community` html pages for error and sign-in pages.

        :raises SteamError: when page is an error page
        :raises SessionExpired: when page is a sign-in page
        """

        r = await self.request(method, url, **kwargs)
        rt = await r.text()
        self._check_community_error(rt)
        return r, rt

    def _check_community_error(self, text: str):
        if ERROR_PAGE_MARKER in text:
            match = ERROR_PAGE_MESSAGE_RE.search(text)
            raise SteamError(match["msg"] if match else "Unknown error")

        if all(marker in text for marker in SIGN_IN_MARKERS):
            raise self._notify_session_expired("Not Logged In")

    def _notify_session_expired(self, msg: str) -> SessionExpired:
        """Create error, notify observers and return error to raise it"""

        e = SessionExpired(msg)
        self.session_expired.notify(e)
        return e

    @staticmethod
    def _session_helper(session: ClientSession | None, proxy: str | None, config: ClientConfig) -> ClientSession:
        """
        Helper function. Creates new `ClientSession` instance, patch/bound it to proxy if needed.
        Timeout and local address from `config` are applied only to created session.
        """

        if proxy and session:
            raise ValueError("You need to handle proxy connection by yourself with predefined session instance")
        elif session:
            return session

        timeout = ClientTimeout(total=config.timeout)
        connector_kwargs = {"local_addr": (config.local_address, 0)} if config.local_address else {}

        if proxy and "socks" in proxy:
            if ProxyConnector is None:
                raise TypeError(
                    """
                    To use `socks` type proxies you need `aiohttp_socks` package.
                    You can do this with `aiosteamcommunity[socks]` dependency install target.
                    """
                )

            # let aiohttp_socks parse url by herself
            connector = ProxyConnector.from_url(proxy, **connector_kwargs)
            return ClientSession(connector=connector, timeout=timeout, raise_for_status=True)

        if proxy:  # http/s
            try:
                proxy = URL(proxy)
            except ValueError as e:
                raise InvalidURL(proxy) from e

        connector = TCPConnector(**connector_kwargs) if connector_kwargs else None
        session = ClientSession(connector=connector, timeout=timeout, raise_for_status=True)

        return patch_session_with_http_proxy(session, proxy) if proxy else session
