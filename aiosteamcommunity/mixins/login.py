import logging
from json import loads
from re import compile as re_compile
from time import time as time_time
from urllib.parse import quote, unquote

from ..cache import ProfileURLCache
from ..constants import STEAM_URL, OAUTH_CLIENT_ID, OAUTH_SCOPE
from ..exceptions import (
    NetworkError,
    ProtocolError,
    EmailGuardRequired,
    MobileGuardRequired,
    CaptchaRequired,
    RejectedCredentials,
)
from ..id import SteamID
from ..models import (
    RSAKey,
    LoginStatus,
    LoginResult,
    LoginResponse,
    LoginSuccess,
    EmailGuardResponse,
    MobileGuardResponse,
    CaptchaResponse,
    RejectedResponse,
)
from ..typed import DoLoginData, RSAKeyData, OAuthData, WGTokenResponse
from ..utils import encrypt_password, generate_session_id, split_cookie, steam_id_from_login_cookie
from .http import SteamHTTPTransportMixin, STEAM_LOGIN_COOKIE, STEAM_SECURE_COOKIE, MACHINE_AUTH_COOKIE

logger = logging.getLogger(__name__)

MOBILE_CLIENT_VERSION_COOKIE = "mobileClientVersion"
MOBILE_CLIENT_COOKIE = "mobileClient"
MOBILE_CLIENT_VERSION = "0 (2.1.3)"

NO_CAPTCHA_GID = -1
CAPTCHA_MESSAGE_RE = re_compile(r"Please verify your humanity")
PROFILE_URL_RE = re_compile(r"steamcommunity\.com(/(id|profiles)/[^/]+)/?")

WEB_LOGIN_HEADERS = {"Referer": str(STEAM_URL.LOGIN)}
# required to convince steam that we're logging in from a mobile device, so steam respond with oauth data
MOBILE_LOGIN_HEADERS = {
    "X-Requested-With": "com.valvesoftware.android.steam.community",
    "Referer": f"{STEAM_URL.COMMUNITY}/mobilelogin?oauth_client_id={OAUTH_CLIENT_ID}&oauth_scope={quote(OAUTH_SCOPE)}",
    "Accept": "text/javascript, text/html, application/xml, text/xml, */*",
}
URI_COMPONENT_SAFE = "~()*!.'"  # same as js `encodeURIComponent`


def parse_login_response(data: DoLoginData) -> LoginResponse:
    """
    Map `/login/dologin/` response to one of login response shapes.
    Order of checks matters, `Steam` can set a few flags in one response.

    :raises ProtocolError: response is not a login response
    """

    if not isinstance(data, dict) or "success" not in data:
        raise ProtocolError("Malformed response", data)

    if data["success"]:
        return LoginSuccess(data.get("oauth"))

    message = data.get("message") or ""
    if data.get("emailauth_needed"):
        return EmailGuardResponse(data.get("emaildomain"))
    elif data.get("requires_twofactor"):
        return MobileGuardResponse()
    elif data.get("captcha_needed") and CAPTCHA_MESSAGE_RE.search(message):
        return CaptchaResponse(data.get("captcha_gid"), message)
    else:
        return RejectedResponse(message or "Unknown error")


class LoginMixin(SteamHTTPTransportMixin):
    """
    Mixin with login logic methods.
    Depends on `SteamHTTPTransportMixin`.

    .. note:: Only one login attempt per client at a time,
        attempts share cookies and captcha gid of the client instance
    """

    __slots__ = ()

    # required instance attributes
    steam_id: SteamID | None
    oauth_token: str | None
    _captcha_gid: int | str
    _profile_url_cache: ProfileURLCache

    async def get_rsa_key(self, username: str, *, headers: dict[str, str] = None) -> RSAKey:
        """
        Fetch rsa public key to encrypt password of the account with.

        :raises NetworkError:
        :raises ProtocolError: when there is no key in response
        """

        _, rj = await self.request_json(
            "POST",
            STEAM_URL.LOGIN / "getrsakey/",
            data={"username": username},
            headers=headers,
        )
        rj: RSAKeyData
        if not isinstance(rj, dict) or not rj.get("publickey_mod") or not rj.get("publickey_exp"):
            raise ProtocolError("Invalid RSA key received", rj)

        return RSAKey(rj["publickey_mod"], rj["publickey_exp"], rj.get("timestamp", ""))

    async def login(
        self,
        account_name: str,
        password: str,
        *,
        captcha: str = None,
        captcha_gid: int | str = None,
        email_code: str = None,
        two_factor_code: str = None,
        steam_guard: str = None,
        disable_mobile=False,
        mobile_user_agent: str = None,
    ) -> LoginResult:
        """
        Perform login for main `Steam` domains:
            * https://steamcommunity.com
            * https://store.steampowered.com
            * https://help.steampowered.com

        Login challenges are raised as errors, call `login` again with related argument filled.

        :param account_name: username
        :param password:
        :param captcha: captcha text. Captcha gid from previous attempt is remembered
        :param captcha_gid: captcha gid, if you get it from somewhere else
        :param email_code: `Steam Guard` code from email
        :param two_factor_code: code from `Steam Guard Mobile Authenticator`
        :param steam_guard: machine auth token from previous login (`LoginResult.steam_guard`).
            Prevents email `Steam Guard` challenge on trusted machine
        :param disable_mobile: login as web browser. There will be no oauth token in result then
        :param mobile_user_agent: `User-Agent` of mobile login requests, overrides config one
        :return: session id, cookies, machine auth token, oauth token
        :raises ValueError: missing username or password, malformed `steam_guard`
        :raises EmailGuardRequired:
        :raises MobileGuardRequired:
        :raises CaptchaRequired:
        :raises RejectedCredentials: wrong credentials and other login errors from `Steam`
        :raises NetworkError:
        :raises ProtocolError: malformed responses
        """

        if not account_name or not password:
            raise ValueError("Missing either account name or password to login; both are needed")

        if steam_guard:
            self._set_machine_auth_cookie(steam_guard)

        if disable_mobile:
            headers = WEB_LOGIN_HEADERS
        else:
            headers = {**MOBILE_LOGIN_HEADERS, "User-Agent": mobile_user_agent or self.config.mobile_user_agent}
            self.set_cookie(MOBILE_CLIENT_VERSION_COOKIE, MOBILE_CLIENT_VERSION)
            self.set_cookie(MOBILE_CLIENT_COOKIE, "android")

        try:
            rsa_key = await self.get_rsa_key(account_name, headers=headers)
            try:
                encrypted_password = encrypt_password(password, rsa_key.modulus, rsa_key.exponent)
            except ValueError as e:
                raise ProtocolError("Invalid RSA key received", rsa_key) from e

            data = {
                "captcha_text": captcha or "",
                "captchagid": captcha_gid if captcha_gid is not None else self._captcha_gid,
                "emailauth": email_code or "",
                "emailsteamid": "",
                "password": encrypted_password,
                "remember_login": "true",
                "rsatimestamp": rsa_key.timestamp,
                "twofactorcode": two_factor_code or "",
                "username": account_name,
                "loginfriendlyname": "",
                "donotcache": int(time_time() * 1000),
            }
            if not disable_mobile:
                data["oauth_client_id"] = OAUTH_CLIENT_ID
                data["oauth_scope"] = OAUTH_SCOPE
                data["loginfriendlyname"] = "#login_emailauth_friendlyname_mobile"

            _, rj = await self.request_json("POST", STEAM_URL.LOGIN / "dologin/", data=data, headers=headers)

        finally:  # leftovers will break next non-mobile login
            self.remove_cookie(MOBILE_CLIENT_VERSION_COOKIE)
            self.remove_cookie(MOBILE_CLIENT_COOKIE)

        response = parse_login_response(rj)
        if isinstance(response, EmailGuardResponse):
            logger.warning("Login of %s requires email Steam Guard code", account_name)
            raise EmailGuardRequired(response.email_domain)
        elif isinstance(response, MobileGuardResponse):
            logger.warning("Login of %s requires mobile Steam Guard code", account_name)
            raise MobileGuardRequired
        elif isinstance(response, CaptchaResponse):
            logger.warning("Login of %s requires captcha", account_name)
            self._captcha_gid = response.captcha_gid
            raise CaptchaRequired(response.captcha_gid, f"{STEAM_URL.LOGIN}/rendercaptcha/?gid={response.captcha_gid}")
        elif isinstance(response, RejectedResponse):
            raise RejectedCredentials(response.message)

        if not disable_mobile and not response.oauth:
            raise ProtocolError("Malformed response", rj)

        return self._start_session(response, disable_mobile)

    def _start_session(self, response: LoginSuccess, disable_mobile: bool) -> LoginResult:
        session_id = generate_session_id()
        self.set_session_id(session_id)

        cookies = self.get_cookies()

        if disable_mobile:
            self.steam_id = self._find_steam_id_in_cookies(cookies)
            self.oauth_token = None
        else:
            oauth = self._decode_oauth(response.oauth)
            self.steam_id = SteamID(oauth["steamid"])
            self.oauth_token = oauth["oauth_token"]

        # find machine auth cookie to use it later and avoid email Steam Guard
        steam_guard = None
        machine_auth_cookie = f"{MACHINE_AUTH_COOKIE}{self.steam_id}"
        for cookie in cookies:
            name, value = split_cookie(cookie)
            if name == machine_auth_cookie:
                steam_guard = f"{self.steam_id}||{unquote(value)}"
                break

        self.set_cookies(cookies)
        self._profile_url_cache.invalidate()

        logger.info("Logged in as %s", self.steam_id)

        return LoginResult(
            session_id=session_id,
            cookies=cookies,
            steam_guard=steam_guard,
            oauth_token=self.oauth_token,
        )

    @staticmethod
    def _find_steam_id_in_cookies(cookies: list[str]) -> SteamID:
        found = dict(split_cookie(c) for c in cookies)
        for name in (STEAM_LOGIN_COOKIE, STEAM_SECURE_COOKIE):
            if name in found:
                try:
                    return steam_id_from_login_cookie(found[name])
                except ValueError as e:
                    raise ProtocolError("Malformed response") from e

        raise ProtocolError("Malformed response")

    @staticmethod
    def _decode_oauth(raw: str) -> OAuthData:
        try:
            oauth: OAuthData = loads(raw)
            if not oauth.get("steamid") or not oauth.get("oauth_token"):
                raise ProtocolError("Malformed response", oauth)
        except (ValueError, TypeError, AttributeError) as e:
            raise ProtocolError("Malformed response", raw) from e

        return oauth

    def _set_machine_auth_cookie(self, steam_guard: str):
        steam_id, sep, token = steam_guard.partition("||")
        if not sep or not steam_id or not token:
            raise ValueError("Steam guard token must be in `<steam id64>||<token>` format")

        self.set_cookie(f"{MACHINE_AUTH_COOKIE}{steam_id}", quote(token, safe=URI_COMPONENT_SAFE), secure=True)

    async def oauth_login(self, steam_guard: str, oauth_token: str) -> tuple[str, list[str]]:
        """
        Restore web session with oauth token and machine auth token from previous mobile login.

        :param steam_guard: `LoginResult.steam_guard`
        :param oauth_token: `LoginResult.oauth_token`
        :return: session id, cookies
        :raises NetworkError:
        :raises ProtocolError:
        """

        steam_id, sep, machine_auth = steam_guard.partition("||")
        if not sep:
            raise ValueError("Steam guard token must be in `<steam id64>||<token>` format")
        steam_id = SteamID(steam_id)

        _, rj = await self.request_json("POST", STEAM_URL.GET_WG_TOKEN, data={"access_token": oauth_token})
        rj: WGTokenResponse
        data = rj.get("response") if isinstance(rj, dict) else None
        if not data or not data.get("token") or not data.get("token_secure"):
            raise ProtocolError("Malformed response", rj)

        session_id = self.session_id
        login_token = quote(f"{steam_id}||{data['token']}", safe=URI_COMPONENT_SAFE)
        login_secure_token = quote(f"{steam_id}||{data['token_secure']}", safe=URI_COMPONENT_SAFE)
        cookies = [
            f"{STEAM_LOGIN_COOKIE}={login_token}",
            f"{STEAM_SECURE_COOKIE}={login_secure_token}",
            f"{MACHINE_AUTH_COOKIE}{steam_id}={machine_auth}",
            f"sessionid={session_id}",
        ]

        self.set_cookies(cookies)
        self.oauth_token = oauth_token
        self._profile_url_cache.invalidate()

        return session_id, cookies

    # https://github.com/DoctorMcKay/node-steamcommunity/blob/1067d4572ee9d467e8f686951901c51028c5c995/index.js#L290
    async def logged_in(self) -> LoginStatus:
        """
        Check if session is alive.

        :return: logged in or not, locked behind `Family View` or not
        :raises NetworkError: unexpected status code
        """

        r = await self.request(
            "GET",
            STEAM_URL.COMMUNITY / "my",
            allow_redirects=False,
            check_status=False,
            check_session=False,
        )
        if r.status == 403:
            return LoginStatus(True, True)
        elif r.status != 302:
            raise NetworkError(f"HTTP error {r.status}", r.status)

        return LoginStatus(bool(PROFILE_URL_RE.search(r.headers.get("Location", ""))), False)

    async def logout(self):
        """Log out of `Steam`, forget account related data"""

        await self.request(
            "POST",
            STEAM_URL.LOGIN / "logout/",
            data={"sessionid": self.session_id},
            allow_redirects=False,
            check_session=False,
        )

        self.steam_id = None
        self.oauth_token = None
        self._profile_url_cache.invalidate()
