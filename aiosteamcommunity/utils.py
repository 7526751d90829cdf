"""Abstract utils within `Steam` context and not"""

from base64 import b64encode
from functools import partial, wraps
from http.cookies import SimpleCookie
from secrets import token_hex
from urllib.parse import unquote

from aiohttp import ClientSession
from rsa import PublicKey, encrypt
from yarl import URL

from .id import SteamID


__all__ = (
    "generate_session_id",
    "encrypt_password",
    "split_cookie",
    "steam_id_from_login_cookie",
    "get_cookie_value_from_session",
    "add_cookie_to_session",
    "remove_cookie_from_session",
    "patch_session_with_http_proxy",
    "attribute_required",
)


def generate_session_id() -> str:
    """Generate steam like session id. 12 random bytes as 24 hex chars."""

    return token_hex(12)


def encrypt_password(password: str, modulus: str, exponent: str) -> str:
    """
    Encrypt password with `Steam` rsa public key in a way `Steam` login page does.

    `Steam` web page encrypts password to hex string and re-encodes it to base64 before submit,
    which is the same as base64 of raw ciphertext bytes.

    :param password: plain password
    :param modulus: public key modulus as hex string
    :param exponent: public key exponent as hex string
    :return: base64 encoded ciphertext (PKCS#1 v1.5 padding)
    """

    key = PublicKey(int(modulus, 16), int(exponent, 16))
    return b64encode(encrypt(password.encode("utf-8"), key)).decode()


def split_cookie(cookie: str) -> tuple[str, str]:
    """Split `name=value` cookie string. Value may contain `=` itself."""

    name, sep, value = cookie.strip().partition("=")
    if not sep or not name:
        raise ValueError("Cookie string must be in `name=value` format")

    return name, value


def steam_id_from_login_cookie(value: str) -> SteamID:
    """Extract steam id from `steamLogin`/`steamLoginSecure` cookie value (`<steam id64>||<token>`)"""

    return SteamID(unquote(value).split("||")[0])


def get_cookie_value_from_session(session: ClientSession, url: URL | str, field: str) -> str | None:
    """Get value from session cookies. Passed `url` must include scheme (for ex. `https://url.com`)."""

    c = session.cookie_jar.filter_cookies(URL(url))
    return c[field].value if field in c else None


def add_cookie_to_session(
    session: ClientSession,
    url: URL | str,
    name: str,
    value: str,
    *,
    expires: str = None,
    secure: bool = False,
):
    """Put cookie to session cookie jar for `url` domain. `expires` is a date string as in `Set-Cookie` header"""

    if isinstance(url, str):
        url = URL(url)

    c = SimpleCookie()
    c[name] = value
    c[name]["path"] = "/"
    c[name]["domain"] = url.host
    if expires is not None:
        c[name]["expires"] = expires
    if secure:
        c[name]["secure"] = secure

    session.cookie_jar.update_cookies(cookies=c, response_url=url)


def remove_cookie_from_session(session: ClientSession, url: URL | str, field: str) -> bool:
    """Remove cookie from session cookies. Return `True` if cookie was present and removed."""

    url = URL(url)
    present = field in session.cookie_jar.filter_cookies(url.with_scheme("https"))
    session.cookie_jar.clear(lambda m: m.key == field and m["domain"] == url.host)
    return present


def patch_session_with_http_proxy(session: ClientSession, proxy: str | URL) -> ClientSession:
    """Patch `aiohttp.ClientSession` to make all requests go through web proxy"""

    session._request = partial(session._request, proxy=proxy)
    return session


# generic, but less performant due to getattr
def attribute_required(attr: str, msg: str = None):
    """Generate a decorator that check required `attr` on instance before call a wrapped method"""

    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            if getattr(self, attr, None) is None:
                raise AttributeError(msg or f"You must provide a value for '{attr}' before using this method")
            return func(self, *args, **kwargs)

        return wrapper

    return decorator
