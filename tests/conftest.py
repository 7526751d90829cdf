from http.cookies import SimpleCookie
from json import dumps, loads

import pytest
import pytest_asyncio
import rsa
from aiohttp import CookieJar
from multidict import CIMultiDict
from yarl import URL

from aiosteamcommunity import SteamCommunity, ClientConfig


class FakeResponse:
    """Stand-in of `aiohttp.ClientResponse` with the attributes the client reads"""

    def __init__(
        self,
        status=200,
        *,
        json=None,
        text: str = None,
        headers: dict[str, str] = None,
        cookies: dict[str, str] = None,
        secure_cookies: dict[str, str] = None,
        history=(),
    ):
        self.status = status
        self.headers = CIMultiDict(headers or {})
        self.history = tuple(history)
        self.url = self.real_url = None  # filled by session

        self.cookies = SimpleCookie()
        for name, value in (cookies or {}).items():
            self.cookies[name] = value
            self.cookies[name]["path"] = "/"
        for name, value in (secure_cookies or {}).items():
            self.cookies[name] = value
            self.cookies[name]["path"] = "/"
            self.cookies[name]["secure"] = True

        self._json = json
        self._text = text

    async def json(self, content_type="application/json"):
        if self._text is not None:
            return loads(self._text)  # ValueError as aiohttp does
        return self._json

    async def text(self) -> str:
        if self._text is not None:
            return self._text
        return "" if self._json is None else dumps(self._json)


class FakeSession:
    """
    Stand-in of `aiohttp.ClientSession` with real cookie jar.
    Responses are routed by method and url, last response of a route is repeated.
    """

    def __init__(self, headers: dict[str, str] = None):
        self.headers = CIMultiDict(headers or {})
        self.cookie_jar = CookieJar()
        self.closed = False

        self.routes: dict[tuple[str, str], list[FakeResponse | Exception]] = {}
        self.requests: list[dict] = []

    def add(self, method: str, url: URL | str, *responses: FakeResponse | Exception):
        self.routes.setdefault((method, str(url)), []).extend(responses)

    def sent(self, method: str, url: URL | str) -> list[dict]:
        return [r for r in self.requests if r["method"] == method and r["url"] == str(url)]

    async def request(self, method: str, url: URL | str, **kwargs):
        url = URL(url)
        self.requests.append(
            {
                "method": method,
                "url": str(url),
                "cookies": {n: m.value for n, m in self.cookie_jar.filter_cookies(url).items()},
                **kwargs,
            }
        )

        queue = self.routes.get((method, str(url)))
        if not queue:
            raise AssertionError(f"Unexpected request: {method} {url}")

        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response

        response.url = response.real_url = url
        for redirect in response.history:
            redirect.url = redirect.real_url = redirect.url or url
        self.cookie_jar.update_cookies(response.cookies, url)
        return response

    async def close(self):
        self.closed = True


@pytest.fixture(scope="session")
def rsa_keys() -> tuple[rsa.PublicKey, rsa.PrivateKey]:
    return rsa.newkeys(512)


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig()


@pytest_asyncio.fixture()
async def session() -> FakeSession:
    return FakeSession()


@pytest_asyncio.fixture()
async def client(session, config) -> SteamCommunity:
    c = SteamCommunity(config=config, session=session)
    yield c
    await c.close()
