from json import loads as jloads
from re import compile as re_compile

from aiohttp import ClientResponse

from ..constants import STEAM_URL, EResult, T_PAYLOAD
from ..decorators import steam_id_required
from ..exceptions import EResultError, NetworkError, ProtocolError
from .login import LoginMixin, PROFILE_URL_RE

TRADE_URL_RE = re_compile(
    r"https?://(www.)?steamcommunity.com/tradeoffer/new/?\?partner=\d+(&|&amp;)token=(?P<token>[a-zA-Z0-9-_]+)"
)


class ProfileMixin(LoginMixin):
    """
    Profile attributes and data related methods.
    Depends on `LoginMixin`.
    """

    __slots__ = ()

    async def get_profile_url(self) -> str:
        """
        Get profile url path of logged-in user, like `/id/<ALIAS>` or `/profiles/<steam id64>`.
        Path is cached for `ClientConfig.profile_url_ttl` seconds.

        :raises NetworkError: `Steam` does not redirect
        :raises ProtocolError: redirect is not to a profile page
        """

        if path := self._profile_url_cache.path:
            return path

        r = await self.request(
            "GET",
            STEAM_URL.COMMUNITY / "my",
            allow_redirects=False,
            check_status=False,
        )
        if r.status != 302:
            raise NetworkError(f"HTTP error {r.status}", r.status)

        match = PROFILE_URL_RE.search(r.headers.get("Location", ""))
        if not match:
            raise ProtocolError("Can't get profile URL", r.headers.get("Location"))

        self._profile_url_cache.set(match[1])
        return match[1]

    def invalidate_profile_url(self):
        """Forget cached profile url"""

        self._profile_url_cache.invalidate()

    async def my_profile(self, endpoint: str, data: T_PAYLOAD = None, **kwargs) -> ClientResponse:
        """
        Make request to page of logged-in user profile.
        `POST` if `data` passed, `GET` otherwise.

        :param endpoint: path relative to profile url, like `tradeoffers/privacy`
        :param data: form data
        :param kwargs: other `request` arguments
        """

        url = STEAM_URL.COMMUNITY.with_path(f"{await self.get_profile_url()}/{endpoint}")
        if data is not None:
            return await self.request("POST", url, data=data, allow_redirects=True, **kwargs)
        else:
            return await self.request("GET", url, **kwargs)

    async def get_trade_url(self) -> tuple[str, str]:
        """
        Fetch trade url of logged-in user.

        :return: trade url, trade token
        """

        r = await self.my_profile("tradeoffers/privacy")
        rt = await r.text()
        self._check_community_error(rt)

        match = TRADE_URL_RE.search(rt)
        if not match:
            raise ProtocolError("Malformed response")

        return match[0], match["token"]

    @steam_id_required
    async def change_trade_url(self) -> tuple[str, str]:
        """
        Generate new trade token, invalidating previous trade url.

        :return: new trade url, new trade token
        """

        r = await self.my_profile("tradeoffers/newtradeurl", {"sessionid": self.session_id})
        rt = await r.text()
        if len(rt) < 3 or not rt.startswith('"'):
            raise ProtocolError("Malformed response", rt)

        token = rt.replace('"', "")  # "t1o2k3e4n" => t1o2k3e4n
        url = STEAM_URL.TRADE / "new/" % {"partner": self.steam_id.account_id, "token": token}
        return str(url), token

    async def clear_persona_name_history(self):
        """
        Clear profile name (alias) history.

        :raises EResultError: for ordinary reasons
        """

        r = await self.my_profile("ajaxclearaliashistory/", {"sessionid": self.session_id})
        try:
            rj = jloads(await r.text())
        except ValueError as e:
            raise ProtocolError("Malformed response") from e
        if not isinstance(rj, dict):
            raise ProtocolError("Malformed response", rj)

        success = EResult(rj.get("success"))
        if success is not EResult.OK:
            raise EResultError(rj.get("message", "Failed to clear persona name history"), success, rj)
