"""Helper functions to restore client session."""

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .client import SteamCommunityBase

__all__ = ("restore_from_cookies",)


async def restore_from_cookies(cookies: Iterable[str], client: "SteamCommunityBase") -> bool:
    """
    Helper func. Restore client session from cookies (`LoginResult.cookies`).
    Return `True` if cookies are valid and not expired, so there is no need to login.

    :raises ValueError: malformed cookie string
    """

    client.set_cookies(cookies)
    return (await client.logged_in()).logged_in
