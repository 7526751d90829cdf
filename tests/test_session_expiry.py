import asyncio
import logging

import pytest

from aiosteamcommunity import STEAM_URL, SessionExpired
from aiosteamcommunity.events import SessionExpiredNotifier

from conftest import FakeResponse
from data import SIGN_IN_PAGE, ALIAS_PROFILE_PATH

TOKEN_URL = STEAM_URL.COMMUNITY / "chat/clientjstoken"


def test_subscribe_unsubscribe():
    notifier = SessionExpiredNotifier()
    handler = notifier.subscribe(lambda e: None)
    notifier.subscribe(handler)

    assert len(notifier) == 1
    assert notifier.unsubscribe(handler)
    assert not notifier.unsubscribe(handler)
    assert not notifier.handlers


def test_failing_handler_does_not_stop_others(caplog):
    notifier = SessionExpiredNotifier()
    received = []

    @notifier.subscribe
    def broken(error):
        raise RuntimeError("boom")

    notifier.subscribe(received.append)

    error = SessionExpired("Not Logged In")
    with caplog.at_level(logging.ERROR, logger="aiosteamcommunity.events"):
        notifier.notify(error)

    assert received == [error]
    assert "failed" in caplog.text


async def test_not_logged_in_notifies(client, session):
    events = []
    client.session_expired.subscribe(events.append)
    session.add("GET", TOKEN_URL, FakeResponse(json={"logged_in": False}))

    with pytest.raises(SessionExpired, match="Not Logged In"):
        await client.get_client_logon_token()

    assert len(events) == 1
    assert isinstance(events[0], SessionExpired)


async def test_each_detection_notifies(client, session):
    events = []
    client.session_expired.subscribe(events.append)
    session.add("GET", TOKEN_URL, FakeResponse(json={"logged_in": False}))

    results = await asyncio.gather(*(client.get_client_logon_token() for _ in range(3)), return_exceptions=True)

    assert all(isinstance(r, SessionExpired) for r in results)
    assert len(events) == 3


async def test_async_handler(client, session):
    events = []

    @client.session_expired.subscribe
    async def relogin(error: SessionExpired):
        await asyncio.sleep(0)
        events.append(error)

    session.add("GET", TOKEN_URL, FakeResponse(json={"logged_in": False}))

    with pytest.raises(SessionExpired):
        await client.get_client_logon_token()

    for _ in range(3):
        await asyncio.sleep(0)
    assert len(events) == 1


async def test_unsubscribed_handler(client, session):
    events = []
    client.session_expired.subscribe(events.append)
    client.session_expired.unsubscribe(events.append)
    session.add("GET", TOKEN_URL, FakeResponse(json={"logged_in": False}))

    with pytest.raises(SessionExpired):
        await client.get_client_logon_token()
    assert not events


async def test_redirect_to_login(client, session):
    events = []
    client.session_expired.subscribe(events.append)
    redirect = FakeResponse(302, headers={"Location": "https://steamcommunity.com/login/home/?goto=%2Fmy%2Finventory"})
    session.add("GET", STEAM_URL.COMMUNITY / "my/inventory", FakeResponse(text=SIGN_IN_PAGE, history=(redirect,)))

    with pytest.raises(SessionExpired):
        await client.reset_item_notifications()
    assert len(events) == 1


async def test_sign_in_page(client, session):
    events = []
    client.session_expired.subscribe(events.append)
    profile_redirect = FakeResponse(302, headers={"Location": f"https://steamcommunity.com{ALIAS_PROFILE_PATH}/"})
    session.add("GET", STEAM_URL.COMMUNITY / "my", profile_redirect)
    session.add(
        "GET",
        STEAM_URL.COMMUNITY.with_path(f"{ALIAS_PROFILE_PATH}/tradeoffers/privacy"),
        FakeResponse(text=SIGN_IN_PAGE),
    )

    with pytest.raises(SessionExpired):
        await client.get_trade_url()
    assert len(events) == 1


async def test_relative_redirect_to_login(client, session):
    events = []
    client.session_expired.subscribe(events.append)
    redirect = FakeResponse(302, headers={"Location": "/login/home/?goto=%2Fmy%2Finventory"})
    session.add("GET", STEAM_URL.COMMUNITY / "my/inventory", FakeResponse(text=SIGN_IN_PAGE, history=(redirect,)))

    with pytest.raises(SessionExpired):
        await client.reset_item_notifications()
    assert len(events) == 1


async def test_redirect_to_login_like_page(client, session):
    events = []
    client.session_expired.subscribe(events.append)
    redirect = FakeResponse(302, headers={"Location": "https://steamcommunity.com/loginhistory/"})
    session.add("GET", STEAM_URL.COMMUNITY / "my/inventory", FakeResponse(text="<html></html>", history=(redirect,)))

    await client.reset_item_notifications()
    assert not events
