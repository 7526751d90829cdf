import asyncio

__all__ = ("ProfileURLCache",)


class ProfileURLCache:
    """
    Holds profile url path (`/id/<alias>` or `/profiles/<id64>`) for `ttl` seconds.
    Eviction is scheduled on the running loop, so value must be set from a coroutine.
    """

    __slots__ = ("ttl", "_path", "_expires_at", "_timer")

    def __init__(self, ttl: float):
        self.ttl = ttl

        self._path: str | None = None
        self._expires_at: float | None = None  # loop time
        self._timer: asyncio.TimerHandle | None = None

    @property
    def path(self) -> str | None:
        if self._path is not None and asyncio.get_running_loop().time() >= self._expires_at:
            self.invalidate()  # timer is late
        return self._path

    @property
    def expires_at(self) -> float | None:
        return self._expires_at

    def set(self, path: str):
        self.invalidate()

        loop = asyncio.get_running_loop()
        self._path = path
        self._expires_at = loop.time() + self.ttl
        self._timer = loop.call_later(self.ttl, self.invalidate)

    def invalidate(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._path = None
        self._expires_at = None
