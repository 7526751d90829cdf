from enum import IntEnum

__all__ = ("Universe", "AccountType", "SteamID")


ACCOUNT_ID_MASK = 0xFFFFFFFF
ACCOUNT_INSTANCE_MASK = 0xFFFFF
DESKTOP_INSTANCE = 1


class Universe(IntEnum):
    """Steam universe types"""

    INVALID = 0
    PUBLIC = 1
    BETA = 2
    INTERNAL = 3
    DEV = 4


class AccountType(IntEnum):
    """Steam account types"""

    INVALID = 0
    INDIVIDUAL = 1
    MULTISEAT = 2
    GAMESERVER = 3
    ANON_GAMESERVER = 4
    PENDING = 5
    CONTENT_SERVER = 6
    CLAN = 7
    CHAT = 8
    P2P_SUPER_SEEDER = 9
    ANON_USER = 10


TYPE_CHARS = {
    AccountType.INVALID: "I",
    AccountType.INDIVIDUAL: "U",
    AccountType.MULTISEAT: "M",
    AccountType.GAMESERVER: "G",
    AccountType.ANON_GAMESERVER: "A",
    AccountType.PENDING: "P",
    AccountType.CONTENT_SERVER: "C",
    AccountType.CLAN: "g",
    AccountType.CHAT: "T",
    AccountType.ANON_USER: "a",
}


class SteamID:
    """
    Identity of `Steam` account. Immutable.

    Built from 64-bit id (`76561198000000000`), 32-bit account id or their decimal string forms,
    as `Steam` puts them in cookies and login responses.
    """

    __slots__ = ("_universe", "_type", "_instance", "_account_id")

    def __init__(self, value: int | str):
        if isinstance(value, str):
            if not value.isdigit():
                raise ValueError(f'Unknown SteamID input format: "{value}"')
            value = int(value)

        if value < 0:
            raise ValueError("ID cannot be negative")
        elif value < 2**32:  # 32-bit account ID, public individual only
            self._universe = Universe.PUBLIC
            self._type = AccountType.INDIVIDUAL
            self._instance = DESKTOP_INSTANCE
            self._account_id = value
        elif value < 2**64:
            self._universe = Universe((value >> 56) & 0xFF)
            self._type = AccountType((value >> 52) & 0xF)
            self._instance = (value >> 32) & ACCOUNT_INSTANCE_MASK
            self._account_id = value & ACCOUNT_ID_MASK
        else:
            raise ValueError("ID is too large")

    @property
    def universe(self) -> Universe:
        return self._universe

    @property
    def type(self) -> AccountType:
        return self._type

    @property
    def instance(self) -> int:
        return self._instance

    @property
    def account_id(self) -> int:
        """Account id relative to universe and type. Used by `Steam` in trade urls"""
        return self._account_id

    id32 = account_id

    @property
    def id64(self) -> int:
        return (self._universe << 56) | (self._type << 52) | (self._instance << 32) | self._account_id

    @property
    def steam3(self) -> str:
        """ID in Steam3 format (e.g., "[U:1:46143802]")"""
        return f"[{TYPE_CHARS.get(self._type, 'i')}:{self._universe}:{self._account_id}]"

    def is_valid(self) -> bool:
        """
        Check whether this SteamID looks like a real one

        .. note:: Does not check whether the account actually exists
        """

        if self._type is AccountType.INVALID or self._universe is Universe.INVALID:
            return False
        if self._type is AccountType.INDIVIDUAL and (self._account_id == 0 or self._instance > 4):
            return False

        return True

    def __str__(self):
        return str(self.id64)

    def __int__(self):
        return self.id64

    def __repr__(self):
        return f"{self.__class__.__name__}(id64={self.id64}, universe={self._universe!r}, type={self._type!r})"

    def __eq__(self, other):
        if isinstance(other, SteamID):
            return self.id64 == other.id64
        return NotImplemented

    def __hash__(self):
        return hash(self.id64)
