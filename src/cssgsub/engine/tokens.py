"""Short-token generation and the class-name -> token table."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from cssgsub.errors import TokenConflictError

logger = logging.getLogger(__name__)

_DIGITS = "0123456789abcdefghijklmnopqrstuvwx"
BASE = len(_DIGITS)  # 34

# A CSS identifier cannot start with a digit or with a hyphen and a digit.
VALID_TOKEN = re.compile(r"^(?:[a-z_]|-[a-z_-])[a-z\d_-]*$", re.IGNORECASE)


def to_base(number: int, base: int = BASE) -> str:
    """Render a non-negative integer with the digits ``0-9a-x``."""
    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return _DIGITS[0]
    out = []
    while number:
        number, rem = divmod(number, base)
        out.append(_DIGITS[rem])
    return "".join(reversed(out))


@dataclass
class SubstitutionTable:
    """Class name -> token mapping plus the replacement occurrence count."""

    items: dict[str, str] = field(default_factory=dict)
    count: int = 0

    def __contains__(self, name: object) -> bool:
        return name in self.items

    def __len__(self) -> int:
        return len(self.items)

    def get(self, name: str) -> str | None:
        return self.items.get(name)

    def to_dict(self) -> dict[str, object]:
        return {"count": self.count, "items": dict(self.items)}


class TokenAllocator:
    """Mints tokens and records them in a SubstitutionTable.

    ``oracle_text`` is the original stylesheet source. A rendering that
    already appears there as a class selector is never handed out, so a
    token cannot shadow a class that stays in the output.
    """

    def __init__(self, oracle_text: str = "", table: SubstitutionTable | None = None) -> None:
        self.counter = 0
        self.table = table if table is not None else SubstitutionTable()
        self._oracle_text = oracle_text
        self._owners: dict[str, str] = {v: k for k, v in self.table.items.items()}

    def _collides(self, token: str) -> bool:
        if token in self._owners:
            return True
        pattern = r"\." + re.escape(token) + r"(?![0-9a-zA-Z\-_])"
        return re.search(pattern, self._oracle_text, re.IGNORECASE) is not None

    def succ(self) -> str:
        """Return the next valid, unused token and advance the counter past it."""
        while True:
            token = to_base(self.counter)
            if VALID_TOKEN.match(token) and not self._collides(token):
                break
            self.counter += 1
        self.counter += 1
        return token

    def register(self, class_name: str, token: str) -> str:
        """Map *class_name* to *token*; the mapping can never change afterwards."""
        owner = self._owners.get(token)
        if owner is not None and owner != class_name:
            raise TokenConflictError(token, owner, class_name)
        current = self.table.items.get(class_name)
        if current is not None and current != token:
            raise ValueError(f"{class_name!r} is already mapped to {current!r}")
        self.table.items[class_name] = token
        self._owners[token] = class_name
        return token

    def mint(self, class_name: str) -> str:
        """Assign a fresh token to *class_name*, which must not be mapped yet."""
        if class_name in self.table:
            raise ValueError(f"{class_name!r} already has a token")
        token = self.register(class_name, self.succ())
        logger.debug("minted %r -> %r", class_name, token)
        return token

    def token_for(self, class_name: str) -> str:
        """Return the token for *class_name*, minting one on first sight."""
        token = self.table.items.get(class_name)
        if token is None:
            token = self.mint(class_name)
        return token

    def __contains__(self, class_name: object) -> bool:
        return class_name in self.table
