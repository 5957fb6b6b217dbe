"""Ledger block entity."""

import secrets
import string
from dataclasses import dataclass

from src.common.exceptions.custom_exceptions import RecordFormatError

TOKEN_ALPHABET = string.digits + string.ascii_lowercase
RECORD_DELIMITER = "|"


def generate_token(length: int = 10) -> str:
    """Opaque block label. Unique in practice, not a digest of the payload."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


@dataclass(frozen=True)  # Blocks are immutable once appended
class Block:
    """One record in the ledger, linked to its predecessor by token."""

    number: int
    token: str
    previous_token: str
    timestamp: str
    payload: str

    @property
    def is_genesis(self) -> bool:
        return self.number == 0

    def to_record(self) -> str:
        return RECORD_DELIMITER.join(
            [str(self.number), self.token, self.previous_token, self.timestamp, self.payload]
        )

    @classmethod
    def from_record(cls, line: str) -> "Block":
        """Parses seq|token|predecessorToken|timestamp|payload; the payload may itself contain '|'."""
        parts = line.rstrip("\r\n").split(RECORD_DELIMITER, 4)
        if len(parts) < 5:
            raise RecordFormatError("block", line, f"expected 5 fields, got {len(parts)}")
        try:
            number = int(parts[0])
        except ValueError as e:
            raise RecordFormatError("block", line, "block number is not an integer", original_exception=e)
        return cls(number=number, token=parts[1], previous_token=parts[2], timestamp=parts[3], payload=parts[4])

    def __str__(self) -> str:
        return f"Block {self.number} | {self.token} | {self.previous_token} | {self.timestamp} | {self.payload}"
