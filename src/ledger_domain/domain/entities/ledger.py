"""Append-only, hash-linked ledger aggregate."""

from typing import Callable, Iterable, Iterator, Optional, Sequence

from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import LedgerIntegrityError
from src.common.utils.date_utils import current_timestamp
from src.ledger_domain.domain.entities.block import Block, generate_token

GENESIS_PAYLOAD = "Genesis Block"


def find_chain_defect(blocks: Sequence[Block]) -> Optional[tuple[int, str]]:
    """
    First structural problem in a candidate chain as (index, reason), or None.

    Block 0 must be genesis, numbers must step by one, and each block must carry
    its predecessor's token. An empty sequence has no defect.
    """
    if blocks and blocks[0].number != 0:
        return 0, f"Chain starts at block {blocks[0].number}, not genesis"
    for i in range(1, len(blocks)):
        if blocks[i].number != blocks[i - 1].number + 1:
            return i, f"Block number {blocks[i].number} follows {blocks[i - 1].number}"
        if blocks[i].previous_token != blocks[i - 1].token:
            return i, "Predecessor token mismatch"
    return None


class Ledger:
    """
    Ordered sequence of blocks. Always holds at least the genesis block.

    Tokens are opaque labels, so verify() only proves linkage: editing a payload
    in place would not be detected.
    """

    def __init__(
        self,
        token_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], str]] = None,
    ) -> None:
        self._token_factory = token_factory or (lambda: generate_token(settings.LEDGER_TOKEN_LENGTH))
        self._clock = clock or current_timestamp
        self._chain: list[Block] = []
        self._create_genesis_block()

    def _create_genesis_block(self) -> None:
        self._chain.append(
            Block(
                number=0,
                token=self._token_factory(),
                previous_token=self._token_factory(),
                timestamp=self._clock(),
                payload=GENESIS_PAYLOAD,
            )
        )

    @property
    def latest(self) -> Block:
        if not self._chain:
            raise LedgerIntegrityError("Ledger is empty")
        return self._chain[-1]

    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(self._chain)

    def append(self, payload: str) -> Block:
        """Links a new block to the current tail and returns it."""
        last = self.latest
        block = Block(
            number=last.number + 1,
            token=self._token_factory(),
            previous_token=last.token,
            timestamp=self._clock(),
            payload=payload,
        )
        self._chain.append(block)
        return block

    def first_broken_link(self) -> int | None:
        """Index of the first block whose predecessor token doesn't match, or None."""
        for i in range(1, len(self._chain)):
            if self._chain[i].previous_token != self._chain[i - 1].token:
                return i
        return None

    def verify(self) -> bool:
        return self.first_broken_link() is None

    def reset(self) -> None:
        self._chain = []
        self._create_genesis_block()

    def restore(self, blocks: Iterable[Block]) -> None:
        """Replaces the chain wholesale. An empty source yields a fresh genesis."""
        self._chain = list(blocks)
        if not self._chain:
            self._create_genesis_block()

    def __iter__(self) -> Iterator[Block]:
        return iter(tuple(self._chain))

    def __len__(self) -> int:
        return len(self._chain)
