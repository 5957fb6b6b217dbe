# tests/test_main.py
"""End-to-end tests for the batch entry point, against a temporary data directory."""

import os

import pytest

import main
from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import LedgerIntegrityError


def test_first_run_seeds_simulates_and_saves() -> None:
    """An empty data directory is seeded, six seasonal orders commit, and everything is written out."""
    services = main.setup_dependencies()

    main.run_distribution_cycle(services)

    report = services.transactions.generate_distribution_report()
    assert report.completed == 6
    assert report.failed == 0

    for filename in ("blockchain.dat", "products.dat", "suppliers.dat", "retailers.dat", "transactions.dat", "nextids.dat"):
        assert os.path.exists(os.path.join(settings.DATA_DIR, filename))

    payloads = [block.payload for block in services.ledger.get_blocks()]
    assert payloads[0] == "Genesis Block"
    assert sum(payload.startswith("Completed Transaction") for payload in payloads) == 6
    assert payloads[-1].startswith("Optimized Route | Supplier: 1")


def test_second_run_continues_saved_state() -> None:
    """A later run picks up the saved chain, stock and id counters instead of reseeding."""
    first = main.setup_dependencies()
    main.run_distribution_cycle(first)
    first_chain_length = len(first.ledger.get_blocks())

    second = main.setup_dependencies()
    main.run_distribution_cycle(second)

    assert len(second.catalog.list_products()) == 3
    assert second.catalog.store.find_product(1).stock == 400
    assert [t.id for t in second.transactions.list_transactions()][-1] == 12
    assert len(second.ledger.get_blocks()) > first_chain_length
    assert second.ledger.verify_integrity() is True


def test_tampered_chain_stops_the_run() -> None:
    main.run_distribution_cycle(main.setup_dependencies())

    path = os.path.join(settings.DATA_DIR, "blockchain.dat")
    with open(path, encoding="utf-8") as f:
        lines = f.read().splitlines()
    number, token, _, timestamp, payload = lines[3].split("|", 4)
    lines[3] = "|".join([number, token, "forged", timestamp, payload])
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")

    with pytest.raises(LedgerIntegrityError):
        main.run_distribution_cycle(main.setup_dependencies())


def test_audit_job_raises_on_broken_chain(mocker) -> None:
    services = main.setup_dependencies()
    mocker.patch.object(services.ledger, "audit", side_effect=LedgerIntegrityError("broken", broken_index=2))
    persist = mocker.patch.object(services.ledger, "persist")

    with pytest.raises(LedgerIntegrityError):
        main.run_ledger_audit(services)

    persist.assert_not_called()
