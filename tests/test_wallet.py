"""Tests for the wallet ledger."""

import threading
from decimal import Decimal

import pytest

from agencybooks.domain.entities import LedgerOperation
from agencybooks.domain.errors import (
    InsufficientBalanceError,
    InvalidAmountError,
    ValidationError,
)
from agencybooks.domain.wallet import WalletLedger


def _reconciles(ledger: WalletLedger, key: str) -> bool:
    wallet = ledger.get_wallet(key)
    credits = sum(
        (e.amount for e in ledger.history(key) if e.operation == LedgerOperation.CREDIT),
        Decimal("0"),
    )
    debits = sum(
        (e.amount for e in ledger.history(key) if e.operation == LedgerOperation.DEBIT),
        Decimal("0"),
    )
    return wallet.balance == wallet.initial_balance + credits - debits


def test_default_wallets_are_seeded(wallet_ledger):
    wallets = {w.key: w for w in wallet_ledger.list_wallets()}

    assert wallets["alhind"].balance == Decimal("1000.00")
    assert wallets["akbar"].balance == Decimal("500.00")
    assert wallets["office"].balance == Decimal("2000.00")
    assert wallets["office"].name == "Office Fund"
    assert wallet_ledger.history() == []


def test_overdraft_is_rejected_without_side_effects(wallet_ledger, memory_db):
    saves = memory_db.save_count

    with pytest.raises(InsufficientBalanceError) as excinfo:
        wallet_ledger.debit("alhind", 1500, "Bob")

    assert excinfo.value.available == Decimal("1000.00")
    assert excinfo.value.requested == Decimal("1500.00")
    assert "Available: 1,000.00" in str(excinfo.value)
    assert wallet_ledger.balance_of("alhind") == Decimal("1000.00")
    assert wallet_ledger.history() == []
    assert memory_db.save_count == saves


def test_credit_then_debit(wallet_ledger):
    wallet_ledger.credit("office", 500, "Sam")
    wallet_ledger.debit("office", 2200, "Sam")

    assert wallet_ledger.balance_of("office") == Decimal("300.00")
    history = wallet_ledger.history("office")
    # Newest first
    assert [e.operation for e in history] == [LedgerOperation.DEBIT, LedgerOperation.CREDIT]
    assert [e.amount for e in history] == [Decimal("2200.00"), Decimal("500.00")]
    assert all(e.actor == "Sam" for e in history)


def test_debit_of_entire_balance_is_allowed(wallet_ledger):
    wallet_ledger.debit("akbar", "500")
    assert wallet_ledger.balance_of("akbar") == Decimal("0.00")


@pytest.mark.parametrize("amount", [0, -5, "0.00", "abc", None])
def test_non_positive_amounts_are_rejected(wallet_ledger, amount):
    with pytest.raises(InvalidAmountError):
        wallet_ledger.credit("office", amount)
    with pytest.raises(InvalidAmountError):
        wallet_ledger.debit("office", amount)

    assert wallet_ledger.history() == []
    assert wallet_ledger.balance_of("office") == Decimal("2000.00")


def test_blank_wallet_key_is_rejected(wallet_ledger):
    with pytest.raises(ValidationError):
        wallet_ledger.credit("  ", 10)


def test_credit_creates_unknown_wallet(wallet_ledger):
    entry = wallet_ledger.credit("petty_cash", "75.50", "Sam")

    wallet = wallet_ledger.get_wallet("petty_cash")
    assert wallet.balance == Decimal("75.50")
    assert wallet.initial_balance == Decimal("0.00")
    assert wallet.name == "Petty Cash"
    assert entry.wallet_key == "petty_cash"


def test_debit_from_unknown_wallet_is_insufficient(wallet_ledger):
    with pytest.raises(InsufficientBalanceError) as excinfo:
        wallet_ledger.debit("nowhere", 1)
    assert excinfo.value.available == Decimal("0")
    assert wallet_ledger.get_wallet("nowhere") is None


def test_entry_records_actor_and_time(wallet_ledger, clock):
    entry = wallet_ledger.credit("alhind", 10)

    assert entry.actor == "System"
    assert entry.timestamp == clock.now()
    assert entry.id.startswith("TX")


def test_balance_reconciles_with_history(wallet_ledger):
    moves = [("credit", 250), ("debit", 900), ("debit", 400), ("credit", 30), ("debit", 5)]
    for operation, amount in moves:
        try:
            getattr(wallet_ledger, operation)("alhind", amount, "Bob")
        except InsufficientBalanceError:
            pass
        assert wallet_ledger.balance_of("alhind") >= 0

    assert wallet_ledger.balance_of("alhind") == Decimal("375.00")
    assert _reconciles(wallet_ledger, "alhind")


def test_history_filter_and_limit(wallet_ledger):
    wallet_ledger.credit("alhind", 1)
    wallet_ledger.credit("office", 2)
    wallet_ledger.credit("alhind", 3)

    assert [e.amount for e in wallet_ledger.history("alhind")] == [
        Decimal("3.00"),
        Decimal("1.00"),
    ]
    assert [e.amount for e in wallet_ledger.history(limit=2)] == [
        Decimal("3.00"),
        Decimal("2.00"),
    ]
    assert wallet_ledger.history(limit=0) == []


def test_concurrent_debits_never_overdraw(memory_db, clock, id_generator):
    ledger = WalletLedger(memory_db, clock=clock, id_generator=id_generator,
                          initial_balances={"shared": "100"})
    rejected = []

    def worker():
        for _ in range(20):
            try:
                ledger.debit("shared", 1)
            except InsufficientBalanceError:
                rejected.append(1)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert ledger.balance_of("shared") == Decimal("0.00")
    assert len(ledger.history("shared")) == 100
    assert len(rejected) == 60
    assert _reconciles(ledger, "shared")


def test_custom_seeds_and_reload(memory_db, clock, id_generator):
    ledger = WalletLedger(memory_db, clock=clock, id_generator=id_generator,
                          initial_balances={"alhind": "10"})
    ledger.credit("alhind", 5)

    reloaded = WalletLedger(memory_db, clock=clock, id_generator=id_generator,
                            initial_balances={"alhind": "999", "akbar": "1"})

    assert reloaded.balance_of("alhind") == Decimal("15.00")
    assert reloaded.balance_of("akbar") == Decimal("1.00")
    assert len(reloaded.history()) == 1


def test_negative_seed_is_rejected(memory_db):
    with pytest.raises(ValueError):
        WalletLedger(memory_db, initial_balances={"alhind": "-1"})


def test_failed_save_keeps_movement(wallet_ledger, memory_db):
    memory_db.fail_saves = True

    wallet_ledger.credit("alhind", 100)

    assert wallet_ledger.balance_of("alhind") == Decimal("1100.00")
    assert len(wallet_ledger.history()) == 1
    assert wallet_ledger.last_save_error is not None
    assert memory_db.ledger_entries == []


def test_failed_save_leaves_stored_state_consistent(wallet_ledger, memory_db, clock, id_generator):
    memory_db.fail_saves = True
    wallet_ledger.credit("office", 500, "Sam")

    # Neither the balance nor the entry reached the database
    stored = {w.key: w for w in memory_db.wallets}
    assert stored["office"].balance == Decimal("2000.00")
    assert memory_db.ledger_entries == []

    reloaded = WalletLedger(memory_db, clock=clock, id_generator=id_generator)
    assert reloaded.balance_of("office") == Decimal("2000.00")
    assert _reconciles(reloaded, "office")


def test_unsaved_entries_are_written_with_next_movement(
    wallet_ledger, memory_db, clock, id_generator
):
    memory_db.fail_saves = True
    wallet_ledger.credit("office", 500, "Sam")
    memory_db.fail_saves = False
    wallet_ledger.debit("office", 200, "Sam")

    assert wallet_ledger.last_save_error is None
    assert [e.operation for e in memory_db.ledger_entries] == [
        LedgerOperation.CREDIT,
        LedgerOperation.DEBIT,
    ]

    reloaded = WalletLedger(memory_db, clock=clock, id_generator=id_generator)
    assert reloaded.balance_of("office") == Decimal("2300.00")
    assert _reconciles(reloaded, "office")
