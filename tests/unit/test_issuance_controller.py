"""
Тесты Issuance Controller (RustaceansCollection)

Покрывает:
- Идентичность коллекции
- Owner mint: авторизация, гейт Crane у получателя
- Craft: цена, переплата, гейт Crane у вызывающего, craft_for_friend
- Администрирование: цена, комиссия, companion-коллекция, withdraw, ownership
- Годовое окно через управляемые часы
- token_uri: data URI, UnknownToken
- Атомарность: отклонённая транзакция не меняет состояние
- Конкурентный craft
"""

import json
import threading

import pytest

from rustaceans.core.contracts import validate_collection_state
from rustaceans.core.domain import IssuancePath
from rustaceans.core.domain.units import ZERO_ADDRESS, ether_to_wei
from rustaceans.gatekeeper import InMemoryCraneCollection
from rustaceans.issuance import (
    COLLECTION_NAME,
    COLLECTION_SYMBOL,
    InsufficientCranes,
    InvalidRecipient,
    NotAuthorized,
    PaymentTooLow,
    RustaceansCollection,
    UnknownToken,
)
from rustaceans.rendering import decode_data_uri

OWNER = "0xowner"
ALICE = "0xalice"
BOB = "0xbob"
CAROL = "0xcarol"

# 2024-06-01 12:00:00 UTC
MID_2024 = 1717243200.0
# 2025-01-01 00:00:05 UTC
START_2025 = 1735689605.0

PRICE = ether_to_wei("0.02")


class FakeClock:
    """Управляемые часы для детерминированных тестов годового окна."""

    def __init__(self, now: float):
        self.now = now

    def __call__(self) -> float:
        return self.now


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def clock():
    return FakeClock(MID_2024)


@pytest.fixture
def cranes():
    """ALICE: 2 Crane, BOB: 1 Crane, CAROL: 0."""
    collection = InMemoryCraneCollection()
    collection.mint(ALICE)
    collection.mint(ALICE)
    collection.mint(BOB)
    return collection


@pytest.fixture
def collection(cranes, clock):
    return RustaceansCollection(owner=OWNER, cranes=cranes, clock=clock)


# =============================================================================
# IDENTITY
# =============================================================================


class TestIdentity:
    def test_name_and_symbol(self, collection):
        assert collection.name() == "Rustaceans"
        assert collection.symbol() == "RUST"

    def test_identity_is_fixed(self, collection):
        assert (COLLECTION_NAME, COLLECTION_SYMBOL) == ("Rustaceans", "RUST")
        assert collection.snapshot().name == COLLECTION_NAME
        assert collection.snapshot().symbol == COLLECTION_SYMBOL

    def test_empty_collection(self, collection):
        assert collection.total_supply() == 0
        assert collection.current_year_total_supply() == 0
        assert collection.required_payment() == PRICE

    def test_zero_owner_rejected(self):
        with pytest.raises(InvalidRecipient):
            RustaceansCollection(owner=ZERO_ADDRESS)


# =============================================================================
# OWNER MINT
# =============================================================================


class TestOwnerMint:
    def test_mint_to_crane_holder(self, collection):
        token_id = collection.mint(OWNER, BOB)

        assert token_id == 0
        assert collection.owner_of(0) == BOB
        assert collection.balance_of(BOB) == 1
        assert collection.total_supply() == 1
        assert collection.treasury_balance() == 0

    def test_mint_recipient_without_cranes(self, collection):
        with pytest.raises(InsufficientCranes) as exc_info:
            collection.mint(OWNER, CAROL)

        assert exc_info.value.reason == "NOT_ENOUGH_CRANES"
        assert exc_info.value.block_reason == "insufficient_cranes"
        assert collection.total_supply() == 0

    def test_mint_by_non_owner(self, collection):
        with pytest.raises(NotAuthorized) as exc_info:
            collection.mint(ALICE, ALICE)

        assert exc_info.value.reason == "NOT_OWNER"
        assert collection.total_supply() == 0

    def test_mint_to_zero_address(self, collection):
        with pytest.raises(InvalidRecipient):
            collection.mint(OWNER, ZERO_ADDRESS)

    def test_owner_mint_receipt(self, collection):
        collection.mint(OWNER, BOB)
        receipt = collection.receipts()[0]
        assert receipt.path is IssuancePath.OWNER_MINT
        assert not receipt.is_paid()


# =============================================================================
# CRAFT
# =============================================================================


class TestCraft:
    def test_craft_exact_price(self, collection):
        token_id = collection.craft_for_self(ALICE, PRICE)

        assert collection.owner_of(token_id) == ALICE
        assert collection.treasury_balance() == PRICE

    def test_craft_overpayment_kept(self, collection):
        collection.craft_for_self(ALICE, PRICE + 5)

        assert collection.treasury_balance() == PRICE + 5
        assert collection.receipts()[0].overpayment_wei == 5

    def test_craft_below_price(self, collection):
        with pytest.raises(PaymentTooLow) as exc_info:
            collection.craft_for_self(ALICE, PRICE - 1)

        assert exc_info.value.reason == "PRICE_NOT_MET"
        assert exc_info.value.required == PRICE
        assert collection.total_supply() == 0
        assert collection.treasury_balance() == 0

    def test_craft_with_one_crane(self, collection):
        with pytest.raises(InsufficientCranes):
            collection.craft_for_self(BOB, PRICE)

    def test_price_checked_before_cranes(self, collection):
        """Недоплата без Crane отклоняется как PRICE_NOT_MET."""
        with pytest.raises(PaymentTooLow):
            collection.craft_for_self(CAROL, 0)

    def test_craft_for_friend(self, collection):
        token_id = collection.craft_for_friend(ALICE, CAROL, PRICE)

        assert collection.owner_of(token_id) == CAROL
        assert collection.balance_of(ALICE) == 0
        assert collection.receipts()[0].caller == ALICE
        assert collection.receipts()[0].path is IssuancePath.CRAFT_FOR_FRIEND

    def test_craft_for_friend_checks_payer_cranes(self, collection):
        """Crane проверяются у плательщика, не у получателя."""
        with pytest.raises(InsufficientCranes):
            collection.craft_for_friend(CAROL, ALICE, PRICE)

    def test_craft_for_friend_zero_recipient(self, collection):
        with pytest.raises(InvalidRecipient):
            collection.craft_for_friend(ALICE, ZERO_ADDRESS, PRICE)

    def test_ids_shared_between_paths(self, collection):
        assert collection.mint(OWNER, BOB) == 0
        assert collection.craft_for_self(ALICE, PRICE) == 1
        assert collection.craft_for_friend(ALICE, BOB, PRICE) == 2
        assert collection.balance_of(BOB) == 2

    def test_crane_transfer_revokes_craft(self, collection, cranes):
        collection.craft_for_self(ALICE, PRICE)
        cranes.transfer(0, CAROL)

        with pytest.raises(InsufficientCranes):
            collection.craft_for_self(ALICE, PRICE)


# =============================================================================
# ADMINISTRATION
# =============================================================================


class TestAdministration:
    def test_set_price_affects_next_craft(self, collection):
        collection.set_price(OWNER, ether_to_wei("0.05"))
        new_price = ether_to_wei("0.052")

        assert collection.required_payment() == new_price
        with pytest.raises(PaymentTooLow):
            collection.craft_for_self(ALICE, PRICE)
        collection.craft_for_self(ALICE, new_price)

    def test_set_development_fee(self, collection):
        collection.set_development_fee(OWNER, 0)
        assert collection.required_payment() == ether_to_wei("0.018")

    def test_free_craft(self, collection):
        collection.set_price(OWNER, 0)
        collection.set_development_fee(OWNER, 0)
        assert collection.craft_for_self(ALICE, 0) == 0

    def test_non_owner_cannot_set_price(self, collection):
        with pytest.raises(NotAuthorized):
            collection.set_price(ALICE, 0)
        assert collection.required_payment() == PRICE

    def test_negative_price_rejected(self, collection):
        with pytest.raises(ValueError):
            collection.set_price(OWNER, -1)

    def test_withdraw(self, collection):
        collection.craft_for_self(ALICE, PRICE)
        collection.craft_for_self(ALICE, PRICE)

        assert collection.withdraw(OWNER) == 2 * PRICE
        assert collection.treasury_balance() == 0

    def test_withdraw_non_owner(self, collection):
        collection.craft_for_self(ALICE, PRICE)
        with pytest.raises(NotAuthorized):
            collection.withdraw(ALICE)
        assert collection.treasury_balance() == PRICE

    def test_transfer_ownership(self, collection):
        collection.transfer_ownership(OWNER, ALICE)

        assert collection.owner == ALICE
        with pytest.raises(NotAuthorized):
            collection.mint(OWNER, BOB)
        collection.mint(ALICE, BOB)


# =============================================================================
# CRANE COLLECTION CONFIGURATION
# =============================================================================


class _UnreachableCranes:
    def balance_of(self, address: str) -> int:
        raise TimeoutError("no response")

    def total_supply(self) -> int:
        raise TimeoutError("no response")


class TestCraneConfiguration:
    def test_unset_collection_fails_closed(self):
        collection = RustaceansCollection(owner=OWNER)

        with pytest.raises(InsufficientCranes) as exc_info:
            collection.craft_for_self(ALICE, PRICE)
        assert exc_info.value.block_reason == "crane_collection_unset"

    def test_set_cranes_later(self, cranes):
        collection = RustaceansCollection(owner=OWNER)
        collection.set_cranes(OWNER, cranes)

        assert collection.craft_for_self(ALICE, PRICE) == 0
        assert collection.snapshot().cranes_configured

    def test_clear_cranes(self, collection):
        collection.set_cranes(OWNER, None)
        with pytest.raises(InsufficientCranes) as exc_info:
            collection.mint(OWNER, BOB)
        assert exc_info.value.block_reason == "crane_collection_unset"

    def test_unreachable_collection(self, collection):
        collection.set_cranes(OWNER, _UnreachableCranes())
        with pytest.raises(InsufficientCranes) as exc_info:
            collection.craft_for_self(ALICE, PRICE)
        assert exc_info.value.block_reason == "crane_collection_unreachable"

    def test_empty_crane_collection(self, collection):
        collection.set_cranes(OWNER, InMemoryCraneCollection())
        with pytest.raises(InsufficientCranes) as exc_info:
            collection.mint(OWNER, BOB)
        assert exc_info.value.block_reason == "crane_nonexistent_token"

    def test_non_owner_cannot_set_cranes(self, collection):
        with pytest.raises(NotAuthorized):
            collection.set_cranes(ALICE, None)


# =============================================================================
# YEAR WINDOW
# =============================================================================


class TestYearWindow:
    def test_rollover_on_first_issue_of_new_year(self, collection, clock):
        collection.craft_for_self(ALICE, PRICE)
        collection.mint(OWNER, BOB)
        assert collection.current_year_total_supply() == 2

        clock.now = START_2025
        # Ленивый сброс: до выпуска счётчик не меняется
        assert collection.current_year_total_supply() == 2

        token_id = collection.craft_for_self(ALICE, PRICE)

        assert token_id == 2
        assert collection.total_supply() == 3
        assert collection.current_year_total_supply() == 1

    def test_receipt_counters(self, collection, clock):
        collection.mint(OWNER, BOB)
        clock.now = START_2025
        collection.mint(OWNER, BOB)

        receipt = collection.receipts()[-1]
        assert receipt.total_issued_after == 2
        assert receipt.year_issued_after == 1


# =============================================================================
# TOKEN URI
# =============================================================================


class TestTokenUri:
    def test_token_uri(self, collection):
        token_id = collection.craft_for_self(ALICE, PRICE)
        uri = collection.token_uri(token_id)

        assert uri.startswith("data:application/json;base64,")
        _, payload = decode_data_uri(uri)
        document = json.loads(payload)
        assert document["name"] == f"Rustacean #{token_id}"
        assert document["image"].startswith("data:image/svg+xml;base64,")

    def test_token_uri_deterministic(self, collection):
        collection.mint(OWNER, BOB)
        assert collection.token_uri(0) == collection.token_uri(0)

    def test_token_uri_survives_transfer(self, collection):
        collection.mint(OWNER, BOB)
        before = collection.token_uri(0)
        collection.transfer_from(BOB, BOB, CAROL, 0)
        assert collection.token_uri(0) == before

    def test_unknown_token(self, collection):
        with pytest.raises(UnknownToken) as exc_info:
            collection.token_uri(0)
        assert exc_info.value.reason == "UNKNOWN_TOKEN"

    def test_owner_of_unknown_token(self, collection):
        with pytest.raises(UnknownToken):
            collection.owner_of(3)

    @pytest.mark.parametrize("alias", [0.0, True, "0"])
    def test_non_int_id_rejected(self, collection, alias):
        """Значения, равные 0 как ключ dict, не являются token_id 0."""
        collection.mint(OWNER, BOB)
        collection.mint(OWNER, BOB)

        with pytest.raises(UnknownToken):
            collection.token_uri(alias)
        with pytest.raises(UnknownToken):
            collection.owner_of(alias)

    def test_token_snapshot(self, collection):
        collection.mint(OWNER, BOB)

        token = collection.token(0)
        assert token.token_id == 0
        assert token.owner == BOB
        with pytest.raises(UnknownToken):
            collection.token(1)


# =============================================================================
# RECEIPTS
# =============================================================================


class TestReceipts:
    def test_receipts_paginated(self, collection):
        for _ in range(5):
            collection.mint(OWNER, BOB)

        page = collection.receipts(start=1, limit=2)

        assert isinstance(page, tuple)
        assert [r.token_id for r in page] == [1, 2]
        assert [r.token_id for r in collection.receipts(start=4)] == [4]
        assert collection.receipts(start=10) == ()
        assert collection.receipt_count() == 5

    def test_negative_page_rejected(self, collection):
        with pytest.raises(ValueError):
            collection.receipts(start=-1)
        with pytest.raises(ValueError):
            collection.receipts(limit=-1)


# =============================================================================
# TRANSFERS
# =============================================================================


class TestTransfers:
    def test_transfer_by_owner(self, collection):
        collection.mint(OWNER, BOB)
        collection.transfer_from(BOB, BOB, CAROL, 0)

        assert collection.owner_of(0) == CAROL
        assert collection.balance_of(BOB) == 0

    def test_transfer_by_stranger(self, collection):
        collection.mint(OWNER, BOB)
        with pytest.raises(NotAuthorized) as exc_info:
            collection.transfer_from(CAROL, BOB, CAROL, 0)

        assert exc_info.value.block_reason == "caller_not_token_owner"
        assert collection.owner_of(0) == BOB

    def test_transfer_to_zero_address(self, collection):
        collection.mint(OWNER, BOB)
        with pytest.raises(InvalidRecipient):
            collection.transfer_from(BOB, BOB, ZERO_ADDRESS, 0)


# =============================================================================
# ATOMICITY / SNAPSHOT
# =============================================================================


class TestAtomicity:
    def test_rejections_leave_state_unchanged(self, collection):
        collection.craft_for_self(ALICE, PRICE)
        before = collection.snapshot()

        for attempt in (
            lambda: collection.craft_for_self(ALICE, PRICE - 1),
            lambda: collection.craft_for_self(BOB, PRICE),
            lambda: collection.mint(ALICE, ALICE),
            lambda: collection.mint(OWNER, CAROL),
            lambda: collection.craft_for_friend(ALICE, "", PRICE),
        ):
            with pytest.raises(Exception):
                attempt()

        assert collection.snapshot() == before
        assert len(collection.receipts()) == 1

    def test_snapshot_matches_contract(self, collection):
        collection.craft_for_self(ALICE, PRICE)
        state = collection.snapshot()

        validate_collection_state(state.model_dump(mode="json"))
        assert state.supply.total_issued == 1
        assert state.treasury_wei == PRICE
        assert state.required_payment_wei == PRICE


class TestConcurrency:
    def test_parallel_crafts_get_unique_ids(self, collection):
        ids = []
        ids_lock = threading.Lock()

        def worker():
            for _ in range(20):
                token_id = collection.craft_for_self(ALICE, PRICE)
                with ids_lock:
                    ids.append(token_id)

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(ids) == list(range(100))
        assert collection.balance_of(ALICE) == 100
        assert collection.treasury_balance() == 100 * PRICE
