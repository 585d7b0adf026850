import asyncio

from darkroom.inventory import Item, coin_count
from darkroom.shop import buy_coin, handle_purchase
from darkroom.states import GameState

KEY, COIN = Item.KEY, Item.COIN


def test_buy_coin_spends_two_and_returns_one() -> None:
    inventory = [KEY, COIN, COIN, COIN]
    buy_coin(inventory)
    assert coin_count(inventory) == 2
    assert KEY in inventory


def test_buy_coin_legacy_swaps_whole_stash_for_one_coin() -> None:
    inventory = [COIN, KEY, COIN, COIN, COIN]
    buy_coin(inventory, legacy=True)
    assert inventory == [KEY, COIN]


def test_purchase_without_coins_leaves_inventory_unchanged(make_session) -> None:
    session = make_session(["1", "2"], picks=[GameState.ROOM3])

    result = asyncio.run(handle_purchase(session))

    assert result is GameState.ROOM3
    assert session.inventory == []
    output = session.print_func.text
    assert "Player has 0 coins." in output
    assert "Not enough coins to purchase the coin. The shopkeeper frowns." in output


def test_purchase_key_wins_without_deducting_coins(make_session) -> None:
    session = make_session(["K"], inventory=[COIN] * 5)

    result = asyncio.run(handle_purchase(session))

    assert result is GameState.WIN
    assert coin_count(session.inventory) == 5
    output = session.print_func.text
    assert "K - 5 coins" in output
    assert "You purchased a key and won the game!" in output


def test_purchase_key_accepts_lowercase(make_session) -> None:
    session = make_session(["k"], inventory=[COIN] * 6)
    assert asyncio.run(handle_purchase(session)) is GameState.WIN


def test_purchase_key_with_too_few_coins(make_session) -> None:
    session = make_session(["K", "2"], inventory=[COIN] * 4, picks=[GameState.ROOM1])

    result = asyncio.run(handle_purchase(session))

    assert result is GameState.ROOM1
    output = session.print_func.text
    assert "You have 4 coins." in output
    assert "K - 5 coins" not in output
    assert "Not enough coins to purchase the key." in output


def test_purchase_coin_uses_live_balance(make_session) -> None:
    session = make_session(["1", "1", "2"], inventory=[COIN] * 3)

    asyncio.run(handle_purchase(session))

    # 3 -> 2 -> 1: the second purchase still had two coins to spend.
    assert coin_count(session.inventory) == 1
    assert session.print_func.text.count("You purchased a coin!") == 2


def test_purchase_coin_legacy_mode(make_session) -> None:
    session = make_session(["1", "2"], inventory=[COIN] * 4, legacy_shop=True)
    asyncio.run(handle_purchase(session))
    assert session.inventory == [COIN]


def test_invalid_shop_input_stays_in_shop(make_session) -> None:
    session = make_session(["buy everything", "", "2"], picks=[GameState.ROOM2])

    result = asyncio.run(handle_purchase(session))

    assert result is GameState.ROOM2
    assert session.print_func.text.count("The shopkeeper looks confused.") == 2
