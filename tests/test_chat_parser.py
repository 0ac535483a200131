from __future__ import annotations

from p2w_plugin.chat_parser import MONEY_EVENTS, ChatMoneyFilter, parse_chat_money

GOLD = "|TInterface\\MoneyFrame\\UI-GoldIcon:0:0:2:0|t"
SILVER = "|TInterface\\MoneyFrame\\UI-SilverIcon:0:0:2:0|t"
COPPER = "|TInterface\\MoneyFrame\\UI-CopperIcon:0:0:2:0|t"


def test_empty_message_is_zero():
    assert parse_chat_money("") == 0
    assert parse_chat_money(None) == 0


def test_message_without_coins_is_zero():
    assert parse_chat_money("You receive loot: [Linen Cloth]x2.") == 0


def test_mixed_denominations():
    message = f"You loot 5{GOLD} 23{SILVER} 10{COPPER}"
    assert parse_chat_money(message) == 52310


def test_repeated_tokens_are_additive():
    message = f"Your share of the loot is 3{GOLD}, plus 4{GOLD} bonus."
    assert parse_chat_money(message) == 70000


def test_order_does_not_matter():
    message = f"{56}{COPPER} {34}{SILVER} {12}{GOLD}"
    assert parse_chat_money(message) == 123456


def test_number_must_touch_icon():
    assert parse_chat_money(f"5 {GOLD}") == 0


def test_filter_appends_conversion(toggle, formatter):
    chat_filter = ChatMoneyFilter(toggle, formatter)
    message = f"You loot 12{GOLD} 34{SILVER} 56{COPPER}"

    result = chat_filter(object(), "CHAT_MSG_MONEY", message, "sender", 7)

    assert result == (False, message + " |cff00ff00(3.70 kr)|r", "sender", 7)


def test_filter_passes_through_without_money(toggle, formatter):
    chat_filter = ChatMoneyFilter(toggle, formatter)
    assert chat_filter(None, "CHAT_MSG_LOOT", "You receive loot: [Egg].") == (False,)


def test_filter_disabled_never_rewrites(toggle, formatter):
    chat_filter = ChatMoneyFilter(toggle, formatter)
    toggle.set_enabled(False)
    assert chat_filter(None, "CHAT_MSG_MONEY", f"1{GOLD}") == (False,)


def test_filter_tolerates_non_string_message(toggle, formatter):
    chat_filter = ChatMoneyFilter(toggle, formatter)
    assert chat_filter(None, "CHAT_MSG_MONEY", None) == (False,)


def test_money_events():
    assert MONEY_EVENTS == ("CHAT_MSG_MONEY", "CHAT_MSG_LOOT")
