from __future__ import annotations

import pytest

from hopr_monitor.domain import Balance
from hopr_monitor.example import EXAMPLE_HOST, example_fleet
from hopr_monitor.formatting import format_balance, parse_ether, truncate


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1234000000000000000", 1.234),
        ("2345000000000000000", 2.345),
        ("10000000000000000000", 10.0),
        ("99999999999999", 0.0),
        ("123456789012345678", 0.1234),
        ("0", 0.0),
        (5 * 10**18, 5.0),
    ],
)
def test_parse_ether_scales_to_four_decimals(raw: str | int, expected: float) -> None:
    assert parse_ether(raw) == expected


def test_parse_ether_truncates_toward_zero_for_negative_amounts() -> None:
    assert parse_ether("-123456789012345678") == -0.1234


def test_parse_ether_rejects_non_integers() -> None:
    with pytest.raises(ValueError):
        parse_ether("1.5")


def test_format_balance() -> None:
    balance = Balance(hopr="1234000000000000000", native="2345000000000000000")

    assert format_balance(balance) == "1.234 HOPR, 2.345 ETH"


def test_truncate_keeps_both_ends() -> None:
    value = "16Uiu2HAmE9b3TSHeF25uJS1Ecf2Js3TutnaSnipdV9otEpxbRN8Q"

    assert truncate(value) == "16Uiu2HAmE...9otEpxbRN8Q"
    assert truncate(value, 4) == "16Ui...RN8Q"


def test_truncate_leaves_short_values_alone() -> None:
    assert truncate("0xabc") == "0xabc"


def test_example_fleet_is_a_valid_local_fleet() -> None:
    fleet = example_fleet()

    assert EXAMPLE_HOST == "localhost"
    assert [node.instance_index for node in fleet] == [0]
    node = fleet[0]
    assert node.http_endpoint == "http://localhost:3001"
    assert node.ws_endpoint == "ws://localhost:3000"
    assert format_balance(node.balance) == "1.234 HOPR, 2.345 ETH"
    assert node.channels["incoming"][0]["status"] == "Open"
    assert node.channels["outgoing"][0]["peerId"].startswith("16Uiu2")
    assert node.tickets["losingTickets"] == 0
    assert node.tickets["rejectedValue"] == "0"
