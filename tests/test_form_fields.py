from datetime import date

import pytest

from invoice_panel.core.errors import ValidationError
from invoice_panel.ui.components.fields import parse_amount, parse_count, parse_date, parse_percent


@pytest.mark.parametrize("text, expected", [("", None), ("  ", None), ("1.250.000", 1_250_000), ("1,250,000", 1_250_000), ("800 000", 800_000)])
def test_parse_amount(text, expected):
    assert parse_amount(text, "Tax amount") == expected


def test_parse_amount_rejects_text():
    with pytest.raises(ValidationError, match="Tax amount"):
        parse_amount("ten", "Tax amount")


def test_parse_date():
    assert parse_date("", "Due date") is None
    assert parse_date("2024-02-14", "Due date") == date(2024, 2, 14)
    with pytest.raises(ValidationError):
        parse_date("14/2/2024", "Due date")


def test_parse_count():
    assert parse_count(" 1001 ", "Next invoice number") == 1001
    with pytest.raises(ValidationError):
        parse_count("1.5", "Next invoice number")
    with pytest.raises(ValidationError):
        parse_count("-1", "Due after")


@pytest.mark.parametrize("text, expected", [("", 0.0), ("11", 0.11), ("11%", 0.11), ("2,5", 0.025)])
def test_parse_percent(text, expected):
    assert parse_percent(text, "Tax rate") == pytest.approx(expected)


def test_parse_percent_rejects_out_of_range():
    with pytest.raises(ValidationError):
        parse_percent("150", "Tax rate")
