import pytest

from strukly.exceptions import ExtractionError
from strukly.parsers.model_output import (
    parse_model_json,
    slice_json_object,
    split_data_url,
    strip_code_fences,
)


def test_split_data_url_with_prefix():
    assert split_data_url("data:image/png;base64,AAAA") == ("image/png", "AAAA")


def test_split_data_url_without_prefix():
    assert split_data_url("AAAA") == ("image/jpeg", "AAAA")


def test_strip_code_fences():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'


def test_slice_json_object_drops_surrounding_prose():
    text = 'Here you go: {"merchant": "Warung", "items": []} Hope it helps!'
    assert slice_json_object(text) == '{"merchant": "Warung", "items": []}'


def test_slice_json_object_without_braces():
    assert slice_json_object("no json here") == "no json here"


def test_parse_model_json_fenced_response():
    text = '```json\n{"merchant": "Warung", "total_amount": 30000, "items": [{"name": "Kopi", "quantity": 1, "price": 5000}]}\n```'
    data = parse_model_json(text)
    assert data["merchant"] == "Warung"
    assert data["items"][0]["price"] == 5000


@pytest.mark.parametrize("text", [
    "",
    "   ",
    "Maaf, saya tidak bisa membaca struk ini.",
    "```json\nnot json\n```",
    '{"merchant": "Warung", "items": [}',
])
def test_parse_model_json_rejects_unusable_text(text):
    with pytest.raises(ExtractionError):
        parse_model_json(text)


def test_parse_model_json_rejects_non_object():
    with pytest.raises(ExtractionError) as exc:
        parse_model_json("[1, 2, 3]")
    assert exc.value.details == "list"
