import pytest

from app.core.taxonomy import (
    normalize_item_type,
    normalize_material,
    normalize_seasons,
    season_for,
    title_case,
)


def test_title_case_keeps_hyphens():
    assert title_case("gore-tex") == "Gore-Tex"
    assert title_case("t-shirt") == "T-Shirt"
    assert title_case("") is None


@pytest.mark.parametrize(
    "raw, expected",
    [("top", "Top"), ("OUTERWEAR", "Outerwear"), ("sneakers", "Footwear"), ("robot", "Accessory"), (None, "Accessory")],
)
def test_normalize_item_type(raw, expected):
    assert normalize_item_type(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [("denim", "Denim"), ("goretex", "Gore-Tex"), ("fleece", "Synthetic"), ("mystery", "Other"), (None, "Other")],
)
def test_normalize_material(raw, expected):
    assert normalize_material(raw) == expected


def test_normalize_seasons():
    assert normalize_seasons(["Fall", "winter"]) == ["autumn", "winter"]
    assert normalize_seasons(["All Season"]) == ["spring", "summer", "autumn", "winter"]
    assert normalize_seasons(["summer", "Summer"]) == ["summer"]
    assert normalize_seasons(["monsoon"]) is None
    assert normalize_seasons([]) is None


def test_season_for_month():
    assert season_for(1) == "winter"
    assert season_for(4) == "spring"
    assert season_for(7) == "summer"
    assert season_for(10) == "autumn"
    assert season_for(7, southern=True) == "winter"
