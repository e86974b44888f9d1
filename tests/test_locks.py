from app.services.locks import enforce_locked_items
from tests.fixtures import item_stub


def _ids(items):
    return [str(i.id) for i in items]


def test_locked_item_replaces_first_item_of_same_type():
    wardrobe = [item_stub(1, "Top"), item_stub(2, "Bottom"), item_stub(3, "Footwear"), item_stub(4, "Top")]
    selected = [wardrobe[0], wardrobe[1], wardrobe[2]]
    # model picked top 1, user locked top 4
    res = enforce_locked_items(selected, wardrobe, ["4"])
    assert _ids(res.items) == ["2", "3", "4"]
    assert res.added == ["4"]
    assert res.removed == ["1"]


def test_locked_item_appended_when_no_same_type():
    wardrobe = [item_stub(1, "Top"), item_stub(2, "Bottom"), item_stub(3, "Accessory")]
    res = enforce_locked_items(wardrobe[:2], wardrobe, [3])
    assert _ids(res.items) == ["1", "2", "3"]
    assert res.removed == []


def test_already_selected_lock_is_untouched():
    wardrobe = [item_stub(1, "Top"), item_stub(2, "Bottom")]
    res = enforce_locked_items(wardrobe, wardrobe, ["1"])
    assert _ids(res.items) == ["1", "2"]
    assert res.added == [] and res.removed == []


def test_locked_items_never_evict_each_other():
    wardrobe = [item_stub(1, "Top"), item_stub(2, "Top"), item_stub(3, "Bottom")]
    res = enforce_locked_items([wardrobe[0], wardrobe[2]], wardrobe, ["1", "2"])
    assert set(_ids(res.items)) == {"1", "2", "3"}
    assert res.removed == []


def test_unknown_locked_ids_are_ignored():
    wardrobe = [item_stub(1, "Top")]
    res = enforce_locked_items(wardrobe, wardrobe, ["99"])
    assert _ids(res.items) == ["1"]
    assert res.added == []


def test_duplicate_locked_ids_added_once():
    wardrobe = [item_stub(1, "Top"), item_stub(2, "Bottom")]
    res = enforce_locked_items([wardrobe[0]], wardrobe, ["2", 2, "2"])
    assert _ids(res.items) == ["1", "2"]


def test_every_locked_item_in_result():
    wardrobe = [item_stub(i, t) for i, t in enumerate(["Top", "Bottom", "Footwear", "Top", "Bottom", "Outerwear"], 1)]
    locked = ["4", "5", "6"]
    res = enforce_locked_items(wardrobe[:3], wardrobe, locked)
    assert set(locked) <= set(_ids(res.items))
    assert len(res.removed) <= len(locked)


def test_missing_top_is_appended_after_model_selection():
    wardrobe = [item_stub("1", "Top"), item_stub("2", "Bottom"), item_stub("3", "Footwear")]
    res = enforce_locked_items([wardrobe[1], wardrobe[2]], wardrobe, ["1"])
    assert _ids(res.items) == ["2", "3", "1"]
