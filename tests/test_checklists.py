from memory.checklists import get_skill_checklist


def test_known_skill_checklist():
    items = get_skill_checklist("Docker")
    assert len(items) == 5
    assert items[0].text == "Build Dockerfile from scratch"
    assert not any(item.completed for item in items)


def test_checklist_lookup_is_case_insensitive():
    assert get_skill_checklist("  KUBERNETES ") is not None


def test_unknown_skill_has_no_checklist():
    assert get_skill_checklist("Underwater Basket Weaving") is None


def test_each_call_returns_fresh_items():
    first = get_skill_checklist("react")
    first[0].completed = True
    second = get_skill_checklist("react")

    assert second[0].completed is False
    assert {i.id for i in first}.isdisjoint({i.id for i in second})
