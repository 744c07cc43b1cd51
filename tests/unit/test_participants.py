from reservations.engine import member_id, split_participants
from reservations.engine.participants import involves_member


def test_member_id_detection():
    assert member_id(5) == 5
    assert member_id("12") == 12
    assert member_id(" 7 ") == 7
    assert member_id(3.0) == 3
    assert member_id(True) is None
    assert member_id("Guest Speaker") is None
    assert member_id("12a") is None
    assert member_id(2.5) is None


def test_split_keeps_order_and_trims_guests():
    split = split_participants([2, " Alice ", "3", "Bob"])

    assert split.members == [2, 3]
    assert split.guests == ["Alice", "Bob"]
    assert split.normalized == [2, "Alice", 3, "Bob"]
    assert split.headcount == 4


def test_split_counts_blank_and_missing_values():
    split = split_participants(["", "  ", None, 4])

    assert split.members == [4]
    assert split.normalized == ["", "", "", 4]
    assert split.headcount == 4


def test_split_ignores_values_that_are_not_lists():
    assert split_participants(None).normalized == []
    assert split_participants("Visitor").normalized == []
    assert split_participants(b"Visitor").normalized == []
    assert split_participants({"name": "Visitor"}).headcount == 0
    assert split_participants(("Visitor",)).normalized == ["Visitor"]


def test_involves_member_matches_numeric_strings():
    assert involves_member([1, "2", "Carol"], 2)
    assert not involves_member(["Carol"], 2)
    assert not involves_member(None, 2)
