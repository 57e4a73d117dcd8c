import pytest

from roster_engine.domain.policy import RosterPolicy
from roster_engine.domain.shift import UnknownShiftError, is_valid_time_range
from roster_engine.infrastructure.config import default_catalog, default_policy, merged_config


def test_default_catalog_shifts():
    catalog = default_catalog()

    assert [shift.name for shift in catalog.all()] == ["Morning", "Afternoon", "Night"]
    assert catalog.get(1).time == "07:00-16:00"
    assert catalog.get(1).roles == ("C5", "C4", "C3")
    assert catalog.get(2).required == 5
    assert catalog.get(3).required is None
    assert catalog.to_config()["3"]["required"] == "N/A"
    assert catalog.by_name("Afternoon").id == 2
    assert len(catalog) == 3 and 3 in catalog


def test_with_times_returns_a_new_catalog():
    catalog = default_catalog()
    updated = catalog.with_times({"2": "14:00-23:00", 3: {"time": "23:00-07:00", "name": "Overnight"}})

    assert updated.get(2).time == "14:00-23:00"
    assert updated.get(3).name == "Overnight"
    assert updated.get(3).roles == ("C2", "C1")
    assert catalog.get(2).time == "13:30-22:30"
    assert catalog.get(3).name == "Night"


def test_with_times_rejects_bad_input():
    catalog = default_catalog()

    with pytest.raises(ValueError):
        catalog.with_times({1: "7am-4pm"})
    with pytest.raises(UnknownShiftError):
        catalog.with_times({9: "07:00-16:00"})
    with pytest.raises(UnknownShiftError):
        catalog.get(4)


@pytest.mark.parametrize(
    "value, expected",
    [("07:00-16:00", True), ("22:00-07:00", True), ("24:00-07:00", False), ("7:00-16:00", False), (None, False)],
)
def test_time_range_validation(value, expected):
    assert is_valid_time_range(value) is expected


def test_merged_config_overrides_shifts_and_policy():
    config = merged_config({"shifts": {"1": {"time": "06:00-15:00"}}, "policy": {"afternoon_overflow": False}})

    catalog = default_catalog(config)
    assert catalog.get(1).time == "06:00-15:00"
    assert catalog.get(1).required == 6
    assert default_policy(config).afternoon_overflow is False
    assert default_catalog().get(1).time == "07:00-16:00"


def test_policy_from_config_ignores_unknown_keys():
    policy = RosterPolicy.from_config({"fallback_role": "C4", "colors": {"Delivery": "#123456"}, "bogus": 1})

    assert policy.color_for("Delivery") == "#123456"
    assert policy.color_for("Manager") == "#FF0000"
    assert policy.color_for("Cleaner") == "#FFFFFF"
