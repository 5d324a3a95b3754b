"""
Tests for the SlotFinderService orchestration layer and the slots() entry point.
"""

import random

import pytest

from slotfinder import (
    DefaultsConfig,
    InvalidConfigurationError,
    SlotFinderService,
    SlotsOptions,
    TimeParseError,
    TimeSlot,
    slots,
    slots_as_dicts,
)


def _pairs(result):
    return [(slot.start, slot.end) for slot in result]


def test_basic_usage_with_defaults():
    """Default 30-minute slots skip both busy periods."""
    result = slots_as_dicts({
        "busy": [
            {"start": "09:00", "end": "10:30"},
            {"start": "14:00", "end": "15:30"},
        ],
    })

    assert result == [
        {"start": "08:00", "end": "08:30"},
        {"start": "08:30", "end": "09:00"},
        {"start": "10:30", "end": "11:00"},
        {"start": "11:00", "end": "11:30"},
        {"start": "11:30", "end": "12:00"},
        {"start": "12:00", "end": "12:30"},
        {"start": "12:30", "end": "13:00"},
        {"start": "13:00", "end": "13:30"},
        {"start": "13:30", "end": "14:00"},
        {"start": "15:30", "end": "16:00"},
        {"start": "16:00", "end": "16:30"},
        {"start": "16:30", "end": "17:00"},
        {"start": "17:00", "end": "17:30"},
        {"start": "17:30", "end": "18:00"},
    ]


def test_custom_slot_size_and_breaks():
    """Slots are spaced by size plus break, restarting at busy ends."""
    result = slots({
        "busy": [
            {"start": "09:00", "end": "10:30"},
            {"start": "14:00", "end": "15:30"},
        ],
        "slotSize": 45,
        "breakTime": 15,
        "startTime": "08:00",
        "endTime": "18:00",
    })

    assert _pairs(result) == [
        ("08:00", "08:45"),
        ("10:30", "11:15"),
        ("11:30", "12:15"),
        ("12:30", "13:15"),
        ("15:30", "16:15"),
        ("16:30", "17:15"),
    ]


def test_no_busy_periods_full_window_available():
    result = slots(busy=[], start_time="09:00", end_time="12:00")

    assert _pairs(result) == [
        ("09:00", "09:30"),
        ("09:30", "10:00"),
        ("10:00", "10:30"),
        ("10:30", "11:00"),
        ("11:00", "11:30"),
        ("11:30", "12:00"),
    ]


def test_empty_busy_with_defaults_fills_day():
    """An empty day yields twenty back-to-back half hours."""
    result = slots({"busy": []})

    assert len(result) == 20
    assert result[0] == TimeSlot("08:00", "08:30")
    assert result[-1] == TimeSlot("17:30", "18:00")
    for first, second in zip(result, result[1:]):
        assert first.end == second.start


def test_overlapping_busy_periods_are_merged():
    result = slots({
        "busy": [
            {"start": "09:00", "end": "10:30"},
            {"start": "10:00", "end": "11:00"},
            {"start": "10:45", "end": "12:00"},
        ],
        "startTime": "08:00",
        "endTime": "13:00",
    })

    assert _pairs(result) == [
        ("08:00", "08:30"),
        ("08:30", "09:00"),
        ("12:00", "12:30"),
        ("12:30", "13:00"),
    ]


def test_adjacent_busy_periods_are_merged():
    result = slots({
        "busy": [
            {"start": "09:00", "end": "10:00"},
            {"start": "10:00", "end": "11:00"},
        ],
        "startTime": "08:00",
        "endTime": "12:00",
    })

    assert _pairs(result) == [
        ("08:00", "08:30"),
        ("08:30", "09:00"),
        ("11:00", "11:30"),
        ("11:30", "12:00"),
    ]


def test_fully_booked_day_returns_empty_list():
    assert slots({"busy": [{"start": "08:00", "end": "18:00"}]}) == []


def test_busy_periods_outside_work_hours():
    """Busy periods straddling the window edges only trim the window."""
    result = slots({
        "busy": [
            {"start": "07:00", "end": "08:30"},
            {"start": "17:30", "end": "19:00"},
        ],
    })

    assert len(result) == 18
    assert result[0] == TimeSlot("08:30", "09:00")
    assert result[-1] == TimeSlot("17:00", "17:30")


def test_small_window_with_large_slots():
    result = slots(busy=[], slot_size=60, start_time="10:00", end_time="11:30")

    assert _pairs(result) == [("10:00", "11:00")]


def test_complex_overlapping_scenario():
    result = slots({
        "busy": [
            {"start": "11:00", "end": "12:00"},
            {"start": "13:00", "end": "14:00"},
            {"start": "09:30", "end": "11:30"},
            {"start": "13:30", "end": "15:30"},
            {"start": "09:00", "end": "10:00"},
        ],
        "startTime": "08:00",
        "endTime": "16:00",
    })

    assert _pairs(result) == [
        ("08:00", "08:30"),
        ("08:30", "09:00"),
        ("12:00", "12:30"),
        ("12:30", "13:00"),
        ("15:30", "16:00"),
    ]


def test_busy_order_does_not_matter():
    """Shuffling the busy list yields identical output."""
    busy = [
        ("14:00", "15:00"),
        ("09:00", "10:00"),
        ("11:30", "12:30"),
        ("11:45", "13:10"),
        ("16:20", "16:40"),
    ]
    expected = slots(busy=busy, slot_size=20, break_time=5)

    rng = random.Random(3)
    for _ in range(10):
        shuffled = busy[:]
        rng.shuffle(shuffled)
        assert slots(busy=shuffled, slot_size=20, break_time=5) == expected


def test_accepts_options_instance_and_snake_case():
    options = SlotsOptions(
        busy=[TimeSlot("09:00", "17:30")],
        slot_size=30,
        start_time="08:00",
        end_time="18:00",
    )

    assert _pairs(slots(options)) == [
        ("08:00", "08:30"),
        ("08:30", "09:00"),
        ("17:30", "18:00"),
    ]


def test_keyword_overrides_take_precedence():
    options = {"busy": [], "slotSize": 30, "startTime": "08:00", "endTime": "09:00"}

    assert _pairs(slots(options, slotSize=60)) == [("08:00", "09:00")]


def test_service_applies_configured_defaults():
    """Omitted options take the service's defaults rather than the built-in ones."""
    service = SlotFinderService(
        defaults=DefaultsConfig(slot_size=60, break_time=30, start_time="09:00", end_time="13:00")
    )

    result = service.find_slots({"busy": [{"start": "11:00", "end": "11:15"}]})

    assert _pairs(result) == [("09:00", "10:00"), ("11:15", "12:15")]


def test_resolve_options_fills_every_field():
    resolved = SlotFinderService().resolve_options({"busy": []})

    assert resolved.slot_size == 30
    assert resolved.break_time == 0
    assert resolved.start_time == "08:00"
    assert resolved.end_time == "18:00"


@pytest.mark.parametrize(
    "overrides",
    [
        {"slotSize": 0},
        {"slotSize": -30},
        {"breakTime": -1},
        {"busy": [{"start": "09:00"}]},
        {"unknown": True},
    ],
)
def test_invalid_options_raise_configuration_error(overrides):
    options = {"busy": []}
    options.update(overrides)

    with pytest.raises(InvalidConfigurationError):
        slots(options)


def test_missing_busy_raises_configuration_error():
    with pytest.raises(InvalidConfigurationError):
        slots({"slotSize": 30})


@pytest.mark.parametrize(
    "options",
    [
        {"busy": [], "startTime": "8am"},
        {"busy": [], "endTime": "18-00"},
        {"busy": [{"start": "09:00", "end": "ten"}]},
    ],
)
def test_malformed_times_raise_parse_error(options):
    with pytest.raises(TimeParseError):
        slots(options)


def test_snake_case_keyword_overrides_camel_case_mapping():
    """A keyword in either key style replaces the same option from the mapping."""
    options = {"busy": [], "slotSize": 30, "startTime": "08:00", "endTime": "09:00"}

    assert _pairs(slots(options, slot_size=60)) == [("08:00", "09:00")]
    assert _pairs(slots({"busy": [], "end_time": "09:00"}, endTime="08:30")) == [("08:00", "08:30")]


def test_alias_override_on_options_instance():
    options = SlotsOptions(busy=[], slot_size=30, start_time="08:00", end_time="09:00")

    assert _pairs(slots(options, slotSize=60)) == [("08:00", "09:00")]


@pytest.mark.parametrize("options", ["busy", 42, [("busy", [])]])
def test_non_mapping_options_raise_configuration_error(options):
    with pytest.raises(InvalidConfigurationError, match="mapping"):
        slots(options)
