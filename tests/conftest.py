import pytest
from click.testing import CliRunner

from wallclock import (
    Duration,
    RegionZone,
    RuleTable,
    StaticRules,
    UTCDateTime,
    hours,
)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def eu_2017() -> RuleTable:
    """Central European rules for 2017 only, independent of the
    installed tz database."""
    return RuleTable(
        hours(1),
        [
            (UTCDateTime(2017, 3, 26, 1), hours(2)),
            (UTCDateTime(2017, 10, 29, 1), hours(1)),
        ],
        name="Test/Central",
    )


@pytest.fixture
def half_hour_gap() -> RuleTable:
    # clocks go from 02:00 to 02:30 on 2017-10-01, like Lord Howe Island
    return RuleTable(
        Duration(hours=10, minutes=30),
        [(UTCDateTime(2017, 9, 30, 15, 30), hours(11))],
        name="Test/HalfHour",
    )


@pytest.fixture
def rules(eu_2017, half_hour_gap) -> StaticRules:
    return StaticRules(
        {"Test/Central": eu_2017, "Test/HalfHour": half_hour_gap}
    )


@pytest.fixture
def central(eu_2017) -> RegionZone:
    return RegionZone("Test/Central", eu_2017)
