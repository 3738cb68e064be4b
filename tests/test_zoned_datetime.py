from copy import copy, deepcopy

import pytest

from wallclock import (
    Ambiguous,
    DoesntExistInZone,
    FixedOffset,
    InvalidFormat,
    InvalidOffsetForZone,
    NaiveDateTime,
    Period,
    RegionZone,
    UnknownZone,
    UTCDateTime,
    ZonedDateTime,
    hours,
    minutes,
    zone,
)

from .common import AlwaysEqual, AlwaysLarger, AlwaysSmaller, NeverEqual


class TestInit:

    def test_basic(self):
        d = ZonedDateTime(2017, 6, 1, 12, 30, 5, 450, tz="Europe/Warsaw")
        assert d.year == 2017
        assert d.month == 6
        assert d.day == 1
        assert d.hour == 12
        assert d.minute == 30
        assert d.second == 5
        assert d.microsecond == 450
        assert d.tz == "Europe/Warsaw"
        assert d.zone == zone("Europe/Warsaw")
        assert d.offset == hours(2)

    def test_unknown_zone(self):
        with pytest.raises(UnknownZone):
            ZonedDateTime(2017, 6, 1, tz="Mars/Olympus_Mons")

    def test_zone_object(self, central):
        d = ZonedDateTime(2017, 6, 1, tz=central)
        assert d.zone is central
        assert d.tz == "Test/Central"

    @pytest.mark.parametrize(
        "hour, expected",
        [
            (1, "2017-03-26T01:30:00+01:00[Europe/Warsaw]"),
            (2, "2017-03-26T03:30:00+02:00[Europe/Warsaw]"),
            (3, "2017-03-26T03:30:00+02:00[Europe/Warsaw]"),
        ],
    )
    def test_spring_forward(self, hour, expected):
        d = ZonedDateTime(2017, 3, 26, hour, 30, tz="Europe/Warsaw")
        assert d.canonical_format() == expected

    def test_gap_and_the_time_after_it_are_one_moment(self):
        skipped = ZonedDateTime(2017, 3, 26, 2, 30, tz="Europe/Warsaw")
        after = ZonedDateTime(2017, 3, 26, 3, 30, tz="Europe/Warsaw")
        assert skipped == after
        assert skipped.exact_eq(after)

    def test_fixed_offset_takes_the_time_literally(self):
        fixed = ZonedDateTime(2017, 3, 26, 2, 30, tz="+02:00")
        region = ZonedDateTime(2017, 3, 26, 2, 30, tz="Europe/Warsaw")
        assert fixed.canonical_format() == "2017-03-26T02:30:00+02:00"
        assert fixed.as_utc() == UTCDateTime(2017, 3, 26, 0, 30)
        assert region.as_utc() == UTCDateTime(2017, 3, 26, 1, 30)
        assert region - fixed == hours(1)

    @pytest.mark.parametrize(
        "hour, offset",
        [(1, "+01:00"), (3, "+02:00")],
    )
    def test_fixed_offset_agrees_outside_the_gap(self, hour, offset):
        fixed = ZonedDateTime(2017, 3, 26, hour, 30, tz=offset)
        region = ZonedDateTime(2017, 3, 26, hour, 30, tz="Europe/Warsaw")
        assert fixed == region
        assert fixed.naive() == region.naive()
        assert fixed.offset == region.offset

    def test_resolving_a_gap_twice(self):
        first = ZonedDateTime(2017, 3, 26, 2, 30, tz="Europe/Warsaw")
        second = ZonedDateTime(2017, 3, 26, 2, 30, tz="Europe/Warsaw")
        assert first.exact_eq(second)
        wall = NaiveDateTime(2017, 3, 26, 2, 30)
        assert wall.assume_zoned("Europe/Warsaw").exact_eq(
            wall.assume_zoned("Europe/Warsaw")
        )

    def test_prefixed_offset(self):
        d = ZonedDateTime(2017, 3, 26, 2, 30, tz="UTC+2")
        assert d.canonical_format() == "2017-03-26T02:30:00+02:00[UTC+02:00]"
        assert d.zone == FixedOffset(hours(2), "UTC")
        assert d == ZonedDateTime(2017, 3, 26, 2, 30, tz="+02:00")
        assert not d.exact_eq(ZonedDateTime(2017, 3, 26, 2, 30, tz="+02:00"))

    def test_fall_back_defaults_to_earlier(self):
        d = ZonedDateTime(2017, 10, 29, 2, 30, tz="Europe/Warsaw")
        assert d.canonical_format() == (
            "2017-10-29T02:30:00+02:00[Europe/Warsaw]"
        )

    def test_synthetic_rules(self, central):
        d = ZonedDateTime(2017, 3, 26, 2, 30, tz=central)
        assert d.canonical_format() == (
            "2017-03-26T03:30:00+02:00[Test/Central]"
        )

    def test_half_hour_gap(self, rules):
        d = ZonedDateTime(2017, 10, 1, 2, 15, tz=zone("Test/HalfHour", rules))
        assert d.canonical_format() == (
            "2017-10-01T02:45:00+11:00[Test/HalfHour]"
        )

    def test_new_york(self):
        gap = ZonedDateTime(2017, 3, 12, 2, 30, tz="America/New_York")
        assert gap.canonical_format() == (
            "2017-03-12T03:30:00-04:00[America/New_York]"
        )
        overlap = ZonedDateTime(2017, 11, 5, 1, 30, tz="America/New_York")
        assert overlap.offset == hours(-4)
        later = overlap + hours(1)
        assert later.canonical_format() == (
            "2017-11-05T01:30:00-05:00[America/New_York]"
        )


class TestDisambiguate:

    @pytest.mark.parametrize(
        "disambiguate, expected",
        [
            ("compatible", "2017-03-26T03:30:00+02:00"),
            ("later", "2017-03-26T03:30:00+02:00"),
            ("earlier", "2017-03-26T01:30:00+01:00"),
        ],
    )
    def test_gap(self, disambiguate, expected, central):
        for tz in ("Europe/Warsaw", central):
            d = ZonedDateTime(
                2017, 3, 26, 2, 30, tz=tz, disambiguate=disambiguate
            )
            assert d.canonical_format().startswith(expected)

    @pytest.mark.parametrize(
        "disambiguate, offset",
        [("compatible", hours(2)), ("earlier", hours(2)), ("later", hours(1))],
    )
    def test_overlap(self, disambiguate, offset, central):
        for tz in ("Europe/Warsaw", central):
            d = ZonedDateTime(
                2017, 10, 29, 2, 30, tz=tz, disambiguate=disambiguate
            )
            assert d.naive() == NaiveDateTime(2017, 10, 29, 2, 30)
            assert d.offset == offset

    def test_raise(self):
        with pytest.raises(DoesntExistInZone, match="Europe/Warsaw"):
            ZonedDateTime(
                2017, 3, 26, 2, 30, tz="Europe/Warsaw", disambiguate="raise"
            )
        with pytest.raises(Ambiguous, match="2017-10-29 02:30:00"):
            ZonedDateTime(
                2017, 10, 29, 2, 30, tz="Europe/Warsaw", disambiguate="raise"
            )

    def test_raise_is_fine_for_unique_times(self):
        d = ZonedDateTime(
            2017, 3, 26, 3, 30, tz="Europe/Warsaw", disambiguate="raise"
        )
        assert d.offset == hours(2)

    def test_fixed_offset_ignores_it(self):
        d = ZonedDateTime(
            2017, 3, 26, 2, 30, tz="+02:00", disambiguate="raise"
        )
        assert d.hour == 2

    @pytest.mark.parametrize("disambiguate", ["Later", "latr", "", None])
    @pytest.mark.parametrize(
        "hour, day, tz",
        [
            (2, 26, "Europe/Warsaw"),
            (3, 26, "Europe/Warsaw"),
            (2, 26, "+02:00"),
        ],
    )
    def test_invalid(self, disambiguate, hour, day, tz):
        with pytest.raises(ValueError, match="disambiguate"):
            ZonedDateTime(
                2017, 3, day, hour, 30, tz=tz, disambiguate=disambiguate
            )

    def test_invalid_in_overlap(self):
        with pytest.raises(ValueError, match="latr"):
            ZonedDateTime(
                2017, 10, 29, 2, 30, tz="Europe/Warsaw", disambiguate="latr"
            )

    def test_invalid_in_replace_and_assume_zoned(self):
        d = ZonedDateTime(2017, 3, 26, 1, 30, tz="Europe/Warsaw")
        with pytest.raises(ValueError, match="disambiguate"):
            d.replace(hour=2, disambiguate="Later")
        with pytest.raises(ValueError, match="disambiguate"):
            d.naive().assume_zoned("Europe/Warsaw", disambiguate="Later")


class TestFallBack:

    def test_one_hour_later_repeats_the_wall_time(self):
        d = ZonedDateTime(2017, 10, 29, 2, 30, tz="Europe/Warsaw")
        later = d + hours(1)
        assert later.canonical_format() == (
            "2017-10-29T02:30:00+01:00[Europe/Warsaw]"
        )
        assert later.naive() == d.naive()
        assert later - d == hours(1)
        assert later != d
        assert later > d
        assert not later.exact_eq(d)

    def test_is_ambiguous(self):
        d = ZonedDateTime(2017, 10, 29, 2, 30, tz="Europe/Warsaw")
        assert d.is_ambiguous()
        assert (d + hours(1)).is_ambiguous()
        assert not (d + hours(2)).is_ambiguous()
        fixed = ZonedDateTime(2017, 10, 29, 2, 30, tz="+02:00")
        assert not fixed.is_ambiguous()

    def test_hash_follows_the_moment(self):
        d = ZonedDateTime(2017, 10, 29, 2, 30, tz="Europe/Warsaw")
        later = d + hours(1)
        assert hash(d) == hash(d.as_utc())
        assert hash(later) == hash(later.as_utc())
        assert hash(later) == hash(UTCDateTime(2017, 10, 29, 1, 30))


@pytest.mark.parametrize(
    "d",
    [
        ZonedDateTime(2017, 3, 26, 2, 30, tz="Europe/Warsaw"),
        ZonedDateTime(2017, 10, 29, 2, 30, tz="Europe/Warsaw"),
        ZonedDateTime(
            2017, 10, 29, 2, 30, tz="Europe/Warsaw", disambiguate="later"
        ),
        ZonedDateTime(2017, 3, 26, 2, 30, tz="UTC+2"),
        ZonedDateTime(2017, 3, 26, 2, 30, tz="-03:30"),
    ],
)
class TestStability:

    def test_resolving_again_changes_nothing(self, d):
        again = ZonedDateTime(
            d.year,
            d.month,
            d.day,
            d.hour,
            d.minute,
            d.second,
            d.microsecond,
            tz=d.zone,
            disambiguate="later" if d.offset == hours(1) else "earlier",
        )
        assert again.exact_eq(d)

    def test_through_utc(self, d):
        assert d.as_utc().as_zoned(d.zone).exact_eq(d)

    def test_through_canonical_format(self, d):
        parsed = ZonedDateTime.from_canonical_format(d.canonical_format())
        assert parsed.exact_eq(d)


class TestEquality:

    def test_same_moment(self):
        d = ZonedDateTime(2017, 3, 26, 3, 30, tz="Europe/Warsaw")
        same = ZonedDateTime(2017, 3, 25, 21, 30, tz="America/New_York")
        assert d == same
        assert hash(d) == hash(same)
        assert not d.exact_eq(same)
        assert d == UTCDateTime(2017, 3, 26, 1, 30)

    def test_other_types(self):
        d = ZonedDateTime(2017, 3, 26, 3, 30, tz="Europe/Warsaw")
        assert d != NaiveDateTime(2017, 3, 26, 3, 30)
        assert not d == NeverEqual()
        assert d == AlwaysEqual()

    def test_comparison(self):
        d = ZonedDateTime(2017, 10, 29, 2, 30, tz="Europe/Warsaw")
        later = d + hours(1)
        assert d < later
        assert d <= later
        assert later > d
        assert later >= d
        assert d < UTCDateTime(2017, 10, 29, 1)
        assert d > UTCDateTime(2017, 10, 29)
        assert d < AlwaysLarger()
        assert d > AlwaysSmaller()

        with pytest.raises(TypeError):
            d < NaiveDateTime(2017, 10, 29)  # type: ignore[operator]


class TestArithmetic:

    def test_spring_duration_vs_period(self):
        d = ZonedDateTime(2017, 3, 26, 1, tz="Europe/Warsaw")
        exact = d + hours(24)
        calendar = d + Period(days=1)
        assert exact.canonical_format() == (
            "2017-03-27T02:00:00+02:00[Europe/Warsaw]"
        )
        assert calendar.canonical_format() == (
            "2017-03-27T01:00:00+02:00[Europe/Warsaw]"
        )
        assert calendar - d == hours(23)

    def test_autumn_duration_vs_period(self):
        d = ZonedDateTime(2017, 10, 28, 12, tz="Europe/Warsaw")
        exact = d + hours(24)
        calendar = d + Period(days=1)
        assert exact.canonical_format() == (
            "2017-10-29T11:00:00+01:00[Europe/Warsaw]"
        )
        assert calendar.canonical_format() == (
            "2017-10-29T12:00:00+01:00[Europe/Warsaw]"
        )
        assert calendar - d == hours(25)

    def test_period_into_a_gap(self):
        d = ZonedDateTime(2017, 3, 25, 2, 30, tz="Europe/Warsaw")
        assert (d + Period(days=1)).canonical_format() == (
            "2017-03-26T03:30:00+02:00[Europe/Warsaw]"
        )

    def test_period_into_an_overlap(self):
        d = ZonedDateTime(2017, 10, 28, 2, 30, tz="Europe/Warsaw")
        assert (d + Period(days=1)).offset == hours(2)

    def test_subtract_period(self):
        d = ZonedDateTime(2017, 3, 27, 2, 30, tz="Europe/Warsaw")
        assert (d - Period(days=1)).canonical_format() == (
            "2017-03-26T03:30:00+02:00[Europe/Warsaw]"
        )
        assert d - Period(weeks=1) == ZonedDateTime(
            2017, 3, 20, 2, 30, tz="Europe/Warsaw"
        )

    def test_zero_period(self):
        d = ZonedDateTime(2017, 10, 29, 2, 30, tz="Europe/Warsaw") + hours(1)
        assert d + Period() is d

    def test_subtract_duration(self):
        d = ZonedDateTime(2017, 3, 26, 3, tz="Europe/Warsaw")
        assert (d - minutes(1)).canonical_format() == (
            "2017-03-26T01:59:00+01:00[Europe/Warsaw]"
        )

    def test_fixed_offset(self):
        d = ZonedDateTime(2017, 3, 26, 1, tz="+01:00")
        assert (d + hours(24)).hour == 1
        assert (d + Period(days=1)).hour == 1

    def test_difference_with_utc(self):
        d = ZonedDateTime(2017, 3, 26, 3, tz="Europe/Warsaw")
        assert d - UTCDateTime(2017, 3, 26) == hours(1)

    def test_invalid(self):
        d = ZonedDateTime(2017, 3, 26, tz="Europe/Warsaw")
        with pytest.raises(TypeError, match="unsupported operand"):
            d + 1  # type: ignore[operator]
        with pytest.raises(TypeError, match="unsupported operand"):
            d - NaiveDateTime(2017, 3, 26)  # type: ignore[operator]


class TestFromCanonicalFormat:

    def test_region(self):
        d = ZonedDateTime.from_canonical_format(
            "2017-10-29T02:30:00+01:00[Europe/Warsaw]"
        )
        assert d.offset == hours(1)
        assert d.is_ambiguous()

    def test_space_separator(self):
        d = ZonedDateTime.from_canonical_format(
            "2017-06-01 12:00:00+02:00[Europe/Warsaw]"
        )
        assert d == UTCDateTime(2017, 6, 1, 10)

    def test_plain_offset(self):
        d = ZonedDateTime.from_canonical_format("2017-03-26T02:30:00+02:00")
        assert d.zone == FixedOffset(hours(2))

    def test_prefixed_offset(self):
        d = ZonedDateTime.from_canonical_format(
            "2017-03-26T02:30:00+02:00[UTC+02:00]"
        )
        assert d.tz == "UTC+02:00"

    def test_custom_rules(self, rules, eu_2017):
        d = ZonedDateTime.from_canonical_format(
            "2017-03-26T03:30:00+02:00[Test/Central]", rules
        )
        assert d.zone == RegionZone("Test/Central", eu_2017)

    @pytest.mark.parametrize(
        "s",
        [
            # summer in Warsaw is +02:00
            "2017-06-01T12:00:00+01:00[Europe/Warsaw]",
            # skipped, at either offset
            "2017-03-26T02:30:00+01:00[Europe/Warsaw]",
            "2017-03-26T02:30:00+02:00[Europe/Warsaw]",
            "2017-03-26T02:30:00+01:00[UTC+02:00]",
        ],
    )
    def test_invalid_offset(self, s):
        with pytest.raises(InvalidOffsetForZone):
            ZonedDateTime.from_canonical_format(s)

    @pytest.mark.parametrize(
        "s",
        [
            "2017-03-26T02:30:00[Europe/Warsaw]",
            "2017-03-26T02:30:00+02:00[]",
            "2017-03-26T02:30+02:00[Europe/Warsaw]",
            "2017-03-26T02:30:00Z",
            "garbage",
        ],
    )
    def test_invalid_format(self, s):
        with pytest.raises(InvalidFormat):
            ZonedDateTime.from_canonical_format(s)

    def test_unknown_zone(self):
        with pytest.raises(UnknownZone):
            ZonedDateTime.from_canonical_format(
                "2017-03-26T02:30:00+02:00[Mars/Olympus_Mons]"
            )


class TestReplace:

    def test_resolves_again(self):
        d = ZonedDateTime(2017, 3, 25, 2, 30, tz="Europe/Warsaw")
        assert d.replace(day=26).canonical_format() == (
            "2017-03-26T03:30:00+02:00[Europe/Warsaw]"
        )
        assert d.replace(day=26, disambiguate="earlier").offset == hours(1)

    def test_raise(self):
        d = ZonedDateTime(2017, 3, 26, 1, 30, tz="Europe/Warsaw")
        with pytest.raises(DoesntExistInZone):
            d.replace(hour=2, disambiguate="raise")

    def test_zone(self):
        d = ZonedDateTime(2017, 3, 26, 1, 30, tz="Europe/Warsaw")
        moved = d.replace(tz="America/New_York")
        assert moved.canonical_format() == (
            "2017-03-26T01:30:00-04:00[America/New_York]"
        )

    def test_fold_and_tzinfo_not_allowed(self):
        d = ZonedDateTime(2017, 3, 26, tz="Europe/Warsaw")
        with pytest.raises(TypeError, match="fold"):
            d.replace(fold=1)
        with pytest.raises(TypeError, match="tzinfo"):
            d.replace(tzinfo=None)


def test_timestamp():
    d = ZonedDateTime.from_timestamp(1_509_238_800, tz="Europe/Warsaw")
    assert d.canonical_format() == "2017-10-29T02:00:00+01:00[Europe/Warsaw]"
    assert d.timestamp() == 1_509_238_800
    assert ZonedDateTime(
        2017, 10, 29, 2, tz="Europe/Warsaw"
    ).timestamp() == 1_509_235_200


def test_now():
    d = ZonedDateTime.now("Europe/Warsaw")
    assert d.tz == "Europe/Warsaw"
    assert d > UTCDateTime(2017, 1, 1)


def test_naive_and_date():
    d = ZonedDateTime(2017, 10, 29, 2, 30, tz="Europe/Warsaw") + hours(1)
    assert d.naive() == NaiveDateTime(2017, 10, 29, 2, 30)
    assert d.date().canonical_format() == "2017-10-29"


def test_repr():
    d = ZonedDateTime(2017, 3, 26, 2, 30, tz="Europe/Warsaw")
    assert repr(d) == "ZonedDateTime(2017-03-26 03:30:00+02:00[Europe/Warsaw])"
    assert str(d) == "2017-03-26 03:30:00+02:00[Europe/Warsaw]"


def test_copy():
    d = ZonedDateTime(2017, 3, 26, tz="Europe/Warsaw")
    assert copy(d) is d
    assert deepcopy(d) is d
