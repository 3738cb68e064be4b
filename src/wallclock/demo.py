"""Walk a zone across the 2017 EU daylight saving transitions.

Prints one value per line, in order:

- the naive time 02:30 on the night the clocks go forward
- 01:30, 02:30 and 03:30 that night in the zone (02:30 moves to 03:30)
- the same 02:30 under a fixed +02:00 offset, and under ``UTC+2``
- the naive time 03:30 on the night the clocks go back
- 02:30 that night in the zone, and exactly one hour later
  (02:30 again, at the other offset)
- with ``--arithmetic``: 01:00 before the spring transition plus
  24 hours, and plus one calendar day
"""

from __future__ import annotations

from typing import Iterator, NamedTuple

import click
import structlog

from wallclock import (
    DateTime,
    FixedOffset,
    NaiveDateTime,
    Period,
    RegionZone,
    UnknownZone,
    ZonedDateTime,
    __version__,
    hours,
    zone,
)
from wallclock._logging import configure_logging

log = structlog.get_logger(__name__)

DEFAULT_ZONE = "Europe/Warsaw"


class Step(NamedTuple):
    label: str
    value: DateTime
    # the wall time asked for, when the value was resolved from one
    requested: NaiveDateTime | None = None


def transition_walk(
    region: str | RegionZone | FixedOffset = DEFAULT_ZONE,
    *,
    arithmetic: bool = False,
) -> Iterator[Step]:
    """The demo values, in print order.

    ``region`` should follow EU rules: clocks forward at 01:00 UTC on
    2017-03-26, back at 01:00 UTC on 2017-10-29.
    """
    z = zone(region) if isinstance(region, str) else region

    spring = NaiveDateTime(2017, 3, 26, 2, 30)
    yield Step("naive, spring", spring)
    for hour in (1, 2, 3):
        wall = spring.replace(hour=hour)
        yield Step(f"zoned {hour:02}:30, spring", wall.assume_zoned(z), wall)

    # A fixed offset has no rules, so nothing moves 02:30 out of the gap
    fixed = FixedOffset(hours(2))
    yield Step("fixed offset", spring.assume_zoned(fixed), spring)
    yield Step("prefixed offset", spring.assume_zoned("UTC+2"), spring)

    yield Step("naive, autumn", NaiveDateTime(2017, 10, 29, 3, 30))
    wall = NaiveDateTime(2017, 10, 29, 2, 30)
    autumn = wall.assume_zoned(z)
    yield Step("zoned 02:30, autumn", autumn, wall)
    yield Step("one hour later", autumn + hours(1))

    if arithmetic:
        wall = NaiveDateTime(2017, 3, 26, 1)
        before = wall.assume_zoned(z)
        yield Step("plus 24 hours", before + hours(24))
        yield Step("plus one day", before + Period(days=1))


def _parse_zone(
    ctx: click.Context, param: click.Parameter, value: str
) -> RegionZone | FixedOffset:
    try:
        return zone(value)
    except UnknownZone as e:
        raise click.BadParameter(f"unknown zone {value!r}") from e


@click.command()
@click.version_option(version=__version__, prog_name="wallclock")
@click.option(
    "--zone",
    "region",
    default=DEFAULT_ZONE,
    show_default=True,
    envvar="WALLCLOCK_ZONE",
    callback=_parse_zone,
    help="Zone to walk. Transitions are those of the EU in 2017.",
)
@click.option(
    "--arithmetic",
    is_flag=True,
    help="Also contrast adding 24 hours with adding one day.",
)
@click.option(
    "-v", "--verbose", is_flag=True, help="Log each resolution to stderr."
)
@click.option(
    "--log-json",
    is_flag=True,
    envvar="WALLCLOCK_LOG_JSON",
    help="Structured JSON log output to stderr.",
)
def main(
    region: RegionZone | FixedOffset,
    arithmetic: bool,
    verbose: bool,
    log_json: bool,
) -> None:
    """Show how zoned times behave when the clocks change."""
    configure_logging(verbose=verbose, log_json=log_json)
    for step in transition_walk(region, arithmetic=arithmetic):
        requested = step.requested
        if requested is not None and isinstance(step.value, ZonedDateTime):
            log.debug(
                "resolved",
                step=step.label,
                requested=requested.canonical_format(),
                resolved=step.value.canonical_format(),
                kind=step.value.zone.classify(requested),
                shifted=step.value.naive() != requested,
            )
        else:
            log.debug(
                "computed",
                step=step.label,
                value=step.value.canonical_format(),
            )
        click.echo(step.value.canonical_format())
