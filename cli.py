import argparse
import asyncio
import logging

from planner.config import Config
from planner.planner import HolidayPlanner
from planner.sources import CalendarificClient, NagerCountryClient, save_country_table
from planner.utils import GRADES, MONTHS
from planner.weeks import WeekAlignment

logger = logging.getLogger(__name__)


async def fetch_remote(codes, years):
    client = CalendarificClient()
    batches = await asyncio.gather(*(client.fetch_all(codes, year) for year in sorted(years)))
    return [h for batch in batches for h in batch]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Holiday lesson plan generator")
    parser.add_argument("--grades", nargs="*", default=None, choices=GRADES)
    parser.add_argument("--month", type=str, default=None, choices=MONTHS)
    parser.add_argument("--year", type=int, default=None)
    parser.add_argument("--semester1", nargs=2, metavar=("START", "END"))
    parser.add_argument("--semester2", nargs=2, metavar=("START", "END"))
    parser.add_argument("--summer", nargs=2, metavar=("START", "END"))
    parser.add_argument("--countries", nargs="*", default=[])
    parser.add_argument("--all-countries", action="store_true")
    parser.add_argument("--alignment", choices=[a.value for a in WeekAlignment], default=None)
    parser.add_argument("--fetch", nargs="*", default=[], metavar="CODE",
                        help="also fetch these country codes from Calendarific")
    parser.add_argument("--list-countries", action="store_true")
    parser.add_argument("--refresh-countries", metavar="PATH",
                        help="download the Calendarific country table to PATH and exit")
    parser.add_argument("--nager-countries", action="store_true",
                        help="use the Nager.Date country list instead of the bundled table")
    parser.add_argument("--out", type=str, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=Config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.refresh_countries:
        table = asyncio.run(CalendarificClient().fetch_country_table())
        save_country_table(table, args.refresh_countries)
        return 0

    country_table = None
    if args.nager_countries:
        country_table = asyncio.run(NagerCountryClient().country_table())
        if not len(country_table):
            logger.warning("Nager.Date returned no countries, using the bundled table")
            country_table = None

    planner = HolidayPlanner(country_table=country_table, alignment=args.alignment, year=args.year)
    if args.grades is not None:
        planner.grades = list(args.grades)
    if args.month:
        planner.select_month(args.month)
    for label, value in (("Semester 1", args.semester1), ("Semester 2", args.semester2), ("Summer", args.summer)):
        if value:
            planner.set_timeframe(label, *value)

    extra = asyncio.run(fetch_remote(args.fetch, planner.relevant_years())) if args.fetch else None
    planner.load_holidays(extra)

    if args.list_countries:
        for name in planner.available_countries():
            print(name)
        return 0

    if args.all_countries:
        planner.countries = planner.available_countries()
    elif args.countries:
        planner.countries = list(args.countries)

    planner.generate_and_save(out_filename=args.out)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
