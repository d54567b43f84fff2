import logging
import os
from datetime import date

from openpyxl import Workbook
from openpyxl.styles import PatternFill, Alignment, Font, Border, Side
from openpyxl.utils import get_column_letter

from .config import Config
from .countries import HolidayNormalizer
from .document import LessonPlanDocument
from .matcher import filter_countries, important_dates
from .models import COLUMN_TITLES, LessonPlanRow, LessonPlanTable, Timeframe
from .sources import load_bundled_holidays, load_country_table
from .utils import GRADES, month_index, years_between
from .weeks import WeekAlignment, month_timeframe, weeks_for_timeframe

logger = logging.getLogger(__name__)

SELECTION_MODES = ("none", "all")


class HolidayPlanner:
    """
    Weekly lesson plans annotated with holidays.
    - grades x timeframes -> one table each
    - timeframe = the selected month, else the active custom timeframes
    - each week row lists the holidays of the selected countries
    """
    COLUMNS = ("week", "lessons", "concepts", "holiday_integrations", "assessment", "important_dates")
    COLUMN_WIDTHS = (24, 30, 30, 30, 24, 48)
    TIMEFRAME_LABELS = ("Semester 1", "Semester 2", "Summer")

    def __init__(self, country_table=None, base_holidays=None, alignment=None,
                 default_selection=None, year=None):
        if country_table is None:
            country_table = load_country_table()
        self.normalizer = HolidayNormalizer(country_table)
        # raw records; loaded lazily from the bundled JSON when not given
        self._base_holidays = base_holidays
        self.alignment = WeekAlignment.parse(alignment or Config.WEEK_ALIGNMENT)

        mode = (default_selection or Config.DEFAULT_SELECTION).lower()
        if mode not in SELECTION_MODES:
            raise ValueError(f"default_selection must be one of {SELECTION_MODES}, got {mode!r}")
        self.default_selection = mode

        self.year = year or date.today().year
        self.month = None
        self.timeframes = [Timeframe(label) for label in self.TIMEFRAME_LABELS]
        self.grades = list(GRADES) if mode == "all" else []
        self.countries = []
        self.holidays = []
        self._extra = []
        self._loaded_years = None
        self._document = LessonPlanDocument()
        self.COLORS = {"header": "CD3C32", "holiday": "FFE699"}

    # selection

    def select_month(self, month, year=None):
        """Pick a single month (name or 1-12); None clears it."""
        if month is not None:
            month = month if isinstance(month, int) else month_index(month)
            if not 1 <= month <= 12:
                raise ValueError(f"Month out of range: {month}")
        if year is not None:
            self.year = int(year)
        self.month = month
        self._refresh_holidays()

    def set_timeframe(self, label, start, end):
        for i, tf in enumerate(self.timeframes):
            if tf.label == label:
                self.timeframes[i] = Timeframe(label, start, end)
                self._refresh_holidays()
                return
        raise ValueError(f"Unknown timeframe {label!r} (expected one of {self.TIMEFRAME_LABELS})")

    def toggle_grade(self, grade):
        grade = str(grade)
        if grade in self.grades:
            self.grades.remove(grade)
        else:
            self.grades.append(grade)

    def toggle_country(self, country):
        if country in self.countries:
            self.countries.remove(country)
        else:
            self.countries.append(country)

    # holidays

    def active_timeframes(self):
        if self.month:
            return [month_timeframe(self.year, self.month)]
        return list(self.timeframes)

    def relevant_years(self):
        years = set()
        for tf in self.timeframes:
            if tf.is_active:
                years |= years_between(tf.start_date, tf.end_date)
        if self.month:
            years.add(self.year)
        if not years:
            years = {self.year, self.year + 1}
        return years

    def load_holidays(self, extra=None):
        """Reload and normalize holidays for relevant_years(); replaces the previous set."""
        if self._base_holidays is None:
            self._base_holidays = load_bundled_holidays()
        years = self.relevant_years()
        self._extra = list(extra or [])
        self._loaded_years = years
        raw = list(self._base_holidays) + self._extra
        self.holidays = [self.normalizer.normalize(h) for h in raw if h.date.year in years]
        logger.info(f"{len(self.holidays)} holidays loaded for years {sorted(years)}")

        if self.default_selection == "all" and not self.countries:
            self.countries = self.available_countries()
        return self.holidays

    def _refresh_holidays(self):
        """Reload once the year set moved away from the loaded one; no-op before the first load."""
        if self._loaded_years is not None and self.relevant_years() != self._loaded_years:
            self.load_holidays(self._extra)

    def available_countries(self):
        return sorted({h.country for h in self.holidays})

    # report

    def _build_table(self, tf, grade, holidays):
        label = f"{tf.label} – Grade {grade}" if grade else tf.label
        rows = []
        for bucket in weeks_for_timeframe(tf, self.alignment):
            rows.append(LessonPlanRow(bucket, important_dates=important_dates(holidays, bucket)))
        return LessonPlanTable(label, tf, grade or None, rows)

    def generate(self):
        """Build a fresh document for every grade x active timeframe."""
        self._refresh_holidays()
        filtered = filter_countries(self.holidays, self.countries)
        grades = self.grades or [""]
        tables = []
        for grade in grades:
            for tf in self.active_timeframes():
                if not tf.is_active:
                    if tf.start or tf.end:
                        logger.warning(f"Skipping timeframe {tf.label!r}: invalid dates {tf.start!r}..{tf.end!r}")
                    continue
                table = self._build_table(tf, grade, filtered)
                if not table.rows:
                    logger.warning(f"Skipping timeframe {tf.label!r}: start is after end")
                    continue
                tables.append(table)
        self._document = LessonPlanDocument(tables)
        logger.info(f"Generated {len(tables)} lesson plan tables")
        return self._document

    @property
    def document(self):
        return self._document

    def edit(self, table_label, week_index, field_name, value):
        self._document.set(table_label, week_index, field_name, value)

    # export

    def save_xlsx(self, filename=None):
        if filename is None:
            filename = f"lesson_plan_{self.year}.xlsx"
        wb = Workbook()
        ws = wb.active
        ws.title = "Lesson Plans"

        border = Border(left=Side(style="thin"), right=Side(style="thin"),
                        top=Side(style="thin"), bottom=Side(style="thin"))
        wrap = Alignment(wrap_text=True, vertical="top")
        bold = Font(bold=True)
        hdr_fill = PatternFill("solid", fgColor=self.COLORS["header"])
        hol_fill = PatternFill("solid", fgColor=self.COLORS["holiday"])

        for i, width in enumerate(self.COLUMN_WIDTHS, 1):
            ws.column_dimensions[get_column_letter(i)].width = width

        title_rows = None
        row = 1
        for table in self._document:
            ws.cell(row=row, column=1, value=table.label).font = Font(bold=True, size=14)
            row += 1
            if not title_rows:
                title_rows = f"{row}:{row}"
            for c, key in enumerate(self.COLUMNS, 1):
                cell = ws.cell(row=row, column=c, value=COLUMN_TITLES[key])
                cell.font = Font(bold=True, color="FFFFFF")
                cell.fill = hdr_fill
                cell.border = border
            row += 1
            for r in table.rows:
                for c, key in enumerate(self.COLUMNS, 1):
                    cell = ws.cell(row=row, column=c, value=getattr(r, key) or None)
                    cell.alignment = wrap
                    cell.border = border
                    if key == "week":
                        cell.font = bold
                    if key == "important_dates" and r.important_dates:
                        cell.fill = hol_fill
                row += 1
            row += 1

        if title_rows:
            # header of the first table repeats on every printed page
            ws.print_title_rows = title_rows
        ws.page_setup.orientation = ws.ORIENTATION_LANDSCAPE
        ws.page_setup.fitToWidth = 1
        ws.page_setup.fitToHeight = 0
        ws.sheet_properties.pageSetUpPr.fitToPage = True
        ws.print_options.gridLines = False

        wb.save(filename)
        logger.info(f"Saved: {filename}")
        return filename

    def generate_and_save(self, out_filename=None):
        self.generate()

        if out_filename is None:
            base_name = f"lesson_plan_{self.year}"
            out_filename = f"{base_name}.xlsx"

            # file exists -> _v1, _v2, ...
            version = 1
            while os.path.exists(out_filename):
                out_filename = f"{base_name}_v{version}.xlsx"
                version += 1

        return self.save_xlsx(out_filename)
