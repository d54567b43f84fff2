"""
In-memory lesson-plan document: the generated tables plus the text the user
typed into them. Cells are addressed by (table_label, week_index, field_name),
week_index being 0-based.
"""
from typing import Dict, Iterator, List

from .exceptions import ReadOnlyFieldError, UnknownCellError, UnknownFieldError
from .models import COMPUTED_FIELDS, EDITABLE_FIELDS, ROW_FIELDS, LessonPlanRow, LessonPlanTable


class LessonPlanDocument:

    def __init__(self, tables: List[LessonPlanTable] = ()):
        self._tables: Dict[str, LessonPlanTable] = {}
        for t in tables:
            self._tables[t.label] = t

    def __len__(self):
        return len(self._tables)

    def __iter__(self) -> Iterator[LessonPlanTable]:
        return iter(list(self._tables.values()))

    def __contains__(self, label):
        return label in self._tables

    def labels(self):
        return list(self._tables)

    def table(self, label) -> LessonPlanTable:
        try:
            return self._tables[label]
        except KeyError:
            raise UnknownCellError(f"No table {label!r}")

    def _row(self, label, week_index) -> LessonPlanRow:
        rows = self.table(label).rows
        if not 0 <= week_index < len(rows):
            raise UnknownCellError(f"No week {week_index} in {label!r}")
        return rows[week_index]

    def get(self, label, week_index, field_name):
        if field_name not in ROW_FIELDS and field_name != "week":
            raise UnknownFieldError(field_name)
        return getattr(self._row(label, week_index), field_name)

    def set(self, label, week_index, field_name, value):
        if field_name in COMPUTED_FIELDS or field_name == "week":
            raise ReadOnlyFieldError(f"{field_name} is computed and cannot be edited")
        if field_name not in EDITABLE_FIELDS:
            raise UnknownFieldError(field_name)
        setattr(self._row(label, week_index), field_name, "" if value is None else str(value))

    def as_dict(self):
        """Plain {label: [row dict, ...]} view, rows keyed by column name."""
        return {
            t.label: [
                {"week": r.week, **{f: getattr(r, f) for f in EDITABLE_FIELDS + COMPUTED_FIELDS}}
                for r in t.rows
            ]
            for t in self._tables.values()
        }
