"""
Bulk Import Reconciler

Takes pre-parsed, field-mapped rows (CSV/spreadsheet parsing happens
elsewhere) and merges them into the registries.

- import_companies / import_students REPLACE the whole collection with
  freshly-id'd records. Dependent data that would dangle is cleaned up:
  slots/preferences/offers of dropped companies, bookings/offers of
  dropped students.
- import_preferences resolves rows by natural key (external student ID,
  exact company name). Unresolvable rows are skipped and counted, never
  fatal.
- Empty input is an error (EmptyImportError), not a silent success.
"""

import logging
from typing import Iterable, List, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from app.core.errors import EmptyImportError
from app.schemas.schemas import (
    CompanyImportData, CompanyRecord, ImportReport, PreferenceImportData,
    SkippedRow, StudentImportData, StudentRecord
)
from app.services.slot_service import release
from app.services.store import PlacementStore
from app.services.student_service import upsert_preference
from app.utils.helpers import new_id

logger = logging.getLogger(__name__)

Row = TypeVar("Row", bound=BaseModel)


def validate_rows(
    rows: Iterable[Union[dict, BaseModel]], model: Type[Row]
) -> Tuple[List[Tuple[int, Row]], List[SkippedRow]]:
    """Coerce raw rows into the import value type. Invalid rows are skipped, not fatal."""
    valid, skipped = [], []
    for index, row in enumerate(rows, start=1):
        if isinstance(row, model):
            valid.append((index, row))
            continue
        try:
            data = row.model_dump() if isinstance(row, BaseModel) else row
            valid.append((index, model.model_validate(data)))
        except ValidationError as e:
            reason = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
            logger.warning("Skipping invalid %s row %d: %s", model.__name__, index, reason)
            skipped.append(SkippedRow(row=index, reason=reason))
    return valid, skipped


class ImportService:

    def __init__(self, store: PlacementStore):
        self.store = store

    def import_companies(self, records: Iterable[Union[dict, CompanyImportData]]) -> ImportReport:
        valid, skipped = validate_rows(records or [], CompanyImportData)
        if not valid:
            raise EmptyImportError("company")

        with self.store.transaction() as state:
            state.companies = [CompanyRecord(id=new_id("c"), **row.model_dump()) for _, row in valid]
            # Old companies are gone: nothing may keep pointing at them
            state.slots = []
            state.offers = []
            for student in state.students:
                student.preferences = []

        report = ImportReport(
            kind="companies", processed=len(valid), skipped=len(skipped), skipped_rows=skipped,
            message=f"{len(valid)} companies have been imported successfully."
        )
        logger.info(report.message)
        return report

    def import_students(self, records: Iterable[Union[dict, StudentImportData]]) -> ImportReport:
        valid, skipped = validate_rows(records or [], StudentImportData)
        if not valid:
            raise EmptyImportError("student")

        with self.store.transaction() as state:
            for slot in state.slots:
                if slot.booked:
                    release(slot)
            state.offers = []
            state.students = [StudentRecord(id=new_id("s"), **row.model_dump()) for _, row in valid]

        report = ImportReport(
            kind="students", processed=len(valid), skipped=len(skipped), skipped_rows=skipped,
            message=f"{len(valid)} students have been imported successfully."
        )
        logger.info(report.message)
        return report

    def import_preferences(self, records: Iterable[Union[dict, PreferenceImportData]]) -> ImportReport:
        records = list(records or [])
        if not records:
            raise EmptyImportError("preference")
        valid, skipped = validate_rows(records, PreferenceImportData)

        processed = 0
        with self.store.transaction() as state:
            by_student_ref = {}
            for s in state.students:
                by_student_ref.setdefault(s.student_id, s)
            by_company_name = {}
            for c in state.companies:
                by_company_name.setdefault(c.name, c)

            for index, row in valid:
                student = by_student_ref.get(row.student_id)
                if student is None:
                    logger.warning("Student with ID %s not found (row %d)", row.student_id, index)
                    skipped.append(SkippedRow(row=index, reason=f"unknown student ID '{row.student_id}'"))
                    continue
                company = by_company_name.get(row.company_name)
                if company is None:
                    logger.warning("Company with name %s not found (row %d)", row.company_name, index)
                    skipped.append(SkippedRow(row=index, reason=f"unknown company '{row.company_name}'"))
                    continue

                upsert_preference(student, company.id, row.rank)
                processed += 1

        skipped.sort(key=lambda s: s.row)
        report = ImportReport(
            kind="preferences", processed=processed, skipped=len(skipped), skipped_rows=skipped,
            message=f"{processed} student preferences have been imported successfully."
        )
        logger.info("%s (%d skipped)", report.message, report.skipped)
        return report
