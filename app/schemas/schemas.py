"""
Pydantic Schemas - Domain Model + Request/Response Validation

All schemas in one file for simplicity.

Storage shape vs. view shape:
- CompanyRecord / StudentRecord / InterviewSlot are what the store persists.
- Company / Student are the views handed to callers; their slot lists
  (available_slots, booked_interviews) are computed from the single slot index.
"""

from pydantic import AfterValidator, BaseModel, Field, field_validator
from typing import Annotated, Optional, List
from datetime import date
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class OfferStatus(str, Enum):
    pending = "pending"
    offered = "offered"
    accepted = "accepted"
    rejected = "rejected"
    withdrawn = "withdrawn"


class ScheduleOrder(str, Enum):
    date = "date"
    company = "company"


# ============================================================
# SLOT SCHEMAS
# ============================================================

class InterviewSlot(BaseModel):
    id: str
    date: date
    start_time: str
    end_time: str
    company_id: str
    booked: bool = False
    is_available: bool = True
    student_id: Optional[str] = None

def check_time_digits(v: str) -> str:
    """24h clock digits, e.g. "0930" or "09:30" (stored as "0930")."""
    digits = v.strip().replace(":", "")
    if not digits.isdigit() or not 3 <= len(digits) <= 4:
        raise ValueError("time must be 3-4 digits in 24-hour format, e.g. 0930")
    return digits

# Slot times accepted at the API boundary
ClockTime = Annotated[str, AfterValidator(check_time_digits)]

class SlotCreate(BaseModel):
    """Boundary schema: times must be 24h clock digits."""
    date: date
    start_time: ClockTime
    end_time: ClockTime

class SlotUpdate(BaseModel):
    """One entry of an explicit slot schedule replacement in a company update."""
    id: Optional[str] = None
    date: date
    start_time: ClockTime
    end_time: ClockTime
    is_available: bool = True

class BookingRequest(BaseModel):
    student_id: str


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    intake_number: int = Field(1, ge=1)
    interview_place: str = ""
    contact_person: str = ""
    allowance: str = ""
    remarks: Optional[str] = None

class CompanyRecord(CompanyCreate):
    id: str

class Company(CompanyRecord):
    available_slots: List[InterviewSlot] = []

class CompanyUpdate(CompanyCreate):
    """Update payload. Omitted or empty available_slots keeps the stored schedule."""
    id: str
    available_slots: Optional[List[SlotUpdate]] = None


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentPreference(BaseModel):
    student_id: str
    company_id: str
    rank: int = Field(..., ge=1)

class StudentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = ""
    student_id: str = Field(..., min_length=1)
    tel: str = ""
    gpa: str = ""

class StudentRecord(StudentCreate):
    id: str
    preferences: List[StudentPreference] = []

class Student(StudentRecord):
    booked_interviews: List[InterviewSlot] = []

class StudentUpdate(StudentCreate):
    """Update payload. Omitted or empty preferences keeps the stored list."""
    id: str
    preferences: Optional[List[StudentPreference]] = None

class PreferenceSet(BaseModel):
    company_id: str
    rank: int = Field(..., ge=0, description="0 removes the preference")


# ============================================================
# OFFER SCHEMAS
# ============================================================

class OfferRecord(BaseModel):
    student_id: str
    company_id: str
    status: OfferStatus = OfferStatus.pending

class OfferStatusUpdate(BaseModel):
    student_id: str
    company_id: str
    status: OfferStatus


# ============================================================
# AGGREGATE STATE
# ============================================================

class PlacementState(BaseModel):
    companies: List[CompanyRecord] = []
    students: List[StudentRecord] = []
    slots: List[InterviewSlot] = []
    offers: List[OfferRecord] = []

    def find_company(self, company_id: str) -> Optional[CompanyRecord]:
        return next((c for c in self.companies if c.id == company_id), None)

    def find_student(self, student_id: str) -> Optional[StudentRecord]:
        return next((s for s in self.students if s.id == student_id), None)

    def find_slot(self, slot_id: str) -> Optional[InterviewSlot]:
        return next((s for s in self.slots if s.id == slot_id), None)

    def slots_for_company(self, company_id: str) -> List[InterviewSlot]:
        return [s for s in self.slots if s.company_id == company_id]

    def slots_for_student(self, student_id: str) -> List[InterviewSlot]:
        return [s for s in self.slots if s.booked and s.student_id == student_id]

    def company_view(self, record: CompanyRecord) -> Company:
        return Company(
            **record.model_dump(),
            available_slots=[s.model_copy() for s in self.slots_for_company(record.id)],
        )

    def student_view(self, record: StudentRecord) -> Student:
        data = record.model_dump()
        return Student(
            **data,
            booked_interviews=[s.model_copy() for s in self.slots_for_student(record.id)],
        )


# ============================================================
# IMPORT SCHEMAS (pre-parsed, field-mapped rows)
# ============================================================

class CompanyImportData(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    intake_number: int = Field(1, ge=1)
    interview_place: str = ""
    contact_person: str = ""
    allowance: str = ""
    remarks: Optional[str] = None

class StudentImportData(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = ""
    student_id: str = Field(..., min_length=1)
    tel: str = ""
    gpa: str = ""

class PreferenceImportData(BaseModel):
    student_id: str = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1)
    rank: int = Field(1, ge=1)

    @field_validator("rank", mode="before")
    @classmethod
    def blank_rank_is_first_choice(cls, v):
        # Spreadsheets leave the column empty or 0 for "ranked, no order given"
        if v is None or v == 0 or (isinstance(v, str) and v.strip() in ("", "0")):
            return 1
        return v


# ============================================================
# REPORTS
# ============================================================

class Assignment(BaseModel):
    student_id: str
    slot_id: str
    company_id: str

class AssignmentReport(BaseModel):
    assignments: List[Assignment] = []
    unassigned_student_ids: List[str] = []

    @property
    def assigned_count(self) -> int:
        return len(self.assignments)

class SkippedRow(BaseModel):
    row: int
    reason: str

class ImportReport(BaseModel):
    kind: str
    processed: int = 0
    skipped: int = 0
    skipped_rows: List[SkippedRow] = []
    message: str = ""


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str
    error: str
