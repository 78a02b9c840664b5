"""
Demo data - loaded into an empty store when SEED_DEMO_DATA=true.

No slots are generated: administrators add them per company.
"""

from app.schemas.schemas import CompanyRecord, PlacementState, StudentRecord

MOCK_COMPANIES = [
    CompanyRecord(
        id="c1",
        name="Tech Innovations Inc.",
        description="Leading technology company specializing in AI and machine learning solutions.",
        intake_number=5,
        interview_place="Room 101",
        contact_person="John Smith",
        allowance="$500",
        remarks="Looking for students with strong programming skills",
    ),
    CompanyRecord(
        id="c2",
        name="Global Finance Group",
        description="International financial services and consulting firm.",
        intake_number=3,
        interview_place="Building A, 2nd Floor",
        contact_person="Mary Johnson",
        allowance="$450",
        remarks="Finance or accounting background preferred",
    ),
    CompanyRecord(
        id="c3",
        name="Creative Design Studios",
        description="Award-winning design agency working with global brands.",
        intake_number=4,
        interview_place="Design Center",
        contact_person="David Lee",
        allowance="$480",
        remarks="Portfolio review required",
    ),
    CompanyRecord(
        id="c4",
        name="Health Sciences Ltd",
        description="Research and development in healthcare and biomedical sciences.",
        intake_number=2,
        interview_place="Science Park, Block C",
        contact_person="Sarah Wong",
        allowance="$550",
        remarks="Lab experience is a plus",
    ),
    CompanyRecord(
        id="c5",
        name="Sustainable Solutions",
        description="Environmental consulting and green technology implementation.",
        intake_number=3,
        interview_place="Eco Building",
        contact_person="Michael Green",
        allowance="$470",
        remarks="Interest in sustainability required",
    ),
]

MOCK_STUDENTS = [
    StudentRecord(id="s1", name="Alex Johnson", email="alex.j@example.com",
                  student_id="ST12345", tel="555-123-4567", gpa="3.8"),
    StudentRecord(id="s2", name="Jamie Smith", email="jamie.s@example.com",
                  student_id="ST23456", tel="555-234-5678", gpa="3.5"),
    StudentRecord(id="s3", name="Morgan Lee", email="morgan.l@example.com",
                  student_id="ST34567", tel="555-345-6789", gpa="4.0"),
]


def demo_state() -> PlacementState:
    return PlacementState(
        companies=[c.model_copy() for c in MOCK_COMPANIES],
        students=[s.model_copy(deep=True) for s in MOCK_STUDENTS],
    )
