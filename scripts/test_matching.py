"""
Matching Tests

Tests:
1. First-fit by rank (first slot in stable order)
2. Fall-through to lower-ranked companies
3. Students processed in id order; contested slots go to the earlier id
4. Determinism across identical starting states
5. Unassigned students reported as data

Run: pytest scripts/test_matching.py
"""

from datetime import date

from app.schemas.schemas import (
    CompanyRecord, InterviewSlot, PlacementState, StudentPreference, StudentRecord
)
from app.services.placement_system import PlacementSystem
from app.services.store import InMemoryStore
from conftest import INTERVIEW_DAY, assert_invariants


def test_books_first_slot_of_top_ranked_company(system, acme, acme_slots, ann):
    nine, ten = acme_slots
    system.add_student_preference(ann.id, acme.id, 1)

    report = system.auto_assign_interviews()

    assert report.assigned_count == 1
    assert report.assignments[0].slot_id == nine.id
    assert system.slots.get_slot(nine.id).student_id == ann.id
    assert [s.id for s in system.get_available_slots_for_company(acme.id)] == [ten.id]


def test_falls_through_to_next_rank_when_full(system, acme, globex, ann):
    closed = system.add_timeslot(acme.id, INTERVIEW_DAY, "0900", "0930")
    system.toggle_slot_availability(closed.id)
    open_slot = system.add_timeslot(globex.id, INTERVIEW_DAY, "1000", "1030")
    system.add_student_preference(ann.id, globex.id, 2)
    system.add_student_preference(ann.id, acme.id, 1)

    report = system.auto_assign_interviews()

    assert [(a.student_id, a.slot_id, a.company_id) for a in report.assignments] == [
        (ann.id, open_slot.id, globex.id)
    ]


def test_stops_after_first_booking(system, acme, globex, ann):
    acme_slot = system.add_timeslot(acme.id, INTERVIEW_DAY, "0900", "0930")
    globex_slot = system.add_timeslot(globex.id, INTERVIEW_DAY, "0900", "0930")
    system.add_student_preference(ann.id, acme.id, 1)
    system.add_student_preference(ann.id, globex.id, 2)

    system.auto_assign_interviews()

    assert system.slots.get_slot(acme_slot.id).student_id == ann.id
    assert system.slots.get_slot(globex_slot.id).booked is False


def test_unassigned_students_reported_not_raised(system, acme, ann, bob):
    system.add_timeslot(acme.id, INTERVIEW_DAY, "0900", "0930")
    system.add_student_preference(ann.id, acme.id, 1)
    system.add_student_preference(bob.id, acme.id, 1)

    report = system.auto_assign_interviews()

    assert report.assigned_count == 1
    assert len(report.unassigned_student_ids) == 1
    assert_invariants(system.state)


def test_student_without_preferences_is_unassigned(system, acme_slots, ann):
    report = system.auto_assign_interviews()
    assert report.assignments == []
    assert report.unassigned_student_ids == [ann.id]


def _contested_state() -> PlacementState:
    """Fixed ids so the processing order is known: s-a < s-b < s-c."""
    day = date(2025, 3, 3)
    return PlacementState(
        companies=[CompanyRecord(id="c-x", name="X"), CompanyRecord(id="c-y", name="Y")],
        students=[
            StudentRecord(id="s-c", name="C", student_id="3", preferences=[
                StudentPreference(student_id="s-c", company_id="c-x", rank=1),
            ]),
            StudentRecord(id="s-a", name="A", student_id="1", preferences=[
                StudentPreference(student_id="s-a", company_id="c-y", rank=2),
                StudentPreference(student_id="s-a", company_id="c-x", rank=1),
            ]),
            StudentRecord(id="s-b", name="B", student_id="2", preferences=[
                StudentPreference(student_id="s-b", company_id="c-x", rank=1),
                StudentPreference(student_id="s-b", company_id="c-y", rank=2),
            ]),
        ],
        slots=[
            InterviewSlot(id="slot-x1", date=day, start_time="0900", end_time="0930", company_id="c-x"),
            InterviewSlot(id="slot-y1", date=day, start_time="0900", end_time="0930", company_id="c-y"),
        ],
    )


def test_students_processed_in_id_order():
    system = PlacementSystem(InMemoryStore(_contested_state()))

    report = system.auto_assign_interviews()

    assert [(a.student_id, a.slot_id) for a in report.assignments] == [
        ("s-a", "slot-x1"),
        ("s-b", "slot-y1"),
    ]
    assert report.unassigned_student_ids == ["s-c"]


def test_assignment_is_deterministic():
    first = PlacementSystem(InMemoryStore(_contested_state())).auto_assign_interviews()
    second = PlacementSystem(InMemoryStore(_contested_state())).auto_assign_interviews()

    assert first == second


def test_preference_for_deleted_company_is_skipped():
    state = _contested_state()
    state.students[1].preferences.insert(
        0, StudentPreference(student_id="s-a", company_id="c-gone", rank=1)
    )
    system = PlacementSystem(InMemoryStore(state))

    report = system.auto_assign_interviews()
    assert report.assignments[0].student_id == "s-a"
    assert report.assignments[0].company_id == "c-x"


def test_auto_assign_notifies_once(system, acme, acme_slots, ann, bob):
    system.add_student_preference(ann.id, acme.id, 1)
    system.add_student_preference(bob.id, acme.id, 1)
    calls = []
    system.subscribe(calls.append)

    system.auto_assign_interviews()

    assert len(calls) == 1
    assert sum(1 for s in calls[0].slots if s.booked) == 2
