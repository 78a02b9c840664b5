"""
Domain errors.

Registries raise these instead of returning sentinel values; the HTTP layer
maps each family to a status code (see app/main.py).

    NotFoundError            -> 404
    InvalidInputError        -> 422
    InvariantViolationError  -> 409
    StorageError             -> 503 (not a PlacementError: it is an I/O fault)
"""


class PlacementError(Exception):
    """Base class for expected, typed failures of registry operations."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ============================================================
# NOT FOUND
# ============================================================

class NotFoundError(PlacementError):
    pass


class CompanyNotFoundError(NotFoundError):
    def __init__(self, company_id: str):
        super().__init__(f"Company '{company_id}' not found")
        self.company_id = company_id


class StudentNotFoundError(NotFoundError):
    def __init__(self, student_id: str):
        super().__init__(f"Student '{student_id}' not found")
        self.student_id = student_id


class SlotNotFoundError(NotFoundError):
    def __init__(self, slot_id: str):
        super().__init__(f"Interview slot '{slot_id}' not found")
        self.slot_id = slot_id


# ============================================================
# INVALID INPUT
# ============================================================

class InvalidInputError(PlacementError):
    pass


class EmptyImportError(InvalidInputError):
    def __init__(self, kind: str):
        super().__init__(f"No valid {kind} data found to import")
        self.kind = kind


# ============================================================
# INVARIANT VIOLATIONS
# ============================================================

class InvariantViolationError(PlacementError):
    pass


class SlotIsBookedError(InvariantViolationError):
    def __init__(self, slot_id: str, action: str):
        super().__init__(f"Cannot {action} interview slot '{slot_id}': it is booked")
        self.slot_id = slot_id


class SlotNotAvailableError(InvariantViolationError):
    def __init__(self, slot_id: str):
        super().__init__(f"Interview slot '{slot_id}' is not available for booking")
        self.slot_id = slot_id


# ============================================================
# STORAGE
# ============================================================

class StorageError(Exception):
    """Persistence I/O failed. The in-memory state was left untouched."""
