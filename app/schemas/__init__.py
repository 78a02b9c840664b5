"""
Schemas module - domain model, request/response schemas, import rows and reports.

Difference from the storage shape:
- CompanyRecord / StudentRecord / InterviewSlot: what the store persists
- Company / Student: views with their slot lists derived from the slot index
"""
