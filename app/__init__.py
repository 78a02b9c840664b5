"""
Internship Placement Scheduler
Interview slot booking and preference matching for internship placements.

Architecture:
- Registries (companies, students, slots) own the booking invariants
- One injectable store holds the aggregate state (SQL or in-memory)
- Greedy matcher books interviews by preference rank
"""

__version__ = "1.0.0"
