"""
Tutoring session scheduler.

Conflict detection and time-slot recommendation for a tutor's roster of
students and groups.
"""

__version__ = "0.1.0"
