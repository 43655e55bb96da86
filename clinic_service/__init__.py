"""
Clinic Scheduling Service

Appointment slot generation and scan-to-client matching for a clinic.
"""

__version__ = "1.0.0"
