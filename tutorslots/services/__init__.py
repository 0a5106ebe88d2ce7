"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking_planner import BookingPlannerService, TutorClientProtocol, parse_session_time

__all__ = ["BookingPlannerService", "TutorClientProtocol", "parse_session_time"]
