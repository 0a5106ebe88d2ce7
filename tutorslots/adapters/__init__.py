"""
Adapters layer - External integrations (tutoring REST API).
"""

from .mock_tutor_client import MockTutorClient
from .tutor_api_client import TutorAPIClient, extract_availability

__all__ = ["MockTutorClient", "TutorAPIClient", "extract_availability"]
