"""
Mock tutoring API client for working without a running backend.
"""

import copy
import json
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..domain.exceptions import TutorAPIError
from ..domain.models import BookingRequest
from .tutor_api_client import extract_availability


class MockTutorClient:
    """
    Mock client that simulates the tutoring API.
    
    Tutors are loaded from mock_tutor_data.json; bookings are kept in memory
    and echoed back as confirmed.
    """

    def __init__(self, data_file: Optional[Path] = None, own_tutor_id: str = "tutor-1"):
        """
        Initialize the mock client.
        
        Args:
            data_file: Optional JSON file with tutor records
            own_tutor_id: Tutor treated as the logged-in user for profile calls
        """
        self.data_file = data_file or Path(__file__).parent / "mock_tutor_data.json"
        self.own_tutor_id = own_tutor_id
        self.bookings: List[Dict[str, Any]] = []
        self._load_tutors()

    def _load_tutors(self) -> None:
        """Load mock tutors from the JSON file."""
        if self.data_file.exists():
            with open(self.data_file, "r", encoding="utf-8") as f:
                records = json.load(f)
        else:
            records = []

        self.tutors: Dict[str, Dict[str, Any]] = {record["id"]: record for record in records}

    def get_tutor(self, tutor_id: str) -> Dict[str, Any]:
        tutor = self.tutors.get(tutor_id)
        if tutor is None:
            raise TutorAPIError("Tutor not found", status_code=404)
        return copy.deepcopy(tutor)

    def get_own_profile(self) -> Dict[str, Any]:
        return self.get_tutor(self.own_tutor_id)["tutorProfile"]

    def get_tutor_availability(self, tutor_id: str) -> List[str]:
        return extract_availability(self.get_tutor(tutor_id))

    def update_availability(self, availability: List[str]) -> Dict[str, Any]:
        tutor = self.tutors.get(self.own_tutor_id)
        if tutor is None:
            raise TutorAPIError("Tutor profile not found", status_code=404)
        tutor.setdefault("tutorProfile", {})["availability"] = list(availability)
        return copy.deepcopy(tutor["tutorProfile"])

    def create_booking(self, booking: BookingRequest) -> Dict[str, Any]:
        if booking.tutor_id not in self.tutors:
            raise TutorAPIError("Tutor not found", status_code=404)

        record = {
            "id": str(uuid.uuid4()),
            "status": "CONFIRMED",
            **booking.to_payload(),
        }
        self.bookings.append(record)
        return dict(record)
