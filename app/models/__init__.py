"""
Models Package - Business logic models
Centralized business logic separated from Flask routes
"""

from .attendance_service import AttendanceService
from .training_registry import TrainingRegistry
from .face_matcher import FaceMatcher, LabeledDescriptors, UNKNOWN_LABEL

__all__ = [
    'AttendanceService',
    'TrainingRegistry',
    'FaceMatcher',
    'LabeledDescriptors',
    'UNKNOWN_LABEL',
]
