"""
Common package for scanner registration.

Shared geometry, parameter models and reports used by both frontend and backend.

Subpackages:
- geometry/: integer vectors and the axis-aligned rotation group
"""

from scanner_registration.common.registration_report import EdgeRecord, RegistrationReport
from scanner_registration.common import param_models

__all__ = [
    "EdgeRecord",
    "RegistrationReport",
    "param_models",
]
