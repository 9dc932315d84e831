"""Data models for the citizenship pre-screening tool."""

from .document import ClassifiedDocument, DocumentCategory
from .applicant import ApplicantProfile, LineageFacts, RelationshipDegree
from .evaluation import EvaluationResult

__all__ = [
    "ClassifiedDocument",
    "DocumentCategory",
    "ApplicantProfile",
    "LineageFacts",
    "RelationshipDegree",
    "EvaluationResult",
]
