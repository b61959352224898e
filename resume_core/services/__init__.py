from .document_service import build_document, build_supplementary_profile
from .scoring_service import build_score_breakdown, score_resume

__all__ = [
    "build_document",
    "build_supplementary_profile",
    "build_score_breakdown",
    "score_resume",
]
