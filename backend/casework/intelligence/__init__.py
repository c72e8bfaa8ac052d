from casework.intelligence.duplicates import detect_duplicates
from casework.intelligence.engine import CaseIntelligenceEngine
from casework.intelligence.flags import extract_risk_flags
from casework.intelligence.priority import determine_priority
from casework.intelligence.probability import calculate_success_probability
from casework.intelligence.recommendations import generate_recommendations
from casework.intelligence.risk import determine_risk_level
from casework.intelligence.types import CaseAlert, CaseDocument, CaseRecord, Recommendations, ScoreResult

__all__ = [
    'CaseAlert',
    'CaseDocument',
    'CaseIntelligenceEngine',
    'CaseRecord',
    'Recommendations',
    'ScoreResult',
    'calculate_success_probability',
    'detect_duplicates',
    'determine_priority',
    'determine_risk_level',
    'extract_risk_flags',
    'generate_recommendations',
]
