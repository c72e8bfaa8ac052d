from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from casework.intelligence.duplicates import DuplicateLookup, detect_duplicates
from casework.intelligence.flags import extract_risk_flags
from casework.intelligence.priority import determine_priority
from casework.intelligence.probability import calculate_success_probability
from casework.intelligence.recommendations import generate_recommendations
from casework.intelligence.risk import determine_risk_level
from casework.intelligence.types import CaseRecord, ScoreResult


@dataclass
class CaseIntelligenceEngine:
    duplicate_lookup: DuplicateLookup | None = None
    now: datetime | None = None

    def run(self, case: CaseRecord, case_id: Any = None) -> ScoreResult:
        success_probability = calculate_success_probability(case)
        risk_level = determine_risk_level(case, success_probability)
        duplicate_detected = detect_duplicates(
            case,
            current_case_id=case_id,
            repository=self.duplicate_lookup,
        )
        priority = determine_priority(case, now=self.now)
        risk_flags = extract_risk_flags(case, success_probability)

        return ScoreResult(
            success_probability=success_probability,
            risk_level=risk_level,
            duplicate_detected=duplicate_detected,
            priority=priority,
            risk_flags=risk_flags,
            recommendations=generate_recommendations(risk_flags),
        )
