from __future__ import annotations

from typing import Iterable

from casework.intelligence.types import Recommendations

IMPROVEMENT_RULES = (
    ('missing', 'Provide all required documentation to support application'),
    ('financial', 'Include stronger financial documentation (bank statements, employment letter)'),
    ('probability', 'Consider applying for alternative visa category if eligible'),
    ('denial', 'Address issues from previous application before reapplying'),
)

CLEAN_CASE_STRENGTHS = (
    'Application appears complete and well-documented',
    'Strong supporting documentation provided',
)
FEW_ISSUES_STRENGTH = 'Application has more strengths than critical issues'
FEW_ISSUES_LIMIT = 3


def generate_recommendations(risk_flags: Iterable[str]) -> Recommendations:
    flags = list(risk_flags)
    lowered = [flag.lower() for flag in flags]

    improvements = [
        improvement
        for keyword, improvement in IMPROVEMENT_RULES
        if any(keyword in flag for flag in lowered)
    ]

    if not flags:
        strengths = list(CLEAN_CASE_STRENGTHS)
    elif len(flags) < FEW_ISSUES_LIMIT:
        strengths = [FEW_ISSUES_STRENGTH]
    else:
        strengths = []

    return Recommendations(improvements=improvements, strengths=strengths)
