"""
Compliance Classifier Module

Maps period counters to a compliance status label.
"""

from .entities import ComplianceStatus


def classify_compliance(
    badged_in: int,
    required: int,
    ahead_of_pace: int,
    still_needed: int,
    days_left: int
) -> ComplianceStatus:
    """
    Classify compliance; the first matching rule wins.

    Rules, in order:
        1. badged_in >= required -> ACHIEVED
        2. no pace measured and nothing badged yet -> ON_TRACK
        3. still_needed > days_left -> IMPOSSIBLE
        4. behind pace -> AT_RISK
        5. otherwise -> ON_TRACK

    IMPOSSIBLE is checked before AT_RISK so an unreachable goal is never
    reported as merely at risk.
    """
    if badged_in >= required:
        return ComplianceStatus.ACHIEVED
    if ahead_of_pace == 0 and badged_in == 0:
        return ComplianceStatus.ON_TRACK
    if still_needed > days_left:
        return ComplianceStatus.IMPOSSIBLE
    if ahead_of_pace < 0:
        return ComplianceStatus.AT_RISK
    return ComplianceStatus.ON_TRACK
