from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List


class Bucket(str, Enum):
    STRONG_COMPLEMENT = 'strong_complement'
    GOOD_POTENTIAL = 'good_potential'
    EXPLORE = 'explore'


COMPLEMENT_SCORE = 3
SHARED_SCORE = 1
ROLE_SCORE = 2
STRONG_THRESHOLD = 6
GOOD_THRESHOLD = 3
MAX_REASONS = 3
EXAMPLE_SKILLS = 2
GENERIC_REASON = 'Similar interests'
ROLE_REASON = 'Complementary roles'

# Compared verbatim, role values come from a fixed choice list in the profile form.
COMPLEMENTARY_ROLES = (
    frozenset({'Developer', 'Designer'}),
    frozenset({'Developer', 'Product Manager'}),
    frozenset({'Designer', 'Product Manager'}),
)


@dataclass
class ScoreResult:
    score: int
    bucket: Bucket
    reasons: List[str] = field(default_factory=list)


def _skill_key(skill: str) -> str:
    return skill.strip().casefold()


def _overlap(have: Iterable[str], other: Iterable[str]) -> List[str]:
    """Skills from ``have`` also present in ``other``, in ``have`` order, case-insensitive."""
    wanted = {_skill_key(s) for s in other or [] if s and s.strip()}
    seen = set()
    found = []
    for skill in have or []:
        if not skill or not skill.strip():
            continue
        key = _skill_key(skill)
        if key in wanted and key not in seen:
            seen.add(key)
            found.append(skill.strip())
    return found


def bucket_for_score(score: int) -> Bucket:
    if score >= STRONG_THRESHOLD:
        return Bucket.STRONG_COMPLEMENT
    if score >= GOOD_THRESHOLD:
        return Bucket.GOOD_POTENTIAL
    return Bucket.EXPLORE


def roles_complement(role_a: str, role_b: str) -> bool:
    return frozenset({role_a, role_b}) in COMPLEMENTARY_ROLES


def score_profiles(profile_a, profile_b) -> ScoreResult:
    """Score ``profile_b`` as a teammate candidate for ``profile_a``.

    Both arguments only need ``role``, ``skills_have`` and ``skills_need``
    attributes. Reasons are phrased from ``profile_a``'s point of view:
    "They need" lists what A can offer B, "You need" what B can offer A.
    """
    reasons = []
    score = 0

    a_helps_b = _overlap(profile_a.skills_have, profile_b.skills_need)
    if a_helps_b:
        reasons.append(f'They need: {", ".join(a_helps_b[:EXAMPLE_SKILLS])}')
        score += COMPLEMENT_SCORE * len(a_helps_b)

    b_helps_a = _overlap(profile_b.skills_have, profile_a.skills_need)
    if b_helps_a:
        reasons.append(f'You need: {", ".join(b_helps_a[:EXAMPLE_SKILLS])}')
        score += COMPLEMENT_SCORE * len(b_helps_a)

    shared = _overlap(profile_a.skills_have, profile_b.skills_have)
    if shared:
        reasons.append(f'Both have: {", ".join(shared[:EXAMPLE_SKILLS])}')
        score += SHARED_SCORE * len(shared)

    if roles_complement(profile_a.role, profile_b.role):
        reasons.append(ROLE_REASON)
        score += ROLE_SCORE

    if not reasons:
        reasons.append(GENERIC_REASON)

    return ScoreResult(score=score, bucket=bucket_for_score(score), reasons=reasons[:MAX_REASONS])
