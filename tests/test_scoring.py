"""
Tests for the compatibility scorer
"""

from types import SimpleNamespace

from matchmaking.scoring import Bucket, bucket_for_score, roles_complement, score_profiles


def profile(role='Developer', have=(), need=()):
    return SimpleNamespace(role=role, skills_have=list(have), skills_need=list(need))


class TestScoreProfiles:
    """Reason and bucket generation"""

    def test_mutual_complement_is_strong(self):
        a = profile(role='Developer', have=['React', 'TypeScript'], need=['Figma'])
        b = profile(role='Developer', have=['Figma', 'Branding'], need=['React'])

        result = score_profiles(a, b)

        assert result.score == 6
        assert result.bucket == Bucket.STRONG_COMPLEMENT
        assert result.reasons == ['They need: React', 'You need: Figma']

    def test_single_shared_skill_is_explore(self):
        a = profile(have=['Python'])
        b = profile(have=['Python'])

        result = score_profiles(a, b)

        assert result.score == 1
        assert result.bucket == Bucket.EXPLORE
        assert result.reasons == ['Both have: Python']

    def test_empty_profiles_get_generic_reason(self):
        result = score_profiles(profile(role='Designer'), profile(role='Designer'))

        assert result.score == 0
        assert result.bucket == Bucket.EXPLORE
        assert result.reasons == ['Similar interests']

    def test_skill_matching_ignores_case(self):
        a = profile(have=['react'], need=['FIGMA'])
        b = profile(have=['Figma'], need=['React'])

        result = score_profiles(a, b)

        assert result.reasons == ['They need: react', 'You need: Figma']
        assert result.score == 6

    def test_different_spellings_do_not_match(self):
        result = score_profiles(profile(have=['JS']), profile(need=['JavaScript']))

        assert result.score == 0
        assert result.reasons == ['Similar interests']

    def test_reasons_cite_at_most_two_skills(self):
        a = profile(have=['Go', 'Rust', 'C'])
        b = profile(need=['Go', 'Rust', 'C'])

        result = score_profiles(a, b)

        assert result.reasons == ['They need: Go, Rust']
        assert result.score == 9

    def test_complementary_roles_bonus(self):
        result = score_profiles(profile(role='Designer'), profile(role='Product Manager'))

        assert result.reasons == ['Complementary roles']
        assert result.score == 2
        assert result.bucket == Bucket.EXPLORE

    def test_role_reason_dropped_after_three(self):
        a = profile(role='Developer', have=['React', 'SQL'], need=['Figma'])
        b = profile(role='Designer', have=['Figma', 'SQL'], need=['React'])

        result = score_profiles(a, b)

        assert result.reasons == ['They need: React', 'You need: Figma', 'Both have: SQL']
        assert result.score == 3 + 3 + 1 + 2

    def test_role_comparison_is_case_sensitive(self):
        assert roles_complement('Developer', 'Designer')
        assert not roles_complement('developer', 'Designer')
        assert not roles_complement('Developer', 'Developer')

    def test_directions_are_scored_independently(self):
        a = profile(have=['Python', 'SQL'], need=[])
        b = profile(have=[], need=['Python', 'SQL'])

        forward = score_profiles(a, b)
        backward = score_profiles(b, a)

        assert forward.reasons == ['They need: Python, SQL']
        assert backward.reasons == ['You need: Python, SQL']
        assert forward.score == backward.score == 6


class TestBuckets:
    """Score thresholds"""

    def test_thresholds(self):
        assert bucket_for_score(0) == Bucket.EXPLORE
        assert bucket_for_score(2) == Bucket.EXPLORE
        assert bucket_for_score(3) == Bucket.GOOD_POTENTIAL
        assert bucket_for_score(5) == Bucket.GOOD_POTENTIAL
        assert bucket_for_score(6) == Bucket.STRONG_COMPLEMENT
