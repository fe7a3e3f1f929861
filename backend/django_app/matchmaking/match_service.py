import logging
from typing import List, Optional

from django.db import transaction

from . import notifier
from .errors import InvalidOperation, ProfileNotFound, store_errors
from .models import MatchCandidate, Profile
from .scoring import Bucket, score_profiles

logger = logging.getLogger(__name__)


def _ordered(queryset):
    return queryset.select_related('target_user').order_by('-score', 'target_user_id')


def _source_profile(event_id, source_user_id) -> Profile:
    profile = Profile.objects.filter(event_id=event_id, user_id=source_user_id).first()
    if profile is None:
        raise ProfileNotFound()
    return profile


def build_candidates(source: Profile, others) -> List[MatchCandidate]:
    rows = []
    for other in others:
        result = score_profiles(source, other)
        rows.append(
            MatchCandidate(
                event_id=source.event_id,
                source_user_id=source.user_id,
                target_user_id=other.user_id,
                reasons=result.reasons,
                bucket=result.bucket.value,
                score=result.score,
            )
        )
    return rows


@store_errors
def generate_matches(event_id, source_user_id) -> List[MatchCandidate]:
    source = _source_profile(event_id, source_user_id)
    others = list(Profile.objects.filter(event_id=event_id).exclude(user_id=source_user_id).order_by('user_id'))
    if not others:
        return []

    rows = build_candidates(source, others)
    with transaction.atomic():
        deleted, _ = MatchCandidate.objects.filter(event_id=event_id, source_user_id=source_user_id).delete()
        MatchCandidate.objects.bulk_create(rows)
        notifier.matches_changed(event_id, source_user_id, 'generated', count=len(rows))

    logger.info(
        'Generated matches: event=%s user=%s candidates=%s replaced=%s',
        event_id,
        source_user_id,
        len(rows),
        deleted,
    )
    return list(_ordered(MatchCandidate.objects.filter(event_id=event_id, source_user_id=source_user_id)))


@store_errors
def list_matches(event_id, source_user_id, bucket: Optional[str] = None) -> List[MatchCandidate]:
    matches = MatchCandidate.objects.filter(event_id=event_id, source_user_id=source_user_id)
    if bucket:
        try:
            matches = matches.filter(bucket=Bucket(bucket).value)
        except ValueError:
            raise InvalidOperation(f'Unknown bucket: {bucket}')
    return list(_ordered(matches))


@store_errors
def pass_on_candidate(event_id, source_user_id, target_user_id) -> int:
    with transaction.atomic():
        deleted, _ = MatchCandidate.objects.filter(
            event_id=event_id,
            source_user_id=source_user_id,
            target_user_id=target_user_id,
        ).delete()
        if deleted:
            notifier.matches_changed(event_id, source_user_id, 'passed', target_user_id=target_user_id)
    return deleted


def generate_event_matches(event_id) -> int:
    user_ids = list(Profile.objects.filter(event_id=event_id).order_by('user_id').values_list('user_id', flat=True))
    for user_id in user_ids:
        generate_matches(event_id, user_id)
    return len(user_ids)
