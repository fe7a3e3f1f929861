import logging
import os
from typing import List, Tuple

from django.db import IntegrityError, transaction

from .codes import generate_event_code, normalize_event_code
from .errors import EventNotFound, InvalidOperation, store_errors
from .models import Event, Participant, Profile

logger = logging.getLogger(__name__)

MAX_EVENT_PROFILES = int(os.environ.get('MAX_EVENT_PROFILES', '500'))
CODE_ATTEMPTS = 5
PROFILE_FIELDS = ('name', 'role', 'major', 'year', 'skills_have', 'skills_need', 'experience_level', 'bio')


def clean_skills(skills) -> List[str]:
    """Strip blanks and collapse case-insensitive duplicates, keeping the first spelling."""
    cleaned = []
    seen = set()
    for skill in skills or []:
        skill = str(skill).strip()
        key = skill.casefold()
        if not skill or key in seen:
            continue
        seen.add(key)
        cleaned.append(skill)
    return cleaned


@store_errors
def create_event(host, name: str, description: str = '', start_date=None, end_date=None) -> Event:
    if start_date and end_date and end_date < start_date:
        raise InvalidOperation('Event end date is before its start date.')

    for _ in range(CODE_ATTEMPTS):
        try:
            with transaction.atomic():
                event = Event.objects.create(
                    name=name,
                    code=generate_event_code(),
                    host=host,
                    description=description or '',
                    start_date=start_date,
                    end_date=end_date,
                )
                Participant.objects.create(user=host, event=event)
        except IntegrityError:
            logger.warning('Event code collision, regenerating: host=%s', host.id)
            continue
        logger.info('Event created: id=%s code=%s host=%s', event.id, event.code, host.id)
        return event
    raise InvalidOperation('Could not allocate an event code, try again.')


@store_errors
def get_event_by_code(code: str) -> Event:
    event = Event.objects.filter(code=normalize_event_code(code)).first()
    if event is None:
        raise EventNotFound(f'No event with code {normalize_event_code(code)!r}.')
    return event


def hosted_events(user):
    return Event.objects.filter(host=user).order_by('-created_at')


def user_events(user):
    return Event.objects.filter(participants__user=user).order_by('-participants__joined_at')


def is_participant(user, event) -> bool:
    return Participant.objects.filter(user=user, event=event).exists()


def is_event_host(user, event) -> bool:
    return event.host_id == user.id


@store_errors
def join_event(user, event) -> Tuple[Participant, bool]:
    participant, created = Participant.objects.get_or_create(user=user, event=event)
    if created:
        logger.info('Participant joined: event=%s user=%s', event.id, user.id)
    return participant, not created


def event_participants(event):
    return Participant.objects.filter(event=event).select_related('user').order_by('-joined_at')


def get_profile(user, event):
    return Profile.objects.filter(user=user, event=event).first()


@store_errors
def save_profile(user, event, **fields) -> Tuple[Profile, bool]:
    values = {key: value for key, value in fields.items() if key in PROFILE_FIELDS}
    for key in ('skills_have', 'skills_need'):
        if key in values:
            values[key] = clean_skills(values[key])

    with transaction.atomic():
        Participant.objects.get_or_create(user=user, event=event)
        exists = Profile.objects.filter(user=user, event=event).exists()
        if not exists and Profile.objects.filter(event=event).count() >= MAX_EVENT_PROFILES:
            raise InvalidOperation(f'Profile limit reached ({MAX_EVENT_PROFILES}).')
        profile, created = Profile.objects.update_or_create(user=user, event=event, defaults=values)

    logger.info('Profile %s: event=%s user=%s', 'created' if created else 'updated', event.id, user.id)
    return profile, created
