from django.conf import settings
from django.db import models
from django.db.models.functions import Greatest, Least

from .codes import generate_event_code
from .scoring import Bucket


class Event(models.Model):
    name = models.CharField(max_length=160)
    code = models.CharField(max_length=12, unique=True, default=generate_event_code)
    host = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='hosted_events')
    description = models.TextField(blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f'{self.name} ({self.code})'


class Participant(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='participations')
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='participants')
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('user', 'event')


class Profile(models.Model):
    class ExperienceLevel(models.TextChoices):
        BEGINNER = 'Beginner'
        INTERMEDIATE = 'Intermediate'
        ADVANCED = 'Advanced'

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='event_profiles')
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='profiles')
    name = models.CharField(max_length=120)
    role = models.CharField(max_length=80)
    major = models.CharField(max_length=120, blank=True)
    year = models.CharField(max_length=40, blank=True)
    skills_have = models.JSONField(default=list, blank=True)
    skills_need = models.JSONField(default=list, blank=True)
    experience_level = models.CharField(max_length=20, choices=ExperienceLevel.choices, blank=True)
    bio = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ('user', 'event')

    def __str__(self):
        return f'{self.name} @ {self.event_id}'


class MatchCandidate(models.Model):
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='match_candidates')
    source_user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='matches_from')
    target_user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='matches_to')
    reasons = models.JSONField(default=list)
    bucket = models.CharField(max_length=20, choices=[(b.value, b.value) for b in Bucket])
    score = models.PositiveSmallIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('event', 'source_user', 'target_user')


class Connection(models.Model):
    class Status(models.TextChoices):
        PENDING = 'pending'
        ACCEPTED = 'accepted'
        DECLINED = 'declined'

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='connections')
    # user_a is whoever expressed interest first
    user_a = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='connections_started')
    user_b = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='connections_received')
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                models.F('event'),
                Least('user_a', 'user_b'),
                Greatest('user_a', 'user_b'),
                name='unique_connection_pair_per_event',
            ),
        ]

    def other_user_id(self, user_id):
        return self.user_b_id if self.user_a_id == user_id else self.user_a_id
