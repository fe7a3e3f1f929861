import pytest

from matchmaking.models import Event, Participant, Profile


@pytest.fixture
def host(django_user_model):
    return django_user_model.objects.create_user(username='host', password='pw')


@pytest.fixture
def event(host):
    event = Event.objects.create(name='Spring Hack', code='HACK42', host=host)
    Participant.objects.create(user=host, event=event)
    return event


@pytest.fixture
def make_profile(django_user_model, event):
    def _make(username, role='Developer', skills_have=(), skills_need=(), target_event=None, **extra):
        target_event = target_event or event
        user = django_user_model.objects.filter(username=username).first()
        if user is None:
            user = django_user_model.objects.create_user(username=username, password='pw')
        Participant.objects.get_or_create(user=user, event=target_event)
        Profile.objects.create(
            user=user,
            event=target_event,
            name=username.title(),
            role=role,
            skills_have=list(skills_have),
            skills_need=list(skills_need),
            **extra,
        )
        return user

    return _make
