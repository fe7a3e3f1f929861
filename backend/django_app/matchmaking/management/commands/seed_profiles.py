from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from matchmaking.event_service import create_event, save_profile
from matchmaking.match_service import generate_event_matches
from matchmaking.models import Event


class Command(BaseCommand):
    help = 'Seed a demo hackathon with participant profiles and generated matches.'

    def add_arguments(self, parser):
        parser.add_argument('--event-name', default='Campus Hack Night')

    def handle(self, *args, **options):
        User = get_user_model()
        data = [
            {
                'username': 'riya',
                'name': 'Riya Patel',
                'role': 'Developer',
                'skills_have': ['React', 'TypeScript'],
                'skills_need': ['Figma'],
                'experience_level': 'Advanced',
                'bio': 'Frontend tinkerer, ships fast.',
            },
            {
                'username': 'arjun',
                'name': 'Arjun Mehta',
                'role': 'Designer',
                'skills_have': ['Figma', 'Branding'],
                'skills_need': ['React'],
                'experience_level': 'Intermediate',
                'bio': 'Wants to turn mockups into a working demo.',
            },
            {
                'username': 'isha',
                'name': 'Isha Nair',
                'role': 'Developer',
                'skills_have': ['Python', 'PyTorch'],
                'skills_need': ['Pitching'],
                'experience_level': 'Advanced',
                'bio': 'ML inference on small devices.',
            },
            {
                'username': 'sana',
                'name': 'Sana Qureshi',
                'role': 'Product Manager',
                'skills_have': ['Pitching', 'User Research'],
                'skills_need': ['Python'],
                'experience_level': 'Beginner',
                'bio': 'First hackathon, loves talking to users.',
            },
        ]

        users = []
        for item in data:
            user, _ = User.objects.get_or_create(username=item['username'], defaults={'first_name': item['name'].split()[0]})
            users.append((user, item))

        event = Event.objects.filter(name=options['event_name']).first()
        if event is None:
            event = create_event(host=users[0][0], name=options['event_name'], description='Seeded demo event')

        for user, item in users:
            fields = {k: v for k, v in item.items() if k != 'username'}
            save_profile(user, event, **fields)

        regenerated = generate_event_matches(event.id)
        self.stdout.write(self.style.SUCCESS(f'Seeded {len(users)} profiles in {event.name} (code {event.code}).'))
        self.stdout.write(f'Generated matches for {regenerated} participants.')
