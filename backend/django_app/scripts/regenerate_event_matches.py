from __future__ import annotations

import os
import sys
from pathlib import Path

import django

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'teamup.settings')
django.setup()

from matchmaking.codes import normalize_event_code  # noqa: E402
from matchmaking.match_service import generate_event_matches  # noqa: E402
from matchmaking.models import Event, MatchCandidate  # noqa: E402


def main(argv: list[str]) -> int:
    if len(argv) != 1:
        print('usage: regenerate_event_matches.py EVENT_CODE')
        return 2

    event = Event.objects.filter(code=normalize_event_code(argv[0])).first()
    if event is None:
        print(f'No event with code {argv[0]!r}.')
        return 1

    count = generate_event_matches(event.id)
    rows = MatchCandidate.objects.filter(event=event).count()
    print(f'Regenerated matches for {count} profiles in {event.name}.')
    print(f'{rows} candidate rows stored.')
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
