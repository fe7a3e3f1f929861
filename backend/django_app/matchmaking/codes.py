import os
import secrets

EVENT_CODE_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
EVENT_CODE_LENGTH = int(os.environ.get('EVENT_CODE_LENGTH', '6'))


def generate_event_code(length: int = EVENT_CODE_LENGTH) -> str:
    return ''.join(secrets.choice(EVENT_CODE_ALPHABET) for _ in range(length))


def normalize_event_code(code: str) -> str:
    return (code or '').strip().upper()
