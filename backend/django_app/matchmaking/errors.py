from functools import wraps

from django.db import InterfaceError, OperationalError
from rest_framework import status
from rest_framework.exceptions import APIException


class MatchmakingError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Matchmaking request failed.'
    default_code = 'matchmaking_error'


class ProfileNotFound(MatchmakingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Complete your event profile first.'
    default_code = 'profile_not_found'


class UserNotFound(MatchmakingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'User not found in this event.'
    default_code = 'user_not_found'


class EventNotFound(MatchmakingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Event not found.'
    default_code = 'event_not_found'


class InvalidOperation(MatchmakingError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid operation.'
    default_code = 'invalid_operation'


class StoreUnavailable(MatchmakingError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Storage is unavailable, try again.'
    default_code = 'store_unavailable'


def store_errors(func):
    """Surface database connectivity failures as StoreUnavailable, without retrying."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            raise StoreUnavailable() from exc

    return wrapper
