from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from . import connection_service, event_service, match_service
from .errors import ProfileNotFound
from .models import Event, Profile
from .serializers import (
    ConnectionSerializer,
    DeclineSerializer,
    EventSerializer,
    InterestSerializer,
    JoinEventSerializer,
    MatchCandidateSerializer,
    ParticipantSerializer,
    ProfileSerializer,
)


def _profiles_by_user(event, user_ids):
    return {p.user_id: p for p in Profile.objects.filter(event=event, user_id__in=set(user_ids))}


class EventViewSet(mixins.CreateModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    queryset = Event.objects.all()
    serializer_class = EventSerializer
    permission_classes = [IsAuthenticated]

    def get_event(self):
        event = self.get_object()
        if not event_service.is_participant(self.request.user, event):
            raise PermissionDenied('Join this event first.')
        return event

    def retrieve(self, request, *args, **kwargs):
        event = self.get_event()
        return Response(self.get_serializer(event).data)

    def list(self, request, *args, **kwargs):
        events = event_service.user_events(request.user)
        return Response(self.get_serializer(events, many=True).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = event_service.create_event(host=request.user, **serializer.validated_data)
        return Response(self.get_serializer(event).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'])
    def hosted(self, request):
        events = event_service.hosted_events(request.user)
        return Response(self.get_serializer(events, many=True).data)

    @action(detail=False, methods=['post'])
    def join(self, request):
        serializer = JoinEventSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = event_service.get_event_by_code(serializer.validated_data['code'])
        _, already_joined = event_service.join_event(request.user, event)
        return Response(
            {'event': self.get_serializer(event).data, 'already_joined': already_joined},
            status=status.HTTP_200_OK if already_joined else status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=['get'])
    def participants(self, request, pk=None):
        event = self.get_event()
        participants = list(event_service.event_participants(event))
        profiles = _profiles_by_user(event, [p.user_id for p in participants])
        serializer = ParticipantSerializer(participants, many=True, context={'request': request, 'profiles': profiles})
        return Response(serializer.data)

    @action(detail=True, methods=['get', 'put'])
    def profile(self, request, pk=None):
        event = self.get_event()
        if request.method == 'GET':
            profile = event_service.get_profile(request.user, event)
            if profile is None:
                raise ProfileNotFound()
            return Response(ProfileSerializer(profile).data)

        existing = event_service.get_profile(request.user, event)
        serializer = ProfileSerializer(existing, data=request.data, partial=existing is not None)
        serializer.is_valid(raise_exception=True)
        profile, created = event_service.save_profile(request.user, event, **serializer.validated_data)
        return Response(ProfileSerializer(profile).data, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)

    @action(detail=True, methods=['get'])
    def matches(self, request, pk=None):
        event = self.get_event()
        matches = match_service.list_matches(event.id, request.user.id, bucket=request.query_params.get('bucket'))
        return self._matches_response(event, matches)

    @action(detail=True, methods=['post'], url_path='matches/generate')
    def generate_matches(self, request, pk=None):
        event = self.get_event()
        matches = match_service.generate_matches(event.id, request.user.id)
        return self._matches_response(event, matches)

    @action(detail=True, methods=['post'], url_path=r'matches/(?P<target_id>\d+)/pass')
    def pass_match(self, request, pk=None, target_id=None):
        event = self.get_event()
        deleted = match_service.pass_on_candidate(event.id, request.user.id, int(target_id))
        return Response({'success': True, 'removed': bool(deleted)})

    @action(detail=True, methods=['get', 'post'])
    def connections(self, request, pk=None):
        event = self.get_event()
        if request.method == 'GET':
            connections = connection_service.list_connections(
                event.id,
                request.user.id,
                status=request.query_params.get('status'),
            )
            return self._connections_response(event, connections)

        serializer = InterestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = connection_service.express_interest(event.id, request.user.id, serializer.validated_data['target_user_id'])
        payload = {
            'connection': self._connections_response(event, [result.connection]).data[0],
            'already_exists': result.already_exists,
            'mutual': result.mutual,
        }
        return Response(payload, status=status.HTTP_200_OK if result.already_exists else status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], url_path='connections/decline')
    def decline(self, request, pk=None):
        event = self.get_event()
        serializer = DeclineSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        connection = connection_service.decline_interest(event.id, request.user.id, serializer.validated_data['user_id'])
        return self._connections_response(event, [connection], single=True)

    def _matches_response(self, event, matches):
        profiles = _profiles_by_user(event, [m.target_user_id for m in matches])
        serializer = MatchCandidateSerializer(matches, many=True, context={'request': self.request, 'profiles': profiles})
        return Response(serializer.data)

    def _connections_response(self, event, connections, single=False):
        profiles = _profiles_by_user(event, [c.other_user_id(self.request.user.id) for c in connections])
        serializer = ConnectionSerializer(connections, many=True, context={'request': self.request, 'profiles': profiles})
        return Response(serializer.data[0] if single else serializer.data)


class AuthMeView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        if not request.user.is_authenticated:
            return Response({'authenticated': False})
        return Response(
            {
                'authenticated': True,
                'user_id': request.user.id,
                'email': request.user.email,
                'name': request.user.get_full_name() or request.user.username,
            }
        )
