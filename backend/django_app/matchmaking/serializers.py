from rest_framework import serializers

from .event_service import is_event_host
from .models import Connection, Event, MatchCandidate, Participant, Profile


class EventSerializer(serializers.ModelSerializer):
    is_host = serializers.SerializerMethodField()

    class Meta:
        model = Event
        fields = ['id', 'name', 'code', 'host', 'description', 'start_date', 'end_date', 'created_at', 'is_host']
        read_only_fields = ['code', 'host', 'created_at']

    def get_is_host(self, obj):
        request = self.context.get('request')
        return bool(request and request.user.is_authenticated and is_event_host(request.user, obj))

    def validate(self, attrs):
        start_date = attrs.get('start_date')
        end_date = attrs.get('end_date')
        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError('end_date must not be before start_date')
        return attrs


class JoinEventSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=12)


class ProfileSerializer(serializers.ModelSerializer):
    skills_have = serializers.ListField(child=serializers.CharField(max_length=60, allow_blank=True), required=False)
    skills_need = serializers.ListField(child=serializers.CharField(max_length=60, allow_blank=True), required=False)

    class Meta:
        model = Profile
        fields = [
            'id',
            'user',
            'event',
            'name',
            'role',
            'major',
            'year',
            'skills_have',
            'skills_need',
            'experience_level',
            'bio',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['user', 'event', 'created_at', 'updated_at']


class ParticipantSerializer(serializers.ModelSerializer):
    name = serializers.SerializerMethodField()
    has_profile = serializers.SerializerMethodField()

    class Meta:
        model = Participant
        fields = ['id', 'user', 'event', 'joined_at', 'name', 'has_profile']

    def _profile(self, obj):
        profiles = self.context.get('profiles', {})
        return profiles.get(obj.user_id)

    def get_name(self, obj):
        profile = self._profile(obj)
        return profile.name if profile else obj.user.get_full_name() or obj.user.username

    def get_has_profile(self, obj):
        return self._profile(obj) is not None


class MatchCandidateSerializer(serializers.ModelSerializer):
    target_profile = serializers.SerializerMethodField()

    class Meta:
        model = MatchCandidate
        fields = ['id', 'event', 'source_user', 'target_user', 'reasons', 'bucket', 'score', 'created_at', 'target_profile']

    def get_target_profile(self, obj):
        profiles = self.context.get('profiles', {})
        profile = profiles.get(obj.target_user_id)
        return ProfileSerializer(profile).data if profile else None


class ConnectionSerializer(serializers.ModelSerializer):
    other_user = serializers.SerializerMethodField()
    other_profile = serializers.SerializerMethodField()

    class Meta:
        model = Connection
        fields = ['id', 'event', 'user_a', 'user_b', 'status', 'created_at', 'updated_at', 'other_user', 'other_profile']

    def _viewer_id(self):
        request = self.context.get('request')
        return request.user.id if request else None

    def get_other_user(self, obj):
        return obj.other_user_id(self._viewer_id())

    def get_other_profile(self, obj):
        profiles = self.context.get('profiles', {})
        profile = profiles.get(obj.other_user_id(self._viewer_id()))
        return ProfileSerializer(profile).data if profile else None


class InterestSerializer(serializers.Serializer):
    target_user_id = serializers.IntegerField()


class DeclineSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
