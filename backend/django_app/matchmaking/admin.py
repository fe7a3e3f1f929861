from django.contrib import admin
from .models import Connection, Event, MatchCandidate, Participant, Profile


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ('name', 'code', 'host', 'start_date', 'created_at')
    search_fields = ('name', 'code')


@admin.register(Connection)
class ConnectionAdmin(admin.ModelAdmin):
    list_display = ('event', 'user_a', 'user_b', 'status', 'updated_at')
    list_filter = ('status',)


admin.site.register(Participant)
admin.site.register(Profile)
admin.site.register(MatchCandidate)
