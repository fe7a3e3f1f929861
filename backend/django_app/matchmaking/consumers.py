from channels.generic.websocket import AsyncJsonWebsocketConsumer

from .notifier import user_group


class NotificationConsumer(AsyncJsonWebsocketConsumer):
    async def connect(self):
        user = self.scope.get('user')
        if user is None or user.is_anonymous:
            await self.close()
            return

        self.group_name = user_group(user.id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()

    async def disconnect(self, code):
        group_name = getattr(self, 'group_name', None)
        if group_name:
            await self.channel_layer.group_discard(group_name, self.channel_name)

    async def matches_changed(self, event):
        await self.send_json({'type': 'matches.changed', **event.get('data', {})})

    async def connections_changed(self, event):
        await self.send_json({'type': 'connections.changed', **event.get('data', {})})
