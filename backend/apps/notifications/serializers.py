from rest_framework import serializers


class NotificationSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    title = serializers.CharField()
    message = serializers.CharField()
    kind = serializers.CharField()
    isRead = serializers.BooleanField(source="is_read")
    createdAt = serializers.CharField(source="created_at", allow_null=True)


class NotificationFeedSerializer(serializers.Serializer):
    items = NotificationSerializer(many=True)
    unreadCount = serializers.IntegerField(source="unread_count")


class MarkAllReadSerializer(serializers.Serializer):
    updated = serializers.IntegerField()
