from django.db import models


class StoredState(models.Model):
    """One JSON blob per (owner, key): the durable backing of per-user client state."""

    owner = models.CharField(max_length=64)
    key = models.CharField(max_length=64)
    payload = models.JSONField(default=None, null=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "stored_state"
        unique_together = ("owner", "key")

    def __str__(self):
        return f"{self.owner}:{self.key}"
