"""
Initial migration for the meetings app.

Creates the FireHookLog webhook audit table and MeetingNote.
"""
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="FireHookLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateTimeField(auto_now_add=True)),
                ("event_type", models.CharField(blank=True, max_length=128, null=True)),
                ("meeting_id", models.CharField(blank=True, db_index=True, max_length=128, null=True)),
                ("client_reference_id", models.CharField(blank=True, max_length=255, null=True)),
                ("payload", models.JSONField(blank=True, default=dict)),
                ("processed", models.BooleanField(default=False)),
                ("is_authentic", models.BooleanField(blank=True, null=True)),
                ("computed_signature", models.CharField(blank=True, max_length=128, null=True)),
                ("received_signature", models.CharField(blank=True, max_length=255, null=True)),
                ("error_message", models.TextField(blank=True, null=True)),
            ],
            options={
                "ordering": ["-date", "-id"],
            },
        ),
        migrations.CreateModel(
            name="MeetingNote",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("meeting_id", models.CharField(max_length=128, unique=True)),
                ("title", models.CharField(blank=True, max_length=500, null=True)),
                ("notes", models.TextField(blank=True, null=True)),
                ("transcript_url", models.URLField(blank=True, max_length=1000, null=True)),
                ("summary", models.TextField(blank=True, null=True)),
                ("participants", models.JSONField(blank=True, default=list)),
                ("duration", models.PositiveIntegerField(blank=True, help_text="Minutes, rounded.", null=True)),
                ("meeting_date", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-meeting_date", "-created_at", "-id"],
            },
        ),
    ]
