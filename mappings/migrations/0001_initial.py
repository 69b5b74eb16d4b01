"""
Initial migration for the mappings app.

Creates Mapping with its channel join table, plus the CronLog and
CronLogMapping audit tables for scheduled runs.
"""
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("integrations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Mapping",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(blank=True, max_length=255, null=True)),
                (
                    "cadence",
                    models.CharField(
                        choices=[("daily", "Daily"), ("weekly", "Weekly"), ("monthly", "Monthly")],
                        default="daily",
                        max_length=16,
                    ),
                ),
                ("last_synced_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "hubspot_company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="mappings",
                        to="integrations.hubspotcompany",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="MappingSlackChannel",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "mapping",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="channel_links",
                        to="mappings.mapping",
                    ),
                ),
                (
                    "slack_channel",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="mapping_links",
                        to="integrations.slackchannel",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "unique_together": {("mapping", "slack_channel")},
            },
        ),
        migrations.AddField(
            model_name="mapping",
            name="slack_channels",
            field=models.ManyToManyField(
                related_name="mappings",
                through="mappings.MappingSlackChannel",
                to="integrations.slackchannel",
            ),
        ),
        migrations.AddIndex(
            model_name="mapping",
            index=models.Index(fields=["cadence"], name="mappings_ma_cadence_5c1d0e_idx"),
        ),
        migrations.CreateModel(
            name="CronLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("started_at", models.DateTimeField(auto_now_add=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("running", "Running"), ("completed", "Completed"), ("failed", "Failed")],
                        default="running",
                        max_length=20,
                    ),
                ),
                ("cadences", models.JSONField(blank=True, default=list)),
                (
                    "day_of_week",
                    models.PositiveSmallIntegerField(blank=True, help_text="0 = Sunday ... 6 = Saturday", null=True),
                ),
                ("day_of_month", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("last_day_of_month", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("mappings_found", models.PositiveIntegerField(default=0)),
                ("mappings_executed", models.PositiveIntegerField(default=0)),
                ("mappings_failed", models.PositiveIntegerField(default=0)),
                ("error_message", models.TextField(blank=True, null=True)),
            ],
            options={
                "ordering": ["-started_at", "-id"],
                "indexes": [models.Index(fields=["status", "started_at"], name="mappings_cr_status_8a2f41_idx")],
            },
        ),
        migrations.CreateModel(
            name="CronLogMapping",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=[("success", "Success"), ("failed", "Failed"), ("skipped", "Skipped")],
                        max_length=20,
                    ),
                ),
                ("error_message", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "cron_log",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="mappings",
                        to="mappings.cronlog",
                    ),
                ),
                (
                    "mapping",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cron_log_entries",
                        to="mappings.mapping",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
            },
        ),
    ]
