# Generated for the audit log

from django.db import migrations, models
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='AuditLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('table_name', models.CharField(db_index=True, help_text='Tracked table that changed', max_length=100)),
                ('record_id', models.CharField(blank=True, db_index=True, help_text='ID of the changed row', max_length=64, null=True)),
                ('action', models.CharField(
                    choices=[
                        ('insert', 'Insert'),
                        ('update', 'Update'),
                        ('delete', 'Delete')
                    ],
                    db_index=True,
                    help_text='Type of change',
                    max_length=10
                )),
                ('actor_email', models.EmailField(blank=True, db_index=True, help_text='Who made the change (empty for system changes)', max_length=254, null=True)),
                ('old_data', models.JSONField(blank=True, help_text='Snapshot before the change', null=True)),
                ('new_data', models.JSONField(blank=True, help_text='Snapshot after the change', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='When the change happened')),
            ],
            options={
                'verbose_name': 'Audit Log',
                'verbose_name_plural': 'Audit Logs',
                'db_table': 'audit_log',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='auditlog',
            index=models.Index(fields=['table_name', 'record_id'], name='idx_audit_table_record'),
        ),
        migrations.AddIndex(
            model_name='auditlog',
            index=models.Index(fields=['action', '-created_at'], name='idx_audit_action_created'),
        ),
    ]
