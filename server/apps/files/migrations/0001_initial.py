import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='File',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('filename', models.CharField(help_text='Original filename as uploaded', max_length=1024)),
                ('mime_type', models.CharField(help_text='MIME type reported by the uploader', max_length=255)),
                ('size', models.BigIntegerField(help_text='File size in bytes')),
                ('storage_key', models.CharField(help_text='Object key in blob storage', max_length=1024, unique=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'File',
                'verbose_name_plural': 'Files',
                'db_table': 'files',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user', '-created_at'], name='files_user_recent_idx'),
                    models.Index(fields=['user', 'storage_key'], name='files_user_key_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='UserUsage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('storage_used_bytes', models.BigIntegerField(default=0, help_text='Bytes currently stored')),
                ('bandwidth_used_bytes', models.BigIntegerField(default=0, help_text='Bytes served to date')),
                ('last_updated', models.DateTimeField(default=django.utils.timezone.now)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='usage', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'User Usage',
                'verbose_name_plural': 'User Usage',
                'db_table': 'user_usage',
            },
        ),
    ]
