# Generated manually for add-ons app

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Plugin',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('bundle', models.CharField(help_text='Dotted package name of the plugin', max_length=255, unique=True)),
                ('description', models.TextField(blank=True)),
                ('version', models.CharField(blank=True, max_length=50)),
                ('is_enabled', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'addons_plugin',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='IntegrationSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, unique=True)),
                ('is_published', models.BooleanField(default=False)),
                ('supported_features', models.JSONField(blank=True, default=list, help_text='Feature tags enabled for this integration')),
                ('feature_settings', models.JSONField(blank=True, default=dict)),
                ('api_keys', models.JSONField(blank=True, default=dict)),
                ('priority', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('plugin', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='integrations', to='addons.plugin')),
            ],
            options={
                'db_table': 'addons_integration_settings',
                'ordering': ['priority', 'name'],
                'verbose_name_plural': 'integration settings',
            },
        ),
    ]
