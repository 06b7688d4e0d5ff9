from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='PathAlias',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('path', models.CharField(db_index=True, max_length=255)),
                ('alias', models.CharField(max_length=255, unique=True)),
            ],
            options={
                'verbose_name_plural': 'path aliases',
                'ordering': ['pk'],
            },
        ),
        migrations.CreateModel(
            name='ProtectedPage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('path', models.CharField(help_text='Relative path, e.g. "/node/5" or "/events/*"', max_length=255)),
                ('password', models.CharField(help_text='Hash made by django.contrib.auth.hashers', max_length=128)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['pk'],
                'permissions': [
                    ('bypass_pages_password_protection', 'Bypass pages password protection'),
                    ('administer_protected_pages', 'Administer protected pages'),
                ],
            },
        ),
    ]
