import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Guild',
            fields=[
                ('guild_id', models.CharField(max_length=64, primary_key=True, serialize=False)),
                ('total_folders', models.IntegerField(default=0)),
                ('total_files', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Guild',
                'verbose_name_plural': 'Guilds',
                'db_table': 'guilds',
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('total_folders__gte', 0)), name='guilds_total_folders_non_negative'),
                    models.CheckConstraint(condition=models.Q(('total_files__gte', 0)), name='guilds_total_files_non_negative'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Folder',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(db_column='folder_name', max_length=255)),
                ('description', models.TextField(default='No description provided')),
                ('created_by', models.CharField(max_length=150)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('guild', models.ForeignKey(db_column='guild_id', db_constraint=False, on_delete=django.db.models.deletion.DO_NOTHING, related_name='folders', to='filesystem.guild')),
            ],
            options={
                'verbose_name': 'Folder',
                'verbose_name_plural': 'Folders',
                'db_table': 'folders',
                'ordering': ['id'],
                'indexes': [models.Index(fields=['guild', 'name'], name='folders_guild_name_idx')],
            },
        ),
        migrations.CreateModel(
            name='File',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(db_column='file_name', max_length=255)),
                ('content', models.TextField(blank=True, default='')),
                ('file_type', models.CharField(blank=True, default='', help_text='Lowercase extension without dot', max_length=255)),
                ('size', models.IntegerField(default=0, help_text='Content size in bytes')),
                ('created_by', models.CharField(max_length=150)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('folder', models.ForeignKey(db_column='folder_id', on_delete=django.db.models.deletion.CASCADE, related_name='files', to='filesystem.folder')),
            ],
            options={
                'verbose_name': 'File',
                'verbose_name_plural': 'Files',
                'db_table': 'files',
                'ordering': ['id'],
                'indexes': [models.Index(fields=['folder', 'name'], name='files_folder_name_idx')],
            },
        ),
    ]
