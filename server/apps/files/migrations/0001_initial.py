import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='File',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Display name chosen at upload time', max_length=255)),
                ('scope_kind', models.CharField(choices=[('personal', 'Personal'), ('organization', 'Organization')], max_length=16)),
                ('scope_id', models.CharField(help_text='User subject or organization id owning the file', max_length=255)),
                ('blob', models.FileField(help_text='Storage key in the blob store', max_length=255, upload_to='')),
                ('media_type', models.CharField(choices=[('image', 'Image'), ('pdf', 'PDF'), ('csv', 'CSV')], max_length=16)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'File',
                'verbose_name_plural': 'Files',
                'ordering': ['id'],
                'indexes': [
                    models.Index(fields=['scope_kind', 'scope_id'], name='files_scope_idx'),
                    models.Index(fields=['blob'], name='files_blob_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Favorite',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('scope_kind', models.CharField(choices=[('personal', 'Personal'), ('organization', 'Organization')], max_length=16)),
                ('scope_id', models.CharField(max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('account', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='favorites', to='accounts.account')),
                ('file', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='favorites', to='files.file')),
            ],
            options={
                'verbose_name': 'Favorite',
                'verbose_name_plural': 'Favorites',
                'ordering': ['id'],
                'indexes': [
                    models.Index(fields=['account', 'scope_kind', 'scope_id'], name='favorites_account_scope_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('account', 'scope_kind', 'scope_id', 'file'), name='favorites_account_scope_file_unique'),
                ],
            },
        ),
    ]
