from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('files', '0001_initial'),
    ]

    operations = [
        migrations.RemoveIndex(
            model_name='file',
            name='files_blob_idx',
        ),
        migrations.AlterField(
            model_name='file',
            name='blob',
            field=models.FileField(help_text='Storage key in the blob store', max_length=255, unique=True, upload_to=''),
        ),
    ]
