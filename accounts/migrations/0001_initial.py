import uuid

import django.db.models.functions.text
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='StorefrontUser',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('seller_id', models.CharField(db_index=True, help_text='Seller/tenant whose storefront this account belongs to', max_length=64)),
                ('name', models.CharField(blank=True, default='', max_length=255)),
                ('email', models.EmailField(max_length=254)),
                ('password_hash', models.CharField(max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'storefront_users',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddConstraint(
            model_name='storefrontuser',
            constraint=models.UniqueConstraint(
                models.F('seller_id'),
                django.db.models.functions.text.Lower('email'),
                name='unique_storefront_email_per_seller',
            ),
        ),
    ]
