import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


PROPERTY_TYPES = [('condo', 'Condo'), ('house', 'House'), ('villa', 'Villa'), ('land', 'Land')]
LISTING_TYPES = [('sale', 'For Sale'), ('rent', 'For Rent')]
STATUSES = [('active', 'Active'), ('pending', 'Pending'), ('sold', 'Sold'), ('rented', 'Rented')]
OWNER_TYPES = [('Owner', 'Owner'), ('Agent', 'Agent')]
QUOTAS = [('Thai', 'Thai'), ('Foreign', 'Foreign'), ('Limited Company', 'Limited Company')]
TRANSFER_COSTS = [('Seller Pays', 'Seller Pays'), ('Buyer Pays', 'Buyer Pays'), ('Shared 50/50', 'Shared 50/50')]


def feature_fields():
    return [
        ('views', models.JSONField(blank=True, default=list)),
        ('private_features', models.JSONField(blank=True, default=list)),
        ('rooms_spaces', models.JSONField(blank=True, default=list)),
        ('communal_facilities', models.JSONField(blank=True, default=list)),
        ('technical_equipment', models.JSONField(blank=True, default=list)),
        ('security', models.JSONField(blank=True, default=list)),
        ('location_features', models.JSONField(blank=True, default=list)),
        ('kitchen_features', models.JSONField(blank=True, default=list)),
        ('layout_features', models.JSONField(blank=True, default=list)),
        ('furnishing_status', models.CharField(blank=True, max_length=50, null=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Property',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('title_de', models.CharField(blank=True, max_length=255, null=True)),
                ('title_th', models.CharField(blank=True, max_length=255, null=True)),
                ('title_ru', models.CharField(blank=True, max_length=255, null=True)),
                ('title_fr', models.CharField(blank=True, max_length=255, null=True)),
                ('slug', models.SlugField(help_text='URL identifier, generated from the title', max_length=280, unique=True)),
                ('description', models.TextField(blank=True, default='')),
                ('description_de', models.TextField(blank=True, null=True)),
                ('description_th', models.TextField(blank=True, null=True)),
                ('description_ru', models.TextField(blank=True, null=True)),
                ('description_fr', models.TextField(blank=True, null=True)),
                ('price', models.PositiveBigIntegerField(help_text='Price in THB')),
                ('location', models.CharField(help_text="Area, e.g. 'Wongamat Beach'", max_length=255)),
                ('bedrooms', models.PositiveSmallIntegerField(default=0, help_text='0 for studios')),
                ('bathrooms', models.PositiveSmallIntegerField(default=1)),
                ('area', models.FloatField(help_text='Living area in sqm', validators=[django.core.validators.MinValueValidator(0)])),
                ('floor', models.IntegerField(blank=True, null=True)),
                ('property_type', models.CharField(choices=PROPERTY_TYPES, max_length=20)),
                ('listing_type', models.CharField(choices=LISTING_TYPES, max_length=10)),
                ('status', models.CharField(choices=STATUSES, db_index=True, default='active', max_length=20)),
                ('images', models.JSONField(blank=True, default=list)),
                ('features', models.JSONField(blank=True, default=list)),
                ('latitude', models.FloatField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(-90), django.core.validators.MaxValueValidator(90)])),
                ('longitude', models.FloatField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(-180), django.core.validators.MaxValueValidator(180)])),
                ('owner_name', models.CharField(blank=True, max_length=255, null=True)),
                ('owner_line', models.CharField(blank=True, max_length=100, null=True)),
                ('owner_phone', models.CharField(blank=True, max_length=50, null=True)),
                ('owner_email', models.EmailField(blank=True, max_length=254, null=True)),
                ('owner_type', models.CharField(blank=True, choices=OWNER_TYPES, max_length=20, null=True)),
                ('commission', models.FloatField(default=3.0, help_text='Commission rate in %')),
                ('short_term_let', models.BooleanField(default=False)),
                ('quota', models.CharField(blank=True, choices=QUOTAS, max_length=30, null=True)),
                ('land_size', models.CharField(blank=True, help_text='Land size in sq. wah', max_length=50, null=True)),
                *feature_fields(),
                ('maintenance_charges', models.IntegerField(blank=True, help_text='THB per month', null=True)),
                ('common_area_fee', models.FloatField(blank=True, help_text='THB per sqm per month', null=True)),
                ('transfer_costs', models.CharField(blank=True, choices=TRANSFER_COSTS, max_length=30, null=True)),
                ('available_from', models.CharField(blank=True, max_length=100, null=True)),
                ('special_remarks', models.TextField(blank=True, null=True)),
                ('import_source', models.CharField(blank=True, max_length=100, null=True)),
                ('import_date', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Property',
                'verbose_name_plural': 'Properties',
                'db_table': 'properties',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['listing_type', 'status'], name='properties_listing_64b1f0_idx'),
                    models.Index(fields=['property_type'], name='properties_propert_0d5c2a_idx'),
                    models.Index(fields=['location'], name='properties_locatio_8e9f21_idx'),
                    models.Index(fields=['price'], name='properties_price_3b7a4d_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Project',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('name_de', models.CharField(blank=True, max_length=255, null=True)),
                ('name_th', models.CharField(blank=True, max_length=255, null=True)),
                ('name_ru', models.CharField(blank=True, max_length=255, null=True)),
                ('name_fr', models.CharField(blank=True, max_length=255, null=True)),
                ('slug', models.SlugField(help_text='URL identifier, generated from the name', max_length=280, unique=True)),
                ('description', models.TextField(blank=True, default='')),
                ('description_de', models.TextField(blank=True, null=True)),
                ('description_th', models.TextField(blank=True, null=True)),
                ('description_ru', models.TextField(blank=True, null=True)),
                ('description_fr', models.TextField(blank=True, null=True)),
                ('location', models.CharField(max_length=255)),
                ('developer', models.CharField(max_length=255)),
                ('completion', models.CharField(help_text="Completion date or quarter, e.g. 'Q4 2026'", max_length=50)),
                ('units', models.PositiveIntegerField(default=0)),
                ('price_from', models.PositiveBigIntegerField(default=0, help_text='Starting price in THB')),
                ('images', models.JSONField(blank=True, default=list)),
                ('amenities', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Project',
                'verbose_name_plural': 'Projects',
                'db_table': 'projects',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['location'], name='projects_locatio_5c1d7e_idx'),
                    models.Index(fields=['developer'], name='projects_develop_a2f9b3_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='PropertyTemplate',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, null=True)),
                ('property_type', models.CharField(choices=PROPERTY_TYPES, max_length=20)),
                ('listing_type', models.CharField(blank=True, choices=LISTING_TYPES, max_length=10, null=True)),
                ('location', models.CharField(blank=True, max_length=255, null=True)),
                *feature_fields(),
                ('commission', models.FloatField(default=3.0)),
                ('short_term_let', models.BooleanField(default=False)),
                ('quota', models.CharField(blank=True, choices=QUOTAS, max_length=30, null=True)),
                ('transfer_costs', models.CharField(blank=True, choices=TRANSFER_COSTS, max_length=30, null=True)),
                ('usage_count', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='property_templates', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Property Template',
                'verbose_name_plural': 'Property Templates',
                'db_table': 'property_templates',
                'ordering': ['-usage_count', '-updated_at'],
            },
        ),
    ]
