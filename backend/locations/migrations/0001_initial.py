# Generated migration for locations app

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Country',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Official English country name', max_length=255)),
                ('alpha_2_code', models.CharField(blank=True, default='', help_text='ISO 3166-1 alpha-2 code', max_length=2)),
                ('alpha_3_code', models.CharField(blank=True, default='', help_text='ISO 3166-1 alpha-3 code', max_length=3)),
                ('other_name', models.CharField(blank=True, default='', help_text='Alternative or local name', max_length=255)),
                ('gdp', models.FloatField(blank=True, null=True)),
                ('avg_heat_index', models.FloatField(blank=True, null=True)),
            ],
            options={
                'db_table': 'locations_country',
                'ordering': ['name'],
                'verbose_name_plural': 'countries',
            },
        ),
        migrations.CreateModel(
            name='City',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('latitude', models.FloatField(blank=True, null=True)),
                ('longitude', models.FloatField(blank=True, null=True)),
                ('avg_temperature', models.FloatField(blank=True, help_text='Average temperature (Celsius) of the latest recorded year', null=True)),
                ('latest_temp_year', models.IntegerField(blank=True, null=True)),
                ('avg_food_price', models.FloatField(blank=True, help_text='Average price of a meal', null=True)),
                ('avg_gas_price', models.FloatField(blank=True, null=True)),
                ('avg_monthly_salary', models.FloatField(blank=True, null=True)),
                ('country', models.ForeignKey(help_text='Country the city belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='cities', to='locations.country')),
            ],
            options={
                'db_table': 'locations_city',
                'ordering': ['name'],
                'verbose_name_plural': 'cities',
                'indexes': [
                    models.Index(fields=['country'], name='city_country_idx'),
                    models.Index(fields=['avg_temperature'], name='city_avg_temp_idx'),
                    models.Index(fields=['avg_food_price'], name='city_food_price_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='POI',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='The official name of the place', max_length=255)),
                ('address', models.CharField(blank=True, default='', help_text='Human readable physical address', max_length=512)),
                ('latitude', models.FloatField(blank=True, null=True)),
                ('longitude', models.FloatField(blank=True, null=True)),
                ('primary_category', models.CharField(help_text='Primary category of the place', max_length=100)),
                ('city', models.ForeignKey(blank=True, help_text='Null for country-only POIs', null=True, on_delete=django.db.models.deletion.CASCADE, related_name='pois', to='locations.city')),
                ('country', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='pois', to='locations.country')),
            ],
            options={
                'db_table': 'locations_poi',
                'indexes': [
                    models.Index(fields=['city', 'primary_category'], name='poi_city_category_idx'),
                    models.Index(fields=['country', 'city'], name='poi_country_city_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Hotel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('rating', models.FloatField(blank=True, help_text='Star/guest rating, null when unrated', null=True)),
                ('address', models.CharField(blank=True, default='', max_length=512)),
                ('description', models.TextField(blank=True, default='')),
                ('city', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='hotels', to='locations.city')),
            ],
            options={
                'db_table': 'locations_hotel',
                'indexes': [
                    models.Index(fields=['city', 'rating'], name='hotel_city_rating_idx'),
                ],
            },
        ),
    ]
