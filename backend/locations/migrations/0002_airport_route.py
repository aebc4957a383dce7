# Generated migration for locations app

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    dependencies = [
        ('locations', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Airport',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('iata_code', models.CharField(blank=True, default='', help_text='IATA airport code', max_length=3)),
                ('latitude', models.FloatField(blank=True, null=True)),
                ('longitude', models.FloatField(blank=True, null=True)),
                ('city', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='airports', to='locations.city')),
            ],
            options={
                'db_table': 'locations_airport',
                'indexes': [models.Index(fields=['city'], name='airport_city_idx')],
            },
        ),
        migrations.CreateModel(
            name='Route',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('airline', models.CharField(blank=True, default='', max_length=100)),
                ('stops', models.PositiveSmallIntegerField(default=0, help_text='0 for a direct flight')),
                ('source', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='departures', to='locations.airport')),
                ('destination', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='arrivals', to='locations.airport')),
            ],
            options={
                'db_table': 'locations_route',
                'indexes': [models.Index(fields=['source', 'stops'], name='route_source_stops_idx')],
            },
        ),
    ]
