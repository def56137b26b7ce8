from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='MyUser',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('email', models.EmailField(max_length=255, unique=True)),
                ('phone_number', models.CharField(blank=True, max_length=20)),
                ('nic_number', models.CharField(blank=True, max_length=12, null=True, unique=True)),
                ('is_active', models.BooleanField(default=True)),
                ('is_admin', models.BooleanField(default=False)),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now)),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='TeacherProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('full_name', models.CharField(blank=True, max_length=255)),
                ('subject', models.CharField(blank=True, choices=[('Sinhala', 'Sinhala'), ('Tamil', 'Tamil'), ('English', 'English'), ('Mathematics', 'Mathematics'), ('Science', 'Science'), ('Social Studies', 'Social Studies'), ('Buddhism', 'Buddhism'), ('Christianity', 'Christianity'), ('Islam', 'Islam'), ('Hinduism', 'Hinduism'), ('History', 'History'), ('Geography', 'Geography'), ('Civic Education', 'Civic Education'), ('Health & Physical Education', 'Health & Physical Education'), ('Art', 'Art'), ('Music', 'Music'), ('Dance', 'Dance'), ('Technology', 'Technology'), ('Commerce', 'Commerce'), ('Accounting', 'Accounting'), ('Economics', 'Economics'), ('Biology', 'Biology'), ('Physics', 'Physics'), ('Chemistry', 'Chemistry'), ('Combined Mathematics', 'Combined Mathematics'), ('ICT', 'ICT'), ('Media Studies', 'Media Studies')], max_length=100)),
                ('medium_of_instruction', models.CharField(choices=[('Sinhala', 'Sinhala'), ('Tamil', 'Tamil'), ('English', 'English')], default='Sinhala', max_length=20)),
                ('current_province', models.CharField(blank=True, max_length=100)),
                ('current_district', models.CharField(blank=True, max_length=100)),
                ('current_zone', models.CharField(blank=True, max_length=100)),
                ('current_school', models.CharField(blank=True, max_length=255)),
                ('desired_province', models.CharField(blank=True, max_length=100)),
                ('desired_district', models.CharField(blank=True, max_length=100)),
                ('desired_zone', models.CharField(blank=True, max_length=100)),
                ('desired_zones', models.JSONField(blank=True, default=list)),
                ('grade_taught', models.CharField(blank=True, choices=[('Primary (1-5)', 'Primary (1-5)'), ('Secondary (6-11)', 'Secondary (6-11)'), ('Advanced Level (12-13)', 'Advanced Level (12-13)')], max_length=50)),
                ('school_type', models.CharField(choices=[('National', 'National'), ('Provincial', 'Provincial')], default='National', max_length=20)),
                ('whatsapp_number', models.CharField(blank=True, max_length=20)),
                ('hide_contact', models.BooleanField(default=False)),
                ('profile_completed', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to='users.myuser')),
            ],
            options={
                'verbose_name': 'Teacher Profile',
                'verbose_name_plural': 'Teacher Profiles',
            },
        ),
    ]
