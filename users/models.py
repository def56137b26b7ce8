from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone


SUBJECTS = (
    'Sinhala', 'Tamil', 'English', 'Mathematics', 'Science', 'Social Studies',
    'Buddhism', 'Christianity', 'Islam', 'Hinduism', 'History', 'Geography',
    'Civic Education', 'Health & Physical Education', 'Art', 'Music', 'Dance',
    'Technology', 'Commerce', 'Accounting', 'Economics', 'Biology', 'Physics',
    'Chemistry', 'Combined Mathematics', 'ICT', 'Media Studies',
)

GRADES = (
    'Primary (1-5)', 'Secondary (6-11)', 'Advanced Level (12-13)',
)


class MyUserManager(BaseUserManager):
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Users must have an email address')
        user = self.model(email=self.normalize_email(email), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_admin', True)
        extra_fields.setdefault('is_superuser', True)
        return self.create_user(email, password, **extra_fields)


class MyUser(AbstractBaseUser, PermissionsMixin):
    email = models.EmailField(max_length=255, unique=True)
    phone_number = models.CharField(max_length=20, blank=True)
    # Only used to stop the same teacher registering twice, never shown to other users
    nic_number = models.CharField(max_length=12, unique=True, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    is_admin = models.BooleanField(default=False)
    date_joined = models.DateTimeField(default=timezone.now)

    objects = MyUserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    def __str__(self):
        return self.email

    @property
    def is_staff(self):
        return self.is_admin

    def get_full_name(self):
        profile = getattr(self, 'profile', None)
        return profile.full_name if profile and profile.full_name else ''


class TeacherProfileQuerySet(models.QuerySet):
    def completed(self):
        """Profiles visible to matching: completed and not owned by an admin."""
        return self.filter(profile_completed=True).exclude(user__is_admin=True)

    def candidates_for(self, profile):
        """The candidate pool for one querying profile, oldest first."""
        return self.completed().exclude(pk=profile.pk).select_related('user').order_by('created_at', 'pk')


class TeacherProfile(models.Model):
    Medium = (
        ('Sinhala', 'Sinhala'),
        ('Tamil', 'Tamil'),
        ('English', 'English'),
    )
    SchoolType = (
        ('National', 'National'),
        ('Provincial', 'Provincial'),
    )
    Subject = tuple((s, s) for s in SUBJECTS)
    Grade = tuple((g, g) for g in GRADES)

    user = models.OneToOneField(MyUser, on_delete=models.CASCADE, related_name='profile')
    full_name = models.CharField(max_length=255, blank=True)
    subject = models.CharField(max_length=100, choices=Subject, blank=True)
    medium_of_instruction = models.CharField(max_length=20, choices=Medium, default='Sinhala')

    current_province = models.CharField(max_length=100, blank=True)
    current_district = models.CharField(max_length=100, blank=True)
    current_zone = models.CharField(max_length=100, blank=True)
    current_school = models.CharField(max_length=255, blank=True)

    desired_province = models.CharField(max_length=100, blank=True)
    desired_district = models.CharField(max_length=100, blank=True)
    # Single zone from before multi-zone preferences existed, kept for old records
    desired_zone = models.CharField(max_length=100, blank=True)
    desired_zones = models.JSONField(default=list, blank=True)

    grade_taught = models.CharField(max_length=50, choices=Grade, blank=True)
    school_type = models.CharField(max_length=20, choices=SchoolType, default='National')
    whatsapp_number = models.CharField(max_length=20, blank=True)
    hide_contact = models.BooleanField(default=False)

    profile_completed = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TeacherProfileQuerySet.as_manager()

    class Meta:
        verbose_name = "Teacher Profile"
        verbose_name_plural = "Teacher Profiles"

    def __str__(self):
        return self.full_name or str(self.user)

    @property
    def is_admin(self):
        return self.user.is_admin

    def save(self, *args, **kwargs):
        # Keep first occurrence of each zone, drop blanks
        seen = []
        for zone in self.desired_zones or []:
            if zone and zone not in seen:
                seen.append(zone)
        self.desired_zones = seen
        super().save(*args, **kwargs)
