from django.conf import settings
from django.db import models
from django.utils import timezone

User = settings.AUTH_USER_MODEL


class Testimonial(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='testimonials')
    user_name = models.CharField(max_length=255)
    user_initials = models.CharField(max_length=10)
    user_school = models.CharField(max_length=255, blank=True)
    user_district = models.CharField(max_length=100, blank=True)
    user_zone = models.CharField(max_length=100, blank=True)
    message = models.TextField()
    is_approved = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    approved_at = models.DateTimeField(null=True, blank=True)
    approved_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='approved_testimonials'
    )

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user_name} ({'approved' if self.is_approved else 'pending'})"

    @staticmethod
    def initials_for(full_name):
        """'Nimal Perera' -> 'NP'"""
        return ''.join(part[0].upper() for part in (full_name or '').split() if part)[:3]

    @classmethod
    def from_profile(cls, profile, message):
        """Unsaved testimonial with the author details copied from their profile."""
        return cls(
            user=profile.user,
            user_name=profile.full_name,
            user_initials=cls.initials_for(profile.full_name),
            user_school=profile.current_school,
            user_district=profile.current_district,
            user_zone=profile.current_zone,
            message=message,
        )

    def approve(self, admin_user):
        self.is_approved = True
        self.approved_at = timezone.now()
        self.approved_by = admin_user
        self.save(update_fields=['is_approved', 'approved_at', 'approved_by'])
