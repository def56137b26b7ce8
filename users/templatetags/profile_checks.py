from django import template

register = template.Library()

# Fields a teacher has to fill before other teachers can match with them
REQUIRED_PROFILE_FIELDS = (
    'full_name',
    'subject',
    'grade_taught',
    'current_province',
    'current_district',
    'current_zone',
    'current_school',
    'desired_province',
    'desired_district',
    'whatsapp_number',
)


def get_profile(user):
    if not user or not getattr(user, 'is_authenticated', False):
        return None
    return getattr(user, 'profile', None)


@register.filter
def is_profile_complete(user):
    """
    Check if a user can take part in matching.

    The profile must have been saved through the profile editor and the
    teacher must not be an administrator.
    """
    profile = get_profile(user)
    if profile is None:
        return False
    if user.is_admin:
        return False
    return bool(profile.profile_completed)


@register.filter
def profile_completion(user):
    """Percentage (0-100) of required profile fields that are filled in."""
    profile = get_profile(user)
    if profile is None:
        return 0

    filled = sum(1 for name in REQUIRED_PROFILE_FIELDS if getattr(profile, name, None))
    # Desired zones count as one more section
    total = len(REQUIRED_PROFILE_FIELDS) + 1
    if profile.desired_zones or profile.desired_zone:
        filled += 1
    return int(round(filled * 100.0 / total))
