import re
from urllib.parse import quote

from django import template
from django.conf import settings

from home.matching import find_matches

register = template.Library()


@register.filter
def desired_zones(profile):
    """Desired zones for display, falling back to the single legacy zone."""
    zones = list(getattr(profile, 'desired_zones', None) or [])
    if zones:
        return zones
    legacy = getattr(profile, 'desired_zone', None)
    return [legacy] if legacy else []


@register.filter
def whatsapp_link(profile):
    """
    wa.me link with the greeting prefilled.
    Empty when the teacher hides their contact details or has no number.
    """
    if getattr(profile, 'hide_contact', False):
        return ''
    digits = re.sub(r'\D', '', getattr(profile, 'whatsapp_number', '') or '')
    if not digits:
        return ''
    return f"https://wa.me/{digits}?text={quote(settings.WHATSAPP_GREETING)}"


@register.filter
def contact_display(profile):
    if getattr(profile, 'hide_contact', False):
        return 'Hidden'
    return getattr(profile, 'whatsapp_number', '') or '-'


@register.inclusion_tag('home/partials/match_card.html')
def match_card(teacher):
    """
    Card for one matched teacher.
    Usage: {% match_card teacher %}
    """
    return {
        'teacher': teacher,
        'zones': desired_zones(teacher),
        'whatsapp_url': whatsapp_link(teacher),
        'contact': contact_display(teacher),
    }


@register.inclusion_tag('home/partials/matches_section.html', takes_context=True)
def get_user_matches(context, limit=3):
    """
    Short list of the current user's mutual matches.
    Usage: {% get_user_matches 3 %}
    """
    request = context.get('request')
    if not request or not hasattr(request, 'user') or not request.user.is_authenticated:
        return {'matches': [], 'total': 0}

    matches = find_matches(request.user)
    return {
        'matches': matches[:limit],
        'total': len(matches),
        'profile_complete': context.get('profile_complete', False),
    }
