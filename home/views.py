import logging

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import render
from django.views.decorators.http import require_GET

from testimonials.models import Testimonial
from users.models import TeacherProfile
from users.templatetags.profile_checks import is_profile_complete
from .forms import MatchFilterForm
from .matching import find_mutual_matches
from .zones import list_districts, list_zones

logger = logging.getLogger(__name__)


def landing_page(request):
    """
    Public landing page with a few approved testimonials and the number of
    teachers already on the platform.
    """
    testimonials = Testimonial.objects.filter(is_approved=True).order_by('-created_at')[:3]
    teacher_count = TeacherProfile.objects.completed().count()

    return render(request, "home/landing.html", {
        'testimonials': testimonials,
        'teacher_count': teacher_count,
    })


@login_required
def match_finder(request):
    """
    Teachers whose current posting is where the user wants to go and who want
    to come to the user's posting, optionally narrowed by the filter form.
    """
    user = request.user
    if not is_profile_complete(user):
        return render(request, 'home/match_finder.html', {
            'profile_complete': False,
        })

    form = MatchFilterForm(request.GET)
    match_filter = form.to_filter()

    profile = user.profile
    candidates = TeacherProfile.objects.candidates_for(profile)
    matches = find_mutual_matches(profile, candidates, match_filter)
    logger.info("Match finder for %s returned %d matches", user, len(matches))

    return render(request, 'home/match_finder.html', {
        'profile_complete': True,
        'form': form,
        'match_filter': match_filter,
        'matches': matches,
        'match_count': len(matches),
    })


@require_GET
def get_districts(request):
    """API endpoint to get districts for a given province."""
    province = request.GET.get('province', '')
    return JsonResponse({'districts': list_districts(province)})


@require_GET
def get_zones(request):
    """API endpoint to get zones for a given province and district."""
    province = request.GET.get('province', '')
    district = request.GET.get('district', '')
    return JsonResponse({'zones': list_zones(province, district)})
