import logging
from functools import wraps

from django.contrib import messages
from django.contrib.auth import authenticate, login, logout
from django.contrib.auth.decorators import login_required
from django.db import transaction
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from home.error_views import error_page
from home.matching import find_all_mutual_pairs, find_mutual_matches
from home.stats import compute_stats, platform_stats
from testimonials.models import Testimonial
from .forms import MyAuthenticationForm, MyUserCreationForm, TeacherProfileForm
from .models import MyUser, TeacherProfile
from .templatetags.profile_checks import is_profile_complete, profile_completion

logger = logging.getLogger(__name__)


def admin_required(view_func):
    """
    Decorator for views only administrators may open.
    Anonymous users go to the login page, other teachers get a 403.
    """
    @wraps(view_func)
    @login_required
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_admin:
            logger.warning("Non-admin %s tried to open %s", request.user, request.path)
            return error_page(request, 'forbidden')
        return view_func(request, *args, **kwargs)
    return _wrapped


def login_view(request):
    if request.user.is_authenticated:
        next_url = request.GET.get('next') or request.POST.get('next')
        return redirect(next_url or 'users:dashboard')

    if request.method == 'POST':
        form = MyAuthenticationForm(request, data=request.POST)
        if form.is_valid():
            email = form.cleaned_data.get('username')
            password = form.cleaned_data.get('password')
            user = authenticate(request, username=email, password=password)
            if user is not None:
                login(request, user)
                messages.success(request, f'Welcome back, {email}!')

                # Teachers who never finished the profile editor go there first
                if not user.is_admin and not is_profile_complete(user):
                    messages.info(request, 'Please complete your profile to find matching teachers.')
                    return redirect('users:profile_edit')

                next_url = request.GET.get('next') or request.POST.get('next')
                return redirect(next_url or 'users:dashboard')
            else:
                messages.error(request, 'Invalid email or password.')
        else:
            messages.error(request, 'Invalid email or password.')
    else:
        form = MyAuthenticationForm()

    context = {'form': form, 'next': request.GET.get('next')}
    return render(request, 'users/login.html', context)


def signup_view(request):
    if request.user.is_authenticated:
        return redirect('users:dashboard')

    if request.method == 'POST':
        form = MyUserCreationForm(request.POST)
        if form.is_valid():
            with transaction.atomic():
                user = form.save()
                TeacherProfile.objects.create(user=user)
            login(request, user, backend='django.contrib.auth.backends.ModelBackend')
            logger.info("New teacher registered: %s", user.email)
            messages.success(request, 'Account created successfully! Please complete your profile.')
            return redirect('users:profile_edit')
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        form = MyUserCreationForm()

    return render(request, 'users/signup.html', {'form': form})


@login_required
def logout_view(request):
    logout(request)
    messages.success(request, 'You have been logged out successfully.')
    return redirect('home:home')


@login_required
def profile_view(request):
    profile, created = TeacherProfile.objects.get_or_create(user=request.user)
    context = {
        'profile': profile,
        'completion_percentage': profile_completion(request.user),
    }
    return render(request, 'users/profile.html', context)


@login_required
def profile_edit_view(request):
    profile, created = TeacherProfile.objects.get_or_create(user=request.user)

    if request.method == 'POST':
        form = TeacherProfileForm(request.POST, instance=profile)
        if form.is_valid():
            form.save()
            messages.success(request, 'Your profile has been updated successfully!')
            return redirect('users:dashboard')
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        form = TeacherProfileForm(instance=profile)

    return render(request, 'users/profile_edit.html', {'form': form, 'profile': profile})


@login_required
def dashboard(request):
    """Transfer matching overview for the logged-in teacher."""
    user = request.user
    profile_complete = is_profile_complete(user)

    context = {
        'user': user,
        'profile_complete': profile_complete,
        'completion_percentage': profile_completion(user),
        'stats': None,
    }

    if not profile_complete:
        context['potential_matches_message'] = (
            "Complete your profile to see potential matches."
        )
        return render(request, 'users/dashboard.html', context)

    profile = user.profile
    candidates = list(TeacherProfile.objects.candidates_for(profile))
    context['stats'] = compute_stats(profile, candidates)
    return render(request, 'users/dashboard.html', context)


@admin_required
def admin_users_view(request):
    """All teachers (administrators excluded), newest first, with their match counts."""
    profiles = list(
        TeacherProfile.objects.select_related('user')
        .exclude(user__is_admin=True)
        .order_by('-created_at')
    )
    pool = [p for p in profiles if p.profile_completed]

    teachers = []
    for profile in profiles:
        teachers.append({
            'profile': profile,
            'user': profile.user,
            'potential_matches': len(find_mutual_matches(profile, pool)),
        })

    context = {
        'title': 'User Management',
        'teachers': teachers,
        'stats': platform_stats(profiles),
        'pending_testimonials': Testimonial.objects.filter(is_approved=False).count(),
        'approved_testimonials': Testimonial.objects.filter(is_approved=True).count(),
    }
    return render(request, 'users/admin/user_management.html', context)


@admin_required
@require_POST
def admin_delete_user_view(request, user_id):
    user = get_object_or_404(MyUser, id=user_id)
    if user.is_admin:
        messages.error(request, 'Administrator accounts cannot be deleted here.')
        return redirect('users:admin_users')

    email = user.email
    user.delete()
    logger.info("Admin %s deleted teacher %s", request.user, email)
    messages.success(request, f'User {email} has been deleted successfully.')
    return redirect('users:admin_users')


@admin_required
def matched_swaps(request):
    """Every pair of teachers who could swap with each other right now."""
    pool = TeacherProfile.objects.completed().select_related('user').order_by('created_at', 'pk')
    pairs = find_all_mutual_pairs(pool)
    context = {
        'title': 'Matched Swaps',
        'pairs': pairs,
        'total_pairs': len(pairs),
    }
    return render(request, 'users/admin/matched_swaps.html', context)
