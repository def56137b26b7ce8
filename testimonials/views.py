import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from users.templatetags.profile_checks import is_profile_complete
from users.views import admin_required
from .forms import TestimonialForm
from .models import Testimonial

logger = logging.getLogger(__name__)


def testimonial_list(request):
    """Approved testimonials, newest first."""
    testimonials = Testimonial.objects.filter(is_approved=True).order_by('-created_at')
    return render(request, 'testimonials/list.html', {'testimonials': testimonials})


@login_required
def submit_testimonial(request):
    """
    Teachers with a completed profile can share their experience.
    It stays hidden until an administrator approves it.
    """
    if not is_profile_complete(request.user):
        messages.info(request, 'Please complete your profile before sharing a testimonial.')
        return redirect('users:profile_edit')

    if request.method == 'POST':
        form = TestimonialForm(request.POST)
        if form.is_valid():
            testimonial = Testimonial.from_profile(request.user.profile, form.cleaned_data['message'])
            testimonial.save()
            logger.info("Testimonial %s submitted by %s", testimonial.pk, request.user)
            messages.success(request, 'Thank you! Your testimonial will appear once it is approved.')
            return redirect('testimonials:list')
    else:
        form = TestimonialForm()

    return render(request, 'testimonials/form.html', {'form': form})


@admin_required
def moderation(request):
    testimonials = Testimonial.objects.select_related('user', 'approved_by').order_by('-created_at')
    return render(request, 'testimonials/moderation.html', {
        'pending': [t for t in testimonials if not t.is_approved],
        'approved': [t for t in testimonials if t.is_approved],
    })


@admin_required
@require_POST
def approve_testimonial(request, testimonial_id):
    testimonial = get_object_or_404(Testimonial, id=testimonial_id)
    testimonial.approve(request.user)
    messages.success(request, f'Testimonial from {testimonial.user_name} approved.')
    return redirect('testimonials:moderation')


@admin_required
@require_POST
def delete_testimonial(request, testimonial_id):
    testimonial = get_object_or_404(Testimonial, id=testimonial_id)
    testimonial.delete()
    messages.success(request, 'Testimonial deleted.')
    return redirect('testimonials:moderation')
