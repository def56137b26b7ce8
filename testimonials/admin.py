from django.contrib import admin

from .models import Testimonial


@admin.register(Testimonial)
class TestimonialAdmin(admin.ModelAdmin):
    list_display = ('user_name', 'user_district', 'user_zone', 'is_approved', 'created_at', 'approved_by')
    list_filter = ('is_approved', 'user_district')
    search_fields = ('user_name', 'message', 'user__email')
    readonly_fields = ('created_at', 'approved_at', 'approved_by')
    actions = ['approve_selected']

    def approve_selected(self, request, queryset):
        for testimonial in queryset.filter(is_approved=False):
            testimonial.approve(request.user)
    approve_selected.short_description = 'Approve selected testimonials'
