from django.contrib import admin
from django.contrib.admin import SimpleListFilter
from django.urls import reverse
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from home.matching import find_mutual_matches
from .models import MyUser, TeacherProfile


class PotentialSwapMatchFilter(SimpleListFilter):
    """Narrow the profile list to the mutual matches of one teacher."""
    title = _('Potential Swap Matches')
    parameter_name = 'potential_swap_match'

    def lookups(self, request, model_admin):
        teachers = TeacherProfile.objects.completed().select_related('user').order_by('full_name')
        return [(str(p.pk), f"{p.user.email} - {p.full_name or 'No name'}")
                for p in teachers[:50]]  # Limit to 50 for performance

    def queryset(self, request, queryset):
        if not self.value():
            return queryset

        try:
            selected = TeacherProfile.objects.select_related('user').get(pk=self.value())
        except (TeacherProfile.DoesNotExist, ValueError):
            return queryset.none()

        pool = TeacherProfile.objects.candidates_for(selected)
        match_ids = [p.pk for p in find_mutual_matches(selected, pool)]
        return queryset.filter(pk__in=match_ids)


@admin.register(MyUser)
class MyUserAdmin(admin.ModelAdmin):
    list_display = ('email', 'get_full_name', 'phone_number', 'is_admin', 'is_active', 'date_joined')
    list_filter = ('is_admin', 'is_active', 'date_joined')
    search_fields = ('email', 'phone_number', 'profile__full_name')
    ordering = ('-date_joined',)
    # NIC is kept out of the list, it is only for duplicate checks
    exclude = ('password',)
    readonly_fields = ('last_login', 'date_joined')

    def get_full_name(self, obj):
        return obj.get_full_name() or 'No Name'
    get_full_name.short_description = 'Full name'


@admin.register(TeacherProfile)
class TeacherProfileAdmin(admin.ModelAdmin):
    list_display = (
        'full_name',
        'user',
        'subject',
        'get_current_location',
        'get_desired_location',
        'profile_completed',
        'get_potential_matches_count',
        'created_at',
    )
    list_filter = (PotentialSwapMatchFilter, 'profile_completed', 'subject', 'current_province', 'desired_province')
    search_fields = ('user__email', 'full_name', 'current_school', 'current_zone')
    ordering = ('-created_at',)
    readonly_fields = ('created_at', 'updated_at')

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user')

    def get_current_location(self, obj):
        parts = [obj.current_zone, obj.current_district, obj.current_province]
        return ', '.join(p for p in parts if p) or 'No location set'
    get_current_location.short_description = 'Current'

    def get_desired_location(self, obj):
        zones = ' / '.join(obj.desired_zones) or obj.desired_zone
        parts = [zones, obj.desired_district, obj.desired_province]
        return ', '.join(p for p in parts if p) or 'No location set'
    get_desired_location.short_description = 'Desired'

    def get_potential_matches_count(self, obj):
        """Number of mutual matches, linking to the filtered list."""
        if not obj.profile_completed or obj.is_admin:
            return "Profile incomplete"
        count = len(find_mutual_matches(obj, TeacherProfile.objects.candidates_for(obj)))
        if count > 0:
            url = (
                reverse('admin:users_teacherprofile_changelist') +
                f'?potential_swap_match={obj.pk}'
            )
            return format_html('<a href="{}">{} potential {}</a>',
                               url, count, 'match' if count == 1 else 'matches')
        return "No matches"
    get_potential_matches_count.short_description = 'Potential Matches'
