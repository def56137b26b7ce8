from django.urls import path
from django.contrib.auth import views as auth_views

from . import views

app_name = 'users'


urlpatterns = [
    path('login/', views.login_view, name='login'),
    path('signup/', views.signup_view, name='signup'),
    path('logout/', views.logout_view, name='logout'),
    path('profile/', views.profile_view, name='profile'),
    path('profile/edit/', views.profile_edit_view, name='profile_edit'),
    path('dashboard/', views.dashboard, name='dashboard'),

    # Administration
    path('admin/users/', views.admin_users_view, name='admin_users'),
    path('admin/users/<int:user_id>/delete/', views.admin_delete_user_view, name='admin_delete_user'),
    path('admin/matched-swaps/', views.matched_swaps, name='matched_swaps'),

    # Django built-in password change
    path('password/change/', auth_views.PasswordChangeView.as_view(
        template_name='users/password_change.html',
        success_url='/users/dashboard/',
    ), name='password_change'),
]
