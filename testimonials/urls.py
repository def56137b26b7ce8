from django.urls import path

from . import views

app_name = 'testimonials'

urlpatterns = [
    path('', views.testimonial_list, name='list'),
    path('new/', views.submit_testimonial, name='submit'),
    path('moderation/', views.moderation, name='moderation'),
    path('<int:testimonial_id>/approve/', views.approve_testimonial, name='approve'),
    path('<int:testimonial_id>/delete/', views.delete_testimonial, name='delete'),
]
