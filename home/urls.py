from django.urls import path

from . import views

app_name = 'home'

urlpatterns = [
    path("", views.landing_page, name="home"),
    path("matches/", views.match_finder, name="match_finder"),

    # Cascading dropdown lookups
    path("api/districts/", views.get_districts, name="api_districts"),
    path("api/zones/", views.get_zones, name="api_zones"),
]
