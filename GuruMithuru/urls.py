from django.contrib import admin
from django.contrib.sitemaps.views import sitemap
from django.urls import include, path

from .sitemaps import StaticViewSitemap

sitemaps = {
    'static': StaticViewSitemap,
}

urlpatterns = [
    path('django-admin/', admin.site.urls),
    path('', include('home.urls')),
    path('users/', include('users.urls')),
    path('testimonials/', include('testimonials.urls')),
    path('sitemap.xml', sitemap, {'sitemaps': sitemaps}, name='django.contrib.sitemaps.views.sitemap'),
]

handler400 = 'home.error_views.handler400'
handler403 = 'home.error_views.handler403'
handler404 = 'home.error_views.handler404'
handler500 = 'home.error_views.handler500'
