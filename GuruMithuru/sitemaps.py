from django.contrib.sitemaps import Sitemap
from django.urls import reverse


class StaticViewSitemap(Sitemap):
    """Sitemap for public pages."""
    protocol = 'https'

    def items(self):
        return [
            'home:home',
            'testimonials:list',
            'users:login',
            'users:signup',
        ]

    def location(self, item):
        return reverse(item)

    def priority(self, item):
        # Landing page gets highest priority
        if item == 'home:home':
            return 1.0
        elif item == 'testimonials:list':
            return 0.8
        # Auth pages get lower priority
        else:
            return 0.6

    def changefreq(self, item):
        # Testimonials are approved often
        if item == 'testimonials:list':
            return 'daily'
        elif item == 'home:home':
            return 'weekly'
        else:
            return 'monthly'
