from django.core.management.base import BaseCommand

from home.zones import is_valid_location, list_districts, list_provinces, list_zones
from users.models import TeacherProfile


class Command(BaseCommand):
    help = 'List the province/district/zone hierarchy and report profiles whose locations are not in it'

    def add_arguments(self, parser):
        parser.add_argument('--province', help='Only list this province')
        parser.add_argument(
            '--check-profiles',
            action='store_true',
            help='Report completed profiles with a location that is not in the hierarchy',
        )

    def handle(self, *args, **options):
        provinces = list_provinces()
        if options['province']:
            provinces = [p for p in provinces if p == options['province']]
            if not provinces:
                self.stdout.write(self.style.ERROR(f"Unknown province: {options['province']}"))
                return

        total_zones = 0
        for province in provinces:
            self.stdout.write(self.style.SUCCESS(province))
            for district in list_districts(province):
                zones = list_zones(province, district)
                total_zones += len(zones)
                self.stdout.write(f"  - {district}: {', '.join(zones)}")

        self.stdout.write(f"\n{len(provinces)} provinces, {total_zones} zones")

        if options['check_profiles']:
            self.check_profiles()

    def check_profiles(self):
        self.stdout.write("\n=== Profiles with unknown locations ===")
        problems = 0
        for profile in TeacherProfile.objects.completed().select_related('user'):
            issues = []
            if not is_valid_location(profile.current_province, profile.current_district, profile.current_zone):
                issues.append(
                    f"current {profile.current_province}/{profile.current_district}/{profile.current_zone}"
                )
            if not is_valid_location(profile.desired_province, profile.desired_district):
                issues.append(f"desired {profile.desired_province}/{profile.desired_district}")
            desired_zones = list_zones(profile.desired_province, profile.desired_district)
            unknown = [z for z in (profile.desired_zones or [profile.desired_zone]) if z and z not in desired_zones]
            if unknown:
                issues.append(f"desired zones {', '.join(unknown)}")

            if issues:
                problems += 1
                self.stdout.write(self.style.WARNING(f"{profile.user.email}: {'; '.join(issues)}"))

        if problems:
            self.stdout.write(self.style.WARNING(f"{problems} profile(s) need attention"))
        else:
            self.stdout.write(self.style.SUCCESS("All completed profiles use known locations"))
