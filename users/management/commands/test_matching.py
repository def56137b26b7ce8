from django.core.management.base import BaseCommand, CommandError

from home.matching import find_matches, resolved_desired_zones
from users.models import MyUser


class Command(BaseCommand):
    help = 'Show the mutual matches for specific users'

    def add_arguments(self, parser):
        parser.add_argument('emails', nargs='+', help='Email addresses of the teachers to check')

    def handle(self, *args, **options):
        self.stdout.write("\n" + "=" * 80)
        self.stdout.write("TESTING MATCHING FOR KNOWN USERS")
        self.stdout.write("=" * 80)

        for index, email in enumerate(options['emails'], start=1):
            user = MyUser.objects.filter(email=email).select_related('profile').first()
            if not user:
                raise CommandError(f"{email} not found")

            profile = getattr(user, 'profile', None)
            self.stdout.write(f"\n{index}. Testing {email}:")
            if profile is None:
                self.stdout.write(self.style.WARNING("   No profile"))
                continue

            self.stdout.write(f"   Profile completed: {profile.profile_completed}")
            self.stdout.write(
                f"   Current: {profile.current_province}/{profile.current_district}/{profile.current_zone}"
            )
            self.stdout.write(
                f"   Desired: {profile.desired_province}/{profile.desired_district}/"
                f"{sorted(resolved_desired_zones(profile))}"
            )

            matches = find_matches(user)
            self.stdout.write(self.style.SUCCESS(f"   Matches found: {len(matches)}"))
            for match in matches:
                self.stdout.write(f"      -> {match.user.email} ({match.full_name})")

        self.stdout.write("\n" + "=" * 80)
