import json

from django.core.management.base import BaseCommand

from home.matching import find_all_mutual_pairs, resolved_desired_zones
from home.stats import platform_stats
from users.models import TeacherProfile


class Command(BaseCommand):
    help = 'Dump matching data for all teachers and list every mutual pair'

    def add_arguments(self, parser):
        parser.add_argument(
            '--output',
            default='debug_matching_output.json',
            help='File the profile dump is written to',
        )

    def handle(self, *args, **options):
        profiles = list(TeacherProfile.objects.select_related('user').order_by('created_at', 'pk'))

        users_data = []
        for profile in profiles:
            # NIC numbers are deliberately left out of the dump
            users_data.append({
                'id': profile.user_id,
                'email': profile.user.email,
                'is_admin': profile.user.is_admin,
                'profile_completed': profile.profile_completed,
                'subject': profile.subject,
                'current_province': profile.current_province,
                'current_district': profile.current_district,
                'current_zone': profile.current_zone,
                'desired_province': profile.desired_province,
                'desired_district': profile.desired_district,
                'desired_zone': profile.desired_zone,
                'desired_zones': profile.desired_zones,
                'resolved_desired_zones': sorted(resolved_desired_zones(profile)),
            })

        output_file = options['output']
        with open(output_file, 'w') as f:
            json.dump(users_data, f, indent=2)

        stats = platform_stats(profiles)

        self.stdout.write("\n" + "=" * 80)
        self.stdout.write(f"TOTAL TEACHERS: {stats.registered_teachers}")
        self.stdout.write("=" * 80)
        self.stdout.write(self.style.SUCCESS(f"\nData written to: {output_file}"))

        self.stdout.write("\nSTATISTICS:")
        self.stdout.write(f"  Completed profiles: {stats.completed_profiles}/{stats.registered_teachers}")
        for province, count in sorted(stats.by_province.items()):
            self.stdout.write(f"  {province}: {count}")

        pool = [p for p in profiles if p.profile_completed and not p.user.is_admin]
        pairs = find_all_mutual_pairs(pool)

        self.stdout.write(f"\nMATCHABLE TEACHERS: {len(pool)}")
        if not pairs:
            self.stdout.write(self.style.WARNING("  No mutual matches found."))
        for number, (teacher_a, teacher_b) in enumerate(pairs, start=1):
            self.stdout.write(self.style.SUCCESS(f"\n  MATCH #{number}:"))
            for teacher in (teacher_a, teacher_b):
                self.stdout.write(
                    f"     {teacher.user.email}: "
                    f"{teacher.current_district}/{teacher.current_zone} -> "
                    f"{teacher.desired_district}/{', '.join(sorted(resolved_desired_zones(teacher)))}"
                )

        self.stdout.write("=" * 80 + "\n")
