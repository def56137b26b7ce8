from django.core.management.base import BaseCommand
from django.db import transaction

from users.models import MyUser, TeacherProfile


class Command(BaseCommand):
    help = 'Create missing teacher profiles and copy legacy desired_zone values into desired_zones'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report what would change without saving anything',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        created_count = 0
        updated_count = 0

        with transaction.atomic():
            for user in MyUser.objects.filter(is_admin=False, profile__isnull=True):
                if not dry_run:
                    TeacherProfile.objects.create(user=user)
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f'Created profile for user {user.email}'))

            for profile in TeacherProfile.objects.select_related('user').exclude(desired_zone=''):
                if profile.desired_zones:
                    continue
                if not dry_run:
                    profile.desired_zones = [profile.desired_zone]
                    profile.save(update_fields=['desired_zones'])
                updated_count += 1
                self.stdout.write(self.style.SUCCESS(
                    f'Copied desired zone {profile.desired_zone!r} for user {profile.user.email}'
                ))

            if dry_run:
                transaction.set_rollback(True)

        self.stdout.write(self.style.SUCCESS('\nBackfill complete!' + (' (dry run)' if dry_run else '')))
        self.stdout.write(f'Profiles created: {created_count}')
        self.stdout.write(f'Profiles updated: {updated_count}')
