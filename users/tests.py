import json
import os
import tempfile
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse

from testimonials.models import Testimonial
from .forms import MyUserCreationForm, TeacherProfileForm
from .models import MyUser, TeacherProfile
from .templatetags.match_helpers import contact_display, desired_zones, whatsapp_link
from .templatetags.profile_checks import is_profile_complete, profile_completion

PASSWORD = 'Str0ng-pass-123'


def create_teacher(email, current=('Western', 'Colombo', 'Colombo'), desired=('Central', 'Kandy'),
                   zones=('Kandy',), subject='Mathematics', completed=True, is_admin=False, **extra):
    user = MyUser.objects.create_user(email=email, password=PASSWORD, is_admin=is_admin)
    profile_fields = dict(
        full_name=email.split('@')[0].title(),
        subject=subject,
        grade_taught='Secondary (6-11)',
        current_province=current[0],
        current_district=current[1],
        current_zone=current[2],
        current_school='Central College',
        desired_province=desired[0],
        desired_district=desired[1],
        desired_zones=list(zones),
        whatsapp_number='0771234567',
        profile_completed=completed,
    )
    profile_fields.update(extra)
    TeacherProfile.objects.create(user=user, **profile_fields)
    return user


def profile_form_data(**overrides):
    data = {
        'full_name': 'Nimal Perera',
        'subject': 'Science',
        'medium_of_instruction': 'Sinhala',
        'grade_taught': 'Secondary (6-11)',
        'school_type': 'National',
        'current_province': 'Western',
        'current_district': 'Colombo',
        'current_zone': 'Colombo',
        'current_school': 'Royal College',
        'desired_province': 'Central',
        'desired_district': 'Kandy',
        'desired_zones': ['Gampola', 'Kandy'],
        'whatsapp_number': '077 123 4567',
    }
    data.update(overrides)
    return data


class TeacherProfileModelTests(TestCase):
    def test_desired_zones_are_deduplicated_on_save(self):
        user = create_teacher('dup@test.com', zones=['Kandy', '', 'Gampola', 'Kandy'])
        self.assertEqual(user.profile.desired_zones, ['Kandy', 'Gampola'])

    def test_completed_excludes_admins_and_drafts(self):
        teacher = create_teacher('teacher@test.com')
        create_teacher('admin@test.com', is_admin=True)
        create_teacher('draft@test.com', completed=False)
        self.assertEqual([p.user for p in TeacherProfile.objects.completed()], [teacher])

    def test_candidates_exclude_the_querying_profile(self):
        first = create_teacher('first@test.com')
        second = create_teacher('second@test.com')
        third = create_teacher('third@test.com')
        candidates = TeacherProfile.objects.candidates_for(second.profile)
        self.assertEqual([p.user for p in candidates], [first, third])

    def test_staff_flag_follows_admin_flag(self):
        admin = MyUser.objects.create_superuser(email='root@test.com', password=PASSWORD)
        self.assertTrue(admin.is_staff)
        self.assertFalse(create_teacher('t@test.com').is_staff)

    def test_full_name_comes_from_profile(self):
        self.assertEqual(create_teacher('nimal@test.com').get_full_name(), 'Nimal')
        self.assertEqual(MyUser.objects.create_user(email='bare@test.com').get_full_name(), '')


class SignupTests(TestCase):
    def signup_data(self, **overrides):
        data = {
            'email': 'new@test.com',
            'nic_number': '199012345678',
            'phone_number': '0771234567',
            'password1': PASSWORD,
            'password2': PASSWORD,
        }
        data.update(overrides)
        return data

    def test_signup_creates_user_and_empty_profile(self):
        response = self.client.post(reverse('users:signup'), self.signup_data())
        self.assertRedirects(response, reverse('users:profile_edit'))

        user = MyUser.objects.get(email='new@test.com')
        self.assertFalse(user.profile.profile_completed)
        self.assertFalse(is_profile_complete(user))

    def test_duplicate_nic_is_rejected(self):
        MyUser.objects.create_user(email='first@test.com', password=PASSWORD, nic_number='199012345678')
        form = MyUserCreationForm(data=self.signup_data())
        self.assertFalse(form.is_valid())
        self.assertIn('nic_number', form.errors)


class LoginTests(TestCase):
    def test_incomplete_profile_goes_to_editor(self):
        create_teacher('draft@test.com', completed=False)
        response = self.client.post(reverse('users:login'), {'username': 'draft@test.com', 'password': PASSWORD})
        self.assertRedirects(response, reverse('users:profile_edit'))

    def test_complete_profile_goes_to_dashboard(self):
        create_teacher('done@test.com')
        response = self.client.post(reverse('users:login'), {'username': 'done@test.com', 'password': PASSWORD})
        self.assertRedirects(response, reverse('users:dashboard'))

    def test_wrong_password(self):
        create_teacher('done@test.com')
        response = self.client.post(reverse('users:login'), {'username': 'done@test.com', 'password': 'nope'})
        self.assertEqual(response.status_code, 200)
        self.assertNotIn('_auth_user_id', self.client.session)


class TeacherProfileFormTests(TestCase):
    def setUp(self):
        self.user = MyUser.objects.create_user(email='form@test.com', password=PASSWORD)
        self.profile = TeacherProfile.objects.create(user=self.user)

    def test_valid_submission_completes_profile(self):
        form = TeacherProfileForm(profile_form_data(), instance=self.profile)
        self.assertTrue(form.is_valid(), form.errors)
        profile = form.save()

        profile.refresh_from_db()
        self.assertTrue(profile.profile_completed)
        self.assertEqual(profile.desired_zones, ['Gampola', 'Kandy'])
        self.assertEqual(profile.desired_zone, 'Gampola')

    def test_zone_must_belong_to_district(self):
        form = TeacherProfileForm(profile_form_data(current_zone='Gampola'), instance=self.profile)
        self.assertFalse(form.is_valid())
        self.assertIn('current_zone', form.errors)

    def test_stale_district_is_rejected(self):
        """Desired province changed to Western while Kandy was still selected."""
        form = TeacherProfileForm(profile_form_data(desired_province='Western'), instance=self.profile)
        self.assertFalse(form.is_valid())
        self.assertIn('desired_district', form.errors)

    def test_desired_zone_choices_follow_selected_district(self):
        form = TeacherProfileForm(profile_form_data(), instance=self.profile)
        self.assertEqual(
            [value for value, label in form.fields['desired_zones'].choices],
            ['Denuwara', 'Gampola', 'Kandy', 'Katugastota', 'Teldeniya', 'Waththegama'],
        )

    def test_required_fields(self):
        form = TeacherProfileForm(profile_form_data(full_name='', whatsapp_number=''), instance=self.profile)
        self.assertFalse(form.is_valid())
        self.assertIn('full_name', form.errors)
        self.assertIn('whatsapp_number', form.errors)

    def test_legacy_zone_is_preselected(self):
        TeacherProfile.objects.filter(pk=self.profile.pk).update(
            desired_province='Central', desired_district='Kandy', desired_zone='Kandy', desired_zones=[],
        )
        self.profile.refresh_from_db()
        form = TeacherProfileForm(instance=self.profile)
        self.assertEqual(form.initial['desired_zones'], ['Kandy'])

    def test_edit_view_saves_and_redirects(self):
        self.client.force_login(self.user)
        response = self.client.post(reverse('users:profile_edit'), profile_form_data())
        self.assertRedirects(response, reverse('users:dashboard'))
        self.assertTrue(is_profile_complete(MyUser.objects.get(pk=self.user.pk)))


class DashboardTests(TestCase):
    def test_stats_for_complete_profile(self):
        me = create_teacher('me@test.com')
        create_teacher('match@test.com', current=('Central', 'Kandy', 'Kandy'), desired=('Western', 'Colombo'),
                       zones=['Colombo'])
        create_teacher('other@test.com', current=('Uva', 'Badulla', 'Badulla'), desired=('Southern', 'Galle'),
                       zones=['Galle'], subject='Art')

        self.client.force_login(me)
        response = self.client.get(reverse('users:dashboard'))
        stats = response.context['stats']
        self.assertEqual(stats.total_teachers, 3)
        self.assertEqual(stats.mutual_matches, 1)
        self.assertEqual(stats.same_subject, 1)
        self.assertContains(response, 'Perfect Matches')

    def test_incomplete_profile_gets_message(self):
        draft = create_teacher('draft@test.com', completed=False)
        self.client.force_login(draft)
        response = self.client.get(reverse('users:dashboard'))
        self.assertIsNone(response.context['stats'])
        self.assertContains(response, 'Complete your profile to see potential matches.')


class AdminViewTests(TestCase):
    def setUp(self):
        self.admin = MyUser.objects.create_superuser(email='admin@test.com', password=PASSWORD)
        self.teacher = create_teacher('teacher@test.com')
        self.partner = create_teacher('partner@test.com', current=('Central', 'Kandy', 'Kandy'),
                                      desired=('Western', 'Colombo'), zones=['Colombo'])

    def test_anonymous_is_sent_to_login(self):
        response = self.client.get(reverse('users:admin_users'))
        self.assertEqual(response.status_code, 302)

    def test_teacher_gets_forbidden(self):
        self.client.force_login(self.teacher)
        for name in ('users:admin_users', 'users:matched_swaps'):
            response = self.client.get(reverse(name))
            self.assertEqual(response.status_code, 403)
            self.assertContains(response, 'Access Forbidden', status_code=403)

    def test_user_management_lists_teachers_with_match_counts(self):
        self.client.force_login(self.admin)
        response = self.client.get(reverse('users:admin_users'))
        self.assertEqual(response.status_code, 200)
        rows = {row['user'].email: row['potential_matches'] for row in response.context['teachers']}
        self.assertEqual(rows, {'teacher@test.com': 1, 'partner@test.com': 1})
        self.assertEqual(response.context['stats'].completed_profiles, 2)

    def test_user_management_overview_counts(self):
        create_teacher('draft@test.com', subject='Art', completed=False)
        pending = Testimonial.from_profile(self.teacher.profile, 'Found my swap partner quickly.')
        pending.save()
        approved = Testimonial.from_profile(self.partner.profile, 'Smooth transfer, thank you!')
        approved.save()
        approved.approve(self.admin)

        self.client.force_login(self.admin)
        response = self.client.get(reverse('users:admin_users'))
        stats = response.context['stats']
        self.assertEqual(stats.incomplete_profiles, 1)
        self.assertEqual(stats.by_subject, {'Mathematics': 2, 'Art': 1})
        self.assertEqual(response.context['pending_testimonials'], 1)
        self.assertEqual(response.context['approved_testimonials'], 1)
        self.assertContains(response, '1 pending, 1 approved')

    def test_matched_swaps(self):
        self.client.force_login(self.admin)
        response = self.client.get(reverse('users:matched_swaps'))
        self.assertEqual(response.context['total_pairs'], 1)
        self.assertContains(response, 'partner@test.com')

    def test_delete_teacher(self):
        self.client.force_login(self.admin)
        response = self.client.post(reverse('users:admin_delete_user', args=[self.teacher.pk]))
        self.assertRedirects(response, reverse('users:admin_users'))
        self.assertFalse(MyUser.objects.filter(pk=self.teacher.pk).exists())

    def test_delete_requires_post(self):
        self.client.force_login(self.admin)
        response = self.client.get(reverse('users:admin_delete_user', args=[self.teacher.pk]))
        self.assertEqual(response.status_code, 405)

    def test_admins_cannot_be_deleted(self):
        other_admin = MyUser.objects.create_superuser(email='other@test.com', password=PASSWORD)
        self.client.force_login(self.admin)
        self.client.post(reverse('users:admin_delete_user', args=[other_admin.pk]))
        self.assertTrue(MyUser.objects.filter(pk=other_admin.pk).exists())


class MatchHelperTests(SimpleTestCase):
    @override_settings(WHATSAPP_GREETING='Hello there')
    def test_whatsapp_link_strips_formatting(self):
        profile = TeacherProfile(whatsapp_number='+94 (77) 123-4567')
        self.assertEqual(whatsapp_link(profile), 'https://wa.me/94771234567?text=Hello%20there')

    def test_no_link_when_hidden_or_missing(self):
        self.assertEqual(whatsapp_link(TeacherProfile(whatsapp_number='0771234567', hide_contact=True)), '')
        self.assertEqual(whatsapp_link(TeacherProfile(whatsapp_number='')), '')

    def test_contact_display(self):
        self.assertEqual(contact_display(TeacherProfile(whatsapp_number='0771234567', hide_contact=True)), 'Hidden')
        self.assertEqual(contact_display(TeacherProfile(whatsapp_number='0771234567')), '0771234567')
        self.assertEqual(contact_display(TeacherProfile()), '-')

    def test_desired_zones_falls_back_to_legacy(self):
        self.assertEqual(desired_zones(TeacherProfile(desired_zone='Kandy')), ['Kandy'])
        self.assertEqual(desired_zones(TeacherProfile(desired_zones=['A', 'B'], desired_zone='A')), ['A', 'B'])


class ProfileChecksTests(TestCase):
    def test_admin_is_never_complete(self):
        admin = create_teacher('admin@test.com', is_admin=True)
        self.assertFalse(is_profile_complete(admin))

    def test_completion_percentage(self):
        full = create_teacher('full@test.com')
        self.assertEqual(profile_completion(full), 100)

        user = MyUser.objects.create_user(email='empty@test.com', password=PASSWORD)
        TeacherProfile.objects.create(user=user)
        self.assertEqual(profile_completion(user), 0)

    def test_user_without_profile(self):
        user = MyUser.objects.create_user(email='bare@test.com', password=PASSWORD)
        self.assertFalse(is_profile_complete(user))
        self.assertEqual(profile_completion(user), 0)


class MatchingCommandTests(TestCase):
    def setUp(self):
        create_teacher('me@test.com')
        create_teacher('match@test.com', current=('Central', 'Kandy', 'Kandy'),
                       desired=('Western', 'Colombo'), zones=['Colombo'])

    def test_test_matching_lists_matches(self):
        out = StringIO()
        call_command('test_matching', 'me@test.com', stdout=out)
        self.assertIn('Matches found: 1', out.getvalue())
        self.assertIn('match@test.com', out.getvalue())

    def test_test_matching_admin_gets_no_matches(self):
        create_teacher('admin@test.com', is_admin=True)
        out = StringIO()
        call_command('test_matching', 'admin@test.com', stdout=out)
        self.assertIn('Matches found: 0', out.getvalue())

    def test_test_matching_unknown_email(self):
        with self.assertRaises(CommandError):
            call_command('test_matching', 'nobody@test.com', stdout=StringIO())

    def test_debug_matching_dump(self):
        with tempfile.TemporaryDirectory() as tmp:
            output = os.path.join(tmp, 'dump.json')
            out = StringIO()
            call_command('debug_matching', output=output, stdout=out)
            with open(output) as f:
                data = json.load(f)

        self.assertEqual(len(data), 2)
        self.assertNotIn('nic_number', data[0])
        self.assertIn('MATCH #1', out.getvalue())


class BackfillProfilesCommandTests(TestCase):
    def test_creates_missing_profiles_and_copies_legacy_zone(self):
        bare = MyUser.objects.create_user(email='bare@test.com', password=PASSWORD)
        MyUser.objects.create_superuser(email='admin@test.com', password=PASSWORD)
        legacy = create_teacher('legacy@test.com', zones=[], desired_zone='Kandy')

        out = StringIO()
        call_command('backfill_profiles', stdout=out)

        self.assertTrue(TeacherProfile.objects.filter(user=bare).exists())
        self.assertFalse(TeacherProfile.objects.filter(user__email='admin@test.com').exists())
        self.assertEqual(TeacherProfile.objects.get(user=legacy).desired_zones, ['Kandy'])
        self.assertIn('Profiles created: 1', out.getvalue())
        self.assertIn('Profiles updated: 1', out.getvalue())

    def test_dry_run_saves_nothing(self):
        bare = MyUser.objects.create_user(email='bare@test.com', password=PASSWORD)
        legacy = create_teacher('legacy@test.com', zones=[], desired_zone='Kandy')

        call_command('backfill_profiles', dry_run=True, stdout=StringIO())

        self.assertFalse(TeacherProfile.objects.filter(user=bare).exists())
        self.assertEqual(TeacherProfile.objects.get(user=legacy).desired_zones, [])
