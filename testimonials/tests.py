from django.test import SimpleTestCase, TestCase
from django.urls import reverse

from users.models import MyUser, TeacherProfile
from .models import Testimonial


def create_teacher(email, completed=True):
    user = MyUser.objects.create_user(email=email, password='password')
    TeacherProfile.objects.create(
        user=user,
        full_name='Kamala Devi Fernando',
        subject='English',
        current_province='Southern',
        current_district='Galle',
        current_zone='Elpitiya',
        current_school='Sangamitta Vidyalaya',
        profile_completed=completed,
    )
    return user


class InitialsTests(SimpleTestCase):
    def test_initials(self):
        self.assertEqual(Testimonial.initials_for('Nimal Perera'), 'NP')
        self.assertEqual(Testimonial.initials_for('kamala devi fernando silva'), 'KDF')
        self.assertEqual(Testimonial.initials_for(''), '')
        self.assertEqual(Testimonial.initials_for(None), '')


class SubmitTestimonialTests(TestCase):
    def test_submission_copies_profile_and_waits_for_approval(self):
        teacher = create_teacher('kamala@test.com')
        self.client.force_login(teacher)
        response = self.client.post(reverse('testimonials:submit'), {
            'message': 'Found a swap partner in Kandy within a week.',
        })
        self.assertRedirects(response, reverse('testimonials:list'))

        testimonial = Testimonial.objects.get()
        self.assertFalse(testimonial.is_approved)
        self.assertEqual(testimonial.user_initials, 'KDF')
        self.assertEqual(testimonial.user_zone, 'Elpitiya')
        self.assertEqual(testimonial.user_school, 'Sangamitta Vidyalaya')

    def test_short_message_is_rejected(self):
        self.client.force_login(create_teacher('kamala@test.com'))
        response = self.client.post(reverse('testimonials:submit'), {'message': 'Great'})
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Testimonial.objects.exists())

    def test_incomplete_profile_is_sent_to_editor(self):
        self.client.force_login(create_teacher('draft@test.com', completed=False))
        response = self.client.get(reverse('testimonials:submit'))
        self.assertRedirects(response, reverse('users:profile_edit'))


class ModerationTests(TestCase):
    def setUp(self):
        self.admin = MyUser.objects.create_superuser(email='admin@test.com', password='password')
        self.teacher = create_teacher('kamala@test.com')
        self.testimonial = Testimonial.from_profile(self.teacher.profile, 'Smooth transfer, thank you!')
        self.testimonial.save()

    def test_pending_testimonials_are_not_public(self):
        response = self.client.get(reverse('testimonials:list'))
        self.assertNotContains(response, 'Smooth transfer')
        self.assertEqual(self.client.get(reverse('home:home')).context['testimonials'].count(), 0)

    def test_approve(self):
        self.client.force_login(self.admin)
        response = self.client.post(reverse('testimonials:approve', args=[self.testimonial.pk]))
        self.assertRedirects(response, reverse('testimonials:moderation'))

        self.testimonial.refresh_from_db()
        self.assertTrue(self.testimonial.is_approved)
        self.assertEqual(self.testimonial.approved_by, self.admin)
        self.assertIsNotNone(self.testimonial.approved_at)
        self.assertContains(self.client.get(reverse('testimonials:list')), 'Smooth transfer')

    def test_delete(self):
        self.client.force_login(self.admin)
        self.client.post(reverse('testimonials:delete', args=[self.testimonial.pk]))
        self.assertFalse(Testimonial.objects.exists())

    def test_teachers_cannot_moderate(self):
        self.client.force_login(self.teacher)
        self.assertEqual(self.client.get(reverse('testimonials:moderation')).status_code, 403)
        response = self.client.post(reverse('testimonials:approve', args=[self.testimonial.pk]))
        self.assertEqual(response.status_code, 403)
        self.testimonial.refresh_from_db()
        self.assertFalse(self.testimonial.is_approved)
