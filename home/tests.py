from io import StringIO

from django.core.management import call_command
from django.test import SimpleTestCase, TestCase
from django.urls import reverse

from users.models import MyUser, TeacherProfile
from home.matching import (MatchFilter, find_all_mutual_pairs, find_matches,
                           find_mutual_matches, is_mutual_match,
                           resolved_desired_zones)
from home.stats import DashboardStats, compute_stats, platform_stats, shares_zone
from home.zones import (ZONAL_EDUCATION_DATA, is_valid_location, list_districts,
                        list_provinces, list_zones)


def make_profile(current, desired, desired_zones=None, desired_zone='',
                 subject='Mathematics', completed=True, **extra):
    """
    Unsaved profile for the pure matching tests.
    current is (province, district, zone), desired is (province, district).
    """
    return TeacherProfile(
        current_province=current[0],
        current_district=current[1],
        current_zone=current[2],
        desired_province=desired[0],
        desired_district=desired[1],
        desired_zones=list(desired_zones or []),
        desired_zone=desired_zone,
        subject=subject,
        profile_completed=completed,
        **extra
    )


COLOMBO = ('Western', 'Colombo', 'Colombo')
KANDY = ('Central', 'Kandy', 'Kandy')


class ZoneHierarchyTests(SimpleTestCase):
    def test_provinces_in_declared_order(self):
        self.assertEqual(list_provinces(), [
            'Western', 'Central', 'Southern', 'Northern', 'Eastern',
            'North Western', 'North Central', 'Uva', 'Sabaragamuwa',
        ])

    def test_districts_of_province(self):
        self.assertEqual(list_districts('Western'), ['Colombo', 'Gampaha', 'Kalutara'])
        self.assertEqual(list_districts('Sabaragamuwa'), ['Kegalle', 'Ratnapura'])

    def test_zones_keep_declared_order(self):
        # Not alphabetical: Viyaluwa is declared before Mahiyanganaya
        self.assertEqual(
            list_zones('Uva', 'Badulla'),
            ['Badulla', 'Bandarawela', 'Viyaluwa', 'Mahiyanganaya', 'Passara', 'Welimada'],
        )

    def test_unknown_or_empty_lookups_return_empty(self):
        self.assertEqual(list_districts(''), [])
        self.assertEqual(list_districts(None), [])
        self.assertEqual(list_districts('Nonexistent'), [])
        self.assertEqual(list_zones('Western', ''), [])
        self.assertEqual(list_zones('Nonexistent', 'Colombo'), [])
        self.assertEqual(list_zones('', 'Colombo'), [])
        self.assertEqual(list_zones(None, None), [])

    def test_district_from_another_province_has_no_zones(self):
        self.assertEqual(list_zones('Western', 'Kandy'), [])

    def test_lookups_are_case_sensitive(self):
        self.assertEqual(list_districts('western'), [])
        self.assertEqual(list_zones('Western', 'colombo'), [])

    def test_hierarchy_is_read_only(self):
        with self.assertRaises(TypeError):
            ZONAL_EDUCATION_DATA['Atlantis'] = {}
        with self.assertRaises(TypeError):
            ZONAL_EDUCATION_DATA['Western']['Colombo'] = ()

    def test_returned_lists_do_not_leak_state(self):
        provinces = list_provinces()
        provinces.append('Atlantis')
        self.assertNotIn('Atlantis', list_provinces())

    def test_is_valid_location(self):
        self.assertTrue(is_valid_location('Central', 'Kandy'))
        self.assertTrue(is_valid_location('Central', 'Kandy', 'Gampola'))
        self.assertFalse(is_valid_location('Central', 'Kandy', 'Colombo'))
        self.assertFalse(is_valid_location('Western', 'Kandy'))
        self.assertFalse(is_valid_location('', ''))


class ResolvedDesiredZonesTests(SimpleTestCase):
    def test_falls_back_to_legacy_zone(self):
        self.assertEqual(resolved_desired_zones({'desired_zones': [], 'desired_zone': 'Kandy'}), {'Kandy'})

    def test_zone_list_wins_without_duplicates(self):
        profile = {'desired_zones': ['A', 'B'], 'desired_zone': 'A'}
        self.assertEqual(resolved_desired_zones(profile), {'A', 'B'})

    def test_missing_fields_give_empty_set(self):
        self.assertEqual(resolved_desired_zones({}), set())
        self.assertEqual(resolved_desired_zones({'desired_zones': None, 'desired_zone': ''}), set())
        self.assertEqual(resolved_desired_zones(None), set())

    def test_blank_entries_are_ignored(self):
        self.assertEqual(resolved_desired_zones({'desired_zones': ['', 'Gampola']}), {'Gampola'})

    def test_model_instance(self):
        profile = make_profile(COLOMBO, ('Central', 'Kandy'), desired_zone='Kandy')
        self.assertEqual(resolved_desired_zones(profile), {'Kandy'})


class MutualMatchTests(SimpleTestCase):
    def setUp(self):
        self.me = make_profile(COLOMBO, ('Central', 'Kandy'), desired_zones=['Kandy'])

    def test_exact_mutual_match(self):
        """
        Me: Western/Colombo/Colombo, wants Central/Kandy/[Kandy].
        Candidate: Central/Kandy/Kandy, wants Western/Colombo/[Colombo].
        Should MATCH.
        """
        candidate = make_profile(KANDY, ('Western', 'Colombo'), desired_zones=['Colombo'])
        self.assertEqual(find_mutual_matches(self.me, [candidate]), [candidate])

    def test_one_sided_match_excluded(self):
        """Candidate wants Matale instead of my district. Should NOT match."""
        candidate = make_profile(KANDY, ('Central', 'Matale'), desired_zones=['Matale'])
        self.assertEqual(find_mutual_matches(self.me, [candidate]), [])

    def test_any_desired_zone_satisfies_current_zone(self):
        """I accept Kandy or Gampola, candidate teaches in Gampola. Should MATCH."""
        me = make_profile(COLOMBO, ('Central', 'Kandy'), desired_zones=['Kandy', 'Gampola'])
        candidate = make_profile(('Central', 'Kandy', 'Gampola'), ('Western', 'Colombo'), desired_zones=['Colombo'])
        self.assertTrue(is_mutual_match(me, candidate))
        self.assertEqual(find_mutual_matches(me, [candidate]), [candidate])

    def test_candidate_zone_outside_my_desired_zones(self):
        candidate = make_profile(('Central', 'Kandy', 'Teldeniya'), ('Western', 'Colombo'), desired_zones=['Colombo'])
        self.assertFalse(is_mutual_match(self.me, candidate))

    def test_my_zone_outside_candidate_desired_zones(self):
        candidate = make_profile(KANDY, ('Western', 'Colombo'), desired_zones=['Homagama', 'Piliyandala'])
        self.assertFalse(is_mutual_match(self.me, candidate))

    def test_legacy_single_zone_profiles_match(self):
        """Both profiles only have the old desired_zone field."""
        me = make_profile(COLOMBO, ('Central', 'Kandy'), desired_zone='Kandy')
        candidate = make_profile(KANDY, ('Western', 'Colombo'), desired_zone='Colombo')
        self.assertTrue(is_mutual_match(me, candidate))

    def test_mixed_legacy_and_multi_zone(self):
        me = make_profile(COLOMBO, ('Central', 'Kandy'), desired_zones=['Gampola', 'Kandy'])
        candidate = make_profile(KANDY, ('Western', 'Colombo'), desired_zone='Colombo')
        self.assertTrue(is_mutual_match(me, candidate))
        self.assertTrue(is_mutual_match(candidate, me))

    def test_province_mismatch_excluded(self):
        candidate = make_profile(KANDY, ('Southern', 'Colombo'), desired_zones=['Colombo'])
        self.assertFalse(is_mutual_match(self.me, candidate))

    def test_match_is_symmetric(self):
        profiles = [
            self.me,
            make_profile(KANDY, ('Western', 'Colombo'), desired_zones=['Colombo']),
            make_profile(('Central', 'Kandy', 'Gampola'), ('Western', 'Colombo'), desired_zones=['Colombo', 'Homagama']),
            make_profile(KANDY, ('Central', 'Matale'), desired_zones=['Matale']),
            make_profile(('Western', 'Colombo', 'Homagama'), ('Central', 'Kandy'), desired_zone='Gampola'),
            make_profile(('Southern', 'Galle', 'Galle'), ('Northern', 'Jaffna'), desired_zones=['Jaffna']),
        ]
        for a in profiles:
            for b in profiles:
                if a is b:
                    continue
                self.assertEqual(
                    b in find_mutual_matches(a, [b]),
                    a in find_mutual_matches(b, [a]),
                )

    def test_self_is_never_a_match(self):
        """A teacher whose current and desired postings are the same still never matches themself."""
        me = make_profile(KANDY, ('Central', 'Kandy'), desired_zones=['Kandy'])
        self.assertEqual(find_mutual_matches(me, [me]), [])
        self.assertEqual(find_mutual_matches(me, [me], MatchFilter(subject='Mathematics')), [])

    def test_same_id_is_treated_as_self(self):
        me = make_profile(KANDY, ('Central', 'Kandy'), desired_zones=['Kandy'], id=7)
        copy = make_profile(KANDY, ('Central', 'Kandy'), desired_zones=['Kandy'], id=7)
        self.assertEqual(find_mutual_matches(me, [copy]), [])

    def test_missing_fields_never_raise(self):
        me = make_profile(('', '', ''), ('', ''))
        candidate = make_profile(('', '', ''), ('', ''))
        self.assertFalse(is_mutual_match(me, candidate))
        self.assertEqual(find_mutual_matches({'profile_completed': True}, [{}]), [])

    def test_incomplete_profile_gets_no_matches(self):
        me = make_profile(COLOMBO, ('Central', 'Kandy'), desired_zones=['Kandy'], completed=False)
        candidate = make_profile(KANDY, ('Western', 'Colombo'), desired_zones=['Colombo'])
        self.assertEqual(find_mutual_matches(me, [candidate]), [])

    def test_empty_pool(self):
        self.assertEqual(find_mutual_matches(self.me, []), [])

    def test_result_keeps_candidate_order(self):
        first = make_profile(KANDY, ('Western', 'Colombo'), desired_zones=['Colombo'], full_name='Zara')
        non_match = make_profile(KANDY, ('Central', 'Matale'), desired_zones=['Matale'])
        second = make_profile(KANDY, ('Western', 'Colombo'), desired_zones=['Colombo'], full_name='Amal')
        self.assertEqual(find_mutual_matches(self.me, [first, non_match, second]), [first, second])

    def test_all_mutual_pairs(self):
        a = self.me
        b = make_profile(KANDY, ('Western', 'Colombo'), desired_zones=['Colombo'])
        c = make_profile(('Southern', 'Galle', 'Galle'), ('Northern', 'Jaffna'), desired_zones=['Jaffna'])
        d = make_profile(('Northern', 'Jaffna', 'Jaffna'), ('Southern', 'Galle'), desired_zones=['Galle'])
        self.assertEqual(find_all_mutual_pairs([a, b, c, d]), [(a, b), (c, d)])


class MatchFilterTests(SimpleTestCase):
    def setUp(self):
        self.me = make_profile(COLOMBO, ('Central', 'Kandy'), desired_zones=['Kandy', 'Gampola'])
        self.maths = make_profile(KANDY, ('Western', 'Colombo'), desired_zones=['Colombo'], subject='Mathematics')
        self.science = make_profile(
            ('Central', 'Kandy', 'Gampola'), ('Western', 'Colombo'), desired_zones=['Colombo'], subject='Science'
        )
        self.candidates = [self.maths, self.science]

    def test_province_resets_district_and_zone(self):
        match_filter = MatchFilter()
        match_filter.set_province('Central')
        match_filter.set_district('Kandy')
        match_filter.set_zone('Gampola')

        match_filter.set_province('Western')
        self.assertEqual(match_filter.province, 'Western')
        self.assertIsNone(match_filter.district)
        self.assertIsNone(match_filter.zone)

    def test_district_resets_zone(self):
        match_filter = MatchFilter(province='Central', district='Kandy', zone='Gampola')
        match_filter.set_district('Matale')
        self.assertEqual(match_filter.province, 'Central')
        self.assertEqual(match_filter.district, 'Matale')
        self.assertIsNone(match_filter.zone)

    def test_subject_and_zone_do_not_reset_anything(self):
        match_filter = MatchFilter(province='Central', district='Kandy')
        match_filter.set_zone('Gampola')
        match_filter.set_subject('Art')
        self.assertEqual(match_filter.as_params(), {
            'subject': 'Art', 'province': 'Central', 'district': 'Kandy', 'zone': 'Gampola',
        })

    def test_clear(self):
        match_filter = MatchFilter(subject='Art', province='Central', district='Kandy', zone='Kandy')
        match_filter.clear()
        self.assertTrue(match_filter.is_empty)

    def test_empty_filter_changes_nothing(self):
        pool = self.candidates + [make_profile(KANDY, ('Central', 'Matale'), desired_zones=['Matale'])]
        self.assertTrue(MatchFilter().is_empty)
        self.assertEqual(
            find_mutual_matches(self.me, pool, MatchFilter()),
            [c for c in pool if is_mutual_match(self.me, c)],
        )

    def test_subject_narrows_results(self):
        result = find_mutual_matches(self.me, self.candidates, MatchFilter(subject='Mathematics'))
        self.assertEqual(result, [self.maths])

    def test_province_matches_current_or_desired(self):
        self.assertEqual(find_mutual_matches(self.me, self.candidates, MatchFilter(province='Western')), self.candidates)
        self.assertEqual(find_mutual_matches(self.me, self.candidates, MatchFilter(province='Central')), self.candidates)
        self.assertEqual(find_mutual_matches(self.me, self.candidates, MatchFilter(province='Uva')), [])

    def test_district_matches_current_or_desired(self):
        match_filter = MatchFilter(province='Western', district='Colombo')
        self.assertEqual(find_mutual_matches(self.me, self.candidates, match_filter), self.candidates)

    def test_zone_matches_current_zone_or_desired_zones(self):
        self.assertEqual(
            find_mutual_matches(self.me, self.candidates, MatchFilter(province='Central', district='Kandy', zone='Gampola')),
            [self.science],
        )
        # Colombo is a desired zone of both candidates
        self.assertEqual(
            find_mutual_matches(self.me, self.candidates, MatchFilter(province='Western', district='Colombo', zone='Colombo')),
            self.candidates,
        )

    def test_zone_filter_uses_legacy_zone(self):
        legacy = make_profile(KANDY, ('Western', 'Colombo'), desired_zone='Colombo')
        self.assertTrue(MatchFilter(zone='Colombo').passes(legacy))

    def test_filter_never_adds_non_matches(self):
        """A candidate passing the filter but not matching both ways is still excluded."""
        not_mutual = make_profile(KANDY, ('Central', 'Matale'), desired_zones=['Matale'], subject='Mathematics')
        result = find_mutual_matches(self.me, [not_mutual], MatchFilter(subject='Mathematics'))
        self.assertEqual(result, [])

    def test_from_params_applies_cascade(self):
        match_filter = MatchFilter.from_params({
            'subject': 'Science', 'province': 'Central', 'district': 'Kandy', 'zone': 'Gampola',
        })
        self.assertEqual(match_filter, MatchFilter(subject='Science', province='Central', district='Kandy', zone='Gampola'))

    def test_from_params_drops_stale_district_and_zone(self):
        """Province changed to Western while Kandy/Gampola were still selected."""
        match_filter = MatchFilter.from_params({'province': 'Western', 'district': 'Kandy', 'zone': 'Gampola'})
        self.assertEqual(match_filter.as_params(), {'province': 'Western'})
        self.assertIsNone(match_filter.zone)

    def test_from_params_drops_zone_without_district(self):
        match_filter = MatchFilter.from_params({'province': 'Western', 'zone': 'Gampola'})
        self.assertEqual(match_filter.as_params(), {'province': 'Western'})

        match_filter = MatchFilter.from_params({'province': 'Central', 'zone': 'Gampola'})
        self.assertEqual(match_filter.as_params(), {'province': 'Central'})

    def test_from_params_drops_district_without_province(self):
        match_filter = MatchFilter.from_params({'subject': 'Art', 'district': 'Kandy', 'zone': 'Kandy'})
        self.assertEqual(match_filter.as_params(), {'subject': 'Art'})

    def test_from_params_drops_zone_outside_district(self):
        match_filter = MatchFilter.from_params({'province': 'Central', 'district': 'Kandy', 'zone': 'Colombo'})
        self.assertEqual(match_filter.as_params(), {'province': 'Central', 'district': 'Kandy'})

    def test_from_params_treats_blank_as_unset(self):
        match_filter = MatchFilter.from_params({'subject': '', 'province': '', 'district': '', 'zone': ''})
        self.assertTrue(match_filter.is_empty)


class DashboardStatsTests(SimpleTestCase):
    def setUp(self):
        self.me = make_profile(COLOMBO, ('Central', 'Kandy'), desired_zones=['Kandy', 'Gampola'], subject='Science')

    def test_total_counts_the_viewer(self):
        candidates = [
            make_profile(('Southern', 'Galle', 'Galle'), ('Uva', 'Badulla'), desired_zones=['Badulla'])
            for _ in range(5)
        ]
        self.assertEqual(compute_stats(self.me, candidates).total_teachers, 6)

    def test_viewer_in_pool_is_counted_once(self):
        """The viewer shares subject and zone with themself but must not count."""
        other = make_profile(('Southern', 'Galle', 'Galle'), ('Uva', 'Badulla'), desired_zones=['Badulla'], subject='Art')
        stats = compute_stats(self.me, [self.me, other])
        self.assertEqual(stats, DashboardStats(
            total_teachers=2,
            mutual_matches=0,
            same_subject=0,
            same_zone=0,
        ))

    def test_viewer_matched_by_id(self):
        me = make_profile(COLOMBO, ('Central', 'Kandy'), desired_zones=['Kandy'], subject='Science', id=3)
        copy = make_profile(COLOMBO, ('Central', 'Kandy'), desired_zones=['Kandy'], subject='Science', id=3)
        self.assertEqual(compute_stats(me, [copy]), DashboardStats(1, 0, 0, 0))

    def test_counters(self):
        mutual = make_profile(KANDY, ('Western', 'Colombo'), desired_zones=['Colombo'], subject='Science')
        same_subject = make_profile(('Southern', 'Galle', 'Galle'), ('Uva', 'Badulla'), desired_zones=['Badulla'], subject='Science')
        same_current_zone = make_profile(COLOMBO, ('Southern', 'Galle'), desired_zones=['Galle'], subject='Art')
        unrelated = make_profile(('Northern', 'Jaffna', 'Jaffna'), ('Uva', 'Badulla'), desired_zones=['Badulla'], subject='Art')

        stats = compute_stats(self.me, [mutual, same_subject, same_current_zone, unrelated])
        self.assertEqual(stats, DashboardStats(
            total_teachers=5,
            mutual_matches=1,
            same_subject=2,
            same_zone=2,
        ))

    def test_mutual_matches_ignore_filters(self):
        """Stats are computed on the raw pool regardless of any match filter."""
        maths = make_profile(KANDY, ('Western', 'Colombo'), desired_zones=['Colombo'], subject='Mathematics')
        self.assertEqual(find_mutual_matches(self.me, [maths], MatchFilter(subject='Science')), [])
        self.assertEqual(compute_stats(self.me, [maths]).mutual_matches, 1)

    def test_same_zone_looks_at_every_desired_zone(self):
        """My current zone is the second of the candidate's desired zones."""
        candidate = make_profile(('Southern', 'Galle', 'Galle'), ('Western', 'Colombo'), desired_zones=['Homagama', 'Colombo'])
        self.assertTrue(shares_zone(self.me, candidate))

    def test_same_zone_shared_desired_zone(self):
        candidate = make_profile(('Southern', 'Galle', 'Galle'), ('Central', 'Kandy'), desired_zone='Gampola')
        self.assertTrue(shares_zone(self.me, candidate))

    def test_blank_zones_are_not_shared(self):
        me = make_profile(('', '', ''), ('', ''))
        candidate = make_profile(('', '', ''), ('', ''))
        self.assertFalse(shares_zone(me, candidate))

    def test_incomplete_profile_gets_zero_counters(self):
        me = make_profile(COLOMBO, ('Central', 'Kandy'), desired_zones=['Kandy'], completed=False)
        mutual = make_profile(KANDY, ('Western', 'Colombo'), desired_zones=['Colombo'])
        self.assertEqual(compute_stats(me, [mutual]), DashboardStats(2, 0, 0, 0))

    def test_platform_stats(self):
        profiles = [
            {'profile_completed': True, 'current_province': 'Western', 'subject': 'Science'},
            {'profile_completed': True, 'current_province': 'Western', 'subject': 'Art'},
            {'profile_completed': True, 'current_province': 'Uva', 'subject': 'Science'},
            {'profile_completed': False, 'current_province': 'Uva', 'subject': 'Science'},
            {'profile_completed': False, 'subject': ''},
            {'profile_completed': True, 'current_province': 'Uva', 'subject': 'Art', 'is_admin': True},
        ]
        stats = platform_stats(profiles)
        self.assertEqual(stats.registered_teachers, 5)
        self.assertEqual(stats.completed_profiles, 3)
        self.assertEqual(stats.incomplete_profiles, 2)
        self.assertEqual(stats.by_province, {'Western': 2, 'Uva': 1})
        # Every teacher with a subject counts, completed or not
        self.assertEqual(stats.by_subject, {'Science': 3, 'Art': 1})

    def test_platform_stats_empty(self):
        self.assertEqual(platform_stats([]), (0, 0, 0, {}, {}))


class MatchFinderViewTests(TestCase):
    def create_teacher(self, email, current, desired, desired_zones, subject='Mathematics',
                       completed=True, is_admin=False):
        user = MyUser.objects.create_user(email=email, password='password', is_admin=is_admin)
        TeacherProfile.objects.create(
            user=user,
            full_name=email.split('@')[0].title(),
            subject=subject,
            current_province=current[0],
            current_district=current[1],
            current_zone=current[2],
            current_school='Royal College',
            desired_province=desired[0],
            desired_district=desired[1],
            desired_zones=desired_zones,
            whatsapp_number='+94 77 123 4567',
            profile_completed=completed,
        )
        return user

    def setUp(self):
        self.me = self.create_teacher('me@test.com', COLOMBO, ('Central', 'Kandy'), ['Kandy', 'Gampola'])
        self.match = self.create_teacher('match@test.com', KANDY, ('Western', 'Colombo'), ['Colombo'])
        self.science = self.create_teacher(
            'science@test.com', ('Central', 'Kandy', 'Gampola'), ('Western', 'Colombo'), ['Colombo'], subject='Science'
        )

    def test_requires_login(self):
        response = self.client.get(reverse('home:match_finder'))
        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse('users:login'), response['Location'])

    def test_lists_mutual_matches(self):
        self.client.force_login(self.me)
        response = self.client.get(reverse('home:match_finder'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [p.user for p in response.context['matches']],
            [self.match, self.science],
        )
        self.assertContains(response, 'https://wa.me/94771234567')

    def test_filter_from_query_string(self):
        self.client.force_login(self.me)
        response = self.client.get(reverse('home:match_finder'), {'subject': 'Science'})
        self.assertEqual([p.user for p in response.context['matches']], [self.science])

    def test_zone_left_over_without_district_is_ignored(self):
        """Province picked, district cleared, but the old zone is still in the query string."""
        self.client.force_login(self.me)
        response = self.client.get(reverse('home:match_finder'), {'province': 'Central', 'zone': 'Homagama'})
        self.assertEqual(response.context['match_filter'].as_params(), {'province': 'Central'})
        self.assertEqual([p.user for p in response.context['matches']], [self.match, self.science])

    def test_admin_with_completed_profile_gets_no_matches(self):
        admin = self.create_teacher('admin@test.com', COLOMBO, ('Central', 'Kandy'), ['Kandy'], is_admin=True)
        self.assertEqual(find_matches(admin), [])

    def test_hidden_contact_is_not_shown(self):
        TeacherProfile.objects.filter(user=self.match).update(hide_contact=True)
        self.client.force_login(self.me)
        response = self.client.get(reverse('home:match_finder'), {'subject': 'Mathematics'})
        self.assertNotContains(response, 'wa.me')
        self.assertContains(response, 'Hidden')

    def test_admins_and_incomplete_profiles_are_not_candidates(self):
        self.create_teacher('admin@test.com', KANDY, ('Western', 'Colombo'), ['Colombo'], is_admin=True)
        self.create_teacher('draft@test.com', KANDY, ('Western', 'Colombo'), ['Colombo'], completed=False)
        self.assertEqual([p.user for p in find_matches(self.me)], [self.match, self.science])

    def test_incomplete_profile_sees_prompt(self):
        TeacherProfile.objects.filter(user=self.me).update(profile_completed=False)
        self.client.force_login(self.me)
        response = self.client.get(reverse('home:match_finder'))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.context['profile_complete'])
        self.assertContains(response, 'Complete Your Profile First')

    def test_landing_page(self):
        response = self.client.get(reverse('home:home'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['teacher_count'], 3)


class LocationApiTests(SimpleTestCase):
    def test_districts(self):
        response = self.client.get(reverse('home:api_districts'), {'province': 'Northern'})
        self.assertEqual(response.json(), {
            'districts': ['Jaffna', 'Kilinochchi', 'Mannar', 'Mullaitivu', 'Vavuniya'],
        })

    def test_zones(self):
        response = self.client.get(reverse('home:api_zones'), {'province': 'Western', 'district': 'Kalutara'})
        self.assertEqual(response.json(), {'zones': ['Horana', 'Kalutara', 'Matugama']})

    def test_unknown_names_give_empty_lists(self):
        self.assertEqual(self.client.get(reverse('home:api_districts'), {'province': 'Atlantis'}).json(), {'districts': []})
        self.assertEqual(self.client.get(reverse('home:api_zones')).json(), {'zones': []})


class ListZonesCommandTests(TestCase):
    def test_lists_one_province(self):
        out = StringIO()
        call_command('list_zones', province='Sabaragamuwa', stdout=out)
        self.assertIn('Kegalle: Dehiowita, Kegalle, Mawanella', out.getvalue())
        self.assertIn('1 provinces, 7 zones', out.getvalue())

    def test_reports_profiles_with_unknown_locations(self):
        user = MyUser.objects.create_user(email='old@test.com', password='password')
        TeacherProfile.objects.create(
            user=user,
            current_province='Western', current_district='Colombo', current_zone='Nowhere',
            desired_province='Central', desired_district='Kandy', desired_zones=['Kandy'],
            profile_completed=True,
        )
        out = StringIO()
        call_command('list_zones', province='Uva', check_profiles=True, stdout=out)
        self.assertIn('old@test.com: current Western/Colombo/Nowhere', out.getvalue())
        self.assertIn('1 profile(s) need attention', out.getvalue())
