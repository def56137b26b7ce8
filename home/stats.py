"""
Dashboard counters.

These run the matching predicates over the raw candidate pool. They never
look at a user's match filter: the numbers describe every opportunity a
teacher has, not what the match finder currently shows.
"""
import logging
from collections import Counter, namedtuple

from .matching import is_mutual_match, profile_field, resolved_desired_zones, same_teacher

logger = logging.getLogger(__name__)

DashboardStats = namedtuple('DashboardStats', [
    'total_teachers',
    'mutual_matches',
    'same_subject',
    'same_zone',
])

PlatformStats = namedtuple('PlatformStats', [
    'registered_teachers',
    'completed_profiles',
    'incomplete_profiles',
    'by_province',
    'by_subject',
])


def shares_zone(me, candidate):
    """
    True when the two teachers have a zone in common, current or desired,
    in any combination.
    """
    my_current = profile_field(me, 'current_zone')
    their_current = profile_field(candidate, 'current_zone')
    my_desired = resolved_desired_zones(me)
    their_desired = resolved_desired_zones(candidate)

    if my_current and their_current == my_current:
        return True
    if their_current and their_current in my_desired:
        return True
    if my_current and my_current in their_desired:
        return True
    return bool(my_desired & their_desired)


def compute_stats(me, candidates):
    """
    Counters for the teacher dashboard.
    The viewer is dropped from the pool if it is there, so it is counted once.
    """
    candidates = [c for c in candidates if not same_teacher(me, c)]
    total = len(candidates) + 1  # the teacher looking at the dashboard

    if not profile_field(me, 'profile_completed'):
        return DashboardStats(total, 0, 0, 0)

    my_subject = profile_field(me, 'subject')
    stats = DashboardStats(
        total_teachers=total,
        mutual_matches=sum(1 for c in candidates if is_mutual_match(me, c)),
        same_subject=sum(1 for c in candidates if my_subject and profile_field(c, 'subject') == my_subject),
        same_zone=sum(1 for c in candidates if shares_zone(me, c)),
    )
    logger.debug("Dashboard stats for %s: %s", profile_field(me, 'id'), stats)
    return stats


def platform_stats(profiles):
    """
    Admin overview of registered (non-admin) teachers.

    Completed and incomplete profiles are counted separately. The province
    breakdown covers completed profiles, the subject breakdown every teacher
    who picked a subject.
    """
    registered = 0
    completed = 0
    by_province = Counter()
    by_subject = Counter()
    for profile in profiles:
        if profile_field(profile, 'is_admin'):
            continue
        registered += 1
        subject = profile_field(profile, 'subject')
        if subject:
            by_subject[subject] += 1
        if profile_field(profile, 'profile_completed'):
            completed += 1
            by_province[profile_field(profile, 'current_province') or 'Unknown'] += 1
    return PlatformStats(
        registered_teachers=registered,
        completed_profiles=completed,
        incomplete_profiles=registered - completed,
        by_province=dict(by_province),
        by_subject=dict(by_subject),
    )
