"""
Mutual transfer matching.

Two teachers match when each one's current posting is where the other wants
to go: province and district must be equal, and the current zone must be one
of the other teacher's desired zones. Everything here works on plain profile
objects (model instances, or anything exposing the same attribute names, or
dicts) and never touches the database, except find_matches() which loads the
pool for a user.
"""
import logging

from .zones import list_districts, list_zones

logger = logging.getLogger(__name__)


def profile_field(profile, name):
    if profile is None:
        return None
    if isinstance(profile, dict):
        return profile.get(name)
    return getattr(profile, name, None)


def resolved_desired_zones(profile):
    """
    The set of zones a teacher is willing to move to.

    Profiles written before multi-zone preferences only carry desired_zone, so
    that single value is used when desired_zones is empty.
    """
    zones = profile_field(profile, 'desired_zones') or []
    resolved = {zone for zone in zones if zone}
    if resolved:
        return resolved
    legacy = profile_field(profile, 'desired_zone')
    return {legacy} if legacy else set()


def same_teacher(a, b):
    if a is b:
        return True
    a_id, b_id = profile_field(a, 'id'), profile_field(b, 'id')
    return a_id is not None and a_id == b_id


def _equal(a, b):
    # Blank never equals blank: a missing location is not a location
    return bool(a) and a == b


def is_mutual_match(me, candidate):
    """Check the six reciprocal location rules between two profiles."""
    if me is None or candidate is None or same_teacher(me, candidate):
        return False

    # Candidate is where I want to go
    if not _equal(profile_field(candidate, 'current_province'), profile_field(me, 'desired_province')):
        return False
    if not _equal(profile_field(candidate, 'current_district'), profile_field(me, 'desired_district')):
        return False
    if profile_field(candidate, 'current_zone') not in resolved_desired_zones(me):
        return False

    # I am where the candidate wants to go
    if not _equal(profile_field(candidate, 'desired_province'), profile_field(me, 'current_province')):
        return False
    if not _equal(profile_field(candidate, 'desired_district'), profile_field(me, 'current_district')):
        return False
    if profile_field(me, 'current_zone') not in resolved_desired_zones(candidate):
        return False

    return True


class MatchFilter:
    """
    Optional narrowing of match results by subject and location.

    Location fields cascade: choosing a province clears the district and zone,
    choosing a district clears the zone. Always mutate through the setters.
    """

    PARAMS = ('subject', 'province', 'district', 'zone')

    def __init__(self, subject=None, province=None, district=None, zone=None):
        self.subject = None
        self.province = None
        self.district = None
        self.zone = None
        self.set_subject(subject)
        self.set_province(province)
        self.set_district(district)
        self.set_zone(zone)

    def __repr__(self):
        return f"MatchFilter({self.as_params()!r})"

    def __eq__(self, other):
        if not isinstance(other, MatchFilter):
            return NotImplemented
        return self.as_params() == other.as_params()

    def set_subject(self, subject):
        self.subject = subject or None

    def set_province(self, province):
        self.province = province or None
        self.district = None
        self.zone = None

    def set_district(self, district):
        self.district = district or None
        self.zone = None

    def set_zone(self, zone):
        self.zone = zone or None

    def clear(self):
        self.set_subject(None)
        self.set_province(None)

    @property
    def is_empty(self):
        return not any(self.as_params().values())

    def as_params(self):
        """The fields that are set, keyed by request parameter name."""
        return {
            name: getattr(self, name)
            for name in self.PARAMS
            if getattr(self, name)
        }

    @classmethod
    def from_params(cls, params):
        """
        Build a filter from request parameters (a QueryDict or dict).

        A district outside the chosen province, or a zone outside the chosen
        district, is what a stale form sends after the province changed, so it
        is dropped the same way the setters would have reset it. A district is
        only kept under a province, and a zone only under a district.
        """
        match_filter = cls()
        match_filter.set_subject(params.get('subject'))
        match_filter.set_province(params.get('province'))

        district = params.get('district')
        if district and (not match_filter.province or
                         district not in list_districts(match_filter.province)):
            logger.debug("Dropping district %r outside province %r", district, match_filter.province)
            district = None
        match_filter.set_district(district)

        zone = params.get('zone')
        if zone and (not match_filter.district or
                     zone not in list_zones(match_filter.province, match_filter.district)):
            logger.debug("Dropping zone %r outside district %r", zone, match_filter.district)
            zone = None
        match_filter.set_zone(zone)
        return match_filter

    def passes(self, candidate):
        """Check a candidate against every field that is set."""
        if self.subject and profile_field(candidate, 'subject') != self.subject:
            return False

        if self.province and self.province not in (
            profile_field(candidate, 'current_province'),
            profile_field(candidate, 'desired_province'),
        ):
            return False

        if self.district and self.district not in (
            profile_field(candidate, 'current_district'),
            profile_field(candidate, 'desired_district'),
        ):
            return False

        if self.zone:
            if profile_field(candidate, 'current_zone') != self.zone and \
               self.zone not in resolved_desired_zones(candidate):
                return False

        return True


def find_mutual_matches(me, candidates, match_filter=None):
    """
    Candidates forming a mutual transfer match with `me` and passing the filter.

    Order of `candidates` is kept. A profile that is not completed gets no
    matches.
    """
    if not profile_field(me, 'profile_completed'):
        return []

    match_filter = match_filter or MatchFilter()
    matches = [
        candidate for candidate in candidates
        if is_mutual_match(me, candidate) and match_filter.passes(candidate)
    ]
    logger.debug("Mutual matches for %s: %d (filter=%r)", profile_field(me, 'id'), len(matches), match_filter)
    return matches


def find_all_mutual_pairs(profiles):
    """
    Every unordered pair of profiles in the pool that match each other.
    Returns a list of (a, b) tuples in pool order.
    """
    profiles = list(profiles)
    pairs = []
    for i, teacher_a in enumerate(profiles):
        for teacher_b in profiles[i + 1:]:
            if is_mutual_match(teacher_a, teacher_b):
                pairs.append((teacher_a, teacher_b))
    return pairs


def find_matches(user, match_filter=None):
    """
    Load the candidate pool for a user and return their mutual matches.
    Users without a completed profile, and administrators, get an empty list.
    """
    from users.models import TeacherProfile
    from users.templatetags.profile_checks import is_profile_complete

    if not is_profile_complete(user):
        return []

    profile = user.profile
    candidates = list(TeacherProfile.objects.candidates_for(profile))
    logger.debug("Candidate pool for %s: %d profiles", user, len(candidates))
    return find_mutual_matches(profile, candidates, match_filter)
