"""Per-dimension feature extractors for provider matching.

Each extractor maps (request, provider, reference_time) to a score in [0, 1].
Extractors are total: missing or unusable provider data yields a neutral or
zero score instead of an exception.
"""

import math
from datetime import date, datetime, time, timedelta

import numpy as np
from rapidfuzz import fuzz

from smartmatch.config import EARTH_RADIUS_KM
from smartmatch.schemas.config import ScoringParameters
from smartmatch.schemas.provider import Availability, Provider, SkillEntry, Weekday
from smartmatch.schemas.request import Coordinates, ServiceRequest, Urgency
from smartmatch.utils import clamp01, is_number, normalize_name, shrink_toward_prior

_DEFAULT_PARAMS = ScoringParameters()


def haversine_km(origin: Coordinates, destination: Coordinates) -> float:
    """Great-circle distance between two points in kilometres."""
    lat1, lon1, lat2, lon2 = np.radians(
        [origin.latitude, origin.longitude, destination.latitude, destination.longitude]
    )
    h = np.sin((lat2 - lat1) / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2) ** 2
    return float(2 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(np.clip(h, 0.0, 1.0))))


def distance_score(
    request: ServiceRequest,
    provider: Provider,
    reference_time: datetime | None = None,
    params: ScoringParameters = _DEFAULT_PARAMS,
) -> float:
    """Score proximity between the request and the provider.

    Uses coordinates when both sides have them: full credit inside
    full_credit_radius_km, nothing beyond cutoff_radius_km, linear in between.
    Otherwise falls back to comparing governorate and city names.
    """
    if provider.location is None:
        return 0.0

    origin = request.location.coordinates
    destination = provider.location.coordinates
    if origin is not None and destination is not None:
        km = haversine_km(origin, destination)
        if km <= params.full_credit_radius_km:
            return 1.0
        if km >= params.cutoff_radius_km:
            return 0.0
        span = params.cutoff_radius_km - params.full_credit_radius_km
        return clamp01((params.cutoff_radius_km - km) / span)

    governorate = normalize_name(request.location.governorate)
    if not governorate or governorate != normalize_name(provider.location.governorate):
        return clamp01(params.other_location_score)

    request_city = normalize_name(request.location.city)
    if request_city and request_city == normalize_name(provider.location.city):
        return clamp01(params.same_city_score)
    return clamp01(params.same_governorate_score)


def _names_match(left: str, right: str, threshold: int) -> bool:
    left_norm = normalize_name(left)
    right_norm = normalize_name(right)
    if threshold >= 100 or not left_norm or not right_norm:
        return left_norm == right_norm
    return fuzz.ratio(left_norm, right_norm) >= threshold


def matching_skills(
    request: ServiceRequest,
    provider: Provider,
    params: ScoringParameters = _DEFAULT_PARAMS,
) -> list[SkillEntry]:
    """Return the provider's skill entries for the request's category and subcategory."""
    return [
        skill
        for skill in provider.skills
        if _names_match(skill.category, request.category, params.skill_match_threshold)
        and _names_match(skill.subcategory, request.subcategory, params.skill_match_threshold)
    ]


def skills_score(
    request: ServiceRequest,
    provider: Provider,
    reference_time: datetime | None = None,
    params: ScoringParameters = _DEFAULT_PARAMS,
) -> float:
    """Score how well the provider's skills fit the request.

    No matching skill scores exactly 0. A match earns the base score, a
    bonus if any matching entry is verified, and an experience bonus scaled
    by the longest matching experience up to experience_cap_years.
    """
    matches = matching_skills(request, provider, params)
    if not matches:
        return 0.0

    score = params.skill_base_score
    if any(skill.verified for skill in matches):
        score += params.skill_verified_bonus

    if params.experience_cap_years > 0:
        years = max(skill.years_of_experience for skill in matches)
        score += params.skill_experience_bonus * min(years / params.experience_cap_years, 1.0)

    return clamp01(score)


def rating_score(
    request: ServiceRequest,
    provider: Provider,
    reference_time: datetime | None = None,
    params: ScoringParameters = _DEFAULT_PARAMS,
) -> float:
    """Rescale the 0-5 rating to [0, 1], shrunk toward a prior for few reviews."""
    if not is_number(provider.rating):
        return clamp01(params.rating_prior)

    raw = clamp01(provider.rating / 5.0)
    return clamp01(
        shrink_toward_prior(raw, params.rating_prior, provider.review_count, params.min_reviews)
    )


def _day_window(day: date, availability: Availability, tzinfo) -> tuple[datetime, datetime]:
    start = availability.start_time or time.min
    opens = datetime.combine(day, start, tzinfo=tzinfo)
    if availability.end_time is None:
        return opens, datetime.combine(day + timedelta(days=1), time.min, tzinfo=tzinfo)

    closes = datetime.combine(day, availability.end_time, tzinfo=tzinfo)
    if closes <= opens:
        # Overnight shift
        closes += timedelta(days=1)
    return opens, closes


def schedule_overlaps(availability: Availability, start: datetime, end: datetime) -> bool:
    """Check whether the provider's weekly schedule overlaps [start, end)."""
    if end <= start:
        return False

    days = math.ceil((end - start) / timedelta(days=1))
    # Start one day early so an overnight shift from yesterday is seen
    for offset in range(-1, days + 1):
        day = start.date() + timedelta(days=offset)
        if Weekday(day.weekday()) not in availability.available_days:
            continue
        opens, closes = _day_window(day, availability, start.tzinfo)
        if opens < end and closes > start:
            return True
    return False


def availability_score(
    request: ServiceRequest,
    provider: Provider,
    reference_time: datetime,
    params: ScoringParameters = _DEFAULT_PARAMS,
) -> float:
    """Score whether the provider can take the job within the urgency window.

    Unknown availability is neutral; an explicit "not available" scores 0.
    An available provider with no weekly schedule on file gets full credit.
    """
    availability = provider.availability
    if availability is None:
        return clamp01(params.availability_unknown_score)
    if not availability.is_available:
        return 0.0
    if not availability.available_days:
        return 1.0

    if request.urgency == Urgency.FLEXIBLE:
        return 1.0
    if request.urgency == Urgency.IMMEDIATE:
        horizon = timedelta(hours=params.immediate_window_hours)
    else:
        horizon = timedelta(days=params.this_week_days)

    if schedule_overlaps(availability, reference_time, reference_time + horizon):
        return 1.0
    return clamp01(params.no_overlap_score)


def response_time_score(
    request: ServiceRequest,
    provider: Provider,
    reference_time: datetime | None = None,
    params: ScoringParameters = _DEFAULT_PARAMS,
) -> float:
    """Score responsiveness with a log-logistic decay.

    1 / (1 + (minutes / half_life) ** steepness): close to 1 for answers in
    a few minutes, 0.5 at the half-life and close to 0 after several days.
    """
    minutes = provider.average_response_minutes
    if not is_number(minutes) or minutes < 0:
        return clamp01(params.response_unknown_score)
    if minutes == 0:
        return 1.0

    ratio = minutes / params.response_half_life_minutes
    return clamp01(1.0 / (1.0 + ratio ** params.response_steepness))


def verification_score(
    request: ServiceRequest,
    provider: Provider,
    reference_time: datetime | None = None,
    params: ScoringParameters = _DEFAULT_PARAMS,
) -> float:
    """Look up the verification level, plus a bonus for top-rated providers."""
    score = params.verification_scores.get(provider.verification_level, 0.0)
    if provider.is_top_rated:
        score += params.top_rated_bonus
    return clamp01(score)


def completion_rate_score(
    request: ServiceRequest,
    provider: Provider,
    reference_time: datetime | None = None,
    params: ScoringParameters = _DEFAULT_PARAMS,
) -> float:
    """Rescale the 0-100 completion rate, shrunk toward a prior for few jobs."""
    if not is_number(provider.completion_rate):
        return clamp01(params.completion_prior)

    raw = clamp01(provider.completion_rate / 100.0)
    return clamp01(
        shrink_toward_prior(
            raw, params.completion_prior, provider.completed_jobs, params.min_completed_jobs
        )
    )


def data_warnings(provider: Provider) -> list[str]:
    """List the data gaps that forced an extractor onto a default."""
    warnings = []
    if provider.location is None:
        warnings.append("location: missing, distance scored 0")
    if not provider.skills:
        warnings.append("skills: no skills on file")
    if provider.rating is None:
        warnings.append("rating: missing, neutral prior used")
    if provider.availability is None:
        warnings.append("availability: missing, neutral score used")
    if provider.average_response_minutes is None:
        warnings.append("average_response_minutes: missing, neutral score used")
    if provider.completion_rate is None:
        warnings.append("completion_rate: missing, neutral prior used")
    return warnings
