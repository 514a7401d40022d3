"""Load service requests and providers supplied by the directory service.

This is the boundary where loosely shaped JSON records become typed models.
Requests must be well-formed. Provider records are salvaged field by field:
an unusable field is dropped to its default and reported as a warning, so
one noisy record never keeps the rest of the batch from being ranked.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from smartmatch.schemas.provider import (
    Availability,
    PricingRange,
    Provider,
    SkillEntry,
    VerificationLevel,
)
from smartmatch.schemas.request import Coordinates, Location, ServiceRequest

logger = logging.getLogger(__name__)


def _first(raw: dict, *keys: str, default: Any = None) -> Any:
    """Return the value of the first key present in raw."""
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def _normalize_coordinates(raw: Any) -> dict | None:
    """Accept {lat, lng}, {latitude, longitude} or GeoJSON-style [lng, lat]."""
    if raw is None:
        return None
    if isinstance(raw, dict):
        if raw.get("type") == "Point" and "coordinates" in raw:
            return _normalize_coordinates(raw["coordinates"])
        return {
            "latitude": _first(raw, "latitude", "lat"),
            "longitude": _first(raw, "longitude", "lng", "lon"),
        }
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return {"latitude": raw[1], "longitude": raw[0]}
    raise ValueError(f"unrecognized coordinates: {raw!r}")


def _normalize_location(raw: Any) -> dict | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"location must be an object, got {type(raw).__name__}")
    return {
        "governorate": _first(raw, "governorate", "state", default=""),
        "city": _first(raw, "city", default=""),
        "coordinates": _normalize_coordinates(_first(raw, "coordinates", "geo")),
    }


def _normalize_provider_location(raw: Any, warnings: list[str]) -> dict | None:
    """Like _normalize_location, but bad coordinates only cost the coordinates."""
    if not isinstance(raw, dict):
        return _normalize_location(raw)

    raw_coordinates = _first(raw, "coordinates", "geo")
    location = _normalize_location(
        {key: value for key, value in raw.items() if key not in ("coordinates", "geo")}
    )
    if raw_coordinates is None:
        return location

    try:
        location["coordinates"] = Coordinates.model_validate(
            _normalize_coordinates(raw_coordinates)
        )
    except (ValidationError, ValueError) as e:
        warnings.append(
            f"location.coordinates: dropped invalid value {raw_coordinates!r} ({_short_error(e)})"
        )
    return location


def _display_name(raw: dict) -> str:
    name = _first(raw, "display_name", "displayName", "name", default="")
    if isinstance(name, dict):
        parts = [name.get("first") or "", name.get("last") or ""]
        return " ".join(p for p in parts if p).strip()
    return str(name)


def _normalize_availability(raw: Any) -> dict | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"availability must be an object, got {type(raw).__name__}")
    hours = _first(raw, "availableHours", "available_hours", default={})
    if not isinstance(hours, dict):
        hours = {}
    return {
        "is_available": _first(raw, "is_available", "isAvailable"),
        "available_days": _first(raw, "available_days", "availableDays", default=[]),
        "start_time": _first(raw, "start_time", "startTime") or hours.get("start") or None,
        "end_time": _first(raw, "end_time", "endTime") or hours.get("end") or None,
    }


def _normalize_skill(raw: Any) -> dict:
    if isinstance(raw, str):
        # Legacy profiles store bare category names
        return {"category": raw, "subcategory": ""}
    return {
        "category": _first(raw, "category", default=""),
        "subcategory": _first(raw, "subcategory", "subCategory", default=""),
        "verified": _first(raw, "verified", "isVerified", default=False),
        "years_of_experience": _first(
            raw, "years_of_experience", "yearsOfExperience", "experienceYears", default=0
        ),
    }


def _verification_level(raw: dict) -> Any:
    level = _first(raw, "verification_level", "verificationLevel")
    if level is None and _first(raw, "isVerified", "is_verified"):
        return VerificationLevel.BASIC
    return level


def _validate_field(provider_id: str, field: str, value: Any) -> Any:
    """Validate one Provider field in isolation, using the model's own rules."""
    return getattr(Provider.model_validate({"id": provider_id, field: value}), field)


def load_provider(raw: dict) -> tuple[Provider, list[str]]:
    """Build a Provider from a directory record, salvaging what it can.

    Args:
        raw: Provider record (camelCase marketplace API or snake_case).

    Returns:
        Tuple of (Provider, warnings) where warnings lists every field that
        had to be dropped.

    Raises:
        ValueError: If the record is not an object or has no id.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"provider record must be an object, got {type(raw).__name__}")

    provider_id = _first(raw, "id", "_id", "providerId")
    if provider_id is None or str(provider_id) == "":
        raise ValueError("provider record has no id")

    warnings: list[str] = []
    candidates: dict[str, Any] = {
        "display_name": _display_name(raw),
        "rating": _first(raw, "rating", "averageRating"),
        "review_count": _first(raw, "review_count", "reviewCount", default=0),
        "completed_jobs": _first(
            raw, "completed_jobs", "completedJobs", "totalJobsCompleted", default=0
        ),
        "verification_level": _verification_level(raw),
        "is_top_rated": _first(raw, "is_top_rated", "isTopRated", default=False),
        "average_response_minutes": _first(
            raw, "average_response_minutes", "averageResponseTime", "responseTime"
        ),
        "completion_rate": _first(raw, "completion_rate", "completionRate"),
        "last_active": _first(raw, "last_active", "lastActive"),
    }

    fields: dict[str, Any] = {"id": str(provider_id)}
    for field, value in candidates.items():
        if value is None:
            continue
        try:
            fields[field] = _validate_field(fields["id"], field, value)
        except ValidationError as e:
            warnings.append(f"{field}: dropped invalid value {value!r} ({_short_error(e)})")

    for field, keys, model, normalizer in (
        (
            "location",
            ("location",),
            Location,
            lambda value: _normalize_provider_location(value, warnings),
        ),
        ("pricing", ("pricing", "pricingRange", "pricing_range"), PricingRange, None),
        ("availability", ("availability",), Availability, _normalize_availability),
    ):
        value = _first(raw, *keys)
        if value is None:
            continue
        try:
            data = normalizer(value) if normalizer else value
            fields[field] = model.model_validate(data)
        except (ValidationError, ValueError) as e:
            warnings.append(f"{field}: dropped invalid value ({_short_error(e)})")

    skills = []
    raw_skills = _first(raw, "skills", default=[])
    if not isinstance(raw_skills, list):
        warnings.append("skills: expected a list, ignored")
        raw_skills = []
    for index, raw_skill in enumerate(raw_skills):
        try:
            skills.append(SkillEntry.model_validate(_normalize_skill(raw_skill)))
        except (ValidationError, ValueError, TypeError) as e:
            warnings.append(f"skills[{index}]: dropped invalid entry ({_short_error(e)})")
    fields["skills"] = tuple(skills)

    return Provider(**fields), warnings


def _short_error(error: Exception) -> str:
    if isinstance(error, ValidationError):
        first = error.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        return f"{location}: {first['msg']}" if location else first["msg"]
    return str(error)


def load_providers(raw_records: list[dict]) -> tuple[list[Provider], dict[str, list[str]]]:
    """Load a batch of provider records.

    Records without an id cannot be ranked deterministically and are skipped,
    as is any record repeating an id already loaded. The first one wins.

    Returns:
        Tuple of (providers, warnings keyed by provider id).
    """
    providers = []
    seen_ids: set[str] = set()
    warnings: dict[str, list[str]] = {}
    for index, raw in enumerate(raw_records):
        try:
            provider, provider_warnings = load_provider(raw)
        except ValueError as e:
            logger.warning(f"Skipping provider record #{index}: {e}")
            continue
        if provider.id in seen_ids:
            logger.warning(f"Skipping provider record #{index}: duplicate id {provider.id!r}")
            continue
        seen_ids.add(provider.id)
        providers.append(provider)
        if provider_warnings:
            warnings[provider.id] = provider_warnings

    logger.info(f"Loaded {len(providers)} of {len(raw_records)} provider records")
    return providers, warnings


def load_request(raw: dict) -> ServiceRequest:
    """Build a ServiceRequest from a directory record.

    Raises:
        ValueError: If required fields are missing or malformed
            (pydantic.ValidationError is a subclass).
    """
    data = {
        "id": _first(raw, "id", "_id"),
        "category": _first(raw, "category"),
        "subcategory": _first(raw, "subcategory", "subCategory"),
        "urgency": _first(raw, "urgency", default="flexible"),
        "location": _normalize_location(_first(raw, "location")),
        "description": _first(raw, "description", default=""),
        "budget": _first(raw, "budget"),
        "created_at": _first(raw, "created_at", "createdAt"),
        "expires_at": _first(raw, "expires_at", "expiresAt"),
    }
    if data["id"] is not None:
        data["id"] = str(data["id"])
    return ServiceRequest.model_validate(data)


def load_request_from_file(file_path: Path) -> ServiceRequest:
    """Load a service request from a JSON file."""
    with open(file_path, encoding="utf-8") as f:
        return load_request(json.load(f))


def load_providers_from_file(file_path: Path) -> tuple[list[Provider], dict[str, list[str]]]:
    """Load provider records from a JSON file holding a list of objects.

    A top-level object with a "providers" key is also accepted.
    """
    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("providers", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of providers in {file_path}")

    logger.info(f"Read {len(data)} provider records from {file_path}")
    return load_providers(data)
