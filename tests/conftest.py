"""Shared pytest fixtures for all tests."""

import json

import pytest

from tests.test_utils import REFERENCE_TIME


@pytest.fixture
def reference_time():
    """Fixed 'now' so availability scoring is reproducible."""
    return REFERENCE_TIME


@pytest.fixture
def request_record():
    """Service request as the marketplace API returns it."""
    return {
        "_id": "65f0c0ffee",
        "category": "plumbing",
        "subcategory": "leak-repair",
        "urgency": "asap",
        "location": {"governorate": "Cairo", "city": "Maadi"},
        "description": "Kitchen sink is leaking",
        "budget": {"min": 200, "max": 500},
        "createdAt": "2026-03-01T09:00:00Z",
        "expiresAt": "2026-03-08T09:00:00Z",
    }


@pytest.fixture
def provider_records():
    """Provider records as the marketplace API returns them."""
    return [
        {
            "_id": "prov-a",
            "name": {"first": "Ahmed", "last": "Hassan"},
            "rating": 4.8,
            "reviewCount": 42,
            "completedJobs": 60,
            "verificationLevel": "approved",
            "isTopRated": True,
            "averageResponseTime": 12,
            "skills": [
                {
                    "category": "plumbing",
                    "subcategory": "leak-repair",
                    "verified": True,
                    "yearsOfExperience": 6,
                }
            ],
            "location": {"governorate": "Cairo", "city": "Maadi"},
            "pricingRange": {"min": 150, "max": 400},
            "availability": {
                "isAvailable": True,
                "availableDays": ["monday", "tuesday", "wednesday"],
                "availableHours": {"start": "08:00", "end": "18:00"},
            },
            "completionRate": 97,
            "lastActive": "2026-03-02T08:30:00Z",
        },
        {
            "_id": "prov-b",
            "name": {"first": "Mona", "last": "Saleh"},
            "rating": 4.9,
            "reviewCount": 80,
            "completedJobs": 120,
            "verificationLevel": "skill",
            "averageResponseTime": 45,
            "skills": [{"category": "electrical", "subcategory": "wiring", "verified": True}],
            "location": {"governorate": "Giza", "city": "Dokki"},
            "availability": {"isAvailable": True},
            "completionRate": 99,
        },
        {
            "_id": "prov-c",
            "name": "Karim",
            "rating": "excellent",
            "skills": [{"category": "plumbing", "subcategory": "leak-repair"}],
            "location": {"governorate": "Cairo", "city": "Nasr City"},
        },
    ]


@pytest.fixture
def input_files(tmp_path, request_record, provider_records):
    """Write request and providers JSON files and return their paths."""
    request_path = tmp_path / "request.json"
    providers_path = tmp_path / "providers.json"
    request_path.write_text(json.dumps(request_record), encoding="utf-8")
    providers_path.write_text(json.dumps(provider_records), encoding="utf-8")
    return {"request": request_path, "providers": providers_path}
