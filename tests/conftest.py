from __future__ import annotations

import copy

import pytest


SAMPLE_PAYLOAD = {
    "company_info": {"name": "Acme Retail"},
    "campaigns": [
        {
            "id": 1,
            "name": "Summer Sale",
            "impressions": 10000,
            "clicks": 500,
            "conversions": 50,
            "spend": 1000.0,
            "revenue": 4000.0,
            "weekly_performance": [
                {
                    "week_start": "2024-01-08",
                    "week_end": "2024-01-14",
                    "impressions": 6000,
                    "clicks": 300,
                    "conversions": 30,
                    "spend": 600.0,
                    "revenue": 2400.0,
                },
                {
                    "week_start": "2024-01-01",
                    "week_end": "2024-01-07",
                    "impressions": 4000,
                    "clicks": 200,
                    "conversions": 20,
                    "spend": 400.0,
                    "revenue": 1600.0,
                },
            ],
            "regional_performance": [
                {
                    "region": "Dubai",
                    "country": "UAE",
                    "impressions": 7000,
                    "clicks": 350,
                    "conversions": 35,
                    "spend": 700.0,
                    "revenue": 2800.0,
                    "ctr": 5.0,
                    "conversion_rate": 10.0,
                    "cpc": 2.0,
                    "cpa": 20.0,
                    "roas": 4.0,
                },
                {
                    "region": "Riyadh",
                    "country": "Saudi Arabia",
                    "impressions": 3000,
                    "clicks": 150,
                    "conversions": 15,
                    "spend": 300.0,
                    "revenue": 1200.0,
                },
            ],
            "demographic_breakdown": [
                {"age_group": "25-34", "gender": "Male", "percentage_of_audience": 60},
                {"age_group": "18-24", "gender": "Female", "percentage_of_audience": 40},
            ],
            "device_breakdown": [
                {"device_type": "Mobile", "percentage_of_audience": 70},
                {"device_type": "Desktop", "percentage_of_audience": 30},
            ],
        },
        {
            "id": 2,
            "name": "Brand Push",
            "impressions": 20000,
            "clicks": 400,
            "conversions": 20,
            "spend": 2000.0,
            "revenue": 3000.0,
            "weekly_performance": [
                {
                    "week_start": "2024-01-01",
                    "week_end": "2024-01-07",
                    "impressions": 10000,
                    "clicks": 200,
                    "conversions": 10,
                    "spend": 1000.0,
                    "revenue": 1500.0,
                },
                {
                    "week_start": "2024-01-08",
                    "week_end": "2024-01-14",
                    "impressions": 10000,
                    "clicks": 200,
                    "conversions": 10,
                    "spend": 1000.0,
                    "revenue": 1500.0,
                },
            ],
            "regional_performance": [
                {
                    "region": "Dubai",
                    "country": "UAE",
                    "impressions": 12000,
                    "clicks": 240,
                    "conversions": 12,
                    "spend": 1200.0,
                    "revenue": 1800.0,
                },
                {
                    "region": "Atlantis",
                    "country": "Nowhere",
                    "impressions": 8000,
                    "clicks": 160,
                    "conversions": 8,
                    "spend": 800.0,
                    "revenue": 1200.0,
                },
            ],
            "demographic_breakdown": [
                {"age_group": "25-34", "gender": "Male", "percentage_of_audience": 50},
                {"age_group": "25-34", "gender": "Female", "percentage_of_audience": 50},
            ],
        },
    ],
}


@pytest.fixture
def payload():
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def document(payload):
    from campaign_core.n1_1_document import normalize_document

    return normalize_document(payload)


@pytest.fixture
def campaigns(document):
    return document["campaigns"]


def _make_campaign(name="C", **overrides):
    campaign = {
        "id": name,
        "name": name,
        "impressions": 0,
        "clicks": 0,
        "conversions": 0,
        "spend": 0.0,
        "revenue": 0.0,
        "weekly_performance": [],
        "regional_performance": [],
        "demographic_breakdown": [],
        "device_breakdown": [],
    }
    campaign.update(overrides)
    return campaign


@pytest.fixture
def make_campaign():
    return _make_campaign
