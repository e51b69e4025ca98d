"""
Pytest configuration and fixtures for the Etsy Affiliate Hub tests.
"""

import httpx
import pytest

import config
from main import create_app
from models import Creator
from store import CreatorStore, load_store


@pytest.fixture(scope="session")
def sample_store() -> CreatorStore:
    """The bundled dataset of 11 creators, 3 posts and 5 FAQs."""
    return load_store(config.DATA_DIR)


@pytest.fixture
def make_creator():
    """Factory for minimal valid creators; keyword arguments override fields."""

    def _make(id: str, **overrides) -> Creator:
        data = {
            "id": id,
            "shop_name": id.capitalize(),
            "owner_name": "Owner",
            "shop_url": f"https://www.etsy.com/shop/{id}",
            "avatar_url": "https://example.com/avatar.jpg",
            "header_image_url": "https://example.com/header.jpg",
            "primary_category": "Jewelry",
            "tags": ["Jewelry"],
            "location": "Austin, USA",
            "rating": 4.5,
            "review_count": 10,
            "sales": 100,
            "short_description": "A shop.",
            "bio": "A longer story about the shop.",
            "vetting_status": "Verified",
            "vetting_notes": "",
            "affiliate": {
                "program_type": "Direct",
                "base_commission_rate": 10,
                "cookie_window_days": 30,
                "notes": "",
            },
        }
        data.update(overrides)
        return Creator(**data)

    return _make


@pytest.fixture
async def client(sample_store):
    """Async HTTP client against an app serving the bundled dataset."""
    app = create_app(sample_store)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
