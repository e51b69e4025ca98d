"""Integration tests for the HTML pages and the JSON API."""

from unittest.mock import AsyncMock, patch

import httpx

from main import create_app
from models import OnboardingResponse
from services.forms_service import NETWORK_ERROR_MESSAGE, SubmissionError
from store import CreatorStore

ONBOARDING_FORM = {
    "name": "Dana",
    "email": "dana@example.com",
    "primary_channel": "Pinterest",
    "monthly_reach": "25k",
    "niches": "planners",
}
ONBOARDING_JSON = {
    "name": "Dana",
    "email": "dana@example.com",
    "primaryChannel": "Blog",
    "monthlyReach": "25k",
    "niches": "planners",
}


class TestPages:
    """Tests for the server-rendered pages."""

    async def test_home(self, client):
        res = await client.get("/")
        assert res.status_code == 200
        assert "text/html" in res.headers["content-type"]
        assert "CaitlynMinimalist" in res.text
        assert "1 / 5" in res.text
        assert "2,940 clicks" in res.text
        assert "8.0% conv. rate" in res.text

    async def test_directory_lists_everyone_by_default(self, client, sample_store):
        res = await client.get("/creators")
        assert res.status_code == 200
        for creator in sample_store.creators:
            assert f'href="/creators/{creator.id}"' in res.text

    async def test_directory_category_filter(self, client):
        res = await client.get("/creators", params={"category": "Jewelry", "sort_by": "sales"})
        assert res.status_code == 200
        assert 'href="/creators/caitlynminimalist"' in res.text
        assert 'href="/creators/yakutum"' in res.text
        assert 'href="/creators/modparty"' not in res.text
        assert res.text.index("/creators/caitlynminimalist") < res.text.index("/creators/yakutum")

    async def test_directory_empty_fallback(self, client):
        res = await client.get("/creators", params={"vetting": "Watchlist"})
        assert res.status_code == 200
        assert "No creators match your filters yet." in res.text

    async def test_directory_rejects_unknown_sort(self, client):
        res = await client.get("/creators", params={"sort_by": "newest"})
        assert res.status_code == 422

    async def test_directory_rejects_unknown_vetting(self, client):
        res = await client.get("/creators", params={"vetting": "Banned"})
        assert res.status_code == 422

    async def test_profile(self, client):
        res = await client.get("/creators/modparty")
        assert res.status_code == 200
        assert "Personalized Bridesmaid Proposal Box" in res.text
        assert "Etsy Affiliate" in res.text

    async def test_profile_not_found(self, client):
        res = await client.get("/creators/not-a-shop")
        assert res.status_code == 404
        assert "Creator not found" in res.text

    async def test_creator_application(self, client):
        res = await client.post(
            "/creators/modparty/apply",
            data={
                "name": "Dana",
                "email": "dana@example.com",
                "primary_channel": "Pinterest",
                "audience_summary": "Wedding planners",
            },
        )
        assert res.status_code == 200
        assert "your application for ModParty" in res.text
        assert "AFF-MODPARTY-" in res.text

    async def test_creator_application_unknown_creator(self, client):
        res = await client.post("/creators/ghost/apply", data={"name": "Dana"})
        assert res.status_code == 404

    async def test_onboarding_page(self, client):
        res = await client.get("/affiliate-onboarding")
        assert res.status_code == 200
        assert 'name="primary_channel"' in res.text

    async def test_onboarding_success(self, client):
        reply = OnboardingResponse(ok=True, message="Recorded in sheet")
        with patch("routes.web.submit_onboarding", new=AsyncMock(return_value=reply)) as submit:
            res = await client.post(
                "/affiliate-onboarding",
                data=ONBOARDING_FORM,
            )
        assert res.status_code == 200
        assert "Recorded in sheet" in res.text
        sent = submit.await_args.args[0]
        assert sent.name == "Dana"
        assert sent.niches == "planners"
        assert 'value="Dana"' not in res.text

    async def test_onboarding_error_keeps_values(self, client):
        failing = AsyncMock(side_effect=SubmissionError(NETWORK_ERROR_MESSAGE))
        with patch("routes.web.submit_onboarding", new=failing):
            res = await client.post("/affiliate-onboarding", data=ONBOARDING_FORM)
        assert res.status_code == 200
        assert "Network error while submitting." in res.text
        assert 'value="Dana"' in res.text

    async def test_onboarding_blank_fields_not_sent(self, client):
        submit = AsyncMock()
        with patch("routes.web.submit_onboarding", new=submit):
            res = await client.post(
                "/affiliate-onboarding",
                data={"name": "Dana", "email": "dana@example.com", "primary_channel": "  "},
            )
        assert res.status_code == 200
        assert "Please fill in every field before submitting: primary channel, monthly reach, niches." in res.text
        assert 'value="Dana"' in res.text
        submit.assert_not_awaited()

    async def test_creator_application_blank_fields(self, client):
        res = await client.post("/creators/modparty/apply", data={"name": "Dana", "email": ""})
        assert res.status_code == 200
        assert "AFF-MODPARTY-" not in res.text
        assert "Please fill in every field before submitting: email, primary channel, audience summary." in res.text

    async def test_contact_blank_fields(self, client):
        res = await client.post("/contact", data={"name": "Sam", "email": "sam@example.com"})
        assert res.status_code == 200
        assert "your message has been received" not in res.text
        assert "topic, message" in res.text

    async def test_blog_defaults_to_first_post(self, client):
        res = await client.get("/blog")
        assert res.status_code == 200
        assert "Launch Your First Etsy Creator Campaign in 7 Days" in res.text
        assert "Key takeaways" in res.text

    async def test_blog_selected_post(self, client):
        res = await client.get("/blog", params={"post": "case-study-digital-planners"})
        assert "Published August 20, 2025" in res.text

    async def test_contact(self, client):
        res = await client.get("/contact")
        assert res.status_code == 200
        assert "Who is this platform designed for?" in res.text

    async def test_contact_submit(self, client):
        res = await client.post(
            "/contact",
            data={
                "name": "Sam",
                "email": "sam@example.com",
                "role": "Etsy creator",
                "topic": "Vetting",
                "message": "Hi",
            },
        )
        assert res.status_code == 200
        assert "your message has been received" in res.text

    async def test_legal_pages(self, client):
        for path in ["/privacy-policy", "/terms-of-service"]:
            res = await client.get(path)
            assert res.status_code == 200
            assert "Last updated" in res.text


class TestApi:
    """Tests for /api/v1 endpoints."""

    async def test_creators_query(self, client):
        res = await client.get("/api/v1/creators", params={"category": "Jewelry"})
        assert res.status_code == 200
        body = res.json()
        assert body["count"] == 2
        assert [c["shopName"] for c in body["results"]] == ["CaitlynMinimalist", "YAKUTUM"]

    async def test_creators_default_returns_all(self, client):
        body = (await client.get("/api/v1/creators")).json()
        assert body["count"] == 11
        sales = [c["sales"] for c in body["results"]]
        assert sales == sorted(sales, reverse=True)

    async def test_creators_rating_sort(self, client):
        body = (await client.get("/api/v1/creators", params={"sort_by": "rating", "min_rating": 4.8})).json()
        assert [c["id"] for c in body["results"]][-2:] == ["plannerpress", "cozymapco"]

    async def test_creators_search_without_match(self, client):
        body = (await client.get("/api/v1/creators", params={"search": "zzz-no-match"})).json()
        assert body == {"results": [], "count": 0}

    async def test_creators_invalid_sort(self, client):
        res = await client.get("/api/v1/creators", params={"sort_by": "popular"})
        assert res.status_code == 422

    async def test_top_creators(self, client):
        body = (await client.get("/api/v1/creators/top", params={"limit": 2})).json()
        assert [c["id"] for c in body["results"]] == ["caitlynminimalist", "bohemianfindings"]

    async def test_creator_detail(self, client):
        res = await client.get("/api/v1/creators/yakutum")
        assert res.status_code == 200
        body = res.json()
        assert body["affiliate"]["cookieWindowDays"] == 45
        assert body["vettingStatus"] == "Verified"

    async def test_creator_detail_not_found(self, client):
        res = await client.get("/api/v1/creators/nobody")
        assert res.status_code == 404
        assert res.json() == {"detail": "Creator not found"}

    async def test_categories(self, client):
        body = (await client.get("/api/v1/categories")).json()
        assert body["categories"][0] == "Craft Supplies"
        assert "Wedding & Party" in body["categories"]

    async def test_blog(self, client):
        body = (await client.get("/api/v1/blog")).json()
        assert len(body["posts"]) == 3
        res = await client.get("/api/v1/blog/vetting-etsy-creators-like-a-pro")
        assert res.json()["readTimeMinutes"] == 7
        assert (await client.get("/api/v1/blog/nope")).status_code == 404

    async def test_faqs_and_analytics(self, client):
        faqs = (await client.get("/api/v1/faqs")).json()["faqs"]
        assert len(faqs) == 5
        analytics = (await client.get("/api/v1/analytics")).json()
        assert analytics["conversion_rate"] == 8.0

    async def test_onboarding_success(self, client):
        reply = OnboardingResponse(ok=True, submitted_at="2025-10-01T10:00:00Z")
        with patch("routes.api.submit_onboarding", new=AsyncMock(return_value=reply)):
            res = await client.post(
                "/api/v1/onboarding",
                json=ONBOARDING_JSON,
            )
        assert res.status_code == 200
        body = res.json()
        assert body["status"] == "submitted"
        assert body["response"]["submittedAt"] == "2025-10-01T10:00:00Z"

    async def test_onboarding_failure(self, client):
        failing = AsyncMock(side_effect=SubmissionError("Email already registered"))
        with patch("routes.api.submit_onboarding", new=failing):
            res = await client.post("/api/v1/onboarding", json=ONBOARDING_JSON)
        assert res.status_code == 502
        assert res.json()["detail"] == "Email already registered"

    async def test_onboarding_requires_every_field(self, client):
        submit = AsyncMock()
        with patch("routes.api.submit_onboarding", new=submit):
            empty = await client.post("/api/v1/onboarding", json={})
            partial = await client.post(
                "/api/v1/onboarding", json={**ONBOARDING_JSON, "niches": " "}
            )
        assert empty.status_code == 422
        assert partial.status_code == 422
        submit.assert_not_awaited()

    async def test_creators_rejects_nan_rating(self, client):
        res = await client.get("/api/v1/creators", params={"min_rating": "nan"})
        assert res.status_code == 422

    async def test_creators_infinite_rating_gives_empty_list(self, client):
        res = await client.get("/api/v1/creators", params={"min_rating": "inf"})
        assert res.status_code == 200
        assert res.json() == {"results": [], "count": 0}

    async def test_health(self, client):
        assert (await client.get("/health")).json() == {"status": "ok", "creators": 11}


class TestInjectedStore:
    """The app serves whatever store it is built with."""

    async def test_fixture_store(self, make_creator):
        store = CreatorStore(
            [
                make_creator("low", sales=5, primary_category="Stationery"),
                make_creator("high", sales=500, primary_category="Jewelry"),
            ]
        )
        app = create_app(store)
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
            body = (await c.get("/api/v1/creators")).json()
            categories = (await c.get("/api/v1/categories")).json()["categories"]
        assert [r["id"] for r in body["results"]] == ["high", "low"]
        assert categories == ["Jewelry", "Stationery"]
