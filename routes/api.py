"""JSON API routes.

The API exposes the same directory query the discovery page uses, creator
profiles, the category list, static content, and the onboarding form as a
JSON endpoint. Everything except onboarding is read-only.
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

import config
from models import FilterCriteria, OnboardingSubmission, SortOption
from services.content_service import analytics_snapshot, find_post, list_faqs
from services.directory_service import query, top_creators
from services.forms_service import SubmissionError, submit_onboarding
from store import CreatorStore, get_store

router = APIRouter(prefix="/api/v1", tags=["api"])


def build_criteria(
    search: str = "",
    category: str = "All",
    min_rating: float = 0,
    vetting: str = "All",
    sort_by: SortOption = SortOption.SALES,
) -> FilterCriteria:
    """Turn query parameters into frozen filter criteria.

    Raises:
        HTTPException: 422 when the vetting value is not a known status.
    """
    try:
        return FilterCriteria(
            search=search,
            category=category,
            min_rating=min_rating,
            vetting=vetting,
            sort_by=sort_by,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid filter criteria: {e.errors()[0]['msg']}")


@router.get("/creators")
async def api_creators(
    criteria: FilterCriteria = Depends(build_criteria),
    store: CreatorStore = Depends(get_store),
) -> Dict[str, Any]:
    """Filter and sort the creator directory.

    Args:
        search: Case-insensitive text matched against names, descriptions and tags.
        category: Primary category, or "All".
        min_rating: Inclusive rating floor.
        vetting: Vetting status, or "All".
        sort_by: One of sales, rating, recent.
    """
    results = query(store.creators, criteria)
    return {"results": results, "count": len(results)}


@router.get("/creators/top")
async def api_top_creators(
    limit: int = config.TOP_CREATORS_LIMIT,
    store: CreatorStore = Depends(get_store),
) -> Dict[str, Any]:
    """Return the best-selling creators featured on the home page."""
    return {"results": top_creators(store.creators, limit)}


@router.get("/creators/{creator_id}")
async def api_creator(creator_id: str, store: CreatorStore = Depends(get_store)):
    """Return a single creator profile with products and affiliate details."""
    creator = store.get(creator_id)
    if creator is None:
        raise HTTPException(status_code=404, detail="Creator not found")
    return creator


@router.get("/categories")
async def api_categories(store: CreatorStore = Depends(get_store)) -> Dict[str, List[str]]:
    """Return the sorted list of primary categories."""
    return {"categories": list(store.categories)}


@router.get("/blog")
async def api_blog(store: CreatorStore = Depends(get_store)) -> Dict[str, Any]:
    return {"posts": list(store.blog_posts)}


@router.get("/blog/{slug}")
async def api_blog_post(slug: str, store: CreatorStore = Depends(get_store)):
    post = find_post(store.blog_posts, slug)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.get("/faqs")
async def api_faqs(store: CreatorStore = Depends(get_store)) -> Dict[str, Any]:
    return {"faqs": list_faqs(store.faqs)}


@router.get("/analytics")
async def api_analytics() -> Dict[str, Any]:
    """Return the illustrative weekly performance snapshot."""
    return analytics_snapshot()


@router.post("/onboarding")
async def api_onboarding(submission: OnboardingSubmission) -> Dict[str, Any]:
    """Forward an affiliate onboarding submission to the webhook.

    Raises:
        HTTPException: 502 carrying the visitor-facing message when the
            webhook is unreachable or rejects the submission.
    """
    try:
        result = await submit_onboarding(submission)
    except SubmissionError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"status": "submitted", "response": result}
