"""Static content helpers: blog post selection, FAQs, analytics snapshot."""
from typing import Any, Dict, List, Optional, Sequence

from models import AnalyticsPoint, BlogPost, FaqItem

# Illustrative weekly numbers for the home page widget; not real tracking data
SAMPLE_ANALYTICS: List[AnalyticsPoint] = [
    AnalyticsPoint(label="Week 1", clicks=420, conversions=32),
    AnalyticsPoint(label="Week 2", clicks=610, conversions=48),
    AnalyticsPoint(label="Week 3", clicks=890, conversions=71),
    AnalyticsPoint(label="Week 4", clicks=1020, conversions=84),
]


def find_post(posts: Sequence[BlogPost], slug: str) -> Optional[BlogPost]:
    """Return the post with an exact slug match, or None."""
    return next((p for p in posts if p.slug == slug), None)


def select_post(posts: Sequence[BlogPost], slug: Optional[str] = None) -> Optional[BlogPost]:
    """Pick the post to display on the blog page.

    Falls back to the first post when the slug is missing or unknown, and to
    None when there are no posts at all.
    """
    if slug:
        post = find_post(posts, slug)
        if post is not None:
            return post
    return posts[0] if posts else None


def list_faqs(faqs: Sequence[FaqItem]) -> List[FaqItem]:
    return list(faqs)


def analytics_snapshot(points: Sequence[AnalyticsPoint] = SAMPLE_ANALYTICS) -> Dict[str, Any]:
    """Summarize click and conversion totals for the analytics widget.

    The conversion rate is a percentage rounded to one decimal place and is
    0.0 when there were no clicks.
    """
    total_clicks = sum(p.clicks for p in points)
    total_conversions = sum(p.conversions for p in points)
    rate = (total_conversions / total_clicks) * 100 if total_clicks else 0.0
    return {
        "points": [p.model_dump() for p in points],
        "total_clicks": total_clicks,
        "total_conversions": total_conversions,
        "conversion_rate": round(rate, 1),
    }
