"""Read-only content store for the Etsy Affiliate Hub.

The store replaces a database: creators, blog posts and FAQs are loaded once
from the bundled JSON files at startup and never change afterwards. The
loaded store is attached to the application and handed to route handlers,
so tests can inject a fixture store instead of the bundled data.
"""
import json
import os
from typing import Any, Iterable, List, Optional, Tuple

from fastapi import Request
from pydantic import TypeAdapter, ValidationError

from models import BlogPost, Creator, FaqItem
from services.directory_service import distinct_categories

CREATORS_FILE = "creators.json"
BLOG_POSTS_FILE = "blog_posts.json"
FAQS_FILE = "faqs.json"


class StoreError(Exception):
    """Raised when the bundled content cannot be loaded or violates invariants."""


class CreatorStore:
    """Immutable, ordered collection of creators plus the static site content."""

    def __init__(
        self,
        creators: Iterable[Creator],
        blog_posts: Iterable[BlogPost] = (),
        faqs: Iterable[FaqItem] = (),
    ) -> None:
        self._creators: Tuple[Creator, ...] = tuple(creators)
        seen = set()
        for creator in self._creators:
            if creator.id in seen:
                raise StoreError(f"Duplicate creator id: {creator.id}")
            seen.add(creator.id)
        self._blog_posts: Tuple[BlogPost, ...] = tuple(blog_posts)
        self._faqs: Tuple[FaqItem, ...] = tuple(faqs)
        # The store never changes, so the category list is computed once
        self._categories: Tuple[str, ...] = tuple(distinct_categories(self._creators))

    @property
    def creators(self) -> Tuple[Creator, ...]:
        return self._creators

    @property
    def categories(self) -> Tuple[str, ...]:
        return self._categories

    @property
    def blog_posts(self) -> Tuple[BlogPost, ...]:
        return self._blog_posts

    @property
    def faqs(self) -> Tuple[FaqItem, ...]:
        return self._faqs

    def __len__(self) -> int:
        return len(self._creators)

    def get(self, creator_id: str) -> Optional[Creator]:
        """Return the creator with the given id, or None if it is not listed."""
        for creator in self._creators:
            if creator.id == creator_id:
                return creator
        return None


def _read_json(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise StoreError(f"Cannot read {path}: {e}") from e


def _parse(adapter: TypeAdapter, path: str) -> List[Any]:
    try:
        return adapter.validate_python(_read_json(path))
    except ValidationError as e:
        raise StoreError(f"Invalid content in {path}: {e}") from e


def load_store(data_dir: str) -> CreatorStore:
    """Load creators, blog posts and FAQs from JSON files in ``data_dir``.

    Blog posts and FAQs are optional; a missing creators file is an error.

    Raises:
        StoreError: if a file is unreadable, malformed, or breaks a record
            invariant (rating range, duplicate id, missing tags, ...).
    """
    creators = _parse(TypeAdapter(List[Creator]), os.path.join(data_dir, CREATORS_FILE))

    blog_posts: List[BlogPost] = []
    posts_path = os.path.join(data_dir, BLOG_POSTS_FILE)
    if os.path.exists(posts_path):
        blog_posts = _parse(TypeAdapter(List[BlogPost]), posts_path)

    faqs: List[FaqItem] = []
    faqs_path = os.path.join(data_dir, FAQS_FILE)
    if os.path.exists(faqs_path):
        faqs = _parse(TypeAdapter(List[FaqItem]), faqs_path)

    store = CreatorStore(creators, blog_posts, faqs)
    print(f"✅ Loaded {len(store)} creators, {len(blog_posts)} posts, {len(faqs)} FAQs from {data_dir}")
    return store


def get_store(request: Request) -> CreatorStore:
    """FastAPI dependency returning the store attached to the running app."""
    return request.app.state.store
