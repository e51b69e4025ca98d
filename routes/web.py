"""Web UI routes for HTML rendering.

These endpoints render the site pages with Jinja2: the landing page, the
creator discovery directory, creator profiles, the blog, the onboarding and
contact forms, and the legal pages. Data comes from the injected store and
the service layer; no page keeps state between requests.
"""
from datetime import datetime

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

import config
from models import (
    CONTACT_ROLES,
    ContactSubmission,
    CreatorApplication,
    FilterCriteria,
    FormState,
    OnboardingSubmission,
    VettingStatus,
)
from routes.api import build_criteria
from services.content_service import analytics_snapshot, list_faqs, select_post
from services.directory_service import query, top_creators
from services.forms_service import (
    FormSubmission,
    acknowledge_application,
    acknowledge_contact,
    open_form,
    submit_onboarding,
)
from store import CreatorStore, get_store

router = APIRouter()
templates = Jinja2Templates(directory=config.TEMPLATES_DIR)

MIN_RATING_CHOICES = [(0, "Any"), (4, "4.0+"), (4.5, "4.5+"), (4.8, "4.8+")]
SORT_CHOICES = [
    ("sales", "Total sales (high to low)"),
    ("rating", "Rating (high to low)"),
    ("recent", "Recently vetted"),
]


def _render(request: Request, name: str, status_code: int = 200, **context) -> HTMLResponse:
    context.setdefault("site_name", config.SITE_NAME)
    return templates.TemplateResponse(request, name, context, status_code=status_code)


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, store: CreatorStore = Depends(get_store)):
    """Landing page with the top creator carousel and analytics snapshot."""
    return _render(
        request,
        "home.html",
        top_creators=top_creators(store.creators, config.TOP_CREATORS_LIMIT),
        analytics=analytics_snapshot(),
    )


@router.get("/creators", response_class=HTMLResponse)
async def creators_directory(
    request: Request,
    criteria: FilterCriteria = Depends(build_criteria),
    store: CreatorStore = Depends(get_store),
):
    """Render the discovery page for the current search, filter and sort."""
    return _render(
        request,
        "creators.html",
        creators=query(store.creators, criteria),
        criteria=criteria,
        categories=store.categories,
        vetting_choices=[v.value for v in VettingStatus],
        rating_choices=MIN_RATING_CHOICES,
        sort_choices=SORT_CHOICES,
    )


def _profile(request: Request, store: CreatorStore, creator_id: str, **context) -> HTMLResponse:
    creator = store.get(creator_id)
    if creator is None:
        return _render(request, "creator_not_found.html", status_code=404)
    context.setdefault("form", FormSubmission(CreatorApplication.blank()))
    return _render(request, "creator_profile.html", creator=creator, **context)


@router.get("/creators/{creator_id}", response_class=HTMLResponse)
async def creator_profile(request: Request, creator_id: str, store: CreatorStore = Depends(get_store)):
    """Creator profile with products, affiliate terms and an application form."""
    return _profile(request, store, creator_id)


@router.post("/creators/{creator_id}/apply", response_class=HTMLResponse)
async def creator_apply(
    request: Request,
    creator_id: str,
    name: str = Form(""),
    email: str = Form(""),
    primary_channel: str = Form(""),
    audience_summary: str = Form(""),
    store: CreatorStore = Depends(get_store),
):
    """Record an affiliate application for one creator and confirm it in-page."""
    creator = store.get(creator_id)
    if creator is None:
        return _render(request, "creator_not_found.html", status_code=404)

    form = open_form(
        CreatorApplication,
        name=name,
        email=email,
        primary_channel=primary_channel,
        audience_summary=audience_summary,
    )

    async def _acknowledge(values: CreatorApplication) -> str:
        return acknowledge_application(creator, values, datetime.now())

    if form.state != FormState.ERROR:
        await form.run(_acknowledge)
    return _profile(request, store, creator_id, form=form)


@router.get("/affiliate-onboarding", response_class=HTMLResponse)
async def onboarding_page(request: Request):
    """Step-by-step onboarding guide with the application form."""
    return _render(request, "onboarding.html", form=FormSubmission(OnboardingSubmission.blank()))


@router.post("/affiliate-onboarding", response_class=HTMLResponse)
async def onboarding_submit(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    primary_channel: str = Form(""),
    monthly_reach: str = Form(""),
    niches: str = Form(""),
):
    """Send the onboarding form to the webhook and show the outcome.

    On failure, including blank fields, the entered values are rendered back
    so the visitor can retry.
    """
    form = open_form(
        OnboardingSubmission,
        name=name,
        email=email,
        primary_channel=primary_channel,
        monthly_reach=monthly_reach,
        niches=niches,
    )
    if form.state != FormState.ERROR:
        await form.run(submit_onboarding)
    return _render(request, "onboarding.html", form=form)


@router.get("/blog", response_class=HTMLResponse)
async def blog(request: Request, post: str | None = None, store: CreatorStore = Depends(get_store)):
    """Blog index with the selected article (first article by default)."""
    return _render(
        request,
        "blog.html",
        posts=store.blog_posts,
        selected=select_post(store.blog_posts, post),
    )


@router.get("/contact", response_class=HTMLResponse)
async def contact_page(request: Request, store: CreatorStore = Depends(get_store)):
    return _render(
        request,
        "contact.html",
        form=FormSubmission(ContactSubmission.blank()),
        faqs=list_faqs(store.faqs),
        roles=CONTACT_ROLES,
    )


@router.post("/contact", response_class=HTMLResponse)
async def contact_submit(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    role: str = Form("Affiliate"),
    topic: str = Form(""),
    message: str = Form(""),
    store: CreatorStore = Depends(get_store),
):
    """Accept a contact message; unknown roles fall back to Affiliate."""
    if role not in CONTACT_ROLES:
        role = "Affiliate"
    form = open_form(ContactSubmission, name=name, email=email, role=role, topic=topic, message=message)
    if form.state != FormState.ERROR:
        await form.run(acknowledge_contact)
    return _render(request, "contact.html", form=form, faqs=list_faqs(store.faqs), roles=CONTACT_ROLES)


@router.get("/privacy-policy", response_class=HTMLResponse)
async def privacy_policy(request: Request):
    return _render(request, "privacy_policy.html", year=datetime.now().year)


@router.get("/terms-of-service", response_class=HTMLResponse)
async def terms_of_service(request: Request):
    return _render(request, "terms_of_service.html", year=datetime.now().year)
