"""Central configuration for the Etsy Affiliate Hub application.

Every setting can be overridden through an environment variable of the same
name. The defaults serve the bundled JSON content and post onboarding forms
to the live sheet webhook, so point ONBOARDING_ENDPOINT elsewhere when testing.
"""
import os

# Site identity used in page titles and the API root
SITE_NAME: str = os.getenv("SITE_NAME", "Etsy Affiliate Hub")

# Directory holding creators.json, blog_posts.json and faqs.json
DATA_DIR: str = os.getenv(
    "DATA_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")
)

# Google Apps Script web app that records onboarding submissions in a sheet
ONBOARDING_ENDPOINT: str = os.getenv(
    "ONBOARDING_ENDPOINT",
    "https://script.google.com/macros/s/AKfycbw37YPofCR7fjJMfyOk4XscBLHkaTIOEQf4h4nwN5THlmL-Ey9qckF9ouyIPwiox5Nk/exec",
)
REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "10"))

# Number of creators rotated through the home page highlight carousel
TOP_CREATORS_LIMIT: int = int(os.getenv("TOP_CREATORS_LIMIT", "5"))

# Split origins safely into a list; empty string -> []
CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Jinja2 templates and static assets shipped alongside the code
TEMPLATES_DIR: str = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")
STATIC_DIR: str = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")
