# ABOUTME: Admin settings form for the three pipeline options.
# ABOUTME: Renders and persists feed URLs, keywords and the default category.

import structlog
from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse

from smart_blogger.config import (
    CATEGORY_KEY,
    DEFAULT_CATEGORY_ID,
    FEED_URLS_KEY,
    KEYWORDS_KEY,
    PipelineConfig,
)
from smart_blogger.web.dependencies import CategoryRepo, OptionRepo, Templates

router = APIRouter()
log = structlog.get_logger()


def _render(
    request: Request,
    templates: Templates,
    options: OptionRepo,
    categories: CategoryRepo,
    saved: bool = False,
) -> HTMLResponse:
    config = PipelineConfig.from_store(options)
    return templates.TemplateResponse(
        request=request,
        name="settings.html",
        context={
            "feed_urls": options.get(FEED_URLS_KEY, ""),
            "keywords": options.get(KEYWORDS_KEY, ""),
            "category_id": config.category_id,
            "categories": categories.list_all(),
            "saved": saved,
        },
    )


@router.get("/settings", response_class=HTMLResponse)
def settings_page(
    request: Request,
    templates: Templates,
    options: OptionRepo,
    categories: CategoryRepo,
):
    """Show the settings form."""
    return _render(request, templates, options, categories)


@router.post("/settings", response_class=HTMLResponse)
def save_settings(
    request: Request,
    templates: Templates,
    options: OptionRepo,
    categories: CategoryRepo,
    rss_feed_urls: str = Form(""),
    keywords: str = Form(""),
    post_category: int = Form(DEFAULT_CATEGORY_ID),
):
    """Persist the settings form."""
    options.set(FEED_URLS_KEY, rss_feed_urls)
    options.set(KEYWORDS_KEY, keywords)
    options.set(CATEGORY_KEY, post_category)
    log.info("settings_saved", category=post_category)
    return _render(request, templates, options, categories, saved=True)
