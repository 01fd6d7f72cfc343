"""Web interface routes implementation."""

import os
from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "..", "ux", "web")
templates = Jinja2Templates(directory=template_dir)

NOT_FOUND_TEMPLATE = "not_found.html"


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the homepage."""
    html_file = os.path.join(template_dir, "index.html")

    if os.path.exists(html_file):
        with open(html_file, "r", encoding="utf-8") as f:
            return HTMLResponse(content=f.read())

    return HTMLResponse(
        content="<h1>tinylinks</h1><p>POST /api/shorten to create a short link.</p>",
        status_code=200,
    )


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL, counting the visit."""
    service = request.app.state.service

    original_url = await service.resolve(short_code)

    if not original_url:
        if os.path.exists(os.path.join(template_dir, NOT_FOUND_TEMPLATE)):
            return templates.TemplateResponse(
                request,
                NOT_FOUND_TEMPLATE,
                {"short_code": short_code},
                status_code=status.HTTP_404_NOT_FOUND,
            )

        return HTMLResponse(
            content=(
                "<h1>404 - Link Not Found</h1>"
                "<p>This short link doesn't exist or has been deleted.</p>"
                "<a href='/'>Go to homepage</a>"
            ),
            status_code=status.HTTP_404_NOT_FOUND,
        )

    # Perform 302 redirect (temporary redirect for tracking)
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
