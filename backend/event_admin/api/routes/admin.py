"""
Admin page for pushing a typeform_config JSON array onto an event.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from event_admin.api.dependencies import get_store
from event_admin.schemas.typeform import FIELD_TYPES
from event_admin.services.config_editor import submit_typeform_config
from event_admin.services.interfaces.store import Store

TEMPLATES_DIR = Path(__file__).resolve().parent.parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(prefix="/admin", tags=["Admin"], include_in_schema=False)

EXAMPLE_CONFIG = """[
  {
    "id": "fullName",
    "label": "Full Name",
    "type": "text",
    "required": true
  },
  {
    "id": "email",
    "label": "Email Address",
    "type": "email",
    "required": true
  },
  {
    "id": "department",
    "label": "Department",
    "type": "select",
    "options": ["CSE", "ECE", "ME", "Other"]
  }
]"""


def _render(request: Request, **context) -> HTMLResponse:
    context.setdefault("event_id", "")
    context.setdefault("typeform_config", "")
    context.setdefault("result", None)
    return templates.TemplateResponse(
        request,
        "admin/update_config.html",
        {
            "example_config": EXAMPLE_CONFIG,
            "field_types": sorted(FIELD_TYPES),
            **context,
        },
    )


@router.get("/events/update-config", response_class=HTMLResponse)
async def update_config_page(request: Request):
    return _render(request)


@router.post("/events/update-config", response_class=HTMLResponse)
async def update_config_submit(
    request: Request,
    event_id: str = Form(""),
    typeform_config: str = Form(""),
    store: Store = Depends(get_store),
):
    result = await submit_typeform_config(store, event_id, typeform_config)
    return _render(
        request,
        event_id=event_id,
        typeform_config=typeform_config,
        result=result,
    )
