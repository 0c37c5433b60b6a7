"""Template endpoints."""

from fastapi import APIRouter

from formbuilder.web.dependencies import TemplateManagerDep
from formbuilder.web.schemas import (
    TemplateContentSchema,
    TemplateListItemSchema,
    TemplateListSchema,
)

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=TemplateListSchema)
async def list_templates(manager: TemplateManagerDep) -> TemplateListSchema:
    return TemplateListSchema(
        templates=[
            TemplateListItemSchema(name=info.name, title=info.title, description=info.description)
            for info in manager.templates()
        ]
    )


@router.get("/{name}", response_model=TemplateContentSchema)
async def get_template(name: str, manager: TemplateManagerDep) -> TemplateContentSchema:
    """Form document of one template.

    Raises:
        TemplateNotFoundError: Turned into a 404 by the exception handler.
    """
    content = manager.load(name)
    return TemplateContentSchema(
        name=name,
        description=content.get("description", ""),
        content=content,
    )
