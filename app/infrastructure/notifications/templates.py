"""Template store: per-channel message templates and their rendering."""

import re
from datetime import date
from typing import Any, Callable, Dict, Mapping, Optional

import structlog

from infrastructure.notifications.errors import (
    TemplateInactiveError,
    TemplateNotFoundError,
)
from infrastructure.notifications.models import Channel, RenderedMessage, Template
from infrastructure.persistence import DocumentStore, QueryFilter

logger = structlog.get_logger()

TEMPLATE_COLLECTIONS = {
    Channel.EMAIL: "email_templates",
    Channel.WHATSAPP: "whatsapp_templates",
    Channel.PUSH: "push_templates",
}

PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


def substitute(text: str, variables: Any, values: Mapping[str, Any]) -> str:
    """Replace ``{{name}}`` for every declared name that has a value.

    Undeclared placeholders and declared ones without a value are left as
    they are. Substituted values are not scanned again.
    """
    declared = set(variables)

    def _replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name not in declared or values.get(name) is None:
            return match.group(0)
        return str(values[name])

    return PLACEHOLDER.sub(_replace, text)


class TemplateStore:
    """Reads, renders and administers templates kept in the document store.

    Args:
        store: Document store holding the ``*_templates`` collections
        company_name: Value of the ``company_name`` standard variable
        today: Clock used for the ``year``/``date`` standard variables
    """

    def __init__(
        self,
        store: DocumentStore,
        company_name: str,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store = store
        self._company_name = company_name
        self._today = today

    def standard_variables(self) -> Dict[str, str]:
        today = self._today()
        return {
            "company_name": self._company_name,
            "year": str(today.year),
            "date": today.strftime("%d %B %Y"),
        }

    def _find(self, slug: str, channel: Channel) -> Optional[Dict[str, Any]]:
        docs = self._store.query(
            TEMPLATE_COLLECTIONS[channel], [QueryFilter("slug", "==", slug)]
        )
        return docs[0] if docs else None

    def get(self, slug: str, channel: Channel) -> Optional[Template]:
        """Load a template by slug, or None when it does not exist."""
        doc = self._find(slug, channel)
        if doc is None:
            return None
        return Template(
            slug=doc.get("slug", slug),
            channel=channel,
            subject=doc.get("subject") or "",
            body=doc.get("body") or "",
            variables=doc.get("variables") or [],
            is_active=doc.get("is_active", True),
        )

    def render(
        self, slug: str, data: Mapping[str, Any], channel: Channel = Channel.EMAIL
    ) -> RenderedMessage:
        """Render ``slug`` for ``channel`` with ``data``.

        Raises:
            TemplateNotFoundError: no template with that slug on the channel
            TemplateInactiveError: the template is disabled
        """
        template = self.get(slug, channel)
        if template is None:
            raise TemplateNotFoundError(slug, channel.value)
        if not template.is_active:
            raise TemplateInactiveError(slug, channel.value)

        values = {**self.standard_variables(), **data}
        rendered = RenderedMessage(
            subject=substitute(template.subject, template.variables, values),
            body=substitute(template.body, template.variables, values),
        )
        logger.debug("template_rendered", slug=slug, channel=channel.value)
        return rendered

    def save(self, template: Template) -> None:
        """Create or replace a template. The slug is the document id."""
        self._store.set(
            TEMPLATE_COLLECTIONS[template.channel],
            template.slug,
            {
                "slug": template.slug,
                "subject": template.subject,
                "body": template.body,
                "variables": list(template.variables),
                "is_active": template.is_active,
            },
        )
        logger.info("template_saved", slug=template.slug, channel=template.channel.value)

    def deactivate(self, slug: str, channel: Channel) -> None:
        """Soft-disable a template; it is kept in the store."""
        doc = self._find(slug, channel)
        if doc is None:
            raise TemplateNotFoundError(slug, channel.value)
        self._store.set(
            TEMPLATE_COLLECTIONS[channel],
            doc.get("id", slug),
            {"is_active": False},
            merge=True,
        )
        logger.info("template_deactivated", slug=slug, channel=channel.value)
