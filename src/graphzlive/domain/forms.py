"""Admin graph form — parsing raw field input and required-field validation.

Tags arrive comma-separated and images newline-separated, exactly as typed
into the admin form.  Optional text fields that are blank are stored as
None so an edit can clear them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

REQUIRED_FIELDS_MESSAGE = "Please fill all required fields"

# Optional text inputs -> document field names.
_OPTIONAL_FIELDS: dict[str, str] = {
    "source": "source",
    "telegram_link": "telegramLink",
    "donation_link": "donationLink",
    "affiliate_title": "affiliateTitle",
    "affiliate_link": "affiliateLink",
    "sponsor_name": "sponsorName",
    "sponsor_message": "sponsorMessage",
    "sponsor_link": "sponsorLink",
    "sponsor_logo": "sponsorLogo",
}


def split_tags(raw: str | list[str] | tuple[str, ...] | None) -> list[str]:
    """Split comma-separated tags, trimming and dropping blanks.

    Examples:
        >>> split_tags(" calculus, limits ,, ")
        ['calculus', 'limits']
    """
    if raw is None:
        return []
    parts = raw.split(",") if isinstance(raw, str) else [p for r in raw for p in r.split(",")]
    return [p.strip() for p in parts if p.strip()]


def split_images(raw: str | list[str] | tuple[str, ...] | None) -> list[str]:
    """Split newline-separated image URLs, trimming and dropping blanks."""
    if raw is None:
        return []
    parts = raw.splitlines() if isinstance(raw, str) else list(raw)
    return [p.strip() for p in parts if p.strip()]


def _stored_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def form_inputs(data: dict[str, Any]) -> dict[str, str | None]:
    """Raw form inputs for editing a stored document.

    Unset fields come back blank, never as the read-time display defaults,
    so saving an edit does not write placeholders like ``"#"`` into the
    store.  Legacy documents with a single ``image`` fall back to it.
    """
    images = data.get("images")
    if not isinstance(images, list):
        images = [data["image"]] if data.get("image") else []
    tags = data.get("tags")
    inputs: dict[str, str | None] = {
        "name": _stored_text(data.get("name")),
        "alias": _stored_text(data.get("alias")),
        "description": _stored_text(data.get("description")),
        "subject": _stored_text(data.get("subject")),
        "tags": tags if isinstance(tags, str) else ", ".join(str(t) for t in tags or []),
        "images": "\n".join(str(i) for i in images if i),
    }
    for attr, field in _OPTIONAL_FIELDS.items():
        inputs[attr] = _stored_text(data.get(field)) or None
    return inputs


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class GraphForm(BaseModel):
    """Parsed admin form submission."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    alias: str = ""
    description: str = ""
    subject: str = ""
    tags: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    source: str | None = None
    telegram_link: str | None = None
    donation_link: str | None = None
    affiliate_title: str | None = None
    affiliate_link: str | None = None
    sponsor_name: str | None = None
    sponsor_message: str | None = None
    sponsor_link: str | None = None
    sponsor_logo: str | None = None

    @classmethod
    def parse(
        cls,
        *,
        name: str | None = None,
        alias: str | None = None,
        description: str | None = None,
        subject: str | None = None,
        tags: str | list[str] | tuple[str, ...] | None = None,
        images: str | list[str] | tuple[str, ...] | None = None,
        **optional: str | None,
    ) -> GraphForm:
        """Build a form from raw text inputs.

        Unknown keyword arguments raise ``TypeError`` rather than being dropped.
        """
        unknown = set(optional) - set(_OPTIONAL_FIELDS)
        if unknown:
            msg = f"Unknown form fields: {sorted(unknown)}"
            raise TypeError(msg)
        return cls(
            name=(name or "").strip(),
            alias=(alias or "").strip(),
            description=(description or "").strip(),
            subject=(subject or "").strip(),
            tags=split_tags(tags),
            images=split_images(images),
            **{key: _blank_to_none(value) for key, value in optional.items()},
        )

    def missing_fields(self) -> list[str]:
        """Names of required fields that are empty."""
        missing = [f for f in ("name", "alias", "description", "subject") if not getattr(self, f)]
        if not self.tags:
            missing.append("tags")
        if not self.images:
            missing.append("images")
        return missing

    def is_valid(self) -> bool:
        return not self.missing_fields()

    def to_document(self) -> dict[str, Any]:
        """Document fields submitted by this form (camelCase names)."""
        doc: dict[str, Any] = {
            "name": self.name,
            "alias": self.alias,
            "description": self.description,
            "subject": self.subject,
            "tags": list(self.tags),
            "images": list(self.images),
        }
        for attr, field in _OPTIONAL_FIELDS.items():
            doc[field] = getattr(self, attr)
        return doc
