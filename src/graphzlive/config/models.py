"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, graphz.toml only contains overrides.
A fresh site needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- graphz.toml sections ---


class SiteConfig(BaseModel):
    """[site] section."""

    model_config = {"frozen": True}

    name: str = "GraphzLive"
    base_url: str = "https://graphzlive.web.app/"
    placeholder_image: str = "assets/default.jpg"


class CatalogConfig(BaseModel):
    """[catalog] section."""

    model_config = {"frozen": True}

    popular_tags_limit: int = 10
    popular_subjects_limit: int = 6
    top_graphs_limit: int = 5
    description_excerpt: int = 100
    card_tag_limit: int = 3


class CommentsConfig(BaseModel):
    """[comments] section."""

    model_config = {"frozen": True}

    default_author: str = "Anonymous"
    recent_graphs_limit: int = 20
    recent_limit: int = 20


class AnalyticsConfig(BaseModel):
    """[analytics] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    capacity: int = 100
    storage_key: str = "graphzlive_analytics"


class DonationConfig(BaseModel):
    """[donation] section."""

    model_config = {"frozen": True}

    upi_id: str = "juyel@upi"
    payee_name: str = "GraphzLive"
    note: str = "Support GraphzLive - Visual Learning Platform"
    currency: str = "INR"
    default_amount: int = 100
    min_amount: int = 10


class GraphzConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    site: SiteConfig = Field(default_factory=SiteConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    comments: CommentsConfig = Field(default_factory=CommentsConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    donation: DonationConfig = Field(default_factory=DonationConfig)
