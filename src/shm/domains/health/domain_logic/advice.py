"""Personalized advice text derived from alert messages.

Alert messages are scanned for category keywords (case-sensitive) and one
block of recommendations is emitted per matched category. The blocks live in
``advice/recommendations.yaml`` next to this package.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from shm.domains.health.models import Alert

logger = logging.getLogger(__name__)

_CATALOG_PATH = Path(__file__).resolve().parent.parent / "advice" / "recommendations.yaml"

_RULE = "-" * 60
_BANNER = "=" * 60


@dataclass
class AdviceCategory:
    """A recommendation block triggered by any of its keywords."""

    id: str
    keywords: list[str]
    title: str
    tips: list[str] = field(default_factory=list)

    def matches(self, message: str) -> bool:
        return any(keyword in message for keyword in self.keywords)


@dataclass
class AdviceCatalog:
    """All advice text: the no-alert block, category blocks and disclaimer."""

    no_alerts_heading: str
    no_alerts_title: str
    no_alerts_tips: list[str]
    categories: list[AdviceCategory]
    disclaimer: str


def load_advice_catalog(path: str | Path = _CATALOG_PATH) -> AdviceCatalog:
    """Parse a recommendations YAML file into an AdviceCatalog."""
    with open(path) as f:
        data: dict[str, Any] = yaml.safe_load(f)

    no_alerts = data.get("no_alerts", {})
    categories = [
        AdviceCategory(
            id=c["id"],
            keywords=c.get("keywords", []),
            title=c.get("title", ""),
            tips=c.get("tips", []),
        )
        for c in data.get("categories", [])
    ]
    logger.debug("Loaded %d advice categories from %s", len(categories), path)
    return AdviceCatalog(
        no_alerts_heading=no_alerts.get("heading", ""),
        no_alerts_title=no_alerts.get("title", ""),
        no_alerts_tips=no_alerts.get("tips", []),
        categories=categories,
        disclaimer=data.get("disclaimer", "").strip(),
    )


@lru_cache(maxsize=1)
def default_catalog() -> AdviceCatalog:
    return load_advice_catalog()


def advice_flags(
    alerts: Sequence[Alert], catalog: AdviceCatalog | None = None
) -> dict[str, bool]:
    """Which advice categories the alerts activate, keyed by category id."""
    catalog = catalog or default_catalog()
    return {
        category.id: any(category.matches(alert.message) for alert in alerts)
        for category in catalog.categories
    }


def _tip_lines(tips: Sequence[str]) -> list[str]:
    return [f"  * {tip}" for tip in tips]


def generate_advice(alerts: Sequence[Alert], catalog: AdviceCatalog | None = None) -> str:
    """Render recommendation text for ``alerts``, ending with the disclaimer."""
    catalog = catalog or default_catalog()
    lines = [_BANNER, "              PERSONALIZED HEALTH ADVICE", _BANNER]

    if not alerts:
        lines += ["", catalog.no_alerts_heading, "", catalog.no_alerts_title]
        lines += _tip_lines(catalog.no_alerts_tips)
    else:
        flags = advice_flags(alerts, catalog)
        lines += ["", "RECOMMENDED ACTIONS:", _RULE]
        for category in catalog.categories:
            if flags[category.id]:
                lines += ["", category.title]
                lines += _tip_lines(category.tips)

    lines += ["", catalog.disclaimer]
    return "\n".join(lines) + "\n"
