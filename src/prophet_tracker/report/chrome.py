from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

SITE_NAME = "LatterDay Tools"
SITE_TAGLINE = "Data-driven insights"
SITE_HOME = "https://latterdaytools.io"
PAGE_TITLE = "Prophet Calculator | LatterDay Tools"
PAGE_DESCRIPTION = (
    "Calculate apostle succession probabilities using Monte Carlo simulation. "
    "Who will become the next prophet?"
)


@dataclass(frozen=True, slots=True)
class NavItem:
    href: str
    label: str
    tool: str
    coming_soon: bool = False


@dataclass(frozen=True, slots=True)
class FooterLink:
    label: str
    href: str | None = None

    @property
    def coming_soon(self) -> bool:
        return self.href is None


NAV_ITEMS: tuple[NavItem, ...] = (
    NavItem(href=SITE_HOME, label="Home", tool="home"),
    NavItem(href="https://prophet.latterdaytools.io", label="Prophet Calculator", tool="prophet"),
    NavItem(href="https://temples.latterdaytools.io", label="Temple Tracker", tool="temples"),
    NavItem(
        href="https://conference.latterdaytools.io",
        label="Conference Analytics",
        tool="conference",
        coming_soon=True,
    ),
)

FOOTER_TOOLS: tuple[FooterLink, ...] = (
    FooterLink(label="Prophet Calculator", href="https://prophet.latterdaytools.io"),
    FooterLink(label="Temple Tracker", href="https://temples.latterdaytools.io"),
    FooterLink(label="Conference Analytics (Coming Soon)"),
)

FOOTER_RESOURCES: tuple[FooterLink, ...] = (
    FooterLink(label="GitHub", href="https://github.com/cnoyes/ldt-prophet"),
    FooterLink(label="About", href=f"{SITE_HOME}/about"),
    FooterLink(label="FAQ", href=f"{SITE_HOME}/faq"),
)

FOOTER_LEGAL: tuple[FooterLink, ...] = (
    FooterLink(label="Privacy", href=f"{SITE_HOME}/privacy"),
    FooterLink(label="Terms", href=f"{SITE_HOME}/terms"),
)


def build_header(current_tool: str | None = None) -> dict[str, Any]:
    return {
        "home_href": SITE_HOME,
        "logo": "LDT",
        "name": SITE_NAME,
        "tagline": SITE_TAGLINE,
        "nav": [
            {
                "href": item.href,
                "label": item.label,
                "tool": item.tool,
                "active": item.tool == current_tool,
                "coming_soon": item.coming_soon,
            }
            for item in NAV_ITEMS
        ],
    }


def _links(links: tuple[FooterLink, ...]) -> list[dict[str, Any]]:
    return [
        {"label": link.label, "href": link.href, "coming_soon": link.coming_soon}
        for link in links
    ]


def build_footer(now: datetime | None = None) -> dict[str, Any]:
    current = now or datetime.now(timezone.utc)
    return {
        "logo": "LDT",
        "name": SITE_NAME,
        "about": (
            "Data-driven insights and analytics for members of The Church of Jesus Christ "
            "of Latter-day Saints. Statistical analysis, visualizations, and tools built "
            "with modern technology."
        ),
        "tools": _links(FOOTER_TOOLS),
        "resources": _links(FOOTER_RESOURCES),
        "legal": _links(FOOTER_LEGAL),
        "copyright": (
            f"© {current.year} {SITE_NAME}. "
            "Not affiliated with The Church of Jesus Christ of Latter-day Saints."
        ),
    }


def build_layout(
    *,
    current_tool: str | None = None,
    show_header: bool = True,
    show_footer: bool = True,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Chrome shared by every page; independent of the artifact."""
    return {
        "title": PAGE_TITLE,
        "description": PAGE_DESCRIPTION,
        "header": build_header(current_tool) if show_header else None,
        "footer": build_footer(now) if show_footer else None,
    }
