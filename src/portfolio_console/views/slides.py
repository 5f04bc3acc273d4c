"""
Hero slide model and derivation of the travel page slides from trip records.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_HEADING = "Travel Journal"
DEFAULT_DESCRIPTION = "Places I've visited and journeys I want to remember."


@dataclass(frozen=True)
class Slide:
    """One displayable hero slide. image and heading are always non-empty."""

    image: str
    heading: str
    subheading: Optional[str] = None
    description: Optional[str] = None


def normalize_image_url(url: Any) -> str:
    """Return the stripped URL as a string, or "" when absent."""
    if url is None:
        return ""
    return str(url).strip()


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def make_slide(record: Mapping[str, Any]) -> Optional[Slide]:
    """Build a Slide from a raw record; None when image or heading is missing."""
    image = normalize_image_url(record.get("image"))
    heading = _optional_text(record.get("heading"))
    if not image or not heading:
        return None
    return Slide(
        image=image,
        heading=heading,
        subheading=_optional_text(record.get("subheading")),
        description=_optional_text(record.get("description")),
    )


def valid_slides(records: Iterable[Any]) -> List[Slide]:
    """Keep the presentable slides, accepting Slide objects or raw mappings."""
    slides: List[Slide] = []
    for record in records:
        if isinstance(record, Slide):
            slide = make_slide(vars(record))
        elif isinstance(record, Mapping):
            slide = make_slide(record)
        else:
            slide = None
        if slide is None:
            logger.debug("Dropping invalid slide: %r", record)
            continue
        slides.append(slide)
    return slides


def derive_hero_slides(
    trips: Sequence[Mapping[str, Any]], main_image: Any = None
) -> List[Slide]:
    """
    Derive the travel hero slides.

    The first trip's heroSlides win when it has any. Otherwise a single slide is
    built from the first trip's cover image, falling back to the main image.
    With no trips at all, the main image alone produces a generic slide.
    """
    primary = trips[0] if trips else None

    if primary is not None and primary.get("heroSlides"):
        return valid_slides(primary["heroSlides"])

    if primary is not None:
        image = normalize_image_url(primary.get("coverImage")) or normalize_image_url(
            main_image
        )
        if not image:
            return []
        location = primary.get("location") or {}
        return [
            Slide(
                image=image,
                heading=_optional_text(primary.get("title")) or DEFAULT_HEADING,
                subheading=_optional_text(location.get("name")),
                description=_optional_text(primary.get("shortDescription"))
                or DEFAULT_DESCRIPTION,
            )
        ]

    image = normalize_image_url(main_image)
    if image:
        return [Slide(image=image, heading=DEFAULT_HEADING, description=DEFAULT_DESCRIPTION)]
    return []


def main_image_from_record(record: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Extract the main background image from the mylife record."""
    if not record:
        return None
    raw = record.get("mainImage", record.get("mainimage"))
    if not isinstance(raw, str):
        return None
    return raw.strip() or None
