#!/usr/bin/env python3
from typing import Dict, Optional

from .models import NAMED_ATTRIBUTES, ExtractionRequest

PRESETS: Dict[str, ExtractionRequest] = {
    "headings": ExtractionRequest("h1, h2, h3, h4, h5, h6", "textContent"),
    "links": ExtractionRequest("a[href]", "href"),
    "images": ExtractionRequest("img", "src"),
}

ATTRIBUTE_CHOICES = NAMED_ATTRIBUTES


def get_preset(name: Optional[str]) -> Optional[ExtractionRequest]:
    if not name:
        return None
    return PRESETS.get(name.strip().lower())


def build_request(
    selector: Optional[str] = None,
    attribute: Optional[str] = None,
    preset: Optional[str] = None,
) -> ExtractionRequest:
    """Start from the preset (if any) and let explicit selector/attribute override it."""
    base = get_preset(preset)
    if preset and base is None:
        raise KeyError(f"Unknown preset: {preset}")
    sel = (selector or "").strip() or (base.selector if base else "")
    attr = (attribute or "").strip() or (base.attribute if base else "textContent")
    return ExtractionRequest(selector=sel, attribute=attr)
