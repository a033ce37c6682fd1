"""Helpers that build the prefixed image strings ``set_image`` accepts.

The emitter passes image strings through verbatim; these only save plugins
from hand-assembling the data URI prefixes.
"""

from __future__ import annotations

import base64

SVG_PREFIX = "data:image/svg+xml,"
PNG_PREFIX = "data:image/png;base64,"


def svg_image(markup: str) -> str:
    """Wrap literal SVG markup (not URL-encoded, not base64)."""
    return SVG_PREFIX + markup


def png_image(data: bytes) -> str:
    return PNG_PREFIX + base64.b64encode(data).decode("ascii")
