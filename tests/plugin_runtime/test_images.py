from __future__ import annotations

import base64

from deckplugin.plugin_runtime.images import PNG_PREFIX, SVG_PREFIX, png_image, svg_image


def test_svg_image() -> None:
    markup = '<svg xmlns="http://www.w3.org/2000/svg" width="72" height="72"/>'
    assert svg_image(markup) == "data:image/svg+xml," + markup


def test_png_image() -> None:
    data = b"\x89PNG\r\n\x1a\nrest"
    image = png_image(data)

    assert image.startswith(PNG_PREFIX)
    assert base64.b64decode(image[len(PNG_PREFIX) :]) == data
    assert not image.startswith(SVG_PREFIX)
