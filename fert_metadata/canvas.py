"""Small SVG canvas built on ElementTree."""

from xml.etree import ElementTree as ET

SVG_NS = "http://www.w3.org/2000/svg"


def fmt(value: float) -> str:
    """Stable number formatting: no exponent, no trailing zeros."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.4f}".rstrip("0").rstrip(".")


class Container:
    def __init__(self, element: ET.Element):
        self.element = element

    def rect(self, width: float, height: float, x: float = 0, y: float = 0,
             fill: str | None = None, opacity: float | None = None) -> ET.Element:
        attrs = {"width": fmt(width), "height": fmt(height), "x": fmt(x), "y": fmt(y)}
        if fill is not None:
            attrs["fill"] = fill
        if opacity is not None:
            attrs["opacity"] = fmt(opacity)
        return ET.SubElement(self.element, "rect", attrs)

    def group(self, translate: tuple[float, float] | None = None) -> "Container":
        attrs = {}
        if translate is not None:
            attrs["transform"] = f"translate({fmt(translate[0])},{fmt(translate[1])})"
        return Container(ET.SubElement(self.element, "g", attrs))

    def embed(self, fragment: str):
        """Append raw SVG markup (one or more elements, no namespace prefixes)."""
        wrapper = ET.fromstring(f"<g>{fragment}</g>")
        self.element.extend(list(wrapper))

    def text(self, content: str, x: float, y: float, family: str = "sans-serif",
             size: float = 16) -> ET.Element:
        el = ET.SubElement(self.element, "text", {
            "x": fmt(x),
            "y": fmt(y),
            "font-family": family,
            "font-size": fmt(size),
        })
        el.text = content
        return el


class SvgCanvas(Container):
    def __init__(self, width: float, height: float):
        super().__init__(ET.Element("svg", {
            "xmlns": SVG_NS,
            "width": fmt(width),
            "height": fmt(height),
            "viewBox": f"0 0 {fmt(width)} {fmt(height)}",
        }))
        self.width = width
        self.height = height

    def to_string(self) -> str:
        return ET.tostring(self.element, encoding="unicode")
