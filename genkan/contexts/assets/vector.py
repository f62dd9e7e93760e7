"""
SVG recoloring for inline embedding.

Rewrites an SVG so it inherits the surrounding text color (currentColor),
letting a single icon follow light/dark theme switches. The document is
tokenized into markup constructs and only attribute values inside start tags
(plus declarations inside <style> elements) are rewritten. Text, CDATA and
everything else is copied through unchanged.

Transformations:
- XML declaration removed
- Comments removed (including multi-line comments and comments containing '>')
- width/height removed from <svg> start tags so CSS controls the rendered size
- fill/stroke attributes set to currentColor, except the paint value "none"
- fill/stroke declarations in style attributes and <style> elements likewise

Example:
    >>> recolor_svg(b'<svg width="24" height="24"><path fill="#ff0000"/></svg>')
    '__INLINE_SVG__<svg><path fill="currentColor"/></svg>'
"""

import re

from genkan.contexts.assets.exceptions import SvgDecodeError

INLINE_SVG_MARKER = "__INLINE_SVG__"

CURRENT_COLOR = "currentColor"
NO_PAINT = "none"
PAINT_PROPERTIES = ("fill", "stroke")
SIZE_ATTRIBUTES = ("width", "height")
IMPORTANT = "!important"

# One markup construct per match; anything between matches is text
MARKUP_TOKEN = re.compile(
    r"""
    (?P<comment><!--.*?-->)
    | (?P<cdata><!\[CDATA\[.*?\]\]>)
    | (?P<declaration><\?xml\s.*?\?>)
    | (?P<instruction><\?.*?\?>)
    | (?P<doctype><!DOCTYPE(?:[^>\[]|\[.*?\])*>)
    | (?P<style_element>
        (?P<style_open><(?:[\w.-]+:)?style\b(?:[^>"']|"[^"]*"|'[^']*')*>)
        (?P<style_body>.*?)
        (?P<style_close></(?:[\w.-]+:)?style\s*>)
      )
    | (?P<start_tag>
        <(?P<name>[A-Za-z_][\w:.-]*)
        (?P<attributes>(?:\s+[^\s=/>]+(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'>]+))?)*)
        (?P<tail>\s*/?>)
      )
    """,
    re.DOTALL | re.VERBOSE | re.IGNORECASE,
)

ATTRIBUTE = re.compile(
    r"""
    (?P<space>\s+)
    (?P<name>[^\s=/>]+)
    (?:
        (?P<equals>\s*=\s*)
        (?P<value>"[^"]*"|'[^']*'|[^\s"'>]+)
    )?
    """,
    re.VERBOSE,
)

CSS_RULE_BODY = re.compile(r"\{([^{}]*)\}")


def _local_name(name: str) -> str:
    """Tag name without namespace prefix (svg:svg -> svg)."""
    return name.rsplit(":", 1)[-1].lower()


def _unquote(raw: str) -> tuple[str, str]:
    """Split a raw attribute value into (quote character, inner text)."""
    if len(raw) >= 2 and raw[0] in "\"'" and raw[-1] == raw[0]:
        return raw[0], raw[1:-1]
    return '"', raw


def rewrite_declarations(declarations: str) -> str:
    """
    Recolor fill/stroke declarations in a CSS declaration list.

    Declarations other than fill and stroke, and paints set to "none", are
    preserved exactly. A trailing !important is kept.

    Examples:
        rewrite_declarations("fill: #fff; opacity: .5")  # "fill: currentColor; opacity: .5"
        rewrite_declarations("stroke:none")              # "stroke:none"
    """
    rewritten = []
    for declaration in declarations.split(";"):
        if ":" not in declaration:
            rewritten.append(declaration)
            continue

        prop, value = declaration.split(":", 1)
        if prop.strip().lower() not in PAINT_PROPERTIES or value.strip() == NO_PAINT:
            rewritten.append(declaration)
            continue

        leading = value[: len(value) - len(value.lstrip())]
        trailing = value[len(value.rstrip()):]
        important = f" {IMPORTANT}" if value.strip().endswith(IMPORTANT) else ""
        rewritten.append(f"{prop}:{leading}{CURRENT_COLOR}{important}{trailing}")

    return ";".join(rewritten)


def rewrite_attributes(tag_name: str, attributes: str) -> str:
    """
    Rewrite the attribute list of one start tag.

    Args:
        tag_name: Element name (namespace prefix allowed)
        attributes: Raw text between the tag name and the closing '>'

    Returns:
        Rewritten attribute text
    """
    is_root_svg = _local_name(tag_name) == "svg"

    def rewrite(match: re.Match) -> str:
        name = match.group("name")
        raw_value = match.group("value")

        if is_root_svg and name in SIZE_ATTRIBUTES:
            return ""

        if raw_value is None:
            return match.group(0)

        quote, value = _unquote(raw_value)

        if name in PAINT_PROPERTIES:
            if value == NO_PAINT:
                return match.group(0)
            return f'{match.group("space")}{name}{match.group("equals")}{quote}{CURRENT_COLOR}{quote}'

        if name == "style":
            return (
                f'{match.group("space")}{name}{match.group("equals")}'
                f"{quote}{rewrite_declarations(value)}{quote}"
            )

        return match.group(0)

    return ATTRIBUTE.sub(rewrite, attributes)


def _rewrite_token(match: re.Match) -> str:
    kind = match.lastgroup

    if kind in ("comment", "declaration"):
        return ""

    if kind == "style_element":
        body = CSS_RULE_BODY.sub(
            lambda rule: "{" + rewrite_declarations(rule.group(1)) + "}", match.group("style_body")
        )
        return f'{match.group("style_open")}{body}{match.group("style_close")}'

    if kind == "start_tag":
        attributes = rewrite_attributes(match.group("name"), match.group("attributes"))
        return f'<{match.group("name")}{attributes}{match.group("tail")}'

    return match.group(0)


def rewrite_svg_markup(svg_text: str) -> str:
    """Apply all recoloring transformations to decoded SVG text."""
    return MARKUP_TOKEN.sub(_rewrite_token, svg_text).strip()


def recolor_svg(svg_data: bytes) -> str:
    """
    Prepare SVG bytes for inline embedding.

    Args:
        svg_data: Raw SVG file contents

    Returns:
        INLINE_SVG_MARKER followed by the rewritten markup

    Raises:
        SvgDecodeError: If the bytes are not valid UTF-8
    """
    try:
        svg_text = svg_data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SvgDecodeError("Failed to parse SVG as UTF-8", original_error=e) from e

    return f"{INLINE_SVG_MARKER}{rewrite_svg_markup(svg_text.lstrip(chr(0xFEFF)))}"


def is_inline_svg(value: str) -> bool:
    return isinstance(value, str) and value.startswith(INLINE_SVG_MARKER)


def strip_inline_marker(value: str) -> str:
    """Markup of a marker-prefixed value (unchanged if not marked)."""
    if is_inline_svg(value):
        return value[len(INLINE_SVG_MARKER):]
    return value
