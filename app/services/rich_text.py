import html
import logging
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

BLOCK_TAGS = {
    "paragraph": "p",
    "preformatted": "pre",
    "heading1": "h1",
    "heading2": "h2",
    "heading3": "h3",
    "heading4": "h4",
    "heading5": "h5",
    "heading6": "h6",
}
LIST_TAGS = {"list-item": "ul", "o-list-item": "ol"}


def _as_dict(block: Any) -> Dict[str, Any]:
    if isinstance(block, dict):
        return block
    return block.model_dump()


def as_html(blocks: Iterable[Any]) -> str:
    """
    Render Prismic structured text blocks to HTML.
    Consecutive list items are grouped under one <ul>/<ol>; unknown kinds are dropped.
    """
    parts: List[str] = []
    open_list: Optional[str] = None

    for block in (_as_dict(b) for b in blocks):
        kind = block.get("type")
        list_tag = LIST_TAGS.get(kind)

        if open_list and list_tag != open_list:
            parts.append(f"</{open_list}>")
            open_list = None
        if list_tag and not open_list:
            parts.append(f"<{list_tag}>")
            open_list = list_tag

        if list_tag:
            parts.append(f"<li>{render_spans(block)}</li>")
        elif kind in BLOCK_TAGS:
            tag = BLOCK_TAGS[kind]
            parts.append(f"<{tag}>{render_spans(block)}</{tag}>")
        elif kind == "image":
            parts.append(_render_image(block))
        elif kind == "embed":
            parts.append(_render_embed(block))
        else:
            logger.debug(f"Skipping unsupported rich text block: {kind}")

    if open_list:
        parts.append(f"</{open_list}>")
    return "".join(parts)


def render_spans(block: Dict[str, Any]) -> str:
    text = block.get("text") or ""
    spans = [
        {**s, "start": s.get("start", 0), "end": s.get("end", 0)}
        for s in block.get("spans") or []
    ]
    spans = sorted(
        (s for s in spans if s["end"] > s["start"]),
        key=lambda s: (s["start"], -s["end"]),
    )
    if not spans:
        return _escape_text(text)

    bounds = sorted({0, len(text)} | {s["start"] for s in spans} | {s["end"] for s in spans})
    out = []
    for start, end in zip(bounds, bounds[1:]):
        if start >= len(text):
            break
        segment = _escape_text(text[start:end])
        active = [s for s in spans if s["start"] <= start and s["end"] >= end]
        for span in reversed(active):
            segment = _wrap_span(span, segment)
        out.append(segment)
    return "".join(out)


def _wrap_span(span: Dict[str, Any], inner: str) -> str:
    kind = span.get("type")
    data = span.get("data") or {}
    if kind == "strong":
        return f"<strong>{inner}</strong>"
    if kind == "em":
        return f"<em>{inner}</em>"
    if kind == "hyperlink":
        url = html.escape(data.get("url") or "")
        target = data.get("target")
        target_attr = (
            f' target="{html.escape(target)}" rel="noopener"' if target else ""
        )
        return f'<a href="{url}"{target_attr}>{inner}</a>'
    if kind == "label":
        return f'<span class="{html.escape(data.get("label") or "")}">{inner}</span>'
    return inner


def _render_image(block: Dict[str, Any]) -> str:
    url = html.escape(block.get("url") or "")
    alt = html.escape(block.get("alt") or "")
    return f'<p class="block-img"><img src="{url}" alt="{alt}" /></p>'


def _render_embed(block: Dict[str, Any]) -> str:
    oembed = block.get("oembed") or {}
    url = html.escape(oembed.get("embed_url") or "")
    # provider markup is trusted as-is
    return f'<div data-oembed="{url}">{oembed.get("html") or ""}</div>'


def _escape_text(text: str) -> str:
    return html.escape(text, quote=False).replace("\n", "<br />")
