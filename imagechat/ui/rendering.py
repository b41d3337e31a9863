"""Markdown-to-HTML conversion for assistant replies."""

import html
import re

CODE_BLOCK_CLASSES = "bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"
INLINE_CODE_CLASSES = "bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs"
LINK_CLASSES = "text-blue-600 underline"

_UNORDERED_ITEM = re.compile(r"^[-*]\s+")
_ORDERED_ITEM = re.compile(r"^\d+\.\s+")


def _wrap_list_items(text: str, item_pattern: re.Pattern[str], tag: str, classes: str) -> str:
    """Group consecutive lines matching ``item_pattern`` into one HTML list."""
    result: list[str] = []
    in_list = False
    for line in text.split("\n"):
        stripped = line.strip()
        if item_pattern.match(stripped):
            if not in_list:
                result.append(f'<{tag} class="{classes}">')
                in_list = True
            result.append(f"<li>{item_pattern.sub('', stripped)}</li>")
            continue
        if in_list:
            result.append(f"</{tag}>")
            in_list = False
        result.append(line)
    if in_list:
        result.append(f"</{tag}>")
    return "\n".join(result)


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: bold, italic, inline code, code blocks, links, lists.
    Input is HTML-escaped first, so model output cannot inject markup.
    """
    text = html.escape(text, quote=False)

    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        rf'<pre class="{CODE_BLOCK_CLASSES}"><code>\2</code></pre>',
        text,
    )
    text = re.sub(r"`([^`]+)`", rf'<code class="{INLINE_CODE_CLASSES}">\1</code>', text)

    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)
    text = re.sub(r"\*([^*\n]+)\*", r"<em>\1</em>", text)
    text = re.sub(r"(?<!\w)_([^_\n]+)_(?!\w)", r"<em>\1</em>", text)

    text = re.sub(
        r"\[([^\]]+)\]\(([^)\s]+)\)",
        rf'<a href="\2" class="{LINK_CLASSES}" target="_blank">\1</a>',
        text,
    )

    text = _wrap_list_items(text, _UNORDERED_ITEM, "ul", "list-disc list-inside my-2 space-y-1")
    text = _wrap_list_items(text, _ORDERED_ITEM, "ol", "list-decimal list-inside my-2 space-y-1")

    return text.replace("\n", "<br>")


def plain_to_html(text: str) -> str:
    """Escape user text and keep its line breaks."""
    return html.escape(text, quote=False).replace("\n", "<br>")
