"""Rendering of Notion rich-text runs to inline markdown."""

from typing import Any, Dict, Iterable


def _wrap(text: str, marker: str) -> str:
    """Wrap text in a symmetric marker, keeping surrounding whitespace outside it."""
    stripped = text.strip()
    if not stripped:
        return text
    leading = text[:len(text) - len(text.lstrip())]
    trailing = text[len(text.rstrip()):]
    return f"{leading}{marker}{stripped}{marker}{trailing}"


def render_run(run: Dict[str, Any]) -> str:
    """Render a single rich-text run."""
    if run.get('type') == 'equation':
        expression = run.get('equation', {}).get('expression', run.get('plain_text', ''))
        return f"${expression}$"

    text = run.get('plain_text', '')
    annotations = run.get('annotations') or {}

    if annotations.get('code'):
        text = _wrap(text, '`')
    if annotations.get('bold'):
        text = _wrap(text, '**')
    if annotations.get('italic'):
        text = _wrap(text, '_')
    if annotations.get('strikethrough'):
        text = _wrap(text, '~~')

    href = run.get('href')
    if href:
        text = f"[{text}]({href})"

    return text


def render_rich_text(runs: Iterable[Dict[str, Any]]) -> str:
    """Concatenate a list of rich-text runs into one markdown string."""
    return ''.join(render_run(run) for run in runs or [])


def plain_text(runs: Iterable[Dict[str, Any]]) -> str:
    """Concatenate the unformatted text of rich-text runs."""
    return ''.join(run.get('plain_text', '') for run in runs or [])


__all__ = ['render_run', 'render_rich_text', 'plain_text']
