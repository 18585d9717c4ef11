from protodoc.core.ports.renderer import Renderer
from protodoc.render.markdown import MarkdownRenderer
from protodoc.render.text import TextRenderer

_RENDERERS: dict[str, type[Renderer]] = {
    "markdown": MarkdownRenderer,
    "md": MarkdownRenderer,
    "text": TextRenderer,
    "txt": TextRenderer,
}

FORMATS = ("markdown", "text")


def get_renderer(name: str) -> Renderer:
    normalized = name.strip().lower()
    if normalized not in _RENDERERS:
        raise ValueError(f"Unsupported format '{name}'. Supported: {list(FORMATS)}")
    return _RENDERERS[normalized]()


__all__ = [
    "FORMATS",
    "MarkdownRenderer",
    "Renderer",
    "TextRenderer",
    "get_renderer",
]
