from collections.abc import Sequence

from protodoc.models import CommentBlock


def compose_head_comment(fragments: Sequence[str]) -> str:
    """Join leading comment fragments with a single space, in declaration order."""
    return " ".join(fragment.strip() for fragment in fragments)


def compose_comment(fragments: Sequence[str], inline: str | None, sep: str) -> str:
    head = compose_head_comment(fragments)
    inline = (inline or "").strip()
    if not head:
        return inline
    if not inline:
        return head
    return head + sep + inline


def compose_block(block: CommentBlock, sep: str) -> str:
    return compose_comment(block.leading, block.inline, sep)
