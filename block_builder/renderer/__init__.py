from .html import (
    render_block,
    render_blocks,
    render_page,
    render_placeholder,
    prepare_blocks,
)

__all__ = ["render_block", "render_blocks", "render_page", "render_placeholder", "prepare_blocks"]
