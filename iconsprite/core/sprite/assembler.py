"""Sprite assembler.

Renders every registered icon once and joins the symbols, in input
order, into a single SVG document:

    <svg xmlns="http://www.w3.org/2000/svg"><defs>
      <symbol id="ri-..." viewBox="...">...</symbol>
      ...
    </defs></svg>

Renders run concurrently in worker threads, bounded by a semaphore.
"""

import asyncio
import logging
from typing import Iterable, List, Optional, Tuple

from ..constants import DEFAULT_MAX_CONCURRENT, SVG_NAMESPACE
from .renderer import IconRenderer, SymbolDefinition

logger = logging.getLogger(__name__)


def assemble_document(symbols: Iterable[SymbolDefinition]) -> str:
    """Wrap symbol definitions into the sprite document."""
    body = "".join(symbol.to_markup() for symbol in symbols)
    return f'<svg xmlns="{SVG_NAMESPACE}"><defs>{body}</defs></svg>'


async def build_sprite_async(
    icons: Iterable[Tuple[str, str]],
    renderer: Optional[IconRenderer] = None,
    max_concurrent: int = DEFAULT_MAX_CONCURRENT,
) -> str:
    """Render icons concurrently and assemble the sprite document.

    Args:
        icons: Ordered ``(library_id, export_name)`` pairs
        renderer: Icon renderer (lenient, importlib-backed by default)
        max_concurrent: Upper bound on renders in flight

    Returns:
        Sprite document text; well-formed even for zero icons

    Raises:
        IconExportNotFoundError / IconRenderError: In strict mode, on the
            first icon that fails; remaining renders are cancelled
    """
    if max_concurrent < 1:
        raise ValueError(f"max_concurrent must be at least 1, got {max_concurrent}")

    renderer = renderer or IconRenderer()
    pairs = [(library_id, export_name) for library_id, export_name in icons]
    semaphore = asyncio.Semaphore(max_concurrent)

    async def render_one(library_id: str, export_name: str) -> SymbolDefinition:
        async with semaphore:
            return await asyncio.to_thread(renderer.render, library_id, export_name)

    tasks = [asyncio.create_task(render_one(*pair)) for pair in pairs]
    try:
        symbols: List[SymbolDefinition] = list(await asyncio.gather(*tasks))
    except Exception:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    logger.info(f"Assembled sprite with {len(symbols)} symbols")
    return assemble_document(symbols)


def build_sprite(
    icons: Iterable[Tuple[str, str]],
    renderer: Optional[IconRenderer] = None,
    max_concurrent: int = DEFAULT_MAX_CONCURRENT,
) -> str:
    """Synchronous wrapper around :func:`build_sprite_async`.

    Must not be called from a running event loop; await
    ``build_sprite_async`` there instead.
    """
    return asyncio.run(build_sprite_async(icons, renderer=renderer, max_concurrent=max_concurrent))
