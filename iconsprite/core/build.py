"""Build-cycle orchestration.

One SpriteBuild owns the icon registry for one build:

    build = SpriteBuild(load_settings())
    build.start()                                  # resets the registry
    results = build.transform_many(modules)        # [(code, module_id), ...]
    sprite = build.assemble()                      # SVG document text

Module transforms may run in parallel; registrations are committed in
module input order so the sprite's symbol order does not depend on
which worker finished first.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

from .ast_parser import ParseError, is_transformable
from .collector import IconCollector
from .config import SpriteSettings
from .sprite.assembler import build_sprite, build_sprite_async
from .sprite.renderer import IconRenderer
from .sprite.resolver import IconResolver, ImportlibModuleLoader
from .transform.engine import transform_module
from .transform.models import RegisterCallback, TransformResult

logger = logging.getLogger(__name__)


class SpriteBuild:
    """Transforms modules and assembles the sprite for one build."""

    def __init__(
        self,
        settings: Optional[SpriteSettings] = None,
        collector: Optional[IconCollector] = None,
        renderer: Optional[IconRenderer] = None,
    ):
        self.settings = settings or SpriteSettings()
        self.collector = collector if collector is not None else IconCollector()
        self.renderer = renderer or IconRenderer(
            IconResolver(ImportlibModuleLoader(self.settings.module_package)),
            strict=self.settings.strict,
        )
        self._sources = self.settings.compiled_sources()

    def start(self) -> None:
        """Reset the registry and the resolver cache. Call at the start of every build."""
        self.collector.clear()
        self.renderer.resolver.clear()
        logger.debug("Sprite build started, registry and module cache cleared")

    def transform(self, code: str, module_id: str) -> TransformResult:
        """Transform one module, registering its icons immediately."""
        return self._transform(code, module_id, self.collector.add)

    def transform_many(self, modules: Iterable[Tuple[str, str]]) -> List[TransformResult]:
        """Transform ``(code, module_id)`` pairs on a bounded thread pool.

        Returns:
            Results in input order
        """
        with ThreadPoolExecutor(
            max_workers=self.settings.max_concurrent,
            thread_name_prefix="iconsprite-transform",
        ) as executor:
            outcomes = list(executor.map(self._transform_buffered, modules))

        results = []
        for result, pairs in outcomes:
            for library_id, export_name in pairs:
                self.collector.add(library_id, export_name)
            results.append(result)
        return results

    def assemble(self) -> str:
        """Build the sprite document from everything registered so far."""
        return build_sprite(
            self.collector.to_list(),
            renderer=self.renderer,
            max_concurrent=self.settings.max_concurrent,
        )

    async def assemble_async(self) -> str:
        return await build_sprite_async(
            self.collector.to_list(),
            renderer=self.renderer,
            max_concurrent=self.settings.max_concurrent,
        )

    def _transform_buffered(self, item: Tuple[str, str]) -> Tuple[TransformResult, List[Tuple[str, str]]]:
        code, module_id = item
        pairs: List[Tuple[str, str]] = []
        result = self._transform(code, module_id, lambda lib, name: pairs.append((lib, name)))
        return result, pairs

    def _transform(self, code: str, module_id: str, register: RegisterCallback) -> TransformResult:
        if not is_transformable(module_id):
            return TransformResult(code=code)
        try:
            return transform_module(code, module_id, register, self._sources)
        except Exception as e:
            # Contained to this module; it is emitted unchanged.
            logger.warning(f"Failed to transform {module_id}: {e}")
            return TransformResult(
                code=code,
                errors=[ParseError(file_path=module_id, line=0, message=f"Transform failed: {e}", severity="error")],
            )
