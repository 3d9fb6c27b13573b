# SPDX-License-Identifier: MIT
"""Component loading with per-extension compile hooks.

A ComponentLoader turns a template file into a component: a callable taking
the render props and returning markup. How a file is compiled depends on its
extension:

- ``.jinja`` / ``.j2``: compiled as Jinja2 templates
- ``.py``: compiled as a Python module exposing ``render(props)``
- extensions registered with ``ignore()``: load as empty components

Hooks live on the loader instance, so separate plugins never share state.
Compiled components are cached per path and modification time.
"""

from __future__ import annotations

import importlib.machinery
import importlib.util
import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from jinja2 import Environment, FileSystemLoader

from .errors import TemplateCompileError, TemplateNotFoundError, TemplatesError

logger = logging.getLogger(__name__)

Component = Callable[[dict[str, Any]], Any]
CompileHook = Callable[[Path, Mapping[str, Any]], Component]

JINJA_EXTENSIONS = (".jinja", ".j2")
MODULE_EXTENSION = ".py"

# Names a Python component module may export, in lookup order
MODULE_COMPONENT_NAMES = ("render", "default")


def compile_jinja(path: Path, tooling: Mapping[str, Any]) -> Component:
    """Compile a Jinja2 template into a component.

    The ``jinja`` table of ``tooling`` is forwarded to the Jinja2 Environment,
    so options such as ``autoescape`` or ``trim_blocks`` apply. Includes and
    extends resolve relative to the template's directory.
    """
    env = Environment(loader=FileSystemLoader(str(path.parent)), **tooling.get("jinja", {}))
    template = env.get_template(path.name)

    def component(props: dict[str, Any]) -> str:
        return template.render(props)

    return component


class ComponentModuleLoader(importlib.machinery.SourceFileLoader):
    """Source loader compiling component modules with tooling options.

    Components are always compiled from source and never write bytecode
    caches, so ``flags`` and ``optimize`` apply on every load.
    """

    def __init__(self, fullname: str, path: str, flags: int = 0, optimize: int = -1) -> None:
        super().__init__(fullname, path)
        self.flags = flags
        self.optimize = optimize

    def get_code(self, fullname: str) -> Any:
        source_path = self.get_filename(fullname)
        return self.source_to_code(self.get_data(source_path), source_path)

    def source_to_code(self, data: Any, path: Any, *, _optimize: int = -1) -> Any:
        return compile(
            data, path, "exec", flags=self.flags, dont_inherit=True, optimize=self.optimize
        )


def compile_module(path: Path, tooling: Mapping[str, Any]) -> Component:
    """Compile a Python source file into a component.

    The module is not registered in ``sys.modules``. The ``python`` table of
    ``tooling`` may carry ``optimize`` and ``flags`` for ``compile()``.
    """
    options = tooling.get("python", {})
    module_name = f"sitesmith_component_{path.stem}"
    loader = ComponentModuleLoader(
        module_name, str(path), flags=options.get("flags", 0), optimize=options.get("optimize", -1)
    )
    spec = importlib.util.spec_from_file_location(module_name, path, loader=loader)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    for name in MODULE_COMPONENT_NAMES:
        component = getattr(module, name, None)
        if callable(component):
            return component

    raise TemplateCompileError(
        f"Component module {path} must define one of: {', '.join(MODULE_COMPONENT_NAMES)}"
    )


def compile_ignored(path: Path, tooling: Mapping[str, Any]) -> Component:
    """Load a file as a component that renders nothing."""

    def component(props: dict[str, Any]) -> str:
        return ""

    return component


class ComponentLoader:
    """Registry of compile hooks keyed by file extension."""

    def __init__(self, tooling: Optional[Mapping[str, Any]] = None) -> None:
        """Initialize with the built-in Jinja2 and Python module hooks.

        Args:
            tooling: Options passed to every compile hook.
        """
        self.tooling: dict[str, Any] = dict(tooling or {})
        self._hooks: dict[str, CompileHook] = {}
        self._ignored: set[str] = set()
        self._cache: dict[Path, tuple[int, Component]] = {}

        for extension in JINJA_EXTENSIONS:
            self.register(extension, compile_jinja)
        self.register(MODULE_EXTENSION, compile_module)

    @property
    def extensions(self) -> list[str]:
        """Return the registered extensions."""
        return sorted(self._hooks)

    def register(self, extension: str, hook: CompileHook) -> bool:
        """Register a compile hook for an extension.

        Registration is idempotent: an extension that already has a hook
        keeps it.

        Returns:
            True if the hook was registered, False if one was already present.
        """
        extension = extension.lower()
        if extension in self._hooks:
            logger.debug("Hook already registered for %s", extension)
            return False

        self._hooks[extension] = hook
        logger.debug("Registered hook for %s", extension)
        return True

    def ignore(self, extension: str) -> bool:
        """Make files with this extension load as empty components."""
        registered = self.register(extension, compile_ignored)
        if registered:
            self._ignored.add(extension.lower())
        return registered

    def is_component(self, path: str | Path) -> bool:
        """Check if a path has a compiling (not ignored) hook."""
        extension = Path(path).suffix.lower()
        return extension in self._hooks and extension not in self._ignored

    def load(self, path: str | Path) -> Component:
        """Load and compile the component stored at ``path``.

        Raises:
            TemplateNotFoundError: If the file does not exist
            TemplateCompileError: If no hook handles the extension or compiling fails
        """
        path = Path(path)
        if not path.is_file():
            raise TemplateNotFoundError(f"Template not found: {path}")

        mtime = path.stat().st_mtime_ns
        cached = self._cache.get(path)
        if cached is not None and cached[0] == mtime:
            return cached[1]

        hook = self._hooks.get(path.suffix.lower())
        if hook is None:
            raise TemplateCompileError(f"No component hook registered for '{path.suffix}': {path}")

        logger.debug("Compiling component: %s", path)
        try:
            component = hook(path, self.tooling)
        except TemplatesError:
            raise
        except Exception as e:
            raise TemplateCompileError(f"Failed to compile {path}: {e}") from e

        self._cache[path] = (mtime, component)
        return component
