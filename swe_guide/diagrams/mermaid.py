"""Delegate Mermaid diagram rendering to an external renderer.

Mermaid sources are opaque text: this module never parses them. Two backends
produce the displayed markup:

* :class:`ClientSideBackend` emits ``<pre class="mermaid">`` holding the escaped
  source; mermaid.js renders it in the browser.
* :class:`MermaidCliBackend` runs the ``mmdc`` executable from mermaid-cli in a
  subprocess and inlines the SVG it writes.

Rendering is asynchronous. :class:`MermaidSlot` represents one place a diagram
is displayed and guards it against stale results: each call to
:meth:`MermaidSlot.update` takes a new generation token, and a result is only
committed while its token is still the newest one.

Example
-------
>>> import asyncio
>>> slot = MermaidSlot(ClientSideBackend())
>>> asyncio.run(slot.update("graph TD; A-->B"))  # doctest: +ELLIPSIS
Markup('<pre class="mermaid">graph TD; A--&gt;B</pre>')
"""

from __future__ import annotations

import asyncio
import json
import logging
import tempfile
import typing as typ
from pathlib import Path

from markupsafe import Markup, escape

if typ.TYPE_CHECKING:
    from swe_guide.config.models import MermaidConfig

logger = logging.getLogger(__name__)


class MermaidRenderError(RuntimeError):
    """Raised when the external Mermaid renderer fails."""


class MermaidBackend(typ.Protocol):
    """Anything that turns Mermaid source into displayable markup."""

    async def render(self, source: str) -> Markup:
        """Return markup for ``source``."""
        ...


class ClientSideBackend:
    """Defer rendering to mermaid.js running in the reader's browser."""

    async def render(self, source: str) -> Markup:
        """Wrap the escaped source in the element mermaid.js scans for."""
        return Markup('<pre class="mermaid">{}</pre>').format(escape(source.strip()))


class MermaidCliBackend:
    """Render diagrams to SVG with the mermaid-cli ``mmdc`` executable."""

    def __init__(
        self,
        *,
        executable: str = "mmdc",
        theme: str = "dark",
        theme_variables: typ.Mapping[str, str] | None = None,
        timeout: float = 60.0,
    ) -> None:
        """Configure the executable, Mermaid theme, and per-diagram timeout."""
        self.executable = executable
        self.theme = theme
        self.theme_variables = dict(theme_variables or {})
        self.timeout = timeout

    async def render(self, source: str) -> Markup:
        """Run ``mmdc`` on ``source`` and return the SVG document it wrote.

        Raises
        ------
        MermaidRenderError
            If the executable is missing, times out, or exits non-zero.
        """
        with tempfile.TemporaryDirectory(prefix="swe-guide-mermaid-") as workdir:
            root = Path(workdir)
            input_path = root / "diagram.mmd"
            output_path = root / "diagram.svg"
            config_path = root / "config.json"
            input_path.write_text(source, encoding="utf-8")
            config_path.write_text(
                json.dumps(
                    {
                        "startOnLoad": False,
                        "theme": self.theme,
                        "themeVariables": self.theme_variables,
                    }
                ),
                encoding="utf-8",
            )
            try:
                proc = await asyncio.create_subprocess_exec(
                    self.executable,
                    "--input",
                    str(input_path),
                    "--output",
                    str(output_path),
                    "--configFile",
                    str(config_path),
                    "--backgroundColor",
                    "transparent",
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except FileNotFoundError as exc:
                msg = f"Mermaid CLI '{self.executable}' was not found on PATH."
                raise MermaidRenderError(msg) from exc
            try:
                _stdout, stderr = await asyncio.wait_for(
                    proc.communicate(), timeout=self.timeout
                )
            except TimeoutError as exc:
                await _reap(proc)
                msg = f"Mermaid CLI timed out after {self.timeout:g}s."
                raise MermaidRenderError(msg) from exc
            except asyncio.CancelledError:
                await _reap(proc)
                raise
            if proc.returncode != 0:
                detail = stderr.decode("utf-8", errors="ignore").strip()
                logger.debug("mmdc stderr: %s", detail)
                msg = f"Mermaid CLI exited with status {proc.returncode}: {detail}"
                raise MermaidRenderError(msg)
            svg = output_path.read_text(encoding="utf-8")
        return Markup('<div class="mermaid-diagram">{}</div>').format(Markup(svg))


async def _reap(proc: asyncio.subprocess.Process) -> None:
    """Kill ``proc`` if it is still running and wait for it to exit.

    Runs before the render's temporary directory is removed, so ``mmdc`` never
    outlives the files it was given.
    """
    if proc.returncode is None:
        logger.debug("killing mmdc process %s", proc.pid)
        proc.kill()
    await proc.wait()


class MermaidSlot:
    """One display position for a Mermaid diagram with last-initiated-wins updates.

    Attributes
    ----------
    current : Markup or None
        Markup most recently committed to the slot; ``None`` before the first
        successful render.
    """

    def __init__(self, backend: MermaidBackend) -> None:
        self.backend = backend
        self.current: Markup | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        """Token of the most recently initiated render."""
        return self._generation

    async def update(self, source: str) -> Markup | None:
        """Render ``source`` and commit it unless a newer update has started.

        Returns
        -------
        Markup or None
            The committed markup, or ``None`` when this render was superseded
            while in flight and its result was discarded.
        """
        self._generation += 1
        token = self._generation
        rendered = await self.backend.render(source)
        if token != self._generation:
            logger.debug(
                "discarding mermaid render %d; generation %d is newer",
                token,
                self._generation,
            )
            return None
        self.current = rendered
        return rendered


def backend_from_config(config: MermaidConfig) -> MermaidBackend:
    """Return the backend selected by the ``mermaid.renderer`` setting."""
    if config.renderer == "cli":
        return MermaidCliBackend(
            executable=config.cli_path,
            theme=config.theme,
            theme_variables=config.theme_variables,
            timeout=config.timeout,
        )
    return ClientSideBackend()


__all__ = [
    "ClientSideBackend",
    "MermaidBackend",
    "MermaidCliBackend",
    "MermaidRenderError",
    "MermaidSlot",
    "backend_from_config",
]
