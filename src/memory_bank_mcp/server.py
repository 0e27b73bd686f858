"""FastMCP server bootstrap for Memory Bank."""

import logging
from typing import Optional

from fastmcp import FastMCP

from . import __version__
from .config import MemoryBankSettings, get_settings
from .documents import DocumentStore
from .inspector import ProjectInspector
from .resources import MARKDOWN_MIME_TYPE, RESOURCES, ResourceSpec, read_resource
from .tools import ProgressTally, register_tools


def configure_logging(level: str) -> None:
    """Configure root logging for the Memory Bank server."""

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


def create_server(
    settings: Optional[MemoryBankSettings] = None,
    *,
    store: DocumentStore | None = None,
    inspector: ProjectInspector | None = None,
    progress_tally: ProgressTally | None = None,
) -> FastMCP:
    """Instantiate the FastMCP server with the memory bank tools and resources."""

    settings = settings or get_settings()
    store = store or DocumentStore(settings.memory_bank_dirname)
    inspector = inspector or ProjectInspector()

    server = FastMCP(
        name="Memory Bank MCP",
        version=__version__,
        instructions=(
            "Memory Bank keeps project context, the active session, a progress log, and "
            "a decision log as markdown documents under <project>/memory-bank. Call "
            "initialize_memory_bank once per project, then use the update tools as work "
            "progresses."
        ),
    )

    handles = register_tools(
        server,
        settings=settings,
        store=store,
        inspector=inspector,
        progress_tally=progress_tally,
    )

    def _register_resource(spec: ResourceSpec) -> None:
        @server.resource(
            spec.uri,
            name=spec.name,
            title=spec.title,
            description=spec.description,
            mime_type=MARKDOWN_MIME_TYPE,
            tags={"memory-bank"},
        )
        def _resource() -> str:
            return read_resource(spec.uri, project_path=settings.project_path, store=store)

    for spec in RESOURCES:
        _register_resource(spec)

    setattr(server, "memory_bank_settings", settings)
    setattr(server, "document_store", store)
    setattr(server, "tool_handles", handles)
    setattr(server, "progress_tally", handles.progress_tally)
    return server


def main() -> None:
    """Entry point for running the Memory Bank MCP server via CLI."""

    settings = get_settings()
    configure_logging(settings.log_level)

    server = create_server(settings)
    logging.getLogger(__name__).info(
        "Launching Memory Bank MCP server",
        extra={
            "version": __version__,
            "log_level": settings.log_level,
            "project_path": str(settings.project_path) if settings.project_path else None,
            "memory_bank_dirname": settings.memory_bank_dirname,
        },
    )
    server.run()


if __name__ == "__main__":
    main()
