"""AppContext: shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Opens the snapshot store lazily and centralizes
result emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from orgmap.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from orgmap.config.settings import OrgmapSettings
    from orgmap.infrastructure.store import SnapshotStore
    from orgmap.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store is opened on first use so ``--help`` and ``--version``
    never touch the database.
    """

    def __init__(self, settings: OrgmapSettings) -> None:
        self.settings = settings
        self._store: SnapshotStore | None = None

        from orgmap.config.logging import bind_log_context, configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        bind_log_context(dataset=settings.active_dataset)

        if settings.verbose:
            from orgmap.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> SnapshotStore:
        """The snapshot store (opened lazily on first access)."""
        if self._store is None:
            from orgmap.infrastructure.store import SnapshotStore

            self._store = SnapshotStore.open(self.settings.db_path)
        return self._store

    @property
    def service_kwargs(self) -> dict[str, Any]:
        """Keyword arguments every service constructor takes besides the store."""
        return {
            "dataset": self.settings.active_dataset,
            "containment_labels": self.settings.hierarchy.containment_labels,
        }

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout and returns. Warnings go to stderr so
          they stay out of piped output.
        * Failure: writes to stderr and exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
