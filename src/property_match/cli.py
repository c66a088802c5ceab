"""CLI for the property match engine.

Commands:
- search: Free-text location search over a candidate file
- recommend: Score candidates against a preference profile and rank them
- presets: List the built-in preference presets
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint
from rich.table import Table

from . import __version__
from .application.export import write_results_csv
from .application.inputs import load_candidates, load_profile
from .application.recommend import run_recommendations
from .application.search import run_location_search
from .application.weight_tables import select_weight_table
from .config import MatchConfig
from .config_file import load_match_config_file
from .domain.location_matching import BestFieldPolicy
from .domain.models import PreferenceProfile
from .domain.presets import PROFILE_PRESETS, apply_preset, build_profile_from_preset
from .protocols import FileSystem, ProgressReporter


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, config: MatchConfig) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    fs: FileSystem
    progress: ProgressReporter | None


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: MatchConfig
    deps_builder: DependenciesBuilder

    def build_dependencies(self, *, config: MatchConfig | None = None) -> CliDependencies:
        """Return dependencies using the configured builder."""
        return self.deps_builder(config=config or self.config)


class MissingProfileError(typer.BadParameter):
    """Raised when neither a profile file nor a preset is supplied."""

    def __init__(self) -> None:
        super().__init__("Provide --profile, --preset, or both.")


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__(
            "CLI context is not initialised. Use the property-match entry point."
        )


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"property-match {__version__}")
        raise typer.Exit()


def _resolve_profile(
    profile_path: Path | None, preset: str | None, fs: FileSystem
) -> PreferenceProfile:
    if profile_path is None:
        if preset is None:
            raise MissingProfileError()
        return build_profile_from_preset(preset)
    profile = load_profile(profile_path, fs)
    if preset is not None:
        return apply_preset(profile, preset)
    return profile


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        help="Property match engine: location search and preference-based recommendations",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="TOML config file (overrides environment values)",
            ),
        ] = None,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        config = MatchConfig.from_env()
        if config_path is not None:
            deps = deps_builder(config=config)
            file_config = load_match_config_file(path=config_path, fs=deps.fs)
            config = config.with_file_overrides(file_config)
        ctx.obj = CliContext(config=config, deps_builder=deps_builder)

    @app.command()
    def search(
        ctx: typer.Context,
        query: Annotated[str, typer.Argument(help="Free-text location query")],
        candidates_path: Annotated[
            Path,
            typer.Option(
                "--candidates",
                "-i",
                help="Candidate listings (JSON or CSV)",
            ),
        ],
        limit: Annotated[
            int | None,
            typer.Option(
                "--limit",
                "-n",
                min=1,
                help="Maximum number of results (default: MATCH_SEARCH_LIMIT)",
            ),
        ] = None,
        policy: Annotated[
            BestFieldPolicy | None,
            typer.Option(
                "--policy",
                help="Which field a word match is attributed to",
            ),
        ] = None,
        out_path: Annotated[
            Path | None,
            typer.Option(
                "--output",
                "-o",
                help="Write results to this CSV path",
            ),
        ] = None,
    ) -> None:
        """Search candidates by location and list the best matches."""
        state = _get_context(ctx)
        config = state.config.with_overrides(search_limit=limit, best_field_policy=policy)
        deps = state.build_dependencies(config=config)
        candidates = load_candidates(candidates_path, deps.fs)
        hits = run_location_search(
            candidates,
            query,
            limit=config.search_limit,
            policy=config.best_field_policy,
        )

        table = Table(title=f"Location matches for '{query}'")
        table.add_column("ID")
        table.add_column("Label")
        table.add_column("Tier")
        table.add_column("Score", justify="right")
        table.add_column("Relevance", justify="right")
        for hit in hits:
            table.add_row(
                hit.result.candidate_id,
                hit.result.label,
                hit.result.tier.value,
                f"{hit.result.score:.0f}",
                f"{hit.relevance:.0f}",
            )
        rprint(table)
        rprint(f"[green]✓ {len(hits):,} of {len(candidates):,} candidates matched[/green]")

        if out_path is not None:
            write_results_csv((hit.result for hit in hits), out_path, deps.fs)
            rprint(f"  Results: {out_path}")

    @app.command()
    def recommend(
        ctx: typer.Context,
        candidates_path: Annotated[
            Path,
            typer.Option(
                "--candidates",
                "-i",
                help="Candidate listings (JSON or CSV)",
            ),
        ],
        profile_path: Annotated[
            Path | None,
            typer.Option(
                "--profile",
                "-p",
                help="Preference profile JSON",
            ),
        ] = None,
        preset: Annotated[
            str | None,
            typer.Option(
                "--preset",
                help="Preset to start from (fills types, amenities and lifestyle)",
            ),
        ] = None,
        weight_table: Annotated[
            str | None,
            typer.Option(
                "--weight-table",
                "-w",
                help="Weight table name from the configured catalogue",
            ),
        ] = None,
        min_score: Annotated[
            float | None,
            typer.Option(
                "--min-score",
                min=0.0,
                max=100.0,
                help="Drop results at or below this score (default: MATCH_MIN_SCORE)",
            ),
        ] = None,
        limit: Annotated[
            int | None,
            typer.Option(
                "--limit",
                "-n",
                min=1,
                help="Maximum number of results (default: MATCH_RESULT_LIMIT)",
            ),
        ] = None,
        workers: Annotated[
            int | None,
            typer.Option(
                "--workers",
                min=1,
                help="Score with this many threads (default: sequential)",
            ),
        ] = None,
        out_path: Annotated[
            Path | None,
            typer.Option(
                "--output",
                "-o",
                help="Write results to this CSV path",
            ),
        ] = None,
    ) -> None:
        """Score candidates against a preference profile and list the best matches."""
        state = _get_context(ctx)
        config = state.config.with_overrides(
            weight_table_name=weight_table,
            min_score=min_score,
            result_limit=limit,
            max_workers=workers,
        )
        deps = state.build_dependencies(config=config)
        profile = _resolve_profile(profile_path, preset, deps.fs)
        named_table = select_weight_table(
            path=config.weight_tables_path,
            table_name=config.weight_table_name,
            fs=deps.fs,
        )
        candidates = load_candidates(candidates_path, deps.fs)
        outcome = run_recommendations(
            candidates,
            profile,
            weights=profile.weights if profile.weights is not None else named_table.table,
            thresholds=named_table.tier_thresholds,
            min_score=config.min_score,
            limit=config.result_limit,
            max_workers=config.max_workers,
            progress=deps.progress,
        )

        table = Table(title="Recommendations")
        table.add_column("#", justify="right")
        table.add_column("ID")
        table.add_column("Match", justify="right")
        table.add_column("Tier")
        table.add_column("Why")
        for position, result in enumerate(outcome.results, start=1):
            table.add_row(
                str(position),
                result.candidate_id,
                result.label,
                result.tier.value,
                ", ".join(result.top_reasons),
            )
        rprint(table)
        rprint(f"[green]✓ {outcome.summary}[/green]")
        rprint(f"  Scored: {outcome.scored_count:,}")

        if out_path is not None:
            write_results_csv(outcome.results, out_path, deps.fs)
            rprint(f"  Results: {out_path}")

    @app.command()
    def presets() -> None:
        """List the built-in preference presets."""
        table = Table(title="Presets")
        table.add_column("Name")
        table.add_column("Types")
        table.add_column("Amenities")
        table.add_column("Lifestyle")
        for name in sorted(PROFILE_PRESETS):
            preset = PROFILE_PRESETS[name]
            table.add_row(
                name,
                ", ".join(sorted(preset.desired_types)),
                ", ".join(sorted(preset.desired_amenities)),
                preset.lifestyle,
            )
        rprint(table)

    _ = (main, search, recommend, presets)

    return app
