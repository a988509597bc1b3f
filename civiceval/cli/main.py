"""CLI entrypoint for civiceval — typer app with a `run` command."""

import asyncio
import sys
from pathlib import Path

import structlog
import typer

from civiceval.config.infrastructure.blueprint_loader import BlueprintLoader
from civiceval.config.infrastructure.observer import StructlogConfigObserver
from civiceval.core.errors import CivicEvalError
from civiceval.evaluation.application.registry import (
    EvaluatorRegistry,
    parse_eval_methods,
)
from civiceval.evaluation.infrastructure.coverage import (
    DEFAULT_JUDGE_MODEL,
    LLMCoverageEvaluator,
)
from civiceval.evaluation.infrastructure.embedding import (
    DEFAULT_EMBEDDING_MODEL,
    EmbeddingEvaluator,
)
from civiceval.evaluation.infrastructure.observer import StructlogEvaluationObserver
from civiceval.generation.domain.observer import GenerationObserver
from civiceval.generation.infrastructure.composite_observer import (
    CompositeGenerationObserver,
)
from civiceval.generation.infrastructure.litellm import LiteLLMResponseProvider
from civiceval.generation.infrastructure.observer import StructlogGenerationObserver
from civiceval.generation.infrastructure.progress_observer import (
    ProgressGenerationObserver,
)
from civiceval.run.application.pipeline import ComparisonPipeline
from civiceval.run.domain.identity import build_run_label, generate_config_content_hash
from civiceval.run.domain.result import PipelineResult
from civiceval.run.infrastructure.local_storage import LocalFileResultStorage
from civiceval.run.infrastructure.observer import StructlogPipelineObserver

app = typer.Typer(add_completion=False)


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


def _print_summary(result: PipelineResult, storage: LocalFileResultStorage) -> None:
    data = result.data
    errored = sum(len(models) for models in (data.errors or {}).values())
    rows: list[tuple[str, str]] = [
        ("Blueprint", f"{data.config_title} ({data.config_id})"),
        ("Run label", data.run_label),
        ("Prompts", str(len(data.prompt_ids))),
        ("Effective models", str(len(data.effective_models))),
        ("Errored responses", str(errored)),
        ("Eval methods", ", ".join(data.eval_methods_used) or "-"),
    ]
    if result.file_name is None:
        rows.append(("Result file", "NOT SAVED (see logs)"))
    else:
        rows.append(
            (
                "Result file",
                str(storage.path_for(config_id=data.config_id, file_name=result.file_name)),
            )
        )

    label_w = max(len(label) for label, _ in rows)
    typer.echo("")
    for label, value in rows:
        typer.echo(f"  {label:<{label_w}}  {value}")
    typer.echo("")


@app.command()
def run(
    blueprint_path: Path = typer.Argument(
        ..., help="Path to a comparison blueprint (JSON or YAML)"
    ),
    run_label: str | None = typer.Option(
        None,
        "--run-label",
        help="Label prefixed to the blueprint content hash",
    ),
    eval_method: str | None = typer.Option(
        None,
        "--eval-method",
        help="Comma-separated evaluation methods: embedding, llm-coverage or all",
    ),
    cache: bool = typer.Option(
        False,
        "--cache",
        help="Reuse identical model responses within this process",
    ),
    output_dir: Path = typer.Option(
        Path("./results"),
        "--output-dir",
        "-o",
        help="Directory for result documents",
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
    store_full_history: bool = typer.Option(
        True,
        "--store-full-history/--no-store-full-history",
        envvar="STORE_FULL_HISTORY",
        help="Include full conversation histories in the result document",
    ),
    embedding_model: str = typer.Option(
        DEFAULT_EMBEDDING_MODEL,
        "--embedding-model",
        help="LiteLLM model used by the embedding evaluator",
    ),
    judge_model: str = typer.Option(
        DEFAULT_JUDGE_MODEL,
        "--judge-model",
        help="LiteLLM model used by the llm-coverage evaluator",
    ),
    commit_sha: str | None = typer.Option(
        None,
        "--commit-sha",
        help="Source commit of the blueprint, recorded in the result document",
    ),
) -> None:
    """Run a model comparison from a blueprint file."""
    _configure_structlog(log_format=log_format)

    try:
        loader = BlueprintLoader(observer=StructlogConfigObserver())
        config = loader.load(path=blueprint_path)

        evaluation_observer = StructlogEvaluationObserver()
        methods = parse_eval_methods(raw=eval_method, observer=evaluation_observer)
        registry = EvaluatorRegistry(
            evaluators=[
                EmbeddingEvaluator(embedding_model=embedding_model),
                LLMCoverageEvaluator(judge_model=judge_model),
            ],
            observer=evaluation_observer,
        )

        generation_observers: list[GenerationObserver] = [
            StructlogGenerationObserver()
        ]
        if log_format != "json":
            generation_observers.append(ProgressGenerationObserver())

        storage = LocalFileResultStorage(root_dir=output_dir)
        pipeline = ComparisonPipeline(
            config=config,
            provider=LiteLLMResponseProvider(),
            registry=registry,
            storage=storage,
            observer=StructlogPipelineObserver(),
            generation_observer=CompositeGenerationObserver(
                observers=generation_observers
            ),
            store_full_history=store_full_history,
            use_cache=cache,
        )

        label = build_run_label(
            content_hash=generate_config_content_hash(config), user_label=run_label
        )
        result = asyncio.run(
            pipeline.execute(
                run_label=label,
                eval_methods=methods,
                commit_sha=commit_sha,
                blueprint_file_name=blueprint_path.name,
            )
        )
        _print_summary(result=result, storage=storage)

    except KeyboardInterrupt:
        typer.echo("Run interrupted.")
        sys.exit(1)
    except CivicEvalError as exc:
        typer.echo(str(exc))
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")
        sys.exit(1)


if __name__ == "__main__":
    app()
