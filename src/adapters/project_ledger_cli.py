"""CLI adapter projecting the configured ledger and printing a summary."""

from src.infrastructure.container import (
    build_graph_range,
    build_project_ledger_use_case,
)
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.infrastructure.settings import ProjectionSettings


def main() -> None:
    """Project the ledger named by LEDGER_FILE and print account balances."""
    logger = get_app_logger()
    settings = ProjectionSettings.from_env()
    if settings.ledger_file is None:
        logger.warning("LEDGER_FILE is required to project a ledger.")
        return

    graph_range = build_graph_range(settings)
    try:
        use_case = build_project_ledger_use_case(settings)
        projection = use_case.execute(graph_range)
    except RuntimeError as exc:
        logger.error(str(exc))
        return

    get_usage_logger().info(
        f"projection ledger={settings.ledger_file} "
        f"start={graph_range.start} end={graph_range.end}"
    )

    print(
        "Ledger projection "
        f"(start={graph_range.start}, end={graph_range.end})"
    )
    print(
        f"income series={len(projection.income)}, "
        f"expense series={len(projection.expense)}, "
        f"max height={projection.max_height}"
    )
    for series in projection.accounts:
        values = [point.value for point in series.values]
        print(
            f"{series.account.name} ({series.vehicle}): "
            f"start={series.account.starting}, end={values[-1]}, "
            f"min={min(values)}, max={max(values)}"
        )
    for issue in projection.issues:
        print(f"Excluded: {issue}")


if __name__ == "__main__":  # pragma: no cover
    main()
