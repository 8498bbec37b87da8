import os
import sys
import argparse
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from pathplanner.evaluation import PlannerBenchmark
from pathplanner.utils import load_config, setup_logging, validate_config


def main():
    parser = argparse.ArgumentParser(description="Benchmark Dijkstra, A* and RRT* on random scenes")
    parser.add_argument(
        "--config", type=str, default="config/main_config.yaml", help="Configuration file path"
    )
    parser.add_argument("--scenes", type=int, default=None, help="Number of random scenes")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--output", type=str, default=None, help="Directory for CSV results")

    args = parser.parse_args()

    config = load_config(args.config)
    system_logger = setup_logging(config.logging)
    logger = logging.getLogger(__name__)

    errors = validate_config(config)
    if errors:
        for component, messages in errors.items():
            for message in messages:
                logger.error(f"Invalid {component} config: {message}")
        sys.exit(2)

    benchmark_config = dict(config.evaluation)
    benchmark_config["scene"] = config.scene
    benchmark_config["planning"] = config.planning
    benchmark_config["options"] = config.planning.get("options", {})
    if args.scenes is not None:
        benchmark_config["num_scenes"] = args.scenes
    if args.seed is not None:
        benchmark_config["seed"] = args.seed

    benchmark = PlannerBenchmark(benchmark_config)
    results = benchmark.run()

    summary = benchmark.summarize(results)
    print(summary.to_string())

    for algorithm, row in summary.iterrows():
        system_logger.log_performance_metrics("evaluation", {"algorithm": algorithm, **row.to_dict()})

    output_dir = args.output or benchmark_config.get("output_dir")
    if output_dir:
        benchmark.save_results(results, output_dir)


if __name__ == "__main__":
    main()
