import os
import sys
import json
import argparse
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from pathplanner.planning import PlannerManager, PlanningError, PlanningOptions
from pathplanner.scene import SceneGenerator, load_scene, save_scene
from pathplanner.utils import load_config, setup_logging


def main():
    parser = argparse.ArgumentParser(description="Plan a route across a grid scene")
    parser.add_argument(
        "--config", type=str, default="config/main_config.yaml", help="Configuration file path"
    )
    parser.add_argument(
        "--scene", type=str, default=None, help="Scene file (.json/.yaml); a random scene is generated when omitted"
    )
    parser.add_argument(
        "--algorithm", type=str, default=None, help="dijkstra, astar or rrt_star"
    )
    parser.add_argument("--diagonal", action="store_true", help="Use 8-connectivity")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for RRT* and scene generation")
    parser.add_argument("--iterations", type=int, default=None, help="RRT* sampling budget")
    parser.add_argument("--export-scene", type=str, default=None, help="Write the scene to this path")
    parser.add_argument("--output", type=str, default=None, help="Write the planning result as JSON")
    parser.add_argument("--plot", type=str, default=None, help="Save a plot with this file name")

    args = parser.parse_args()

    config = load_config(args.config)
    system_logger = setup_logging(config.logging)
    logger = logging.getLogger(__name__)

    if args.scene:
        scene = load_scene(args.scene)
    else:
        scene_config = dict(config.scene)
        if args.seed is not None:
            scene_config["seed"] = args.seed
        scene = SceneGenerator(scene_config).generate()

    if args.export_scene:
        save_scene(scene, args.export_scene)

    overrides = {}
    if args.diagonal:
        overrides["diagonal_connectivity"] = True
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.iterations is not None:
        overrides["iterations"] = args.iterations

    manager = PlannerManager(config.planning)
    options = PlanningOptions.from_config(overrides, base=manager.default_options)

    try:
        result = manager.plan_scene(scene, args.algorithm, options)
    except PlanningError as e:
        system_logger.log_error_with_context(
            "planning", e, {"algorithm": args.algorithm, "start": scene.start, "goal": scene.goal}
        )
        logger.error(f"Planning rejected: {e}")
        sys.exit(2)

    system_logger.log_performance_metrics("planning", {
        "algorithm": result.algorithm,
        "visited": len(result.visited),
        "path_length": len(result.path),
        "total_cost": result.total_cost,
        "planning_time": result.planning_time,
    })

    print(f"Algorithm:  {result.algorithm}")
    print(f"Success:    {result.success}")
    print(f"Visited:    {len(result.visited)} cells")
    print(f"Path:       {len(result.path)} cells")
    if result.success:
        print(f"Total cost: {result.total_cost:.2f}")
    print(f"Time:       {result.planning_time * 1000:.1f} ms")

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2)
        logger.info(f"Result written to {args.output}")

    if args.plot:
        import matplotlib
        matplotlib.use("Agg")
        from pathplanner.utils.visualization import GridVisualizer

        GridVisualizer(config.visualization).plot_result(
            scene.grid, result, scene.start, scene.goal, save_name=args.plot
        )

    sys.exit(0 if result.success else 1)


if __name__ == "__main__":
    main()
