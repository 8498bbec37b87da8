"""
Planner Benchmark
Runs every planning algorithm over a batch of random scenes and tabulates the results.
"""

import time
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from pathplanner.planning.exceptions import InvalidInputError
from pathplanner.planning.integration.planner_manager import Algorithm, PlannerManager, PlanningOptions
from pathplanner.scene.scene_generator import SceneGenerator
from pathplanner.scene.scene_io import Scene


class PlannerBenchmark:

    def __init__(self, config: Dict[str, Any], rng: Optional[np.random.Generator] = None):
        self.config = config
        self.logger = logging.getLogger(__name__)

        self.num_scenes = config.get('num_scenes', 20)
        self.algorithms = [Algorithm.parse(a) for a in config.get(
            'algorithms', [a.value for a in Algorithm]
        )]
        self.options = PlanningOptions.from_config(config.get('options', {}))

        self.rng = rng if rng is not None else np.random.default_rng(config.get('seed'))
        self.scene_generator = SceneGenerator(config.get('scene', {}), rng=self.rng)
        self.planner_manager = PlannerManager(config.get('planning', {}))

        self.logger.info("Planner Benchmark initialized")
        self.logger.info(f"Algorithms: {[a.value for a in self.algorithms]}, scenes: {self.num_scenes}")

    def run(self, scenes: Optional[Sequence[Scene]] = None) -> pd.DataFrame:
        """
        Plan every scene with every algorithm.

        Args:
            scenes: Scenes to use; random scenes are generated when omitted

        Returns:
            One row per (scene, algorithm) run
        """
        if scenes is None:
            scenes = [self.scene_generator.generate() for _ in range(self.num_scenes)]

        benchmark_start = time.time()
        records: List[Dict[str, Any]] = []

        for scene_id, scene in enumerate(scenes):
            for algorithm in self.algorithms:
                records.append(self._run_single(scene_id, scene, algorithm))

        self.logger.info(
            f"Benchmark completed: {len(records)} runs in {time.time() - benchmark_start:.2f}s"
        )

        return pd.DataFrame(records)

    def _run_single(self, scene_id: int, scene: Scene, algorithm: Algorithm) -> Dict[str, Any]:
        record = {
            'scene_id': scene_id,
            'algorithm': algorithm.value,
            'rows': scene.rows,
            'cols': scene.cols,
            'success': False,
            'total_cost': float('nan'),
            'path_length': 0,
            'visited': 0,
            'nodes_expanded': 0,
            'planning_time': 0.0,
            'error': None,
        }

        rng = None
        if algorithm is Algorithm.RRT_STAR:
            rng = np.random.default_rng(int(self.rng.integers(2 ** 32)))

        try:
            result = self.planner_manager.plan_scene(scene, algorithm, self.options, rng=rng)
        except InvalidInputError as e:
            self.logger.warning(f"Scene {scene_id} rejected by {algorithm.value}: {e}")
            record['error'] = str(e)
            return record

        record.update({
            'success': result.success,
            'total_cost': result.total_cost if result.success else float('nan'),
            'path_length': len(result.path),
            'visited': len(result.visited),
            'nodes_expanded': result.nodes_expanded,
            'planning_time': result.planning_time,
        })
        return record

    @staticmethod
    def summarize(results: pd.DataFrame) -> pd.DataFrame:
        """Per-algorithm success rate and mean metrics over successful runs."""
        summary = results.groupby('algorithm').agg(
            runs=('scene_id', 'count'),
            success_rate=('success', 'mean'),
            mean_visited=('visited', 'mean'),
            mean_planning_time=('planning_time', 'mean'),
        )

        successful = results[results['success']]
        if not successful.empty:
            costs = successful.groupby('algorithm').agg(
                mean_cost=('total_cost', 'mean'),
                mean_path_length=('path_length', 'mean'),
            )
            summary = summary.join(costs)

        return summary

    @staticmethod
    def cost_ratio(results: pd.DataFrame, algorithm: Union[Algorithm, str],
                   reference: Union[Algorithm, str] = Algorithm.DIJKSTRA) -> pd.Series:
        """Per-scene cost of algorithm divided by the reference cost (1.0 = optimal)."""
        costs = results.pivot(index='scene_id', columns='algorithm', values='total_cost')
        return costs[Algorithm.parse(algorithm).value] / costs[Algorithm.parse(reference).value]

    def save_results(self, results: pd.DataFrame, output_dir: Union[str, Path]) -> Path:
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        results.to_csv(output_path / "benchmark_runs.csv", index=False)
        self.summarize(results).to_csv(output_path / "benchmark_summary.csv")

        self.logger.info(f"Benchmark results saved to {output_path}")
        return output_path
