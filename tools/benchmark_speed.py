"""
Performance Benchmark
=====================

Measures simulation throughput for performance tuning.

Usage:
    python -m tools.benchmark_speed [--steps S] [--seed SEED]
"""

from __future__ import annotations

import argparse
import sys
import time

from agents.baseline_gap import create_agent
from flappy.flappy_core.config_loader import load_config
from flappy.flappy_core.env_gym import FlappyEnv
from flappy.flappy_core.game import CoreGame


def benchmark_core_game(
    num_ticks: int = 10000,
    seed: int = 42
) -> dict:
    """
    Benchmark raw CoreGame updates without Gym overhead.

    The avatar flaps every 20 ticks and a new run starts whenever one ends.

    Args:
        num_ticks: Number of updates.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    game = CoreGame(config=config, seed=seed)
    dt = config.env.dt

    game.reset(seed=seed)
    game.start_run()
    runs = 1
    start = time.perf_counter()

    for i in range(num_ticks):
        if i % 20 == 0:
            game.flap()
        game.update(dt)
        if game.is_over:
            game.start_run()
            runs += 1

    elapsed = time.perf_counter() - start

    return {
        "mode": "core_game",
        "num_steps": num_ticks,
        "runs": runs,
        "best_score": game.best_score,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_ticks / elapsed,
        "ms_per_step": (elapsed * 1000) / num_ticks
    }


def benchmark_env_with_agent(
    num_steps: int = 5000,
    seed: int = 42,
    image_obs: bool = False
) -> dict:
    """
    Benchmark FlappyEnv driven by the baseline agent.

    Args:
        num_steps: Number of env steps.
        seed: Random seed.
        image_obs: Include rendered images in observations.

    Returns:
        Dict with timing results.
    """
    env = FlappyEnv(image_obs=image_obs)
    agent = create_agent()
    agent.reset(seed)

    obs, _ = env.reset(seed=seed)
    episodes = 1
    best = 0
    start = time.perf_counter()

    for _ in range(num_steps):
        obs, _, terminated, truncated, info = env.step(agent.act(obs))
        best = max(best, info["score"])
        if terminated or truncated:
            obs, _ = env.reset()
            episodes += 1

    elapsed = time.perf_counter() - start
    env.close()

    return {
        "mode": "env_image" if image_obs else "env",
        "num_steps": num_steps,
        "runs": episodes,
        "best_score": best,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def run_all_benchmarks(steps: int = 5000, seed: int = 42) -> list:
    """Run every benchmark and print a summary table."""
    results = []

    print("=" * 60)
    print("FLAPPY PERFORMANCE BENCHMARK")
    print("=" * 60)
    print()

    print("Benchmarking CoreGame (raw)...")
    results.append(benchmark_core_game(num_ticks=steps * 2, seed=seed))

    print("Benchmarking FlappyEnv + baseline agent...")
    results.append(benchmark_env_with_agent(num_steps=steps, seed=seed))

    print("Benchmarking FlappyEnv + baseline agent (image obs)...")
    results.append(benchmark_env_with_agent(num_steps=max(1, steps // 10), seed=seed, image_obs=True))

    print()
    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print()
    print(f"{'Mode':<14} {'Steps/s':>12} {'ms/step':>10} {'Runs':>6} {'Best':>6}")
    print("-" * 52)

    for r in results:
        print(f"{r['mode']:<14} {r['steps_per_second']:>12.1f} {r['ms_per_step']:>10.3f} "
              f"{r['runs']:>6} {r['best_score']:>6}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark Flappy simulation performance")
    parser.add_argument("--steps", type=int, default=5000, help="Env steps per benchmark")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer steps)")

    args = parser.parse_args()

    steps = 500 if args.quick else args.steps
    run_all_benchmarks(steps=steps, seed=args.seed)

    return 0


if __name__ == "__main__":
    sys.exit(main())
