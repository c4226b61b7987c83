import os
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from functools import partial
from typing import Iterable, List, NamedTuple, Optional

import numpy as np

from ..canvas import Canvas
from ..errors import SearchExhaustedError
from ..geometry import (
    Point, Triangle, Color, ColoredTriangle,
    bounding_box, box_is_empty, coverage_mask
)
from ..scoring import SCORE_MODES, score_candidate


EXECUTORS = ('thread', 'process')


class SearchResult(NamedTuple):
    score: float
    candidate: ColoredTriangle


def random_triangle(width: int, height: int, rng: np.random.Generator,
                    min_gap: int = 1) -> Triangle:
    """
    Sample a random triangle for a width x height canvas.

    Vertices may overshoot the canvas by a fifth of its size so that edges
    and corners can be covered. ``a`` is left of ``b`` by at least
    ``min_gap``, ``c`` lies horizontally between them and no higher than ``b``.
    """
    mx, my = width // 5, height // 5
    x_lo, x_hi = -mx, width + mx
    y_lo, y_hi = -my, height + my
    gap = max(1, min(min_gap, x_hi - x_lo))

    ax = int(rng.integers(x_lo, x_hi - gap + 1))
    bx = int(rng.integers(ax + gap, x_hi + 1))
    cx = int(rng.integers(ax, bx + 1))

    ay = int(rng.integers(y_lo, y_hi + 1))
    by = int(rng.integers(y_lo, y_hi + 1))
    cy = int(rng.integers(by, y_hi + 1))

    return Triangle(Point(ax, ay), Point(bx, by), Point(cx, cy))


def footprint_color(target: Canvas, box, mask: np.ndarray, opacity: int) -> Color:
    """Floored mean of the target pixels under the footprint, with fixed opacity."""
    x0, y0, x1, y1 = box
    covered = target.pixels[y0:y1, x0:x1][mask][:, :3].astype(np.int64)
    r, g, b = (int(v) for v in covered.sum(axis=0) // covered.shape[0])
    return Color(r, g, b, int(opacity))


def evaluate_candidate(target: Canvas, canvas: Canvas, opacity: int,
                       seed: np.random.SeedSequence, score_mode: str = 'delta',
                       min_gap: int = 1) -> Optional[SearchResult]:
    """
    Generate and score one random candidate.

    Returns None when the triangle covers no pixel; such candidates take no
    part in the selection.
    """
    rng = np.random.default_rng(seed)
    triangle = random_triangle(canvas.width, canvas.height, rng, min_gap)

    box = bounding_box(triangle, canvas.width, canvas.height)
    if box_is_empty(box):
        return None

    mask = coverage_mask(triangle, box)
    if not mask.any():
        return None

    color = footprint_color(target, box, mask, opacity)
    score = score_candidate(target, canvas, box, mask, color, score_mode)

    return SearchResult(score, ColoredTriangle(triangle, color))


def select_best(results: Iterable[Optional[SearchResult]]) -> Optional[SearchResult]:
    """Minimum-score result; ties keep the first one seen."""
    best = None
    for result in results:
        if result is None:
            continue
        if best is None or result.score < best.score:
            best = result
    return best


class CandidateSearch:
    """
    Parallel random search for the single best triangle to add next.

    Use as a context manager so the worker pool lives across rounds:

        with CandidateSearch(candidates=500, workers=4) as search:
            result = search.run(target, canvas, seed)
    """

    def __init__(self, candidates: int = 500, opacity: int = 128,
                 score_mode: str = 'delta', min_gap: int = 1,
                 workers: int = 0, executor: str = 'thread'):
        if score_mode not in SCORE_MODES:
            raise ValueError(f"Unknown score mode: {score_mode}")
        if executor not in EXECUTORS:
            raise ValueError(f"Unknown executor: {executor}")

        self.candidates = candidates
        self.opacity = opacity
        self.score_mode = score_mode
        self.min_gap = min_gap
        self.workers = workers if workers > 0 else (os.cpu_count() or 1)
        self.executor_kind = executor
        self._executor: Optional[Executor] = None

    def __enter__(self) -> 'CandidateSearch':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def start(self) -> None:
        if self._executor is not None or self.workers <= 1:
            return
        if self.executor_kind == 'process':
            self._executor = ProcessPoolExecutor(max_workers=self.workers)
        else:
            self._executor = ThreadPoolExecutor(max_workers=self.workers)

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def evaluate(self, target: Canvas, canvas: Canvas,
                 seeds: List[np.random.SeedSequence]) -> List[Optional[SearchResult]]:
        """Evaluate one candidate per seed, in parallel when a pool is running."""
        if target.size != canvas.size:
            raise ValueError(f"Canvas sizes differ: {target.size} vs {canvas.size}")

        work = partial(evaluate_candidate, target, canvas, self.opacity,
                       score_mode=self.score_mode, min_gap=self.min_gap)

        if self._executor is None:
            return [work(seed) for seed in seeds]

        chunksize = max(1, len(seeds) // (self.workers * 4))
        return list(self._executor.map(work, seeds, chunksize=chunksize))

    def run(self, target: Canvas, canvas: Canvas, seed: np.random.SeedSequence,
            round_idx: int = 0) -> SearchResult:
        """
        Run one search round and return the best candidate.

        Raises:
            SearchExhaustedError: every candidate covered zero pixels
        """
        seeds = seed.spawn(self.candidates)
        best = select_best(self.evaluate(target, canvas, seeds))
        if best is None:
            raise SearchExhaustedError(round_idx, self.candidates)
        return best
