from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

import numpy as np
from omegaconf import DictConfig
from tqdm import tqdm

from .canvas import Canvas
from .geometry import Color, ColoredTriangle, scaled
from .preprocess import make_proxy
from .renderer import VectorImage, draw_triangle
from .scoring import full_error
from .search import CandidateSearch, SearchResult


class State(Enum):
    INIT = 'init'
    ROUND = 'round'
    FINALIZE = 'finalize'
    DONE = 'done'
    FAILED = 'failed'


@dataclass
class ApproximationResult:
    """Outcome of a successful run, at the target's original resolution."""
    width: int
    height: int
    background: Color
    triangles: List[ColoredTriangle]
    canvas: Canvas
    history: List[float] = field(default_factory=list)

    @property
    def vector(self) -> VectorImage:
        return VectorImage(self.width, self.height, self.background, list(self.triangles))


RoundCallback = Callable[[int, SearchResult], None]


class Approximator:
    """
    Greedy triangle-by-triangle approximation of a target image.

    Each round searches for the candidate triangle that lowers the error the
    most and commits it to the working canvas. Rounds run strictly in order;
    only the candidate evaluation inside a round is parallel.
    """

    def __init__(self, triangles_n: int = 100, candidates: int = 500,
                 opacity: int = 128, proxy_size: int = 128, min_gap: int = 1,
                 score_mode: str = 'delta', workers: int = 0,
                 executor: str = 'thread', seed: Optional[int] = None,
                 progress: bool = False, log_interval: int = 10):
        self.triangles_n = triangles_n
        self.proxy_size = proxy_size
        self.seed = seed
        self.progress = progress
        self.log_interval = log_interval
        self.search = CandidateSearch(
            candidates=candidates,
            opacity=opacity,
            score_mode=score_mode,
            min_gap=min_gap,
            workers=workers,
            executor=executor
        )
        self.state = State.INIT

    @classmethod
    def from_config(cls, cfg: DictConfig) -> 'Approximator':
        return cls(
            triangles_n=cfg.triangles_n,
            candidates=cfg.search.candidates,
            opacity=cfg.search.opacity,
            proxy_size=cfg.search.proxy_size,
            min_gap=cfg.search.min_gap,
            score_mode=cfg.search.score_mode,
            workers=cfg.search.workers,
            executor=cfg.search.executor,
            seed=cfg.search.seed,
            progress=cfg.logging.progress,
            log_interval=cfg.logging.log_interval
        )

    def run(self, target: Canvas, on_round: Optional[RoundCallback] = None) -> ApproximationResult:
        """
        Approximate ``target`` with ``triangles_n`` triangles.

        Args:
            target: Image to approximate; never modified
            on_round: Optional callback invoked after each committed round

        Returns:
            ApproximationResult at the target's resolution

        Raises:
            SearchExhaustedError: a round found no candidate covering any pixel
        """
        self.state = State.INIT

        background = target.average_color()
        eval_target = make_proxy(target, self.proxy_size)
        if eval_target is None:
            eval_target = target

        canvas = Canvas.new(eval_target.width, eval_target.height)
        canvas.fill(background)

        triangles: List[ColoredTriangle] = []
        history: List[float] = []
        round_seeds = np.random.SeedSequence(self.seed).spawn(self.triangles_n)

        self.state = State.ROUND
        try:
            with self.search:
                pbar = tqdm(range(self.triangles_n), desc='Triangles', disable=not self.progress)
                for round_idx in pbar:
                    result = self.search.run(eval_target, canvas, round_seeds[round_idx], round_idx)

                    draw_triangle(canvas, result.candidate)
                    triangles.append(result.candidate)

                    error = full_error(canvas, eval_target)
                    history.append(error)

                    if round_idx % self.log_interval == 0:
                        pbar.set_postfix(error=f'{error:.2f}')

                    if on_round is not None:
                        on_round(round_idx, result)
        except Exception:
            self.state = State.FAILED
            raise

        self.state = State.FINALIZE
        if eval_target is not target:
            sx = target.width / eval_target.width
            sy = target.height / eval_target.height
            triangles = [ColoredTriangle(scaled(t.triangle, sx, sy), t.color) for t in triangles]
            canvas = canvas.resize(target.width, target.height)

        self.state = State.DONE
        return ApproximationResult(
            width=target.width,
            height=target.height,
            background=background,
            triangles=triangles,
            canvas=canvas,
            history=history
        )
