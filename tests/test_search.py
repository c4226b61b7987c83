import pytest
import numpy as np

from trimosaic.canvas import Canvas
from trimosaic.errors import SearchExhaustedError
from trimosaic.geometry import Point, Triangle, Color, ColoredTriangle
from trimosaic.search import (
    CandidateSearch, SearchResult, random_triangle, evaluate_candidate, select_best
)
import trimosaic.search.candidates as candidates_module


def gradient_target(width=24, height=16):
    xs = np.linspace(0, 255, width, dtype=np.uint8)
    ys = np.linspace(0, 255, height, dtype=np.uint8)
    array = np.zeros((height, width, 3), dtype=np.uint8)
    array[:, :, 0] = xs[None, :]
    array[:, :, 1] = ys[:, None]
    array[:, :, 2] = 80
    return Canvas.from_array(array)


def solid(width, height, color):
    canvas = Canvas.new(width, height)
    canvas.fill(color)
    return canvas


class TestRandomTriangle:
    """Test cases for candidate triangle generation."""

    def test_vertex_constraints(self):
        """Test ordering constraints and overscan bounds over many samples."""
        rng = np.random.default_rng(1)
        width, height, gap = 50, 30, 3
        for _ in range(2000):
            t = random_triangle(width, height, rng, min_gap=gap)
            assert t.b.x - t.a.x >= gap
            assert t.a.x <= t.c.x <= t.b.x
            assert t.c.y >= t.b.y
            for p in t:
                assert -width // 5 <= p.x <= width + width // 5
                assert -height // 5 <= p.y <= height + height // 5

    def test_tiny_canvas(self):
        """Test that generation works on a 1x1 canvas."""
        rng = np.random.default_rng(2)
        for _ in range(50):
            t = random_triangle(1, 1, rng, min_gap=5)
            assert t.a.x < t.b.x


class TestEvaluateCandidate:
    """Test cases for scoring a single candidate."""

    def test_color_from_target(self):
        """Test that the candidate color is the target footprint mean with fixed opacity."""
        target = solid(16, 16, Color(30, 60, 90, 255))
        canvas = solid(16, 16, Color(0, 0, 0, 255))
        seeds = np.random.SeedSequence(3).spawn(20)

        results = [evaluate_candidate(target, canvas, 77, seed) for seed in seeds]
        results = [r for r in results if r is not None]
        assert results

        for result in results:
            assert result.candidate.color == Color(30, 60, 90, 77)
            assert result.score < 0

    def test_zero_coverage_discarded(self, monkeypatch):
        """Test that a triangle covering no pixels yields no result."""
        off_canvas = Triangle(Point(-20, -20), Point(-10, -20), Point(-15, -5))
        monkeypatch.setattr(candidates_module, 'random_triangle', lambda *args, **kwargs: off_canvas)

        target = solid(8, 8, Color(255, 0, 0, 255))
        result = evaluate_candidate(target, target.copy(), 128, np.random.SeedSequence(0))
        assert result is None

    def test_same_seed_same_candidate(self):
        """Test that a seed fully determines the candidate."""
        target = gradient_target()
        canvas = solid(24, 16, Color(0, 0, 0, 255))
        seed = np.random.SeedSequence(11)
        a = evaluate_candidate(target, canvas, 128, seed)
        b = evaluate_candidate(target, canvas, 128, seed)
        assert a == b


class TestSelection:
    """Test cases for the min-reduction."""

    def test_select_best_skips_none_and_keeps_first_tie(self):
        """Test that None is ignored and ties keep the first result."""
        t = Triangle(Point(0, 0), Point(1, 0), Point(0, 1))
        first = SearchResult(-5.0, ColoredTriangle(t, Color(1, 1, 1, 1)))
        second = SearchResult(-5.0, ColoredTriangle(t, Color(2, 2, 2, 2)))
        worse = SearchResult(3.0, ColoredTriangle(t, Color(3, 3, 3, 3)))

        assert select_best([None, worse, first, None, second]) is first
        assert select_best([None, None]) is None
        assert select_best([]) is None


class TestCandidateSearch:
    """Test cases for parallel candidate search."""

    def test_run_returns_minimum(self):
        """Test that run() returns the lowest score of the evaluated set."""
        target = gradient_target()
        canvas = solid(24, 16, target.average_color())
        search = CandidateSearch(candidates=64, workers=1)

        best = search.run(target, canvas, np.random.SeedSequence(5))
        scores = [r.score for r in search.evaluate(target, canvas, np.random.SeedSequence(5).spawn(64))
                  if r is not None]
        assert best.score == min(scores)

    @pytest.mark.parametrize('executor', ['thread', 'process'])
    def test_parallel_matches_sequential(self, executor):
        """Test that pooled evaluation selects the same minimum as a sequential fold."""
        target = gradient_target()
        canvas = solid(24, 16, target.average_color())

        sequential = CandidateSearch(candidates=100, workers=1)
        best_seq = sequential.run(target, canvas, np.random.SeedSequence(42))

        with CandidateSearch(candidates=100, workers=3, executor=executor) as parallel:
            best_par = parallel.run(target, canvas, np.random.SeedSequence(42))

        assert best_par.score == best_seq.score

    def test_exhausted_round(self, monkeypatch):
        """Test that a round with no covering candidate raises."""
        off_canvas = Triangle(Point(-20, -20), Point(-10, -20), Point(-15, -5))
        monkeypatch.setattr(candidates_module, 'random_triangle', lambda *args, **kwargs: off_canvas)

        target = solid(8, 8, Color(255, 0, 0, 255))
        search = CandidateSearch(candidates=10, workers=1)
        with pytest.raises(SearchExhaustedError) as excinfo:
            search.run(target, target.copy(), np.random.SeedSequence(0), round_idx=4)
        assert excinfo.value.round_idx == 4

    def test_size_mismatch(self):
        """Test that target and canvas sizes must match."""
        search = CandidateSearch(candidates=4, workers=1)
        with pytest.raises(ValueError):
            search.run(Canvas.new(4, 4), Canvas.new(5, 4), np.random.SeedSequence(0))

    def test_invalid_options(self):
        """Test that unknown score modes and executors are rejected."""
        with pytest.raises(ValueError):
            CandidateSearch(score_mode='l1')
        with pytest.raises(ValueError):
            CandidateSearch(executor='gpu')
