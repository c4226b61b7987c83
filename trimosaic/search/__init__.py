from .candidates import (
    SearchResult, CandidateSearch, random_triangle, footprint_color,
    evaluate_candidate, select_best
)

__all__ = [
    'SearchResult',
    'CandidateSearch',
    'random_triangle',
    'footprint_color',
    'evaluate_candidate',
    'select_best'
]
