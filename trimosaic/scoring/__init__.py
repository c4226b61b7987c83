from .error import SCORE_MODES, squared_error, full_error, delta_error, score_candidate

__all__ = ['SCORE_MODES', 'squared_error', 'full_error', 'delta_error', 'score_candidate']
