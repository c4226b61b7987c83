from typing import Optional


class TriMosaicError(Exception):
    """Base class for all failures reported by TriMosaic."""


class MissingInputError(TriMosaicError):
    """No input image path was given."""

    def __init__(self, message: str = "Usage: trimosaic <image>"):
        super().__init__(message)


class DecodeFailureError(TriMosaicError):
    """The input image could not be read or decoded."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        message = f"Could not decode image: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class SearchExhaustedError(TriMosaicError):
    """Every candidate of a round covered zero pixels."""

    def __init__(self, round_idx: int, candidates: int):
        self.round_idx = round_idx
        self.candidates = candidates
        super().__init__(
            f"Round {round_idx}: none of {candidates} candidates covered any pixel"
        )


class WriteFailureError(TriMosaicError):
    """An output file could not be written."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        message = f"Could not write output: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
