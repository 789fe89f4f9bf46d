class ExtractionUnavailable(RuntimeError):
    """Raised when entity extraction cannot produce a usable result for a message."""
    pass


class ExtractionUpstreamError(ExtractionUnavailable):
    """Raised when the extraction provider fails (timeouts, network errors, service unavailable)."""
    pass


class ExtractionContractError(ExtractionUnavailable):
    """Raised when the extraction adapter violates its contract (bad format or missing data)."""
    pass


class TranscriptionUnavailable(RuntimeError):
    """Raised when a voice note cannot be downloaded or transcribed."""
    pass
