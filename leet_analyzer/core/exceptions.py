class LeetAnalyzerError(Exception):
    """Base exception for all Leet Analyzer errors."""

    pass


class ConfigurationError(LeetAnalyzerError):
    """Raised when configuration is invalid or missing."""

    pass


class UnsupportedLanguageError(LeetAnalyzerError):
    """Raised when a solution file's language has no plugin."""

    pass


class ParseError(LeetAnalyzerError):
    """Raised when a solution file cannot be read or parsed."""

    pass


class AnalysisError(LeetAnalyzerError):
    """Raised when a complexity estimate cannot be produced."""

    pass


class NoteStorageError(LeetAnalyzerError):
    """Raised when a note cannot be read from or written to disk."""

    pass


class PrerequisiteError(LeetAnalyzerError):
    """Raised when the environment is not ready for an analysis run."""

    pass
