from leet_analyzer.analysis.analyzer import AnalysisOptions, analyze_solution
from leet_analyzer.analysis.models import ComparisonEntry, ResultRecord
from leet_analyzer.notes.extractor import extract_solutions
from leet_analyzer.notes.merger import NoteMerger, merge_document

__version__ = "0.1.0"

__all__ = [
    "AnalysisOptions",
    "ComparisonEntry",
    "NoteMerger",
    "ResultRecord",
    "analyze_solution",
    "extract_solutions",
    "merge_document",
]
