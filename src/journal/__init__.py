from .models import AnalysisResult, AnalyzedEntry, JournalEntry
from .sentiment import RuleBasedAnalyzer, TextAnalyzer, analyze_text, create_analyzer

__all__ = [
    "AnalysisResult",
    "AnalyzedEntry",
    "JournalEntry",
    "TextAnalyzer",
    "RuleBasedAnalyzer",
    "analyze_text",
    "create_analyzer",
]
