from .formatting import FormattingReport, check_formatting
from .keywords import KeywordProfile, extract_document_keywords, extract_keywords, load_keyword_profile
from .matcher import CONTAINMENT, EXACT, MatchResult, match_containment, match_exact
from .scoring import clamp_score, fallback_ats_score, percent, weighted_ats_score
from .tokenizer import BASIC, STRICT, tokenize

__all__ = [
    "BASIC",
    "STRICT",
    "tokenize",
    "KeywordProfile",
    "load_keyword_profile",
    "extract_keywords",
    "extract_document_keywords",
    "FormattingReport",
    "check_formatting",
    "EXACT",
    "CONTAINMENT",
    "MatchResult",
    "match_exact",
    "match_containment",
    "clamp_score",
    "percent",
    "weighted_ats_score",
    "fallback_ats_score",
]
