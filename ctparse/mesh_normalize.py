"""Normalization of terms for matching against MeSH concepts."""

from __future__ import annotations

import re

_PARENTHESIS = re.compile(r"(^| )\(.*?\)|\[.*?\]( |\Z)")
_PUNCT = re.compile(r"[,.;:()\[\]\"']")
_EG = re.compile(r"\be g\b", re.ASCII)
_E = re.compile(r"\b e\Z", re.ASCII)
_ONE = re.compile(r"\bi\b", re.ASCII)
_TWO = re.compile(r"\bii\b", re.ASCII)
_HBV = re.compile(r"\bhbv\b", re.ASCII)
_HCV = re.compile(r"\bhcv\b", re.ASCII)

_ABBREVIATIONS = [
    (re.compile(r"\bcns\b", re.ASCII), "central nervous system"),
    (re.compile(r"\baml\b", re.ASCII), "acute myeloid leukemia"),
    (re.compile(r"\bnsclc\b", re.ASCII), "non-small cell lung cancer"),
    (re.compile(r"\bcll\b", re.ASCII), "chronic lymphocytic leukemia"),
    (re.compile(r"\bhcc\b", re.ASCII), "hepatocellular carcinoma"),
    (re.compile(r"\bmm\b", re.ASCII), "multiple myeloma"),
    (re.compile(r"\bgi\b", re.ASCII), "gastrointestinal"),
    (re.compile(r"\bmri\b", re.ASCII), "magnetic resonance imaging"),
]

GENERAL_WORDS = frozenset(
    {
        "", "and", "and/or", "are", "as", "at", "by", "for", "in", "is", "its",
        "may", "no", "not", "of", "on", "or", "that", "the", "were", "who", "with",
        ">", "≥", "<", "≤", "=", "equal", "greater", "least", "similar", "smaller",
        "aged", "another", "based", "before", "days", "defined", "during",
        "including", "total", "within", "without",
        "emoticon", "@number",
        "acceptable", "adequately", "allowed", "currently", "definitively",
        "demonstrated", "eligible", "evidence", "evidenced", "exception",
        "exceptions", "excluded", "excluding", "indicating", "ineligible",
        "locally", "management", "participate", "permitted", "presence",
        "present", "provide", "receiving", "resected", "treated", "undergoing",
        "unspecified", "urgent",
        "adult", "human", "individuals", "participants", "patient", "patients",
        "subjects", "victim",
        "stage", "grade", "3", "3a", "4", "ia", "ib", "ic", "iia", "iib", "iic",
        "iii", "iiia", "iiib", "iiic", "iv", "iva", "ivb", "ivc", "ajcc", "v6",
        "v7", "v8", "hbsag", "hepbsag",
    }
)

LABEL_WORDS = frozenset(
    {
        "antibiotics", "documented", "dysfunction", "function", "impaired",
        "impairment", "infection", "infectious", "language", "testing",
        "therapy", "treatment",
        "advanced", "negative", "ongoing", "positive", "positivity", "serious",
        "severe", "symptomatic",
    }
)


def normalize(s: str) -> tuple[str, str]:
    """Normalize a term.

    Returns the sorted, de-duplicated form used to match concepts and the
    cleaned form that replaces the extracted term.
    """
    t = s.lower()
    t = _EG.sub("", t)
    t = _E.sub("", t)
    t = t.replace(",", " ")
    t = t.replace("b hbsag", "hbv surface antigen")
    t = t.replace("hbsag hbv", "hbv surface antigen")
    t = t.replace("her2", "her-2")
    for pattern, expansion in _ABBREVIATIONS:
        t = pattern.sub(expansion, t)

    if "diabetes" in t:
        t = _ONE.sub("1", t)
        t = _TWO.sub("2", t)

    if "hepatitis" in t:
        t = t.replace("b hbv", "b")
        t = t.replace("c hcv", "c")
        t = t.replace("active ", "")
        t = t.replace(" treatment", "")
    else:
        t = _HBV.sub("b hepatitis", t)
        t = _HCV.sub("c hepatitis", t)
        t = t.replace("b c hep", "b c hepatitis")
    if not t:
        t = s
    t = t.strip(" /.,;:-")
    normalized_term = " ".join(t.split())

    normalized_match = _PARENTHESIS.sub(" ", normalized_term)
    normalized_match = _PUNCT.sub(" ", normalized_match).strip()

    words = [w for w in normalized_match.split() if w not in GENERAL_WORDS]
    if words:
        normalized_term = " ".join(words)

    words = sorted({w for w in words if w not in LABEL_WORDS})
    normalized_match = " ".join(words) or normalized_term
    return normalized_match, normalized_term