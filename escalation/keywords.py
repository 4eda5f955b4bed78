# keyword tables for escalation

from dataclasses import dataclass
from typing import Optional, Tuple

URGENT_KEYWORDS = (
    "emergency",
    "urgent",
    "asap",
    "immediately",
    "right now",
    "flooding",
    "water damage",
    "burst pipe",
    "leak",
    "fire",
    "smoke",
    "mold",
    "health hazard",
    "dangerous",
    "safety",
)

COMPLAINT_KEYWORDS = (
    "refund",
    "money back",
    "charge back",
    "chargeback",
    "dispute",
    "sue",
    "lawsuit",
    "attorney",
    "lawyer",
    "legal action",
    "better business bureau",
    "bbb",
    "complaint",
    "file a complaint",
    "report you",
    "cancel service",
    "cancel my account",
)

HUMAN_REQUEST_KEYWORDS = (
    "speak to",
    "talk to",
    "connect me",
    "transfer me",
    "real person",
    "human",
    "agent",
    "representative",
    "manager",
    "supervisor",
    "someone",
    "actual person",
    "live person",
    "customer service",
    "customer support",
)

FRUSTRATION_KEYWORDS = (
    "terrible",
    "awful",
    "horrible",
    "worst",
    "useless",
    "incompetent",
    "angry",
    "furious",
    "mad",
    "upset",
    "disappointed",
    "frustrated",
    "terrible service",
    "poor service",
    "bad service",
    "unacceptable",
    "ridiculous",
    "disgusting",
    "appalling",
    "pathetic",
    "waste of time",
    "waste of money",
)


@dataclass(frozen=True)
class EscalationKeywords:
    """Keyword categories scanned by the classifier, in table order"""
    urgent: Tuple[str, ...] = URGENT_KEYWORDS
    complaint: Tuple[str, ...] = COMPLAINT_KEYWORDS
    human_request: Tuple[str, ...] = HUMAN_REQUEST_KEYWORDS
    frustration: Tuple[str, ...] = FRUSTRATION_KEYWORDS

    def __post_init__(self):
        # normalize so callers may pass lists, a single string or mixed case
        for name in ("urgent", "complaint", "human_request", "frustration"):
            raw = getattr(self, name)
            if isinstance(raw, str):
                raw = (raw,)
            values = tuple(k.lower() for k in raw if k)
            object.__setattr__(self, name, values)


DEFAULT_KEYWORDS = EscalationKeywords()


def find_keyword(text: str, keywords: Tuple[str, ...]) -> Optional[str]:
    """First keyword (in table order) contained in ``text``, which must be lowercased"""
    for keyword in keywords:
        if keyword in text:
            return keyword
    return None
